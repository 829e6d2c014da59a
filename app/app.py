import contextlib
import functools
import logging
from typing import Any, Awaitable, Callable

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown2 import (  # pyright: ignore[reportMissingTypeStubs]
    markdown,  # pyright: ignore[reportUnknownVariableType]
)
from markupsafe import Markup
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import FileResponse, HTMLResponse, JSONResponse, Response
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from app import config
from app.logs import setup_logging
from domain.errors import NotFoundError, PersistenceError, ValidationError
from domain.repository import RecipeRepository
from domain.services import ensure_schema, generate_drink, list_drinks, register_vote
from domain.stores import MemoryRowStore, RowStore, SheetsRowStore, SqlRowStore
from domain.tables import DEFAULT_TABLES


CONFIG = config.Config()

setup_logging(CONFIG.log_level)

logger = logging.getLogger(__name__)


PRECACHE_URLS = (
    "/",
    "/manifest.json",
    "/assets/css/style.css",
    "/assets/js/app.js",
    "/assets/img/icon-192.png",
    "/assets/img/icon-512.png",
)

GENERATE_FAILED = "Unable to generate suggestion."
STORE_UNAVAILABLE = "The drink store is unavailable."


def markdown_filter(text: str) -> Markup:
    return Markup(
        markdown(text, safe_mode="escape")  # pyright: ignore[reportUnknownArgumentType]
    )


TEMPLATES = Environment(
    loader=FileSystemLoader([CONFIG.html_dir, CONFIG.js_dir]),
    autoescape=select_autoescape(),
)
TEMPLATES.filters["markdown"] = markdown_filter


def store_factory(cfg: config.Config) -> RowStore:
    match cfg.store:
        case config.Store.memory:
            return MemoryRowStore()
        case config.Store.sql:
            return SqlRowStore.from_url(cfg.db_url)
        case config.Store.sheets:
            return SheetsRowStore(cfg.sheets_id, cfg.sheets_token)


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


@contextlib.asynccontextmanager
async def lifespan(app: Starlette):
    repo: RecipeRepository = app.state.repo
    await repo.store.connect()
    try:
        await ensure_schema(repo)
    except PersistenceError:
        logger.warning("Could not prepare the drink store at startup.")
    yield
    await repo.store.disconnect()


@aHTMLResponse
async def homepage(request: Request) -> str | tuple[str, int]:
    repo: RecipeRepository = request.app.state.repo
    try:
        recipes = await list_drinks(repo)
    except PersistenceError:
        html = TEMPLATES.get_template("error.html").render(message=STORE_UNAVAILABLE)
        return html, 500
    recent = list(reversed(recipes))[: CONFIG.recent_limit]
    return TEMPLATES.get_template("index.html").render(
        recipes=recent,
        generators=DEFAULT_TABLES.generator_labels.items(),
    )


async def drinks(request: Request) -> JSONResponse:
    repo: RecipeRepository = request.app.state.repo
    match request.method.lower():
        case "get":
            recipes = await list_drinks(repo)
            return JSONResponse([r.to_dict() for r in recipes])
        case "post":
            try:
                payload = await request.json()
            except ValueError:
                # Malformed JSON or a body that is not UTF-8.
                raise ValidationError("Request body must be a JSON object.") from None
            if not isinstance(payload, dict):
                raise ValidationError("Request body must be a JSON object.")
            cfg = config.Config()
            try:
                recipe, source = await generate_drink(
                    payload,  # pyright: ignore[reportUnknownArgumentType]
                    repository=repo,
                    credential=config.completion_credential(),
                    base_url=cfg.openai_base_url,
                    model=cfg.openai_model,
                    timeout=cfg.openai_timeout,
                    transport=request.app.state.completion_transport,
                )
            except ValidationError:
                raise
            except Exception:
                logger.exception("Drink generation failed.")
                return JSONResponse({"error": GENERATE_FAILED}, status_code=500)
            return JSONResponse({**recipe.to_dict(), "source": source}, status_code=201)
        case _:
            raise ValueError("Unsupported method.")


async def vote(request: Request) -> JSONResponse:
    drink_id = request.path_params["drink_id"]
    repo: RecipeRepository = request.app.state.repo
    votes = await register_vote(drink_id, repository=repo)
    return JSONResponse({"drinkId": drink_id, "voteCount": votes})


async def service_worker(request: Request) -> Response:
    script = TEMPLATES.get_template("service-worker.js").render(
        cache_name=CONFIG.cache_name,
        precache_urls=list(PRECACHE_URLS),
    )
    return Response(script, media_type="application/javascript")


async def manifest(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "name": "Mythic Mixology Lab",
            "short_name": "Mixology",
            "start_url": "/",
            "display": "standalone",
            "background_color": "#1b1029",
            "theme_color": "#6b3fa0",
            "icons": [
                {
                    "src": f"/assets/img/icon-{size}.png",
                    "sizes": f"{size}x{size}",
                    "type": "image/png",
                }
                for size in (192, 512)
            ],
        }
    )


async def favicon(request: Request) -> FileResponse:
    return FileResponse(CONFIG.images_dir / "icon-192.png")


async def validation_error(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=400)


async def not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=404)


async def persistence_error(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse({"error": STORE_UNAVAILABLE}, status_code=500)


app = Starlette(
    debug=True if CONFIG.env == config.Env.local else False,
    routes=[
        Route("/", homepage),
        Route("/api/drinks", drinks, methods=["GET", "POST"]),
        Route("/api/drinks/{drink_id}/vote", vote, methods=["POST"]),
        Route("/service-worker.js", service_worker),
        Route("/manifest.json", manifest),
        Route("/favicon.ico", favicon),
        Mount("/assets", StaticFiles(directory="assets")),
    ],
    exception_handlers={
        ValidationError: validation_error,
        NotFoundError: not_found,
        PersistenceError: persistence_error,
    },
    lifespan=lifespan,
)

app.state.repo = RecipeRepository(store_factory(CONFIG))
app.state.completion_transport = None

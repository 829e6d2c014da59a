import datetime
import logging
from typing import Any, Mapping
import uuid

import httpx

from domain.aopenai import BASE_URL, DEFAULT_MODEL, TIMEOUT
from domain.context import build_context
from domain.errors import NotFoundError, PersistenceError, ValidationError
from domain.generators import generate_blueprint
from domain.models import GenerationRequest, StoredRecipe, VoteAuditEntry
from domain.remote import try_remote_generate
from domain.repository import RecipeRepository
from domain.tables import DEFAULT_TABLES, Tables


logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    return datetime.datetime.now(datetime.UTC).isoformat(timespec="seconds")


async def ensure_schema(repository: RecipeRepository) -> None:
    try:
        await repository.ensure_schema()
    except PersistenceError:
        logger.exception("Could not prepare the drink tables.")
        raise


async def generate_drink(
    payload: Mapping[str, Any],
    *,
    repository: RecipeRepository,
    credential: str | None = None,
    base_url: str = BASE_URL,
    model: str = DEFAULT_MODEL,
    timeout: float = TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
    tables: Tables = DEFAULT_TABLES,
) -> tuple[StoredRecipe, str]:
    """Validate, generate and store a drink. Returns the recipe and its source.

    The source is "remote" when the completion service produced the recipe
    and "local" when a deterministic generator did.
    """
    try:
        request = GenerationRequest.from_payload(payload)
    except ValidationError as e:
        logger.info("Rejected drink request: %s", e)
        raise

    context = build_context(request, tables)
    result = await try_remote_generate(
        request,
        context,
        credential,
        base_url=base_url,
        model=model,
        timeout=timeout,
        transport=transport,
    )
    blueprint = result.recover(lambda: generate_blueprint(context))
    source = "remote" if result.ok else "local"

    recipe = StoredRecipe.create(
        request,
        blueprint,
        drink_id=uuid.uuid4().hex,
        timestamp=utc_now_iso(),
        generator_label=context.generator_label,
    )
    try:
        await repository.ensure_schema()
        await repository.append_recipe(recipe)
    except PersistenceError:
        logger.exception(
            "Could not store drink %s for %s.", recipe.drink_id, context.seed
        )
        raise

    logger.info(
        "Generated %s drink %s (%s) from %s.",
        request.generator_key.value,
        recipe.drink_id,
        blueprint.drink_name,
        source,
    )
    return recipe, source


async def list_drinks(repository: RecipeRepository) -> list[StoredRecipe]:
    try:
        await repository.ensure_schema()
        return await repository.list_recipes()
    except PersistenceError:
        logger.exception("Could not list drinks.")
        raise


async def register_vote(drink_id: str, *, repository: RecipeRepository) -> int:
    try:
        await repository.ensure_schema()
        new_votes = await repository.increment_vote(drink_id)
        await repository.append_vote_audit(
            VoteAuditEntry(
                timestamp=utc_now_iso(),
                drink_id=drink_id,
                previous_votes=new_votes - 1,
                new_votes=new_votes,
            )
        )
    except NotFoundError:
        logger.warning("Vote for unknown drink %s.", drink_id)
        raise
    except PersistenceError:
        logger.exception("Could not record vote for %s.", drink_id)
        raise
    return new_votes

"""Optional recipe generation through a chat completion service.

`try_remote_generate` never raises. It returns a `RemoteResult` and the caller
decides what to do on failure, normally `result.recover(...)` with one of the
deterministic generators.
"""

from dataclasses import dataclass
import logging
from typing import Any, Callable, Mapping, Self

import httpx

from domain.aopenai import BASE_URL, DEFAULT_MODEL, TIMEOUT, Chat, ChatError, openai_client
from domain.context import GenerationContext
from domain.errors import RemoteGenerationError
from domain.models import GenerationRequest, RecipeBlueprint
from domain.prompts import CreateDrinkPrompt, build_user_prompt


logger = logging.getLogger(__name__)


BLUEPRINT_KEYS = ("drinkName", "reason", "ingredients", "instructions", "compatibility")


@dataclass(frozen=True)
class RemoteResult:
    blueprint: RecipeBlueprint | None = None
    error: RemoteGenerationError | None = None

    @classmethod
    def success(cls, blueprint: RecipeBlueprint) -> Self:
        return cls(blueprint=blueprint)

    @classmethod
    def failure(cls, error: RemoteGenerationError) -> Self:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.blueprint is not None

    def recover(self, fallback: Callable[[], RecipeBlueprint]) -> RecipeBlueprint:
        if self.blueprint is not None:
            return self.blueprint
        return fallback()


def default_drink_name(context: GenerationContext) -> str:
    return f"{context.zodiac.sign} {context.generator_label}"


def default_reason(context: GenerationContext) -> str:
    return (
        f"Crafted for {context.request.full_name}, a {context.zodiac.sign} "
        f"with life path number {context.numerology}."
    )


def default_compatibility(context: GenerationContext) -> str:
    return f"Harmonises with fellow {context.zodiac.element.lower()} signs"


def text_or(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def string_items(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    items = ("" if v is None else str(v).strip() for v in value)  # pyright: ignore[reportUnknownVariableType]
    return tuple(i for i in items if i)


def normalize_blueprint(raw: Mapping[str, Any], context: GenerationContext) -> RecipeBlueprint:
    return RecipeBlueprint(
        drink_name=text_or(raw.get("drinkName"), default_drink_name(context)),
        reason=text_or(raw.get("reason"), default_reason(context)),
        ingredients=string_items(raw.get("ingredients")),
        instructions=string_items(raw.get("instructions")),
        compatibility=text_or(raw.get("compatibility"), default_compatibility(context)),
    )


async def try_remote_generate(
    request: GenerationRequest,
    context: GenerationContext,
    credential: str | None,
    *,
    base_url: str = BASE_URL,
    model: str = DEFAULT_MODEL,
    timeout: float = TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RemoteResult:
    if not credential:
        logger.info("No completion credential configured, skipping remote generation.")
        return RemoteResult.failure(RemoteGenerationError("No credential configured."))

    try:
        async with openai_client(
            credential, base_url=base_url, timeout=timeout, transport=transport
        ) as client:
            chat = Chat.from_system_prompt(
                str(CreateDrinkPrompt()), client=client, model=model
            )
            raw = await chat.chat_json(build_user_prompt(context))
    except ChatError as e:
        logger.warning(
            "Remote generation failed for %s (%s): %s",
            request.generator_key.value,
            context.seed,
            e,
        )
        return RemoteResult.failure(RemoteGenerationError(str(e)))

    if not any(key in raw for key in BLUEPRINT_KEYS):
        logger.warning("Remote generation returned no recipe keys: %s", sorted(raw))
        return RemoteResult.failure(
            RemoteGenerationError("Completion JSON has none of the recipe keys.")
        )

    return RemoteResult.success(normalize_blueprint(raw, context))

from typing import Any

import pytest

from domain.context import GenerationContext, build_context
from domain.models import GenerationRequest, GeneratorKey
from domain.repository import RecipeRepository
from domain.stores import MemoryRowStore


@pytest.fixture(autouse=True)
def no_completion_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


def make_request(
    key: GeneratorKey = GeneratorKey.celestial,
    *,
    first_name: str = "Ada",
    last_name: str = "Lovelace",
    month: int = 12,
    day: int = 10,
    year: int = 1985,
) -> GenerationRequest:
    return GenerationRequest(
        generator_key=key,
        first_name=first_name,
        last_name=last_name,
        birth_month=month,
        birth_day=day,
        birth_year=year,
    )


def make_context(key: GeneratorKey = GeneratorKey.celestial, **kwargs: Any) -> GenerationContext:
    return build_context(make_request(key, **kwargs))


def payload(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "generatorKey": "celestial",
        "firstName": "Ada",
        "lastName": "Lovelace",
        "birthMonth": 12,
        "birthDay": 10,
        "birthYear": 1985,
    }
    data.update(overrides)
    return data


@pytest.fixture
def store() -> MemoryRowStore:
    return MemoryRowStore()


@pytest.fixture
def repository(store: MemoryRowStore) -> RecipeRepository:
    return RecipeRepository(store)

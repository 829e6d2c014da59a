import json
from typing import Any, Callable

import httpx
import pytest

from conftest import make_context
from domain.generators import generate_blueprint
from domain.models import GeneratorKey, RecipeBlueprint
from domain.remote import RemoteResult, normalize_blueprint, try_remote_generate


RECIPE = {
    "drinkName": " Starlit Negroni ",
    "reason": "Because the stars said so.",
    "ingredients": ["1 oz gin", " 1 oz Campari ", 3, None, ""],
    "instructions": ["Stir.", "Strain."],
    "compatibility": "Libra",
}


def completion(content: Any) -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def transport(
    handler: Callable[[httpx.Request], httpx.Response],
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    def record(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return handler(request)

    return httpx.MockTransport(record)


async def remote(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> RemoteResult:
    context = make_context(GeneratorKey.celestial)
    return await try_remote_generate(
        context.request,
        context,
        kwargs.pop("credential", "sk-test"),
        transport=transport(handler, kwargs.pop("seen", None)),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_success_is_normalized() -> None:
    seen: list[httpx.Request] = []
    result = await remote(
        lambda r: httpx.Response(200, json=completion(json.dumps(RECIPE))), seen=seen
    )

    assert result.ok
    assert result.blueprint == RecipeBlueprint(
        drink_name="Starlit Negroni",
        reason="Because the stars said so.",
        ingredients=("1 oz gin", "1 oz Campari", "3"),
        instructions=("Stir.", "Strain."),
        compatibility="Libra",
    )

    (request,) = seen
    assert request.url.path.endswith("/chat/completions")
    assert request.headers["Authorization"] == "Bearer sk-test"
    body = json.loads(request.content)
    assert body["response_format"] == {"type": "json_object"}
    assert [m["role"] for m in body["messages"]] == ["system", "user"]
    user = body["messages"][1]["content"]
    for expected in ("Celestial Alignment", "Sagittarius", "Dark Rum", "1985-12-10", "celestial|12|10|1985|Ada|Lovelace"):
        assert expected in user


@pytest.mark.asyncio
async def test_missing_credential_makes_no_request() -> None:
    seen: list[httpx.Request] = []
    result = await remote(lambda r: httpx.Response(200), credential=None, seen=seen)
    assert not result.ok
    assert seen == []


@pytest.mark.parametrize(
    "response",
    (
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(401, json=completion("{}")),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"error": {"message": "quota"}}),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"object": "chat.completion"}),
        httpx.Response(200, json=completion(None)),
        httpx.Response(200, json=completion("not json at all")),
        httpx.Response(200, json=completion("[1, 2, 3]")),
        httpx.Response(200, json=completion(json.dumps({"recipe": "wrong shape"}))),
    ),
)
@pytest.mark.asyncio
async def test_failures_are_results(response: httpx.Response) -> None:
    result = await remote(lambda r: response)
    assert not result.ok
    assert result.error is not None


@pytest.mark.asyncio
async def test_network_error_is_a_result() -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    result = await remote(fail)
    assert not result.ok


@pytest.mark.asyncio
async def test_bad_base_url_is_a_result() -> None:
    seen: list[httpx.Request] = []
    result = await remote(
        lambda r: httpx.Response(200, json=completion(json.dumps(RECIPE))),
        base_url="http://api\x00.example/v1/",
        seen=seen,
    )
    assert not result.ok
    assert seen == []


@pytest.mark.asyncio
async def test_invalid_url_during_request_is_a_result() -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.InvalidURL("bad path")

    result = await remote(fail)
    assert not result.ok


def test_recover_uses_fallback_only_on_failure() -> None:
    context = make_context(GeneratorKey.numerology)
    local = generate_blueprint(make_context(GeneratorKey.numerology))
    remote_blueprint = normalize_blueprint(RECIPE, context)

    assert RemoteResult.success(remote_blueprint).recover(lambda: local) == remote_blueprint
    assert RemoteResult().recover(lambda: local) == local


def test_normalize_missing_ingredients() -> None:
    context = make_context(GeneratorKey.celestial)
    blueprint = normalize_blueprint({"drinkName": "Solo"}, context)

    assert blueprint.drink_name == "Solo"
    assert blueprint.ingredients == ()
    assert blueprint.instructions == ()
    assert blueprint.reason == "Crafted for Ada Lovelace, a Sagittarius with life path number 9."
    assert blueprint.compatibility == "Harmonises with fellow fire signs"


def test_normalize_wrong_types() -> None:
    context = make_context(GeneratorKey.monogram)
    blueprint = normalize_blueprint(
        {"drinkName": 7, "reason": "  ", "ingredients": "gin", "instructions": {"a": 1}},
        context,
    )
    assert blueprint.drink_name == "Sagittarius Monogram Muse"
    assert blueprint.reason.startswith("Crafted for Ada Lovelace")
    assert blueprint.ingredients == ()
    assert blueprint.instructions == ()

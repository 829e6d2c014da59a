from typing import Iterator

import pytest
from starlette.testclient import TestClient

from app.app import app
from conftest import payload
from domain.errors import PersistenceError
from domain.repository import RecipeRepository
from domain.stores import MemoryRowStore


@pytest.fixture
def client() -> Iterator[TestClient]:
    app.state.repo = RecipeRepository(MemoryRowStore())
    app.state.completion_transport = None
    with TestClient(app) as client:
        yield client


def test_homepage(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Mythic Mixology Lab" in resp.text
    assert 'value="numerology"' in resp.text
    assert "Nothing poured yet." in resp.text


def test_generate_list_and_vote(client: TestClient) -> None:
    resp = client.post("/api/drinks", json=payload(generatorKey="heritage"))
    assert resp.status_code == 201
    drink = resp.json()
    assert drink["source"] == "local"
    assert drink["generatorKey"] == "heritage"
    assert drink["generatorLabel"] == "Ancestral Heritage"
    assert drink["voteCount"] == 0
    assert 3 <= len(drink["ingredients"]) <= 6

    listed = client.get("/api/drinks").json()
    assert [d["drinkId"] for d in listed] == [drink["drinkId"]]

    resp = client.post(f"/api/drinks/{drink['drinkId']}/vote")
    assert resp.json() == {"drinkId": drink["drinkId"], "voteCount": 1}

    page = client.get("/").text
    assert f'data-drink-id="{drink["drinkId"]}"' in page


@pytest.mark.parametrize(
    "body,message",
    (
        (payload(birthMonth=13), "Birth month must be a whole number between 1 and 12."),
        (payload(birthDay=0), "Birth day must be a whole number between 1 and 31."),
        (payload(generatorKey="tarot"), "Unknown generator key 'tarot'"),
        ([1, 2], "Request body must be a JSON object."),
    ),
)
def test_generate_rejects(client: TestClient, body: object, message: str) -> None:
    resp = client.post("/api/drinks", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"].startswith(message)


def test_generate_rejects_malformed_json(client: TestClient) -> None:
    resp = client.post(
        "/api/drinks", content=b"{nope", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400


def test_vote_unknown(client: TestClient) -> None:
    resp = client.post("/api/drinks/missing/vote")
    assert resp.status_code == 404


def test_generate_hides_store_failures(client: TestClient) -> None:
    class Broken(MemoryRowStore):
        async def append_row(self, name: str, row: object) -> None:  # type: ignore[override]
            raise RuntimeError("sheet quota exceeded")

    app.state.repo = RecipeRepository(Broken())
    resp = client.post("/api/drinks", json=payload())
    assert resp.status_code == 500
    assert resp.json() == {"error": "Unable to generate suggestion."}


def test_service_worker(client: TestClient) -> None:
    resp = client.get("/service-worker.js")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/javascript")
    assert 'const CACHE_NAME = "mythic-mixology-v1";' in resp.text
    assert '"/manifest.json"' in resp.text


def test_manifest_and_icons(client: TestClient) -> None:
    manifest = client.get("/manifest.json").json()
    assert [i["sizes"] for i in manifest["icons"]] == ["192x192", "512x512"]
    for icon in manifest["icons"]:
        assert client.get(icon["src"]).status_code == 200
    assert client.get("/favicon.ico").status_code == 200


def test_generate_rejects_non_utf8_body(client: TestClient) -> None:
    resp = client.post(
        "/api/drinks",
        content=b'{"firstName": "\xff"}',
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Request body must be a JSON object."}


def test_homepage_when_store_is_down(client: TestClient) -> None:
    class Down(MemoryRowStore):
        async def read_rows(self, name: str) -> list[list[str]]:
            raise PersistenceError("sheet unreachable")

    app.state.repo = RecipeRepository(Down())
    resp = client.get("/")
    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("text/html")
    assert "The drink store is unavailable." in resp.text

"""Tests for the HTTP contract: routes, status codes, error bodies, and CORS headers."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from fastapi.testclient import TestClient

from src.api.errors import CORS_HEADERS
from src.api.main import build_api
from src.app import App
from src.search.cache import UtteranceCache
from tests.fakes import FakeStore


def _make_client(store: FakeStore, *, scope: str = "company") -> TestClient:
    app = App(
        settings=SimpleNamespace(search_cache_scope=scope),  # type: ignore[arg-type]
        store=store,
        cache=UtteranceCache(scope=scope),  # type: ignore[arg-type]
    )
    return TestClient(build_api(app))


def _assert_cors(response: Any) -> None:
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value


def test_root_greeting(fake_store: FakeStore) -> None:
    response = _make_client(fake_store).get("/")

    assert response.status_code == 200
    assert response.text == "NLP Server v1.0"
    assert response.headers["content-type"].startswith("text/plain")
    _assert_cors(response)


def test_api_docs_describe_routes(fake_store: FakeStore) -> None:
    response = _make_client(fake_store).get("/api-docs.json")

    assert response.status_code == 200
    doc = response.json()
    assert doc["info"]["title"] == "nlp-server"
    assert doc["info"]["version"] == "1.0.0"
    assert {"/intents", "/intents/{intentId}/examples", "/examples/search/{q}"} <= set(doc["paths"])
    params = {p["name"] for p in doc["paths"]["/intents"]["get"]["parameters"]}
    assert params == {"companyId", "workspaceId"}
    _assert_cors(response)


def test_intents_for_workspace(fake_store: FakeStore) -> None:
    response = _make_client(fake_store).get("/intents", params={"companyId": "c", "workspaceId": "w1"})

    assert response.status_code == 200
    assert response.json() == [["a", "A"]]
    _assert_cors(response)


@pytest.mark.parametrize(
    "params",
    [{}, {"companyId": "c"}, {"workspaceId": "w1"}, {"companyId": "", "workspaceId": "w1"}],
)
def test_intents_missing_params(params: dict[str, str]) -> None:
    store = FakeStore()
    response = _make_client(store).get("/intents", params=params)

    assert response.status_code == 500
    assert response.json() == {
        "status": 500,
        "message": "invalid params - use /intents?companyId=<>&workspaceId=<>",
    }
    assert store.reads == []
    _assert_cors(response)


def test_intents_store_failure_hides_cause() -> None:
    response = _make_client(FakeStore(fail=True)).get(
        "/intents", params={"companyId": "c", "workspaceId": "w1"}
    )

    assert response.status_code == 500
    assert response.json() == {"status": 500, "message": "Error fetching intents"}


def test_intent_examples(fake_store: FakeStore, company_intents: dict[str, Any]) -> None:
    fake_store.data["data/companies/c/intents/i1"] = company_intents["-a"]

    response = _make_client(fake_store).get("/intents/i1/examples", params={"companyId": "c"})

    assert response.status_code == 200
    assert response.json() == ["Book a flight", "book a hotel"]


def test_intent_examples_errors() -> None:
    client = _make_client(FakeStore(fail=True))

    missing = client.get("/intents/i1/examples")
    assert missing.status_code == 500
    assert missing.json() == {
        "status": 500,
        "message": "invalid params - use /intents/<intentId>/examples?companyId=<>",
    }

    failed = client.get("/intents/i1/examples", params={"companyId": "c"})
    assert failed.status_code == 500
    assert failed.json() == {"status": 500, "message": "Error fetching examples"}


def test_intent_examples_watch_streams_changes() -> None:
    store = FakeStore(
        updates={
            "data/companies/c/intents/i1": [
                {"id": "i1", "utterances": ["one"]},
                {"id": "i1", "utterances": ["one", "two"]},
            ]
        }
    )

    response = _make_client(store).get(
        "/intents/i1/examples", params={"companyId": "c", "watch": "true"}
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.text == 'data: ["one"]\n\ndata: ["one","two"]\n\n'
    _assert_cors(response)


def test_intent_examples_watch_reports_store_failure() -> None:
    response = _make_client(FakeStore(fail=True)).get(
        "/intents/i1/examples", params={"companyId": "c", "watch": "true"}
    )

    assert response.status_code == 200
    assert response.text == 'event: error\ndata: {"status":500,"message":"Error fetching examples"}\n\n'


def test_search(fake_store: FakeStore) -> None:
    response = _make_client(fake_store).get("/examples/search/book", params={"companyId": "c"})

    assert response.status_code == 200
    assert response.json() == ["Book a flight", "book a hotel"]
    _assert_cors(response)


def test_short_search_never_touches_store() -> None:
    store = FakeStore(fail=True)

    response = _make_client(store).get("/examples/search/bo", params={"companyId": "c"})

    assert response.status_code == 200
    assert response.json() == []
    assert store.reads == []


def test_search_missing_company() -> None:
    response = _make_client(FakeStore()).get("/examples/search/book")

    assert response.status_code == 500
    assert response.json() == {
        "status": 500,
        "message": "invalid params - use /examples/search/<q>/?companyId=<>",
    }


def test_search_store_failure() -> None:
    client = _make_client(FakeStore(fail=True))
    response = client.get("/examples/search/book", params={"companyId": "c"})

    assert response.status_code == 500
    assert response.json() == {"status": 500, "message": "Error fetching examples"}


def test_global_cache_scope_serves_first_company(fake_store: FakeStore) -> None:
    client = _make_client(fake_store, scope="global")

    client.get("/examples/search/book", params={"companyId": "c"})
    response = client.get("/examples/search/cancel", params={"companyId": "other"})

    assert response.json() == ["Cancel booking"]
    assert len(fake_store.reads) == 1


def test_unknown_route_keeps_cors_headers(fake_store: FakeStore) -> None:
    response = _make_client(fake_store).get("/nope")

    assert response.status_code == 404
    _assert_cors(response)


def test_lifespan_closes_store(fake_store: FakeStore) -> None:
    with _make_client(fake_store) as client:
        client.get("/")

    assert fake_store.closed


def test_malformed_param_reports_usage_error() -> None:
    store = FakeStore()

    response = _make_client(store).get(
        "/intents/i1/examples", params={"companyId": "c", "watch": "maybe"}
    )

    assert response.status_code == 500
    assert response.json() == {
        "status": 500,
        "message": "invalid params - use /intents/<intentId>/examples?companyId=<>",
    }
    assert store.reads == [] and store.listens == []
    _assert_cors(response)


def test_trailing_slash_is_served_directly(fake_store: FakeStore) -> None:
    client = _make_client(fake_store)

    search = client.get(
        "/examples/search/book/", params={"companyId": "c"}, follow_redirects=False
    )
    intents = client.get(
        "/intents/", params={"companyId": "c", "workspaceId": "w1"}, follow_redirects=False
    )

    assert search.status_code == 200
    assert search.json() == ["Book a flight", "book a hotel"]
    assert intents.status_code == 200
    assert intents.json() == [["a", "A"]]


def test_trailing_slash_routes_stay_out_of_api_docs(fake_store: FakeStore) -> None:
    paths = _make_client(fake_store).get("/api-docs.json").json()["paths"]

    assert "/examples/search/{q}/" not in paths
    assert "/intents/" not in paths

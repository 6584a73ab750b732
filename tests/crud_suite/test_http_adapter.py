"""
HTTP adapter tests: FastAPI routes over the request handler
"""

import pytest
from fastapi.testclient import TestClient

from crud_core.api.routes.resources import parse_path_key
from crud_core.app import create_app
from crud_core.gateway import registry as registry_module
from crud_core.gateway.container import REQUEST_HANDLER, get_request_handler
from crud_core.gateway.handler import RequestHandler, store_dependency_name
from crud_core.gateway.registry import DependencyRegistry
from crud_core.services.store import EntityStore


class TestResourceRoutes:
    """Routes translate verbs and statuses between HTTP and the handler"""

    def test_full_crud_cycle(self, client):
        for key, title in ((1, "A"), (2, "B")):
            response = client.post("/api/journal_entries", json={"key": key, "title": title})
            assert response.status_code == 201, f"Create failed: {response.text}"

        response = client.get("/api/journal_entries")
        assert response.status_code == 200
        assert response.json() == [{"key": 1, "title": "A"}, {"key": 2, "title": "B"}]

        response = client.put("/api/journal_entries/1", json={"title": "A2"})
        assert response.status_code == 200
        assert response.json() == {"key": 1, "title": "A2"}

        assert client.get("/api/journal_entries/1").json() == {"key": 1, "title": "A2"}

        response = client.delete("/api/journal_entries/2")
        assert response.status_code == 200
        assert response.json() == {"key": 2, "title": "B"}

        assert client.get("/api/journal_entries").json() == [{"key": 1, "title": "A2"}]

    def test_string_keys_in_path(self, client):
        client.post("/api/users", json={"key": "ada", "name": "Ada", "email": "ada@example.com"})

        response = client.get("/api/users/ada")

        assert response.status_code == 200
        assert response.json()["email"] == "ada@example.com"

    @pytest.mark.parametrize("method,path", [
        ("get", "/api/journal_entries/99"),
        ("delete", "/api/journal_entries/99"),
        ("get", "/api/unknown_resource"),
    ])
    def test_not_found(self, client, method, path):
        response = getattr(client, method)(path)

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["trace_id"] == response.headers["X-Trace-ID"]

    def test_update_missing_is_not_found(self, client):
        response = client.put("/api/journal_entries/99", json={"title": "ghost"})

        assert response.status_code == 404

    def test_duplicate_is_conflict(self, client):
        client.post("/api/journal_entries", json={"key": 1, "title": "A"})

        response = client.post("/api/journal_entries", json={"key": 1, "title": "B"})

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    @pytest.mark.parametrize("payload", [
        {"title": "no key"},
        {"key": 1},
        ["not", "an", "object"],
    ])
    def test_bad_request(self, client, payload):
        response = client.post("/api/journal_entries", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "bad_request"


class TestHealthRoute:

    def test_health_lists_resources(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["resources"] == ["journal_entries", "users", "greetings"]

    def test_unknown_route_uses_error_body(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["error"] == "HTTP 404"


class TestPathKeys:
    """Path keys address integer keys only when written as canonical integers"""

    @pytest.mark.parametrize("raw_key,expected", [
        ("1", 1),
        ("0", 0),
        ("-1", -1),
        ("007", "007"),
        ("-0", "-0"),
        ("²", "²"),
        ("١٢", "١٢"),
        ("ada", "ada"),
    ])
    def test_parse_path_key(self, raw_key, expected):
        parsed = parse_path_key(raw_key)

        assert parsed == expected
        assert type(parsed) is type(expected)

    @pytest.mark.parametrize("resource,body,path", [
        ("journal_entries", {"key": 0, "title": "zero"}, "0"),
        ("journal_entries", {"key": -1, "title": "negative"}, "-1"),
        ("users", {"key": "007", "name": "Bond", "email": "bond@example.com"}, "007"),
    ])
    def test_created_key_round_trips(self, client, resource, body, path):
        assert client.post(f"/api/{resource}", json=body).status_code == 201

        read = client.get(f"/api/{resource}/{path}")
        replaced = client.put(f"/api/{resource}/{path}", json={k: v for k, v in body.items() if k != "key"})
        deleted = client.delete(f"/api/{resource}/{path}")

        assert read.status_code == 200, f"Key {path!r} unreachable: {read.text}"
        assert read.json()["key"] == body["key"]
        assert replaced.status_code == 200
        assert deleted.status_code == 200

    def test_non_ascii_digit_key_is_not_found(self, client):
        response = client.get("/api/journal_entries/²")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestUnexpectedErrors:
    """Failures outside the handler's error mapping become 500 responses"""

    def test_broken_store_wiring_is_internal_error(self):
        registry = DependencyRegistry()
        registry.register(store_dependency_name("journal_entries"), EntityStore, depends_on=["missing_dependency"])
        registry.register(REQUEST_HANDLER, lambda: RequestHandler(registry, "journal_entries"))

        with TestClient(create_app(registry), raise_server_exceptions=False) as broken_client:
            response = broken_client.get("/api/journal_entries")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Internal Server Error"
        assert body["trace_id"]
        assert "missing_dependency" not in body["message"], "Internal details must not leak"

    def test_unexpected_exception_is_internal_error(self, wired_registry, monkeypatch):
        handler = get_request_handler(wired_registry)

        async def explode(operation):
            raise KeyError("boom")

        monkeypatch.setattr(handler, "execute", explode)

        with TestClient(create_app(wired_registry), raise_server_exceptions=False) as failing_client:
            response = failing_client.get("/api/journal_entries/1")

        assert response.status_code == 500
        assert response.json()["trace_id"]


class TestAppFactory:

    def test_create_app_from_settings_twice(self, monkeypatch):
        monkeypatch.setattr(registry_module, "_registry", None)

        first = create_app()
        second = create_app()

        assert first.state.registry is not second.state.registry
        assert second.state.registry is registry_module.get_registry()
        assert second.state.registry.is_registered(REQUEST_HANDLER)

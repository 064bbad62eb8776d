"""
Tests for configuration, error translation and application wiring.
"""

import logging
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from empmovies.core.config import Settings
from empmovies.data_access.mongo_client import EmployeeRepository, Stores
from empmovies.server import create_app
from fakes import fake_store


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("MONGODB_URI_EMPLOYEES", "MONGODB_URI_MOVIES", "MOVIES_COLLECTION", "PORT", "ENVIRONMENT"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings(_env_file=None)
        assert settings.MONGODB_URI_EMPLOYEES.get_secret_value().startswith("mongodb://localhost")
        assert settings.MONGODB_URI_MOVIES is None
        assert settings.movies_configured is False
        assert settings.MOVIES_COLLECTION == "movies"
        assert settings.PORT == 8000
        assert settings.MOVIES_API_LIST_LIMIT == 200

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URI_MOVIES", "mongodb+srv://user:pw@cluster/movies")
        monkeypatch.setenv("MOVIES_COLLECTION", "films")
        monkeypatch.setenv("PORT", "9001")
        monkeypatch.setenv("BACKEND_CORS_ORIGINS", "http://a.test, http://b.test")
        settings = Settings(_env_file=None)
        assert settings.movies_configured is True
        assert settings.MOVIES_COLLECTION == "films"
        assert settings.PORT == 9001
        assert settings.BACKEND_CORS_ORIGINS == ["http://a.test", "http://b.test"]
        assert "pw" not in repr(settings)

    def test_blank_movies_uri_counts_as_unset(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URI_MOVIES", "  ")
        assert Settings(_env_file=None).movies_configured is False


class TestErrorTranslation:
    def test_unknown_route(self, client):
        response = client.get("/no/such/route")
        assert response.status_code == 404
        body = response.json()
        assert body["error"] is True
        assert body["message"] == "Route not found: GET /no/such/route"

    def test_wrong_method_on_known_path_is_route_not_found(self, client):
        response = client.post("/healthz")
        assert response.status_code == 404
        body = response.json()
        assert body["status"] == 404
        assert body["message"] == "Route not found: POST /healthz"

    def test_stack_included_outside_production(self, client):
        body = client.get("/api/movies/find").json()
        assert isinstance(body["stack"], list)

    def test_stack_hidden_in_production(self, settings, stores):
        settings = settings.model_copy(update={"ENVIRONMENT": "production"})
        with TestClient(create_app(settings=settings, stores=stores)) as client:
            body = client.get("/api/movies/find").json()
        assert body["status"] == 400
        assert "stack" not in body

    def test_unhandled_store_error_is_500(self, settings, monkeypatch, caplog):
        monkeypatch.setattr(EmployeeRepository, "list_all", AsyncMock(side_effect=RuntimeError("store exploded")))
        app = create_app(settings=settings, stores=Stores(employees=fake_store("employees")))
        with caplog.at_level(logging.ERROR, logger="empmovies.api.errors"):
            with TestClient(app, raise_server_exceptions=False) as client:
                response = client.get("/api/employees")
        assert response.status_code == 500
        body = response.json()
        assert body["error"] is True
        assert body["status"] == 500
        assert body["message"] == "store exploded"

        # traceback is left to the server, which sees the re-raised exception
        records = [r for r in caplog.records if r.name == "empmovies.api.errors"]
        assert len(records) == 1
        assert records[0].exc_info is None

    def test_malformed_json_is_400(self, client):
        response = client.post(
            "/api/employees",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"


class TestLifespan:
    def test_injected_stores_are_not_closed(self, settings, stores):
        app = create_app(settings=settings, stores=stores)
        with TestClient(app):
            pass
        stores.employees.client.close.assert_not_called()
        assert app.state.stores is stores

    def test_owned_stores_are_opened_and_closed(self, settings, stores, monkeypatch):
        opened = AsyncMock(return_value=stores)
        closed = AsyncMock()
        monkeypatch.setattr("empmovies.server.initialize_connections", opened)
        monkeypatch.setattr("empmovies.server.close_connections", closed)

        app = create_app(settings=settings)
        with TestClient(app) as client:
            assert client.get("/api/employees").status_code == 200
        opened.assert_awaited_once_with(settings)
        closed.assert_awaited_once_with(stores)
        assert app.state.stores is None


@pytest.mark.asyncio
async def test_initialize_connections_skips_unconfigured_movies(settings, monkeypatch):
    from empmovies.api import deps

    handle = fake_store("employees")
    open_store = AsyncMock(return_value=handle)
    monkeypatch.setattr(deps, "_open_store", open_store)

    settings = settings.model_copy(update={"MONGODB_URI_MOVIES": None})
    stores = await deps.initialize_connections(settings)

    assert stores.employees is handle
    assert stores.movies is None
    open_store.assert_awaited_once()

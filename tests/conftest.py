"""
Shared fixtures: settings pointing at fake stores and TestClients built on them.
"""

import pytest
from fastapi.testclient import TestClient

from empmovies.core.config import Settings
from empmovies.data_access.mongo_client import Stores
from empmovies.server import create_app
from fakes import fake_store


@pytest.fixture
def settings():
    return Settings(
        MONGODB_URI_EMPLOYEES="mongodb://localhost:27017/employees_test",
        MONGODB_URI_MOVIES="mongodb://localhost:27017/movies_test",
        MOVIES_COLLECTION="movies",
        ENVIRONMENT="test",
    )


@pytest.fixture
def stores():
    return Stores(employees=fake_store("employees"), movies=fake_store("movies"))


@pytest.fixture
def employees_collection(stores):
    return stores.employees.db["employees"]


@pytest.fixture
def movies_collection(stores):
    return stores.movies.db["movies"]


@pytest.fixture
def client(settings, stores):
    app = create_app(settings=settings, stores=stores)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def client_without_movies(settings):
    settings = settings.model_copy(update={"MONGODB_URI_MOVIES": None})
    app = create_app(settings=settings, stores=Stores(employees=fake_store("employees"), movies=None))
    with TestClient(app) as test_client:
        yield test_client

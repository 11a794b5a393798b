# backend/test/conftest.py
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from repositories.user_repository import InMemoryUserStore, MongoUserStore

VALID_USER = {
    "firstName": "A",
    "lastName": "B",
    "email": "a@b.com",
    "password": "x",
}


@pytest.fixture
def app_settings(monkeypatch) -> Settings:
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("STORE_BACKEND", "memory")
    return Settings()


@pytest.fixture
def memory_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def client(app_settings, memory_store):
    app = create_app(settings=app_settings, user_store=memory_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def mongo_collection() -> MagicMock:
    return MagicMock(name="users_collection")


@pytest.fixture
def mongo_store(mongo_collection) -> MongoUserStore:
    return MongoUserStore(mongo_collection)


@pytest.fixture
def mongo_client(app_settings, mongo_store):
    app = create_app(settings=app_settings, user_store=mongo_store)
    with TestClient(app) as test_client:
        yield test_client

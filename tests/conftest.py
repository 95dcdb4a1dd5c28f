"""
Shared fixtures: an in-memory SQLite credential store and a wired test client.
"""

import uuid

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from config.settings import Settings
from database.session import build_engine
from database.store import UserStore
from main import create_app


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite:///:memory:",
        "jwt_secret": "test-secret",
        "bcrypt_rounds": 4,
        "store_timeout_seconds": 5.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_user(**overrides) -> dict:
    """Unique registration payload; override any field."""
    tag = uuid.uuid4().hex[:10]
    user = {
        "username": f"testuser_{tag}",
        "email": f"test_{tag}@example.com",
        "password": "TestPassword123!",
        "handle": f"@testhandle_{tag}",
    }
    user.update(overrides)
    return user


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest_asyncio.fixture
async def store(settings):
    user_store = UserStore(build_engine(settings), timeout=settings.store_timeout_seconds)
    await user_store.create_tables()
    yield user_store
    await user_store.dispose()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def new_user():
    return make_user


@pytest.fixture
def client_for():
    """Build a started client around explicit settings and/or a stub store."""
    clients = []

    def _build(store=None, **overrides):
        test_client = TestClient(create_app(make_settings(**overrides), store=store))
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _build
    for test_client in clients:
        test_client.__exit__(None, None, None)

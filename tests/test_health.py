"""
Tests for the /health endpoint and request middleware.
"""

from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from auth.errors import StoreError
from database.store import UserStore
from main import create_app


class TestHealth:
    def test_healthy(self, client):
        res = client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"server": "ok", "database": "ok"}
        assert "X-Process-Time" in res.headers

    def test_database_down(self, client_for):
        stub = AsyncMock(spec=UserStore)
        stub.ping.side_effect = StoreError("Database connection failed")
        res = client_for(store=stub).get("/health")
        assert res.status_code == 500
        assert res.json() == {
            "server": "ok",
            "database": "error",
            "details": "Database connection failed",
        }

    def test_store_lifecycle(self, settings):
        stub = AsyncMock(spec=UserStore)
        with TestClient(create_app(settings, store=stub)):
            stub.create_tables.assert_awaited_once()
            stub.dispose.assert_not_awaited()
        stub.dispose.assert_awaited_once()

    def test_starts_when_database_is_down(self, settings):
        stub = AsyncMock(spec=UserStore)
        stub.create_tables.side_effect = StoreError("connection refused")
        stub.ping.side_effect = StoreError("connection refused")
        with TestClient(create_app(settings, store=stub)) as client:
            res = client.get("/health")
        assert res.status_code == 500
        assert res.json() == {"server": "ok", "database": "error", "details": "connection refused"}

"""
Tests for the SQLAlchemy-backed credential store.
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from auth.errors import StoreError
from database.session import build_engine
from database.store import UserStore


async def _insert(store, **fields):
    row = {
        "username": "bob",
        "email": "bob@example.com",
        "password_hash": "$2b$04$hash",
        "handle": "@bob",
    }
    row.update(fields)
    await store.insert_user(**row)
    return row


class TestUserStore:
    @pytest.mark.asyncio
    async def test_insert_assigns_id_and_timestamps(self, store):
        await _insert(store)
        user = await store.find_by_identifier("bob")
        assert isinstance(user.id, int)
        assert user.created_at is not None
        assert user.updated_at is not None

    @pytest.mark.asyncio
    async def test_find_by_username_or_email(self, store):
        await _insert(store)
        by_name = await store.find_by_identifier("bob")
        by_email = await store.find_by_identifier("bob@example.com")
        assert by_name.id == by_email.id
        assert await store.find_by_identifier("nobody") is None

    @pytest.mark.parametrize("column", ["username", "email", "handle"])
    @pytest.mark.asyncio
    async def test_unique_columns(self, store, column):
        first = await _insert(store)
        clash = {
            "username": "other",
            "email": "other@example.com",
            "handle": "@other",
            column: first[column],
        }
        with pytest.raises(StoreError, match="Server Error"):
            await _insert(store, **clash)

    @pytest.mark.asyncio
    async def test_exists_is_exact_match(self, store):
        await _insert(store)
        assert await store.exists("username", "bob") is True
        assert await store.exists("username", "Bob") is False
        assert await store.exists("handle", "@bob") is True
        assert await store.exists("email", " bob@example.com") is False

    @pytest.mark.asyncio
    async def test_exists_rejects_unknown_column(self, store):
        with pytest.raises(ValueError):
            await store.exists("password_hash", "x")

    @pytest.mark.asyncio
    async def test_values_are_bound_not_interpolated(self, store):
        payload = "x' OR '1'='1"
        assert await store.exists("username", payload) is False
        await _insert(store, username=payload)
        assert (await store.find_by_identifier(payload)).username == payload

    @pytest.mark.asyncio
    async def test_ping(self, store):
        await store.ping()

    @pytest.mark.asyncio
    async def test_missing_table_is_store_error(self, settings):
        bare = UserStore(build_engine(settings))
        try:
            with pytest.raises(StoreError) as info:
                await bare.find_by_identifier("bob")
            assert "users" in info.value.detail
        finally:
            await bare.dispose()

    @pytest.mark.asyncio
    async def test_round_trip_timeout(self, store):
        store.timeout = 0.05
        with pytest.raises(StoreError, match="timed out"):
            await store._run("slow", lambda session: asyncio.sleep(1))

    @pytest.mark.asyncio
    async def test_driver_encoding_failure_is_store_error(self, store):
        with pytest.raises(StoreError):
            await store.exists("username", "\ud800")

    @pytest.mark.asyncio
    async def test_create_tables_failure_is_store_error(self):
        broken = UserStore(MagicMock())
        broken.engine.begin.side_effect = OSError("connection refused")
        with pytest.raises(StoreError, match="connection refused"):
            await broken.create_tables()

"""
Credential store: the only code that talks to the ``users`` table.

Every round trip is bounded by ``timeout`` seconds; any SQLAlchemy/driver
failure or timeout is re-raised as ``StoreError``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from sqlalchemy import or_, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from auth.errors import StoreError
from database.models import Base, User
from database.session import build_session_factory

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Columns an availability lookup may target.
LOOKUP_COLUMNS = {
    "username": User.username,
    "email": User.email,
    "handle": User.handle,
}


class UserStore:
    """Owns the engine handle; built at startup and disposed at shutdown."""

    def __init__(self, engine: AsyncEngine, timeout: float = 10.0):
        self.engine = engine
        self.timeout = timeout
        self._session_factory = build_session_factory(engine)

    async def _run(self, op: str, fn: Callable[[AsyncSession], Awaitable[T]]) -> T:
        async def _in_session() -> T:
            async with self._session_factory() as session:
                try:
                    result = await fn(session)
                    await session.commit()
                    return result
                except Exception:
                    await session.rollback()
                    raise

        return await self._bounded(op, _in_session())

    async def _bounded(self, op: str, coro: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            logger.error("Store %s timed out after %.1fs", op, self.timeout)
            raise StoreError(f"{op} timed out after {self.timeout}s") from exc
        except (SQLAlchemyError, OSError, UnicodeError) as exc:
            logger.error("Store %s failed: %s", op, exc)
            raise StoreError(exc) from exc

    # ── Schema lifecycle ─────────────────────────────────────────────────

    async def create_tables(self) -> None:
        async def _create() -> None:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        await self._bounded("create_tables", _create())

    async def dispose(self) -> None:
        await self.engine.dispose()

    # ── Queries ──────────────────────────────────────────────────────────

    async def ping(self) -> None:
        """Round-trip ``SELECT 1``; raises ``StoreError`` when the database is unreachable."""

        async def _ping(session: AsyncSession) -> None:
            await session.execute(text("SELECT 1"))

        await self._run("ping", _ping)

    async def insert_user(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
        handle: str,
    ) -> None:
        async def _insert(session: AsyncSession) -> None:
            session.add(
                User(
                    username=username,
                    email=email,
                    password_hash=password_hash,
                    handle=handle,
                )
            )
            await session.flush()

        await self._run("insert_user", _insert)

    async def find_by_identifier(self, identifier: str) -> Optional[User]:
        """First row whose email or username equals ``identifier`` (store order)."""

        async def _find(session: AsyncSession) -> Optional[User]:
            result = await session.execute(
                select(User)
                .where(or_(User.email == identifier, User.username == identifier))
                .limit(1)
            )
            return result.scalars().first()

        return await self._run("find_by_identifier", _find)

    async def exists(self, column: str, value: Any) -> bool:
        """Exact-match existence check on ``username``, ``email`` or ``handle``."""
        try:
            col = LOOKUP_COLUMNS[column]
        except KeyError:
            raise ValueError(f"Unsupported lookup column: {column!r}") from None

        async def _exists(session: AsyncSession) -> bool:
            result = await session.execute(select(col).where(col == value).limit(1))
            return result.first() is not None

        return await self._run(f"exists[{column}]", _exists)

"""
infrastructure.persistence.connection - Async SQLite connection manager.

Wraps a single aiosqlite connection that is opened once at startup and
closed at shutdown. Every repository shares the same handle; acquire()
scopes one unit of work and commits or rolls it back.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiosqlite

from domain.exceptions import StoreIOError

logger = logging.getLogger(__name__)


class AsyncSQLiteConnection:
    """Process-lifetime SQLite handle with auto-commit/rollback."""

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._conn: Optional[aiosqlite.Connection] = None

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    async def open(self) -> None:
        """Open the underlying connection. Calling it twice is harmless."""
        if self._conn is not None:
            return
        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self._conn = await aiosqlite.connect(self._db_path)
        except (aiosqlite.Error, OSError) as exc:
            raise StoreIOError(f"Cannot open database '{self._db_path}': {exc}") from exc
        self._conn.row_factory = aiosqlite.Row
        logger.info("Opened database %s", self._db_path)

    async def close(self) -> None:
        if self._conn is None:
            return
        await self._conn.close()
        self._conn = None
        logger.info("Closed database %s", self._db_path)

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield the shared connection for one unit of work.

        Commits on success, rolls back on exception. SQLite errors are
        re-raised as StoreIOError; anything else propagates unchanged.

        All categories share this one connection, so a rollback discards
        every uncommitted statement on it, not only the failing one. The
        per-category locks in RecordStore do not serialize across
        categories; callers must keep to a single writer at a time.
        """
        if self._conn is None:
            raise StoreIOError("Database is not open. Call open() first.")
        conn = self._conn
        try:
            yield conn
            await conn.commit()
        except aiosqlite.Error as exc:
            await conn.rollback()
            logger.exception("Database operation failed, transaction rolled back.")
            raise StoreIOError(str(exc)) from exc
        except Exception:
            await conn.rollback()
            logger.exception("Database operation failed, transaction rolled back.")
            raise

"""
infrastructure.persistence.migrations - Database schema creation.

One table per category. Column names and types match the tables the
mobile app created, so an existing database can be opened as-is.
AUTOINCREMENT keeps deleted ids from ever being handed out again.
"""

from __future__ import annotations

import logging

from domain.entities import Category
from domain.exceptions import SchemaError, StoreIOError
from infrastructure.persistence.connection import AsyncSQLiteConnection

logger = logging.getLogger(__name__)

TABLE_NAMES: dict[Category, str] = {
    Category.FLUID_INTAKE: "water_intake",
    Category.MOOD_ENTRY: "mood_log",
    Category.PROFILE: "user_profile",
}

_TABLES: dict[Category, str] = {
    Category.FLUID_INTAKE: """CREATE TABLE IF NOT EXISTS water_intake (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        amount TEXT,
        timestamp TEXT
    )""",
    Category.MOOD_ENTRY: """CREATE TABLE IF NOT EXISTS mood_log (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        date TEXT,
        mood TEXT,
        comment TEXT
    )""",
    Category.PROFILE: """CREATE TABLE IF NOT EXISTS user_profile (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        fullName TEXT,
        contact TEXT,
        bloodType TEXT,
        email TEXT,
        dob TEXT
    )""",
}


async def ensure_schema(connection: AsyncSQLiteConnection, category: Category) -> None:
    """Create the table for one category if it doesn't exist.

    Safe to call on every activation (uses IF NOT EXISTS).
    """
    try:
        async with connection.acquire() as conn:
            await conn.execute(_TABLES[category])
    except StoreIOError as exc:
        raise SchemaError(
            f"Could not create table '{TABLE_NAMES[category]}': {exc}"
        ) from exc
    logger.debug("Schema ready for %s", category.value)


async def run_migrations(connection: AsyncSQLiteConnection) -> None:
    """Create all tables if they don't exist."""
    for category in Category:
        await ensure_schema(connection, category)
    logger.info("All tables created (or already exist).")


class SQLiteSchemaManager:
    """Implements SchemaManager port on top of ensure_schema()."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def ensure_schema(self, category: Category) -> None:
        await ensure_schema(self._conn, category)

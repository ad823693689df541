"""
infrastructure.persistence.mood_repo - SQLite mood log repository.

Implements MoodLogRepository port against the mood_log table.
"""

from __future__ import annotations

import logging

from domain.entities import MoodLogEntry
from infrastructure.persistence.connection import AsyncSQLiteConnection

logger = logging.getLogger(__name__)


class SQLiteMoodLogRepository:
    """Async SQLite implementation of MoodLogRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def save(self, entry: MoodLogEntry) -> int:
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                "INSERT INTO mood_log (date, mood, comment) VALUES (?, ?, ?)",
                (entry.date, entry.mood, entry.comment),
            )
            return cursor.lastrowid

    async def update(self, entry_id: int, entry: MoodLogEntry) -> int:
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                "UPDATE mood_log SET date = ?, mood = ?, comment = ? WHERE id = ?",
                (entry.date, entry.mood, entry.comment, entry_id),
            )
            return cursor.rowcount

    async def delete(self, entry_id: int) -> int:
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                "DELETE FROM mood_log WHERE id = ?", (entry_id,),
            )
            return cursor.rowcount

    async def get_all(self) -> list[MoodLogEntry]:
        """Most recent day first; within a day, most recently added first."""
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                "SELECT id, date, mood, comment FROM mood_log ORDER BY date DESC, id DESC",
            )
            return [self._row_to_entry(r) for r in rows]

    async def get_by_date(self, date: str) -> list[MoodLogEntry]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                "SELECT id, date, mood, comment FROM mood_log WHERE date = ? ORDER BY id DESC",
                (date,),
            )
            return [self._row_to_entry(r) for r in rows]

    @staticmethod
    def _row_to_entry(row) -> MoodLogEntry:
        return MoodLogEntry(
            id=row["id"], date=row["date"] or "",
            mood=row["mood"] or "", comment=row["comment"] or "",
        )

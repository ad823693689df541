"""
infrastructure.persistence.fluid_repo - SQLite fluid intake repository.

Implements FluidIntakeRepository port against the water_intake table.
"""

from __future__ import annotations

import logging

from domain.entities import FluidIntakeEntry
from infrastructure.persistence.connection import AsyncSQLiteConnection

logger = logging.getLogger(__name__)


class SQLiteFluidIntakeRepository:
    """Async SQLite implementation of FluidIntakeRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def save(self, entry: FluidIntakeEntry) -> int:
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                "INSERT INTO water_intake (amount, timestamp) VALUES (?, ?)",
                (entry.amount, entry.timestamp),
            )
            return cursor.lastrowid

    async def update(self, entry_id: int, entry: FluidIntakeEntry) -> int:
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                "UPDATE water_intake SET amount = ?, timestamp = ? WHERE id = ?",
                (entry.amount, entry.timestamp, entry_id),
            )
            return cursor.rowcount

    async def delete(self, entry_id: int) -> int:
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                "DELETE FROM water_intake WHERE id = ?", (entry_id,),
            )
            return cursor.rowcount

    async def get_all(self) -> list[FluidIntakeEntry]:
        """All entries, newest first."""
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                "SELECT id, amount, timestamp FROM water_intake ORDER BY timestamp DESC, id DESC",
            )
            return [self._row_to_entry(r) for r in rows]

    async def get_by_date(self, date: str) -> list[FluidIntakeEntry]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT id, amount, timestamp FROM water_intake
                   WHERE date(timestamp) = ?
                   ORDER BY timestamp ASC, id ASC""",
                (date,),
            )
            return [self._row_to_entry(r) for r in rows]

    @staticmethod
    def _row_to_entry(row) -> FluidIntakeEntry:
        # Older rows may hold a numeric amount; keep the text form.
        amount = row["amount"]
        return FluidIntakeEntry(
            id=row["id"],
            amount="" if amount is None else str(amount),
            timestamp=row["timestamp"] or "",
        )

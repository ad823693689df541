"""
infrastructure.persistence.profile_repo - SQLite user profile repository.

Implements ProfileRepository port against the user_profile table. The
table may hold more than one row on databases written by older app
versions; only the first row is treated as the profile.
"""

from __future__ import annotations

import logging
from typing import Optional

from domain.entities import UserProfile
from infrastructure.persistence.connection import AsyncSQLiteConnection

logger = logging.getLogger(__name__)


class SQLiteProfileRepository:
    """Async SQLite implementation of ProfileRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def save(self, profile: UserProfile) -> int:
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT INTO user_profile (fullName, contact, bloodType, email, dob)
                   VALUES (?, ?, ?, ?, ?)""",
                (profile.fullName, profile.contact, profile.bloodType,
                 profile.email, profile.dob),
            )
            return cursor.lastrowid

    async def update(self, profile_id: int, profile: UserProfile) -> int:
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """UPDATE user_profile
                   SET fullName = ?, contact = ?, bloodType = ?, email = ?, dob = ?
                   WHERE id = ?""",
                (profile.fullName, profile.contact, profile.bloodType,
                 profile.email, profile.dob, profile_id),
            )
            return cursor.rowcount

    async def delete(self, profile_id: int) -> int:
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                "DELETE FROM user_profile WHERE id = ?", (profile_id,),
            )
            return cursor.rowcount

    async def get_all(self) -> list[UserProfile]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                "SELECT * FROM user_profile ORDER BY id ASC",
            )
            return [self._row_to_profile(r) for r in rows]

    async def get_first(self) -> Optional[UserProfile]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                "SELECT * FROM user_profile ORDER BY id ASC LIMIT 1",
            )
            if not rows:
                return None
            return self._row_to_profile(rows[0])

    @staticmethod
    def _row_to_profile(row) -> UserProfile:
        return UserProfile(
            id=row["id"], fullName=row["fullName"] or "",
            contact=row["contact"] or "", bloodType=row["bloodType"] or "",
            email=row["email"] or "", dob=row["dob"] or "",
        )

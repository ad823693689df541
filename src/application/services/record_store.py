"""
application.services.record_store - Category-scoped CRUD over one store.

A thin dispatcher in front of the three repositories. It adds what the
repositories deliberately leave out:

  - one asyncio.Lock per category, so at most one insert/update/delete is
    in flight for a category regardless of how callers are scheduled;
  - NotFoundError when an update or delete matches no row;
  - type checks so a record cannot be written to the wrong category.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Union

from domain.entities import Category, FluidIntakeEntry, MoodLogEntry, UserProfile
from domain.exceptions import NotFoundError
from domain.ports import (
    FluidIntakeRepository,
    MoodLogRepository,
    ProfileRepository,
    SchemaManager,
)

logger = logging.getLogger(__name__)

Record = Union[FluidIntakeEntry, MoodLogEntry, UserProfile]

_RECORD_TYPES: dict[Category, type] = {
    Category.FLUID_INTAKE: FluidIntakeEntry,
    Category.MOOD_ENTRY: MoodLogEntry,
    Category.PROFILE: UserProfile,
}


class RecordStore:
    """Typed CRUD per category, sharing a single connection."""

    def __init__(
        self,
        schema: SchemaManager,
        fluid_repo: FluidIntakeRepository,
        mood_repo: MoodLogRepository,
        profile_repo: ProfileRepository,
    ):
        self._schema = schema
        self._repos = {
            Category.FLUID_INTAKE: fluid_repo,
            Category.MOOD_ENTRY: mood_repo,
            Category.PROFILE: profile_repo,
        }
        self._profile_repo = profile_repo
        self._locks = {category: asyncio.Lock() for category in Category}

    async def ensure_schema(self, category: Category) -> None:
        await self._schema.ensure_schema(category)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def insert(self, category: Category, record: Record) -> int:
        """Store a new record and return the id assigned to it."""
        self._check_type(category, record)
        async with self._locks[category]:
            record_id = await self._repos[category].save(record)
        logger.debug("Inserted %s #%d", category.value, record_id)
        return record_id

    async def update(self, category: Category, record_id: int, record: Record) -> None:
        """Replace every field of an existing record. The id is kept."""
        self._check_type(category, record)
        async with self._locks[category]:
            touched = await self._repos[category].update(record_id, record)
        if not touched:
            raise NotFoundError(category.value, record_id)
        logger.debug("Updated %s #%d", category.value, record_id)

    async def delete(self, category: Category, record_id: int) -> None:
        async with self._locks[category]:
            touched = await self._repos[category].delete(record_id)
        if not touched:
            raise NotFoundError(category.value, record_id)
        logger.debug("Deleted %s #%d", category.value, record_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def query_all(self, category: Category) -> list[Record]:
        return await self._repos[category].get_all()

    async def query_by_date(self, category: Category, date: str) -> list[Record]:
        """Entries whose calendar date equals ``date`` (YYYY-MM-DD)."""
        if category is Category.PROFILE:
            raise ValueError("Profiles are not dated; use query_profile().")
        return await self._repos[category].get_by_date(date)

    async def query_profile(self) -> Optional[UserProfile]:
        """The first stored profile, or None when nobody has registered."""
        return await self._profile_repo.get_first()

    @staticmethod
    def _check_type(category: Category, record: Record) -> None:
        expected = _RECORD_TYPES[category]
        if not isinstance(record, expected):
            raise TypeError(
                f"{category.value} expects {expected.__name__}, got {type(record).__name__}"
            )

"""
application.services.mood_tracker - Shared state of the mood screens.

Unlike the fluid screens, the mood list keeps every entry in memory; the
day view is a filter over it and the calendar index is derived from the
same full scan after each mutation.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional

from domain.entities import Category, MoodLogEntry
from domain.models import DateMarker
from application.services.date_index import (
    MOOD_DOT_COLOR,
    MOOD_SELECTED_COLOR,
    build_date_index,
    overlay_selection,
)
from application.services.record_store import RecordStore
from application.services.validation import ensure_not_future, validate_mood

logger = logging.getLogger(__name__)


@dataclass
class MoodTrackerState:
    selected_date: str
    entries: list[MoodLogEntry] = field(default_factory=list)
    marked_dates: dict[str, DateMarker] = field(default_factory=dict)
    editing_id: Optional[int] = None
    mood_input: str = ""
    comment_input: str = ""

    @property
    def daily_moods(self) -> list[MoodLogEntry]:
        return [e for e in self.entries if e.date == self.selected_date]


class MoodTracker:
    """Add/edit/delete flow and calendar view for mood entries."""

    def __init__(self, store: RecordStore, today: Callable[[], date] = date.today):
        self._store = store
        self._today = today
        self._mutation_lock = asyncio.Lock()
        self.state = MoodTrackerState(selected_date=today().isoformat())

    async def load(self) -> MoodTrackerState:
        await self._store.ensure_schema(Category.MOOD_ENTRY)
        await self._refresh()
        return self.state

    async def select_date(self, selected: str) -> MoodTrackerState:
        ensure_not_future(selected, self._today())
        self.state.selected_date = selected
        self.cancel()
        return self.state

    def begin_add(self) -> None:
        self.cancel()

    def begin_edit(self, entry: MoodLogEntry) -> None:
        self.state.selected_date = entry.date
        self.state.editing_id = entry.id
        self.state.mood_input = entry.mood
        self.state.comment_input = entry.comment

    def cancel(self) -> None:
        self.state.editing_id = None
        self.state.mood_input = ""
        self.state.comment_input = ""

    async def save(self, mood: Optional[str] = None, comment: Optional[str] = None) -> int:
        """Insert or update a mood for the selected date. Returns the id written."""
        if mood is not None:
            self.state.mood_input = mood
        if comment is not None:
            self.state.comment_input = comment

        entry = MoodLogEntry(
            date=self.state.selected_date,
            mood=validate_mood(self.state.mood_input),
            comment=self.state.comment_input,
        )
        async with self._mutation_lock:
            if self.state.editing_id is None:
                record_id = await self._store.insert(Category.MOOD_ENTRY, entry)
            else:
                record_id = self.state.editing_id
                await self._store.update(Category.MOOD_ENTRY, record_id, entry)
            await self._refresh()
        self.cancel()
        return record_id

    async def delete(self, entry_id: int, confirmed: bool = False) -> bool:
        if not confirmed:
            return False
        async with self._mutation_lock:
            await self._store.delete(Category.MOOD_ENTRY, entry_id)
            await self._refresh()
        self.cancel()
        return True

    def calendar_marks(self) -> dict[str, DateMarker]:
        return overlay_selection(
            self.state.marked_dates, self.state.selected_date, MOOD_SELECTED_COLOR,
        )

    async def _refresh(self) -> None:
        entries = await self._store.query_all(Category.MOOD_ENTRY)
        self.state.entries = entries
        self.state.marked_dates = build_date_index(entries, MOOD_DOT_COLOR)
        logger.debug("Mood index rebuilt: %d entries on %d dates",
                     len(entries), len(self.state.marked_dates))

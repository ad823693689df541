"""
application.services.fluid_tracker - Shared state of the fluid screens.

The list, the chart and the calendar all read from one FluidTrackerState.
Every mutation goes through this service and only returns once the state
has been refreshed: the date index is rebuilt from a full scan, and the
selected day's entries and chart series are reloaded when the mutation
touched that day.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Optional

from domain.entities import Category, FluidIntakeEntry
from domain.models import DateMarker, SlotSeries
from application.services.date_index import (
    FLUID_DOT_COLOR,
    FLUID_SELECTED_COLOR,
    build_date_index,
    overlay_selection,
)
from application.services.record_store import RecordStore
from application.services.slot_aggregator import aggregate_slots, local_time
from application.services.validation import (
    DEFAULT_TIME,
    ensure_not_future,
    parse_intake_form,
)

logger = logging.getLogger(__name__)


@dataclass
class FluidTrackerState:
    """What the fluid views render. Replaced field by field, never shared."""
    selected_date: str
    entries: list[FluidIntakeEntry] = field(default_factory=list)
    marked_dates: dict[str, DateMarker] = field(default_factory=dict)
    chart: Optional[SlotSeries] = None
    editing_id: Optional[int] = None
    amount_input: str = ""
    time_input: str = DEFAULT_TIME

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None


class FluidTracker:
    """Add/edit/delete flow and derived views for fluid intake."""

    def __init__(self, store: RecordStore, today: Callable[[], date] = date.today):
        self._store = store
        self._today = today
        self._mutation_lock = asyncio.Lock()
        self.state = FluidTrackerState(selected_date=today().isoformat())

    async def load(self) -> FluidTrackerState:
        """Initial activation: make sure the table exists, then build everything."""
        await self._store.ensure_schema(Category.FLUID_INTAKE)
        await self._rebuild_index()
        await self._load_day(self.state.selected_date)
        return self.state

    async def select_date(self, selected: str) -> FluidTrackerState:
        ensure_not_future(selected, self._today())
        self.state.selected_date = selected
        self.cancel()
        await self._load_day(selected)
        return self.state

    # ------------------------------------------------------------------
    # Add / edit form
    # ------------------------------------------------------------------

    def begin_add(self) -> None:
        self.cancel()

    def begin_edit(self, entry: FluidIntakeEntry) -> None:
        self.state.editing_id = entry.id
        self.state.amount_input = entry.amount
        self.state.time_input = _time_of(entry.timestamp)

    def cancel(self) -> None:
        self.state.editing_id = None
        self.state.amount_input = ""
        self.state.time_input = DEFAULT_TIME

    async def save(self, amount: Optional[str] = None, time_input: Optional[str] = None) -> int:
        """Insert or update from the form, for the selected date.

        Arguments override the form inputs. Returns the id written.
        Raises ValidationError before any write if the form is invalid.
        """
        if amount is not None:
            self.state.amount_input = amount
        if time_input is not None:
            self.state.time_input = time_input

        entry = parse_intake_form(
            self.state.amount_input, self.state.time_input, self.state.selected_date,
        )
        async with self._mutation_lock:
            affected = {entry.date}
            if self.state.editing_id is None:
                record_id = await self._store.insert(Category.FLUID_INTAKE, entry)
            else:
                record_id = self.state.editing_id
                previous = self._find(record_id)
                if previous is not None:
                    affected.add(previous.date)
                await self._store.update(Category.FLUID_INTAKE, record_id, entry)
            await self._after_mutation(affected)
        self.cancel()
        return record_id

    async def delete(self, entry_id: int, confirmed: bool = False) -> bool:
        """Delete an entry once the user has confirmed. Returns True if deleted."""
        if not confirmed:
            return False
        async with self._mutation_lock:
            target = self._find(entry_id)
            await self._store.delete(Category.FLUID_INTAKE, entry_id)
            affected = {target.date} if target else {self.state.selected_date}
            await self._after_mutation(affected)
        if self.state.editing_id == entry_id:
            self.cancel()
        return True

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def calendar_marks(self) -> dict[str, DateMarker]:
        return overlay_selection(
            self.state.marked_dates, self.state.selected_date, FLUID_SELECTED_COLOR,
        )

    async def all_entries(self) -> list[FluidIntakeEntry]:
        return await self._store.query_all(Category.FLUID_INTAKE)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _after_mutation(self, affected_dates: Iterable[str]) -> None:
        await self._rebuild_index()
        if self.state.selected_date in set(affected_dates):
            await self._load_day(self.state.selected_date)

    async def _rebuild_index(self) -> None:
        entries = await self._store.query_all(Category.FLUID_INTAKE)
        self.state.marked_dates = build_date_index(entries, FLUID_DOT_COLOR)
        logger.debug("Fluid date index rebuilt: %d dates", len(self.state.marked_dates))

    async def _load_day(self, day: str) -> None:
        entries = await self._store.query_by_date(Category.FLUID_INTAKE, day)
        self.state.entries = entries
        self.state.chart = aggregate_slots(day, entries)

    def _find(self, entry_id: int) -> Optional[FluidIntakeEntry]:
        return next((e for e in self.state.entries if e.id == entry_id), None)


def _time_of(timestamp: str) -> str:
    moment = local_time(timestamp)
    if moment is None:
        return DEFAULT_TIME
    return f"{moment.hour:02d}:{moment.minute:02d}"

"""
domain.models - Value objects derived from stored entries.

These are immutable data containers with no dependencies on
infrastructure. They are computed from query results and never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Calendar markers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DateMarker:
    """Display state of one calendar day.

    ``marked`` means at least one entry exists for the day; ``selected``
    means it is the day the user is looking at. Both may be set at once.
    """
    marked: bool = False
    dot_color: Optional[str] = None
    selected: bool = False
    selected_color: Optional[str] = None

    def with_selection(self, color: str) -> DateMarker:
        return replace(self, selected=True, selected_color=color)


# ---------------------------------------------------------------------------
# Time-of-day slots
# ---------------------------------------------------------------------------

SLOT_START_HOURS: tuple[int, ...] = (8, 10, 12, 14, 16, 18)
SLOT_WIDTH_HOURS = 2
SLOT_LABELS: tuple[str, ...] = ("8AM", "10AM", "12PM", "2PM", "4PM", "6PM")


class SlotState(str, Enum):
    """Whether a day's chart series has anything to show."""
    ABSENT = "absent"    # no entries stored for the date
    ZERO = "zero"        # entries exist but every slot sums to 0
    VALUE = "value"      # at least one slot is non-zero


@dataclass(frozen=True)
class SlotSeries:
    """Six 2-hour totals for one day, ready to feed a chart.

    ``entry_count`` counts every entry of the day, including those whose
    hour falls outside the charted window.
    """
    date: str
    values: tuple[float, ...] = (0.0,) * len(SLOT_START_HOURS)
    entry_count: int = 0

    @property
    def state(self) -> SlotState:
        if self.entry_count == 0:
            return SlotState.ABSENT
        if all(v == 0 for v in self.values):
            return SlotState.ZERO
        return SlotState.VALUE

    @property
    def total(self) -> float:
        return sum(self.values)

    def labelled(self) -> list[tuple[str, float]]:
        return list(zip(SLOT_LABELS, self.values))

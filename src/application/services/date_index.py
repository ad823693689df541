"""
application.services.date_index - Calendar presence markers.

The index is rebuilt from a full scan after every mutation and on first
load; it is never patched in place, so it cannot drift from the table.
The cost is linear in the number of stored entries.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Protocol

from domain.models import DateMarker

FLUID_DOT_COLOR = "blue"
FLUID_SELECTED_COLOR = "blue"
MOOD_DOT_COLOR = "#FFA500"
MOOD_SELECTED_COLOR = "#FFA500"


class _Dated(Protocol):
    @property
    def date(self) -> str: ...


def build_date_index(entries: Iterable[_Dated], dot_color: str) -> dict[str, DateMarker]:
    """Map every date that has at least one entry to a marked DateMarker."""
    index: dict[str, DateMarker] = {}
    for entry in entries:
        if entry.date:
            index[entry.date] = DateMarker(marked=True, dot_color=dot_color)
    return index


def overlay_selection(
    index: Mapping[str, DateMarker],
    selected_date: str,
    selected_color: str,
) -> dict[str, DateMarker]:
    """Return a copy of the index with the selected date flagged.

    The selected date keeps its presence marker if it has one.
    """
    marks = dict(index)
    marks[selected_date] = marks.get(selected_date, DateMarker()).with_selection(selected_color)
    return marks

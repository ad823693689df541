"""
application.services.slot_aggregator - Time-of-day totals for one day.

Buckets a day's fluid entries into six 2-hour windows starting at 8:00.
Entries logged before 8:00 or from 20:00 on fall outside every window
and are left out of the totals on purpose.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime
from typing import Iterable, Optional

from domain.entities import FluidIntakeEntry
from domain.models import SLOT_START_HOURS, SLOT_WIDTH_HOURS, SlotSeries

logger = logging.getLogger(__name__)

# Leading decimal number, same prefix rule as a browser's parseFloat:
# "250ml" reads as 250, "abc" does not read at all.
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(raw: object) -> float:
    """Read a stored amount as a number. Anything unreadable counts as 0."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        match = _LEADING_NUMBER.match(str(raw))
        if not match:
            return 0.0
        value = float(match.group(1))
    return value if math.isfinite(value) else 0.0


def local_time(timestamp: str) -> Optional[datetime]:
    """Parse a stored timestamp as local wall-clock time, or None if unreadable.

    Naive timestamps are already local. Rows stamped in UTC (``Z`` suffix)
    or with an offset are converted to the local zone.
    """
    try:
        moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment


def entry_hour(timestamp: str) -> Optional[int]:
    """Local hour-of-day of a stored timestamp, or None if unreadable."""
    moment = local_time(timestamp)
    return None if moment is None else moment.hour


def slot_index(hour: int) -> Optional[int]:
    for index, start in enumerate(SLOT_START_HOURS):
        if start <= hour < start + SLOT_WIDTH_HOURS:
            return index
    return None


def aggregate_slots(date: str, entries: Iterable[FluidIntakeEntry]) -> SlotSeries:
    """Sum one day's entries into the six chart slots.

    Entries stamped on another date are ignored entirely, so callers can
    pass a wider list without skewing the count.
    """
    sums = [0.0] * len(SLOT_START_HOURS)
    count = 0
    for entry in entries:
        if entry.date != date:
            continue
        count += 1
        hour = entry_hour(entry.timestamp)
        index = slot_index(hour) if hour is not None else None
        if index is None:
            logger.debug("Entry %s at %r is outside the charted hours", entry.id, entry.timestamp)
            continue
        sums[index] += parse_amount(entry.amount)
    return SlotSeries(date=date, values=tuple(sums), entry_count=count)

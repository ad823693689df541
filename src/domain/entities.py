"""
domain.entities - Persistence-aware types (have IDs).

Plain dataclasses with no SQL concerns and no DB imports. Ids are assigned
by the repository implementations, never by the entities themselves.

Field names mirror the stored column names so existing databases stay
readable; timestamps and dates are kept as ISO strings, exactly as stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Category(str, Enum):
    """Logical table groups handled by the record store."""
    FLUID_INTAKE = "fluid_intake"
    MOOD_ENTRY = "mood_entry"
    PROFILE = "profile"


class Mood(str, Enum):
    """Fixed mood scale, stored by emoji."""
    SAD = "😢"
    NEUTRAL = "😐"
    HAPPY = "😊"
    EXCITED = "😄"

    @property
    def label(self) -> str:
        return self.name.capitalize()


# (emoji, label) pairs in display order, lowest to highest.
MOOD_LEVELS: list[tuple[str, str]] = [(m.value, m.label) for m in Mood]


@dataclass
class FluidIntakeEntry:
    """One fluid-intake reading.

    amount is free text as typed by the user; it is parsed leniently only
    when aggregated. timestamp is ``YYYY-MM-DDTHH:MM:SS`` local time.
    """
    id: Optional[int] = None
    amount: str = ""
    timestamp: str = ""

    @property
    def date(self) -> str:
        return self.timestamp[:10]


@dataclass
class MoodLogEntry:
    """A mood rating for a calendar day."""
    id: Optional[int] = None
    date: str = ""
    mood: str = ""
    comment: str = ""


@dataclass
class UserProfile:
    """The single user profile row."""
    id: Optional[int] = None
    fullName: str = ""
    contact: str = ""
    bloodType: str = ""
    email: str = ""
    dob: str = ""

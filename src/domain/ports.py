"""
domain.ports - Abstract interfaces (Protocols) for all system boundaries.

These define WHAT the system needs without specifying HOW. Infrastructure
modules provide concrete implementations. Application services depend only
on these protocols, never on concrete classes.

Using typing.Protocol (structural typing) instead of ABC: any class that
implements the methods satisfies the port without explicit inheritance.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from domain.entities import Category, FluidIntakeEntry, MoodLogEntry, UserProfile


# ---------------------------------------------------------------------------
# Repository Ports
# ---------------------------------------------------------------------------

@runtime_checkable
class SchemaManager(Protocol):
    """Idempotent table creation per category."""

    async def ensure_schema(self, category: Category) -> None: ...


# update/delete return the number of rows touched so the caller can decide
# what a miss means.

@runtime_checkable
class FluidIntakeRepository(Protocol):
    """CRUD operations for FluidIntakeEntry entities."""

    async def save(self, entry: FluidIntakeEntry) -> int: ...
    async def update(self, entry_id: int, entry: FluidIntakeEntry) -> int: ...
    async def delete(self, entry_id: int) -> int: ...
    async def get_all(self) -> list[FluidIntakeEntry]: ...
    async def get_by_date(self, date: str) -> list[FluidIntakeEntry]: ...


@runtime_checkable
class MoodLogRepository(Protocol):
    """CRUD operations for MoodLogEntry entities."""

    async def save(self, entry: MoodLogEntry) -> int: ...
    async def update(self, entry_id: int, entry: MoodLogEntry) -> int: ...
    async def delete(self, entry_id: int) -> int: ...
    async def get_all(self) -> list[MoodLogEntry]: ...
    async def get_by_date(self, date: str) -> list[MoodLogEntry]: ...


@runtime_checkable
class ProfileRepository(Protocol):
    """CRUD operations for the UserProfile row."""

    async def save(self, profile: UserProfile) -> int: ...
    async def update(self, profile_id: int, profile: UserProfile) -> int: ...
    async def delete(self, profile_id: int) -> int: ...
    async def get_all(self) -> list[UserProfile]: ...
    async def get_first(self) -> UserProfile | None: ...


# ---------------------------------------------------------------------------
# Export Ports
# ---------------------------------------------------------------------------

@runtime_checkable
class DocumentRenderer(Protocol):
    """Turn a titled table of rows into a document file."""

    def render(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[tuple[str, ...]],
        destination: Path,
        accent_color: str = "#2196F3",
    ) -> Path: ...


@runtime_checkable
class ShareSink(Protocol):
    """Hand a finished document to the platform. Returns False on failure."""

    async def share(self, path: Path, dialog_title: str, mime_type: str) -> bool: ...

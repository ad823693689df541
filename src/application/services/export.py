"""
application.services.export - Hands report rows to the document collaborator.

The core only flattens entries into ordered row tuples and picks a title;
rendering and sharing are done by the DocumentRenderer and ShareSink ports.
A failed export is reported back as an ExportResult carrying a generic
alert, never as a partially written state.
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from pathlib import Path
from typing import Iterable

from domain.entities import Category, FluidIntakeEntry, Mood, MoodLogEntry
from domain.exceptions import ExportError
from domain.ports import DocumentRenderer, ShareSink
from application.dto import ExportResult, ReportSpec
from application.services.record_store import RecordStore
from application.services.slot_aggregator import local_time

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
EXPORT_FAILED_ALERT = "Failed to generate report"

FLUID_REPORT = ReportSpec(
    title="Fluid Intake Report",
    columns=("Date", "Time", "Amount"),
    filename="fluid_intake_report.pdf",
    accent_color="#2196F3",
    dialog_title="Share Fluid Intake Report",
)

MOOD_REPORT = ReportSpec(
    title="Mood Report",
    columns=("Date", "Mood", "Comment"),
    filename="mood_tracker_report.pdf",
    accent_color="#FFA500",
    dialog_title="Share Mood Report",
)


def fluid_rows(entries: Iterable[FluidIntakeEntry]) -> list[tuple[str, str, str]]:
    """(date, time, "<amount> ml") per entry, in the order given."""
    rows = []
    for entry in entries:
        moment = local_time(entry.timestamp)
        if moment is None:
            day, clock = entry.timestamp[:10], ""
        else:
            day, clock = moment.strftime("%Y-%m-%d"), moment.strftime("%H:%M:%S")
        rows.append((day, clock, f"{entry.amount} ml"))
    return rows


def mood_text(mood: str) -> str:
    """Emoji followed by its label, e.g. "😊 Happy". Unknown values pass through."""
    try:
        return f"{mood} {Mood(mood).label}"
    except ValueError:
        return mood


def mood_rows(entries: Iterable[MoodLogEntry]) -> list[tuple[str, str, str]]:
    return [(e.date, mood_text(e.mood), e.comment or "") for e in entries]


class ExportService:
    """Builds report rows from the store and passes them on."""

    def __init__(
        self,
        store: RecordStore,
        renderer: DocumentRenderer,
        sink: ShareSink,
        export_dir: Path,
    ):
        self._store = store
        self._renderer = renderer
        self._sink = sink
        self._export_dir = export_dir

    async def export(self, category: Category) -> ExportResult:
        if category is Category.FLUID_INTAKE:
            return await self.export_fluid()
        if category is Category.MOOD_ENTRY:
            return await self.export_mood()
        raise ValueError(f"No report is defined for {category.value}")

    async def export_fluid(self) -> ExportResult:
        """Every fluid entry, newest first."""
        entries = await self._store.query_all(Category.FLUID_INTAKE)
        return await self._publish(FLUID_REPORT, fluid_rows(entries))

    async def export_mood(self) -> ExportResult:
        """Every mood entry, most recent date first."""
        entries = await self._store.query_all(Category.MOOD_ENTRY)
        return await self._publish(MOOD_REPORT, mood_rows(entries))

    async def _publish(self, report: ReportSpec, rows: list[tuple[str, ...]]) -> ExportResult:
        destination = self._export_dir / report.filename
        loop = asyncio.get_running_loop()
        try:
            path = await loop.run_in_executor(
                None,
                partial(
                    self._renderer.render,
                    report.title, report.columns, rows, destination,
                    accent_color=report.accent_color,
                ),
            )
            shared = await self._sink.share(path, report.dialog_title, PDF_MIME_TYPE)
        except (ExportError, OSError):
            logger.exception("Export of '%s' failed", report.title)
            return ExportResult(ok=False, message=EXPORT_FAILED_ALERT)

        if not shared:
            logger.warning("Share of %s was not completed", path)
            return ExportResult(ok=False, path=path, row_count=len(rows),
                                message=EXPORT_FAILED_ALERT)
        logger.info("Exported %d rows to %s", len(rows), path)
        return ExportResult(ok=True, path=path, row_count=len(rows))

"""
Tests for report export: row building, failure handling and PDF output.
"""
from datetime import datetime, timezone

import pytest
from pypdf import PdfReader

from application.services.export import (
    EXPORT_FAILED_ALERT,
    FLUID_REPORT,
    MOOD_REPORT,
    fluid_rows,
    mood_rows,
    mood_text,
)
from domain.entities import Category, FluidIntakeEntry, MoodLogEntry
from domain.exceptions import ExportError
from infrastructure.reports.pdf_report import ReportLabRenderer


class RecordingRenderer:
    """DocumentRenderer that writes a stub file and remembers the call."""

    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def render(self, title, columns, rows, destination, accent_color="#2196F3"):
        self.calls.append((title, tuple(columns), list(rows), destination, accent_color))
        if self.fail:
            raise ExportError("layout failed")
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(b"stub")
        return destination


class RecordingSink:

    def __init__(self, result=True):
        self.result = result
        self.shared = []

    async def share(self, path, dialog_title, mime_type):
        self.shared.append((path, dialog_title, mime_type))
        return self.result


class TestRows:

    def test_fluid_rows(self):
        rows = fluid_rows([FluidIntakeEntry(id=1, amount="350", timestamp="2024-01-01T08:30:00")])
        assert rows == [("2024-01-01", "08:30:00", "350 ml")]

    def test_fluid_rows_convert_utc_to_local_time(self):
        rows = fluid_rows([FluidIntakeEntry(id=1, amount="200", timestamp="2024-01-01T08:30:00Z")])

        local = datetime(2024, 1, 1, 8, 30, tzinfo=timezone.utc).astimezone()
        assert rows == [(local.strftime("%Y-%m-%d"), local.strftime("%H:%M:%S"), "200 ml")]

    def test_mood_rows_carry_the_label(self):
        rows = mood_rows([MoodLogEntry(id=1, date="2024-01-01", mood="😊", comment="ok")])
        assert rows == [("2024-01-01", "😊 Happy", "ok")]

    def test_unknown_mood_passes_through(self):
        assert mood_text("meh") == "meh"


class TestExportService:

    async def test_fluid_report(self, factory, store):
        await store.insert(Category.FLUID_INTAKE,
                           FluidIntakeEntry(amount="100", timestamp="2024-01-01T08:00:00"))
        await store.insert(Category.FLUID_INTAKE,
                           FluidIntakeEntry(amount="200", timestamp="2024-01-02T09:15:00"))
        renderer, sink = RecordingRenderer(), RecordingSink()

        result = await factory.create_export_service(sink, renderer=renderer).export_fluid()

        assert result.ok is True
        assert result.row_count == 2
        title, columns, rows, destination, accent = renderer.calls[0]
        assert title == "Fluid Intake Report"
        assert columns == FLUID_REPORT.columns
        assert rows[0] == ("2024-01-02", "09:15:00", "200 ml")
        assert destination.name == "fluid_intake_report.pdf"
        assert accent == "#2196F3"
        assert sink.shared == [(destination, "Share Fluid Intake Report", "application/pdf")]

    async def test_mood_report_via_category(self, factory, store):
        await store.insert(Category.MOOD_ENTRY, MoodLogEntry(date="2024-01-01", mood="😐"))
        renderer = RecordingRenderer()

        result = await factory.create_export_service(
            RecordingSink(), renderer=renderer,
        ).export(Category.MOOD_ENTRY)

        assert result.ok is True
        assert renderer.calls[0][0] == MOOD_REPORT.title
        assert result.path.name == "mood_tracker_report.pdf"

    async def test_empty_report_still_renders(self, factory):
        renderer = RecordingRenderer()

        result = await factory.create_export_service(RecordingSink(), renderer=renderer).export_mood()

        assert result.ok is True
        assert result.row_count == 0

    async def test_render_failure_gives_generic_alert(self, factory):
        sink = RecordingSink()

        result = await factory.create_export_service(
            sink, renderer=RecordingRenderer(fail=True),
        ).export_fluid()

        assert result.ok is False
        assert result.message == EXPORT_FAILED_ALERT
        assert sink.shared == []

    async def test_share_failure(self, factory):
        result = await factory.create_export_service(
            RecordingSink(result=False), renderer=RecordingRenderer(),
        ).export_fluid()

        assert result.ok is False
        assert result.message == EXPORT_FAILED_ALERT

    async def test_profiles_have_no_report(self, factory):
        with pytest.raises(ValueError):
            await factory.create_export_service(RecordingSink()).export(Category.PROFILE)


class TestReportLabRenderer:

    def test_writes_a_pdf(self, tmp_path):
        target = tmp_path / "out" / "report.pdf"

        path = ReportLabRenderer().render(
            "Fluid Intake Report",
            ("Date", "Time", "Amount"),
            [("2024-01-01", "08:30:00", "350 ml"), ("2024-01-01", "12:00:00", "200 ml")],
            target,
        )

        assert path == target
        assert target.read_bytes().startswith(b"%PDF")

    def test_mood_report_text_names_each_mood(self, tmp_path):
        target = tmp_path / "mood.pdf"
        rows = mood_rows([
            MoodLogEntry(id=1, date="2024-01-01", mood="😊", comment="ok"),
            MoodLogEntry(id=2, date="2024-01-02", mood="😢", comment=""),
        ])

        ReportLabRenderer().render("Mood Report", MOOD_REPORT.columns, rows, target)

        text = "".join(page.extract_text() or "" for page in PdfReader(str(target)).pages)
        assert "Happy" in text
        assert "Sad" in text
        assert "■" not in text

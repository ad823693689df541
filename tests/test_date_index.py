"""
Unit tests for calendar presence markers.
"""
from application.services.date_index import build_date_index, overlay_selection
from domain.entities import FluidIntakeEntry, MoodLogEntry
from domain.models import DateMarker


class TestDateIndex:

    def test_one_marker_per_date(self):
        entries = [
            FluidIntakeEntry(id=1, amount="100", timestamp="2024-01-01T08:00:00"),
            FluidIntakeEntry(id=2, amount="200", timestamp="2024-01-01T09:00:00"),
            FluidIntakeEntry(id=3, amount="300", timestamp="2024-01-02T09:00:00"),
        ]

        index = build_date_index(entries, "blue")

        assert set(index) == {"2024-01-01", "2024-01-02"}
        assert index["2024-01-01"] == DateMarker(marked=True, dot_color="blue")

    def test_mood_entries_use_their_date(self):
        index = build_date_index(
            [MoodLogEntry(id=1, date="2024-01-01", mood="😊", comment="ok")], "#FFA500",
        )

        assert index["2024-01-01"].marked is True
        assert index["2024-01-01"].dot_color == "#FFA500"

    def test_selection_keeps_presence_marker(self):
        index = {"2024-01-01": DateMarker(marked=True, dot_color="blue")}

        marks = overlay_selection(index, "2024-01-01", "blue")

        marker = marks["2024-01-01"]
        assert marker.marked and marker.selected
        assert marker.dot_color == "blue"
        assert marker.selected_color == "blue"

    def test_selection_on_empty_day(self):
        marks = overlay_selection({}, "2024-01-05", "#FFA500")

        assert marks["2024-01-05"] == DateMarker(selected=True, selected_color="#FFA500")

    def test_overlay_does_not_touch_the_index(self):
        index = {"2024-01-01": DateMarker(marked=True, dot_color="blue")}

        overlay_selection(index, "2024-01-01", "blue")

        assert index["2024-01-01"].selected is False

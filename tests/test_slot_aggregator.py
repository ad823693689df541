"""
Unit tests for the 2-hour chart aggregation.

Usage:
    pytest tests/test_slot_aggregator.py -v
"""
import pytest

from application.services.slot_aggregator import (
    aggregate_slots,
    entry_hour,
    parse_amount,
    slot_index,
)
from domain.entities import FluidIntakeEntry
from domain.models import SLOT_LABELS, SlotState


def _entry(amount, clock, day="2024-01-01", entry_id=None):
    return FluidIntakeEntry(id=entry_id, amount=amount, timestamp=f"{day}T{clock}:00")


class TestAggregateSlots:
    """Bucketing a day's entries into six windows."""

    def test_single_morning_entry(self):
        series = aggregate_slots("2024-01-01", [_entry("350", "08:30")])

        assert series.values == (350.0, 0.0, 0.0, 0.0, 0.0, 0.0)
        assert series.state is SlotState.VALUE
        assert series.entry_count == 1

    def test_two_entries_in_the_first_window(self):
        series = aggregate_slots("2024-01-01", [
            _entry("250", "09:15"),
            _entry("100", "09:45"),
        ])

        assert series.values == (350.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    def test_entries_in_same_slot_are_summed(self):
        series = aggregate_slots("2024-01-01", [
            _entry("200", "12:00"),
            _entry("150", "13:59"),
            _entry("100", "18:10"),
        ])

        assert series.values == (0.0, 0.0, 350.0, 0.0, 0.0, 100.0)
        assert series.total == 450.0

    def test_slot_boundaries(self):
        series = aggregate_slots("2024-01-01", [
            _entry("1", "09:59"),
            _entry("2", "10:00"),
            _entry("4", "19:59"),
        ])

        assert series.values == (1.0, 2.0, 0.0, 0.0, 0.0, 4.0)

    def test_hours_outside_the_window_are_counted_but_not_charted(self):
        series = aggregate_slots("2024-01-01", [
            _entry("500", "07:59"),
            _entry("300", "20:00"),
        ])

        assert series.values == (0.0,) * 6
        assert series.entry_count == 2
        assert series.state is SlotState.ZERO

    def test_no_entries_is_absent(self):
        series = aggregate_slots("2024-01-01", [])

        assert series.state is SlotState.ABSENT
        assert series.values == (0.0,) * 6

    def test_other_dates_are_ignored(self):
        series = aggregate_slots("2024-01-01", [
            _entry("350", "08:30"),
            _entry("999", "08:30", day="2024-01-02"),
        ])

        assert series.values[0] == 350.0
        assert series.entry_count == 1

    def test_unreadable_amount_counts_as_zero(self):
        series = aggregate_slots("2024-01-01", [
            _entry("abc", "08:00"),
            _entry("250ml", "08:15"),
        ])

        assert series.values[0] == 250.0
        assert series.entry_count == 2

    def test_labels_follow_slot_order(self):
        series = aggregate_slots("2024-01-01", [_entry("50", "16:00")])

        assert [label for label, _ in series.labelled()] == list(SLOT_LABELS)
        assert dict(series.labelled())["4PM"] == 50.0


class TestParseAmount:

    @pytest.mark.parametrize("raw, expected", [
        ("350", 350.0),
        ("  12.5", 12.5),
        ("250ml", 250.0),
        (".5", 0.5),
        ("abc", 0.0),
        ("", 0.0),
        (None, 0.0),
        ("1e400", 0.0),
        (float("nan"), 0.0),
        (200, 200.0),
    ])
    def test_lenient_parsing(self, raw, expected):
        assert parse_amount(raw) == expected


class TestHours:

    def test_slot_index_edges(self):
        assert slot_index(7) is None
        assert slot_index(8) == 0
        assert slot_index(19) == 5
        assert slot_index(20) is None

    def test_entry_hour_reads_local_timestamps(self):
        assert entry_hour("2024-01-01T14:05:00") == 14

    def test_entry_hour_rejects_garbage(self):
        assert entry_hour("not a timestamp") is None

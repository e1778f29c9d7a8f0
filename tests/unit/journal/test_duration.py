"""Tests for trade duration calculation and formatting."""

import pytest
from datetime import datetime, timedelta

from edge_journal.journal.duration import calculate_duration, format_duration


class TestCalculateDuration:
    def test_no_exit_is_zero(self, base_time):
        assert calculate_duration(base_time) == 0.0
        assert calculate_duration(base_time, None) == 0.0

    def test_minutes_between(self, base_time):
        assert calculate_duration(base_time, base_time + timedelta(minutes=90)) == 90.0

    def test_fractional_minutes(self, base_time):
        exit_ = base_time + timedelta(seconds=150)
        assert calculate_duration(base_time, exit_) == pytest.approx(2.5)

    def test_exit_before_entry_clamps_to_zero(self, base_time):
        assert calculate_duration(base_time, base_time - timedelta(hours=1)) == 0.0

    def test_iso_strings(self):
        assert calculate_duration("2025-12-02T09:00:00", "2025-12-02T10:15:00") == 75.0

    def test_zulu_entry_naive_exit(self):
        assert calculate_duration("2025-12-02T09:44:00.000Z", "2025-12-02T11:49:00") == 125.0

    def test_naive_entry_offset_exit(self):
        assert calculate_duration("2025-12-02T09:00:00", "2025-12-02T09:30:00+02:00") == 30.0

    def test_both_aware_different_offsets(self):
        assert calculate_duration("2025-12-02T09:00:00Z", "2025-12-02T11:00:00+01:00") == 60.0


class TestFormatDuration:
    @pytest.mark.parametrize(
        "minutes, expected",
        [
            (0, "-"),
            (45, "45m"),
            (59.4, "59m"),
            (60, "1h 0m"),
            (125, "2h 5m"),
            (125.6, "2h 6m"),
            (1441, "24h 1m"),
        ],
    )
    def test_format(self, minutes, expected):
        assert format_duration(minutes) == expected

    def test_minutes_within_hour_wrap_from_rounded_total(self):
        # round(119.6) = 120 -> 0 minutes past the first hour
        assert format_duration(119.6) == "1h 0m"

    def test_half_minute_rounds_up(self):
        assert format_duration(2.5) == "3m"

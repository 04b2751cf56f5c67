"""
Tests for working-day calendar resolution.
"""
import numpy as np
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.data.calendar_days import (
    days_in_month,
    dump_working_days,
    parse_working_days,
    weekday_off_days,
    working_days_from_off_days,
    working_days_from_on_days,
)
from proanaliz.data.models import ExplicitDays, LegacyDefault, LEGACY_DEFAULT


class TestDaysInMonth:
    """Tests for month lengths."""

    def test_february_common_year(self):
        assert days_in_month(2025, "Şubat") == 28

    def test_february_leap_year(self):
        assert days_in_month(2024, "Şubat") == 29

    def test_accepts_month_number(self):
        assert days_in_month(2025, 12) == 31


class TestWorkingDaysFromMarks:
    """Tests for building the calendar from off or on days."""

    def test_off_days_are_removed(self):
        """April 2025 minus 8 off days leaves 22."""
        result = working_days_from_off_days(2025, "Nisan", [5, 6, 12, 13, 19, 20, 26, 27])

        assert result.count == 22
        assert 5 not in result.days
        assert result.days[0] == 1

    def test_off_days_outside_month_ignored(self):
        result = working_days_from_off_days(2025, "Şubat", [29, 30, 31])

        assert result.count == 28

    def test_on_days_clipped_to_month(self):
        """Day 30 does not exist in February."""
        result = working_days_from_on_days(2025, "Şubat", [3, 1, 2, 30])

        assert result.days == (1, 2, 3)

    def test_on_days_empty_is_zero_days(self):
        result = working_days_from_on_days(2025, "Ocak", [])

        assert isinstance(result, ExplicitDays)
        assert result.count == 0

    def test_weekend_default(self):
        """June 2025 starts on a Sunday: weekends are 1, 7, 8, ..."""
        off = weekday_off_days(2025, "Haziran")

        assert off[:3] == [1, 7, 8]
        assert len(off) == 9


class TestParseWorkingDays:
    """Tests for reading stored calendars."""

    @pytest.mark.parametrize("raw", [None, "", "   ", np.nan, "not json"])
    def test_missing_values_are_legacy(self, raw):
        assert isinstance(parse_working_days(raw), LegacyDefault)

    def test_legacy_counts_thirty_days(self):
        assert parse_working_days(None).count == 30

    def test_json_list(self):
        result = parse_working_days("[3, 1, 2, 2]")

        assert result == ExplicitDays((1, 2, 3))

    def test_explicit_empty_list_is_not_legacy(self):
        """An explicit zero-day calendar is distinct from a missing one."""
        result = parse_working_days("[]")

        assert isinstance(result, ExplicitDays)
        assert result.count == 0

    def test_dump_legacy_is_blank(self):
        assert dump_working_days(LEGACY_DEFAULT) == ""

    def test_dump_explicit(self):
        assert dump_working_days(ExplicitDays((1, 2))) == "[1, 2]"

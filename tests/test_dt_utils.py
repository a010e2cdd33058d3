"""Tests for the date utilities.

Test Categories:
- Canonical date keys (format, parsing, coercion)
- Sunday-based weekday indices
- Week window (Sunday..Saturday)
- Display names
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from habitquest.utils.dt_utils import (
    day_abbrev,
    day_name,
    day_of_week,
    days_between,
    dt_coerce_date,
    dt_from_key,
    dt_to_key,
    week_dates,
    week_start,
)

# =============================================================================
# Test: Canonical keys
# =============================================================================


class TestDateKeys:
    """Tests for dt_to_key / dt_from_key / dt_coerce_date."""

    def test_key_is_zero_padded(self) -> None:
        """Month and day are always two digits."""
        assert dt_to_key(date(2026, 3, 5)) == "2026-03-05"

    def test_datetime_uses_its_own_calendar_day(self) -> None:
        """A late-evening local datetime keeps its local date (no UTC shift)."""
        late = datetime(2026, 1, 14, 23, 30, tzinfo=timezone(timedelta(hours=-8)))
        assert dt_to_key(late) == "2026-01-14"

    def test_parse_round_trip(self) -> None:
        """A key parses back to the same date."""
        assert dt_from_key("2026-01-14") == date(2026, 1, 14)

    @pytest.mark.parametrize("bad", ["", None, "2026-02-30", "yesterday", "14/01/2026"])
    def test_parse_rejects_malformed(self, bad: str | None) -> None:
        """Malformed keys yield None instead of raising."""
        assert dt_from_key(bad) is None

    def test_coerce_accepts_all_forms(self) -> None:
        """date, datetime and key all coerce to the same date."""
        expected = date(2026, 1, 14)
        assert dt_coerce_date(expected) == expected
        assert dt_coerce_date(datetime(2026, 1, 14, 12, 0)) == expected
        assert dt_coerce_date("2026-01-14") == expected

    def test_coerce_rejects_bad_key(self) -> None:
        """An unparsable key raises ValueError."""
        with pytest.raises(ValueError, match="Invalid date key"):
            dt_coerce_date("not-a-date")


# =============================================================================
# Test: Weekdays and weeks
# =============================================================================


class TestWeekArithmetic:
    """Tests for Sunday-based weekday and week helpers."""

    def test_sunday_is_zero_and_saturday_is_six(self) -> None:
        """Weekday indices run 0=Sunday..6=Saturday."""
        assert day_of_week(date(2026, 1, 11)) == 0
        assert day_of_week(date(2026, 1, 14)) == 3
        assert day_of_week(date(2026, 1, 17)) == 6

    def test_week_start_mid_week(self) -> None:
        """Wednesday's week starts on the preceding Sunday."""
        assert week_start(date(2026, 1, 14)) == date(2026, 1, 11)

    def test_week_start_on_sunday_is_same_day(self) -> None:
        """A Sunday starts its own week."""
        assert week_start(date(2026, 1, 11)) == date(2026, 1, 11)

    def test_week_start_on_saturday(self) -> None:
        """Saturday belongs to the week that started six days earlier."""
        assert week_start(date(2026, 1, 17)) == date(2026, 1, 11)

    def test_week_dates_cross_year_boundary(self) -> None:
        """The week of 2026-01-01 (Thursday) starts in December 2025."""
        days = week_dates(date(2026, 1, 1))
        assert days[0] == date(2025, 12, 28)
        assert days[-1] == date(2026, 1, 3)
        assert len(days) == 7

    def test_days_between_is_absolute(self) -> None:
        """Order of arguments does not matter."""
        assert days_between(date(2026, 1, 1), date(2026, 1, 14)) == 13
        assert days_between(date(2026, 1, 14), date(2026, 1, 1)) == 13


class TestDayNames:
    """Tests for weekday display names."""

    def test_full_and_short_names(self) -> None:
        """Index 1 is Monday / Mon."""
        assert day_name(1) == "Monday"
        assert day_abbrev(1) == "Mon"

    def test_index_wraps(self) -> None:
        """Index 7 wraps to Sunday."""
        assert day_name(7) == "Sunday"

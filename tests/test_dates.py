"""Tests for spendlog.dates pure functions."""

from datetime import date, datetime, timezone

import pytest

from spendlog.dates import format_display_date, in_month, is_after, month_range, parse_date
from spendlog.errors import InvalidDate


class TestMonthRange:
    """Tests for month_range."""

    def test_january_range(self) -> None:
        """Should calculate range for January."""
        since, until, label = month_range("2025-01")

        assert since == "2025-01-01"
        assert until == "2025-02-01"
        assert label == "January 2025"

    def test_december_range_crosses_year(self) -> None:
        """Should handle December (crosses year boundary)."""
        since, until, label = month_range("2025-12")

        assert since == "2025-12-01"
        assert until == "2026-01-01"
        assert label == "December 2025"

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        since, until, _ = month_range("2024-02")

        assert since == "2024-02-01"
        assert until == "2024-03-01"

    def test_invalid_month_number_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month number."""
        with pytest.raises(ValueError):
            month_range("2025-13")


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_date(self) -> None:
        """Should read ISO dates directly."""
        assert parse_date("2024-01-05") == date(2024, 1, 5)

    def test_strips_whitespace(self) -> None:
        """Should ignore surrounding whitespace."""
        assert parse_date("  2024-01-05 ") == date(2024, 1, 5)

    def test_day_first_slashes(self) -> None:
        """Should read DD/MM/YYYY with the day first."""
        assert parse_date("05/01/2024") == date(2024, 1, 5)

    def test_month_name(self) -> None:
        """Should read dates with a month name."""
        assert parse_date("5 Jan 2024") == date(2024, 1, 5)

    def test_garbage_raises_invalid_date(self) -> None:
        """Should raise InvalidDate for text that is not a date."""
        with pytest.raises(InvalidDate):
            parse_date("not a date")

    def test_empty_raises_invalid_date(self) -> None:
        """Should raise InvalidDate for empty text."""
        with pytest.raises(InvalidDate):
            parse_date("   ")

    def test_invalid_date_is_a_value_error(self) -> None:
        """Should be catchable as ValueError."""
        with pytest.raises(ValueError):
            parse_date("not a date")


class TestIsAfter:
    """Tests for is_after."""

    def test_next_day_is_after(self) -> None:
        """Should be True for a later date."""
        assert is_after(date(2024, 1, 2), date(2024, 1, 1))

    def test_same_day_is_not_after(self) -> None:
        """Should be False for the same date."""
        assert not is_after(date(2024, 1, 1), date(2024, 1, 1))

    def test_time_of_day_is_ignored(self) -> None:
        """Should compare datetimes by date only."""
        late = datetime(2024, 1, 1, 23, 59, tzinfo=timezone.utc)
        assert not is_after(late, date(2024, 1, 1))
        assert not is_after(date(2024, 1, 1), datetime(2024, 1, 1, 0, 0))


class TestInMonth:
    """Tests for in_month."""

    def test_first_and_last_day_are_in_month(self) -> None:
        """Should include both month boundaries."""
        assert in_month(date(2024, 2, 1), 2024, 2)
        assert in_month(date(2024, 2, 29), 2024, 2)

    def test_adjacent_days_are_outside(self) -> None:
        """Should exclude days in neighbouring months."""
        assert not in_month(date(2024, 1, 31), 2024, 2)
        assert not in_month(date(2024, 3, 1), 2024, 2)

    def test_same_month_other_year(self) -> None:
        """Should require the year to match too."""
        assert not in_month(date(2023, 2, 10), 2024, 2)


class TestFormatDisplayDate:
    """Tests for format_display_date."""

    def test_format(self) -> None:
        """Should format as short month, day and year."""
        assert format_display_date(date(2024, 1, 5)) == "Jan 5, 2024"

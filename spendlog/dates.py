"""Date utilities for spendlog.

Every comparison here works on calendar dates only. Datetimes are truncated
to their date before comparing so time-of-day never moves a day boundary.
"""

from datetime import date, datetime, timedelta

import pandas as pd

from spendlog.errors import InvalidDate

ISO_FORMAT = "%Y-%m-%d"


def today() -> date:
    """Return the current local calendar date."""
    return date.today()


def as_date(value: date | datetime) -> date:
    """Truncate a datetime to its calendar date; pass dates through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_date(text: str) -> date:
    """Parse user-supplied date text.

    ISO dates (YYYY-MM-DD) are read directly. Anything else goes through
    pandas with day-first disambiguation, so 05/01/2024 is 5 January.

    Args:
        text: Date text, e.g. "2024-01-05", "05/01/2024" or "5 Jan 2024".

    Returns:
        The parsed calendar date.

    Raises:
        InvalidDate: If the text cannot be parsed.
    """
    cleaned = text.strip()
    if not cleaned:
        raise InvalidDate(text)

    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        pass

    try:
        parsed = pd.to_datetime(cleaned, dayfirst=True)
    except (ValueError, TypeError, OverflowError) as e:
        raise InvalidDate(text) from e

    if pd.isna(parsed):
        raise InvalidDate(text)
    return parsed.date()


def is_after(day: date | datetime, reference: date | datetime) -> bool:
    """Return True if day falls strictly after reference, by calendar date."""
    return as_date(day) > as_date(reference)


def in_month(day: date | datetime, year: int, month: int) -> bool:
    """Return True if day falls within the given calendar year and month."""
    d = as_date(day)
    return d.year == year and d.month == month


def month_range(month: str) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime(ISO_FORMAT)
    label = dt.strftime("%B %Y")
    return since, until, label


def format_display_date(day: date) -> str:
    """Format a date for list display (e.g., "Jan 5, 2024")."""
    return f"{day.strftime('%b')} {day.day}, {day.year}"

# File: utils/dt_utils.py
"""Date utilities for HabitQuest.

Pure Python date functions. Every habit lookup goes through a canonical
"YYYY-MM-DD" key of the local calendar date; weekdays are indexed
0=Sunday..6=Saturday and weeks run Sunday to Saturday.

Functions:
    - dt_today_local: Get today's local date
    - dt_now_iso: Get current local datetime as ISO string
    - dt_to_key: Convert a date to its canonical key
    - dt_from_key: Parse a canonical key back into a date
    - dt_coerce_date: Accept a date, datetime or key and return a date
    - day_of_week: Sunday-based weekday index
    - week_start: Sunday on or before a date
    - week_dates: The seven dates of a date's week
    - day_name / day_abbrev: Weekday display names
    - days_between: Absolute distance in days
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
import logging

# Third-party date utilities
from dateutil.relativedelta import SU, relativedelta

_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# These mirror const.py values but are defined locally for purity.
# ==============================================================================

DATE_KEY_FORMAT = "%Y-%m-%d"
DAYS_PER_WEEK = 7
WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_today_local() -> date:
    """Return today's local calendar date.

    Example:
        datetime.date(2026, 10, 18)
    """
    return datetime.now().astimezone().date()


def dt_now_iso() -> str:
    """Return the current local datetime as an ISO 8601 string.

    Example:
        "2026-10-18T14:30:00.123456+02:00"
    """
    return datetime.now().astimezone().isoformat()


# ==============================================================================
# Canonical Date Keys
# ==============================================================================


def dt_to_key(value: date | datetime) -> str:
    """Return the canonical ledger key for a date.

    Datetimes are reduced to their own calendar date; no timezone shift is
    applied, so a local datetime maps to its local day.
    """
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(DATE_KEY_FORMAT)


def dt_from_key(key: str | None) -> date | None:
    """Parse a canonical "YYYY-MM-DD" key.

    Returns:
        datetime.date, or None when the key is not a well-formed calendar date.
    """
    if not key or not isinstance(key, str):
        return None
    try:
        return datetime.strptime(key, DATE_KEY_FORMAT).date()
    except ValueError:
        _LOGGER.debug("Ignoring malformed date key: %s", key)
        return None


def dt_coerce_date(value: date | datetime | str) -> date:
    """Normalize a date, datetime or canonical key to a `datetime.date`.

    Raises:
        ValueError: If a string is not a valid canonical key.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = dt_from_key(value)
    if parsed is None:
        raise ValueError(f"Invalid date key: {value!r}")
    return parsed


# ==============================================================================
# Weekday & Week Arithmetic
# ==============================================================================


def day_of_week(value: date) -> int:
    """Return the weekday index with 0=Sunday..6=Saturday."""
    return value.isoweekday() % DAYS_PER_WEEK


def week_start(value: date) -> date:
    """Return the Sunday on or before the given date."""
    return value + relativedelta(weekday=SU(-1))


def week_dates(value: date) -> list[date]:
    """Return the seven dates (Sunday..Saturday) of the week containing value."""
    start = week_start(value)
    return [start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def day_name(index: int) -> str:
    """Return the full weekday name for a Sunday-based index."""
    return WEEKDAY_NAMES[index % DAYS_PER_WEEK]


def day_abbrev(index: int) -> str:
    """Return the three-letter weekday name for a Sunday-based index."""
    return day_name(index)[:3]


def days_between(first: date, second: date) -> int:
    """Return the absolute number of days between two dates."""
    return abs((first - second).days)

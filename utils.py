"""Calendar utilities for sprint calculations.

All week arithmetic follows ISO 8601: weeks start on Monday, weekdays are
numbered 1 (Monday) to 7 (Sunday) and week 1 of a week-year is the week
containing that year's first Thursday.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from exceptions import ArithmeticOverflowError, InvalidConfigurationError


WEEKDAY_NAMES = [
    (1, "Mon"),
    (2, "Tue"),
    (3, "Wed"),
    (4, "Thu"),
    (5, "Fri"),
    (6, "Sat"),
    (7, "Sun"),
]

DEFAULT_WORKING_WEEKDAYS = frozenset({1, 2, 3, 4, 5})


def to_day(value: date | datetime) -> date:
    """Drop the time of day, keeping the caller's wall-clock date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def add_days(d: date, days: int) -> date:
    """Shift a date by whole days, raising ArithmeticOverflowError out of range."""
    try:
        return d + timedelta(days=days)
    except OverflowError as exc:
        raise ArithmeticOverflowError(f"adding {days} days to {d.isoformat()}", str(exc)) from exc


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Signed number of calendar days from start to end, ignoring time of day."""
    return (to_day(end) - to_day(start)).days


def iso_weekday(d: date | datetime) -> int:
    """Weekday of d with Monday=1 ... Sunday=7."""
    # date.weekday() is Monday=0
    return d.weekday() + 1


def iso_weekday_from_sunday_first(weekday: int) -> int:
    """Convert a Sunday=1 ... Saturday=7 weekday number to ISO numbering."""
    if not 1 <= weekday <= 7:
        raise InvalidConfigurationError("weekday", weekday, "must be between 1 and 7")
    return (weekday + 5) % 7 + 1


def snap_to_monday(d: date | datetime) -> date:
    """Return the Monday of the ISO week containing d."""
    day = to_day(d)
    return day - timedelta(days=iso_weekday(day) - 1)


def first_monday_of_iso_week1(year: int) -> date:
    """Get the Monday that starts ISO week 1 of the given ISO week-year."""
    # January 4th always falls in ISO week 1
    return snap_to_monday(date(year, 1, 4))


def first_monday_of_year(year: int) -> date:
    """Get the first Monday on or after January 1st (legacy epoch rule)."""
    jan1 = date(year, 1, 1)
    return jan1 + timedelta(days=(7 - jan1.weekday()) % 7)


def iso_week_number(d: date | datetime) -> int:
    return d.isocalendar()[1]


def iso_week_year(d: date | datetime) -> int:
    return d.isocalendar()[0]


def weekday_for_offset(start_iso_weekday: int, offset: int) -> int:
    """ISO weekday of the day `offset` days after a day with start_iso_weekday."""
    return (start_iso_weekday - 1 + offset) % 7 + 1


def _require_weekdays(weekdays: Iterable[int]) -> frozenset[int]:
    days = frozenset(weekdays)
    if not days:
        raise InvalidConfigurationError("working_weekdays", set(), "at least one working weekday is required")
    return days


def previous_working_day(d: date | datetime, weekdays: Iterable[int]) -> date:
    """Nearest working day strictly before d."""
    days = _require_weekdays(weekdays)
    current = to_day(d)
    for _ in range(7):
        current = add_days(current, -1)
        if iso_weekday(current) in days:
            return current
    raise InvalidConfigurationError("working_weekdays", set(days), "contains no ISO weekday between 1 and 7")


def next_working_day(d: date | datetime, weekdays: Iterable[int]) -> date:
    """Nearest working day strictly after d."""
    days = _require_weekdays(weekdays)
    current = to_day(d)
    for _ in range(7):
        current = add_days(current, 1)
        if iso_weekday(current) in days:
            return current
    raise InvalidConfigurationError("working_weekdays", set(days), "contains no ISO weekday between 1 and 7")

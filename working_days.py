"""Working-day resolution inside a sprint.

Offsets are calendar days counted from the sprint's first day (offset 0).
Both functions take the ISO weekday of that first day, so they work for any
start day even though sprints themselves always start on a Monday.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache

from utils import weekday_for_offset


@lru_cache(maxsize=64)
def _week_prefix(start_iso_weekday: int, weekdays: frozenset[int]) -> tuple[int, ...]:
    """Cumulative working-day counts for offsets 0..6 of a week starting on start_iso_weekday."""
    counts = []
    running = 0
    for offset in range(7):
        if weekday_for_offset(start_iso_weekday, offset) in weekdays:
            running += 1
        counts.append(running)
    return tuple(counts)


def last_working_day_offset(calendar_days_in_sprint: int, start_iso_weekday: int, weekdays: Iterable[int]) -> int:
    """Offset of the last working day in a sprint of calendar_days_in_sprint days.

    Falls back to the final calendar day when no offset is a working day.
    """
    days = frozenset(weekdays)
    for offset in range(calendar_days_in_sprint - 1, -1, -1):
        if weekday_for_offset(start_iso_weekday, offset) in days:
            return offset
    return calendar_days_in_sprint - 1


def working_day_index(calendar_day_offset: int, start_iso_weekday: int, weekdays: Iterable[int]) -> int:
    """Number of working days in offsets [0, calendar_day_offset], inclusive.

    On a non-working day this is the count of working days already completed,
    so it can be 0 before the sprint's first working day.
    """
    if calendar_day_offset < 0:
        return 0
    days = frozenset(weekdays)
    prefix = _week_prefix(start_iso_weekday, days)
    full_weeks, remainder = divmod(calendar_day_offset, 7)
    return full_weeks * prefix[6] + prefix[remainder]

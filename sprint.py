"""Sprint calculator: map a moment in time onto the sprint calendar."""

from __future__ import annotations

from datetime import date, datetime
from functools import lru_cache

from models import Configuration, SprintDescriptor
from utils import add_days, days_between, iso_weekday, to_day
from working_days import last_working_day_offset, working_day_index


def resolve(now: date | datetime, config: Configuration) -> SprintDescriptor:
    """Resolve the sprint containing `now` under `config`.

    `now` is truncated to its date first. Any day before the epoch is
    reported as sprint 1, working day 1, with no working days elapsed.

    Raises ArithmeticOverflowError when the sprint containing `now` would
    end after date.max, the one failure left once `config` is valid.
    """
    return _resolve_day(to_day(now), config)


@lru_cache(maxsize=256)
def _resolve_day(today: date, config: Configuration) -> SprintDescriptor:
    delta = days_between(config.epoch, today)
    before_epoch = delta < 0
    days_since_epoch = max(0, delta)
    sprint_days = config.calendar_days_per_sprint
    sprint_index, day_offset = divmod(days_since_epoch, sprint_days)

    sprint_start = add_days(config.epoch, sprint_index * sprint_days)
    start_weekday = iso_weekday(sprint_start)
    sprint_end = add_days(
        sprint_start,
        last_working_day_offset(sprint_days, start_weekday, config.working_weekdays),
    )

    total = config.total_working_days
    elapsed = 0 if before_epoch else working_day_index(day_offset, start_weekday, config.working_weekdays)

    return SprintDescriptor(
        index=sprint_index + 1,
        start_date=sprint_start,
        end_date=sprint_end,
        current_working_day=min(max(elapsed, 1), total),
        total_working_days=total,
        is_non_working_day=iso_weekday(today) not in config.working_weekdays,
        elapsed_working_days=elapsed,
        sprint_length_weeks=config.sprint_length_weeks,
        working_weekdays=config.working_weekdays,
    )


def sprint_start_for_index(index: int, config: Configuration) -> date:
    """Monday that starts the 1-based sprint `index`."""
    return add_days(config.epoch, (max(index, 1) - 1) * config.calendar_days_per_sprint)

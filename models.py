from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

from exceptions import ArithmeticOverflowError, InvalidConfigurationError
from utils import (
    DEFAULT_WORKING_WEEKDAYS,
    add_days,
    first_monday_of_iso_week1,
    first_monday_of_year,
    iso_week_number,
    iso_week_year,
    snap_to_monday,
    to_day,
)


DEFAULT_SPRINT_LENGTH_WEEKS = 2
REFRESH_INTERVALS = (15, 30, 60)
DEFAULT_REFRESH_MINUTES = 60


@dataclass(frozen=True)
class Configuration:
    """Sprint calendar rules. Validated and normalized on construction."""

    epoch: date
    sprint_length_weeks: int = DEFAULT_SPRINT_LENGTH_WEEKS
    working_weekdays: frozenset[int] = DEFAULT_WORKING_WEEKDAYS

    def __post_init__(self) -> None:
        weeks = self.sprint_length_weeks
        if isinstance(weeks, bool) or not isinstance(weeks, int):
            raise InvalidConfigurationError("sprint_length_weeks", weeks, "must be an integer")
        if weeks < 1:
            raise InvalidConfigurationError("sprint_length_weeks", weeks, "must be at least 1")
        if weeks * 7 > timedelta.max.days:
            raise ArithmeticOverflowError("sizing a sprint", f"{weeks} weeks exceeds the supported day range")

        weekdays = frozenset(self.working_weekdays)
        if not weekdays:
            raise InvalidConfigurationError("working_weekdays", set(), "at least one working weekday is required")
        for day in weekdays:
            if isinstance(day, bool) or not isinstance(day, int) or not 1 <= day <= 7:
                raise InvalidConfigurationError("working_weekdays", day, "ISO weekdays are 1 (Mon) to 7 (Sun)")

        if not isinstance(self.epoch, date):
            raise InvalidConfigurationError("epoch", self.epoch, "must be a date")
        epoch = snap_to_monday(self.epoch)
        # The first sprint must fit in the date range
        add_days(epoch, weeks * 7 - 1)

        object.__setattr__(self, "epoch", epoch)
        object.__setattr__(self, "working_weekdays", weekdays)

    @property
    def calendar_days_per_sprint(self) -> int:
        return self.sprint_length_weeks * 7

    @property
    def total_working_days(self) -> int:
        return self.sprint_length_weeks * len(self.working_weekdays)

    @classmethod
    def default(cls, today: date | datetime) -> Configuration:
        """Two-week Mon-Fri sprints from ISO week 1 of today's ISO week-year."""
        year = iso_week_year(to_day(today))
        return cls(epoch=first_monday_of_iso_week1(year))

    @classmethod
    def legacy(cls, year: int) -> Configuration:
        """Two-week Mon-Fri sprints from the first Monday on or after January 1st."""
        return cls(epoch=first_monday_of_year(year))


@dataclass(frozen=True)
class SprintDescriptor:
    """Where a single day falls in the sprint calendar."""

    index: int
    start_date: date
    end_date: date
    current_working_day: int
    total_working_days: int
    is_non_working_day: bool
    elapsed_working_days: int
    sprint_length_weeks: int
    working_weekdays: frozenset[int]

    @property
    def total_weeks(self) -> int:
        return self.sprint_length_weeks

    @property
    def week_in_sprint(self) -> int:
        """1-based sprint week of the current working day."""
        return (self.current_working_day - 1) // len(self.working_weekdays) + 1

    @property
    def progress(self) -> float:
        return self.current_working_day / self.total_working_days

    @property
    def remaining_working_days(self) -> int:
        return self.total_working_days - self.current_working_day

    @property
    def start_week(self) -> int:
        return iso_week_number(self.start_date)

    @property
    def end_week(self) -> int:
        return iso_week_number(self.end_date)

    @property
    def label(self) -> str:
        """ISO year and calendar-week span, e.g. '2026 CW02–CW03'."""
        return f"{iso_week_year(self.start_date)} CW{self.start_week:02d}–CW{self.end_week:02d}"


class NonWorkingDisplay(str, Enum):
    """How the day counter is shown on a non-working day."""

    SHOW_LABEL = "show-label"
    SHOW_PREVIOUS = "show-previous"
    SHOW_NEXT = "show-next"


@dataclass(frozen=True)
class DisplayOptions:
    show_emoji: bool = True
    show_sprint_number: bool = True
    show_day_count: bool = True
    non_working_display: NonWorkingDisplay = NonWorkingDisplay.SHOW_LABEL
    date_format: str = "%d.%m."
    sprint_name: str = "Sprint"


@dataclass
class Settings:
    configuration: Configuration
    display: DisplayOptions = field(default_factory=DisplayOptions)
    refresh_minutes: int = DEFAULT_REFRESH_MINUTES

    def __post_init__(self) -> None:
        if self.refresh_minutes not in REFRESH_INTERVALS:
            raise InvalidConfigurationError(
                "refresh_minutes", self.refresh_minutes, f"must be one of {', '.join(map(str, REFRESH_INTERVALS))}"
            )

    @classmethod
    def defaults(cls, today: date | datetime) -> Settings:
        return cls(configuration=Configuration.default(today))

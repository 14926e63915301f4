"""Text rendering for sprint descriptors.

Every function here is pure: a descriptor and display options in, strings out.
"""

from __future__ import annotations

import math
from datetime import date

from models import DisplayOptions, NonWorkingDisplay, SprintDescriptor


PROGRESS_WIDTH = 10
FILLED_GLYPH = "▓"
EMPTY_GLYPH = "░"

# Absorbs float noise such as 0.29 * 100 == 28.999999999999996
_EPSILON = 1e-9


def format_date(d: date, fmt: str = "%d.%m.") -> str:
    return d.strftime(fmt)


def progress_bar(fraction: float, width: int = PROGRESS_WIDTH) -> str:
    """Fixed-width block bar, e.g. '▓▓▓░░░░░░░' for 0.3."""
    filled = min(max(math.floor(fraction * width + _EPSILON), 0), width)
    return FILLED_GLYPH * filled + EMPTY_GLYPH * (width - filled)


def progress_percent(fraction: float) -> int:
    return min(max(math.floor(fraction * 100 + _EPSILON), 0), 100)


def display_position(descriptor: SprintDescriptor, mode: NonWorkingDisplay) -> tuple[int, int]:
    """Sprint number and working day to show for the descriptor's day.

    On working days, and in SHOW_LABEL mode, this is the descriptor's own
    position. On a non-working day SHOW_PREVIOUS points at the last completed
    working day and SHOW_NEXT at the upcoming one, which may sit in the
    neighbouring sprint.
    """
    d = descriptor
    if not d.is_non_working_day or mode is NonWorkingDisplay.SHOW_LABEL:
        return d.index, d.current_working_day

    if mode is NonWorkingDisplay.SHOW_PREVIOUS:
        if d.elapsed_working_days == 0:
            if d.index > 1:
                return d.index - 1, d.total_working_days
            return 1, 1
        return d.index, d.current_working_day

    if d.elapsed_working_days >= d.total_working_days:
        return d.index + 1, 1
    return d.index, d.elapsed_working_days + 1


def _shows_free_day(descriptor: SprintDescriptor, options: DisplayOptions) -> bool:
    return descriptor.is_non_working_day and options.non_working_display is NonWorkingDisplay.SHOW_LABEL


def _decorate(emoji: str, text: str, options: DisplayOptions) -> str:
    if options.show_emoji:
        return f"{emoji} {text}"
    return text


def status_text(descriptor: SprintDescriptor, options: DisplayOptions) -> str:
    """Short one-line status, e.g. '🏃 Sprint 3 · Day 4/10'."""
    number, day = display_position(descriptor, options.non_working_display)

    parts = []
    if options.show_sprint_number:
        parts.append(f"{options.sprint_name} {number}")
    if options.show_day_count:
        if _shows_free_day(descriptor, options):
            parts.append(_decorate("🎉", "Day off", options))
        else:
            parts.append(f"Day {day}/{descriptor.total_working_days}")

    text = " · ".join(parts) if parts else options.sprint_name
    return _decorate("🏃", text, options)


def remaining_text(remaining: int) -> str:
    if remaining == 1:
        return "1 working day left"
    return f"{remaining} working days left"


def date_range_text(descriptor: SprintDescriptor, options: DisplayOptions) -> str:
    start = format_date(descriptor.start_date, options.date_format)
    end = format_date(descriptor.end_date, options.date_format)
    return f"{start}–{end}"


def tooltip_text(descriptor: SprintDescriptor, options: DisplayOptions) -> str:
    """Multi-line tooltip: sprint and ISO label, date range, remaining days."""
    return "\n".join([
        f"{options.sprint_name} {descriptor.index} ({descriptor.label})",
        date_range_text(descriptor, options),
        remaining_text(descriptor.remaining_working_days),
    ])


def menu_lines(descriptor: SprintDescriptor, options: DisplayOptions) -> list[str]:
    """Detail lines for a menu or summary panel, header first."""
    d = descriptor
    number, day = display_position(d, options.non_working_display)

    if _shows_free_day(d, options):
        day_line = _decorate("🎉", "Day off", options)
    else:
        day_line = f"Day {day} of {d.total_working_days}"
        if number != d.index:
            day_line = f"{day_line} ({options.sprint_name} {number})"
        day_line = _decorate("⏱️", day_line, options)

    return [
        f"{options.sprint_name} {d.index}",
        _decorate("📅", f"CW {d.start_week} – CW {d.end_week}", options),
        _decorate("📆", date_range_text(d, options), options),
        _decorate("📊", f"Week {d.week_in_sprint} of {d.total_weeks}", options),
        day_line,
        _decorate("⏳", remaining_text(d.remaining_working_days), options),
        f"{progress_bar(d.progress)} {progress_percent(d.progress)}%",
    ]

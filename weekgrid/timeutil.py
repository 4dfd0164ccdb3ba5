"""
Time utilities.

Everything here is a pure function on "HH:MM" strings or minute offsets:
- parsing and formatting wall-clock times
- snapping a time onto the fixed grid lines of the weekly view
- half-open interval overlap (a slot ending at 10:00 does not clash
  with one starting at 10:00)
"""

from __future__ import annotations

import re
from typing import Union

from weekgrid.errors import InvalidTimeFormat


DAYS_OF_WEEK = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
SHORT_DAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# Default grid: 08:00 to 22:00 in 30 minute rows
DAY_START_MINUTE = 8 * 60
DAY_END_MINUTE = 22 * 60
GRID_STEP_MINUTES = 30

# seconds are accepted (database TIME columns) but ignored
_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)(?::[0-5]\d)?$")

TimeLike = Union[int, str]


def to_minutes(time: str) -> int:
    """
    Convert 'HH:MM' (24h) to minutes since midnight.
    Raises InvalidTimeFormat for anything else.
    """
    if not isinstance(time, str):
        raise InvalidTimeFormat(f"Invalid time format: {time!r}")
    match = _TIME_RE.match(time.strip())
    if not match:
        raise InvalidTimeFormat(f"Invalid time format: {time!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def is_valid_time(time: str) -> bool:
    try:
        to_minutes(time)
    except InvalidTimeFormat:
        return False
    return True


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight back to 'HH:MM'."""
    if not (0 <= minutes <= 24 * 60):
        raise ValueError(f"Minutes out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _as_minutes(value: TimeLike) -> int:
    if isinstance(value, int):
        return value
    return to_minutes(value)


def duration_minutes(start: TimeLike, end: TimeLike) -> int:
    return _as_minutes(end) - _as_minutes(start)


def intervals_overlap(a_start: TimeLike, a_end: TimeLike, b_start: TimeLike, b_end: TimeLike) -> bool:
    """
    Half-open overlap test: [a_start, a_end) and [b_start, b_end).
    Touching endpoints (end == start) is NOT an overlap.
    """
    return _as_minutes(a_start) < _as_minutes(b_end) and _as_minutes(b_start) < _as_minutes(a_end)


def overlap_minutes(a_start: TimeLike, a_end: TimeLike, b_start: TimeLike, b_end: TimeLike) -> int:
    """Length of the shared part of two intervals, 0 if they do not overlap."""
    start = max(_as_minutes(a_start), _as_minutes(b_start))
    end = min(_as_minutes(a_end), _as_minutes(b_end))
    return max(0, end - start)


def snap_minutes(
    minutes: int,
    start_minute: int = DAY_START_MINUTE,
    end_minute: int = DAY_END_MINUTE,
    step_minutes: int = GRID_STEP_MINUTES,
) -> int:
    """
    Snap a minute offset to the nearest grid line.

    Grid lines are start_minute, start_minute + step, ... up to end_minute.
    Ties go to the earlier line; values outside the range clamp to the
    first/last line.
    """
    if step_minutes <= 0:
        raise ValueError("step_minutes must be positive")
    last_line = start_minute + ((end_minute - start_minute) // step_minutes) * step_minutes
    if minutes <= start_minute:
        return start_minute
    if minutes >= last_line:
        return last_line

    lower = start_minute + ((minutes - start_minute) // step_minutes) * step_minutes
    upper = lower + step_minutes
    if minutes - lower <= upper - minutes:
        return lower
    return upper


def closest_grid_line(
    time: str,
    start_minute: int = DAY_START_MINUTE,
    end_minute: int = DAY_END_MINUTE,
    step_minutes: int = GRID_STEP_MINUTES,
) -> str:
    """
    Snap a 'HH:MM' time to the nearest grid line and return it as 'HH:MM'.

    >>> closest_grid_line("09:15")
    '09:00'
    >>> closest_grid_line("09:16")
    '09:30'
    """
    return minutes_to_time(snap_minutes(to_minutes(time), start_minute, end_minute, step_minutes))


def format_time(time: str) -> str:
    """'13:05' -> '1:05 PM'"""
    minutes = to_minutes(time)
    hours, mins = divmod(minutes, 60)
    period = "PM" if hours >= 12 else "AM"
    return f"{hours % 12 or 12}:{mins:02d} {period}"


def format_range(start: str, end: str) -> str:
    return f"{format_time(start)} - {format_time(end)}"


def format_day(day_of_week: int, short: bool = False) -> str:
    if isinstance(day_of_week, bool) or not isinstance(day_of_week, int) or not (0 <= day_of_week <= 6):
        raise ValueError(f"Day number must be between 0 and 6, got {day_of_week!r}")
    return SHORT_DAYS[day_of_week] if short else DAYS_OF_WEEK[day_of_week]


def day_number(name: str) -> int:
    """'Monday' / 'mon' -> 1"""
    needle = name.strip().lower()
    for names in (DAYS_OF_WEEK, SHORT_DAYS):
        for i, candidate in enumerate(names):
            if candidate.lower() == needle:
                return i
    raise ValueError(f"Invalid day name: {name!r}")

"""
Grid coordinate mapping.

Converts a slot's (day, start, end) into column/row coordinates on the
weekly grid. Columns are days (Monday first when weekends are hidden),
rows are fixed time steps between the grid start and end.

Mapping one slot never looks at other slots; side-by-side placement of
clashing slots is done afterwards in weekgrid.layout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from weekgrid.errors import InvalidTimeFormat, UnmappableSlot
from weekgrid.model import GridPlacement, TimeSlot
from weekgrid.timeutil import (
    DAY_END_MINUTE,
    DAY_START_MINUTE,
    GRID_STEP_MINUTES,
    format_day,
    snap_minutes,
    to_minutes,
)


WEEKDAYS = (1, 2, 3, 4, 5)
ALL_DAYS = (0, 1, 2, 3, 4, 5, 6)


@dataclass(frozen=True)
class GridConfig:
    show_weekends: bool = False
    grid_start_minute: int = DAY_START_MINUTE
    grid_end_minute: int = DAY_END_MINUTE
    grid_step_minutes: int = GRID_STEP_MINUTES

    def __post_init__(self) -> None:
        if self.grid_step_minutes <= 0:
            raise ValueError("grid_step_minutes must be positive")
        if not (0 <= self.grid_start_minute < self.grid_end_minute <= 24 * 60):
            raise ValueError(
                f"Invalid grid range: {self.grid_start_minute}..{self.grid_end_minute} minutes"
            )
        if (self.grid_end_minute - self.grid_start_minute) % self.grid_step_minutes:
            raise ValueError("Grid range must be a whole number of steps")

    @classmethod
    def from_times(
        cls, start: str = "08:00", end: str = "22:00", step: int = GRID_STEP_MINUTES, show_weekends: bool = False
    ) -> "GridConfig":
        """Build a config from 'HH:MM' bounds (as typed on the command line)."""
        return cls(
            show_weekends=show_weekends,
            grid_start_minute=to_minutes(start),
            grid_end_minute=to_minutes(end),
            grid_step_minutes=step,
        )

    @property
    def row_count(self) -> int:
        return (self.grid_end_minute - self.grid_start_minute) // self.grid_step_minutes

    @property
    def grid_lines(self) -> list[int]:
        return list(range(self.grid_start_minute, self.grid_end_minute + 1, self.grid_step_minutes))

    @property
    def visible_days(self) -> tuple[int, ...]:
        return ALL_DAYS if self.show_weekends else WEEKDAYS

    @property
    def column_count(self) -> int:
        return len(self.visible_days)

    def snap(self, minutes: int) -> int:
        return snap_minutes(minutes, self.grid_start_minute, self.grid_end_minute, self.grid_step_minutes)


DEFAULT_GRID = GridConfig()


def is_mappable(slot: TimeSlot, config: GridConfig = DEFAULT_GRID) -> bool:
    return slot.day_of_week in config.visible_days


def visible_slots(slots: Iterable[TimeSlot], config: GridConfig = DEFAULT_GRID) -> list[TimeSlot]:
    """Drop slots on days the grid does not show (weekends when hidden)."""
    return [s for s in slots if is_mappable(s, config)]


def _column_index(day_of_week: int, config: GridConfig) -> int:
    if config.show_weekends:
        return day_of_week
    # Monday (1) -> column 0 ... Friday (5) -> column 4
    return day_of_week - 1


def map_to_grid(slot: TimeSlot, config: GridConfig = DEFAULT_GRID) -> GridPlacement:
    """
    Compute the base grid placement of one slot.

    Start and end are snapped to the nearest grid line. A slot always spans
    at least one row, and slots reaching past the grid are clamped into it.
    Raises UnmappableSlot for days without a column, InvalidTimeFormat for
    bad times.
    """
    if not is_mappable(slot, config):
        if slot.day_of_week in ALL_DAYS:
            reason = f"{format_day(slot.day_of_week)} is hidden"
        else:
            reason = f"day_of_week {slot.day_of_week!r} is out of range"
        raise UnmappableSlot(f"Cannot place slot {slot.id!r}: {reason}")

    start = to_minutes(slot.start_time)
    end = to_minutes(slot.end_time)
    if end <= start:
        raise InvalidTimeFormat(f"Slot {slot.id!r} ends before it starts: {slot.start_time}-{slot.end_time}")

    step = config.grid_step_minutes
    snapped_start = config.snap(start)
    snapped_end = config.snap(end)

    row_start = (snapped_start - config.grid_start_minute) // step
    row_span = max(1, (snapped_end - snapped_start) // step)

    # a slot snapped onto the closing line still needs a visible row
    row_start = min(row_start, config.row_count - 1)
    row_span = min(row_span, config.row_count - row_start)

    return GridPlacement(
        slot_id=slot.id,
        column_index=_column_index(slot.day_of_week, config),
        row_start=row_start,
        row_span=row_span,
    )

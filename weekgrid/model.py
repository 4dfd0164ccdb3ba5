"""
Central data model definitions used across the project.

This module defines the canonical structure of slots, selections, clashes
and grid placements so that:
- all modules share the same field names
- derived values (clashes, placements) are plain immutable data
- a selection is never mutated in place, only replaced
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, NamedTuple, Optional, Union

from weekgrid.errors import DuplicateSlot, InvalidSlot


LECTURE = "lecture"
TUTORIAL = "tutorial"
LAB = "lab"
PRACTICAL = "practical"
CUSTOM = "custom"

SLOT_KINDS = (LECTURE, TUTORIAL, LAB, PRACTICAL, CUSTOM)

CLASH_TIME = "time"
CLASH_VENUE = "venue"

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    # first key present wins (snake_case before camelCase)
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass(frozen=True)
class TimeSlot:
    """
    One scheduled session (lecture, tutorial, ...) of a subject.

    Times are kept as the "HH:MM" strings supplied by the slot source.
    They are parsed by the time utilities whenever a computation needs
    them, so a malformed value fails the computation, not construction.
    """

    id: str
    subject_id: str
    subject_code: str
    subject_name: str
    day_of_week: int
    start_time: str
    end_time: str
    venue: str = ""
    kind: str = LECTURE
    instructor: Optional[str] = None
    is_custom: bool = False
    color: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TimeSlot":
        """
        Build a slot from a JSON-like record.

        Accepts snake_case keys as well as the camelCase names used by the
        web layer (dayOfWeek, startTime, ...).
        """
        if not isinstance(data, Mapping):
            raise InvalidSlot(f"Slot record must be an object, got {type(data).__name__}")

        slot_id = str(_pick(data, "id", default="")).strip()
        if not slot_id:
            raise InvalidSlot(f"Slot record without id: {dict(data)!r}")

        raw_day = _pick(data, "day_of_week", "dayOfWeek")
        if isinstance(raw_day, float) and not raw_day.is_integer():
            raise InvalidSlot(f"Slot {slot_id!r}: day_of_week must be a whole number, got {raw_day!r}")
        try:
            day = int(raw_day)
        except (TypeError, ValueError):
            raise InvalidSlot(f"Slot {slot_id!r}: invalid day_of_week {raw_day!r}") from None
        if isinstance(raw_day, bool) or not (0 <= day <= 6):
            raise InvalidSlot(f"Slot {slot_id!r}: day_of_week must be 0..6, got {raw_day!r}")

        is_custom = bool(_pick(data, "is_custom", "isCustom", default=False))
        kind = str(_pick(data, "kind", "type", default=CUSTOM if is_custom else LECTURE)).strip().lower()
        if kind not in SLOT_KINDS:
            raise InvalidSlot(f"Slot {slot_id!r}: unknown kind {kind!r}")

        instructor = _pick(data, "instructor")
        color = _pick(data, "color")

        return cls(
            id=slot_id,
            subject_id=str(_pick(data, "subject_id", "subjectId", default="")).strip(),
            subject_code=str(_pick(data, "subject_code", "subjectCode", default="")).strip(),
            subject_name=str(_pick(data, "subject_name", "subjectName", default="")).strip(),
            day_of_week=day,
            start_time=str(_pick(data, "start_time", "startTime", default="")).strip(),
            end_time=str(_pick(data, "end_time", "endTime", default="")).strip(),
            venue=str(_pick(data, "venue", default="")).strip(),
            kind=kind,
            instructor=str(instructor) if instructor is not None else None,
            is_custom=is_custom or kind == CUSTOM,
            color=str(color) if color is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "subject_id": self.subject_id,
            "subject_code": self.subject_code,
            "subject_name": self.subject_name,
            "day_of_week": self.day_of_week,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "venue": self.venue,
            "kind": self.kind,
            "instructor": self.instructor,
            "is_custom": self.is_custom,
            "color": self.color,
        }

    @property
    def label(self) -> str:
        """Short display name, e.g. 'CS101 (lecture)'."""
        name = self.subject_code or self.subject_name or self.id
        return f"{name} ({self.kind})"


class Selection:
    """
    Immutable, ordered set of slots keyed by slot id.

    Every "mutation" returns a new Selection, so detectors and layout passes
    can treat each instance as a snapshot.
    """

    __slots__ = ("_slots", "_by_id")

    def __init__(self, slots: Iterable[TimeSlot] = ()) -> None:
        ordered = tuple(slots)
        by_id: dict[str, TimeSlot] = {}
        for slot in ordered:
            if slot.id in by_id:
                raise DuplicateSlot(f"Slot id {slot.id!r} appears more than once in the selection")
            by_id[slot.id] = slot
        self._slots = ordered
        self._by_id = by_id

    @property
    def slots(self) -> tuple[TimeSlot, ...]:
        return self._slots

    def ids(self) -> list[str]:
        return [s.id for s in self._slots]

    def get(self, slot_id: str) -> Optional[TimeSlot]:
        return self._by_id.get(slot_id)

    def with_slot(self, slot: TimeSlot) -> "Selection":
        """Return a new selection with `slot` appended (DuplicateSlot if its id is taken)."""
        return Selection(self._slots + (slot,))

    def without(self, slot_id: str) -> "Selection":
        """Return a new selection without the slot `slot_id` (no-op if absent)."""
        return Selection(s for s in self._slots if s.id != slot_id)

    def __iter__(self) -> Iterator[TimeSlot]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, TimeSlot):
            return self._by_id.get(item.id) == item
        return item in self._by_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Selection):
            return NotImplemented
        return self._slots == other._slots

    def __hash__(self) -> int:
        return hash(self._slots)

    def __repr__(self) -> str:
        return f"Selection({list(self.ids())!r})"


SlotsLike = Union[Selection, Iterable[TimeSlot]]


@dataclass(frozen=True)
class Clash:
    """
    A conflict between two slots.

    slot1.id always sorts before slot2.id, and `id` depends only on the two
    slot ids, so detecting twice yields the same clash.
    """

    id: str
    type: str
    severity: str
    slot1: TimeSlot
    slot2: TimeSlot
    message: str
    overlap_minutes: int = 0

    def involves(self, slot_id: str) -> bool:
        return slot_id in (self.slot1.id, self.slot2.id)

    def other(self, slot_id: str) -> TimeSlot:
        """Return the participant that is not `slot_id`."""
        if slot_id == self.slot1.id:
            return self.slot2
        if slot_id == self.slot2.id:
            return self.slot1
        raise KeyError(slot_id)


class LateralPosition(NamedTuple):
    lateral_index: int
    lateral_total: int


@dataclass(frozen=True)
class GridPlacement:
    """Where one slot is drawn on the weekly grid."""

    slot_id: str
    column_index: int
    row_start: int
    row_span: int
    lateral_index: int = 0
    lateral_total: int = 1

    @property
    def width_percent(self) -> float:
        return 100.0 / self.lateral_total

    @property
    def offset_percent(self) -> float:
        return self.lateral_index * self.width_percent

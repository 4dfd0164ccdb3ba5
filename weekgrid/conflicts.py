"""
Conflict detection.

Given the selected slots, detect every pairwise clash.

Rules:
- only slots on the same day can clash
- time clash: intervals overlap (start < other_end AND other_start < end),
  unless both slots are alternatives of the same subject requirement
  (same subject, same kind, not custom) -> severity "error"
- venue clash: same non-empty venue and intervals overlap (or lie within
  the venue tolerance of each other) -> severity "warning"
- a pair yields at most one clash; when it has both, the venue detail is
  folded into the time clash message
"""

from __future__ import annotations

from typing import Optional

from weekgrid.errors import InvalidTimeFormat
from weekgrid.model import (
    CLASH_TIME,
    CLASH_VENUE,
    SEVERITY_ERROR,
    SEVERITY_WARNING,
    Clash,
    Selection,
    SlotsLike,
    TimeSlot,
)
from weekgrid.timeutil import format_day, overlap_minutes, to_minutes


# Back-to-back bookings of the same room are not reported by default.
# Raise this to flag sessions that start within N minutes of each other.
VENUE_ADJACENCY_TOLERANCE_MINUTES = 0


def clash_id(slot_a: TimeSlot, slot_b: TimeSlot) -> str:
    """Stable clash id for an unordered pair of slots."""
    first, second = sorted((slot_a.id, slot_b.id))
    # length prefix keeps ids unique even when slot ids contain ":"
    return f"clash:{len(first)}:{first}:{second}"


def _parse_slots(selection: SlotsLike) -> list[tuple[TimeSlot, int, int]]:
    """
    Parse all slot times up front, sorted by slot id.

    Any malformed time aborts the whole batch: bad times mean the slot
    source is broken, so there is nothing sensible to report per pair.
    """
    if not isinstance(selection, Selection):
        selection = Selection(selection)

    parsed: list[tuple[TimeSlot, int, int]] = []
    for slot in sorted(selection, key=lambda s: s.id):
        start = to_minutes(slot.start_time)
        end = to_minutes(slot.end_time)
        if end <= start:
            raise InvalidTimeFormat(
                f"Slot {slot.id!r} ends before it starts: {slot.start_time}-{slot.end_time}"
            )
        parsed.append((slot, start, end))
    return parsed


def are_alternatives(a: TimeSlot, b: TimeSlot) -> bool:
    """
    True if `a` and `b` are interchangeable offerings the student picks
    one of (e.g. two tutorial groups of the same subject).
    """
    if a.is_custom or b.is_custom:
        return False
    return bool(a.subject_id) and a.subject_id == b.subject_id and a.kind == b.kind


def _shared_venue(a: TimeSlot, b: TimeSlot) -> Optional[str]:
    va = a.venue.strip()
    vb = b.venue.strip()
    if not va or not vb:
        return None
    return va if va.lower() == vb.lower() else None


def describe_duration(minutes: int) -> str:
    """90 -> '1 hour and 30 minutes'"""
    hours, mins = divmod(minutes, 60)
    parts: list[str] = []
    if hours:
        parts.append(f"{hours} hour{'s' if hours > 1 else ''}")
    if mins or not parts:
        parts.append(f"{mins} minute{'s' if mins != 1 else ''}")
    return " and ".join(parts)


def _time_message(a: TimeSlot, b: TimeSlot, overlap: int, venue: Optional[str]) -> str:
    where = f" in venue {venue}" if venue else ""
    return (
        f"{a.label} and {b.label} overlap by {describe_duration(overlap)}"
        f"{where} on {format_day(a.day_of_week)}."
    )


def _venue_message(a: TimeSlot, b: TimeSlot, overlap: int, venue: str) -> str:
    msg = f"Venue clash in {venue} between {a.label} and {b.label} on {format_day(a.day_of_week)}"
    if overlap:
        return f"{msg}, overlapping by {describe_duration(overlap)}."
    return f"{msg}, booked back to back."


def _classify_pair(
    first: tuple[TimeSlot, int, int],
    second: tuple[TimeSlot, int, int],
    tolerance: int,
) -> Optional[Clash]:
    a, a_start, a_end = first
    b, b_start, b_end = second

    if a.day_of_week != b.day_of_week:
        return None

    overlap = overlap_minutes(a_start, a_end, b_start, b_end)
    venue = _shared_venue(a, b)
    venue_hit = venue is not None and a_start < b_end + tolerance and b_start < a_end + tolerance

    if overlap > 0 and not are_alternatives(a, b):
        return Clash(
            id=clash_id(a, b),
            type=CLASH_TIME,
            severity=SEVERITY_ERROR,
            slot1=a,
            slot2=b,
            message=_time_message(a, b, overlap, venue if venue_hit else None),
            overlap_minutes=overlap,
        )

    if venue is not None and venue_hit:
        return Clash(
            id=clash_id(a, b),
            type=CLASH_VENUE,
            severity=SEVERITY_WARNING,
            slot1=a,
            slot2=b,
            message=_venue_message(a, b, overlap, venue),
            overlap_minutes=overlap,
        )

    return None


def detect_clashes(
    selection: SlotsLike,
    venue_tolerance_minutes: int = VENUE_ADJACENCY_TOLERANCE_MINUTES,
) -> list[Clash]:
    """
    Find all clashes among the selected slots.

    Each unordered pair appears at most once. The result is sorted by clash
    id, so identical selections give identical lists (order of the input
    does not matter).
    """
    if venue_tolerance_minutes < 0:
        raise ValueError("venue_tolerance_minutes must not be negative")

    parsed = _parse_slots(selection)

    clashes: list[Clash] = []
    # O(n^2) is fine for a weekly course load
    for i in range(len(parsed)):
        for j in range(i + 1, len(parsed)):
            clash = _classify_pair(parsed[i], parsed[j], venue_tolerance_minutes)
            if clash is not None:
                clashes.append(clash)

    clashes.sort(key=lambda c: c.id)
    return clashes


def clashes_for_slot(
    new_slot: TimeSlot,
    selection: SlotsLike,
    venue_tolerance_minutes: int = VENUE_ADJACENCY_TOLERANCE_MINUTES,
) -> list[Clash]:
    """
    Clashes `new_slot` would cause if it were added to `selection`.

    A selected slot with the same id is replaced by `new_slot` for the check.
    """
    if not isinstance(selection, Selection):
        selection = Selection(selection)
    candidate = selection.without(new_slot.id).with_slot(new_slot)
    return [
        c for c in detect_clashes(candidate, venue_tolerance_minutes) if c.involves(new_slot.id)
    ]


def group_clashes_by_subject(clashes: list[Clash]) -> dict[str, list[Clash]]:
    """
    Index clashes by subject id; a clash is listed under both of its subjects.
    Custom slots without a subject are grouped under their own slot id.
    """
    grouped: dict[str, list[Clash]] = {}
    for clash in clashes:
        key1 = clash.slot1.subject_id or clash.slot1.id
        key2 = clash.slot2.subject_id or clash.slot2.id
        grouped.setdefault(key1, []).append(clash)
        if key2 != key1:
            grouped.setdefault(key2, []).append(clash)
    return grouped


def has_blocking_clash(clashes: list[Clash]) -> bool:
    return any(c.severity == SEVERITY_ERROR for c in clashes)

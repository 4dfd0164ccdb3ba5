"""
Clash resolution actions.

A resolution never edits a selection in place; it returns a new one.

- remove: drop one of the two clashing slots
- ignore: only for venue clashes; the selection is unchanged and the
  caller remembers the clash id, using `visible_clashes` to hide it from
  later detection runs (clash ids are stable across runs)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union

from weekgrid.errors import InvalidTarget
from weekgrid.model import CLASH_VENUE, Clash, Selection


class ResolutionAction(str, Enum):
    REMOVE = "remove"
    IGNORE = "ignore"


@dataclass(frozen=True)
class ResolutionOption:
    description: str
    action: ResolutionAction
    slot_id: Optional[str] = None


@dataclass(frozen=True)
class ClashResolution:
    clash_id: str
    options: tuple[ResolutionOption, ...]


def apply_resolution(
    selection: Selection,
    clash: Clash,
    action: Union[ResolutionAction, str],
    target_slot_id: Optional[str] = None,
) -> Selection:
    """
    Apply the user's decision for `clash` and return the new selection.

    Raises InvalidTarget if a removal names no slot or a slot outside the
    clash, or if a non-venue clash is ignored. ValueError for unknown actions.
    """
    action = ResolutionAction(action)

    if action is ResolutionAction.REMOVE:
        if target_slot_id is None:
            raise InvalidTarget(f"Removing a slot for {clash.id} needs a target slot id")
        if not clash.involves(target_slot_id):
            raise InvalidTarget(
                f"Slot {target_slot_id!r} is not part of {clash.id} "
                f"({clash.slot1.id!r}, {clash.slot2.id!r})"
            )
        return selection.without(target_slot_id)

    if clash.type != CLASH_VENUE:
        raise InvalidTarget(f"Only venue clashes can be ignored, {clash.id} is a {clash.type} clash")
    return Selection(selection)


def suggest_resolutions(clashes: Iterable[Clash]) -> list[ClashResolution]:
    """Resolution options to offer the user for each clash."""
    out: list[ClashResolution] = []
    for clash in clashes:
        options = [
            ResolutionOption(f"Remove {clash.slot1.label}", ResolutionAction.REMOVE, clash.slot1.id),
            ResolutionOption(f"Remove {clash.slot2.label}", ResolutionAction.REMOVE, clash.slot2.id),
        ]
        if clash.type == CLASH_VENUE:
            options.append(ResolutionOption("Ignore venue clash (not recommended)", ResolutionAction.IGNORE))
        out.append(ClashResolution(clash.id, tuple(options)))
    return out


def visible_clashes(clashes: Iterable[Clash], ignored_ids: Iterable[str]) -> list[Clash]:
    """
    Filter out venue clashes the user chose to ignore.
    Time clashes can not be ignored and always stay visible.
    """
    ignored = set(ignored_ids)
    return [c for c in clashes if not (c.type == CLASH_VENUE and c.id in ignored)]

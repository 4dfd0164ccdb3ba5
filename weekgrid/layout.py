"""
Side-by-side layout of clashing slots.

Slots joined by time clashes form clusters (connected components, so
A-B and B-C put A, B and C in one cluster even if A and C do not
overlap). Every member of a cluster gets an equal share of the column
width; members are ordered by slot id. There is deliberately no finer
interval packing.
"""

from __future__ import annotations

from typing import Iterable, Optional

from weekgrid.conflicts import detect_clashes
from weekgrid.grid import DEFAULT_GRID, GridConfig, is_mappable, map_to_grid
from weekgrid.model import CLASH_TIME, Clash, GridPlacement, LateralPosition, Selection, SlotsLike, TimeSlot


class _DisjointSet:
    """Minimal union-find over slot ids."""

    def __init__(self, items: Iterable[str]) -> None:
        self.parent = {item: item for item in items}

    def find(self, item: str) -> str:
        root = item
        while self.parent[root] != root:
            root = self.parent[root]
        # path compression
        while self.parent[item] != root:
            self.parent[item], item = root, self.parent[item]
        return root

    def union(self, a: str, b: str) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return
        # smaller id becomes the root so results never depend on edge order
        if rb < ra:
            ra, rb = rb, ra
        self.parent[rb] = ra


def resolve_layout(slots: Iterable[TimeSlot], clashes: Iterable[Clash]) -> dict[str, LateralPosition]:
    """
    Assign (lateral_index, lateral_total) to every slot.

    Only time clashes whose two slots are both in `slots` connect slots.
    Unclashed slots get (0, 1), i.e. the full column width.
    """
    ordered = list(slots)
    ids = [s.id for s in ordered]
    dsu = _DisjointSet(ids)

    for clash in clashes:
        if clash.type != CLASH_TIME:
            continue
        a, b = clash.slot1.id, clash.slot2.id
        if a in dsu.parent and b in dsu.parent:
            dsu.union(a, b)

    clusters: dict[str, list[str]] = {}
    for slot_id in ids:
        clusters.setdefault(dsu.find(slot_id), []).append(slot_id)

    positions: dict[str, LateralPosition] = {}
    for members in clusters.values():
        members.sort()
        total = len(members)
        for index, slot_id in enumerate(members):
            positions[slot_id] = LateralPosition(index, total)

    # keep the caller's slot order in the result
    return {slot_id: positions[slot_id] for slot_id in ids}


def layout_timetable(
    selection: SlotsLike,
    config: GridConfig = DEFAULT_GRID,
    clashes: Optional[Iterable[Clash]] = None,
) -> dict[str, GridPlacement]:
    """
    Full layout pass: base grid placement plus lateral split for every
    slot the grid can show. Slots on hidden days are left out.
    """
    if not isinstance(selection, Selection):
        selection = Selection(selection)
    if clashes is None:
        clashes = detect_clashes(selection)

    shown = [s for s in selection if is_mappable(s, config)]
    lateral = resolve_layout(shown, clashes)

    placements: dict[str, GridPlacement] = {}
    for slot in shown:
        base = map_to_grid(slot, config)
        pos = lateral[slot.id]
        placements[slot.id] = GridPlacement(
            slot_id=base.slot_id,
            column_index=base.column_index,
            row_start=base.row_start,
            row_span=base.row_span,
            lateral_index=pos.lateral_index,
            lateral_total=pos.lateral_total,
        )
    return placements

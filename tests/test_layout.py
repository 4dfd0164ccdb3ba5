"""
Unit tests for side-by-side layout of clashing slots.

Clusters are connected components of time clashes; members are ordered
by slot id and share the column width equally.
"""

import unittest

from weekgrid.conflicts import detect_clashes
from weekgrid.grid import GridConfig
from weekgrid.layout import layout_timetable, resolve_layout
from weekgrid.model import LateralPosition, Selection, TimeSlot


def _slot(slot_id: str, day: int = 1, start: str = "09:00", end: str = "10:00", venue: str = "",
          kind: str = "lecture", subject: str = "") -> TimeSlot:
    subject = subject or slot_id.upper()
    return TimeSlot(slot_id, subject, subject, subject, day, start, end, venue=venue, kind=kind)


def _resolve(slots: list[TimeSlot]) -> dict[str, LateralPosition]:
    return resolve_layout(slots, detect_clashes(slots))


class TestResolveLayout(unittest.TestCase):
    def test_scenario_pair_split_by_id(self) -> None:
        a = _slot("a", start="09:00", end="10:30", venue="R1")
        b = _slot("b", start="10:00", end="11:00", venue="R2")
        result = _resolve([a, b])
        self.assertEqual(result, {"a": (0, 2), "b": (1, 2)})

    def test_three_mutual_clashes(self) -> None:
        slots = [_slot(i) for i in ("c", "a", "b")]
        result = _resolve(slots)
        self.assertEqual({p.lateral_total for p in result.values()}, {3})
        self.assertEqual(sorted(p.lateral_index for p in result.values()), [0, 1, 2])
        self.assertEqual(result["a"].lateral_index, 0)
        self.assertEqual(result["c"].lateral_index, 2)

    def test_transitive_chain_forms_one_cluster(self) -> None:
        # a-b and b-c overlap, a-c only touch
        a = _slot("a", start="09:00", end="10:00")
        b = _slot("b", start="09:30", end="10:30")
        c = _slot("c", start="10:00", end="11:00")
        result = _resolve([a, b, c])
        self.assertEqual(result, {"a": (0, 3), "b": (1, 3), "c": (2, 3)})

    def test_unclashed_slot_gets_full_width(self) -> None:
        result = _resolve([_slot("a"), _slot("b", day=2)])
        self.assertEqual(result, {"a": (0, 1), "b": (0, 1)})

    def test_venue_clash_does_not_split(self) -> None:
        t1 = _slot("t1", kind="tutorial", subject="CS", venue="R1")
        t2 = _slot("t2", kind="tutorial", subject="CS", venue="R1")
        clashes = detect_clashes([t1, t2])
        self.assertEqual(clashes[0].type, "venue")
        self.assertEqual(resolve_layout([t1, t2], clashes), {"t1": (0, 1), "t2": (0, 1)})

    def test_separate_clusters(self) -> None:
        slots = [
            _slot("m1", day=1),
            _slot("m2", day=1),
            _slot("t1", day=2),
            _slot("t2", day=2),
            _slot("t3", day=2),
        ]
        result = _resolve(slots)
        self.assertEqual(result["m2"], (1, 2))
        self.assertEqual(result["t3"], (2, 3))

    def test_clash_with_unknown_slot_is_ignored(self) -> None:
        a, b = _slot("a"), _slot("b")
        clashes = detect_clashes([a, b])
        self.assertEqual(resolve_layout([a], clashes), {"a": (0, 1)})

    def test_result_follows_input_order(self) -> None:
        a, b = _slot("a"), _slot("b")
        result = resolve_layout([b, a], detect_clashes([a, b]))
        self.assertEqual(list(result), ["b", "a"])
        self.assertEqual(result["a"].lateral_index, 0)

    def test_repeatable(self) -> None:
        slots = [_slot("a"), _slot("b", start="09:30", end="11:00"), _slot("c", day=3)]
        self.assertEqual(_resolve(slots), _resolve(slots))


class TestLayoutTimetable(unittest.TestCase):
    def test_combines_grid_and_lateral(self) -> None:
        selection = Selection(
            [
                _slot("a", start="09:00", end="10:30"),
                _slot("b", start="10:00", end="11:00"),
                _slot("sat", day=6),
            ]
        )
        placements = layout_timetable(selection)

        self.assertEqual(list(placements), ["a", "b"])
        a, b = placements["a"], placements["b"]
        self.assertEqual((a.column_index, a.row_start, a.row_span), (0, 2, 3))
        self.assertEqual((b.column_index, b.row_start, b.row_span), (0, 4, 2))
        self.assertEqual((a.lateral_index, a.lateral_total), (0, 2))
        self.assertEqual((b.lateral_index, b.lateral_total), (1, 2))
        self.assertEqual(b.width_percent, 50.0)
        self.assertEqual(b.offset_percent, 50.0)

    def test_weekend_slots_shown_when_enabled(self) -> None:
        selection = Selection([_slot("sat", day=6)])
        placements = layout_timetable(selection, GridConfig(show_weekends=True))
        self.assertEqual(placements["sat"].column_index, 6)

    def test_uses_given_clashes(self) -> None:
        selection = Selection([_slot("a"), _slot("b")])
        placements = layout_timetable(selection, clashes=[])
        self.assertEqual(placements["b"].lateral_total, 1)


if __name__ == "__main__":
    unittest.main()

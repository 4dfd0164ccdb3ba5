"""
Unit tests for the data model (slots, selections, placements).
"""

import unittest

from weekgrid.errors import DuplicateSlot, InvalidSlot
from weekgrid.model import GridPlacement, Selection, TimeSlot


def _slot(slot_id: str, day: int = 1, start: str = "09:00", end: str = "10:00") -> TimeSlot:
    return TimeSlot(slot_id, "S-" + slot_id, slot_id.upper(), "Subject " + slot_id, day, start, end)


class TestTimeSlotFromDict(unittest.TestCase):
    def test_snake_case_record(self) -> None:
        slot = TimeSlot.from_dict(
            {
                "id": "s1",
                "subject_id": "sub-1",
                "subject_code": "CS101",
                "subject_name": "Programming",
                "day_of_week": 2,
                "start_time": "09:00",
                "end_time": "10:30",
                "venue": "R1",
                "kind": "Tutorial",
            }
        )
        self.assertEqual(slot.id, "s1")
        self.assertEqual(slot.day_of_week, 2)
        self.assertEqual(slot.kind, "tutorial")
        self.assertEqual(slot.venue, "R1")
        self.assertFalse(slot.is_custom)

    def test_camel_case_record(self) -> None:
        slot = TimeSlot.from_dict(
            {
                "id": "s2",
                "subjectId": "sub-2",
                "subjectCode": "MA201",
                "dayOfWeek": "1",
                "startTime": "14:00",
                "endTime": "15:00",
            }
        )
        self.assertEqual(slot.subject_code, "MA201")
        self.assertEqual(slot.day_of_week, 1)
        self.assertEqual(slot.kind, "lecture")
        self.assertEqual(slot.venue, "")

    def test_custom_flag_implies_custom_kind(self) -> None:
        slot = TimeSlot.from_dict(
            {"id": "c1", "isCustom": True, "day_of_week": 3, "start_time": "18:00", "end_time": "19:00"}
        )
        self.assertEqual(slot.kind, "custom")
        self.assertTrue(slot.is_custom)

    def test_missing_id_raises(self) -> None:
        with self.assertRaises(InvalidSlot):
            TimeSlot.from_dict({"day_of_week": 1, "start_time": "09:00", "end_time": "10:00"})

    def test_bad_day_raises(self) -> None:
        for day in [7, -1, "monday", None, True, 1.9, "1.5"]:
            with self.subTest(day=day):
                with self.assertRaises(InvalidSlot):
                    TimeSlot.from_dict({"id": "x", "day_of_week": day, "start_time": "09:00", "end_time": "10:00"})

    def test_unknown_kind_raises(self) -> None:
        with self.assertRaises(InvalidSlot):
            TimeSlot.from_dict(
                {"id": "x", "day_of_week": 1, "start_time": "09:00", "end_time": "10:00", "kind": "exam"}
            )

    def test_times_are_not_validated_on_load(self) -> None:
        # time errors surface from detection/mapping, not construction
        slot = TimeSlot.from_dict({"id": "x", "day_of_week": 1, "start_time": "9h", "end_time": "10:00"})
        self.assertEqual(slot.start_time, "9h")

    def test_to_dict_keeps_fields(self) -> None:
        slot = _slot("a")
        data = slot.to_dict()
        self.assertEqual(data["id"], "a")
        self.assertEqual(data["day_of_week"], 1)
        self.assertEqual(TimeSlot.from_dict(data), slot)

    def test_label(self) -> None:
        self.assertEqual(_slot("a").label, "A (lecture)")


class TestSelection(unittest.TestCase):
    def test_duplicate_ids_rejected(self) -> None:
        with self.assertRaises(DuplicateSlot):
            Selection([_slot("a"), _slot("a", day=2)])

    def test_with_slot_returns_new_selection(self) -> None:
        sel = Selection([_slot("a")])
        sel2 = sel.with_slot(_slot("b"))
        self.assertEqual(len(sel), 1)
        self.assertEqual(sel2.ids(), ["a", "b"])

    def test_with_slot_rejects_taken_id(self) -> None:
        with self.assertRaises(DuplicateSlot):
            Selection([_slot("a")]).with_slot(_slot("a"))

    def test_without(self) -> None:
        sel = Selection([_slot("a"), _slot("b")])
        self.assertEqual(sel.without("a").ids(), ["b"])
        self.assertEqual(sel.without("zzz"), sel)
        self.assertEqual(len(sel), 2)

    def test_lookup_and_contains(self) -> None:
        a = _slot("a")
        sel = Selection([a])
        self.assertIn("a", sel)
        self.assertIn(a, sel)
        self.assertNotIn("b", sel)
        self.assertIs(sel.get("a"), a)
        self.assertIsNone(sel.get("b"))


class TestGridPlacement(unittest.TestCase):
    def test_width_and_offset(self) -> None:
        p = GridPlacement("a", 0, 2, 3, lateral_index=1, lateral_total=4)
        self.assertEqual(p.width_percent, 25.0)
        self.assertEqual(p.offset_percent, 25.0)

    def test_defaults_fill_column(self) -> None:
        p = GridPlacement("a", 0, 2, 3)
        self.assertEqual(p.width_percent, 100.0)
        self.assertEqual(p.offset_percent, 0.0)


if __name__ == "__main__":
    unittest.main()

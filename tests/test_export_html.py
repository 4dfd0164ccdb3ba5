import tempfile
import unittest
from pathlib import Path

from bs4 import BeautifulSoup

from weekgrid.export_html import export_grid_html, render_grid_html
from weekgrid.grid import GridConfig
from weekgrid.model import Selection, TimeSlot


def _selection() -> Selection:
    return Selection(
        [
            TimeSlot("a", "S1", "CS101", "Programming", 1, "09:00", "10:30", venue="R1"),
            TimeSlot("b", "S2", "MA201", "Calculus", 1, "10:00", "11:00", venue="R2"),
            TimeSlot("c", "S3", "PH301", "Physics", 3, "14:00", "16:00", venue="Lab", kind="lab"),
            TimeSlot("s", "S4", "SP100", "Sports", 6, "10:00", "12:00"),
        ]
    )


class TestExportHTML(unittest.TestCase):
    def test_render_contains_grid_and_clashes(self) -> None:
        soup = BeautifulSoup(render_grid_html(_selection()), "html.parser")

        headers = [d.get_text() for d in soup.select("div.day-header")]
        self.assertEqual(headers, ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"])
        self.assertEqual(len(soup.select("div.time-label")), 28)

        blocks = {b["data-slot-id"]: b for b in soup.select("div.class-block")}
        self.assertEqual(sorted(blocks), ["a", "b", "c"])
        self.assertIn("width: 50%", blocks["a"]["style"])
        self.assertIn("left: 0%", blocks["a"]["style"])
        self.assertIn("left: 50%", blocks["b"]["style"])
        self.assertIn("width: 100%", blocks["c"]["style"])
        self.assertIn("clash", blocks["a"]["class"])
        self.assertNotIn("clash", blocks["c"]["class"])

        clashes = soup.select("#clashes li.clash")
        self.assertEqual(len(clashes), 1)
        self.assertEqual(clashes[0]["data-clash-id"], "clash:1:a:b")
        self.assertIn("severity-error", clashes[0]["class"])

        unplaced = soup.select("#unplaced li")
        self.assertEqual([li["data-slot-id"] for li in unplaced], ["s"])

    def test_weekend_columns(self) -> None:
        soup = BeautifulSoup(render_grid_html(_selection(), GridConfig(show_weekends=True)), "html.parser")
        self.assertEqual(len(soup.select("div.day-header")), 7)
        self.assertEqual(soup.select("#unplaced"), [])

    def test_no_clashes_message(self) -> None:
        selection = Selection([TimeSlot("a", "S1", "CS101", "Programming", 2, "09:00", "10:00")])
        soup = BeautifulSoup(render_grid_html(selection), "html.parser")
        self.assertIn("No clashes found.", soup.select_one("#clashes").get_text())

    def test_export_writes_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out" / "timetable.html"
            n = export_grid_html(_selection(), out)
            self.assertEqual(n, 3)
            text = out.read_text(encoding="utf-8")
            self.assertIn("<title>My Timetable</title>", text)
            self.assertIn("CS101", text)


if __name__ == "__main__":
    unittest.main()

"""
weekgrid - timetable clash detection and weekly grid layout.

Typical use:

    selection = Selection(slots)
    clashes = detect_clashes(selection)
    placements = layout_timetable(selection, GridConfig(show_weekends=False), clashes)
"""

from pathlib import Path

from weekgrid.conflicts import clashes_for_slot, detect_clashes, group_clashes_by_subject
from weekgrid.errors import (
    DuplicateSlot,
    InvalidSlot,
    InvalidTarget,
    InvalidTimeFormat,
    TimetableError,
    UnmappableSlot,
)
from weekgrid.grid import DEFAULT_GRID, GridConfig, map_to_grid
from weekgrid.layout import layout_timetable, resolve_layout
from weekgrid.model import Clash, GridPlacement, LateralPosition, Selection, TimeSlot
from weekgrid.resolution import ResolutionAction, apply_resolution, suggest_resolutions, visible_clashes

__version__ = (Path(__file__).resolve().parent / "VERSION").read_text(encoding="utf-8").strip()

__all__ = [
    "Clash",
    "DEFAULT_GRID",
    "DuplicateSlot",
    "GridConfig",
    "GridPlacement",
    "InvalidSlot",
    "InvalidTarget",
    "InvalidTimeFormat",
    "LateralPosition",
    "ResolutionAction",
    "Selection",
    "TimeSlot",
    "TimetableError",
    "UnmappableSlot",
    "apply_resolution",
    "clashes_for_slot",
    "detect_clashes",
    "group_clashes_by_subject",
    "layout_timetable",
    "map_to_grid",
    "resolve_layout",
    "suggest_resolutions",
    "visible_clashes",
]

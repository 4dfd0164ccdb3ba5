"""
Reading and writing selection files for the command line.

File format (either form is accepted on load):

    [ {slot}, {slot}, ... ]
    {"slots": [ {slot}, {slot}, ... ]}

A selection file is input data: a missing or broken file is reported to
the caller, never replaced by an empty selection.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from weekgrid.errors import InvalidSlot
from weekgrid.model import Selection, TimeSlot


def selection_from_data(data: Any) -> Selection:
    """Build a Selection from already-decoded JSON data."""
    if isinstance(data, dict):
        data = data.get("slots")
    if not isinstance(data, list):
        raise InvalidSlot("Selection data must be a list of slots or an object with a 'slots' list")
    return Selection(TimeSlot.from_dict(item) for item in data)


def load_selection(path: str | Path) -> Selection:
    """
    Load a selection from a JSON file.

    Raises FileNotFoundError / json.JSONDecodeError for unreadable files and
    InvalidSlot / DuplicateSlot for bad slot records.
    """
    text = Path(path).read_text(encoding="utf-8")
    return selection_from_data(json.loads(text))


def save_selection(selection: Selection, path: str | Path) -> None:
    """
    Write a selection as {"slots": [...]}.

    Creates parent directories if needed. Slot order is preserved.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    payload = {"slots": [slot.to_dict() for slot in selection]}
    out.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

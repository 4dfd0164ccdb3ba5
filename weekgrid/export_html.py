"""
HTML export of the weekly grid.

Builds a standalone page (no scripts, inline CSS) with BeautifulSoup:
- one CSS grid column per visible day, one row per grid step
- one block per slot, narrowed and shifted when it shares a cluster
  with clashing slots
- the list of clashes and of slots on hidden days underneath

The page can be opened in any browser or printed from there.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from bs4 import BeautifulSoup, Tag

from weekgrid.conflicts import detect_clashes
from weekgrid.grid import DEFAULT_GRID, GridConfig, is_mappable
from weekgrid.layout import layout_timetable
from weekgrid.model import Clash, GridPlacement, Selection, TimeSlot
from weekgrid.timeutil import format_day, format_range, format_time, minutes_to_time


KIND_COLORS = {
    "lecture": "#8B5CF6",
    "tutorial": "#A855F7",
    "lab": "#9333EA",
    "practical": "#7C3AED",
    "custom": "#6D28D9",
}

_CSS = """
body { font-family: sans-serif; margin: 1.5rem; }
.timetable { display: grid; gap: 1px; background: #e5e7eb; border: 1px solid #e5e7eb; }
.corner, .day-header, .time-label { background: #fff; }
.day-header { font-weight: bold; text-align: center; padding: .25rem; }
.time-label { font-size: .75rem; color: #6b7280; padding: .25rem; }
.cell { position: relative; }
.class-block { position: absolute; top: 0; bottom: 0; box-sizing: border-box; padding: .25rem;
  color: #fff; font-size: .75rem; overflow: hidden; border-radius: .25rem; }
.class-block.clash { outline: 2px solid #dc2626; }
.class-block span { display: block; }
.severity-error { color: #b91c1c; }
.severity-warning { color: #a16207; }
"""


def _pct(value: float) -> str:
    return f"{round(value, 4):g}%"


def _new_tag(soup: BeautifulSoup, name: str, text: Optional[str] = None, **attrs: str) -> Tag:
    tag = soup.new_tag(name, attrs=attrs)
    if text is not None:
        tag.string = text
    return tag


def _slot_block(soup: BeautifulSoup, slot: TimeSlot, placement: GridPlacement) -> Tag:
    cell = _new_tag(
        soup,
        "div",
        **{
            "class": "cell",
            "style": (
                f"grid-column: {placement.column_index + 2} / span 1; "
                f"grid-row: {placement.row_start + 2} / span {placement.row_span};"
            ),
        },
    )

    classes = ["class-block", slot.kind]
    if placement.lateral_total > 1:
        classes.append("clash")
    color = slot.color or KIND_COLORS.get(slot.kind, KIND_COLORS["custom"])
    block = _new_tag(
        soup,
        "div",
        **{
            "class": " ".join(classes),
            "style": (
                f"left: {_pct(placement.offset_percent)}; width: {_pct(placement.width_percent)}; "
                f"background: {color};"
            ),
            "data-slot-id": slot.id,
            "data-lateral-index": str(placement.lateral_index),
            "data-lateral-total": str(placement.lateral_total),
        },
    )
    block.append(_new_tag(soup, "strong", slot.subject_code or slot.subject_name or slot.id))
    block.append(_new_tag(soup, "span", format_range(slot.start_time, slot.end_time)))
    if slot.venue:
        block.append(_new_tag(soup, "span", slot.venue, **{"class": "venue"}))
    cell.append(block)
    return cell


def _clash_section(soup: BeautifulSoup, clashes: Iterable[Clash]) -> Tag:
    section = _new_tag(soup, "section", id="clashes")
    section.append(_new_tag(soup, "h2", "Clashes"))
    items = list(clashes)
    if not items:
        section.append(_new_tag(soup, "p", "No clashes found."))
        return section
    ul = _new_tag(soup, "ul")
    for clash in items:
        ul.append(
            _new_tag(
                soup,
                "li",
                clash.message,
                **{"class": f"clash severity-{clash.severity}", "data-clash-id": clash.id},
            )
        )
    section.append(ul)
    return section


def render_grid_html(
    selection: Selection,
    config: GridConfig = DEFAULT_GRID,
    clashes: Optional[list[Clash]] = None,
    title: str = "My Timetable",
) -> str:
    """Render the selection as a standalone HTML page."""
    if clashes is None:
        clashes = detect_clashes(selection)
    placements = layout_timetable(selection, config, clashes)

    soup = BeautifulSoup("<!DOCTYPE html><html><head></head><body></body></html>", "html.parser")
    soup.head.append(_new_tag(soup, "meta", charset="utf-8"))
    soup.head.append(_new_tag(soup, "title", title))
    soup.head.append(_new_tag(soup, "style", _CSS))

    soup.body.append(_new_tag(soup, "h1", title))

    grid = _new_tag(
        soup,
        "div",
        **{
            "class": "timetable",
            "style": (
                f"grid-template-columns: 5rem repeat({config.column_count}, 1fr); "
                f"grid-template-rows: 2rem repeat({config.row_count}, 3rem);"
            ),
        },
    )
    grid.append(_new_tag(soup, "div", "", **{"class": "corner", "style": "grid-column: 1; grid-row: 1;"}))
    for col, day in enumerate(config.visible_days):
        grid.append(
            _new_tag(
                soup,
                "div",
                format_day(day),
                **{"class": "day-header", "style": f"grid-column: {col + 2}; grid-row: 1;"},
            )
        )
    for row in range(config.row_count):
        minute = config.grid_start_minute + row * config.grid_step_minutes
        grid.append(
            _new_tag(
                soup,
                "div",
                format_time(minutes_to_time(minute)),
                **{"class": "time-label", "style": f"grid-column: 1; grid-row: {row + 2};"},
            )
        )
    for slot in selection:
        placement = placements.get(slot.id)
        if placement is not None:
            grid.append(_slot_block(soup, slot, placement))
    soup.body.append(grid)

    soup.body.append(_clash_section(soup, clashes))

    hidden = [s for s in selection if not is_mappable(s, config)]
    if hidden:
        section = _new_tag(soup, "section", id="unplaced")
        section.append(_new_tag(soup, "h2", "Not shown on this grid"))
        ul = _new_tag(soup, "ul")
        for slot in hidden:
            ul.append(
                _new_tag(
                    soup,
                    "li",
                    f"{slot.label} {format_day(slot.day_of_week)} {format_range(slot.start_time, slot.end_time)}",
                    **{"data-slot-id": slot.id},
                )
            )
        section.append(ul)
        soup.body.append(section)

    return str(soup)


def export_grid_html(
    selection: Selection,
    out_path: str | Path,
    config: GridConfig = DEFAULT_GRID,
    clashes: Optional[list[Clash]] = None,
) -> int:
    """
    Write the HTML grid to `out_path`. Returns number of placed slots.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    html = render_grid_html(selection, config, clashes)
    out.write_text(html, encoding="utf-8")
    return sum(1 for s in selection if is_mappable(s, config))

"""
CLI (Command Line Interface).

Quick terminal commands around the clash/layout engine, e.g.:

    weekgrid clashes selection.json
    weekgrid layout selection.json --weekends --step 60
    weekgrid resolve selection.json <clash_id> remove <slot_id>
    weekgrid export selection.json timetable.html

A selection file is a JSON list of slots (see weekgrid.loader).

Exit codes:
- 0 ok (for `clashes`: no blocking clash)
- 1 `clashes` found at least one error-severity clash
- 2 unreadable selection file or bad data
"""

from __future__ import annotations

import argparse
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from weekgrid.conflicts import VENUE_ADJACENCY_TOLERANCE_MINUTES, detect_clashes, has_blocking_clash
from weekgrid.export_html import export_grid_html
from weekgrid.grid import GridConfig, is_mappable
from weekgrid.layout import layout_timetable
from weekgrid.loader import load_selection, save_selection
from weekgrid.model import SEVERITY_ERROR, Selection
from weekgrid.resolution import ResolutionAction, apply_resolution, visible_clashes
from weekgrid.timeutil import format_day


def _grid_config(args: argparse.Namespace) -> GridConfig:
    return GridConfig.from_times(args.start, args.end, args.step, show_weekends=args.weekends)


def _cmd_clashes(args: argparse.Namespace, selection: Selection, console: Console) -> int:
    """
    Print all clashes among the selected slots.
    """
    clashes = detect_clashes(selection, args.venue_tolerance)
    clashes = visible_clashes(clashes, args.ignore or [])
    if not clashes:
        console.print("No clashes found.")
        return 0

    table = Table(title=f"Clashes found: {len(clashes)}")
    table.add_column("Clash ID")
    table.add_column("Type")
    table.add_column("Severity")
    table.add_column("Message")
    for clash in clashes:
        style = "red" if clash.severity == SEVERITY_ERROR else "yellow"
        table.add_row(escape(clash.id), clash.type, f"[{style}]{clash.severity}[/{style}]", escape(clash.message))
    console.print(table)

    return 1 if has_blocking_clash(clashes) else 0


def _cmd_layout(args: argparse.Namespace, selection: Selection, console: Console) -> int:
    """
    Print the grid placement (column, rows, side-by-side position) of every slot.
    """
    config = _grid_config(args)
    placements = layout_timetable(selection, config)

    table = Table(title=f"Layout ({config.row_count} rows x {config.column_count} columns)")
    for name in ("Slot", "Subject", "Day", "Time", "Column", "Row", "Span", "Lateral"):
        table.add_column(name)
    for slot in selection:
        p = placements.get(slot.id)
        if p is None:
            continue
        table.add_row(
            escape(slot.id),
            escape(slot.label),
            format_day(slot.day_of_week, short=True),
            f"{slot.start_time}-{slot.end_time}",
            str(p.column_index),
            str(p.row_start),
            str(p.row_span),
            f"{p.lateral_index + 1}/{p.lateral_total}",
        )
    console.print(table)

    hidden = [s for s in selection if not is_mappable(s, config)]
    for slot in hidden:
        console.print(f"Not shown (weekends hidden): {escape(slot.id)} {escape(slot.label)}")
    return 0


def _cmd_resolve(args: argparse.Namespace, selection: Selection, console: Console) -> int:
    """
    Apply a resolution to one clash. `remove` writes the new selection back.
    """
    clashes = {c.id: c for c in detect_clashes(selection, args.venue_tolerance)}
    clash = clashes.get(args.clash_id)
    if clash is None:
        console.print(f"Unknown clash: {escape(args.clash_id)}")
        return 2

    new_selection = apply_resolution(selection, clash, args.action, args.slot_id)

    if ResolutionAction(args.action) is ResolutionAction.IGNORE:
        console.print(
            f"Ignored: {escape(clash.id)} (hide it with `weekgrid clashes ... --ignore {escape(clash.id)}`)"
        )
        return 0

    out_path = args.out or args.file
    save_selection(new_selection, out_path)
    console.print(f"Removed: {escape(args.slot_id)} (selected: {len(new_selection)}) -> {escape(str(out_path))}")
    return 0


def _cmd_export(args: argparse.Namespace, selection: Selection, console: Console) -> int:
    """
    Export the selection as an HTML weekly grid.
    """
    n = export_grid_html(selection, args.out, _grid_config(args))
    console.print(f"Exported {n} slots to: {escape(args.out)}")
    return 0


def _add_grid_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--weekends", action="store_true", help="Show Saturday and Sunday columns")
    p.add_argument("--start", default="08:00", help="First grid line (HH:MM, default 08:00)")
    p.add_argument("--end", default="22:00", help="Last grid line (HH:MM, default 22:00)")
    p.add_argument("--step", type=int, default=30, help="Row height in minutes (default 30)")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="weekgrid", description="Weekly timetable clash checker")
    sub = parser.add_subparsers(dest="command", required=True)

    p_clashes = sub.add_parser("clashes", help="Show clashes among the selected slots")
    p_clashes.add_argument("file", type=str, help="Selection JSON file")
    p_clashes.add_argument(
        "--venue-tolerance",
        type=int,
        default=VENUE_ADJACENCY_TOLERANCE_MINUTES,
        help="Report same-venue slots starting within N minutes of each other",
    )
    p_clashes.add_argument("--ignore", action="append", metavar="CLASH_ID", help="Hide an ignored venue clash")

    p_layout = sub.add_parser("layout", help="Show grid placement of every slot")
    p_layout.add_argument("file", type=str, help="Selection JSON file")
    _add_grid_args(p_layout)

    p_resolve = sub.add_parser("resolve", help="Resolve a clash")
    p_resolve.add_argument("file", type=str, help="Selection JSON file")
    p_resolve.add_argument("clash_id", type=str, help="Clash ID as shown by `clashes`")
    p_resolve.add_argument("action", choices=[a.value for a in ResolutionAction])
    p_resolve.add_argument("slot_id", nargs="?", default=None, help="Slot to remove (for `remove`)")
    p_resolve.add_argument("--out", type=str, default=None, help="Write result here instead of FILE")
    p_resolve.add_argument("--venue-tolerance", type=int, default=VENUE_ADJACENCY_TOLERANCE_MINUTES)

    p_export = sub.add_parser("export", help="Export the weekly grid to HTML")
    p_export.add_argument("file", type=str, help="Selection JSON file")
    p_export.add_argument("out", type=str, help="Output file path (e.g. timetable.html)")
    _add_grid_args(p_export)

    return parser


_COMMANDS = {
    "clashes": _cmd_clashes,
    "layout": _cmd_layout,
    "resolve": _cmd_resolve,
    "export": _cmd_export,
}


def main(argv: Optional[list[str]] = None, console: Optional[Console] = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    console = console or Console()

    handler = _COMMANDS.get(args.command)
    if handler is None:
        raise SystemExit(2)

    try:
        selection = load_selection(args.file)
        code = handler(args, selection, console)
    except OSError as exc:
        console.print(f"Error: cannot read/write file: {escape(str(exc))}")
        raise SystemExit(2)
    except ValueError as exc:
        # TimetableError, JSONDecodeError and bad grid options are all ValueErrors
        console.print(f"Error: {escape(str(exc))}")
        raise SystemExit(2)

    raise SystemExit(code)

"""Workout builder command line.

State (current workout, history, preferences) lives as JSON blobs in
WORKOUT_STATE_DIR and is loaded and saved around every command.

Usage:
    python -m workout_cli.main new "Sweet Spot"
    python -m workout_cli.main add intervals
    python -m workout_cli.main set 0 duration=900 power_high=0.75
    python -m workout_cli.main show --chart
    python -m workout_cli.main generate "45 min threshold session"
    python -m workout_cli.main export --out zwo/
    python -m workout_cli.main undo
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, assert_never

from generation_client import GenerationClient, GenerationError
from workout_cli.config import LOG_LEVEL, OPENAI_API_KEY, STATE_DIR, WORKOUT_FTP, WORKOUT_MODEL
from workout_engine.chart import build_chart
from workout_engine.formatting import (
    format_duration,
    format_power,
    format_power_range,
    parse_duration_input,
)
from workout_engine.history import ManualTimer
from workout_engine.math.metrics import average_power, segment_duration
from workout_engine.math.training_load import workout_summary
from workout_engine.math.zones import time_in_zones, zone_name
from workout_engine.models import (
    Cooldown,
    FreeRide,
    Intervals,
    MaxEffort,
    Preferences,
    Ramp,
    Segment,
    SegmentType,
    SteadyState,
    Warmup,
)
from workout_engine.persistence import JsonFileStore, load_state, save_state
from workout_engine.serialization import ImportFailure, export_zwo_file, import_zwo_file
from workout_engine.session import WorkoutSession

logger = logging.getLogger(__name__)

_DURATION_FIELDS = frozenset({"duration", "on_duration", "off_duration"})
_INT_FIELDS = frozenset({"repeat", "cadence", "cadence_high", "cadence_low"})


def _describe(segment: Segment) -> str:
    """One-line human description of a segment."""
    duration = format_duration(segment_duration(segment))
    if isinstance(segment, (Warmup, Ramp)):
        target = format_power_range(segment.power_low, segment.power_high)
    elif isinstance(segment, Cooldown):
        target = format_power_range(segment.power_high, segment.power_low)
    elif isinstance(segment, SteadyState):
        target = format_power(segment.power)
    elif isinstance(segment, Intervals):
        target = (
            f"{segment.repeat} x {format_duration(segment.on_duration)} @ {format_power(segment.on_power)}"
            f" / {format_duration(segment.off_duration)} @ {format_power(segment.off_power)}"
        )
    elif isinstance(segment, FreeRide):
        target = "free ride" + (" (flat road)" if segment.flat_road else "")
    elif isinstance(segment, MaxEffort):
        target = "max effort"
    else:
        assert_never(segment)
    return f"{segment.segment_type.value:<12} {duration:>8}  {target}"


def _parse_assignment(text: str) -> tuple[str, Any]:
    """``field=value`` → (field, typed value)."""
    name, sep, raw = text.partition("=")
    if not sep or not name:
        raise ValueError(f"Expected field=value, got {text!r}")
    name = name.strip()
    raw = raw.strip()
    if name in _DURATION_FIELDS:
        seconds = parse_duration_input(raw)
        if seconds is None:
            raise ValueError(f"Unrecognised duration {raw!r}")
        return name, seconds
    if name in _INT_FIELDS:
        return name, int(raw)
    if name == "flat_road":
        return name, raw.lower() in ("1", "true", "yes", "on")
    return name, float(raw)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_show(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    workout = session.workout
    print(f"{workout.name}  ({workout.sport_type.value})")
    if workout.description:
        print(workout.description)
    if workout.is_empty:
        print("No segments yet.")
        return 0

    for i, segment in enumerate(workout.segments):
        zone = zone_name(average_power(segment))
        print(f"{i:>4}  {_describe(segment)}  [{zone}]")

    summary = workout_summary(workout)
    print()
    print(f"Duration:          {format_duration(summary.total_duration_s)}")
    print(f"Average power:     {format_power(summary.average_power)}")
    print(f"Normalized power:  {format_power(summary.normalized_power)}")
    print(f"Training load:     {summary.training_load}")

    if args.zones:
        print()
        print(time_in_zones(workout.segments).to_string(index=False))

    if args.chart:
        geometry = build_chart(workout.segments)
        print()
        for chart_segment in geometry.segments:
            print(f"{chart_segment.segment_id}: {chart_segment.polygon.to_svg_points()}")
    return 0


def cmd_new(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    session.editor.reset()
    if args.name:
        session.editor.update_workout(name=args.name)
    return 0


def cmd_add(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    segment = session.editor.add_segment(SegmentType(args.type), index=args.index)
    print(f"Added {_describe(segment)}")
    return 0


def _segment_at(session: WorkoutSession, index: int) -> Segment | None:
    segments = session.workout.segments
    if not 0 <= index < len(segments):
        print(f"No segment at index {index} (workout has {len(segments)})", file=sys.stderr)
        return None
    return segments[index]


def cmd_set(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    segment = _segment_at(session, args.index)
    if segment is None:
        return 1
    try:
        changes = dict(_parse_assignment(a) for a in args.assignments)
        session.editor.update_segment(segment.id, **changes)
    except (ValueError, TypeError) as exc:
        print(f"Cannot update segment: {exc}", file=sys.stderr)
        return 1
    return 0


def cmd_remove(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    segment = _segment_at(session, args.index)
    if segment is None:
        return 1
    session.editor.remove_segment(segment.id)
    return 0


def cmd_duplicate(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    segment = _segment_at(session, args.index)
    if segment is None:
        return 1
    session.editor.duplicate_segment(segment.id)
    return 0


def cmd_move(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    try:
        session.editor.move_segment(args.from_index, args.to_index)
    except IndexError as exc:
        print(f"Cannot move segment: {exc}", file=sys.stderr)
        return 1
    return 0


def cmd_import(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    result = import_zwo_file(args.path)
    if isinstance(result, ImportFailure):
        print(result.message, file=sys.stderr)
        return 1
    session.editor.set_workout(result.workout)
    print(f"Imported {result.workout.name} ({len(result.workout.segments)} segments)")
    return 0


def cmd_export(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    if session.workout.is_empty:
        print("Nothing to export: the workout has no segments.", file=sys.stderr)
        return 1
    path = export_zwo_file(session.workout, args.out)
    print(path)
    return 0


def cmd_generate(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    api_key = OPENAI_API_KEY or prefs.api_key
    if not api_key:
        print("No API key configured. Set OPENAI_API_KEY or run `prefs --api-key`.", file=sys.stderr)
        return 1
    ftp = WORKOUT_FTP or prefs.ftp
    client = GenerationClient(api_key=api_key, model=WORKOUT_MODEL)
    try:
        interpretation = asyncio.run(session.generate(client, args.prompt, ftp, refine=args.refine))
    except (GenerationError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(interpretation)
    return 0


def cmd_undo(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    if not session.undo():
        print("Nothing to undo.", file=sys.stderr)
        return 1
    return 0


def cmd_redo(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    if not session.redo():
        print("Nothing to redo.", file=sys.stderr)
        return 1
    return 0


def cmd_history(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    if args.restore:
        if not session.restore_version(args.restore):
            print(f"No version {args.restore}", file=sys.stderr)
            return 1
        return 0
    if args.clear:
        session.history.clear_history()
        return 0
    current = session.history.current_index
    for i, version in enumerate(session.history.versions):
        marker = ">" if i == current else " "
        label = version.description or version.workout_snapshot.name
        print(f"{marker} {version.id}  {version.timestamp}  {version.source.value:<6}  {label}")
    return 0


def cmd_prefs(session: WorkoutSession, prefs: Preferences, args: argparse.Namespace) -> int:
    print(f"FTP: {prefs.ftp} W")
    print(f"API key: {'set' if prefs.has_api_key else 'not set'}")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Structured interval workout builder")
    parser.add_argument(
        "--state-dir", type=Path, default=STATE_DIR, help="Directory holding session state"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("show", help="Show the current workout")
    p.add_argument("--zones", action="store_true", help="Print time in each power zone")
    p.add_argument("--chart", action="store_true", help="Print chart polygons as SVG points")
    p.set_defaults(func=cmd_show)

    p = sub.add_parser("new", help="Start a new empty workout")
    p.add_argument("name", nargs="?", default=None)
    p.set_defaults(func=cmd_new)

    p = sub.add_parser("add", help="Append (or insert) a segment with default values")
    p.add_argument("type", choices=[t.value for t in SegmentType])
    p.add_argument("--index", type=int, default=None)
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("set", help="Change fields of the segment at INDEX")
    p.add_argument("index", type=int)
    p.add_argument("assignments", nargs="+", metavar="field=value")
    p.set_defaults(func=cmd_set)

    p = sub.add_parser("remove", help="Remove the segment at INDEX")
    p.add_argument("index", type=int)
    p.set_defaults(func=cmd_remove)

    p = sub.add_parser("duplicate", help="Duplicate the segment at INDEX")
    p.add_argument("index", type=int)
    p.set_defaults(func=cmd_duplicate)

    p = sub.add_parser("move", help="Move a segment to a new position")
    p.add_argument("from_index", type=int)
    p.add_argument("to_index", type=int)
    p.set_defaults(func=cmd_move)

    p = sub.add_parser("import", help="Import a .zwo file")
    p.add_argument("path", type=Path)
    p.set_defaults(func=cmd_import)

    p = sub.add_parser("export", help="Export the workout as .zwo")
    p.add_argument("--out", type=Path, default=Path("."))
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("generate", help="Generate (or refine) a workout from a description")
    p.add_argument("prompt")
    p.add_argument("--refine", action="store_true", help="Modify the current workout")
    p.set_defaults(func=cmd_generate)

    p = sub.add_parser("undo", help="Step back one version")
    p.set_defaults(func=cmd_undo)

    p = sub.add_parser("redo", help="Step forward one version")
    p.set_defaults(func=cmd_redo)

    p = sub.add_parser("history", help="List, restore or clear versions")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--restore", metavar="VERSION_ID")
    group.add_argument("--clear", action="store_true")
    p.set_defaults(func=cmd_history)

    p = sub.add_parser("prefs", help="Show or change preferences")
    p.add_argument("--ftp", type=int, default=None)
    p.add_argument("--api-key", default=None)
    p.set_defaults(func=cmd_prefs)

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)

    store = JsonFileStore(args.state_dir)
    state = load_state(store)
    prefs = state.preferences
    if args.command == "prefs":
        prefs = Preferences(
            ftp=args.ftp if args.ftp is not None else prefs.ftp,
            api_key=args.api_key if args.api_key is not None else prefs.api_key,
        )

    session = WorkoutSession.create(state.workout, history=state.history, timer=ManualTimer())
    try:
        code = args.func(session, prefs, args)
    finally:
        session.close()
        save_state(store, session.workout, session.history, prefs)
    logger.debug("Command %s finished with %d", args.command, code)
    return code


if __name__ == "__main__":
    sys.exit(main())

"""Zwift workout (.zwo) export.

Converts an internal Workout → ``.zwo`` XML text that training platforms
import.  Attribute names, capitalization and two-decimal power formatting
are significant to consumers.

Power attributes in the file always mean *start* (``PowerLow``) and *end*
(``PowerHigh``).  A cooldown is stored with ``power_low < power_high`` but
travels high → low, so its bounds are swapped on the way out.

All functions are pure (no I/O, no network calls).
"""

from __future__ import annotations

import logging
from typing import assert_never
from xml.sax.saxutils import escape

from workout_engine.models.segments import (
    SEGMENT_CLASSES,
    Cooldown,
    FreeRide,
    Intervals,
    MaxEffort,
    Ramp,
    Segment,
    SteadyState,
    Warmup,
)
from workout_engine.models.workout import Workout

logger = logging.getLogger(__name__)

# Segment element vocabulary.
ELEMENT_WARMUP = "Warmup"
ELEMENT_COOLDOWN = "Cooldown"
ELEMENT_STEADY_STATE = "SteadyState"
ELEMENT_INTERVALS = "IntervalsT"
ELEMENT_RAMP = "Ramp"
ELEMENT_FREE_RIDE = "FreeRide"
ELEMENT_MAX_EFFORT = "MaxEffort"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_META_INDENT = " " * 8
_SEGMENT_INDENT = " " * 12

# escape() covers & < >; quotes are added for attribute values.
_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def to_zwo(workout: Workout) -> str:
    """Convert a Workout to a complete ``.zwo`` document.

    An empty segment list still yields a well-formed document with an empty
    ``<workout>`` body.
    """
    known = tuple(SEGMENT_CLASSES.values())
    segment_lines: list[str] = []
    for segment in workout.segments:
        if not isinstance(segment, known):
            logger.warning("Skipping unrecognized segment %r", segment)
            continue
        segment_lines.append(_SEGMENT_INDENT + _segment_to_xml(segment))

    lines = [
        XML_DECLARATION,
        "<workout_file>",
        f"{_META_INDENT}<author>{escape_xml(workout.author)}</author>",
        f"{_META_INDENT}<name>{escape_xml(workout.name)}</name>",
        f"{_META_INDENT}<description>{escape_xml(workout.description)}</description>",
        # sportType is a closed vocabulary and goes out verbatim.
        f"{_META_INDENT}<sportType>{workout.sport_type.value}</sportType>",
    ]
    if workout.tags:
        lines.append(f"{_META_INDENT}<tags>")
        lines.extend(
            f'{_SEGMENT_INDENT}<tag name="{escape_xml(tag)}"/>' for tag in workout.tags
        )
        lines.append(f"{_META_INDENT}</tags>")
    lines.append(f"{_META_INDENT}<workout>")
    lines.extend(segment_lines)
    lines.append(f"{_META_INDENT}</workout>")
    lines.append("</workout_file>")
    return "\n".join(lines)


def escape_xml(text: str) -> str:
    """Escape ``& < > " '`` for element text and attribute values."""
    return escape(text, _QUOTE_ENTITIES)


def format_power(power: float) -> str:
    """Exactly two decimal places, e.g. 0.6 → ``"0.60"``."""
    return f"{power:.2f}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _format_int(value: float) -> str:
    return str(int(round(value)))


def _element(tag: str, attributes: list[tuple[str, str]]) -> str:
    rendered = "".join(f' {name}="{value}"' for name, value in attributes)
    return f"<{tag}{rendered}/>"


def _with_cadence(attributes: list[tuple[str, str]], segment: Segment) -> list[tuple[str, str]]:
    if segment.cadence:
        attributes.append(("Cadence", _format_int(segment.cadence)))
    return attributes


def _segment_to_xml(segment: Segment) -> str:
    """Render one segment as a self-closing element."""
    if isinstance(segment, (Warmup, Ramp)):
        tag = ELEMENT_WARMUP if isinstance(segment, Warmup) else ELEMENT_RAMP
        return _element(tag, _with_cadence([
            ("Duration", _format_int(segment.duration)),
            ("PowerLow", format_power(segment.power_low)),
            ("PowerHigh", format_power(segment.power_high)),
        ], segment))

    if isinstance(segment, Cooldown):
        # Start power is the upper bound: stored high → PowerLow.
        return _element(ELEMENT_COOLDOWN, _with_cadence([
            ("Duration", _format_int(segment.duration)),
            ("PowerLow", format_power(segment.power_high)),
            ("PowerHigh", format_power(segment.power_low)),
        ], segment))

    if isinstance(segment, SteadyState):
        return _element(ELEMENT_STEADY_STATE, _with_cadence([
            ("Duration", _format_int(segment.duration)),
            ("Power", format_power(segment.power)),
        ], segment))

    if isinstance(segment, Intervals):
        return _element(ELEMENT_INTERVALS, _with_cadence([
            ("Repeat", _format_int(segment.repeat)),
            ("OnDuration", _format_int(segment.on_duration)),
            ("OffDuration", _format_int(segment.off_duration)),
            ("OnPower", format_power(segment.on_power)),
            ("OffPower", format_power(segment.off_power)),
        ], segment))

    if isinstance(segment, FreeRide):
        attributes = [("Duration", _format_int(segment.duration))]
        if segment.flat_road:
            attributes.append(("FlatRoad", "1"))
        return _element(ELEMENT_FREE_RIDE, attributes)

    if isinstance(segment, MaxEffort):
        return _element(ELEMENT_MAX_EFFORT, [("Duration", _format_int(segment.duration))])

    assert_never(segment)

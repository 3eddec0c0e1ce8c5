"""Zwift workout (.zwo) import.

Parses ``.zwo`` XML text → Workout.  Failures are returned as an
``ImportFailure`` value carrying an ``ImportErrorKind``; no partial workout
is ever returned.

Attribute mapping is the inverse of :mod:`workout_engine.serialization.zwo`:
a ``Cooldown`` element's ``PowerHigh`` (end power) becomes the stored
``power_low`` and its ``PowerLow`` (start power) the stored ``power_high``.
Segment identifiers never travel in the file; every imported segment gets a
fresh one.
"""

from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Union

from workout_engine.models.enums import (
    COOLDOWN_DEFAULT_DURATION_S,
    COOLDOWN_DEFAULT_POWER_HIGH,
    COOLDOWN_DEFAULT_POWER_LOW,
    FREERIDE_DEFAULT_DURATION_S,
    IMPORTED_WORKOUT_NAME,
    INTERVALS_DEFAULT_OFF_DURATION_S,
    INTERVALS_DEFAULT_OFF_POWER,
    INTERVALS_DEFAULT_ON_DURATION_S,
    INTERVALS_DEFAULT_ON_POWER,
    INTERVALS_DEFAULT_REPEAT,
    MAXEFFORT_DEFAULT_DURATION_S,
    RAMP_DEFAULT_DURATION_S,
    RAMP_DEFAULT_POWER_HIGH,
    RAMP_DEFAULT_POWER_LOW,
    STEADYSTATE_DEFAULT_DURATION_S,
    STEADYSTATE_DEFAULT_POWER,
    WARMUP_DEFAULT_DURATION_S,
    WARMUP_DEFAULT_POWER_HIGH,
    WARMUP_DEFAULT_POWER_LOW,
    SportType,
)
from workout_engine.models.segments import (
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
from workout_engine.serialization.zwo import (
    ELEMENT_COOLDOWN,
    ELEMENT_FREE_RIDE,
    ELEMENT_INTERVALS,
    ELEMENT_MAX_EFFORT,
    ELEMENT_RAMP,
    ELEMENT_STEADY_STATE,
    ELEMENT_WARMUP,
)

logger = logging.getLogger(__name__)


class ImportErrorKind(str, Enum):
    """Why a ``.zwo`` document could not be imported."""

    INVALID_XML = "invalid_xml"
    MISSING_ROOT = "missing_root"
    MISSING_WORKOUT_BODY = "missing_workout_body"
    NO_SEGMENTS = "no_segments"
    PARSE_FAILURE = "parse_failure"
    # Pre-flight gate (extension / size) when importing from a file.
    FILE_REJECTED = "file_rejected"


@dataclass(frozen=True)
class ImportSuccess:
    workout: Workout

    success: ClassVar[bool] = True


@dataclass(frozen=True)
class ImportFailure:
    kind: ImportErrorKind
    message: str

    success: ClassVar[bool] = False


ImportResult = Union[ImportSuccess, ImportFailure]

_MESSAGES = {
    ImportErrorKind.INVALID_XML: "Invalid XML format. Please check the file structure.",
    ImportErrorKind.MISSING_ROOT: "Missing workout_file element. This may not be a valid ZWO file.",
    ImportErrorKind.MISSING_WORKOUT_BODY: "Missing workout element. The file structure is incomplete.",
    ImportErrorKind.NO_SEGMENTS: "No valid workout segments found in the file.",
}


def _failure(kind: ImportErrorKind) -> ImportFailure:
    return ImportFailure(kind=kind, message=_MESSAGES[kind])


def from_zwo(xml_content: str) -> ImportResult:
    """Parse ``.zwo`` text into a Workout.

    Steps:
    1. Parse XML (malformed → INVALID_XML)
    2. Locate ``workout_file`` (absent → MISSING_ROOT)
    3. Locate nested ``workout`` (absent → MISSING_WORKOUT_BODY)
    4. Read metadata and tags
    5. Map direct children of ``workout`` to segments, skipping unknown tags
    6. No segments → NO_SEGMENTS

    Any other exception becomes PARSE_FAILURE with the underlying message.
    """
    try:
        try:
            root = ET.fromstring(xml_content)
        except ET.ParseError as exc:
            logger.info("Rejected .zwo content: %s", exc)
            return _failure(ImportErrorKind.INVALID_XML)

        workout_file = root if root.tag == "workout_file" else root.find(".//workout_file")
        if workout_file is None:
            return _failure(ImportErrorKind.MISSING_ROOT)

        workout_element = workout_file.find(".//workout")
        if workout_element is None:
            return _failure(ImportErrorKind.MISSING_WORKOUT_BODY)

        segments = [
            segment
            for segment in (_parse_segment(child) for child in workout_element)
            if segment is not None
        ]
        if not segments:
            return _failure(ImportErrorKind.NO_SEGMENTS)

        sport_raw = _element_text(workout_file, "sportType").lower()
        workout = Workout(
            name=_element_text(workout_file, "name") or IMPORTED_WORKOUT_NAME,
            description=_element_text(workout_file, "description"),
            author=_element_text(workout_file, "author"),
            sport_type=SportType.RUN if sport_raw == SportType.RUN.value else SportType.BIKE,
            segments=tuple(segments),
            tags=tuple(_parse_tags(workout_file)),
        )
    except Exception as exc:
        logger.warning("Unexpected error while parsing .zwo content: %s", exc)
        return ImportFailure(
            kind=ImportErrorKind.PARSE_FAILURE,
            message=f"Failed to parse ZWO file: {exc}",
        )

    logger.info("Imported workout %r with %d segments", workout.name, len(workout.segments))
    return ImportSuccess(workout=workout)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _element_text(parent: ET.Element, tag: str) -> str:
    element = parent.find(f".//{tag}")
    if element is None:
        return ""
    return "".join(element.itertext()).strip()


def _parse_tags(workout_file: ET.Element) -> list[str]:
    tags_element = workout_file.find(".//tags")
    if tags_element is None:
        return []
    return [
        name
        for name in (tag.get("name") for tag in tags_element.iter("tag"))
        if name
    ]


def _attr_float(element: ET.Element, name: str, default: float) -> float:
    raw = element.get(name)
    if raw is None:
        return default
    try:
        value = float(raw.strip())
    except ValueError:
        return default
    return default if math.isnan(value) else value


def _attr_int(element: ET.Element, name: str, default: int) -> int:
    return int(round(_attr_float(element, name, default)))


def _attr_bool(element: ET.Element, name: str) -> bool:
    raw = element.get(name)
    return raw is not None and (raw == "1" or raw.lower() == "true")


def _cadence_fields(element: ET.Element) -> dict[str, int]:
    """Cadence attributes that are present and positive."""
    fields: dict[str, int] = {}
    for attr, field_name in (
        ("Cadence", "cadence"),
        ("CadenceHigh", "cadence_high"),
        ("CadenceLow", "cadence_low"),
    ):
        value = _attr_float(element, attr, 0.0)
        if value > 0:
            fields[field_name] = int(round(value))
    return fields


def _parse_warmup(el: ET.Element) -> Segment:
    return Warmup(
        duration=_attr_int(el, "Duration", WARMUP_DEFAULT_DURATION_S),
        power_low=_attr_float(el, "PowerLow", WARMUP_DEFAULT_POWER_LOW),
        power_high=_attr_float(el, "PowerHigh", WARMUP_DEFAULT_POWER_HIGH),
        **_cadence_fields(el),
    )


def _parse_cooldown(el: ET.Element) -> Segment:
    # PowerLow is the start (upper bound), PowerHigh the end (lower bound).
    return Cooldown(
        duration=_attr_int(el, "Duration", COOLDOWN_DEFAULT_DURATION_S),
        power_low=_attr_float(el, "PowerHigh", COOLDOWN_DEFAULT_POWER_LOW),
        power_high=_attr_float(el, "PowerLow", COOLDOWN_DEFAULT_POWER_HIGH),
        **_cadence_fields(el),
    )


def _parse_steady_state(el: ET.Element) -> Segment:
    return SteadyState(
        duration=_attr_int(el, "Duration", STEADYSTATE_DEFAULT_DURATION_S),
        power=_attr_float(el, "Power", STEADYSTATE_DEFAULT_POWER),
        **_cadence_fields(el),
    )


def _parse_intervals(el: ET.Element) -> Segment:
    return Intervals(
        repeat=_attr_int(el, "Repeat", INTERVALS_DEFAULT_REPEAT),
        on_duration=_attr_int(el, "OnDuration", INTERVALS_DEFAULT_ON_DURATION_S),
        off_duration=_attr_int(el, "OffDuration", INTERVALS_DEFAULT_OFF_DURATION_S),
        on_power=_attr_float(el, "OnPower", INTERVALS_DEFAULT_ON_POWER),
        off_power=_attr_float(el, "OffPower", INTERVALS_DEFAULT_OFF_POWER),
        **_cadence_fields(el),
    )


def _parse_ramp(el: ET.Element) -> Segment:
    return Ramp(
        duration=_attr_int(el, "Duration", RAMP_DEFAULT_DURATION_S),
        power_low=_attr_float(el, "PowerLow", RAMP_DEFAULT_POWER_LOW),
        power_high=_attr_float(el, "PowerHigh", RAMP_DEFAULT_POWER_HIGH),
        **_cadence_fields(el),
    )


def _parse_free_ride(el: ET.Element) -> Segment:
    return FreeRide(
        duration=_attr_int(el, "Duration", FREERIDE_DEFAULT_DURATION_S),
        flat_road=_attr_bool(el, "FlatRoad"),
        **_cadence_fields(el),
    )


def _parse_max_effort(el: ET.Element) -> Segment:
    return MaxEffort(
        duration=_attr_int(el, "Duration", MAXEFFORT_DEFAULT_DURATION_S),
        **_cadence_fields(el),
    )


_SEGMENT_PARSERS: dict[str, Callable[[ET.Element], Segment]] = {
    ELEMENT_WARMUP: _parse_warmup,
    ELEMENT_COOLDOWN: _parse_cooldown,
    ELEMENT_STEADY_STATE: _parse_steady_state,
    ELEMENT_INTERVALS: _parse_intervals,
    ELEMENT_RAMP: _parse_ramp,
    ELEMENT_FREE_RIDE: _parse_free_ride,
    ELEMENT_MAX_EFFORT: _parse_max_effort,
}


def _parse_segment(element: Any) -> Segment | None:
    """Map one child element to a segment; unknown tags (and comments) → None."""
    if not isinstance(element.tag, str):
        return None
    parser = _SEGMENT_PARSERS.get(element.tag)
    if parser is None:
        logger.debug("Skipping unrecognized element <%s>", element.tag)
        return None
    return parser(element)

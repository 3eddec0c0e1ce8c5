"""Plain-data (JSON-ready) serialization of engine state.

The dict shape uses camelCase keys (``powerLow``, ``sportType`` …) so the
same representation serves persisted blobs and the generation boundary.

All functions are pure (no I/O).
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from workout_engine.models.enums import SegmentType, SportType, VersionSource
from workout_engine.models.segments import SEGMENT_CLASSES, Segment, new_segment_id
from workout_engine.models.workout import Preferences, Version, Workout, new_workout_id, utc_now_iso


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _require_object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------


def segment_to_dict(segment: Segment, include_id: bool = True) -> dict[str, Any]:
    """Convert a segment to a camelCase dict.

    Optional fields (cadence family, ``flatRoad``) are omitted when unset.
    """
    result: dict[str, Any] = {}
    if include_id:
        result["id"] = segment.id
    result["type"] = segment.segment_type.value
    for f in dataclasses.fields(segment):
        if f.name == "id":
            continue
        value = getattr(segment, f.name)
        if value is None or value is False:
            continue
        result[_to_camel(f.name)] = value
    return result


def segment_from_dict(data: dict[str, Any], assign_id: bool = False) -> Segment:
    """Build a segment from a camelCase dict.

    Missing fields take the factory defaults.  A fresh id is assigned when
    *assign_id* is set or when the dict carries none.

    Raises:
        ValueError: Not a JSON object, or unknown or missing ``type``.
    """
    data = _require_object(data, "Segment")
    try:
        segment_type = SegmentType(data["type"])
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unknown segment type: {data.get('type')!r}") from exc

    cls = SEGMENT_CLASSES[segment_type]
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        if f.name == "id":
            continue
        key = _to_camel(f.name)
        if key in data and data[key] is not None:
            kwargs[f.name] = data[key]
    if not assign_id and data.get("id"):
        kwargs["id"] = str(data["id"])
    else:
        kwargs["id"] = new_segment_id()
    return cls(**kwargs)


# ---------------------------------------------------------------------------
# Workout
# ---------------------------------------------------------------------------


def workout_to_dict(workout: Workout) -> dict[str, Any]:
    return {
        "id": workout.id,
        "name": workout.name,
        "description": workout.description,
        "author": workout.author,
        "sportType": workout.sport_type.value,
        "segments": [segment_to_dict(s) for s in workout.segments],
        "tags": list(workout.tags),
        "createdAt": workout.created_at,
        "updatedAt": workout.updated_at,
    }


def workout_from_dict(data: dict[str, Any]) -> Workout:
    data = _require_object(data, "Workout")
    sport_raw = str(data.get("sportType", SportType.BIKE.value)).lower()
    now = utc_now_iso()
    return Workout(
        id=str(data.get("id") or new_workout_id()),
        name=str(data.get("name", "")),
        description=str(data.get("description", "")),
        author=str(data.get("author", "")),
        sport_type=SportType.RUN if sport_raw == SportType.RUN.value else SportType.BIKE,
        segments=tuple(segment_from_dict(s) for s in data.get("segments", [])),
        tags=tuple(str(t) for t in data.get("tags", [])),
        created_at=str(data.get("createdAt") or now),
        updated_at=str(data.get("updatedAt") or now),
    )


def serialize_workout(workout: Workout) -> str:
    """Canonical JSON text of a workout, used for change detection."""
    return json.dumps(workout_to_dict(workout), sort_keys=True)


def copy_workout(workout: Workout) -> Workout:
    """Structural copy through the plain-data form (no shared objects)."""
    return workout_from_dict(json.loads(serialize_workout(workout)))


# ---------------------------------------------------------------------------
# History versions
# ---------------------------------------------------------------------------


def version_to_dict(version: Version) -> dict[str, Any]:
    result: dict[str, Any] = {
        "id": version.id,
        "workoutSnapshot": workout_to_dict(version.workout_snapshot),
        "timestamp": version.timestamp,
        "source": version.source.value,
    }
    if version.description is not None:
        result["description"] = version.description
    return result


def version_from_dict(data: dict[str, Any]) -> Version:
    data = _require_object(data, "Version")
    return Version(
        id=str(data["id"]),
        workout_snapshot=workout_from_dict(data["workoutSnapshot"]),
        timestamp=str(data["timestamp"]),
        source=VersionSource(data.get("source", VersionSource.MANUAL.value)),
        description=data.get("description"),
    )


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------


def preferences_to_dict(preferences: Preferences) -> dict[str, Any]:
    return {"ftp": preferences.ftp, "apiKey": preferences.api_key}


def preferences_from_dict(data: dict[str, Any]) -> Preferences:
    data = _require_object(data, "Preferences")
    defaults = Preferences()
    return Preferences(
        ftp=int(data.get("ftp", defaults.ftp)),
        api_key=str(data.get("apiKey", defaults.api_key)),
    )

"""Data models for the workout engine."""

from workout_engine.models.enums import PowerZone, SegmentType, SportType, VersionSource
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
    new_segment_id,
)
from workout_engine.models.workout import Preferences, Version, Workout

__all__ = [
    "Cooldown",
    "FreeRide",
    "Intervals",
    "MaxEffort",
    "PowerZone",
    "Preferences",
    "Ramp",
    "SEGMENT_CLASSES",
    "Segment",
    "SegmentType",
    "SportType",
    "SteadyState",
    "Version",
    "VersionSource",
    "Warmup",
    "Workout",
    "new_segment_id",
]

"""Segment factory — new segments with default values and fresh identifiers."""

from __future__ import annotations

import dataclasses

from workout_engine.models.enums import SegmentType
from workout_engine.models.segments import SEGMENT_CLASSES, Segment, new_segment_id
from workout_engine.models.workout import Workout


def create_segment(segment_type: SegmentType | str) -> Segment:
    """Create a segment of the given variant with its documented defaults.

    Defaults: warmup 600s 0.4→0.7; cooldown 300s 0.6→0.4; steadystate
    300s @ 0.75; intervals 4 × 60/60s @ 1.0/0.5; ramp 300s 0.5→1.0;
    freeride 600s; maxeffort 30s.
    """
    return SEGMENT_CLASSES[SegmentType(segment_type)]()


def duplicate_segment(segment: Segment) -> Segment:
    """Structural copy of *segment* with a new identifier.

    Segments are frozen, so the copy shares no mutable state with the
    original.
    """
    return dataclasses.replace(segment, id=new_segment_id())


def create_empty_workout() -> Workout:
    """A fresh workout with no segments."""
    return Workout()

"""Segment duration and average power.

All functions are pure.  Every variant of the ``Segment`` union is handled
explicitly; ``assert_never`` makes a missing branch a type error.
"""

from __future__ import annotations

from typing import Iterable, assert_never

from workout_engine.models.enums import FREERIDE_NOMINAL_POWER, MAXEFFORT_NOMINAL_POWER
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


def segment_duration(segment: Segment) -> int:
    """Duration of a segment in seconds.

    Intervals last ``repeat × (on_duration + off_duration)``; every other
    variant stores its duration directly.
    """
    if isinstance(segment, Intervals):
        return segment.repeat * (segment.on_duration + segment.off_duration)
    return segment.duration


def total_duration(segments: Iterable[Segment]) -> int:
    """Sum of segment durations in seconds.  Empty → 0."""
    return sum(segment_duration(s) for s in segments)


def average_power(segment: Segment) -> float:
    """Time-weighted average power of a segment as a fraction of FTP.

    Ramps (warmup, cooldown, ramp) average their two bounds.  Intervals
    weight on/off power by on/off duration (``repeat`` cancels).  Free ride
    and max effort have no target and use their nominal display powers.
    """
    if isinstance(segment, (Warmup, Cooldown, Ramp)):
        return (segment.power_low + segment.power_high) / 2
    if isinstance(segment, SteadyState):
        return segment.power
    if isinstance(segment, Intervals):
        cycle = segment.on_duration + segment.off_duration
        if cycle <= 0:
            return 0.0
        return (
            segment.on_power * segment.on_duration
            + segment.off_power * segment.off_duration
        ) / cycle
    if isinstance(segment, FreeRide):
        return FREERIDE_NOMINAL_POWER
    if isinstance(segment, MaxEffort):
        return MAXEFFORT_NOMINAL_POWER
    assert_never(segment)


def workout_average_power(segments: Iterable[Segment]) -> float:
    """Time-weighted average power across a segment list.  Empty → 0.0."""
    weighted = 0.0
    total = 0
    for segment in segments:
        duration = segment_duration(segment)
        weighted += duration * average_power(segment)
        total += duration
    if total == 0:
        return 0.0
    return weighted / total

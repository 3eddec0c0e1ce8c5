"""Tests for the segment factory."""

from __future__ import annotations

import pytest

from workout_engine.models import (
    Cooldown,
    FreeRide,
    Intervals,
    MaxEffort,
    Ramp,
    SegmentType,
    SteadyState,
    Warmup,
)
from workout_engine.workout_builder import create_empty_workout, create_segment, duplicate_segment


class TestCreateSegment:
    def test_warmup_defaults(self) -> None:
        segment = create_segment(SegmentType.WARMUP)
        assert isinstance(segment, Warmup)
        assert (segment.duration, segment.power_low, segment.power_high) == (600, 0.4, 0.7)

    def test_cooldown_defaults(self) -> None:
        segment = create_segment(SegmentType.COOLDOWN)
        assert isinstance(segment, Cooldown)
        assert (segment.duration, segment.power_low, segment.power_high) == (300, 0.4, 0.6)

    def test_steady_state_defaults(self) -> None:
        segment = create_segment("steadystate")
        assert isinstance(segment, SteadyState)
        assert (segment.duration, segment.power) == (300, 0.75)

    def test_intervals_defaults(self) -> None:
        segment = create_segment(SegmentType.INTERVALS)
        assert isinstance(segment, Intervals)
        assert (segment.repeat, segment.on_duration, segment.off_duration) == (4, 60, 60)
        assert (segment.on_power, segment.off_power) == (1.0, 0.5)

    def test_other_defaults(self) -> None:
        ramp = create_segment(SegmentType.RAMP)
        free = create_segment(SegmentType.FREERIDE)
        sprint = create_segment(SegmentType.MAXEFFORT)
        assert isinstance(ramp, Ramp) and (ramp.power_low, ramp.power_high) == (0.5, 1.0)
        assert isinstance(free, FreeRide) and free.duration == 600 and not free.flat_road
        assert isinstance(sprint, MaxEffort) and sprint.duration == 30

    def test_fresh_id_each_time(self) -> None:
        assert create_segment(SegmentType.RAMP).id != create_segment(SegmentType.RAMP).id

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError):
            create_segment("tempo")


class TestDuplicate:
    def test_same_fields_new_id(self) -> None:
        original = Intervals(repeat=6, on_power=1.15, cadence=95)
        copy = duplicate_segment(original)
        assert copy.id != original.id
        assert copy.repeat == 6
        assert copy.on_power == 1.15
        assert copy.cadence == 95


class TestEmptyWorkout:
    def test_empty(self) -> None:
        workout = create_empty_workout()
        assert workout.is_empty
        assert workout.name == "New Workout"

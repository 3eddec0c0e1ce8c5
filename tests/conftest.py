"""Shared test fixtures: sample segments, workouts and sessions."""

from __future__ import annotations

import pytest

from workout_engine.history import HistoryEngine, HistoryRecorder, ManualTimer
from workout_engine.models import (
    Cooldown,
    FreeRide,
    Intervals,
    MaxEffort,
    Ramp,
    SportType,
    SteadyState,
    Warmup,
    Workout,
)
from workout_engine.session import WorkoutSession
from workout_engine.workout_builder import WorkoutEditor


@pytest.fixture
def every_variant() -> list:
    """One segment of each variant, with non-default values and some cadence."""
    return [
        Warmup(duration=600, power_low=0.45, power_high=0.75, cadence=90),
        SteadyState(duration=1200, power=0.88),
        Intervals(repeat=5, on_duration=180, off_duration=120, on_power=1.1, off_power=0.55, cadence=100),
        Ramp(duration=300, power_low=0.6, power_high=1.2),
        FreeRide(duration=420, flat_road=True),
        MaxEffort(duration=20),
        Cooldown(duration=300, power_low=0.4, power_high=0.65),
    ]


@pytest.fixture
def full_workout(every_variant) -> Workout:
    """Seven-segment workout with metadata and tags."""
    return Workout(
        name="Sweet Spot & Sprints",
        description='Builds "threshold" <stamina>',
        author="Coach O'Brien",
        sport_type=SportType.BIKE,
        segments=tuple(every_variant),
        tags=("FTP", "Intervals"),
    )


@pytest.fixture
def hour_at_ftp() -> Workout:
    """Exactly one hour held at threshold."""
    return Workout(name="Hour of Power", segments=(SteadyState(duration=3600, power=1.0),))


@pytest.fixture
def timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def history() -> HistoryEngine:
    return HistoryEngine()


@pytest.fixture
def session(history, timer) -> WorkoutSession:
    """Session wired to a deterministic timer."""
    editor = WorkoutEditor()
    recorder = HistoryRecorder(history, timer)
    return WorkoutSession(editor, history, recorder)

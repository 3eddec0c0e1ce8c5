"""Training load estimate for a planned workout: normalized power and TSS-style score.

Each segment contributes at its time-weighted average power, so the
estimate works on the prescription rather than on recorded data.

References:
    - Coggan & Allen (2010): Normalized Power, Intensity Factor, TSS.
      One hour held exactly at FTP scores 100.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from workout_engine.math.metrics import average_power, segment_duration, workout_average_power
from workout_engine.models.segments import Segment
from workout_engine.models.workout import Workout

_SECONDS_PER_HOUR = 3600
_SCORE_SCALE = 100


def _duration_power_arrays(segments: Sequence[Segment]) -> tuple[np.ndarray, np.ndarray]:
    durations = np.array([segment_duration(s) for s in segments], dtype=np.float64)
    powers = np.array([average_power(s) for s in segments], dtype=np.float64)
    return durations, powers


def normalized_power(segments: Sequence[Segment]) -> float:
    """Normalized-power-style estimate as a fraction of FTP.

    NP = sqrt(Σ duration × avg_power² / Σ duration).  Empty or zero-length
    workouts return 0.0.
    """
    if not segments:
        return 0.0
    durations, powers = _duration_power_arrays(segments)
    total = float(durations.sum())
    if total == 0:
        return 0.0
    weighted_sum = float(np.dot(durations, powers ** 2))
    return math.sqrt(weighted_sum / total)


def intensity_factor(segments: Sequence[Segment]) -> float:
    """Intensity factor (NP / FTP).  Powers are already FTP fractions."""
    return normalized_power(segments)


def estimate_training_load(segments: Sequence[Segment]) -> int:
    """Estimate a training-stress score for a segment list.

    score = round(hours × NP² × 100), rounded half up.

    Args:
        segments: Ordered workout segments.

    Returns:
        Integer score; 0 for an empty or zero-length workout.
    """
    if not segments:
        return 0
    durations, _ = _duration_power_arrays(segments)
    total = float(durations.sum())
    if total == 0:
        return 0
    np_fraction = normalized_power(segments)
    score = (total / _SECONDS_PER_HOUR) * np_fraction ** 2 * _SCORE_SCALE
    return int(math.floor(score + 0.5))


@dataclass(frozen=True)
class WorkoutSummary:
    """Derived metrics for display next to a workout."""

    total_duration_s: int
    average_power: float        # FTP fraction, time-weighted
    normalized_power: float     # FTP fraction
    training_load: int
    segment_count: int


def workout_summary(workout: Workout) -> WorkoutSummary:
    """Compute all derived metrics for a workout in one pass."""
    segments = workout.segments
    return WorkoutSummary(
        total_duration_s=sum(segment_duration(s) for s in segments),
        average_power=workout_average_power(segments),
        normalized_power=normalized_power(segments),
        training_load=estimate_training_load(segments),
        segment_count=len(segments),
    )

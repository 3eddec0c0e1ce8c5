"""Workout builder — segment factory and the editing state object."""

from workout_engine.workout_builder.editor import WorkoutEditor
from workout_engine.workout_builder.factory import (
    create_empty_workout,
    create_segment,
    duplicate_segment,
)

__all__ = [
    "WorkoutEditor",
    "create_empty_workout",
    "create_segment",
    "duplicate_segment",
]

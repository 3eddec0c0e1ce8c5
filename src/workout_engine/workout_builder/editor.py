"""WorkoutEditor — explicit editing state for one workout.

Holds the current Workout and the selected segment id.  All changes go
through the operations below; each one produces a new Workout value with a
fresh ``updated_at`` and notifies listeners (the history recorder
subscribes here).
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable

from workout_engine.models.enums import SegmentType
from workout_engine.models.segments import Segment
from workout_engine.models.workout import Workout, utc_now_iso
from workout_engine.workout_builder.factory import (
    create_empty_workout,
    create_segment,
    duplicate_segment,
)

logger = logging.getLogger(__name__)

WorkoutListener = Callable[[Workout], None]

# Workout fields update_workout() may change.
_EDITABLE_WORKOUT_FIELDS = frozenset({"name", "description", "author", "sport_type", "tags"})


class WorkoutEditor:
    """Editing operations over a single Workout.

    Usage::

        editor = WorkoutEditor()
        editor.subscribe(recorder.on_workout_changed)
        editor.add_segment(SegmentType.WARMUP)
    """

    def __init__(self, workout: Workout | None = None) -> None:
        self._workout = workout if workout is not None else create_empty_workout()
        self._selected_segment_id: str | None = None
        self._listeners: list[WorkoutListener] = []

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def workout(self) -> Workout:
        return self._workout

    @property
    def selected_segment_id(self) -> str | None:
        return self._selected_segment_id

    @property
    def selected_segment(self) -> Segment | None:
        if self._selected_segment_id is None:
            return None
        return self._find(self._selected_segment_id)

    def subscribe(self, listener: WorkoutListener) -> Callable[[], None]:
        """Register *listener* for workout changes.  Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Whole-workout operations
    # ------------------------------------------------------------------

    def set_workout(self, workout: Workout) -> None:
        """Replace the workout wholesale and clear the selection."""
        self._selected_segment_id = None
        self._commit(workout, touch=False)

    def update_workout(self, **fields: Any) -> None:
        """Update metadata fields (name, description, author, sport_type, tags)."""
        unknown = set(fields) - _EDITABLE_WORKOUT_FIELDS
        if unknown:
            raise ValueError(f"Cannot update workout fields: {sorted(unknown)}")
        if "tags" in fields:
            fields["tags"] = tuple(fields["tags"])
        self._commit(dataclasses.replace(self._workout, **fields))

    def set_segments(self, segments: list[Segment] | tuple[Segment, ...]) -> None:
        self._commit(dataclasses.replace(self._workout, segments=tuple(segments)))

    def reset(self) -> None:
        """Start over with a fresh empty workout."""
        self._selected_segment_id = None
        self._commit(create_empty_workout(), touch=False)

    # ------------------------------------------------------------------
    # Segment operations
    # ------------------------------------------------------------------

    def add_segment(self, segment_type: SegmentType | str, index: int | None = None) -> Segment:
        """Insert a default segment (at the end unless *index* is given) and select it."""
        segment = create_segment(segment_type)
        segments = list(self._workout.segments)
        segments.insert(len(segments) if index is None else index, segment)
        self._selected_segment_id = segment.id
        self._commit(dataclasses.replace(self._workout, segments=tuple(segments)))
        return segment

    def update_segment(self, segment_id: str, **changes: Any) -> None:
        """Change fields of one segment, keeping its identifier."""
        if "id" in changes:
            raise ValueError("Segment id cannot be changed")
        if self._find(segment_id) is None:
            return
        segments = tuple(
            dataclasses.replace(s, **changes) if s.id == segment_id else s
            for s in self._workout.segments
        )
        self._commit(dataclasses.replace(self._workout, segments=segments))

    def remove_segment(self, segment_id: str) -> None:
        if self._find(segment_id) is None:
            return
        segments = tuple(s for s in self._workout.segments if s.id != segment_id)
        if self._selected_segment_id == segment_id:
            self._selected_segment_id = None
        self._commit(dataclasses.replace(self._workout, segments=segments))

    def duplicate_segment(self, segment_id: str) -> Segment | None:
        """Insert a copy right after the original and select the copy."""
        segments = list(self._workout.segments)
        for index, segment in enumerate(segments):
            if segment.id == segment_id:
                copy = duplicate_segment(segment)
                segments.insert(index + 1, copy)
                self._selected_segment_id = copy.id
                self._commit(dataclasses.replace(self._workout, segments=tuple(segments)))
                return copy
        return None

    def move_segment(self, from_index: int, to_index: int) -> None:
        """Move the segment at *from_index* so it ends up at *to_index*."""
        segments = list(self._workout.segments)
        if not 0 <= from_index < len(segments):
            raise IndexError(f"No segment at index {from_index}")
        moved = segments.pop(from_index)
        segments.insert(to_index, moved)
        self._commit(dataclasses.replace(self._workout, segments=tuple(segments)))

    def select_segment(self, segment_id: str | None) -> None:
        self._selected_segment_id = segment_id

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _find(self, segment_id: str) -> Segment | None:
        for segment in self._workout.segments:
            if segment.id == segment_id:
                return segment
        return None

    def _commit(self, workout: Workout, touch: bool = True) -> None:
        if touch:
            workout = dataclasses.replace(workout, updated_at=utc_now_iso())
        self._workout = workout
        logger.debug("Workout %s now has %d segments", workout.id, len(workout.segments))
        for listener in list(self._listeners):
            listener(workout)

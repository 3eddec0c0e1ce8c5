"""HistoryEngine — linear, branchable undo/redo over workout snapshots."""

from __future__ import annotations

import logging
from typing import Any

from workout_engine.models.enums import VersionSource
from workout_engine.models.workout import Version, Workout
from workout_engine.serialization.state import (
    copy_workout,
    serialize_workout,
    version_from_dict,
    version_to_dict,
)

logger = logging.getLogger(__name__)

MAX_HISTORY_SIZE = 50


class HistoryEngine:
    """Ordered list of Versions plus a cursor.

    ``current_index`` is -1 when the history is empty.  Saving after an undo
    discards every version past the cursor (redo history is lost).  When the
    list grows beyond ``max_size`` the oldest version is dropped for good.

    Every snapshot handed in or out is a structural copy, so mutating a
    returned workout can never reach back into history.

    Usage:
        history = HistoryEngine()
        history.save_version(workout, VersionSource.MANUAL)
        previous = history.undo()
    """

    def __init__(self, max_size: int = MAX_HISTORY_SIZE) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self._max_size = max_size
        self._versions: list[Version] = []
        self._current_index = -1
        self._last_saved: str | None = None
        self._time_travel = False

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def versions(self) -> tuple[Version, ...]:
        return tuple(self._versions)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_version(self) -> Version | None:
        if 0 <= self._current_index < len(self._versions):
            return self._versions[self._current_index]
        return None

    @property
    def last_saved_snapshot(self) -> str | None:
        """Serialized form of the most recently saved or visited snapshot."""
        return self._last_saved

    @property
    def is_time_traveling(self) -> bool:
        """True right after undo/redo/restore, until consumed."""
        return self._time_travel

    def consume_time_travel(self) -> bool:
        """Return the time-travel flag and clear it."""
        was_set = self._time_travel
        self._time_travel = False
        return was_set

    def can_undo(self) -> bool:
        return self._current_index > 0

    def can_redo(self) -> bool:
        return self._current_index < len(self._versions) - 1

    def matches_last_saved(self, workout: Workout) -> bool:
        return self._last_saved is not None and serialize_workout(workout) == self._last_saved

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def save_version(
        self,
        workout: Workout,
        source: VersionSource = VersionSource.MANUAL,
        description: str | None = None,
    ) -> Version:
        """Append a snapshot of *workout* and move the cursor onto it."""
        if self._current_index < len(self._versions) - 1:
            dropped = len(self._versions) - 1 - self._current_index
            del self._versions[self._current_index + 1:]
            logger.debug("Discarded %d redo versions", dropped)

        version = Version(
            workout_snapshot=copy_workout(workout),
            source=VersionSource(source),
            description=description,
        )
        self._versions.append(version)
        self._current_index = len(self._versions) - 1

        if len(self._versions) > self._max_size:
            evicted = self._versions.pop(0)
            self._current_index -= 1
            logger.debug("History full, evicted version %s", evicted.id)

        self._last_saved = serialize_workout(version.workout_snapshot)
        logger.info(
            "Saved %s version %s (%d/%d)",
            version.source.value,
            version.id,
            self._current_index + 1,
            len(self._versions),
        )
        return version

    def undo(self) -> Workout | None:
        """Step back one version; None when there is nothing before current."""
        if self._current_index <= 0:
            return None
        return self._move_to(self._current_index - 1)

    def redo(self) -> Workout | None:
        """Step forward one version; None when already at the newest."""
        if self._current_index >= len(self._versions) - 1:
            return None
        return self._move_to(self._current_index + 1)

    def restore_version(self, version_id: str) -> Workout | None:
        """Jump the cursor to *version_id*; None when no such version exists."""
        for index, version in enumerate(self._versions):
            if version.id == version_id:
                return self._move_to(index)
        return None

    def clear_history(self) -> None:
        self._versions.clear()
        self._current_index = -1
        self._last_saved = None
        self._time_travel = False
        logger.info("History cleared")

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "versions": [version_to_dict(v) for v in self._versions],
            "currentIndex": self._current_index,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], max_size: int = MAX_HISTORY_SIZE) -> HistoryEngine:
        """Rehydrate a history; the cursor is clamped into the version range."""
        engine = cls(max_size=max_size)
        versions = [version_from_dict(v) for v in data.get("versions", [])]
        if len(versions) > max_size:
            versions = versions[-max_size:]
        engine._versions = versions
        index = int(data.get("currentIndex", len(versions) - 1))
        engine._current_index = max(-1, min(index, len(versions) - 1))
        current = engine.current_version
        if current is not None:
            engine._last_saved = serialize_workout(current.workout_snapshot)
        return engine

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _move_to(self, index: int) -> Workout:
        self._current_index = index
        self._time_travel = True
        snapshot = self._versions[index].workout_snapshot
        self._last_saved = serialize_workout(snapshot)
        logger.debug("Moved to version %d/%d", index + 1, len(self._versions))
        return copy_workout(snapshot)

"""HistoryRecorder — debounced automatic capture of workout changes."""

from __future__ import annotations

import logging
import threading
from functools import partial

from workout_engine.history.engine import HistoryEngine
from workout_engine.history.timers import Timer
from workout_engine.models.enums import VersionSource
from workout_engine.models.workout import Workout

logger = logging.getLogger(__name__)

DEBOUNCE_DELAY_S = 1.0


class HistoryRecorder:
    """Feeds editor changes into a HistoryEngine after a quiet period.

    On every change:
    1. Cancel any pending capture
    2. Change caused by undo/redo → clear the flag, record nothing
    3. Empty workout → record nothing
    4. Identical to the last saved snapshot → record nothing
    5. Otherwise capture the latest state once *delay* seconds pass quietly

    Timers may fire on another thread.  A lock serialises changes and
    captures, and each scheduled capture carries the change number it was
    scheduled for; a capture that fires after a newer change is ignored.
    """

    def __init__(
        self,
        history: HistoryEngine,
        timer: Timer,
        delay: float = DEBOUNCE_DELAY_S,
    ) -> None:
        self._history = history
        self._timer = timer
        self._delay = delay
        self._pending: Workout | None = None
        self._change_number = 0
        self._lock = threading.RLock()

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def on_workout_changed(self, workout: Workout) -> None:
        with self._lock:
            self._timer.cancel()
            self._pending = None
            self._change_number += 1

            if self._history.consume_time_travel():
                return
            if workout.is_empty:
                return
            if self._history.matches_last_saved(workout):
                return

            self._pending = workout
            self._timer.schedule(self._delay, partial(self._capture, self._change_number))

    def flush(self) -> None:
        """Capture the pending change immediately, if any."""
        with self._lock:
            self._timer.cancel()
            self._capture(self._change_number)

    def _capture(self, change_number: int) -> None:
        with self._lock:
            if change_number != self._change_number:
                logger.debug("Skipped stale capture %d", change_number)
                return
            workout = self._pending
            self._pending = None
            if workout is None:
                return
            self._history.save_version(workout, VersionSource.MANUAL)

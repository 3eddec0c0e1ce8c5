"""History module — versioned undo/redo and debounced capture."""

from workout_engine.history.engine import MAX_HISTORY_SIZE, HistoryEngine
from workout_engine.history.recorder import DEBOUNCE_DELAY_S, HistoryRecorder
from workout_engine.history.timers import ManualTimer, SchedulerTimer, Timer

__all__ = [
    "DEBOUNCE_DELAY_S",
    "HistoryEngine",
    "HistoryRecorder",
    "MAX_HISTORY_SIZE",
    "ManualTimer",
    "SchedulerTimer",
    "Timer",
]

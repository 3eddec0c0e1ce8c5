"""WorkoutSession — one editor, its history and the recorder wiring them."""

from __future__ import annotations

import logging
from typing import Awaitable, Protocol

from workout_engine.history.engine import HistoryEngine
from workout_engine.history.recorder import DEBOUNCE_DELAY_S, HistoryRecorder
from workout_engine.history.timers import ManualTimer, Timer
from workout_engine.models.enums import VersionSource
from workout_engine.models.workout import Workout
from workout_engine.workout_builder.editor import WorkoutEditor

logger = logging.getLogger(__name__)

# Characters of the prompt kept in an AI version's description.
_DESCRIPTION_PROMPT_CHARS = 50


class GeneratedWorkout(Protocol):
    workout: Workout
    interpretation: str


class WorkoutGenerator(Protocol):
    def generate(
        self, prompt: str, ftp: int, existing: Workout | None = None
    ) -> Awaitable[GeneratedWorkout]: ...


class WorkoutSession:
    """Explicit editing session state.

    Usage:
        session = WorkoutSession.create()
        session.editor.add_segment(SegmentType.WARMUP)
        session.save_manual_change()
        session.undo()
    """

    def __init__(
        self,
        editor: WorkoutEditor,
        history: HistoryEngine,
        recorder: HistoryRecorder,
    ) -> None:
        self.editor = editor
        self.history = history
        self.recorder = recorder
        self._unsubscribe = editor.subscribe(recorder.on_workout_changed)

    @classmethod
    def create(
        cls,
        workout: Workout | None = None,
        history: HistoryEngine | None = None,
        timer: Timer | None = None,
        delay: float = DEBOUNCE_DELAY_S,
    ) -> WorkoutSession:
        history = history or HistoryEngine()
        recorder = HistoryRecorder(history, timer or ManualTimer(), delay=delay)
        return cls(WorkoutEditor(workout), history, recorder)

    @property
    def workout(self) -> Workout:
        return self.editor.workout

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def undo(self) -> bool:
        """Swap in the previous version.  Returns False when there is none."""
        self.recorder.flush()
        return self._swap_in(self.history.undo())

    def redo(self) -> bool:
        """Swap in the next version.  Returns False when there is none."""
        self.recorder.flush()
        return self._swap_in(self.history.redo())

    def restore_version(self, version_id: str) -> bool:
        self.recorder.flush()
        return self._swap_in(self.history.restore_version(version_id))

    def save_manual_change(self) -> None:
        """Record any pending edit now instead of waiting for the quiet period."""
        self.recorder.flush()

    def apply_generation(self, workout: Workout, description: str | None = None) -> None:
        """Record *workout* as an AI version and make it the current workout."""
        self.recorder.flush()
        self.history.save_version(workout, VersionSource.AI, description)
        self.editor.set_workout(workout)

    async def generate(
        self,
        generator: WorkoutGenerator,
        prompt: str,
        ftp: int,
        refine: bool = False,
    ) -> str:
        """Run a generation (or refinement) and apply it.

        Nothing changes when the generator raises.

        Returns:
            The generator's interpretation line.
        """
        existing = None
        if refine:
            if self.workout.is_empty:
                raise ValueError("No workout to refine. Generate a workout first.")
            existing = self.workout

        result = await generator.generate(prompt, ftp, existing)
        label = "Refined" if refine else "Generated"
        self.apply_generation(result.workout, f"{label}: {prompt[:_DESCRIPTION_PROMPT_CHARS]}")
        logger.info("%s", result.interpretation)
        return result.interpretation

    def close(self) -> None:
        """Flush pending capture and detach the recorder from the editor."""
        self.recorder.flush()
        self._unsubscribe()

    def _swap_in(self, snapshot: Workout | None) -> bool:
        if snapshot is None:
            return False
        selected = self.editor.selected_segment_id
        self.editor.set_workout(snapshot)
        if selected is not None and any(s.id == selected for s in snapshot.segments):
            self.editor.select_segment(selected)
        return True

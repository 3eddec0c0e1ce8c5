"""Session state persistence over a simple key → text blob store.

Three blobs are kept independently: ``workout``, ``history`` and
``preferences``.  A blob that is missing or cannot be decoded falls back to
its default; the others still load.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Protocol, TypeVar

from workout_engine.history.engine import HistoryEngine
from workout_engine.models.workout import Preferences, Workout
from workout_engine.serialization.state import (
    preferences_from_dict,
    preferences_to_dict,
    workout_from_dict,
    workout_to_dict,
)
from workout_engine.workout_builder.factory import create_empty_workout

logger = logging.getLogger(__name__)

WORKOUT_KEY = "workout"
HISTORY_KEY = "history"
PREFERENCES_KEY = "preferences"

T = TypeVar("T")


class BlobStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def put(self, key: str, text: str) -> None: ...


class JsonFileStore:
    """One ``<key>.json`` file per blob inside *directory*."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        safe = "".join(c if c.isalnum() or c in "-_" else "" for c in key) or "blob"
        return self.directory / f"{safe}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def put(self, key: str, text: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(text, encoding="utf-8")
        tmp.replace(path)


class MemoryStore:
    """Dict-backed store."""

    def __init__(self) -> None:
        self.blobs: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.blobs.get(key)

    def put(self, key: str, text: str) -> None:
        self.blobs[key] = text


@dataclass
class SessionState:
    workout: Workout = field(default_factory=create_empty_workout)
    history: HistoryEngine = field(default_factory=HistoryEngine)
    preferences: Preferences = field(default_factory=Preferences)


def save_state(
    store: BlobStore,
    workout: Workout,
    history: HistoryEngine,
    preferences: Preferences,
) -> None:
    store.put(WORKOUT_KEY, json.dumps(workout_to_dict(workout), indent=2))
    store.put(HISTORY_KEY, json.dumps(history.to_dict()))
    store.put(PREFERENCES_KEY, json.dumps(preferences_to_dict(preferences), indent=2))
    logger.info("Saved session state (%d history versions)", len(history.versions))


def load_state(store: BlobStore) -> SessionState:
    state = SessionState()
    state.workout = _load_blob(store, WORKOUT_KEY, workout_from_dict, state.workout)
    state.history = _load_blob(store, HISTORY_KEY, HistoryEngine.from_dict, state.history)
    state.preferences = _load_blob(store, PREFERENCES_KEY, preferences_from_dict, state.preferences)
    return state


def _load_blob(
    store: BlobStore,
    key: str,
    decode: Callable[[dict[str, Any]], T],
    default: T,
) -> T:
    text = store.get(key)
    if text is None:
        return default
    try:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return decode(data)
    except (ValueError, KeyError, TypeError) as exc:
        logger.warning("Ignoring unreadable %s blob: %s", key, exc)
        return default

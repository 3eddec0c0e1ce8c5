"""Workout and history version models."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from workout_engine.models.enums import (
    DEFAULT_FTP_WATTS,
    DEFAULT_WORKOUT_NAME,
    SportType,
    VersionSource,
)
from workout_engine.models.segments import Segment


def utc_now_iso() -> str:
    """Current UTC time as an ISO 8601 string (millisecond precision)."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def new_workout_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Workout:
    """A complete workout.

    Segment order is execution order and is preserved by every
    transformation.  A workout with no segments is valid ("not yet built").
    """

    name: str = DEFAULT_WORKOUT_NAME
    description: str = ""
    author: str = ""
    sport_type: SportType = SportType.BIKE
    segments: tuple[Segment, ...] = field(default_factory=tuple)
    tags: tuple[str, ...] = field(default_factory=tuple)
    id: str = field(default_factory=new_workout_id)
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)

    @property
    def is_empty(self) -> bool:
        return not self.segments


@dataclass(frozen=True)
class Version:
    """One immutable history entry.

    Owned by the HistoryEngine.  ``workout_snapshot`` is a structural copy
    that shares nothing with the live workout.
    """

    workout_snapshot: Workout
    source: VersionSource
    description: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(default_factory=utc_now_iso)


@dataclass(frozen=True)
class Preferences:
    """User preferences persisted alongside the workout."""

    ftp: int = DEFAULT_FTP_WATTS       # threshold power, watts
    api_key: str = ""                  # language-model provider credential

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

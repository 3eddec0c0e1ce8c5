"""Segment models — one frozen dataclass per segment variant.

``Segment`` is a closed union over the seven variants.  Consumers branch
with ``isinstance`` and finish with ``assert_never`` so a new variant shows
up as a type error everywhere it is not handled.

Field defaults are the segment factory defaults.  Every segment carries a
process-unique ``id`` that stays stable for the segment's lifetime; the
editor replaces a segment via ``dataclasses.replace`` and keeps its id.
Power fields are fractions of FTP; durations are whole seconds.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import ClassVar, Union

from workout_engine.models.enums import (
    COOLDOWN_DEFAULT_DURATION_S,
    COOLDOWN_DEFAULT_POWER_HIGH,
    COOLDOWN_DEFAULT_POWER_LOW,
    FREERIDE_DEFAULT_DURATION_S,
    INTERVALS_DEFAULT_OFF_DURATION_S,
    INTERVALS_DEFAULT_OFF_POWER,
    INTERVALS_DEFAULT_ON_DURATION_S,
    INTERVALS_DEFAULT_ON_POWER,
    INTERVALS_DEFAULT_REPEAT,
    MAXEFFORT_DEFAULT_DURATION_S,
    RAMP_DEFAULT_DURATION_S,
    RAMP_DEFAULT_POWER_HIGH,
    RAMP_DEFAULT_POWER_LOW,
    STEADYSTATE_DEFAULT_DURATION_S,
    STEADYSTATE_DEFAULT_POWER,
    WARMUP_DEFAULT_DURATION_S,
    WARMUP_DEFAULT_POWER_HIGH,
    WARMUP_DEFAULT_POWER_LOW,
    SegmentType,
)


def new_segment_id() -> str:
    """Return a fresh opaque segment identifier."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Warmup:
    """Power ramps linearly from ``power_low`` up to ``power_high``."""

    duration: int = WARMUP_DEFAULT_DURATION_S
    power_low: float = WARMUP_DEFAULT_POWER_LOW
    power_high: float = WARMUP_DEFAULT_POWER_HIGH
    cadence: int | None = None
    cadence_high: int | None = None
    cadence_low: int | None = None
    id: str = field(default_factory=new_segment_id)

    segment_type: ClassVar[SegmentType] = SegmentType.WARMUP


@dataclass(frozen=True)
class Cooldown:
    """Power ramps linearly from ``power_high`` down to ``power_low``.

    ``power_low < power_high`` always holds; the direction of travel comes
    from the variant, not from which bound is larger.
    """

    duration: int = COOLDOWN_DEFAULT_DURATION_S
    power_low: float = COOLDOWN_DEFAULT_POWER_LOW
    power_high: float = COOLDOWN_DEFAULT_POWER_HIGH
    cadence: int | None = None
    cadence_high: int | None = None
    cadence_low: int | None = None
    id: str = field(default_factory=new_segment_id)

    segment_type: ClassVar[SegmentType] = SegmentType.COOLDOWN


@dataclass(frozen=True)
class SteadyState:
    """Constant power for ``duration`` seconds."""

    duration: int = STEADYSTATE_DEFAULT_DURATION_S
    power: float = STEADYSTATE_DEFAULT_POWER
    cadence: int | None = None
    cadence_high: int | None = None
    cadence_low: int | None = None
    id: str = field(default_factory=new_segment_id)

    segment_type: ClassVar[SegmentType] = SegmentType.STEADYSTATE


@dataclass(frozen=True)
class Intervals:
    """``repeat`` cycles of an on-phase followed by an off-phase."""

    repeat: int = INTERVALS_DEFAULT_REPEAT
    on_duration: int = INTERVALS_DEFAULT_ON_DURATION_S
    off_duration: int = INTERVALS_DEFAULT_OFF_DURATION_S
    on_power: float = INTERVALS_DEFAULT_ON_POWER
    off_power: float = INTERVALS_DEFAULT_OFF_POWER
    cadence: int | None = None
    cadence_high: int | None = None
    cadence_low: int | None = None
    id: str = field(default_factory=new_segment_id)

    segment_type: ClassVar[SegmentType] = SegmentType.INTERVALS


@dataclass(frozen=True)
class Ramp:
    """Linear ramp low → high (same shape as a warmup)."""

    duration: int = RAMP_DEFAULT_DURATION_S
    power_low: float = RAMP_DEFAULT_POWER_LOW
    power_high: float = RAMP_DEFAULT_POWER_HIGH
    cadence: int | None = None
    cadence_high: int | None = None
    cadence_low: int | None = None
    id: str = field(default_factory=new_segment_id)

    segment_type: ClassVar[SegmentType] = SegmentType.RAMP


@dataclass(frozen=True)
class FreeRide:
    """No power target.  ``flat_road`` disables simulated gradient."""

    duration: int = FREERIDE_DEFAULT_DURATION_S
    flat_road: bool = False
    cadence: int | None = None
    cadence_high: int | None = None
    cadence_low: int | None = None
    id: str = field(default_factory=new_segment_id)

    segment_type: ClassVar[SegmentType] = SegmentType.FREERIDE


@dataclass(frozen=True)
class MaxEffort:
    """All-out effort."""

    duration: int = MAXEFFORT_DEFAULT_DURATION_S
    cadence: int | None = None
    cadence_high: int | None = None
    cadence_low: int | None = None
    id: str = field(default_factory=new_segment_id)

    segment_type: ClassVar[SegmentType] = SegmentType.MAXEFFORT


Segment = Union[Warmup, Cooldown, SteadyState, Intervals, Ramp, FreeRide, MaxEffort]

SEGMENT_CLASSES: dict[SegmentType, type] = {
    SegmentType.WARMUP: Warmup,
    SegmentType.COOLDOWN: Cooldown,
    SegmentType.STEADYSTATE: SteadyState,
    SegmentType.INTERVALS: Intervals,
    SegmentType.RAMP: Ramp,
    SegmentType.FREERIDE: FreeRide,
    SegmentType.MAXEFFORT: MaxEffort,
}

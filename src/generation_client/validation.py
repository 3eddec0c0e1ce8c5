"""Schema for generated workouts.

Generated segments carry no ids and use the camelCase field names of the
prompt's response format.  Validation reports every violation at once.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from generation_client.exceptions import WorkoutValidationError
from workout_engine.models.enums import SegmentType
from workout_engine.models.segments import (
    Cooldown,
    FreeRide,
    Intervals,
    MaxEffort,
    Ramp,
    Segment,
    SteadyState,
    Warmup,
)

MIN_POWER = 0.2
MAX_POWER = 2.0
MIN_DURATION_S = 10
MAX_DURATION_S = 7200
MIN_REPEAT = 1
MAX_REPEAT = 50
MIN_CADENCE = 40
MAX_CADENCE = 150
MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_SEGMENTS = 50

Power = Annotated[float, Field(ge=MIN_POWER, le=MAX_POWER)]
Duration = Annotated[float, Field(ge=MIN_DURATION_S, le=MAX_DURATION_S)]
Cadence = Optional[Annotated[float, Field(ge=MIN_CADENCE, le=MAX_CADENCE)]]

_SEGMENT_TAGS = frozenset(t.value for t in SegmentType)


class _SegmentSpec(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    cadence: Cadence = None
    cadence_high: Cadence = None
    cadence_low: Cadence = None

    def _cadence_kwargs(self) -> dict[str, int]:
        return {
            name: int(round(value))
            for name, value in (
                ("cadence", self.cadence),
                ("cadence_high", self.cadence_high),
                ("cadence_low", self.cadence_low),
            )
            if value is not None
        }


class WarmupSpec(_SegmentSpec):
    type: Literal["warmup"]
    duration: Duration
    power_low: Power
    power_high: Power

    def to_segment(self) -> Segment:
        return Warmup(
            duration=int(round(self.duration)),
            power_low=self.power_low,
            power_high=self.power_high,
            **self._cadence_kwargs(),
        )


class CooldownSpec(_SegmentSpec):
    type: Literal["cooldown"]
    duration: Duration
    power_low: Power
    power_high: Power

    @model_validator(mode="after")
    def check_bounds(self) -> CooldownSpec:
        if self.power_low >= self.power_high:
            raise ValueError("powerLow must be less than powerHigh")
        return self

    def to_segment(self) -> Segment:
        return Cooldown(
            duration=int(round(self.duration)),
            power_low=self.power_low,
            power_high=self.power_high,
            **self._cadence_kwargs(),
        )


class SteadyStateSpec(_SegmentSpec):
    type: Literal["steadystate"]
    duration: Duration
    power: Power

    def to_segment(self) -> Segment:
        return SteadyState(
            duration=int(round(self.duration)),
            power=self.power,
            **self._cadence_kwargs(),
        )


class IntervalsSpec(_SegmentSpec):
    type: Literal["intervals"]
    repeat: Annotated[int, Field(ge=MIN_REPEAT, le=MAX_REPEAT)]
    on_duration: Duration
    off_duration: Duration
    on_power: Power
    off_power: Power

    def to_segment(self) -> Segment:
        return Intervals(
            repeat=self.repeat,
            on_duration=int(round(self.on_duration)),
            off_duration=int(round(self.off_duration)),
            on_power=self.on_power,
            off_power=self.off_power,
            **self._cadence_kwargs(),
        )


class RampSpec(_SegmentSpec):
    type: Literal["ramp"]
    duration: Duration
    power_low: Power
    power_high: Power

    def to_segment(self) -> Segment:
        return Ramp(
            duration=int(round(self.duration)),
            power_low=self.power_low,
            power_high=self.power_high,
            **self._cadence_kwargs(),
        )


class FreeRideSpec(_SegmentSpec):
    type: Literal["freeride"]
    duration: Duration
    flat_road: bool = False

    def to_segment(self) -> Segment:
        return FreeRide(
            duration=int(round(self.duration)),
            flat_road=self.flat_road,
            **self._cadence_kwargs(),
        )


class MaxEffortSpec(_SegmentSpec):
    type: Literal["maxeffort"]
    duration: Duration

    def to_segment(self) -> Segment:
        return MaxEffort(duration=int(round(self.duration)), **self._cadence_kwargs())


SegmentSpec = Annotated[
    Union[
        WarmupSpec,
        CooldownSpec,
        SteadyStateSpec,
        IntervalsSpec,
        RampSpec,
        FreeRideSpec,
        MaxEffortSpec,
    ],
    Field(discriminator="type"),
]


class GeneratedWorkoutSpec(BaseModel):
    """Validated generation result: name, description and id-less segments."""

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    description: str = Field(default="", max_length=MAX_DESCRIPTION_LENGTH)
    segments: list[SegmentSpec] = Field(min_length=1, max_length=MAX_SEGMENTS)

    def to_segments(self) -> list[Segment]:
        """Fresh segment values, each with a new id."""
        return [spec.to_segment() for spec in self.segments]


def validate_generated_workout(data: Any) -> GeneratedWorkoutSpec:
    """Validate raw decoded JSON.

    Raises:
        WorkoutValidationError: Listing every offending field path.
    """
    try:
        return GeneratedWorkoutSpec.model_validate(data)
    except ValidationError as exc:
        issues = [(_format_loc(err["loc"]), err["msg"]) for err in exc.errors()]
        raise WorkoutValidationError(issues) from exc


def _format_loc(loc: tuple[Any, ...]) -> str:
    # Discriminated unions add the variant tag after the list index.
    parts = [
        str(part)
        for i, part in enumerate(loc)
        if not (i == 2 and loc[0] == "segments" and part in _SEGMENT_TAGS)
    ]
    return ".".join(parts)

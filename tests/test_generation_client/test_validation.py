"""Tests for generated-workout validation."""

from __future__ import annotations

import pytest

from generation_client.exceptions import WorkoutValidationError
from generation_client.validation import validate_generated_workout
from workout_engine.models import FreeRide, Intervals, MaxEffort, Ramp, SteadyState


def _workout(*segments: dict, **fields) -> dict:
    return {"name": "Test", "segments": list(segments), **fields}


def _issues(data: dict) -> list[tuple[str, str]]:
    with pytest.raises(WorkoutValidationError) as excinfo:
        validate_generated_workout(data)
    return excinfo.value.issues


class TestAccepted:
    def test_every_variant(self, generated_data):
        data = generated_data
        data["segments"] += [
            {"type": "steadystate", "duration": 1200, "power": 0.88},
            {"type": "ramp", "duration": 300, "powerLow": 0.6, "powerHigh": 1.2},
            {"type": "freeride", "duration": 600, "flatRoad": True},
            {"type": "maxeffort", "duration": 20},
        ]
        spec = validate_generated_workout(data)
        segments = spec.to_segments()
        assert [type(s) for s in segments[3:]] == [SteadyState, Ramp, FreeRide, MaxEffort]
        assert segments[5].flat_road is True
        assert spec.description == "3 x 10 min at sweet spot"

    def test_description_optional(self):
        spec = validate_generated_workout(_workout({"type": "maxeffort", "duration": 30}))
        assert spec.description == ""

    def test_durations_rounded(self):
        spec = validate_generated_workout(
            _workout(
                {
                    "type": "intervals",
                    "repeat": 4,
                    "onDuration": 59.6,
                    "offDuration": 60.2,
                    "onPower": 1.1,
                    "offPower": 0.5,
                    "cadenceLow": 85.4,
                }
            )
        )
        (segment,) = spec.to_segments()
        assert isinstance(segment, Intervals)
        assert (segment.on_duration, segment.off_duration) == (60, 60)
        assert segment.cadence_low == 85

    def test_fresh_ids(self):
        spec = validate_generated_workout(
            _workout({"type": "maxeffort", "duration": 30}, {"type": "maxeffort", "duration": 30})
        )
        first, second = spec.to_segments()
        assert first.id != second.id


class TestRejected:
    def test_duration_path(self):
        issues = _issues(_workout({"type": "steadystate", "duration": 5, "power": 0.8}))
        assert [path for path, _ in issues] == ["segments.0.duration"]

    def test_camel_case_path(self):
        issues = _issues(
            _workout(
                {"type": "warmup", "duration": 600, "powerLow": 0.4, "powerHigh": 0.7},
                {
                    "type": "intervals",
                    "repeat": 60,
                    "onDuration": 60,
                    "offDuration": 60,
                    "onPower": 3.0,
                    "offPower": 0.5,
                },
            )
        )
        paths = sorted(path for path, _ in issues)
        assert paths == ["segments.1.onPower", "segments.1.repeat"]

    def test_all_issues_reported(self):
        issues = _issues(
            {
                "name": "",
                "segments": [
                    {"type": "steadystate", "duration": 600, "power": 0.1},
                    {"type": "maxeffort", "duration": 9000},
                ],
            }
        )
        paths = {path for path, _ in issues}
        assert paths == {"name", "segments.0.power", "segments.1.duration"}

    def test_message_joins_issues(self):
        with pytest.raises(WorkoutValidationError) as excinfo:
            validate_generated_workout(_workout({"type": "steadystate", "duration": 5, "power": 0.8}))
        assert str(excinfo.value).startswith("Invalid workout data: segments.0.duration: ")

    def test_cooldown_bounds_must_be_ordered(self):
        issues = _issues(
            _workout({"type": "cooldown", "duration": 300, "powerLow": 0.6, "powerHigh": 0.4})
        )
        assert len(issues) == 1
        path, message = issues[0]
        assert path == "segments.0"
        assert "powerLow must be less than powerHigh" in message

    def test_unknown_segment_type(self):
        issues = _issues(_workout({"type": "tempo", "duration": 600}))
        assert issues[0][0] == "segments.0"

    def test_cadence_range(self):
        issues = _issues(_workout({"type": "maxeffort", "duration": 30, "cadence": 200}))
        assert issues[0][0] == "segments.0.cadence"

    def test_no_segments(self):
        issues = _issues(_workout())
        assert issues[0][0] == "segments"

    def test_too_many_segments(self):
        issues = _issues(_workout(*[{"type": "maxeffort", "duration": 30}] * 51))
        assert issues[0][0] == "segments"

    def test_description_too_long(self):
        issues = _issues(_workout({"type": "maxeffort", "duration": 30}, description="x" * 501))
        assert issues[0][0] == "description"

"""Tests for plain-data (JSON-ready) state serialization."""

from __future__ import annotations

import json

import pytest

from workout_engine.models import (
    FreeRide,
    Preferences,
    SteadyState,
    Version,
    VersionSource,
)
from workout_engine.serialization.state import (
    copy_workout,
    preferences_from_dict,
    preferences_to_dict,
    segment_from_dict,
    segment_to_dict,
    serialize_workout,
    version_from_dict,
    version_to_dict,
    workout_from_dict,
    workout_to_dict,
)


class TestSegmentDicts:
    def test_camel_case_keys(self) -> None:
        data = segment_to_dict(SteadyState(duration=300, power=0.8, cadence=85))
        assert data["type"] == "steadystate"
        assert data["power"] == 0.8
        assert data["cadence"] == 85
        assert "cadenceLow" not in data

    def test_without_id(self) -> None:
        assert "id" not in segment_to_dict(FreeRide(), include_id=False)

    def test_false_flat_road_omitted(self) -> None:
        assert "flatRoad" not in segment_to_dict(FreeRide())
        assert segment_to_dict(FreeRide(flat_road=True))["flatRoad"] is True

    def test_round_trip_keeps_id(self, every_variant) -> None:
        for segment in every_variant:
            assert segment_from_dict(segment_to_dict(segment)) == segment

    def test_assign_id(self) -> None:
        segment = SteadyState()
        restored = segment_from_dict(segment_to_dict(segment), assign_id=True)
        assert restored.id != segment.id

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown segment type"):
            segment_from_dict({"type": "sprintz", "duration": 10})


class TestWorkoutDicts:
    def test_round_trip(self, full_workout) -> None:
        assert workout_from_dict(workout_to_dict(full_workout)) == full_workout

    def test_json_serializable(self, full_workout) -> None:
        json.dumps(workout_to_dict(full_workout))

    def test_serialize_is_stable(self, full_workout) -> None:
        assert serialize_workout(full_workout) == serialize_workout(copy_workout(full_workout))

    def test_copy_is_structural(self, full_workout) -> None:
        copy = copy_workout(full_workout)
        assert copy == full_workout
        assert copy is not full_workout
        assert copy.segments[0] is not full_workout.segments[0]


class TestVersionAndPreferences:
    def test_version_round_trip(self, full_workout) -> None:
        version = Version(workout_snapshot=full_workout, source=VersionSource.AI, description="Generated: x")
        assert version_from_dict(version_to_dict(version)) == version

    def test_version_without_description(self, full_workout) -> None:
        data = version_to_dict(Version(workout_snapshot=full_workout, source=VersionSource.MANUAL))
        assert "description" not in data

    def test_preferences_round_trip(self) -> None:
        prefs = Preferences(ftp=265, api_key="sk-abc")
        assert preferences_to_dict(prefs) == {"ftp": 265, "apiKey": "sk-abc"}
        assert preferences_from_dict(preferences_to_dict(prefs)) == prefs

    def test_preferences_defaults(self) -> None:
        assert preferences_from_dict({}) == Preferences()


class TestNonObjectInput:
    @pytest.mark.parametrize(
        "decode",
        [segment_from_dict, workout_from_dict, version_from_dict, preferences_from_dict],
    )
    def test_rejected_with_value_error(self, decode) -> None:
        with pytest.raises(ValueError, match="must be a JSON object"):
            decode([1])

    def test_nested_snapshot_rejected(self) -> None:
        with pytest.raises(ValueError, match="Workout must be a JSON object"):
            version_from_dict({"id": "a", "workoutSnapshot": "oops", "timestamp": "t"})

"""Tests for the workout_cli command line, state kept under tmp_path."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from workout_cli import main as cli
from workout_engine.models import Intervals, SteadyState, Workout
from workout_engine.persistence import JsonFileStore, load_state


@pytest.fixture
def run(tmp_path):
    state_dir = tmp_path / "state"

    def _run(*argv: str) -> int:
        return cli.main(["--state-dir", str(state_dir), *argv])

    _run.state = lambda: load_state(JsonFileStore(state_dir))
    return _run


class TestEditing:
    def test_new_and_add(self, run, capsys) -> None:
        assert run("new", "Tempo Tuesday") == 0
        assert run("add", "warmup") == 0
        assert run("add", "steadystate") == 0

        state = run.state()
        assert state.workout.name == "Tempo Tuesday"
        assert [s.segment_type.value for s in state.workout.segments] == ["warmup", "steadystate"]
        assert "Added warmup" in capsys.readouterr().out

    def test_set_fields(self, run) -> None:
        run("add", "intervals")
        assert run("set", "0", "repeat=6", "on_duration=2m", "on_power=1.1") == 0

        (segment,) = run.state().workout.segments
        assert isinstance(segment, Intervals)
        assert (segment.repeat, segment.on_duration, segment.on_power) == (6, 120, 1.1)

    def test_set_bad_field(self, run, capsys) -> None:
        run("add", "steadystate")
        assert run("set", "0", "wattage=300") == 1
        assert "Cannot update segment" in capsys.readouterr().err

    def test_set_bad_index(self, run) -> None:
        assert run("set", "3", "power=0.8") == 1

    def test_remove_duplicate_move(self, run) -> None:
        run("add", "warmup")
        run("add", "steadystate")
        run("duplicate", "1")
        run("move", "0", "2")
        run("remove", "0")

        types = [s.segment_type.value for s in run.state().workout.segments]
        assert types == ["steadystate", "warmup"]


class TestHistory:
    def test_undo_redo_across_invocations(self, run) -> None:
        run("add", "warmup")
        run("add", "steadystate")
        assert len(run.state().history.versions) == 2

        assert run("undo") == 0
        assert len(run.state().workout.segments) == 1
        assert run("redo") == 0
        assert len(run.state().workout.segments) == 2

    def test_nothing_to_undo(self, run, capsys) -> None:
        assert run("undo") == 1
        assert "Nothing to undo" in capsys.readouterr().err

    def test_list_and_clear(self, run, capsys) -> None:
        run("add", "warmup")
        capsys.readouterr()
        assert run("history") == 0
        assert "manual" in capsys.readouterr().out
        run("history", "--clear")
        assert run.state().history.versions == ()


class TestShow:
    def test_empty(self, run, capsys) -> None:
        assert run("show") == 0
        assert "No segments yet." in capsys.readouterr().out

    def test_summary_zones_chart(self, run, capsys) -> None:
        run("add", "warmup")
        run("add", "intervals")
        capsys.readouterr()
        assert run("show", "--zones", "--chart") == 0
        out = capsys.readouterr().out
        assert "Training load:" in out
        assert "Endurance" in out
        assert "," in out.splitlines()[-1]


class TestFiles:
    def test_export_then_import(self, run, tmp_path, capsys) -> None:
        run("new", "Round Trip")
        run("add", "ramp")
        capsys.readouterr()
        assert run("export", "--out", str(tmp_path / "zwo")) == 0
        exported = capsys.readouterr().out.strip()
        assert exported.endswith("round_trip.zwo")

        run("new")
        assert run("import", exported) == 0
        assert run.state().workout.name == "Round Trip"

    def test_export_empty(self, run, tmp_path) -> None:
        assert run("export", "--out", str(tmp_path)) == 1

    def test_import_rejects_extension(self, run, tmp_path, capsys) -> None:
        path = tmp_path / "workout.xml"
        path.write_text("<workout_file/>", encoding="utf-8")
        assert run("import", str(path)) == 1
        assert "Please select a .zwo file" in capsys.readouterr().err


class TestGenerate:
    def test_requires_api_key(self, run, monkeypatch, capsys) -> None:
        monkeypatch.setattr(cli, "OPENAI_API_KEY", "")
        assert run("generate", "tempo") == 1
        assert "No API key" in capsys.readouterr().err

    def test_applies_result(self, run, monkeypatch, capsys) -> None:
        result = MagicMock()
        result.workout = Workout(name="Tempo", segments=(SteadyState(power=0.85),))
        result.interpretation = "Created workout: Tempo"
        fake = MagicMock()
        fake.generate = AsyncMock(return_value=result)
        monkeypatch.setattr(cli, "GenerationClient", MagicMock(return_value=fake))
        monkeypatch.setattr(cli, "OPENAI_API_KEY", "sk-test")

        assert run("generate", "tempo") == 0
        assert "Created workout: Tempo" in capsys.readouterr().out
        state = run.state()
        assert state.workout.name == "Tempo"
        assert state.history.versions[-1].source.value == "ai"

    def test_refine_without_workout(self, run, monkeypatch, capsys) -> None:
        monkeypatch.setattr(cli, "GenerationClient", MagicMock())
        monkeypatch.setattr(cli, "OPENAI_API_KEY", "sk-test")
        assert run("generate", "harder", "--refine") == 1
        assert "No workout to refine" in capsys.readouterr().err


class TestPrefs:
    def test_set_and_show(self, run, capsys) -> None:
        assert run("prefs", "--ftp", "275", "--api-key", "sk-abc") == 0
        assert "FTP: 275 W" in capsys.readouterr().out
        prefs = run.state().preferences
        assert (prefs.ftp, prefs.api_key) == (275, "sk-abc")

"""Tests for power zone classification and time in zone."""

from __future__ import annotations

import pytest

from workout_engine.math.zones import (
    all_zones,
    color_for_power,
    time_in_zones,
    zone_config,
    zone_for_power,
    zone_name,
)
from workout_engine.models import Intervals, PowerZone, Ramp, SteadyState


class TestZoneForPower:
    @pytest.mark.parametrize(
        "power, zone",
        [
            (0.0, PowerZone.Z1),
            (0.54, PowerZone.Z1),
            (0.55, PowerZone.Z2),
            (0.75, PowerZone.Z3),
            (0.90, PowerZone.Z4),
            (1.0, PowerZone.Z4),
            (1.05, PowerZone.Z5),
            (1.20, PowerZone.Z6),
            (1.50, PowerZone.Z7),
            (3.5, PowerZone.Z7),
        ],
    )
    def test_boundaries(self, power: float, zone: PowerZone) -> None:
        assert zone_for_power(power) == zone

    def test_names_and_colors(self) -> None:
        assert zone_name(1.0) == "Threshold"
        assert color_for_power(0.3) == zone_config(PowerZone.Z1).color

    def test_all_zones_in_order(self) -> None:
        zones = all_zones()
        assert [z.label for z in zones] == [f"Z{i}" for i in range(1, 8)]
        for lower, upper in zip(zones, zones[1:]):
            assert lower.upper == upper.lower


class TestTimeInZones:
    def test_always_seven_rows(self) -> None:
        frame = time_in_zones([])
        assert len(frame) == 7
        assert frame["seconds"].sum() == 0
        assert (frame["percent"] == 0.0).all()

    def test_intervals_split_on_and_off(self) -> None:
        segment = Intervals(repeat=4, on_duration=60, off_duration=120, on_power=1.1, off_power=0.5)
        frame = time_in_zones([segment]).set_index("label")
        assert frame.loc["Z5", "seconds"] == 240
        assert frame.loc["Z1", "seconds"] == 480

    def test_ramp_counts_at_average(self) -> None:
        frame = time_in_zones([Ramp(duration=300, power_low=0.5, power_high=1.0)]).set_index("label")
        assert frame.loc["Z3", "seconds"] == 300

    def test_percent_sums_to_100(self) -> None:
        segments = [SteadyState(duration=600, power=0.6), SteadyState(duration=1800, power=0.95)]
        frame = time_in_zones(segments)
        assert frame["percent"].sum() == pytest.approx(100.0)
        assert frame.set_index("label").loc["Z4", "percent"] == pytest.approx(75.0)

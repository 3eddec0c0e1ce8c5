"""Power zone classification and time-in-zone distribution.

Zone model: Coggan 7-zone system anchored on FTP.
Reference: Coggan & Allen (2010), Training and Racing with a Power Meter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from workout_engine.math.metrics import average_power, segment_duration
from workout_engine.models.enums import ZONE_BOUNDARIES_PCT_FTP, PowerZone
from workout_engine.models.segments import Intervals, Segment


@dataclass(frozen=True)
class ZoneConfig:
    """Display metadata for a single power zone."""

    zone: PowerZone
    name: str
    lower: float     # FTP fraction, inclusive
    upper: float     # FTP fraction, exclusive
    color: str

    @property
    def label(self) -> str:
        return f"Z{self.zone.value}"


_ZONE_DISPLAY: dict[PowerZone, tuple[str, str]] = {
    PowerZone.Z1: ("Recovery", "#9ca3af"),
    PowerZone.Z2: ("Endurance", "#3b82f6"),
    PowerZone.Z3: ("Tempo", "#22c55e"),
    PowerZone.Z4: ("Threshold", "#eab308"),
    PowerZone.Z5: ("VO2max", "#f97316"),
    PowerZone.Z6: ("Anaerobic", "#ef4444"),
    PowerZone.Z7: ("Neuromuscular", "#dc2626"),
}

_ZONE_CONFIGS: dict[PowerZone, ZoneConfig] = {
    zone: ZoneConfig(
        zone=zone,
        name=_ZONE_DISPLAY[zone][0],
        lower=lower,
        upper=upper,
        color=_ZONE_DISPLAY[zone][1],
    )
    for zone, (lower, upper) in ZONE_BOUNDARIES_PCT_FTP.items()
}


def zone_for_power(power: float) -> PowerZone:
    """Classify an FTP fraction into a power zone.

    Upper bounds are exclusive; anything at or above 1.5 is Z7.
    """
    for zone, (_, upper) in ZONE_BOUNDARIES_PCT_FTP.items():
        if zone == PowerZone.Z7 or power < upper:
            return zone
    return PowerZone.Z7


def zone_config(zone: PowerZone) -> ZoneConfig:
    return _ZONE_CONFIGS[zone]


def color_for_power(power: float) -> str:
    return _ZONE_CONFIGS[zone_for_power(power)].color


def zone_name(power: float) -> str:
    return _ZONE_CONFIGS[zone_for_power(power)].name


def all_zones() -> list[ZoneConfig]:
    return list(_ZONE_CONFIGS.values())


def _phases(segment: Segment) -> list[tuple[int, float]]:
    """(seconds, power) pieces of a segment for zone accounting."""
    if isinstance(segment, Intervals):
        return [
            (segment.repeat * segment.on_duration, segment.on_power),
            (segment.repeat * segment.off_duration, segment.off_power),
        ]
    return [(segment_duration(segment), average_power(segment))]


def time_in_zones(segments: Iterable[Segment]) -> pd.DataFrame:
    """Seconds spent in each power zone.

    Interval on/off phases are counted separately; ramps count at their
    average power.

    Returns:
        DataFrame with one row per zone (Z1..Z7, always present) and columns
        ``zone``, ``label``, ``name``, ``seconds``, ``percent``.
    """
    seconds = {zone: 0 for zone in PowerZone}
    for segment in segments:
        for duration, power in _phases(segment):
            seconds[zone_for_power(power)] += duration

    frame = pd.DataFrame(
        {
            "zone": [zone.value for zone in PowerZone],
            "label": [_ZONE_CONFIGS[zone].label for zone in PowerZone],
            "name": [_ZONE_CONFIGS[zone].name for zone in PowerZone],
            "seconds": [seconds[zone] for zone in PowerZone],
        }
    )
    total = int(frame["seconds"].sum())
    if total == 0:
        frame["percent"] = 0.0
    else:
        frame["percent"] = frame["seconds"] / total * 100.0
    return frame

"""Human-readable formatting for durations, powers and filenames.

Pure functions; powers are FTP fractions, durations are seconds.
"""

from __future__ import annotations

import re

_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 3600


def _percent(power: float) -> int:
    return int(round(power * 100))


def _watts(power: float, ftp: int) -> int:
    return int(round(power * ftp))


def _split(total_seconds: int) -> tuple[int, int, int]:
    total_seconds = int(total_seconds)
    hours = total_seconds // _SECONDS_PER_HOUR
    minutes = (total_seconds % _SECONDS_PER_HOUR) // _SECONDS_PER_MINUTE
    return hours, minutes, total_seconds % _SECONDS_PER_MINUTE


def format_duration(seconds: int) -> str:
    """Clock style.  e.g. 330 -> '5:30', 3900 -> '1:05:00'."""
    hours, minutes, secs = _split(seconds)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_duration_short(seconds: int) -> str:
    """Compact style.  e.g. 2700 -> '45m', 5400 -> '1h 30m', 3600 -> '1h'."""
    hours, minutes, _ = _split(seconds)
    if hours > 0:
        return f"{hours}h {minutes}m" if minutes > 0 else f"{hours}h"
    return f"{minutes}m"


def format_power(power: float) -> str:
    """e.g. 0.75 -> '75%'."""
    return f"{_percent(power)}%"


def format_watts(power: float, ftp: int) -> str:
    """e.g. 0.75 @ 200W FTP -> '150W'."""
    return f"{_watts(power, ftp)}W"


def format_power_with_watts(power: float, ftp: int) -> str:
    """e.g. 0.75 @ 200W FTP -> '75% (150W)'."""
    return f"{_percent(power)}% ({_watts(power, ftp)}W)"


def format_power_range(low: float, high: float) -> str:
    """e.g. 0.4, 0.7 -> '40-70%'."""
    return f"{_percent(low)}-{_percent(high)}%"


def format_power_range_with_watts(low: float, high: float, ftp: int) -> str:
    """e.g. 0.4, 0.7 @ 200W -> '40-70% (80-140W)'."""
    return (
        f"{_percent(low)}-{_percent(high)}% "
        f"({_watts(low, ftp)}-{_watts(high, ftp)}W)"
    )


_MINUTES_RE = re.compile(r"^(\d+)\s*(?:m|min|mins|minutes?)$")
_HOURS_RE = re.compile(r"^(\d+)\s*(?:h|hr|hrs|hours?)$")
_HOURS_MINUTES_RE = re.compile(r"^(\d+)\s*(?:h|hr)\s*(\d+)\s*(?:m|min)?$")
_CLOCK_RE = re.compile(r"^(\d+):(\d{2})(?::(\d{2}))?$")
_PLAIN_RE = re.compile(r"^(\d+)")


def parse_duration_input(text: str) -> int | None:
    """Parse free-form duration input into seconds.

    Accepts '10m', '2h', '1h30', '1h 30m', '5:30' (m:ss), '1:05:00'
    (h:mm:ss) and bare numbers (minutes).  Returns None when unparseable.
    """
    value = text.strip().lower()

    match = _MINUTES_RE.match(value)
    if match:
        return int(match.group(1)) * _SECONDS_PER_MINUTE

    match = _HOURS_RE.match(value)
    if match:
        return int(match.group(1)) * _SECONDS_PER_HOUR

    match = _HOURS_MINUTES_RE.match(value)
    if match:
        return int(match.group(1)) * _SECONDS_PER_HOUR + int(match.group(2)) * _SECONDS_PER_MINUTE

    match = _CLOCK_RE.match(value)
    if match:
        if match.group(3) is not None:
            return (
                int(match.group(1)) * _SECONDS_PER_HOUR
                + int(match.group(2)) * _SECONDS_PER_MINUTE
                + int(match.group(3))
            )
        return int(match.group(1)) * _SECONDS_PER_MINUTE + int(match.group(2))

    match = _PLAIN_RE.match(value)
    if match:
        return int(match.group(1)) * _SECONDS_PER_MINUTE

    return None


def workout_filename(name: str, extension: str = ".zwo") -> str:
    """Filesystem-safe filename for a workout.  e.g. 'Sweet Spot #2' -> 'sweet_spot_2.zwo'."""
    cleaned = re.sub(r"[^a-zA-Z0-9\s-]", "", name)
    slug = re.sub(r"\s+", "_", cleaned.strip()).lower()
    return f"{slug or 'workout'}{extension}"

"""Enumerations and fixed constants for the workout engine.

Power values throughout the engine are dimensionless fractions of the
rider's threshold power (FTP): 1.0 = threshold.
"""

from enum import Enum, IntEnum


class SegmentType(str, Enum):
    """Closed set of segment variant tags."""

    WARMUP = "warmup"
    COOLDOWN = "cooldown"
    STEADYSTATE = "steadystate"
    INTERVALS = "intervals"
    RAMP = "ramp"
    FREERIDE = "freeride"
    MAXEFFORT = "maxeffort"


class SportType(str, Enum):
    """Sport a workout is written for."""

    BIKE = "bike"
    RUN = "run"


class VersionSource(str, Enum):
    """What produced a history version."""

    MANUAL = "manual"
    AI = "ai"


class PowerZone(IntEnum):
    """Seven-zone power model (Coggan), as fractions of FTP."""

    Z1 = 1
    Z2 = 2
    Z3 = 3
    Z4 = 4
    Z5 = 5
    Z6 = 6
    Z7 = 7


# ---------------------------------------------------------------------------
# Nominal display powers for segments without a power target
# ---------------------------------------------------------------------------

FREERIDE_NOMINAL_POWER = 0.5
MAXEFFORT_NOMINAL_POWER = 1.5

# ---------------------------------------------------------------------------
# Segment factory defaults (also the importer's fallbacks)
# ---------------------------------------------------------------------------

WARMUP_DEFAULT_DURATION_S = 600
WARMUP_DEFAULT_POWER_LOW = 0.4
WARMUP_DEFAULT_POWER_HIGH = 0.7

COOLDOWN_DEFAULT_DURATION_S = 300
COOLDOWN_DEFAULT_POWER_LOW = 0.4
COOLDOWN_DEFAULT_POWER_HIGH = 0.6

STEADYSTATE_DEFAULT_DURATION_S = 300
STEADYSTATE_DEFAULT_POWER = 0.75

INTERVALS_DEFAULT_REPEAT = 4
INTERVALS_DEFAULT_ON_DURATION_S = 60
INTERVALS_DEFAULT_OFF_DURATION_S = 60
INTERVALS_DEFAULT_ON_POWER = 1.0
INTERVALS_DEFAULT_OFF_POWER = 0.5

RAMP_DEFAULT_DURATION_S = 300
RAMP_DEFAULT_POWER_LOW = 0.5
RAMP_DEFAULT_POWER_HIGH = 1.0

FREERIDE_DEFAULT_DURATION_S = 600
MAXEFFORT_DEFAULT_DURATION_S = 30

# ---------------------------------------------------------------------------
# Workout / preference defaults
# ---------------------------------------------------------------------------

DEFAULT_WORKOUT_NAME = "New Workout"
IMPORTED_WORKOUT_NAME = "Imported Workout"
DEFAULT_FTP_WATTS = 200

# Zone boundaries as fractions of FTP, Coggan & Allen (2010), 7-zone model
ZONE_BOUNDARIES_PCT_FTP: dict[PowerZone, tuple[float, float]] = {
    PowerZone.Z1: (0.0, 0.55),
    PowerZone.Z2: (0.55, 0.75),
    PowerZone.Z3: (0.75, 0.90),
    PowerZone.Z4: (0.90, 1.05),
    PowerZone.Z5: (1.05, 1.20),
    PowerZone.Z6: (1.20, 1.50),
    PowerZone.Z7: (1.50, 3.00),
}

"""Chart geometry — a segment list → power-vs-time polygons and axis ticks.

Coordinates live on a fixed logical canvas (width 800, caller-chosen
height) with inset padding.  Power maps linearly onto y between the display
floor (0) and ceiling (1.5 × FTP), inverted so more power is higher on the
canvas.  Values outside the display range are not clamped.

Every polygon starts and ends on the power-zero baseline.  Horizontal space
is shared in proportion to segment duration, left to right, with no gaps;
floating drift from the proportional split is tolerated.

All functions are pure.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Sequence, assert_never

import numpy as np

from workout_engine.math.metrics import average_power, segment_duration
from workout_engine.models.enums import FREERIDE_NOMINAL_POWER, MAXEFFORT_NOMINAL_POWER
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

CHART_WIDTH = 800.0
DEFAULT_CHART_HEIGHT = 200.0

POWER_DISPLAY_MIN = 0.0
POWER_DISPLAY_MAX = 1.5

# Horizontal gridlines (FTP fractions); 1.0 is the threshold line.
Y_AXIS_TICKS = (0.0, 0.5, 0.75, 1.0, 1.25, 1.5)

TICK_INTERVAL_S = 300
MAX_X_AXIS_TICKS = 6

Point = tuple[float, float]
PowerToY = Callable[[float], float]


@dataclass(frozen=True)
class Padding:
    top: float = 20.0
    right: float = 20.0
    bottom: float = 40.0
    left: float = 50.0


@dataclass(frozen=True)
class ChartDimensions:
    """Canvas size and inset margins."""

    width: float = CHART_WIDTH
    height: float = DEFAULT_CHART_HEIGHT
    padding: Padding = field(default_factory=Padding)

    @property
    def inner_width(self) -> float:
        return self.width - self.padding.left - self.padding.right

    @property
    def inner_height(self) -> float:
        return self.height - self.padding.top - self.padding.bottom


@dataclass(frozen=True)
class SegmentPolygon:
    """Closed polygon for one segment plus its average power (for colouring)."""

    points: tuple[Point, ...]
    avg_power: float

    def to_svg_points(self) -> str:
        """``"x,y x,y …"`` as used by an SVG ``points`` attribute."""
        return " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in self.points)


@dataclass(frozen=True)
class ChartSegment:
    """A segment's polygon placed on the canvas."""

    segment_id: str
    x: float
    width: float
    polygon: SegmentPolygon

    @property
    def avg_power(self) -> float:
        return self.polygon.avg_power


@dataclass(frozen=True)
class AxisTick:
    """A labelled axis position: *value* in axis units, *position* in canvas units."""

    value: float
    position: float


@dataclass(frozen=True)
class ChartGeometry:
    dimensions: ChartDimensions
    total_duration: int
    baseline_y: float
    segments: tuple[ChartSegment, ...]
    y_ticks: tuple[AxisTick, ...]
    x_ticks: tuple[AxisTick, ...]

    def segment_by_id(self, segment_id: str) -> ChartSegment | None:
        for chart_segment in self.segments:
            if chart_segment.segment_id == segment_id:
                return chart_segment
        return None


def create_power_to_y(
    inner_height: float,
    padding_top: float,
    min_power: float = POWER_DISPLAY_MIN,
    max_power: float = POWER_DISPLAY_MAX,
) -> PowerToY:
    """Linear power → y mapping, inverted (higher power → smaller y)."""

    def power_to_y(power: float) -> float:
        normalized = (power - min_power) / (max_power - min_power)
        return padding_top + inner_height * (1 - normalized)

    return power_to_y


def calculate_x_axis_ticks(total_duration: int) -> list[int]:
    """Evenly spaced time ticks in whole seconds, 0 and total inclusive.

    tick count = min(6, floor(total / 300)); a total shorter than one tick
    interval degrades to ``[0, total]``; a zero total has no ticks.
    """
    if total_duration <= 0:
        return []
    tick_count = min(MAX_X_AXIS_TICKS, total_duration // TICK_INTERVAL_S)
    if tick_count == 0:
        return [0, total_duration]
    values = np.linspace(0.0, float(total_duration), tick_count + 1)
    return [int(v) for v in np.floor(values + 0.5)]


def segment_polygon(
    segment: Segment,
    x: float,
    width: float,
    power_to_y: PowerToY,
) -> SegmentPolygon:
    """Shape one segment occupying ``[x, x + width]``.

    Warmup/ramp rise low → high, a cooldown falls from its upper bound to its
    lower bound, steady state / free ride / max effort are flat rectangles,
    intervals are a step polygon of on/off sub-rectangles.
    """
    baseline = power_to_y(0.0)
    end = x + width
    avg = average_power(segment)

    if isinstance(segment, (Warmup, Ramp)):
        return _trapezoid(x, end, baseline, power_to_y(segment.power_low), power_to_y(segment.power_high), avg)

    if isinstance(segment, Cooldown):
        return _trapezoid(x, end, baseline, power_to_y(segment.power_high), power_to_y(segment.power_low), avg)

    if isinstance(segment, SteadyState):
        y = power_to_y(segment.power)
        return _trapezoid(x, end, baseline, y, y, avg)

    if isinstance(segment, Intervals):
        return _interval_steps(segment, x, width, baseline, power_to_y, avg)

    if isinstance(segment, FreeRide):
        y = power_to_y(FREERIDE_NOMINAL_POWER)
        return _trapezoid(x, end, baseline, y, y, avg)

    if isinstance(segment, MaxEffort):
        y = power_to_y(MAXEFFORT_NOMINAL_POWER)
        return _trapezoid(x, end, baseline, y, y, avg)

    assert_never(segment)


def build_chart(
    segments: Sequence[Segment],
    dimensions: ChartDimensions | None = None,
) -> ChartGeometry:
    """Lay out every segment and compute both axes.

    Args:
        segments: Ordered workout segments.
        dimensions: Canvas size; defaults to 800 × 200 with standard padding.

    Returns:
        ChartGeometry with one ChartSegment per segment (none when the total
        duration is zero), y gridlines and x time ticks.
    """
    dims = dimensions or ChartDimensions()
    power_to_y = create_power_to_y(dims.inner_height, dims.padding.top)
    durations = np.array([segment_duration(s) for s in segments], dtype=np.float64)
    total = int(durations.sum()) if len(durations) else 0

    chart_segments: list[ChartSegment] = []
    if total > 0:
        widths = durations / total * dims.inner_width
        offsets = dims.padding.left + np.concatenate(([0.0], np.cumsum(widths)[:-1]))
        for segment, x, width in zip(segments, offsets, widths):
            x, width = float(x), float(width)
            chart_segments.append(ChartSegment(
                segment_id=segment.id,
                x=x,
                width=width,
                polygon=segment_polygon(segment, x, width, power_to_y),
            ))

    y_ticks = tuple(AxisTick(value=p, position=power_to_y(p)) for p in Y_AXIS_TICKS)
    x_ticks = tuple(
        AxisTick(
            value=float(t),
            position=dims.padding.left + (t / total) * dims.inner_width,
        )
        for t in calculate_x_axis_ticks(total)
    )

    return ChartGeometry(
        dimensions=dims,
        total_duration=total,
        baseline_y=power_to_y(0.0),
        segments=tuple(chart_segments),
        y_ticks=y_ticks,
        x_ticks=x_ticks,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _trapezoid(x: float, end: float, baseline: float, start_y: float, end_y: float, avg: float) -> SegmentPolygon:
    return SegmentPolygon(
        points=((x, baseline), (x, start_y), (end, end_y), (end, baseline)),
        avg_power=avg,
    )


def _interval_steps(
    segment: Intervals,
    x: float,
    width: float,
    baseline: float,
    power_to_y: PowerToY,
    avg: float,
) -> SegmentPolygon:
    cycle = segment.on_duration + segment.off_duration
    if segment.repeat <= 0 or cycle <= 0:
        return _trapezoid(x, x + width, baseline, baseline, baseline, avg)

    cycle_width = width / segment.repeat
    on_width = cycle_width * (segment.on_duration / cycle)
    on_y = power_to_y(segment.on_power)
    off_y = power_to_y(segment.off_power)

    points: list[Point] = [(x, baseline)]
    current = x
    for _ in range(segment.repeat):
        points.append((current, on_y))
        points.append((current + on_width, on_y))
        points.append((current + on_width, off_y))
        points.append((current + cycle_width, off_y))
        current += cycle_width
    points.append((x + width, baseline))
    return SegmentPolygon(points=tuple(points), avg_power=avg)


def _fmt(value: float) -> str:
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")

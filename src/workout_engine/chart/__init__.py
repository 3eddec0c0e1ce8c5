"""Chart module — segment list → drawable polygons and axis ticks."""

from workout_engine.chart.geometry import (
    ChartDimensions,
    ChartGeometry,
    ChartSegment,
    SegmentPolygon,
    build_chart,
    calculate_x_axis_ticks,
    create_power_to_y,
    segment_polygon,
)

__all__ = [
    "ChartDimensions",
    "ChartGeometry",
    "ChartSegment",
    "SegmentPolygon",
    "build_chart",
    "calculate_x_axis_ticks",
    "create_power_to_y",
    "segment_polygon",
]

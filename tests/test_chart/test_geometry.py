"""Tests for chart geometry: proportions, polygons and axis ticks."""

from __future__ import annotations

import pytest

from workout_engine.chart import (
    ChartDimensions,
    build_chart,
    calculate_x_axis_ticks,
    create_power_to_y,
    segment_polygon,
)
from workout_engine.models import (
    Cooldown,
    FreeRide,
    Intervals,
    MaxEffort,
    SteadyState,
    Warmup,
)

# Default canvas: 800 x 200, padding 20/20/40/50 → inner 730 x 140.
INNER_WIDTH = 730.0
LEFT = 50.0
BASELINE = 160.0


@pytest.fixture
def to_y():
    return create_power_to_y(140.0, 20.0)


class TestPowerToY:
    def test_range_ends(self, to_y) -> None:
        assert to_y(0.0) == pytest.approx(BASELINE)
        assert to_y(1.5) == pytest.approx(20.0)

    def test_threshold_line(self, to_y) -> None:
        assert to_y(1.0) == pytest.approx(20.0 + 140.0 / 3)

    def test_not_clamped(self, to_y) -> None:
        assert to_y(2.0) < 20.0
        assert to_y(-0.1) > BASELINE


class TestXAxisTicks:
    def test_zero_total(self) -> None:
        assert calculate_x_axis_ticks(0) == []

    def test_shorter_than_one_interval(self) -> None:
        assert calculate_x_axis_ticks(200) == [0, 200]

    def test_rounded_to_whole_seconds(self) -> None:
        assert calculate_x_axis_ticks(1000) == [0, 333, 667, 1000]

    def test_capped_at_six_intervals(self) -> None:
        assert calculate_x_axis_ticks(3600) == [0, 600, 1200, 1800, 2400, 3000, 3600]


class TestSegmentPolygons:
    def test_warmup_rises(self, to_y) -> None:
        polygon = segment_polygon(Warmup(power_low=0.4, power_high=0.7), LEFT, 100.0, to_y)
        assert polygon.points == (
            (LEFT, BASELINE),
            (LEFT, to_y(0.4)),
            (LEFT + 100.0, to_y(0.7)),
            (LEFT + 100.0, BASELINE),
        )
        assert polygon.avg_power == pytest.approx(0.55)

    def test_cooldown_falls(self, to_y) -> None:
        polygon = segment_polygon(Cooldown(power_low=0.4, power_high=0.6), LEFT, 100.0, to_y)
        start_y, end_y = polygon.points[1][1], polygon.points[2][1]
        assert start_y == pytest.approx(to_y(0.6))
        assert end_y == pytest.approx(to_y(0.4))
        assert start_y < end_y

    def test_steady_state_is_flat(self, to_y) -> None:
        polygon = segment_polygon(SteadyState(power=0.9), LEFT, 50.0, to_y)
        assert polygon.points[1][1] == polygon.points[2][1] == pytest.approx(to_y(0.9))

    def test_nominal_heights(self, to_y) -> None:
        free = segment_polygon(FreeRide(), LEFT, 50.0, to_y)
        sprint = segment_polygon(MaxEffort(), LEFT, 50.0, to_y)
        assert free.points[1][1] == pytest.approx(to_y(0.5))
        assert sprint.points[1][1] == pytest.approx(to_y(1.5))

    def test_intervals_step_shape(self, to_y) -> None:
        segment = Intervals(repeat=2, on_duration=60, off_duration=180, on_power=1.2, off_power=0.5)
        polygon = segment_polygon(segment, LEFT, 400.0, to_y)
        points = polygon.points
        assert len(points) == 2 + 4 * 2
        assert points[0] == (LEFT, BASELINE)
        assert points[-1] == (LEFT + 400.0, BASELINE)
        # First cycle: 200 wide, on phase takes a quarter of it.
        assert points[1] == (LEFT, pytest.approx(to_y(1.2)))
        assert points[2][0] == pytest.approx(LEFT + 50.0)
        assert points[3] == (pytest.approx(LEFT + 50.0), pytest.approx(to_y(0.5)))
        assert points[4][0] == pytest.approx(LEFT + 200.0)
        assert points[5][0] == pytest.approx(LEFT + 200.0)

    def test_every_polygon_closes_on_baseline(self, every_variant, to_y) -> None:
        for segment in every_variant:
            polygon = segment_polygon(segment, LEFT, 80.0, to_y)
            assert polygon.points[0][1] == pytest.approx(BASELINE)
            assert polygon.points[-1][1] == pytest.approx(BASELINE)

    def test_svg_points(self, to_y) -> None:
        polygon = segment_polygon(SteadyState(power=1.5), LEFT, 100.0, to_y)
        assert polygon.to_svg_points() == "50,160 50,20 150,20 150,160"


class TestBuildChart:
    def test_equal_durations_equal_widths(self) -> None:
        chart = build_chart([SteadyState(duration=300), SteadyState(duration=300)])
        first, second = chart.segments
        assert first.width == pytest.approx(second.width)
        assert first.width + second.width == pytest.approx(INNER_WIDTH)

    def test_contiguous_from_left_padding(self, every_variant) -> None:
        chart = build_chart(every_variant)
        assert chart.segments[0].x == pytest.approx(LEFT)
        for prev, cur in zip(chart.segments, chart.segments[1:]):
            assert cur.x == pytest.approx(prev.x + prev.width)
        last = chart.segments[-1]
        assert last.x + last.width == pytest.approx(LEFT + INNER_WIDTH)

    def test_proportional_widths(self) -> None:
        chart = build_chart([SteadyState(duration=600), SteadyState(duration=1800)])
        assert chart.segments[0].width == pytest.approx(INNER_WIDTH / 4)

    def test_segment_ids_carried(self, every_variant) -> None:
        chart = build_chart(every_variant)
        assert [s.segment_id for s in chart.segments] == [s.id for s in every_variant]
        assert chart.segment_by_id(every_variant[2].id) is chart.segments[2]

    def test_empty(self) -> None:
        chart = build_chart([])
        assert chart.segments == ()
        assert chart.x_ticks == ()
        assert chart.total_duration == 0
        assert len(chart.y_ticks) == 6

    def test_y_ticks(self) -> None:
        chart = build_chart([SteadyState()])
        assert [t.value for t in chart.y_ticks] == [0.0, 0.5, 0.75, 1.0, 1.25, 1.5]
        assert chart.y_ticks[0].position == pytest.approx(BASELINE)
        assert chart.y_ticks[-1].position == pytest.approx(20.0)

    def test_x_tick_positions(self) -> None:
        chart = build_chart([SteadyState(duration=1800)])
        assert [t.value for t in chart.x_ticks] == [0, 300, 600, 900, 1200, 1500, 1800]
        assert chart.x_ticks[0].position == pytest.approx(LEFT)
        assert chart.x_ticks[-1].position == pytest.approx(LEFT + INNER_WIDTH)

    def test_custom_height(self) -> None:
        chart = build_chart([SteadyState()], ChartDimensions(height=300))
        assert chart.baseline_y == pytest.approx(260.0)

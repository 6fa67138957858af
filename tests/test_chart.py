# Tests for chart series extraction, pixel layout, value labels and the render lifecycle.

import math

import altair as alt
import pytest

from dashboard.chart import (
    PRESSURE_OFFSET,
    ChartDataError,
    ChartNotReady,
    ChartRenderer,
    ChartState,
    ChartStateError,
    ChartStatus,
    Metric,
    extract_values,
    format_chart_value,
    layout_chart,
    scale_range,
    to_altair,
)


def make_days(temps=(10, 12, 15, 13, 11), humidity=60, pressure=1012.0):
    days = []
    labels = ["Sat", "Yesterday", "Today", "Tomorrow", "Wed"]
    for index, temp in enumerate(temps):
        days.append(
            {
                "day": labels[index % len(labels)],
                "temp_min": temp - 2,
                "temp_max": temp + 2,
                "temp_avg": temp,
                "humidity": humidity,
                "pressure": pressure,
                "current": index == 2,
            }
        )
    return days


class TestSeries:
    def test_extracts_per_metric(self):
        days = make_days()
        assert [v for _, v in extract_values(days, Metric.TEMPERATURE)] == [10, 12, 15, 13, 11]
        assert [v for _, v in extract_values(days, Metric.HUMIDITY)] == [60] * 5
        assert [v for _, v in extract_values(days, Metric.PRESSURE)] == [12.0] * 5

    def test_missing_values_are_skipped(self):
        days = make_days()
        days[1]["humidity"] = None
        assert [i for i, _ in extract_values(days, Metric.HUMIDITY)] == [0, 2, 3, 4]

    def test_scale_range_pads_ten_percent(self):
        value_range = scale_range([10, 20])
        assert value_range.scaled_min == pytest.approx(9)
        assert value_range.scaled_max == pytest.approx(21)

    def test_flat_series_uses_unit_margin(self):
        """A constant series gets a margin of 1 instead of a zero-height range.

        Implementation: Scales five identical values.
        Passing implies: Layout never divides by zero.
        """
        value_range = scale_range([5, 5, 5])
        assert value_range.margin == 1
        assert value_range.span == 2


class TestLayout:
    def test_points_span_the_padded_width(self):
        layout = layout_chart(make_days(), Metric.TEMPERATURE, width=640, height=220, padding=20)

        assert [p.x for p in layout.points] == [20, 170, 320, 470, 620]
        assert all(20 <= p.y <= 200 for p in layout.points)

    def test_higher_values_sit_higher_on_screen(self):
        """Pixel y strictly decreases as the value increases.

        Implementation: Lays out a series with distinct temperatures.
        Passing implies: The y axis is inverted relative to pixel coordinates.
        """
        layout = layout_chart(make_days(), Metric.TEMPERATURE, width=640, height=220)
        ordered = sorted(layout.points, key=lambda p: p.value)
        ys = [p.y for p in ordered]
        assert ys == sorted(ys, reverse=True)
        assert len(set(ys)) == len(ys)

    def test_flat_series_is_centered(self):
        layout = layout_chart(make_days(temps=(7, 7, 7, 7, 7)), Metric.TEMPERATURE, width=640, height=220)
        assert {p.y for p in layout.points} == {110}

    def test_segments_join_consecutive_points(self):
        layout = layout_chart(make_days(), Metric.TEMPERATURE, width=640, height=220)

        assert len(layout.segments) == len(layout.points) - 1
        for segment, start, end in zip(layout.segments, layout.points, layout.points[1:]):
            assert segment.length == pytest.approx(math.hypot(end.x - start.x, end.y - start.y))
            assert segment.angle == pytest.approx(math.degrees(math.atan2(end.y - start.y, end.x - start.x)))
            assert segment.end == pytest.approx((end.x, end.y))

    def test_single_point(self):
        layout = layout_chart(make_days(temps=(9,)), Metric.TEMPERATURE, width=640, height=220)
        assert layout.points[0].x == 320
        assert layout.segments == []

    def test_no_drawable_area(self):
        with pytest.raises(ChartNotReady):
            layout_chart(make_days(), Metric.TEMPERATURE, width=0, height=0)

    def test_nothing_to_plot(self):
        days = make_days()
        for day in days:
            day["humidity"] = None
        with pytest.raises(ChartDataError):
            layout_chart(days, Metric.HUMIDITY, width=640, height=220)

    def test_to_altair_builds_layer_chart(self):
        layout = layout_chart(make_days(), Metric.HUMIDITY, width=640, height=220)
        assert isinstance(to_altair(layout), alt.LayerChart)


class TestValueLabels:
    def test_pressure_adds_offset_back(self):
        assert format_chart_value(1012.4 - PRESSURE_OFFSET, Metric.PRESSURE) == "1012 hPa"

    def test_humidity(self):
        assert format_chart_value(64.6, Metric.HUMIDITY) == "65%"

    def test_temperature_in_display_unit(self):
        assert format_chart_value(20, Metric.TEMPERATURE, "C") == "20°C"
        assert format_chart_value(20, Metric.TEMPERATURE, "F") == "68°F"


class TestChartState:
    def test_normal_lifecycle(self):
        state = ChartState()
        for status in (ChartStatus.LOADING, ChartStatus.RENDERED, ChartStatus.REFRESHING, ChartStatus.RENDERED):
            state.transition(status)
        assert state.status is ChartStatus.RENDERED

    def test_error_only_from_in_flight_load(self):
        state = ChartState()
        with pytest.raises(ChartStateError):
            state.transition(ChartStatus.ERROR)
        state.transition(ChartStatus.LOADING)
        state.fail("Failed to load chart data")
        assert state.status is ChartStatus.ERROR
        assert state.error == "Failed to load chart data"

    def test_empty_cannot_render_directly(self):
        with pytest.raises(ChartStateError):
            ChartState().transition(ChartStatus.RENDERED)

    def test_begin_load_clears_previous_drawing(self):
        state = ChartState(days=make_days())
        state.begin_load()
        state.layout = layout_chart(state.days, state.metric, 640, 220)
        state.transition(ChartStatus.RENDERED)

        state.begin_load(refresh=True)
        assert state.status is ChartStatus.REFRESHING
        assert state.layout is not None

        state.begin_load()
        assert state.status is ChartStatus.LOADING
        assert state.layout is None


class TestChartRenderer:
    @pytest.mark.asyncio
    async def test_retries_until_container_has_area(self):
        """A zero-sized container is measured again after a short delay.

        Implementation: The measure callback reports 0x0 twice, then a real size.
        Passing implies: The chart draws once layout settles instead of failing.
        """
        sizes = iter([(0, 0), (0, 0), (640, 220)])
        state = ChartState(days=make_days(), status=ChartStatus.LOADING)
        renderer = ChartRenderer(state, measure=lambda: next(sizes), retry_delay=0)

        layout = await renderer.draw()

        assert layout.width == 640
        assert state.status is ChartStatus.RENDERED

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self):
        state = ChartState(days=make_days(), status=ChartStatus.LOADING)
        renderer = ChartRenderer(state, measure=lambda: (0, 0), retry_delay=0, max_retries=3)

        with pytest.raises(ChartNotReady):
            await renderer.draw()

    @pytest.mark.asyncio
    async def test_resize_is_debounced(self):
        calls = []
        state = ChartState(days=make_days(), status=ChartStatus.LOADING)

        def measure():
            calls.append(1)
            return 640, 220

        renderer = ChartRenderer(state, measure=measure, resize_delay=0.01)
        await renderer.draw()
        calls.clear()

        for _ in range(5):
            renderer.on_resize()
        await renderer._resize._task

        assert len(calls) == 1
        assert state.status is ChartStatus.RENDERED

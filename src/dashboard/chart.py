"""Forecast chart: series normalization, pixel layout and render state."""

import asyncio
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

import altair as alt
import pandas as pd

from dashboard.config import (
    CHART_HEIGHT,
    CHART_MAX_RETRIES,
    CHART_PADDING,
    CHART_RETRY_DELAY,
    CHART_WIDTH,
    RESIZE_DEBOUNCE,
)
from dashboard.scheduling import Debouncer
from dashboard.units import TemperatureUnit, convert_temperature, temperature_symbol

logger = logging.getLogger(__name__)

# Pressure is plotted relative to 1000 hPa
PRESSURE_OFFSET = 1000


class Metric(str, Enum):
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    PRESSURE = "pressure"


class ChartStatus(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    RENDERED = "rendered"
    REFRESHING = "refreshing"
    ERROR = "error"


TRANSITIONS: dict[ChartStatus, set[ChartStatus]] = {
    ChartStatus.EMPTY: {ChartStatus.LOADING},
    ChartStatus.LOADING: {ChartStatus.LOADING, ChartStatus.RENDERED, ChartStatus.ERROR},
    ChartStatus.RENDERED: {ChartStatus.LOADING, ChartStatus.REFRESHING, ChartStatus.RENDERED},
    ChartStatus.REFRESHING: {ChartStatus.LOADING, ChartStatus.RENDERED, ChartStatus.ERROR},
    ChartStatus.ERROR: {ChartStatus.LOADING},
}


class ChartStateError(Exception):
    """Illegal chart status transition."""


class ChartDataError(ValueError):
    """Forecast data has nothing plottable for the selected metric."""


class ChartNotReady(Exception):
    """Chart container never reported a drawable area."""


@dataclass(frozen=True)
class ValueRange:
    scaled_min: float
    scaled_max: float
    margin: float

    @property
    def span(self) -> float:
        return self.scaled_max - self.scaled_min


@dataclass(frozen=True)
class ChartPoint:
    index: int
    x: float
    y: float
    value: float
    label: str
    text: str


@dataclass(frozen=True)
class ChartSegment:
    """Line from one point towards the next, anchored at its start."""

    x: float
    y: float
    length: float
    angle: float

    @property
    def end(self) -> tuple[float, float]:
        radians = math.radians(self.angle)
        return self.x + self.length * math.cos(radians), self.y + self.length * math.sin(radians)


@dataclass(frozen=True)
class ChartLayout:
    metric: Metric
    width: float
    height: float
    points: list[ChartPoint]
    segments: list[ChartSegment]
    value_range: ValueRange


def extract_values(days: list[dict], metric: Metric) -> list[tuple[int, float]]:
    """(day index, plotted value) pairs; days missing the metric are left out."""
    values = []
    for index, day in enumerate(days):
        if metric is Metric.TEMPERATURE:
            value = day.get("temp_avg")
        elif metric is Metric.HUMIDITY:
            value = day.get("humidity")
        else:
            pressure = day.get("pressure")
            value = pressure - PRESSURE_OFFSET if pressure is not None else None
        if value is not None:
            values.append((index, float(value)))
    return values


def scale_range(values: list[float]) -> ValueRange:
    """Pad the value range by 10%; a flat series gets a margin of 1."""
    low, high = min(values), max(values)
    margin = (high - low) * 0.1 or 1
    return ValueRange(scaled_min=low - margin, scaled_max=high + margin, margin=margin)


def format_chart_value(value: float, metric: Metric, unit: TemperatureUnit = "C") -> str:
    """Label for a plotted value, undoing the pressure offset."""
    if metric is Metric.TEMPERATURE:
        return f"{convert_temperature(value, unit)}{temperature_symbol(unit)}"
    if metric is Metric.HUMIDITY:
        return f"{round(value)}%"
    return f"{round(value + PRESSURE_OFFSET)} hPa"


def layout_chart(
    days: list[dict],
    metric: Metric,
    width: float,
    height: float,
    padding: float = CHART_PADDING,
    unit: TemperatureUnit = "C",
) -> ChartLayout:
    """Place one point per day in a ``width`` x ``height`` pixel box.

    Higher values sit higher on screen, so pixel y decreases as the value
    grows. Segments run from each point to the next.
    """
    plot_width = width - 2 * padding
    plot_height = height - 2 * padding
    if plot_width <= 0 or plot_height <= 0:
        raise ChartNotReady(f"No drawable area in {width}x{height} container")

    series = extract_values(days, metric)
    if not series:
        raise ChartDataError(f"No {metric.value} values to plot")

    value_range = scale_range([value for _, value in series])
    last = len(series) - 1

    points = []
    for position, (index, value) in enumerate(series):
        x = padding + (position / last * plot_width if last else plot_width / 2)
        y = padding + plot_height - (value - value_range.scaled_min) / value_range.span * plot_height
        points.append(
            ChartPoint(
                index=index,
                x=x,
                y=y,
                value=value,
                label=days[index].get("day", ""),
                text=format_chart_value(value, metric, unit),
            )
        )

    segments = []
    for start, end in zip(points, points[1:]):
        dx, dy = end.x - start.x, end.y - start.y
        segments.append(
            ChartSegment(
                x=start.x,
                y=start.y,
                length=math.hypot(dx, dy),
                angle=math.degrees(math.atan2(dy, dx)),
            )
        )

    return ChartLayout(
        metric=metric,
        width=width,
        height=height,
        points=points,
        segments=segments,
        value_range=value_range,
    )


@dataclass
class ChartState:
    """Chart sub-state: what is plotted and where the render lifecycle is."""

    metric: Metric = Metric.TEMPERATURE
    status: ChartStatus = ChartStatus.EMPTY
    city: str | None = None
    days: list[dict] = field(default_factory=list)
    layout: ChartLayout | None = None
    error: str | None = None

    def transition(self, status: ChartStatus) -> None:
        if status not in TRANSITIONS[self.status]:
            raise ChartStateError(f"Cannot move chart from {self.status.value} to {status.value}")
        logger.debug(f"Chart {self.status.value} -> {status.value}")
        self.status = status
        if status is not ChartStatus.ERROR:
            self.error = None

    def begin_load(self, refresh: bool = False) -> None:
        """Enter LOADING, or REFRESHING when redrawing an already rendered chart."""
        if refresh and self.status is ChartStatus.RENDERED:
            self.transition(ChartStatus.REFRESHING)
        else:
            self.transition(ChartStatus.LOADING)
            self.layout = None

    def fail(self, message: str) -> None:
        self.transition(ChartStatus.ERROR)
        self.layout = None
        self.error = message


class ChartRenderer:
    """Draws ``ChartState.days`` into a measured container."""

    def __init__(
        self,
        state: ChartState,
        measure: Callable[[], tuple[float, float]] | None = None,
        retry_delay: float = CHART_RETRY_DELAY,
        max_retries: int = CHART_MAX_RETRIES,
        resize_delay: float = RESIZE_DEBOUNCE,
    ) -> None:
        """Initialize the renderer.

        Args:
            state: Chart sub-state to draw from and update.
            measure: Returns the container's current (width, height) in pixels.
            retry_delay: Wait between measurements while the container has no area.
            max_retries: Measurements to attempt before giving up.
            resize_delay: Quiet period before a resize triggers a redraw.
        """
        self.state = state
        self.measure = measure or (lambda: (CHART_WIDTH, CHART_HEIGHT))
        self.retry_delay = retry_delay
        self.max_retries = max_retries
        self.unit: TemperatureUnit = "C"
        self._resize = Debouncer(resize_delay, self.redraw)

    async def _wait_for_area(self) -> tuple[float, float]:
        for _ in range(self.max_retries + 1):
            width, height = self.measure()
            if width > 2 * CHART_PADDING and height > 2 * CHART_PADDING:
                return width, height
            await asyncio.sleep(self.retry_delay)
        raise ChartNotReady(f"Chart container still empty after {self.max_retries} retries")

    async def draw(self) -> ChartLayout:
        """Lay out the current days and mark the chart rendered."""
        width, height = await self._wait_for_area()
        # Prior points and lines never survive into a new drawing
        self.state.layout = None
        layout = layout_chart(self.state.days, self.state.metric, width, height, unit=self.unit)
        self.state.layout = layout
        self.state.transition(ChartStatus.RENDERED)
        return layout

    async def redraw(self) -> None:
        """Re-layout without refetching; only a rendered chart is redrawn."""
        if self.state.status is ChartStatus.RENDERED and self.state.days:
            await self.draw()

    def on_resize(self) -> None:
        """Schedule a redraw once resizes settle; must run on the event loop."""
        self._resize.trigger()


def to_altair(layout: ChartLayout) -> alt.LayerChart:
    """Render a layout in pixel space with the y axis pointing down."""
    points = pd.DataFrame(
        [{"x": p.x, "y": p.y, "label": p.label, "text": p.text} for p in layout.points]
    )
    lines = pd.DataFrame(
        [{"x": s.x, "y": s.y, "x2": s.end[0], "y2": s.end[1]} for s in layout.segments],
        columns=["x", "y", "x2", "y2"],
    )

    x_scale = alt.Scale(domain=[0, layout.width])
    y_scale = alt.Scale(domain=[0, layout.height], reverse=True)
    no_axis = alt.Axis(labels=False, ticks=False, grid=False, domain=False, title=None)

    line_chart = (
        alt.Chart(lines)
        .mark_rule(strokeWidth=3, color="#38bdf8")
        .encode(
            x=alt.X("x:Q", scale=x_scale, axis=no_axis),
            y=alt.Y("y:Q", scale=y_scale, axis=no_axis),
            x2="x2:Q",
            y2="y2:Q",
        )
    )
    base = alt.Chart(points).encode(
        x=alt.X("x:Q", scale=x_scale, axis=no_axis),
        y=alt.Y("y:Q", scale=y_scale, axis=no_axis),
    )
    dots = base.mark_circle(size=120, color="#f8fafc", opacity=1).encode(
        tooltip=[alt.Tooltip("label:N", title="Day"), alt.Tooltip("text:N", title="Value")],
    )
    values = base.mark_text(dy=-14, color="#f8fafc", fontSize=12).encode(text="text:N")
    labels = base.mark_text(color="#94a3b8", fontSize=11).encode(
        y=alt.value(layout.height - 4),
        text="label:N",
    )

    return (line_chart + dots + values + labels).properties(
        width=layout.width,
        height=layout.height,
    )

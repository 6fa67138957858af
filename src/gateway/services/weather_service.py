"""Current conditions and forecast normalization."""

import asyncio
import logging
import time
from collections.abc import Callable
from datetime import datetime, timedelta

from gateway.core.errors import InvalidUpstreamResponse
from gateway.providers.base import CurrentConditions, DailyForecast, WeatherProvider
from gateway.schemas.location import ResolvedLocation
from gateway.schemas.weather import (
    ChartData,
    Clouds,
    Coordinates,
    ForecastDay,
    MainReadings,
    Rain,
    SysInfo,
    WeatherCondition,
    WeatherSnapshot,
    Wind,
)
from gateway.services.conditions import map_condition

logger = logging.getLogger(__name__)

# Forecast window: 2 days back, today, 2 days forward.
# When the anchor day is dropped for missing temperatures the window has no
# current day; that is logged as an error rather than filled in.
FORECAST_WINDOW = 5
ANCHOR_INDEX = 2

STANDARD_PRESSURE_HPA = 1013.25
KMH_PER_MS = 3.6


def kmh_to_ms(value: float | None) -> float | None:
    """Convert km/h to m/s, keeping absent values absent."""
    if value is None:
        return None
    return value / KMH_PER_MS


def km_to_m(value: float | None) -> float | None:
    if value is None:
        return None
    return value * 1000


def to_epoch(timestamp: str | None) -> int | None:
    """Convert an ISO-8601 timestamp to epoch seconds."""
    if not timestamp:
        return None
    try:
        return int(datetime.fromisoformat(timestamp).timestamp())
    except ValueError:
        logger.warning(f"Unparseable upstream timestamp: {timestamp}")
        return None


def day_label(index: int, now: datetime) -> str:
    """Label a window position relative to the anchor day."""
    days_diff = index - ANCHOR_INDEX
    if days_diff == -1:
        return "Yesterday"
    if days_diff == 0:
        return "Today"
    if days_diff == 1:
        return "Tomorrow"
    return (now + timedelta(days=days_diff)).strftime("%a")


def date_label(index: int, now: datetime) -> str:
    """Month/day label such as ``Oct 19`` for a window position."""
    day = now + timedelta(days=index - ANCHOR_INDEX)
    return f"{day.strftime('%b')} {day.day}"


def build_forecast_series(
    days: list[DailyForecast],
    current_pressure: float | None,
    now: datetime,
) -> list[ForecastDay]:
    """Build the 5-day window from the provider's daily forecast.

    Labels and dates come from ``now``, not from the payload. Days without
    both a minimum and a maximum temperature are dropped.
    """
    series = []
    for index, day in enumerate(days[:FORECAST_WINDOW]):
        if day.temp_min is None or day.temp_max is None:
            if index == ANCHOR_INDEX:
                logger.error("Skipping today's forecast: incomplete temperature data, no current day in window")
            else:
                logger.warning(f"Skipping forecast day {index}: incomplete temperature data")
            continue

        local_day = (now + timedelta(days=index - ANCHOR_INDEX)).date()
        if day.display_date is not None and day.display_date != local_day:
            logger.warning(
                f"Forecast day {index} labelled {local_day} but upstream date is {day.display_date}"
            )

        pressure = day.pressure
        if pressure is None:
            pressure = current_pressure if current_pressure is not None else STANDARD_PRESSURE_HPA

        condition = map_condition(day.condition)
        series.append(
            ForecastDay(
                day=day_label(index, now),
                day_name=local_day.strftime("%a"),
                date=date_label(index, now),
                full_date=local_day.isoformat(),
                upstream_date=day.display_date.isoformat() if day.display_date else None,
                temp_min=day.temp_min,
                temp_max=day.temp_max,
                humidity=day.humidity,
                pressure=pressure,
                weather=WeatherCondition(**condition._asdict()),
                current=index == ANCHOR_INDEX,
                precip_probability=day.precip_probability,
                precip_amount=day.precip_amount,
                wind_speed=kmh_to_ms(day.wind_speed_kmh),
                wind_speed_kmh=day.wind_speed_kmh,
                wind_direction=day.wind_cardinal,
                wind_gust_kmh=day.wind_gust_kmh,
                uv_index=day.uv_index,
            )
        )
    return series


def build_snapshot(
    location: ResolvedLocation,
    current: CurrentConditions,
    forecast: list[DailyForecast],
    now: datetime,
) -> WeatherSnapshot:
    """Merge current conditions with forecast day 0 into one snapshot."""
    if current.temperature is None:
        logger.error(f"Current conditions for {location.city} have no temperature reading")
        raise InvalidUpstreamResponse("Current conditions response is missing temperature")

    today = forecast[0] if forecast else DailyForecast()
    condition = map_condition(current.condition)

    return WeatherSnapshot(
        coord=Coordinates(lat=location.lat, lng=location.lng),
        weather=[WeatherCondition(**condition._asdict())],
        main=MainReadings(
            temp=current.temperature,
            feels_like=current.feels_like,
            temp_min=today.temp_min,
            temp_max=today.temp_max,
            pressure=current.pressure,
            humidity=current.humidity,
            sea_level=current.pressure,
            grnd_level=current.pressure,
        ),
        visibility=km_to_m(current.visibility_km),
        visibility_km=current.visibility_km,
        wind=Wind(
            speed=kmh_to_ms(current.wind_speed_kmh),
            speed_kmh=current.wind_speed_kmh,
            deg=current.wind_direction_deg,
            cardinal=current.wind_cardinal,
            gust=kmh_to_ms(current.wind_gust_kmh),
            gust_kmh=current.wind_gust_kmh,
        ),
        clouds=Clouds(all=current.cloud_cover),
        rain=Rain(one_hour=current.precipitation_mm) if current.precipitation_mm is not None else None,
        dt=int(now.timestamp()),
        sys=SysInfo(
            country=location.country,
            sunrise=to_epoch(today.sunrise),
            sunset=to_epoch(today.sunset),
        ),
        name=location.city,
        uv_index=current.uv_index,
        precip_probability=current.precip_probability,
        dew_point=current.dew_point,
        heat_index=current.heat_index,
        wind_chill=current.wind_chill,
        thunderstorm_probability=current.thunderstorm_probability,
        is_daytime=current.is_daytime,
        moon_phase=today.moon_phase,
        current_time=current.current_time,
        time_zone=current.time_zone,
        today_max_temp=today.temp_max,
        today_min_temp=today.temp_min,
        today_feels_like_max=today.feels_like_max,
        today_feels_like_min=today.feels_like_min,
    )


class WeatherService:
    """Service for fetching and normalizing weather data."""

    def __init__(
        self,
        provider: WeatherProvider,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the weather service.

        Args:
            provider: Upstream data provider.
            clock: Source of local "now" for day labels and timestamps.
        """
        self.provider = provider
        self.clock = clock

    async def get_snapshot(self, location: ResolvedLocation) -> WeatherSnapshot:
        """Fetch current conditions and day forecast and merge them."""
        started = time.perf_counter()
        current, forecast = await asyncio.gather(
            self.provider.current_conditions(location.lat, location.lng),
            self.provider.daily_forecast(location.lat, location.lng),
        )
        snapshot = build_snapshot(location, current, forecast, self.clock())
        logger.info(
            f"Weather snapshot for {location.city} built in {time.perf_counter() - started:.2f}s"
        )
        return snapshot

    async def get_chart(self, location: ResolvedLocation) -> ChartData:
        """Forecast window for the chart, using current pressure as fallback."""
        current, days = await asyncio.gather(
            self.provider.current_conditions(location.lat, location.lng),
            self.provider.daily_forecast(location.lat, location.lng),
        )
        return ChartData(
            city=location.city,
            coordinates=Coordinates(lat=location.lat, lng=location.lng),
            combined=self._series(days, current.pressure, location),
        )

    def _series(
        self,
        days: list[DailyForecast],
        current_pressure: float | None,
        location: ResolvedLocation,
    ) -> list[ForecastDay]:
        if not days:
            logger.error(f"No forecast days returned for {location.city}")
            raise InvalidUpstreamResponse("No forecast data available from upstream provider")
        return build_forecast_series(days, current_pressure, self.clock())

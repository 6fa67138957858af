# Shared fixtures: an in-memory weather provider, canned upstream records
# and a fixed local clock.

from datetime import date, datetime

import pytest

from gateway.providers.base import (
    AddressComponent,
    AirQualityIndex,
    AirQualityReading,
    CurrentConditions,
    DailyForecast,
    GeocodeResult,
    PlaceResult,
    PollutantReading,
    WeatherProvider,
)
from gateway.schemas.location import ResolvedLocation

# Monday
NOW = datetime(2026, 10, 19, 12, 0, 0)


def london_geocode() -> GeocodeResult:
    return GeocodeResult(
        lat=51.5074,
        lng=-0.1278,
        formatted_address="London, UK",
        place_id="place-london",
        components=[
            AddressComponent("London", "London", ["locality", "political"]),
            AddressComponent("England", "England", ["administrative_area_level_1", "political"]),
            AddressComponent("United Kingdom", "GB", ["country", "political"]),
        ],
    )


def current_conditions(**overrides) -> CurrentConditions:
    values = dict(
        temperature=18.4,
        feels_like=17.0,
        condition="PARTLY_CLOUDY",
        humidity=72,
        pressure=1009.5,
        visibility_km=10,
        wind_speed_kmh=36,
        wind_direction_deg=225,
        wind_cardinal="SOUTHWEST",
        wind_gust_kmh=54,
        cloud_cover=40,
        precipitation_mm=None,
        precip_probability=10,
        uv_index=3,
    )
    values.update(overrides)
    return CurrentConditions(**values)


def forecast_days(count: int = 5, **overrides) -> list[DailyForecast]:
    days = []
    for index in range(count):
        values = dict(
            display_date=date(2026, 10, 17 + index),
            temp_min=10.0 + index,
            temp_max=20.0 + index,
            feels_like_min=9.0 + index,
            feels_like_max=19.0 + index,
            condition="CLEAR",
            humidity=60 + index,
            precip_probability=5 * index,
            wind_speed_kmh=18,
            wind_cardinal="WEST",
            sunrise="2026-10-17T06:21:00Z",
            sunset="2026-10-17T17:02:00Z",
            moon_phase="WAXING_CRESCENT",
        )
        values.update(overrides)
        days.append(DailyForecast(**values))
    return days


def air_quality_reading(category: str = "Good air quality") -> AirQualityReading:
    return AirQualityReading(
        indexes=[
            AirQualityIndex(
                aqi=72,
                category=category,
                code="uaqi",
                display_name="Universal AQI",
                aqi_display="72",
                dominant_pollutant="pm25",
            )
        ],
        pollutants=[PollutantReading(code="pm25", display_name="PM2.5", value=8.2, units="MICROGRAMS_PER_CUBIC_METER")],
        health_recommendations={"generalPopulation": "Enjoy your usual outdoor activities."},
    )


class FakeProvider(WeatherProvider):
    """Provider returning canned records and counting calls."""

    name = "fake"

    def __init__(
        self,
        geocode: GeocodeResult | None = None,
        current: CurrentConditions | None = None,
        forecast: list[DailyForecast] | None = None,
        air: AirQualityReading | None = None,
        places: list[PlaceResult] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._geocode = geocode
        self._current = current or current_conditions()
        self._forecast = forecast if forecast is not None else forecast_days()
        self._air = air or air_quality_reading()
        self._places = places or []
        self._error = error
        self.calls: list[str] = []

    def _record(self, call: str) -> None:
        self.calls.append(call)
        if self._error is not None:
            raise self._error

    async def geocode(self, address):
        self._record(f"geocode:{address}")
        return self._geocode

    async def reverse_geocode(self, lat, lng):
        self._record(f"reverse_geocode:{lat},{lng}")
        return self._geocode

    async def search_places(self, query):
        self._record(f"search_places:{query}")
        return self._places

    async def current_conditions(self, lat, lng):
        self._record("current_conditions")
        return self._current

    async def daily_forecast(self, lat, lng):
        self._record("daily_forecast")
        return self._forecast

    async def air_quality(self, lat, lng):
        self._record("air_quality")
        return self._air

    async def probe(self):
        return {"googleWeather": "Working (Status: 200)"}


@pytest.fixture
def london() -> ResolvedLocation:
    return ResolvedLocation(lat=51.5074, lng=-0.1278, city="London", country="GB")


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(geocode=london_geocode())

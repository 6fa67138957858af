"""Google Maps Platform provider: Geocoding, Places, Weather and Air Quality."""

import logging
from datetime import date
from typing import Any

import httpx

from gateway.core.errors import UpstreamUnavailable
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

logger = logging.getLogger(__name__)

# Coordinates used by the health probe (Delhi)
PROBE_LAT = 28.7041
PROBE_LNG = 77.1025


class GoogleProvider(WeatherProvider):
    """Provider backed by Google Maps Platform REST APIs."""

    name = "google"

    GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"
    PLACES_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"
    AIR_QUALITY_URL = "https://airquality.googleapis.com/v1/currentConditions:lookup"
    WEATHER_CURRENT_URL = "https://weather.googleapis.com/v1/currentConditions:lookup"
    WEATHER_FORECAST_URL = "https://weather.googleapis.com/v1/forecast/days:lookup"

    AIR_QUALITY_COMPUTATIONS = [
        "HEALTH_RECOMMENDATIONS",
        "DOMINANT_POLLUTANT_CONCENTRATION",
        "POLLUTANT_CONCENTRATION",
        "LOCAL_AQI",
        "POLLUTANT_ADDITIONAL_INFO",
    ]

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str | None,
        timeout: float = 10.0,
        probe_timeout: float = 5.0,
    ) -> None:
        """Initialize the provider.

        Args:
            client: Shared HTTP client.
            api_key: Google Maps Platform API key.
            timeout: Timeout in seconds for data calls.
            probe_timeout: Timeout in seconds for health probe calls.
        """
        self.client = client
        self.api_key = api_key
        self.timeout = timeout
        self.probe_timeout = probe_timeout

    # ==================== GEOCODING ====================

    async def geocode(self, address: str) -> GeocodeResult | None:
        data = await self._get(self.GEOCODING_URL, {"address": address}, "Geocoding")
        return self._first_geocode_result(data)

    async def reverse_geocode(self, lat: float, lng: float) -> GeocodeResult | None:
        data = await self._get(self.GEOCODING_URL, {"latlng": f"{lat},{lng}"}, "Reverse geocoding")
        return self._first_geocode_result(data)

    async def search_places(self, query: str) -> list[PlaceResult]:
        data = await self._get(
            self.PLACES_URL,
            {"query": f"{query} city", "type": "locality"},
            "Places search",
        )
        places = []
        for place in data.get("results") or []:
            location = _dig(place, "geometry", "location") or {}
            if "lat" not in location or "lng" not in location:
                continue
            places.append(
                PlaceResult(
                    name=place.get("name", ""),
                    lat=location["lat"],
                    lng=location["lng"],
                    formatted_address=place.get("formatted_address"),
                    place_id=place.get("place_id"),
                )
            )
        return places

    # ==================== WEATHER ====================

    async def current_conditions(self, lat: float, lng: float) -> CurrentConditions:
        data = await self._get(self.WEATHER_CURRENT_URL, _location_params(lat, lng), "Weather current conditions")
        return CurrentConditions(
            temperature=_dig(data, "temperature", "degrees"),
            feels_like=_dig(data, "feelsLikeTemperature", "degrees"),
            condition=_dig(data, "weatherCondition", "type"),
            humidity=data.get("relativeHumidity"),
            pressure=_dig(data, "airPressure", "meanSeaLevelMillibars"),
            visibility_km=_dig(data, "visibility", "distance"),
            wind_speed_kmh=_dig(data, "wind", "speed", "value"),
            wind_direction_deg=_dig(data, "wind", "direction", "degrees"),
            wind_cardinal=_dig(data, "wind", "direction", "cardinal"),
            wind_gust_kmh=_dig(data, "wind", "gust", "value"),
            cloud_cover=data.get("cloudCover"),
            precipitation_mm=_dig(data, "precipitation", "qpf", "quantity"),
            precip_probability=_dig(data, "precipitation", "probability", "percent"),
            uv_index=data.get("uvIndex"),
            dew_point=_dig(data, "dewPoint", "degrees"),
            heat_index=_dig(data, "heatIndex", "degrees"),
            wind_chill=_dig(data, "windChill", "degrees"),
            thunderstorm_probability=data.get("thunderstormProbability"),
            is_daytime=data.get("isDaytime"),
            current_time=data.get("currentTime"),
            time_zone=_dig(data, "timeZone", "id"),
        )

    async def daily_forecast(self, lat: float, lng: float) -> list[DailyForecast]:
        data = await self._get(self.WEATHER_FORECAST_URL, _location_params(lat, lng), "Weather daily forecast")
        return [self._parse_forecast_day(day) for day in data.get("forecastDays") or []]

    @staticmethod
    def _parse_forecast_day(day: dict) -> DailyForecast:
        """Parse one forecastDays entry, preferring daytime over nighttime values."""
        daytime = day.get("daytimeForecast") or {}
        nighttime = day.get("nighttimeForecast") or {}

        def day_or_night(*keys: str) -> Any:
            value = _dig(daytime, *keys)
            return value if value is not None else _dig(nighttime, *keys)

        return DailyForecast(
            display_date=_parse_display_date(day.get("displayDate")),
            temp_min=_dig(day, "minTemperature", "degrees"),
            temp_max=_dig(day, "maxTemperature", "degrees"),
            feels_like_min=_dig(day, "feelsLikeMinTemperature", "degrees"),
            feels_like_max=_dig(day, "feelsLikeMaxTemperature", "degrees"),
            condition=day_or_night("weatherCondition", "type"),
            humidity=day_or_night("relativeHumidity"),
            precip_probability=day_or_night("precipitation", "probability", "percent"),
            precip_amount=_dig(daytime, "precipitation", "qpf", "quantity"),
            wind_speed_kmh=_dig(daytime, "wind", "speed", "value"),
            wind_cardinal=_dig(daytime, "wind", "direction", "cardinal"),
            wind_gust_kmh=_dig(daytime, "wind", "gust", "value"),
            uv_index=daytime.get("uvIndex"),
            sunrise=_dig(day, "sunEvents", "sunriseTime"),
            sunset=_dig(day, "sunEvents", "sunsetTime"),
            moon_phase=_dig(day, "moonEvents", "moonPhase"),
        )

    # ==================== AIR QUALITY ====================

    async def air_quality(self, lat: float, lng: float) -> AirQualityReading:
        body = {
            "location": {"latitude": lat, "longitude": lng},
            "extraComputations": self.AIR_QUALITY_COMPUTATIONS,
            "languageCode": "en",
        }
        data = await self._post(self.AIR_QUALITY_URL, body, "Air quality")

        indexes = [
            AirQualityIndex(
                aqi=int(index["aqi"]),
                category=index.get("category", ""),
                code=index.get("code"),
                display_name=index.get("displayName"),
                aqi_display=index.get("aqiDisplay"),
                dominant_pollutant=index.get("dominantPollutant"),
                color=index.get("color"),
            )
            for index in data.get("indexes") or []
            if index.get("aqi") is not None
        ]
        pollutants = [
            PollutantReading(
                code=p.get("code", ""),
                display_name=p.get("displayName"),
                full_name=p.get("fullName"),
                value=_dig(p, "concentration", "value"),
                units=_dig(p, "concentration", "units"),
                sources=_dig(p, "additionalInfo", "sources"),
                effects=_dig(p, "additionalInfo", "effects"),
            )
            for p in data.get("pollutants") or []
        ]
        return AirQualityReading(
            indexes=indexes,
            pollutants=pollutants,
            health_recommendations=data.get("healthRecommendations") or {},
        )

    # ==================== HEALTH ====================

    async def probe(self) -> dict[str, str]:
        """Call the weather and air quality APIs once with a short timeout."""
        if not self.api_key:
            return {
                "googleMaps": "Not configured",
                "googleWeather": "Not configured",
                "googleAirQuality": "Not configured",
            }

        statuses = {"googleMaps": "Configured"}
        statuses["googleWeather"] = await self._probe_call(
            "GET",
            self.WEATHER_CURRENT_URL,
            params={"key": self.api_key, **_location_params(PROBE_LAT, PROBE_LNG)},
        )
        statuses["googleAirQuality"] = await self._probe_call(
            "POST",
            self.AIR_QUALITY_URL,
            params={"key": self.api_key},
            json={"location": {"latitude": PROBE_LAT, "longitude": PROBE_LNG}},
        )
        return statuses

    async def _probe_call(self, method: str, url: str, **kwargs: Any) -> str:
        try:
            response = await self.client.request(method, url, timeout=self.probe_timeout, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Health probe failed for {url}: HTTP {e.response.status_code}")
            return f"Failed ({e.response.status_code})"
        except httpx.HTTPError as e:
            logger.error(f"Health probe failed for {url}: {e!r}")
            return f"Failed ({type(e).__name__})"
        return f"Working (Status: {response.status_code})"

    # ==================== HTTP HELPERS ====================

    async def _get(self, url: str, params: dict[str, Any], api_name: str) -> dict:
        logger.info(f"Calling {api_name} API")
        try:
            response = await self.client.get(
                url,
                params={**params, "key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"{api_name} API returned {e.response.status_code}")
            raise UpstreamUnavailable(f"{api_name} API returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"{api_name} API request failed: {e!r}")
            raise UpstreamUnavailable(f"{api_name} API unavailable: {type(e).__name__}") from e
        return response.json()

    async def _post(self, url: str, body: dict[str, Any], api_name: str) -> dict:
        logger.info(f"Calling {api_name} API")
        try:
            response = await self.client.post(
                url,
                params={"key": self.api_key},
                json=body,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"{api_name} API returned {e.response.status_code}")
            raise UpstreamUnavailable(f"{api_name} API returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"{api_name} API request failed: {e!r}")
            raise UpstreamUnavailable(f"{api_name} API unavailable: {type(e).__name__}") from e
        return response.json()

    @staticmethod
    def _first_geocode_result(data: dict) -> GeocodeResult | None:
        results = data.get("results")
        if not results:
            return None

        result = results[0]
        location = _dig(result, "geometry", "location") or {}
        if "lat" not in location or "lng" not in location:
            return None

        return GeocodeResult(
            lat=location["lat"],
            lng=location["lng"],
            formatted_address=result.get("formatted_address"),
            place_id=result.get("place_id"),
            components=[
                AddressComponent(
                    long_name=c.get("long_name", ""),
                    short_name=c.get("short_name", ""),
                    types=list(c.get("types", [])),
                )
                for c in result.get("address_components", [])
            ],
        )


def _location_params(lat: float, lng: float) -> dict[str, float]:
    return {"location.latitude": lat, "location.longitude": lng}


def _dig(data: dict | None, *keys: str) -> Any:
    """Safely walk nested dicts, returning None if any level is missing."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _parse_display_date(raw: dict | None) -> date | None:
    if not raw:
        return None
    try:
        return date(raw["year"], raw["month"], raw["day"])
    except (KeyError, TypeError, ValueError):
        return None

# Contract tests for the Google provider against a mocked transport.
# Validates request shapes, payload parsing and error mapping.

import json

import httpx
import pytest

from gateway.core.errors import UpstreamUnavailable
from gateway.providers.google import GoogleProvider

GEOCODE_RESPONSE = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "Paris, France",
            "place_id": "place-paris",
            "geometry": {"location": {"lat": 48.8566, "lng": 2.3522}},
            "address_components": [
                {"long_name": "Paris", "short_name": "Paris", "types": ["locality", "political"]},
                {"long_name": "France", "short_name": "FR", "types": ["country", "political"]},
            ],
        }
    ],
}

CURRENT_RESPONSE = {
    "currentTime": "2026-10-19T12:00:00Z",
    "timeZone": {"id": "Europe/Paris"},
    "isDaytime": True,
    "weatherCondition": {"type": "LIGHT_RAIN"},
    "temperature": {"degrees": 14.2},
    "feelsLikeTemperature": {"degrees": 13.1},
    "relativeHumidity": 81,
    "uvIndex": 1,
    "precipitation": {"probability": {"percent": 60}, "qpf": {"quantity": 0.4}},
    "airPressure": {"meanSeaLevelMillibars": 1004.2},
    "wind": {"direction": {"degrees": 200, "cardinal": "SOUTH_SOUTHWEST"}, "speed": {"value": 18}, "gust": {"value": 30}},
    "visibility": {"distance": 12},
    "cloudCover": 90,
}

FORECAST_RESPONSE = {
    "forecastDays": [
        {
            "displayDate": {"year": 2026, "month": 10, "day": 17},
            "maxTemperature": {"degrees": 16.0},
            "minTemperature": {"degrees": 9.0},
            "daytimeForecast": {"relativeHumidity": 70, "weatherCondition": {"type": "CLOUDY"}},
            "nighttimeForecast": {"relativeHumidity": 88, "weatherCondition": {"type": "RAIN"}},
        },
        {
            "displayDate": {"year": 2026, "month": 10, "day": 18},
            "maxTemperature": {"degrees": 15.0},
            "minTemperature": {"degrees": 8.0},
            "nighttimeForecast": {"relativeHumidity": 90, "weatherCondition": {"type": "RAIN"}},
        },
    ]
}

AIR_QUALITY_RESPONSE = {
    "indexes": [
        {
            "code": "uaqi",
            "displayName": "Universal AQI",
            "aqi": 64,
            "aqiDisplay": "64",
            "category": "Good air quality",
            "dominantPollutant": "o3",
        }
    ],
    "pollutants": [
        {"code": "o3", "displayName": "O3", "concentration": {"value": 31.2, "units": "PARTS_PER_BILLION"}}
    ],
    "healthRecommendations": {"generalPopulation": "Enjoy the outdoors."},
}


def _provider(handler, api_key: str | None = "test-key") -> GoogleProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleProvider(client, api_key=api_key)


class TestGeocoding:
    @pytest.mark.asyncio
    async def test_parses_first_result(self):
        """Forward geocoding sends the address and key and parses the first match.

        Implementation: Mock transport asserts on query parameters and returns a Paris result.
        Passing implies: Components and coordinates reach the provider-neutral record.
        """
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.url.params)
            return httpx.Response(200, json=GEOCODE_RESPONSE)

        result = await _provider(handler).geocode("Paris")

        assert seen == {"address": "Paris", "key": "test-key"}
        assert (result.lat, result.lng) == (48.8566, 2.3522)
        assert result.components[1].short_name == "FR"

    @pytest.mark.asyncio
    async def test_zero_results_is_none(self):
        provider = _provider(lambda request: httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []}))
        assert await provider.reverse_geocode(0.0, 0.0) is None

    @pytest.mark.asyncio
    async def test_place_search_query(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.url.params)
            return httpx.Response(
                200,
                json={"results": [{"name": "Paris", "geometry": {"location": {"lat": 48.85, "lng": 2.35}}}]},
            )

        places = await _provider(handler).search_places("Par")

        assert seen["query"] == "Par city"
        assert seen["type"] == "locality"
        assert places[0].name == "Paris"


class TestWeather:
    @pytest.mark.asyncio
    async def test_current_conditions(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["location.latitude"] == "48.8566"
            return httpx.Response(200, json=CURRENT_RESPONSE)

        current = await _provider(handler).current_conditions(48.8566, 2.3522)

        assert current.temperature == 14.2
        assert current.condition == "LIGHT_RAIN"
        assert current.pressure == 1004.2
        assert current.wind_speed_kmh == 18
        assert current.precipitation_mm == 0.4
        assert current.time_zone == "Europe/Paris"

    @pytest.mark.asyncio
    async def test_forecast_prefers_daytime_values(self):
        """Daytime values win; nighttime fills in when daytime is absent.

        Implementation: First day has both halves, second only nighttime.
        Passing implies: Humidity and condition never go missing when either half has them.
        """
        days = await _provider(lambda request: httpx.Response(200, json=FORECAST_RESPONSE)).daily_forecast(0, 0)

        assert days[0].humidity == 70
        assert days[0].condition == "CLOUDY"
        assert days[1].humidity == 90
        assert days[1].condition == "RAIN"
        assert days[1].display_date.day == 18

    @pytest.mark.asyncio
    async def test_non_2xx_is_upstream_unavailable(self):
        provider = _provider(lambda request: httpx.Response(403, json={"error": {"message": "denied"}}))
        with pytest.raises(UpstreamUnavailable):
            await provider.current_conditions(0, 0)

    @pytest.mark.asyncio
    async def test_transport_error_is_upstream_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(UpstreamUnavailable):
            await _provider(handler).daily_forecast(0, 0)


class TestAirQuality:
    @pytest.mark.asyncio
    async def test_posts_location_and_parses_indexes(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["key"] = request.url.params["key"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=AIR_QUALITY_RESPONSE)

        reading = await _provider(handler).air_quality(48.85, 2.35)

        assert seen["method"] == "POST"
        assert seen["key"] == "test-key"
        assert seen["body"]["location"] == {"latitude": 48.85, "longitude": 2.35}
        assert reading.indexes[0].aqi == 64
        assert reading.pollutants[0].units == "PARTS_PER_BILLION"
        assert reading.health_recommendations["generalPopulation"] == "Enjoy the outdoors."


class TestProbe:
    @pytest.mark.asyncio
    async def test_not_configured_without_key(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no upstream call expected")

        statuses = await _provider(handler, api_key=None).probe()
        assert set(statuses.values()) == {"Not configured"}

    @pytest.mark.asyncio
    async def test_reports_failures_without_raising(self):
        """Probe failures are reported per API and never raised.

        Implementation: Weather answers 200, air quality answers 500.
        Passing implies: The health endpoint stays up when an upstream API is down.
        """

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "airquality.googleapis.com":
                return httpx.Response(500)
            return httpx.Response(200, json={})

        statuses = await _provider(handler).probe()

        assert statuses["googleWeather"] == "Working (Status: 200)"
        assert statuses["googleAirQuality"] == "Failed (500)"

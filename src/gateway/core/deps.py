"""Dependency injection utilities."""

from typing import Annotated

import httpx
from fastapi import Depends, Request

from gateway.core.config import settings
from gateway.providers.base import WeatherProvider
from gateway.providers.google import GoogleProvider
from gateway.services import AirQualityService, LocationService, WeatherService


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared HTTP client created in the application lifespan."""
    return request.app.state.http_client


def get_provider(
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> WeatherProvider:
    """Upstream provider bound to the shared HTTP client."""
    return GoogleProvider(
        client,
        api_key=settings.google_api_key,
        timeout=settings.upstream_timeout,
        probe_timeout=settings.probe_timeout,
    )


Provider = Annotated[WeatherProvider, Depends(get_provider)]


def get_location_service(provider: Provider) -> LocationService:
    return LocationService(provider)


def get_weather_service(provider: Provider) -> WeatherService:
    return WeatherService(provider)


def get_air_quality_service(provider: Provider) -> AirQualityService:
    return AirQualityService(provider)


# Type aliases for dependency injection
Locations = Annotated[LocationService, Depends(get_location_service)]
Weather = Annotated[WeatherService, Depends(get_weather_service)]
AirQuality = Annotated[AirQualityService, Depends(get_air_quality_service)]

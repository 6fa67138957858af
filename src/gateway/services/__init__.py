"""Normalization services over the upstream provider."""

from gateway.services.air_quality_service import AirQualityService
from gateway.services.location_service import LocationService
from gateway.services.weather_service import WeatherService

__all__ = ["AirQualityService", "LocationService", "WeatherService"]

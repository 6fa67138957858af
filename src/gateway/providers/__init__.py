"""Upstream data providers."""

from gateway.providers.base import WeatherProvider
from gateway.providers.google import GoogleProvider

__all__ = ["WeatherProvider", "GoogleProvider"]

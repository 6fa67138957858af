"""Weather data API endpoints."""

import logging

from fastapi import APIRouter, Path

from gateway.core.deps import Locations, Weather
from gateway.schemas.common import ErrorBody
from gateway.schemas.weather import ChartData, WeatherSnapshot

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["weather"],
    responses={404: {"model": ErrorBody}, 500: {"model": ErrorBody}},
)


@router.get(
    "/weather/coords/{lat}/{lng}",
    response_model=WeatherSnapshot,
    response_model_exclude_none=True,
)
async def get_weather_by_coordinates(
    locations: Locations,
    weather: Weather,
    lat: float = Path(..., ge=-90, le=90, description="Location latitude"),
    lng: float = Path(..., ge=-180, le=180, description="Location longitude"),
) -> WeatherSnapshot:
    """Current conditions for a coordinate pair."""
    logger.info(f"Weather requested for coordinates {lat},{lng}")
    location = await locations.resolve_coordinates(lat, lng)
    return await weather.get_snapshot(location)


@router.get(
    "/weather/{city}",
    response_model=WeatherSnapshot,
    response_model_exclude_none=True,
)
async def get_weather(city: str, locations: Locations, weather: Weather) -> WeatherSnapshot:
    """Current conditions for a place name or a ``"lat,lng"`` string."""
    logger.info(f"Weather requested for '{city}'")
    location = await locations.resolve(city)
    return await weather.get_snapshot(location)


@router.get("/weather-chart/{city}", response_model=ChartData, response_model_exclude_none=True)
async def get_weather_chart(city: str, locations: Locations, weather: Weather) -> ChartData:
    """Five-day forecast window anchored on today."""
    logger.info(f"Weather chart requested for '{city}'")
    location = await locations.resolve(city)
    return await weather.get_chart(location)

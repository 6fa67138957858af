"""Air quality API endpoints."""

import logging

from fastapi import APIRouter

from gateway.core.deps import AirQuality, Locations
from gateway.schemas.air_quality import AirQualitySample
from gateway.schemas.common import ErrorBody

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/air-quality",
    tags=["air-quality"],
    responses={404: {"model": ErrorBody}, 500: {"model": ErrorBody}},
)


@router.get("/{city}", response_model=AirQualitySample, response_model_exclude_none=True)
async def get_air_quality(
    city: str,
    locations: Locations,
    air_quality: AirQuality,
) -> AirQualitySample:
    """Current air quality index for a place."""
    logger.info(f"Air quality requested for '{city}'")
    location = await locations.resolve(city)
    return await air_quality.get_air_quality(location)

"""Air quality normalization."""

import logging
import re

from gateway.core.errors import NoAirQualityData
from gateway.providers.base import WeatherProvider
from gateway.schemas.air_quality import AirQualitySample, Concentration, Pollutant, PollutantInfo
from gateway.schemas.location import ResolvedLocation
from gateway.schemas.weather import Coordinates

logger = logging.getLogger(__name__)

# Normalized category -> (status, description)
CATEGORIES: dict[str, tuple[str, str]] = {
    "excellent": ("Excellent", "Air quality is excellent"),
    "good": ("Good", "Air quality is good"),
    "moderate": ("Moderate", "Air quality is moderate"),
    "unhealthy_for_sensitive": (
        "Unhealthy for Sensitive Groups",
        "Members of sensitive groups may experience health effects",
    ),
    "unhealthy": ("Unhealthy", "Everyone may begin to experience health effects"),
    "very_unhealthy": ("Very Unhealthy", "Health warnings of emergency conditions"),
    "hazardous": ("Hazardous", "Health alert: everyone may experience serious health effects"),
}

ALIASES: dict[str, str] = {
    "excellent_air_quality": "excellent",
    "good_air_quality": "good",
    "moderate_air_quality": "moderate",
    "unhealthy_for_sensitive_groups": "unhealthy_for_sensitive",
    "unhealthy_air_quality": "unhealthy",
    "very_unhealthy_air_quality": "very_unhealthy",
    "hazardous_air_quality": "hazardous",
}


def normalize_category(category: str) -> str:
    return re.sub(r"\s+", "_", category.strip().lower())


def classify_category(category: str) -> tuple[str, str]:
    """Map a provider category to (status, description).

    Unrecognized categories pass through verbatim.
    """
    key = normalize_category(category)
    key = ALIASES.get(key, key)
    if key in CATEGORIES:
        return CATEGORIES[key]
    logger.info(f"Using air quality category as received: {category}")
    return category, f"Air quality is {category.lower()}"


class AirQualityService:
    """Service for fetching and normalizing air quality data."""

    def __init__(self, provider: WeatherProvider) -> None:
        self.provider = provider

    async def get_air_quality(self, location: ResolvedLocation) -> AirQualitySample:
        reading = await self.provider.air_quality(location.lat, location.lng)
        if not reading.indexes:
            logger.warning(f"No air quality indexes for {location.city}")
            raise NoAirQualityData(f"No air quality data available for {location.city}")

        index = reading.indexes[0]
        status, description = classify_category(index.category)

        return AirQualitySample(
            aqi=index.aqi,
            aqi_display=index.aqi_display or str(index.aqi),
            status=status,
            description=description,
            display_name=index.display_name or "Universal AQI",
            dominant_pollutant=index.dominant_pollutant,
            category=index.category,
            coordinates=Coordinates(lat=location.lat, lng=location.lng),
            estimated=False,
            pollutants=[
                Pollutant(
                    code=p.code,
                    display_name=p.display_name,
                    full_name=p.full_name,
                    concentration=Concentration(value=p.value, units=p.units),
                    additional_info=(
                        PollutantInfo(sources=p.sources, effects=p.effects)
                        if p.sources or p.effects
                        else None
                    ),
                )
                for p in reading.pollutants
            ],
            health_recommendations=reading.health_recommendations,
            color=index.color,
        )

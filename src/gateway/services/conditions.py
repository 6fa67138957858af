"""Mapping of upstream condition tokens to category, description and icon."""

import logging
from typing import NamedTuple

logger = logging.getLogger(__name__)


class Condition(NamedTuple):
    main: str
    description: str
    icon: str


DEFAULT_CONDITION = Condition("Clouds", "partly cloudy", "02d")

CONDITIONS: dict[str, Condition] = {
    "CLEAR": Condition("Clear", "clear sky", "01d"),
    "MOSTLY_CLEAR": Condition("Clear", "mostly clear", "02d"),
    "PARTLY_CLOUDY": Condition("Clouds", "partly cloudy", "02d"),
    "MOSTLY_CLOUDY": Condition("Clouds", "mostly cloudy", "03d"),
    "CLOUDY": Condition("Clouds", "cloudy", "04d"),
    "OVERCAST": Condition("Clouds", "overcast", "04d"),
    "FOG": Condition("Mist", "fog", "50d"),
    "LIGHT_FOG": Condition("Mist", "light fog", "50d"),
    "HAZE": Condition("Mist", "haze", "50d"),
    "DRIZZLE": Condition("Rain", "drizzle", "10d"),
    "LIGHT_RAIN": Condition("Rain", "light rain", "10d"),
    "RAIN": Condition("Rain", "rain", "09d"),
    "RAIN_SHOWERS": Condition("Rain", "rain showers", "09d"),
    "HEAVY_RAIN": Condition("Rain", "heavy rain", "09d"),
    "LIGHT_SNOW": Condition("Snow", "light snow", "13d"),
    "SNOW": Condition("Snow", "snow", "13d"),
    "HEAVY_SNOW": Condition("Snow", "heavy snow", "13d"),
    "FLURRIES": Condition("Snow", "flurries", "13d"),
    "FREEZING_RAIN": Condition("Rain", "freezing rain", "13d"),
    "FREEZING_DRIZZLE": Condition("Rain", "freezing drizzle", "13d"),
    "ICE_PELLETS": Condition("Snow", "ice pellets", "13d"),
    "THUNDERSTORM": Condition("Thunderstorm", "thunderstorm", "11d"),
    "HEAVY_THUNDERSTORM": Condition("Thunderstorm", "heavy thunderstorm", "11d"),
    "SCATTERED_THUNDERSTORMS": Condition("Thunderstorm", "scattered thunderstorms", "11d"),
    "ISOLATED_THUNDERSTORMS": Condition("Thunderstorm", "isolated thunderstorms", "11d"),
}


def map_condition(code: str | None) -> Condition:
    """Look up a condition token.

    Unknown or missing tokens are logged and degrade to a partly cloudy
    condition; they never fail the request.
    """
    if not code:
        logger.warning("No weather condition code in upstream response, using default")
        return DEFAULT_CONDITION

    condition = CONDITIONS.get(code.upper())
    if condition is None:
        logger.warning(f"Unknown weather condition code: {code}, using default icon")
        return DEFAULT_CONDITION._replace(description=code.lower().replace("_", " "))
    return condition

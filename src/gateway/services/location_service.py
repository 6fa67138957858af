"""Location resolution and city search."""

import logging

from gateway.core.errors import LocationNotFound
from gateway.providers.base import GeocodeResult, WeatherProvider
from gateway.schemas.location import CitySuggestion, ResolvedLocation
from gateway.schemas.weather import Coordinates

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5


def parse_coordinates(query: str) -> tuple[float, float] | None:
    """Parse a ``"lat,lng"`` query, returning None for anything else."""
    if "," not in query:
        return None
    lat_part, _, lng_part = query.partition(",")
    try:
        return float(lat_part.strip()), float(lng_part.strip())
    except ValueError:
        return None


def extract_place(result: GeocodeResult) -> tuple[str, str]:
    """Pick city and country out of address components.

    City is the first ``locality``, falling back to
    ``administrative_area_level_1``; country is the short form.
    """
    locality = None
    region = None
    country = None
    for component in result.components:
        if "locality" in component.types and locality is None:
            locality = component.long_name
        elif "administrative_area_level_1" in component.types and region is None:
            region = component.long_name
        elif "country" in component.types and country is None:
            country = component.short_name
    return locality or region or "Unknown", country or "Unknown"


class LocationService:
    """Resolves place names and coordinates through the provider."""

    def __init__(self, provider: WeatherProvider) -> None:
        self.provider = provider

    async def resolve(self, query: str) -> ResolvedLocation:
        """Resolve a place name or a ``"lat,lng"`` string."""
        coords = parse_coordinates(query)
        if coords is not None:
            return await self.resolve_coordinates(*coords)
        return await self.resolve_name(query)

    async def resolve_name(self, name: str) -> ResolvedLocation:
        result = await self.provider.geocode(name)
        if result is None:
            logger.info(f"No geocoding result for '{name}'")
            raise LocationNotFound(f"Location not found: {name}")
        return self._to_location(result, result.lat, result.lng)

    async def resolve_coordinates(self, lat: float, lng: float) -> ResolvedLocation:
        result = await self.provider.reverse_geocode(lat, lng)
        if result is None:
            logger.info(f"No reverse geocoding result for {lat},{lng}")
            raise LocationNotFound(f"Location not found: {lat},{lng}")
        # Keep the requested coordinates rather than the matched address centroid
        return self._to_location(result, lat, lng)

    async def search(self, query: str) -> list[CitySuggestion]:
        """Suggest up to five cities for a partial name."""
        places = await self.provider.search_places(query)
        return [
            CitySuggestion(
                name=place.name,
                formatted_address=place.formatted_address,
                location=Coordinates(lat=place.lat, lng=place.lng),
                place_id=place.place_id,
            )
            for place in places[:MAX_SUGGESTIONS]
        ]

    @staticmethod
    def _to_location(result: GeocodeResult, lat: float, lng: float) -> ResolvedLocation:
        city, country = extract_place(result)
        return ResolvedLocation(
            lat=lat,
            lng=lng,
            city=city,
            country=country,
            formatted_address=result.formatted_address,
            place_id=result.place_id,
        )

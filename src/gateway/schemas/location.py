"""Location and city search schemas."""

from pydantic import BaseModel

from gateway.schemas.weather import Coordinates


class ResolvedLocation(BaseModel):
    """A place resolved from a name or a coordinate pair."""

    lat: float
    lng: float
    city: str
    country: str
    formatted_address: str | None = None
    place_id: str | None = None


class CitySuggestion(BaseModel):
    """City search result."""

    name: str
    formatted_address: str | None = None
    location: Coordinates
    place_id: str | None = None

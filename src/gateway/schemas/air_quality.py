"""Air quality schemas."""

from pydantic import BaseModel, Field

from gateway.schemas.weather import Coordinates


class Concentration(BaseModel):
    value: float | None = None
    units: str | None = None


class PollutantInfo(BaseModel):
    sources: str | None = None
    effects: str | None = None


class Pollutant(BaseModel):
    """Concentration of one pollutant with optional source/health text."""

    code: str
    display_name: str | None = None
    full_name: str | None = None
    concentration: Concentration = Field(default_factory=Concentration)
    additional_info: PollutantInfo | None = None


class AirQualitySample(BaseModel):
    """Air quality index reading for a location."""

    aqi: int
    aqi_display: str
    status: str
    description: str
    display_name: str = "Universal AQI"
    dominant_pollutant: str | None = None
    category: str
    coordinates: Coordinates
    estimated: bool = False
    pollutants: list[Pollutant] = Field(default_factory=list)
    health_recommendations: dict[str, str] = Field(default_factory=dict)
    color: dict[str, float] | None = None

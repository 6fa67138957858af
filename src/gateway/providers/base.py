"""Provider-neutral records and the upstream provider interface.

A provider turns one vendor's payloads into these records. ``None`` on any
field means the vendor omitted it; normalization in ``gateway.services``
never invents a value for it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date


@dataclass
class AddressComponent:
    """One component of a geocoded address."""

    long_name: str
    short_name: str
    types: list[str] = field(default_factory=list)


@dataclass
class GeocodeResult:
    """First geocoding match for an address or coordinate pair."""

    lat: float
    lng: float
    formatted_address: str | None = None
    place_id: str | None = None
    components: list[AddressComponent] = field(default_factory=list)


@dataclass
class PlaceResult:
    """City suggestion from a place text search."""

    name: str
    lat: float
    lng: float
    formatted_address: str | None = None
    place_id: str | None = None


@dataclass
class CurrentConditions:
    """Current conditions in provider-native units (km/h, km, mb)."""

    temperature: float | None = None
    feels_like: float | None = None
    condition: str | None = None
    humidity: float | None = None
    pressure: float | None = None
    visibility_km: float | None = None
    wind_speed_kmh: float | None = None
    wind_direction_deg: float | None = None
    wind_cardinal: str | None = None
    wind_gust_kmh: float | None = None
    cloud_cover: float | None = None
    precipitation_mm: float | None = None
    precip_probability: float | None = None
    uv_index: float | None = None
    dew_point: float | None = None
    heat_index: float | None = None
    wind_chill: float | None = None
    thunderstorm_probability: float | None = None
    is_daytime: bool | None = None
    current_time: str | None = None
    time_zone: str | None = None


@dataclass
class DailyForecast:
    """One day of the provider's multi-day forecast."""

    display_date: date | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    feels_like_min: float | None = None
    feels_like_max: float | None = None
    condition: str | None = None
    humidity: float | None = None
    pressure: float | None = None
    precip_probability: float | None = None
    precip_amount: float | None = None
    wind_speed_kmh: float | None = None
    wind_cardinal: str | None = None
    wind_gust_kmh: float | None = None
    uv_index: float | None = None
    sunrise: str | None = None
    sunset: str | None = None
    moon_phase: str | None = None


@dataclass
class PollutantReading:
    """Concentration of a single pollutant."""

    code: str
    display_name: str | None = None
    full_name: str | None = None
    value: float | None = None
    units: str | None = None
    sources: str | None = None
    effects: str | None = None


@dataclass
class AirQualityIndex:
    """One air quality index as reported by the provider."""

    aqi: int
    category: str
    code: str | None = None
    display_name: str | None = None
    aqi_display: str | None = None
    dominant_pollutant: str | None = None
    color: dict[str, float] | None = None


@dataclass
class AirQualityReading:
    """Air quality indexes, pollutants and health advice for a location."""

    indexes: list[AirQualityIndex] = field(default_factory=list)
    pollutants: list[PollutantReading] = field(default_factory=list)
    health_recommendations: dict[str, str] = field(default_factory=dict)


class WeatherProvider(ABC):
    """Upstream data source with one call per data kind.

    Implementations raise ``UpstreamUnavailable`` for transport failures,
    timeouts and non-2xx answers.
    """

    name: str = "provider"

    @abstractmethod
    async def geocode(self, address: str) -> GeocodeResult | None:
        """Forward-geocode a free-form address, ``None`` when nothing matches."""

    @abstractmethod
    async def reverse_geocode(self, lat: float, lng: float) -> GeocodeResult | None:
        """Reverse-geocode a coordinate pair, ``None`` when nothing matches."""

    @abstractmethod
    async def search_places(self, query: str) -> list[PlaceResult]:
        """Search for cities matching a partial name."""

    @abstractmethod
    async def current_conditions(self, lat: float, lng: float) -> CurrentConditions:
        """Fetch current conditions for a coordinate pair."""

    @abstractmethod
    async def daily_forecast(self, lat: float, lng: float) -> list[DailyForecast]:
        """Fetch the day-level forecast, first entry being the provider's day 0."""

    @abstractmethod
    async def air_quality(self, lat: float, lng: float) -> AirQualityReading:
        """Fetch current air quality for a coordinate pair."""

    @abstractmethod
    async def probe(self) -> dict[str, str]:
        """Check upstream connectivity; returns a status string per API, never raises."""

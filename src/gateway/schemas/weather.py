"""Weather data schemas."""

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Coordinates(BaseModel):
    """Latitude/longitude pair."""

    lat: float
    lng: float


class WeatherCondition(BaseModel):
    """Condition category, description and icon code."""

    main: str
    description: str
    icon: str


class MainReadings(BaseModel):
    """Temperatures (°C), pressure (hPa) and humidity (%)."""

    temp: float
    feels_like: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    pressure: float | None = None
    humidity: float | None = None
    sea_level: float | None = None
    grnd_level: float | None = None


class Wind(BaseModel):
    """Wind with speeds in m/s and the provider's km/h values alongside."""

    speed: float | None = None
    speed_kmh: float | None = None
    deg: float | None = None
    cardinal: str | None = None
    gust: float | None = None
    gust_kmh: float | None = None


class Clouds(BaseModel):
    all: float | None = None


class Rain(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    one_hour: float = Field(alias="1h")


class SysInfo(BaseModel):
    """Country and sun events as epoch seconds."""

    country: str | None = None
    sunrise: int | None = None
    sunset: int | None = None


class WeatherSnapshot(BaseModel):
    """Current conditions for a place."""

    coord: Coordinates
    weather: list[WeatherCondition]
    main: MainReadings
    visibility: float | None = None
    visibility_km: float | None = None
    wind: Wind = Field(default_factory=Wind)
    clouds: Clouds = Field(default_factory=Clouds)
    rain: Rain | None = None
    dt: int
    sys: SysInfo = Field(default_factory=SysInfo)
    name: str
    uv_index: float | None = None
    precip_probability: float | None = None
    dew_point: float | None = None
    heat_index: float | None = None
    wind_chill: float | None = None
    thunderstorm_probability: float | None = None
    is_daytime: bool | None = None
    moon_phase: str | None = None
    current_time: str | None = None
    time_zone: str | None = None
    today_max_temp: float | None = None
    today_min_temp: float | None = None
    today_feels_like_max: float | None = None
    today_feels_like_min: float | None = None


class ForecastDay(BaseModel):
    """One day of the 5-day window anchored on today."""

    day: str
    day_name: str
    date: str
    full_date: str
    upstream_date: str | None = None
    temp_min: float
    temp_max: float
    humidity: float | None = None
    pressure: float
    weather: WeatherCondition
    current: bool = False
    precip_probability: float | None = None
    precip_amount: float | None = None
    wind_speed: float | None = None
    wind_speed_kmh: float | None = None
    wind_direction: str | None = None
    wind_gust_kmh: float | None = None
    uv_index: float | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def temp_avg(self) -> float:
        """Midpoint of the day's minimum and maximum temperature."""
        return (self.temp_min + self.temp_max) / 2


class ChartData(BaseModel):
    """Forecast window used by the dashboard chart."""

    city: str
    coordinates: Coordinates
    combined: list[ForecastDay] = Field(default_factory=list)

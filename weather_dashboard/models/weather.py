"""Pydantic models for weather data.

Two families live here: the raw OpenWeatherMap payload models, which only
declare the fields the normalizer reads, and the canonical records handed to
callers.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Raw OpenWeatherMap payloads


class WeatherInfo(BaseModel):
    """Weather condition info from OpenWeatherMap."""

    id: int
    main: str
    description: str
    icon: str


class MainInfo(BaseModel):
    """Main weather metrics of a current-conditions snapshot."""

    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: float
    humidity: float


class WindInfo(BaseModel):
    """Wind information from OpenWeatherMap."""

    speed: float
    deg: float
    gust: float | None = None


class CloudsInfo(BaseModel):
    """Cloud coverage information."""

    all: float


class CoordInfo(BaseModel):
    """Coordinate pair as OpenWeatherMap spells it."""

    lat: float
    lon: float


class SysInfo(BaseModel):
    """Country and sun times of a current-conditions snapshot."""

    # Points over open water carry no country
    country: str = ""
    sunrise: int
    sunset: int


class CurrentWeather(BaseModel):
    """Raw OpenWeatherMap /weather response model."""

    coord: CoordInfo
    weather: list[WeatherInfo] = Field(min_length=1)
    main: MainInfo
    visibility: float
    wind: WindInfo
    clouds: CloudsInfo
    dt: int
    sys: SysInfo
    timezone: int
    name: str


class ForecastMainInfo(BaseModel):
    """Main metrics of one forecast sample."""

    temp: float
    temp_min: float
    temp_max: float
    humidity: float


class ForecastWindInfo(BaseModel):
    """Wind of one forecast sample."""

    speed: float
    deg: float | None = None


class ForecastSample(BaseModel):
    """One 3-hour step of the /forecast timeline."""

    dt: int
    main: ForecastMainInfo
    weather: list[WeatherInfo] = Field(min_length=1)
    wind: ForecastWindInfo
    clouds: CloudsInfo
    pop: float = Field(ge=0, le=1)


class ForecastCity(BaseModel):
    """City block of the /forecast response."""

    name: str
    country: str = ""
    coord: CoordInfo | None = None
    timezone: int


class ForecastResponse(BaseModel):
    """Raw OpenWeatherMap /forecast response model."""

    samples: list[ForecastSample] = Field(alias="list")
    city: ForecastCity


class GeocodeResult(BaseModel):
    """One match from the /geo/1.0/direct endpoint."""

    name: str
    country: str
    lat: float
    lon: float


# Canonical records


class UnitSystem(str, Enum):
    """Unit system token sent upstream as the `units` query parameter."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class Coordinates(BaseModel):
    """A validated latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class PlaceRef(BaseModel):
    """Result of resolving a place name to coordinates."""

    model_config = ConfigDict(frozen=True)

    name: str
    country_code: str
    coordinates: Coordinates


class CurrentConditions(BaseModel):
    """Current conditions for one place, derived from a single upstream snapshot."""

    model_config = ConfigDict(frozen=True)

    place: str
    country: str
    coordinates: Coordinates
    temperature: int
    feels_like: int
    temp_min: int
    temp_max: int
    temp_unit: str
    description: str
    condition_icon: str
    condition_code: int
    humidity_pct: int
    pressure_hpa: int
    wind_speed: float
    wind_direction_deg: int
    speed_unit: str
    clouds_pct: int
    visibility_km: float
    sunrise_epoch: int
    sunset_epoch: int
    utc_offset_seconds: int
    observed_at_epoch: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def emoji(self) -> str:
        """Display glyph for the condition icon."""
        from weather_dashboard.services.normalizer import weather_emoji

        return weather_emoji(self.condition_icon)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def wind_direction(self) -> str:
        """8-point compass label for the wind direction."""
        from weather_dashboard.services.normalizer import wind_direction_label

        return wind_direction_label(self.wind_direction_deg)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def sunrise_local(self) -> str:
        """Sunrise as HH:MM in the place's own clock."""
        from weather_dashboard.services.normalizer import format_local_time

        return format_local_time(self.sunrise_epoch, self.utc_offset_seconds)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def sunset_local(self) -> str:
        """Sunset as HH:MM in the place's own clock."""
        from weather_dashboard.services.normalizer import format_local_time

        return format_local_time(self.sunset_epoch, self.utc_offset_seconds)


class ForecastDay(BaseModel):
    """Best single-sample summary of one calendar day."""

    model_config = ConfigDict(frozen=True)

    calendar_date: date
    label: str
    temperature: int
    temp_min: int
    temp_max: int
    temp_unit: str
    description: str
    condition_icon: str
    condition_code: int
    humidity_pct: int
    wind_speed: float
    clouds_pct: int
    precipitation_probability_pct: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def emoji(self) -> str:
        """Display glyph for the condition icon."""
        from weather_dashboard.services.normalizer import weather_emoji

        return weather_emoji(self.condition_icon)


ForecastSeries = list[ForecastDay]

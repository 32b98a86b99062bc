"""Weather Dashboard models"""

from weather_dashboard.models.base_models import HealthResponse
from weather_dashboard.models.dashboard import (
    AddFavoriteRequest,
    DashboardSnapshot,
    FavoriteWeather,
    UnitPreferenceRequest,
)
from weather_dashboard.models.preferences import FavoriteCity, PreferencesStats, StoredPreferences
from weather_dashboard.models.weather import (
    Coordinates,
    CurrentConditions,
    CurrentWeather,
    ForecastDay,
    ForecastResponse,
    ForecastSeries,
    PlaceRef,
    UnitSystem,
)

__all__ = [
    "AddFavoriteRequest",
    "Coordinates",
    "CurrentConditions",
    "CurrentWeather",
    "DashboardSnapshot",
    "FavoriteCity",
    "FavoriteWeather",
    "ForecastDay",
    "ForecastResponse",
    "ForecastSeries",
    "HealthResponse",
    "PlaceRef",
    "PreferencesStats",
    "StoredPreferences",
    "UnitPreferenceRequest",
    "UnitSystem",
]

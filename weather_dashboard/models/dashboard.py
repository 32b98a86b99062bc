"""Pydantic models for dashboard API requests and responses."""

from pydantic import BaseModel, Field, field_validator

from weather_dashboard.models.preferences import FavoriteCity
from weather_dashboard.models.weather import CurrentConditions, ForecastDay, UnitSystem


class DashboardSnapshot(BaseModel):
    """Current conditions and forecast for one place, fetched together."""

    current: CurrentConditions
    forecast: list[ForecastDay]
    is_favorite: bool


class FavoriteWeather(BaseModel):
    """Current conditions of one favorite, or why they could not be fetched."""

    favorite: FavoriteCity
    current: CurrentConditions | None = None
    error: str | None = None


class AddFavoriteRequest(BaseModel):
    """Body of POST /api/favorites."""

    city: str = Field(min_length=1, description="City name to resolve and save")

    @field_validator("city", mode="after")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Strip surrounding whitespace and reject a blank name."""
        v = v.strip()
        if not v:
            raise ValueError("city must not be blank")
        return v


class UnitPreferenceRequest(BaseModel):
    """Body of PUT /api/preferences/units."""

    units: UnitSystem

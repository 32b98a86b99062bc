"""Pydantic models for stored user preferences."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from weather_dashboard.models.weather import UnitSystem


class FavoriteCity(BaseModel):
    """A saved city, identified by case-insensitive name plus country code."""

    name: str = Field(min_length=1)
    country: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    added_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def matches(self, name: str, country: str | None = None) -> bool:
        """Whether this favorite is the city ``name`` (optionally in ``country``), ignoring case."""
        if self.name.casefold() != name.casefold():
            return False
        return country is None or self.country.casefold() == country.casefold()


class StoredPreferences(BaseModel):
    """On-disk layout of the preferences file."""

    favorites: list[FavoriteCity] = Field(default_factory=list)
    last_search: str | None = None
    unit_preference: UnitSystem = UnitSystem.METRIC


class PreferencesStats(BaseModel):
    """Summary of what is stored."""

    favorites: int
    last_search: str | None
    unit_preference: UnitSystem

"""Weather API routes."""

from typing import NamedTuple

from fastapi import APIRouter, Depends, HTTPException, Query

from weather_dashboard.dependencies import get_preferences_manager, get_units, get_weather_client
from weather_dashboard.models import (
    Coordinates,
    CurrentConditions,
    DashboardSnapshot,
    ForecastDay,
    PlaceRef,
    UnitSystem,
)
from weather_dashboard.services import dashboard_service
from weather_dashboard.services.weather_client import WeatherClient
from weather_dashboard.state_managers import PreferencesManager

router = APIRouter()


class Location(NamedTuple):
    """Exactly one of name or coords is set."""

    name: str | None
    coords: Coordinates | None


async def get_location(
    city: str | None = Query(default=None, min_length=1, description="City name, e.g. 'London' or 'London,GB'"),
    lat: float | None = Query(default=None, ge=-90, le=90, description="Latitude"),
    lon: float | None = Query(default=None, ge=-180, le=180, description="Longitude"),
) -> Location:
    """Validate the place selector: either ``city`` or both ``lat`` and ``lon``."""
    has_coords = lat is not None or lon is not None
    if city is not None and has_coords:
        raise HTTPException(status_code=422, detail="Provide either city or lat/lon, not both")
    if city is not None:
        name = city.strip()
        if not name:
            raise HTTPException(status_code=422, detail="city must not be blank")
        return Location(name=name, coords=None)
    if lat is None or lon is None:
        raise HTTPException(status_code=422, detail="Provide either city or both lat and lon")
    return Location(name=None, coords=Coordinates(latitude=lat, longitude=lon))


@router.get("/current", response_model=CurrentConditions, summary="Get current weather")
async def get_current_weather(
    location: Location = Depends(get_location),
    units: UnitSystem = Depends(get_units),
    weather_client: WeatherClient = Depends(get_weather_client),
):
    """Current conditions for a city or coordinate pair."""
    if location.name is not None:
        return await weather_client.fetch_current_by_name(location.name, units)
    return await weather_client.fetch_current_by_coordinates(location.coords, units)


@router.get("/forecast", response_model=list[ForecastDay], summary="Get 5-day forecast")
async def get_forecast(
    location: Location = Depends(get_location),
    units: UnitSystem = Depends(get_units),
    weather_client: WeatherClient = Depends(get_weather_client),
):
    """One representative forecast entry per day, at most five days."""
    if location.name is not None:
        return await weather_client.fetch_forecast_by_name(location.name, units)
    return await weather_client.fetch_forecast_by_coordinates(location.coords, units)


@router.get("/dashboard", response_model=DashboardSnapshot, summary="Get current weather and forecast")
async def get_dashboard(
    location: Location = Depends(get_location),
    units: UnitSystem = Depends(get_units),
    weather_client: WeatherClient = Depends(get_weather_client),
    preferences: PreferencesManager = Depends(get_preferences_manager),
):
    """Current conditions and forecast fetched concurrently.

    The place is saved as the last search.
    """
    return await dashboard_service.get_dashboard(
        weather_client,
        preferences,
        units,
        name=location.name,
        coords=location.coords,
    )


@router.get("/geocode", response_model=PlaceRef, summary="Resolve a city name")
async def geocode(
    city: str = Query(min_length=1, description="City name"),
    weather_client: WeatherClient = Depends(get_weather_client),
):
    """Best geocoding match for a city name."""
    return await weather_client.resolve_place(city.strip())

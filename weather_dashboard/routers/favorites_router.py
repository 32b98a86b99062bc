"""Favorite cities routes."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from weather_dashboard.config import Settings, get_settings
from weather_dashboard.dependencies import get_preferences_manager, get_units, get_weather_client
from weather_dashboard.models import AddFavoriteRequest, FavoriteCity, FavoriteWeather, PlaceRef, UnitSystem
from weather_dashboard.services import dashboard_service
from weather_dashboard.services.weather_client import WeatherClient
from weather_dashboard.state_managers import PreferencesManager

router = APIRouter()


@router.get("", response_model=list[FavoriteCity])
async def list_favorites(preferences: PreferencesManager = Depends(get_preferences_manager)):
    """All favorite cities in the order they were added."""
    return await preferences.get_favorites()


@router.post("", response_model=PlaceRef, status_code=status.HTTP_201_CREATED)
async def add_favorite(
    body: AddFavoriteRequest,
    weather_client: WeatherClient = Depends(get_weather_client),
    preferences: PreferencesManager = Depends(get_preferences_manager),
):
    """Resolve a city name and save it as a favorite.

    Returns 409 when the city is already a favorite.
    """
    place, added = await dashboard_service.add_favorite(weather_client, preferences, body.city)
    if not added:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"{place.name} is already a favorite")
    return place


@router.get("/weather", response_model=list[FavoriteWeather])
async def favorites_weather(
    units: UnitSystem = Depends(get_units),
    weather_client: WeatherClient = Depends(get_weather_client),
    preferences: PreferencesManager = Depends(get_preferences_manager),
    settings: Settings = Depends(get_settings),
):
    """Current conditions for every favorite; failures are reported per city."""
    return await dashboard_service.refresh_favorites(
        weather_client,
        preferences,
        units,
        concurrency=settings.favorites_refresh_concurrency,
    )


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    name: str,
    country: str | None = Query(default=None, description="Only remove the city in this country"),
    preferences: PreferencesManager = Depends(get_preferences_manager),
):
    """Remove a favorite by case-insensitive name."""
    if not await preferences.remove_favorite(name, country):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{name} is not a favorite")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

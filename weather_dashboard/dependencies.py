"""FastAPI dependencies for dependency injection."""

import httpx
from fastapi import Depends, Query, Request

from weather_dashboard.config import Settings, get_settings
from weather_dashboard.models.weather import UnitSystem
from weather_dashboard.services.weather_client import WeatherClient
from weather_dashboard.state_managers import PreferencesManager


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared AsyncClient instance.

    Raises:
        RuntimeError: If HTTP client is not initialized.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    if client is None:
        raise RuntimeError("HTTP client not initialized. This should never happen.")

    return client


async def get_preferences_manager(request: Request) -> PreferencesManager:
    """
    Get the preferences manager from app state.

    Raises:
        RuntimeError: If the preferences manager is not initialized.
    """
    manager: PreferencesManager | None = getattr(request.app.state, "preferences_manager", None)

    if manager is None:
        raise RuntimeError("Preferences manager not initialized.")

    return manager


async def get_weather_client(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> WeatherClient:
    """Build a WeatherClient over the shared HTTP client."""
    return WeatherClient(client, settings)


async def get_units(
    units: UnitSystem | None = Query(default=None, description="metric or imperial; defaults to the saved preference"),
    preferences: PreferencesManager = Depends(get_preferences_manager),
) -> UnitSystem:
    """Resolve the unit system for a request, falling back to the stored preference."""
    if units is not None:
        return units
    return await preferences.get_unit_preference()

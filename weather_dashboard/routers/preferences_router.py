"""Preference routes: unit system, last search and reset."""

from fastapi import APIRouter, Depends, Response, status

from weather_dashboard.dependencies import get_preferences_manager
from weather_dashboard.models import PreferencesStats, UnitPreferenceRequest
from weather_dashboard.state_managers import PreferencesManager

router = APIRouter()


@router.get("", response_model=PreferencesStats)
async def get_preferences(preferences: PreferencesManager = Depends(get_preferences_manager)):
    """Favorites count, last search and unit preference."""
    return await preferences.get_stats()


@router.put("/units", response_model=PreferencesStats)
async def set_unit_preference(
    body: UnitPreferenceRequest,
    preferences: PreferencesManager = Depends(get_preferences_manager),
):
    """Save the preferred unit system."""
    await preferences.save_unit_preference(body.units)
    return await preferences.get_stats()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_preferences(preferences: PreferencesManager = Depends(get_preferences_manager)):
    """Clear favorites, last search and unit preference."""
    await preferences.clear_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

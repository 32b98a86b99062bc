"""Dashboard orchestration: searches, favorites refresh and preference bookkeeping."""

import asyncio

from weather_dashboard.exceptions import UpstreamException
from weather_dashboard.logging_config import get_logger, log_with_context
from weather_dashboard.models.dashboard import DashboardSnapshot, FavoriteWeather
from weather_dashboard.models.preferences import FavoriteCity
from weather_dashboard.models.weather import Coordinates, PlaceRef, UnitSystem
from weather_dashboard.services.weather_client import WeatherClient
from weather_dashboard.state_managers import PreferencesManager

logger = get_logger(__name__)


async def get_dashboard(
    weather_client: WeatherClient,
    preferences: PreferencesManager,
    units: UnitSystem,
    name: str | None = None,
    coords: Coordinates | None = None,
) -> DashboardSnapshot:
    """Fetch current conditions and forecast for one place concurrently.

    Exactly one of ``name`` or ``coords`` must be given. On success the place
    is remembered as the last search.

    Raises:
        ValueError: If neither or both selectors are given
        UpstreamException: If either upstream call fails
    """
    if (name is None) == (coords is None):
        raise ValueError("Provide exactly one of name or coords")

    if name is not None:
        current, forecast = await asyncio.gather(
            weather_client.fetch_current_by_name(name, units),
            weather_client.fetch_forecast_by_name(name, units),
        )
        last_search = name
    else:
        current, forecast = await asyncio.gather(
            weather_client.fetch_current_by_coordinates(coords, units),
            weather_client.fetch_forecast_by_coordinates(coords, units),
        )
        last_search = current.place

    if last_search:
        await preferences.save_last_search(last_search)

    is_favorite = await preferences.is_favorite(current.place, current.country)
    log_with_context(
        logger,
        "info",
        "Dashboard fetched",
        place=current.place,
        country=current.country,
        units=units.value,
        forecast_days=len(forecast),
        event_type="dashboard_fetched",
    )
    return DashboardSnapshot(current=current, forecast=forecast, is_favorite=is_favorite)


async def add_favorite(
    weather_client: WeatherClient,
    preferences: PreferencesManager,
    city: str,
) -> tuple[PlaceRef, bool]:
    """Resolve ``city`` and save it as a favorite.

    Returns:
        The resolved place and whether it was newly added
    """
    place = await weather_client.resolve_place(city)
    added = await preferences.add_favorite(place)
    return place, added


async def refresh_favorites(
    weather_client: WeatherClient,
    preferences: PreferencesManager,
    units: UnitSystem,
    concurrency: int,
) -> list[FavoriteWeather]:
    """Fetch current conditions for every favorite.

    At most ``concurrency`` upstream calls are in flight at once. A failing
    favorite is reported with its error instead of failing the whole refresh.
    """
    favorites = await preferences.get_favorites()
    semaphore = asyncio.Semaphore(concurrency)

    async def refresh(favorite: FavoriteCity) -> FavoriteWeather:
        coords = Coordinates(latitude=favorite.latitude, longitude=favorite.longitude)
        async with semaphore:
            try:
                current = await weather_client.fetch_current_by_coordinates(coords, units)
            except UpstreamException as e:
                log_with_context(
                    logger,
                    "warning",
                    "Failed to load weather for favorite",
                    place=favorite.name,
                    error_code=e.code.value,
                    error=e.message,
                    event_type="favorite_refresh_failed",
                )
                return FavoriteWeather(favorite=favorite, error=e.message)
        return FavoriteWeather(favorite=favorite, current=current)

    return list(await asyncio.gather(*(refresh(favorite) for favorite in favorites)))

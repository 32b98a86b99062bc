"""State managers for handling application-wide mutable state.

Access is serialized with asyncio.Lock. All state managers inherit from the
StateManager ABC so the lifespan can initialize and clean them up uniformly.
"""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from weather_dashboard.exceptions import StorageException
from weather_dashboard.logging_config import get_logger, log_with_context
from weather_dashboard.models.preferences import FavoriteCity, PreferencesStats, StoredPreferences
from weather_dashboard.models.weather import PlaceRef, UnitSystem

logger = get_logger(__name__)


class StateManager(ABC):
    """Base class for all state managers.

    State managers provide serialized access to mutable application state.
    All subclasses must implement lifecycle methods.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the state manager (called during app startup)."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup resources (called during app shutdown)."""
        pass


class PreferencesManager(StateManager):
    """Favorites, last search and unit preference persisted to a JSON file.

    Reads are tolerant: a missing, unreadable or corrupt file behaves like an
    empty store. Every mutation is written through before it becomes visible,
    so a failed write leaves the in-memory state untouched.
    """

    def __init__(self, path: Path):
        """Initialize the preferences manager.

        Args:
            path: Location of the preferences JSON file
        """
        self._path = path
        self._prefs = StoredPreferences()
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Load preferences from disk."""
        async with self._lock:
            self._prefs = self._load()
            log_with_context(
                logger,
                "info",
                "Preferences loaded",
                path=str(self._path),
                favorites=len(self._prefs.favorites),
                event_type="preferences_loaded",
            )

    async def cleanup(self) -> None:
        """Drop in-memory state; everything is already on disk."""
        async with self._lock:
            self._prefs = StoredPreferences()

    async def get_favorites(self) -> list[FavoriteCity]:
        """Get all favorite cities in the order they were added."""
        async with self._lock:
            return list(self._prefs.favorites)

    async def add_favorite(self, place: PlaceRef) -> bool:
        """Add a city to favorites.

        Args:
            place: Resolved place to save

        Returns:
            False if the same name (case-insensitive) and country is already saved
        """
        async with self._lock:
            if any(fav.matches(place.name, place.country_code) for fav in self._prefs.favorites):
                log_with_context(
                    logger,
                    "info",
                    "City already in favorites",
                    place=place.name,
                    country=place.country_code,
                    event_type="favorite_exists",
                )
                return False

            favorite = FavoriteCity(
                name=place.name,
                country=place.country_code,
                latitude=place.coordinates.latitude,
                longitude=place.coordinates.longitude,
            )
            self._commit(self._prefs.model_copy(update={"favorites": [*self._prefs.favorites, favorite]}))
            return True

    async def remove_favorite(self, name: str, country: str | None = None) -> bool:
        """Remove every favorite matching ``name`` (and ``country`` when given).

        Returns:
            Whether anything was removed
        """
        async with self._lock:
            remaining = [fav for fav in self._prefs.favorites if not fav.matches(name, country)]
            if len(remaining) == len(self._prefs.favorites):
                return False
            self._commit(self._prefs.model_copy(update={"favorites": remaining}))
            return True

    async def is_favorite(self, name: str, country: str | None = None) -> bool:
        """Check whether a city is among the favorites."""
        async with self._lock:
            return any(fav.matches(name, country) for fav in self._prefs.favorites)

    async def get_last_search(self) -> str | None:
        """Get the last searched place name, if any."""
        async with self._lock:
            return self._prefs.last_search

    async def save_last_search(self, name: str) -> None:
        """Remember the last searched place name."""
        async with self._lock:
            self._commit(self._prefs.model_copy(update={"last_search": name.strip() or None}))

    async def get_unit_preference(self) -> UnitSystem:
        """Get the preferred unit system (metric when never set)."""
        async with self._lock:
            return self._prefs.unit_preference

    async def save_unit_preference(self, units: UnitSystem) -> None:
        """Persist the preferred unit system."""
        async with self._lock:
            self._commit(self._prefs.model_copy(update={"unit_preference": UnitSystem(units)}))

    async def clear_all(self) -> None:
        """Reset every preference slot."""
        async with self._lock:
            self._commit(StoredPreferences())
            log_with_context(logger, "info", "All preferences cleared", event_type="preferences_cleared")

    async def get_stats(self) -> PreferencesStats:
        """Summarize what is stored."""
        async with self._lock:
            return PreferencesStats(
                favorites=len(self._prefs.favorites),
                last_search=self._prefs.last_search,
                unit_preference=self._prefs.unit_preference,
            )

    def _load(self) -> StoredPreferences:
        if not self._path.exists():
            return StoredPreferences()

        try:
            return StoredPreferences.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            log_with_context(
                logger,
                "warning",
                "Preferences file unreadable, starting empty",
                path=str(self._path),
                error=str(e),
                error_type=type(e).__name__,
                event_type="preferences_corrupt",
            )
            return StoredPreferences()

    def _commit(self, prefs: StoredPreferences) -> None:
        """Write ``prefs`` to disk, then make them current."""
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(prefs.model_dump_json(indent=2), encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as e:
            log_with_context(
                logger,
                "error",
                "Failed to write preferences",
                path=str(self._path),
                error=str(e),
                event_type="preferences_write_failed",
            )
            raise StorageException(
                f"Failed to save preferences: {str(e)}",
                details={"path": str(self._path)},
            ) from e
        self._prefs = prefs

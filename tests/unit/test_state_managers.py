"""Unit tests for state managers."""

import asyncio
import json

import pytest

from weather_dashboard.core.app_factory import create_app
from weather_dashboard.exceptions import StorageException
from weather_dashboard.models.preferences import PreferencesStats
from weather_dashboard.models.weather import Coordinates, PlaceRef, UnitSystem
from weather_dashboard.state_managers import PreferencesManager

LONDON = PlaceRef(name="London", country_code="GB", coordinates=Coordinates(latitude=51.5073, longitude=-0.1276))
LONDON_CA = PlaceRef(name="London", country_code="CA", coordinates=Coordinates(latitude=42.9834, longitude=-81.233))
PARIS = PlaceRef(name="Paris", country_code="FR", coordinates=Coordinates(latitude=48.8589, longitude=2.32))


@pytest.mark.asyncio
async def test_empty_store_defaults(preferences_manager):
    """Test an uninitialized store reads as empty."""
    assert await preferences_manager.get_favorites() == []
    assert await preferences_manager.get_last_search() is None
    assert await preferences_manager.get_unit_preference() == UnitSystem.METRIC


@pytest.mark.asyncio
async def test_add_favorite(preferences_manager):
    """Test adding a favorite stores name, country and coordinates."""
    assert await preferences_manager.add_favorite(LONDON) is True

    [favorite] = await preferences_manager.get_favorites()
    assert favorite.name == "London"
    assert favorite.country == "GB"
    assert favorite.latitude == 51.5073
    assert favorite.longitude == -0.1276
    assert favorite.added_at.tzinfo is not None


@pytest.mark.asyncio
async def test_add_duplicate_favorite_case_insensitive(preferences_manager):
    """Test the same city in different casing is not added twice."""
    await preferences_manager.add_favorite(LONDON)

    shouting = LONDON.model_copy(update={"name": "LONDON"})
    assert await preferences_manager.add_favorite(shouting) is False
    assert len(await preferences_manager.get_favorites()) == 1


@pytest.mark.asyncio
async def test_same_name_different_country(preferences_manager):
    """Test favorites are keyed by name plus country."""
    assert await preferences_manager.add_favorite(LONDON) is True
    assert await preferences_manager.add_favorite(LONDON_CA) is True
    assert len(await preferences_manager.get_favorites()) == 2


@pytest.mark.asyncio
async def test_is_favorite(preferences_manager):
    """Test favorite lookup by name, optionally narrowed by country."""
    await preferences_manager.add_favorite(LONDON)

    assert await preferences_manager.is_favorite("london") is True
    assert await preferences_manager.is_favorite("London", "GB") is True
    assert await preferences_manager.is_favorite("LONDON", "gb") is True
    assert await preferences_manager.is_favorite("London", "CA") is False
    assert await preferences_manager.is_favorite("Paris") is False


@pytest.mark.asyncio
async def test_remove_favorite(preferences_manager):
    """Test removal by case-insensitive name."""
    await preferences_manager.add_favorite(LONDON)
    await preferences_manager.add_favorite(PARIS)

    assert await preferences_manager.remove_favorite("PARIS") is True
    assert [fav.name for fav in await preferences_manager.get_favorites()] == ["London"]
    assert await preferences_manager.remove_favorite("Paris") is False


@pytest.mark.asyncio
async def test_remove_favorite_by_country(preferences_manager):
    """Test a country narrows which same-named favorite is removed."""
    await preferences_manager.add_favorite(LONDON)
    await preferences_manager.add_favorite(LONDON_CA)

    assert await preferences_manager.remove_favorite("London", "ca") is True
    [remaining] = await preferences_manager.get_favorites()
    assert remaining.country == "GB"


@pytest.mark.asyncio
async def test_last_search(preferences_manager):
    """Test saving and reading the last search."""
    await preferences_manager.save_last_search("  Tokyo ")

    assert await preferences_manager.get_last_search() == "Tokyo"


@pytest.mark.asyncio
async def test_unit_preference(preferences_manager):
    """Test saving and reading the unit preference."""
    await preferences_manager.save_unit_preference(UnitSystem.IMPERIAL)

    assert await preferences_manager.get_unit_preference() == UnitSystem.IMPERIAL


@pytest.mark.asyncio
async def test_persisted_across_instances(tmp_path):
    """Test preferences survive a restart."""
    path = tmp_path / "prefs" / "preferences.json"
    first = PreferencesManager(path)
    await first.initialize()
    await first.add_favorite(PARIS)
    await first.save_last_search("Paris")
    await first.save_unit_preference(UnitSystem.IMPERIAL)
    await first.cleanup()

    second = PreferencesManager(path)
    await second.initialize()

    assert [fav.name for fav in await second.get_favorites()] == ["Paris"]
    assert await second.get_last_search() == "Paris"
    assert await second.get_unit_preference() == UnitSystem.IMPERIAL

    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored["unit_preference"] == "imperial"


@pytest.mark.asyncio
async def test_corrupt_file_starts_empty(tmp_path):
    """Test an unreadable preferences file is treated as empty."""
    path = tmp_path / "preferences.json"
    path.write_text("{not json", encoding="utf-8")

    manager = PreferencesManager(path)
    await manager.initialize()

    assert await manager.get_favorites() == []
    assert await manager.get_unit_preference() == UnitSystem.METRIC


@pytest.mark.asyncio
async def test_undecodable_file_starts_empty(tmp_path):
    """Test a preferences file that is not valid UTF-8 is treated as empty."""
    path = tmp_path / "preferences.json"
    path.write_bytes(b'{"last_search": "\xff\xfe"}')

    manager = PreferencesManager(path)
    await manager.initialize()

    assert await manager.get_last_search() is None
    assert await manager.get_favorites() == []


@pytest.mark.asyncio
async def test_undecodable_file_does_not_block_startup(mock_settings):
    """Test the app still starts when the preferences file is garbled."""
    mock_settings.preferences_path.write_bytes(b"\x80\x81\x82")
    app = create_app(mock_settings)

    async with app.router.lifespan_context(app):
        assert await app.state.preferences_manager.get_stats() == PreferencesStats(
            favorites=0, last_search=None, unit_preference=UnitSystem.METRIC
        )


@pytest.mark.asyncio
async def test_invalid_unit_in_file_starts_empty(tmp_path):
    """Test a schema mismatch in the file is treated as empty."""
    path = tmp_path / "preferences.json"
    path.write_text(json.dumps({"unit_preference": "kelvin"}), encoding="utf-8")

    manager = PreferencesManager(path)
    await manager.initialize()

    assert await manager.get_unit_preference() == UnitSystem.METRIC


@pytest.mark.asyncio
async def test_clear_all(preferences_manager):
    """Test clearing resets every slot."""
    await preferences_manager.add_favorite(LONDON)
    await preferences_manager.save_last_search("London")
    await preferences_manager.save_unit_preference(UnitSystem.IMPERIAL)

    await preferences_manager.clear_all()

    stats = await preferences_manager.get_stats()
    assert stats.favorites == 0
    assert stats.last_search is None
    assert stats.unit_preference == UnitSystem.METRIC


@pytest.mark.asyncio
async def test_get_stats(preferences_manager):
    """Test the stats summary."""
    await preferences_manager.add_favorite(LONDON)
    await preferences_manager.add_favorite(PARIS)
    await preferences_manager.save_last_search("Paris")

    stats = await preferences_manager.get_stats()

    assert stats.favorites == 2
    assert stats.last_search == "Paris"
    assert stats.unit_preference == UnitSystem.METRIC


@pytest.mark.asyncio
async def test_failed_write_keeps_state(tmp_path):
    """Test a write failure raises and leaves memory unchanged."""
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    manager = PreferencesManager(blocker / "preferences.json")
    await manager.initialize()

    with pytest.raises(StorageException):
        await manager.add_favorite(LONDON)

    assert await manager.get_favorites() == []


@pytest.mark.asyncio
async def test_concurrent_adds(preferences_manager):
    """Test concurrent adds of the same city store it once."""
    results = await asyncio.gather(*(preferences_manager.add_favorite(LONDON) for _ in range(10)))

    assert results.count(True) == 1
    assert len(await preferences_manager.get_favorites()) == 1

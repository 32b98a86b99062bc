"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from weather_dashboard.config import Settings
from weather_dashboard.state_managers import PreferencesManager

# 2024-01-05 00:00 UTC, a Friday
FORECAST_START = datetime(2024, 1, 5, tzinfo=UTC)


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for external API calls."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def mock_settings(tmp_path):
    """Settings instance with test values."""
    return Settings(
        openweather_api_key="test-weather-key",
        openweather_base_url="https://weather.test/data/2.5/",
        openweather_geo_url="https://weather.test/geo/1.0",
        preferences_path=tmp_path / "preferences.json",
        favorites_refresh_concurrency=2,
    )


@pytest.fixture
def make_response() -> Callable[..., httpx.Response]:
    """Build a real httpx.Response bound to a request, as the client would return it."""

    def _make(status_code: int = 200, json: Any = None, text: str | None = None) -> httpx.Response:
        request = httpx.Request("GET", "https://weather.test/data/2.5/weather")
        if text is not None:
            return httpx.Response(status_code, text=text, request=request)
        return httpx.Response(status_code, json=json, request=request)

    return _make


@pytest.fixture
def mock_weather_response():
    """OpenWeatherMap /weather response for London."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "base": "stations",
        "main": {
            "temp": 12.5,
            "feels_like": 11.46,
            "temp_min": 10.2,
            "temp_max": 13.8,
            "pressure": 1012,
            "humidity": 81,
        },
        "visibility": 10000,
        "wind": {"speed": 4.63, "deg": 230},
        "clouds": {"all": 75},
        "dt": 1704459600,
        "sys": {"type": 2, "id": 2075535, "country": "GB", "sunrise": 1704441865, "sunset": 1704470640},
        "timezone": 0,
        "id": 2643743,
        "name": "London",
        "cod": 200,
    }


def forecast_sample(when: datetime, temp: float = 10.0, icon: str = "04d", pop: float = 0.2) -> dict[str, Any]:
    """One raw 3-hour forecast sample at ``when``."""
    return {
        "dt": int(when.timestamp()),
        "main": {
            "temp": temp,
            "feels_like": temp - 1,
            "temp_min": temp - 1.4,
            "temp_max": temp + 1.6,
            "humidity": 70,
        },
        "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": icon}],
        "clouds": {"all": 60},
        "wind": {"speed": 3.26, "deg": 200},
        "pop": pop,
        "dt_txt": when.strftime("%Y-%m-%d %H:%M:%S"),
    }


@pytest.fixture
def make_timeline() -> Callable[..., list[dict[str, Any]]]:
    """Build a 3-hour-step timeline starting at ``start``.

    Each sample's temperature is its UTC hour, which makes the selected
    sample easy to identify in assertions.
    """

    def _make(start: datetime = FORECAST_START, steps: int = 40, skip: Callable[[datetime], bool] | None = None):
        timeline = []
        for i in range(steps):
            when = start + timedelta(hours=3 * i)
            if skip is not None and skip(when):
                continue
            timeline.append(forecast_sample(when, temp=float(when.hour)))
        return timeline

    return _make


@pytest.fixture
def make_sample() -> Callable[..., dict[str, Any]]:
    """Build a single raw forecast sample."""
    return forecast_sample


@pytest.fixture
def mock_forecast_response(make_timeline):
    """OpenWeatherMap /forecast response for London with 40 samples."""
    return {
        "cod": "200",
        "message": 0,
        "cnt": 40,
        "list": make_timeline(),
        "city": {
            "id": 2643743,
            "name": "London",
            "coord": {"lat": 51.5085, "lon": -0.1257},
            "country": "GB",
            "timezone": 0,
            "sunrise": 1704441865,
            "sunset": 1704470640,
        },
    }


@pytest.fixture
def mock_geocode_response():
    """OpenWeatherMap /geo/1.0/direct response."""
    return [
        {
            "name": "London",
            "local_names": {"en": "London"},
            "lat": 51.5073219,
            "lon": -0.1276474,
            "country": "GB",
            "state": "England",
        }
    ]


@pytest_asyncio.fixture
async def preferences_manager(tmp_path):
    """Initialized PreferencesManager backed by a temporary file."""
    manager = PreferencesManager(tmp_path / "preferences.json")
    await manager.initialize()
    yield manager
    await manager.cleanup()

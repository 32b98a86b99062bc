"""Weather client for the OpenWeatherMap API."""

from typing import Any

import httpx

from weather_dashboard.config import Settings
from weather_dashboard.exceptions import (
    MalformedResponseException,
    PlaceNotFoundException,
    UpstreamAPIException,
    UpstreamAuthException,
    UpstreamException,
    UpstreamTransportException,
)
from weather_dashboard.logging_config import get_logger, log_with_context
from weather_dashboard.models.weather import (
    Coordinates,
    CurrentConditions,
    ForecastSeries,
    PlaceRef,
    UnitSystem,
)
from weather_dashboard.services import normalizer

logger = get_logger(__name__)


class WeatherClient:
    """Async client for OpenWeatherMap current conditions, forecast and geocoding.

    Every call is a single attempt: failures are classified into typed
    exceptions and raised immediately, with no retry and no caching. Timeouts
    come from the injected ``httpx.AsyncClient``.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        """Initialize the weather client.

        Args:
            client: Shared HTTP client for making requests
            settings: Settings carrying the API key and base URLs
        """
        self._client = client
        self._api_key = settings.openweather_api_key
        self._weather_url = f"{settings.openweather_base_url}/weather"
        self._forecast_url = f"{settings.openweather_base_url}/forecast"
        self._geocode_url = f"{settings.openweather_geo_url}/direct"

    async def fetch_current_by_name(self, name: str, units: UnitSystem = UnitSystem.METRIC) -> CurrentConditions:
        """Get current conditions for a place name.

        Raises:
            PlaceNotFoundException: If no place matches ``name``
            UpstreamAuthException: If the API key is rejected
            UpstreamAPIException: For any other non-success status
            UpstreamTransportException: On network failure
            MalformedResponseException: If the payload cannot be normalized
        """
        data = await self._get_json(self._weather_url, {"q": name, "units": units.value}, place_lookup=True)
        return normalizer.normalize_current(data, units)

    async def fetch_current_by_coordinates(
        self, coords: Coordinates, units: UnitSystem = UnitSystem.METRIC
    ) -> CurrentConditions:
        """Get current conditions for a coordinate pair.

        Coordinates are always valid upstream, so an upstream 404 surfaces
        as UpstreamAPIException rather than PlaceNotFoundException.
        """
        data = await self._get_json(self._weather_url, {**_coordinate_params(coords), "units": units.value})
        return normalizer.normalize_current(data, units)

    async def fetch_forecast_by_name(self, name: str, units: UnitSystem = UnitSystem.METRIC) -> ForecastSeries:
        """Get the 5-day forecast for a place name, one entry per day."""
        data = await self._get_json(self._forecast_url, {"q": name, "units": units.value}, place_lookup=True)
        return normalizer.normalize_forecast(data, units)

    async def fetch_forecast_by_coordinates(
        self, coords: Coordinates, units: UnitSystem = UnitSystem.METRIC
    ) -> ForecastSeries:
        """Get the 5-day forecast for a coordinate pair, one entry per day."""
        data = await self._get_json(self._forecast_url, {**_coordinate_params(coords), "units": units.value})
        return normalizer.normalize_forecast(data, units)

    async def resolve_place(self, name: str) -> PlaceRef:
        """Resolve a place name to its best geocoding match.

        Raises:
            PlaceNotFoundException: If the geocoder returns no match
        """
        data = await self._get_json(self._geocode_url, {"q": name, "limit": "1"}, place_lookup=True)
        if not isinstance(data, list):
            raise MalformedResponseException(
                "Weather service returned an unexpected geocoding payload",
                details={"payload": "geocoding", "error_type": "not_a_list"},
            )
        if not data:
            log_with_context(logger, "info", "Place not found by geocoder", place=name, event_type="geocode_empty")
            raise PlaceNotFoundException(f"City not found: {name}", details={"query": name})
        return normalizer.normalize_place(data[0])

    async def _get_json(self, url: str, params: dict[str, str], place_lookup: bool = False) -> Any:
        """Issue one GET and return the decoded JSON body.

        Args:
            url: Endpoint URL
            params: Query parameters (the API key is added here)
            place_lookup: Whether an upstream 404 means "no such place"
        """
        try:
            response = await self._client.get(url, params={**params, "appid": self._api_key})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error = _classify_status(e.response, place_lookup)
            log_with_context(
                logger,
                "warning",
                "Weather API returned an error status",
                endpoint=url,
                upstream_status=e.response.status_code,
                error_code=error.code.value,
                event_type="upstream_error",
            )
            raise error from e
        except httpx.HTTPError as e:
            log_with_context(
                logger,
                "warning",
                "Weather API unreachable",
                endpoint=url,
                error=str(e),
                error_type=type(e).__name__,
                event_type="upstream_unreachable",
            )
            raise UpstreamTransportException(
                f"Failed to fetch weather data: {str(e)}",
                details={"error_type": "network_error"},
            ) from e

        try:
            return response.json()
        except ValueError as e:
            log_with_context(
                logger,
                "warning",
                "Weather API returned invalid JSON",
                endpoint=url,
                event_type="upstream_malformed",
            )
            raise MalformedResponseException(
                "Weather service returned a body that is not valid JSON",
                details={"error_type": "parsing_error"},
            ) from e


def _coordinate_params(coords: Coordinates) -> dict[str, str]:
    return {"lat": str(coords.latitude), "lon": str(coords.longitude)}


def _classify_status(response: httpx.Response, place_lookup: bool) -> UpstreamException:
    status = response.status_code
    details = {"api_response": response.text}
    if status == 401:
        return UpstreamAuthException(details=details)
    if status == 404 and place_lookup:
        return PlaceNotFoundException(upstream_status=status, details=details)
    return UpstreamAPIException(
        f"Weather API request failed (HTTP {status})",
        upstream_status=status,
        details=details,
    )

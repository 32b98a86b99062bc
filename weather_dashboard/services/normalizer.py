"""Normalization of OpenWeatherMap payloads into canonical weather records.

Everything in this module is a pure function: no I/O, no shared state, safe to
call from any number of in-flight requests.
"""

import math
from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime, timedelta
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from weather_dashboard.exceptions import MalformedResponseException
from weather_dashboard.models.weather import (
    Coordinates,
    CurrentConditions,
    CurrentWeather,
    ForecastDay,
    ForecastResponse,
    ForecastSample,
    ForecastSeries,
    GeocodeResult,
    PlaceRef,
    UnitSystem,
)

FORECAST_DAYS = 5
MIDDAY_HOURS = range(11, 14)  # 11:00 through 13:00 inclusive

FALLBACK_EMOJI = "🌡️"

WEATHER_EMOJI = MappingProxyType(
    {
        "01d": "☀️",
        "01n": "🌙",
        "02d": "⛅",
        "02n": "☁️",
        "03d": "☁️",
        "03n": "☁️",
        "04d": "☁️",
        "04n": "☁️",
        "09d": "🌧️",
        "09n": "🌧️",
        "10d": "🌦️",
        "10n": "🌧️",
        "11d": "⛈️",
        "11n": "⛈️",
        "13d": "❄️",
        "13n": "❄️",
        "50d": "🌫️",
        "50n": "🌫️",
    }
)

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")

TEMPERATURE_UNITS = MappingProxyType({UnitSystem.METRIC: "°C", UnitSystem.IMPERIAL: "°F"})
SPEED_UNITS = MappingProxyType({UnitSystem.METRIC: "m/s", UnitSystem.IMPERIAL: "mph"})


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (12.5 -> 13, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def round_wind_speed(speed: float) -> float:
    """Round a wind speed to one decimal place."""
    return round_half_up(speed * 10) / 10


def temperature_unit(units: UnitSystem) -> str:
    """Temperature label for a unit system."""
    return TEMPERATURE_UNITS[UnitSystem(units)]


def speed_unit(units: UnitSystem) -> str:
    """Wind speed label for a unit system."""
    return SPEED_UNITS[UnitSystem(units)]


def weather_emoji(condition_icon: str) -> str:
    """Map an OpenWeatherMap icon code to a display glyph.

    Unknown codes fall back to a generic thermometer; never raises.
    """
    return WEATHER_EMOJI.get(condition_icon, FALLBACK_EMOJI)


def wind_direction_label(degrees: float) -> str:
    """Convert a wind direction in degrees to an 8-point compass label.

    Degrees are normalized into [0, 360) first, so 360 and -360 both map to N.
    """
    index = round_half_up((degrees % 360) / 45) % 8
    return COMPASS_POINTS[index]


def format_local_time(epoch_seconds: int, utc_offset_seconds: int) -> str:
    """Render an epoch timestamp as HH:MM on the place's own clock.

    The offset is added to the epoch and the result read in UTC, so the host
    timezone never leaks in.
    """
    local = datetime.fromtimestamp(epoch_seconds + utc_offset_seconds, tz=UTC)
    return local.strftime("%H:%M")


def format_day_label(day: date) -> str:
    """Short day label such as "Mon, Jan 5"."""
    return f"{day:%a}, {day:%b} {day.day}"


def _validate(model: type, raw: Any, payload: str):
    if isinstance(raw, model):
        return raw
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_input=False, include_context=False)
        raise MalformedResponseException(
            f"Weather service returned an unexpected {payload} payload",
            details={"payload": payload, "errors": errors},
        ) from e


def normalize_current(raw: Mapping[str, Any] | CurrentWeather, units: UnitSystem) -> CurrentConditions:
    """Build CurrentConditions from a raw /weather payload.

    Args:
        raw: JSON mapping or an already validated CurrentWeather
        units: Unit system the payload was requested in

    Returns:
        CurrentConditions with unit labels matching ``units``

    Raises:
        MalformedResponseException: If a required field is missing or mistyped
    """
    data: CurrentWeather = _validate(CurrentWeather, raw, "current conditions")
    condition = data.weather[0]

    return CurrentConditions(
        place=data.name,
        country=data.sys.country,
        coordinates=Coordinates(latitude=data.coord.lat, longitude=data.coord.lon),
        temperature=round_half_up(data.main.temp),
        feels_like=round_half_up(data.main.feels_like),
        temp_min=round_half_up(data.main.temp_min),
        temp_max=round_half_up(data.main.temp_max),
        temp_unit=temperature_unit(units),
        description=condition.description,
        condition_icon=condition.icon,
        condition_code=condition.id,
        humidity_pct=round_half_up(data.main.humidity),
        pressure_hpa=round_half_up(data.main.pressure),
        wind_speed=round_wind_speed(data.wind.speed),
        wind_direction_deg=round_half_up(data.wind.deg),
        speed_unit=speed_unit(units),
        clouds_pct=round_half_up(data.clouds.all),
        visibility_km=data.visibility / 1000,
        sunrise_epoch=data.sys.sunrise,
        sunset_epoch=data.sys.sunset,
        utc_offset_seconds=data.timezone,
        observed_at_epoch=data.dt,
    )


def _local_datetime(sample: ForecastSample, utc_offset_seconds: int) -> datetime:
    return datetime.fromtimestamp(sample.dt, tz=UTC) + timedelta(seconds=utc_offset_seconds)


def _forecast_day(sample: ForecastSample, day: date, units: UnitSystem) -> ForecastDay:
    condition = sample.weather[0]
    return ForecastDay(
        calendar_date=day,
        label=format_day_label(day),
        temperature=round_half_up(sample.main.temp),
        temp_min=round_half_up(sample.main.temp_min),
        temp_max=round_half_up(sample.main.temp_max),
        temp_unit=temperature_unit(units),
        description=condition.description,
        condition_icon=condition.icon,
        condition_code=condition.id,
        humidity_pct=round_half_up(sample.main.humidity),
        wind_speed=round_wind_speed(sample.wind.speed),
        clouds_pct=round_half_up(sample.clouds.all),
        precipitation_probability_pct=round_half_up(sample.pop * 100),
    )


def select_daily_samples(
    timeline: Iterable[Mapping[str, Any] | ForecastSample],
    units: UnitSystem,
    utc_offset_seconds: int = 0,
) -> ForecastSeries:
    """Reduce a 3-hour-step forecast timeline to one sample per calendar day.

    The first pass picks, per local date, the first sample whose local hour is
    between 11:00 and 13:00. If that leaves fewer than five days, a second pass
    fills each still-missing date with its first sample in timeline order.
    The result is ordered by date and holds at most five days.

    Args:
        timeline: Chronologically ordered raw samples (mappings or ForecastSample)
        units: Unit system the timeline was requested in
        utc_offset_seconds: Offset added to each timestamp before reading its
            date and hour; 0 reads the timestamp in UTC. The caller picks the
            clock: normalize_forecast passes the forecast city's own offset,
            so days follow the place being viewed, not the host or browser

    Returns:
        ForecastSeries with no duplicate dates

    Raises:
        MalformedResponseException: If a sample lacks a required field
    """
    samples = [_validate(ForecastSample, item, "forecast sample") for item in timeline]
    stamped = [(_local_datetime(sample, utc_offset_seconds), sample) for sample in samples]

    selected: dict[date, ForecastDay] = {}
    for local, sample in stamped:
        day = local.date()
        if day in selected:
            continue
        if local.hour in MIDDAY_HOURS:
            selected[day] = _forecast_day(sample, day, units)

    if len(selected) < FORECAST_DAYS:
        for local, sample in stamped:
            if len(selected) >= FORECAST_DAYS:
                break
            day = local.date()
            if day not in selected:
                selected[day] = _forecast_day(sample, day, units)

    return [selected[day] for day in sorted(selected)][:FORECAST_DAYS]


def normalize_forecast(raw: Mapping[str, Any] | ForecastResponse, units: UnitSystem) -> ForecastSeries:
    """Build a ForecastSeries from a raw /forecast payload.

    Sample dates and hours are read on the city's own clock.
    """
    data: ForecastResponse = _validate(ForecastResponse, raw, "forecast")
    return select_daily_samples(data.samples, units, utc_offset_seconds=data.city.timezone)


def normalize_place(raw: Mapping[str, Any] | GeocodeResult) -> PlaceRef:
    """Build a PlaceRef from one geocoding match."""
    data: GeocodeResult = _validate(GeocodeResult, raw, "geocoding")
    return PlaceRef(
        name=data.name,
        country_code=data.country,
        coordinates=Coordinates(latitude=data.lat, longitude=data.lon),
    )

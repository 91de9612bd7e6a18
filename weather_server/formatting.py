"""Render a normalized weather payload as a plain-text report."""

from __future__ import annotations

import datetime as dt
import math
from decimal import Decimal
from typing import Optional

from weather_server.exceptions import FormattingInvariantError
from weather_server.schemas import NormalizedWeather, Precipitation

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_number(value: float) -> str:
    """Shortest positional form of a number, never in exponent notation.

    ``12.0`` -> ``12``, ``35.68`` -> ``35.68``, ``1e-05`` -> ``0.00001``.
    """

    if isinstance(value, float):
        if not math.isfinite(value):
            return str(value)
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    return str(value)


def format_local_time(timestamp: int, utc_offset_seconds: int) -> str:
    """Shift a Unix UTC timestamp by a fixed offset and format it."""

    try:
        shifted = dt.datetime.fromtimestamp(timestamp, tz=dt.timezone.utc) + dt.timedelta(
            seconds=utc_offset_seconds
        )
    except (OverflowError, OSError, ValueError) as exc:
        raise FormattingInvariantError(
            f"Cannot render timestamp {timestamp} with UTC offset {utc_offset_seconds}s"
        ) from exc
    return shifted.strftime(TIME_FORMAT)


def _precipitation_note(label: str, value: Optional[Precipitation]) -> str:
    if value is None:
        return f"(No {label.lower()} information)"
    return f"({label}: {format_number(value.one_hour)} mm/h)"


def format_weather_report(weather: NormalizedWeather) -> str:
    if not weather.weather:
        raise FormattingInvariantError("Weather payload contains no weather conditions")

    condition = weather.weather[0]
    main = weather.main
    wind = weather.wind
    gust = "" if wind.gust is None else f", Gust {format_number(wind.gust)} m/s"
    sunrise = format_local_time(weather.sys.sunrise, weather.timezone)
    sunset = format_local_time(weather.sys.sunset, weather.timezone)

    lines = [
        f"Current Location: {weather.name} (Country: {weather.sys.country}, "
        f"Latitude: {format_number(weather.coord.lat)}, Longitude: {format_number(weather.coord.lon)}, "
        f"Timezone Offset: {weather.timezone} seconds).",
        f"Weather Condition: {condition.main}.",
        f"Temperature: {format_number(main.temp)}°C (Feels like: {format_number(main.feels_like)}°C, "
        f"Min: {format_number(main.temp_min)}°C, Max: {format_number(main.temp_max)}°C).",
        f"Atmosphere: Pressure {main.pressure} hPa (Sea Level: {main.sea_level} hPa, "
        f"Ground Level: {main.grnd_level} hPa), Humidity {main.humidity}%.",
        f"Wind: Speed {format_number(wind.speed)} m/s, Direction {wind.deg}°{gust}.",
        f"Clouds: Cloudiness {weather.clouds.all}%.",
        f"Visibility: {weather.visibility} meters.",
        f"Other: Data Calculation Time (Unix UTC): {weather.dt}, Sunrise: {sunrise}, Sunset: {sunset}.",
        _precipitation_note("Rain", weather.rain) + _precipitation_note("Snow", weather.snow),
    ]
    return "\n".join(lines)

"""Turn a city name into a weather report: geocode, fetch, validate, format."""

from __future__ import annotations

from typing import List, Optional

import structlog
from pydantic import TypeAdapter, ValidationError

from weather_server.client import OpenWeatherClient
from weather_server.exceptions import ConfigurationError, UpstreamProtocolError
from weather_server.formatting import format_weather_report
from weather_server.monitoring import timed, with_correlation_id
from weather_server.schemas import (
    GeocodeResult,
    GetWeatherResponse,
    NormalizedWeather,
    WeatherQueryRequest,
)


logger = structlog.get_logger(__name__)

MISSING_API_KEY_MESSAGE = (
    "No API key provided. Please set the `OPENWEATHERMAP_API_KEY` environment variable."
)

_GEOCODE_RESULTS = TypeAdapter(List[GeocodeResult])


def describe_validation_error(exc: ValidationError) -> str:
    """Summarize a validation error without echoing the offending input."""

    errors = exc.errors(include_url=False, include_input=False)
    if not errors:
        return "invalid payload"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    summary = f"{location}: {first.get('msg', 'invalid value')}"
    if len(errors) > 1:
        summary += f" (and {len(errors) - 1} more error(s))"
    return summary


def parse_geocode(body: bytes, location: str) -> GeocodeResult:
    try:
        results = _GEOCODE_RESULTS.validate_json(body, strict=True)
    except ValidationError as exc:
        raise UpstreamProtocolError(
            f"Failed to parse geocode response: {describe_validation_error(exc)}"
        ) from exc
    if not results:
        raise UpstreamProtocolError(f"No geocoding results for location {location!r}")
    return results[0]


def parse_weather(body: bytes) -> NormalizedWeather:
    try:
        return NormalizedWeather.model_validate_json(body, strict=True)
    except ValidationError as exc:
        raise UpstreamProtocolError(
            f"Failed to parse weather response: {describe_validation_error(exc)}"
        ) from exc


class WeatherQueryOrchestrator:
    """Runs one weather query against the provider.

    The API key is injected at construction; a missing key is only reported
    when a query is attempted, before any network call.
    """

    def __init__(self, api_key: Optional[str], client: OpenWeatherClient) -> None:
        self._api_key = api_key
        self._client = client

    @with_correlation_id
    @timed
    async def get_current_weather(self, request: WeatherQueryRequest) -> GetWeatherResponse:
        if not self._api_key:
            raise ConfigurationError(MISSING_API_KEY_MESSAGE)

        units = request.effective_unit.unit_system

        logger.info("weather.geocode.start", location=request.location, units=units)
        body = await self._client.geocode(request.location, api_key=self._api_key, units=units)
        geocode = parse_geocode(body, request.location)

        logger.info(
            "weather.fetch.start",
            location=request.location,
            latitude=geocode.latitude,
            longitude=geocode.longitude,
        )
        body = await self._client.current_weather(
            geocode.latitude, geocode.longitude, api_key=self._api_key, units=units
        )
        weather = parse_weather(body)
        logger.debug("weather.payload", weather=weather.model_dump(by_alias=True))

        report = format_weather_report(weather)
        logger.info("weather.report.ready", location=request.location, city=weather.name, city_id=weather.id)
        return GetWeatherResponse(weather=report)

"""Async OpenWeatherMap client with a bounded per-request timeout."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import aiohttp
import structlog

from weather_server.exceptions import UpstreamProtocolError, UpstreamUnavailableError
from weather_server.redaction import redact_string


logger = structlog.get_logger(__name__)


class OpenWeatherClient:
    """Issues single-attempt GET requests to the geocoding and weather endpoints.

    The client only deals with transport: it returns raw response bodies and
    classifies failures. Payload validation belongs to the caller.
    """

    def __init__(
        self,
        *,
        geocode_url: str = "http://api.openweathermap.org/geo/1.0/direct",
        weather_url: str = "http://api.openweathermap.org/data/2.5/weather",
        timeout_seconds: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self._geocode_url = geocode_url
        self._weather_url = weather_url
        self._timeout = timeout_seconds
        self._session = session

    @asynccontextmanager
    async def session(self) -> AsyncIterator[aiohttp.ClientSession]:
        if self._session is not None:
            yield self._session
            return
        timeout = aiohttp.ClientTimeout(total=self._timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            yield session

    async def geocode(self, location: str, *, api_key: str, units: str) -> bytes:
        params = {"q": location, "appid": api_key, "limit": "1", "units": units}
        return await self._get(self._geocode_url, params, what="geocode")

    async def current_weather(self, latitude: float, longitude: float, *, api_key: str, units: str) -> bytes:
        params = {
            "lat": str(latitude),
            "lon": str(longitude),
            "appid": api_key,
            "units": units,
        }
        return await self._get(self._weather_url, params, what="weather")

    async def _get(self, url: str, params: Dict[str, Any], *, what: str) -> bytes:
        try:
            async with self.session() as session:
                async with session.get(url, params=params) as response:
                    status = response.status
                    body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            message = redact_string(f"Failed to get {what}: {str(exc) or type(exc).__name__}")
            logger.error("upstream.unavailable", request=what, error=message)
            raise UpstreamUnavailableError(message) from exc

        logger.debug("upstream.response", request=what, status=status, size=len(body))
        if status >= 500:
            raise UpstreamUnavailableError(f"Failed to get {what}: provider returned HTTP {status}")
        if status >= 400:
            raise UpstreamProtocolError(f"Failed to get {what}: provider rejected the request with HTTP {status}")
        return body

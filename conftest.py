import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Ensure tests never depend on a developer's real OpenWeatherMap key from .env.
os.environ["OPENWEATHERMAP_API_KEY"] = ""

from weather_server.config import get_settings  # noqa: E402


TOKYO_WEATHER: Dict[str, Any] = {
    "coord": {"lon": 139.69, "lat": 35.68},
    "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
    "base": "stations",
    "main": {
        "temp": 18.5,
        "feels_like": 17.9,
        "temp_min": 16,
        "temp_max": 20.1,
        "pressure": 1015,
        "humidity": 60,
        "sea_level": 1015,
        "grnd_level": 1013,
    },
    "visibility": 10000,
    "wind": {"speed": 3.6, "deg": 140},
    "clouds": {"all": 0},
    "dt": 1700000000,
    "sys": {"type": 2, "id": 268395, "country": "JP", "sunrise": 1699995600, "sunset": 1700033400},
    "timezone": 32400,
    "id": 1850144,
    "name": "Tokyo",
    "cod": 200,
}


class FakeResponse:
    def __init__(self, status: int, body: bytes) -> None:
        self.status = status
        self._body = body

    async def read(self) -> bytes:
        return self._body

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None


class FakeSession:
    """Stands in for ``aiohttp.ClientSession``; replays queued responses and records calls."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self._queue: List[Any] = []

    def add_json(self, payload: Any, status: int = 200) -> None:
        self._queue.append(FakeResponse(status, json.dumps(payload).encode()))

    def add_body(self, body: bytes, status: int = 200) -> None:
        self._queue.append(FakeResponse(status, body))

    def add_error(self, exc: BaseException) -> None:
        self._queue.append(exc)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> FakeResponse:
        self.calls.append({"url": url, "params": dict(params or {})})
        if not self._queue:
            raise AssertionError(f"unexpected request to {url}")
        item = self._queue.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def weather_payload() -> Dict[str, Any]:
    return json.loads(json.dumps(TOKYO_WEATHER))

"""Weather MCP server package exports."""

from weather_server.config import get_settings
from weather_server.exceptions import ErrorKind, WeatherToolError
from weather_server.orchestrator import WeatherQueryOrchestrator
from weather_server.schemas import GetWeatherResponse, TemperatureUnit, WeatherQueryRequest

__all__ = [
    "get_settings",
    "ErrorKind",
    "WeatherToolError",
    "WeatherQueryOrchestrator",
    "GetWeatherResponse",
    "TemperatureUnit",
    "WeatherQueryRequest",
]

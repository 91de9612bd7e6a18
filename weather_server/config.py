"""Configuration management for the weather MCP server."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


ROOT = Path(__file__).resolve().parents[1]

DEFAULT_SOCKET_ADDR = "127.0.0.1:8002"


class Settings(BaseSettings):
    """Process-wide configuration values for the server and the provider client."""

    openweathermap_api_key: Optional[str] = Field(default=None, validation_alias="OPENWEATHERMAP_API_KEY")
    geocode_url: str = Field(
        default="http://api.openweathermap.org/geo/1.0/direct",
        validation_alias="OPENWEATHERMAP_GEOCODE_URL",
    )
    weather_url: str = Field(
        default="http://api.openweathermap.org/data/2.5/weather",
        validation_alias="OPENWEATHERMAP_WEATHER_URL",
    )
    request_timeout_seconds: float = Field(default=10.0, validation_alias="OPENWEATHERMAP_TIMEOUT_SECONDS")

    socket_addr: str = Field(default=DEFAULT_SOCKET_ADDR, validation_alias="WEATHER_SOCKET_ADDR")
    log_level: str = Field(default="DEBUG", validation_alias="LOG_LEVEL")

    @field_validator("openweathermap_api_key", mode="before")
    @classmethod
    def blank_api_key_is_missing(cls, api_key: Optional[str]) -> Optional[str]:
        if api_key is None:
            return None
        api_key = str(api_key).strip()
        return api_key or None

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, timeout: float) -> float:
        if timeout <= 0:
            raise ValueError("OPENWEATHERMAP_TIMEOUT_SECONDS must be positive")
        return timeout

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, level: str) -> str:
        return level.strip().upper()

    model_config = {
        "env_file": ROOT / ".env",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

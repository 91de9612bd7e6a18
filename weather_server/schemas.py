"""Request, provider and response models for the weather tool."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TemperatureUnit(str, Enum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @property
    def unit_system(self) -> str:
        """OpenWeatherMap ``units`` code for this temperature unit."""
        if self is TemperatureUnit.FAHRENHEIT:
            return "imperial"
        return "metric"


class WeatherQueryRequest(BaseModel):
    """Arguments of a single ``get_current_weather`` invocation."""

    model_config = ConfigDict(frozen=True)

    location: str = Field(
        ...,
        min_length=1,
        description="The city to get the weather for, e.g., 'Beijing', 'New York', 'Tokyo'",
    )
    unit: Optional[TemperatureUnit] = Field(
        default=None,
        description="The unit to use for the temperature, e.g., 'celsius', 'fahrenheit'",
    )

    @field_validator("location", mode="after")
    @classmethod
    def validate_location(cls, location: str) -> str:
        if not location.strip():
            raise ValueError("location must not be blank")
        return location

    @property
    def effective_unit(self) -> TemperatureUnit:
        return self.unit or TemperatureUnit.CELSIUS


class GetWeatherResponse(BaseModel):
    weather: str = Field(..., description="the weather information")


class ProviderModel(BaseModel):
    """Base for payloads returned by OpenWeatherMap.

    Validation is strict (no str -> number coercion) and unknown fields are
    ignored so provider additions do not break parsing.
    """

    model_config = ConfigDict(strict=True, frozen=True, populate_by_name=True, extra="ignore")


class GeocodeResult(ProviderModel):
    latitude: float = Field(..., alias="lat")
    longitude: float = Field(..., alias="lon")


class Coord(ProviderModel):
    lon: float
    lat: float


class WeatherCondition(ProviderModel):
    id: int
    main: str
    description: str
    icon: str


class MainMetrics(ProviderModel):
    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: int
    humidity: int
    sea_level: int
    grnd_level: int


class Wind(ProviderModel):
    speed: float
    deg: int
    gust: Optional[float] = None


class Precipitation(ProviderModel):
    # volume for the last hour, mm
    one_hour: float = Field(..., alias="1h")


class Clouds(ProviderModel):
    all: int


class Sys(ProviderModel):
    sys_type: Optional[int] = Field(default=None, alias="type")
    id: Optional[int] = None
    country: str
    sunrise: int
    sunset: int


class NormalizedWeather(ProviderModel):
    """Current weather for one location as returned by ``/data/2.5/weather``."""

    coord: Coord
    weather: List[WeatherCondition] = Field(..., min_length=1)
    main: MainMetrics
    visibility: int
    wind: Wind
    rain: Optional[Precipitation] = None
    snow: Optional[Precipitation] = None
    clouds: Clouds
    dt: int
    sys: Sys
    timezone: int
    id: int
    name: str
    cod: int

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from weather_server.schemas import (
    GeocodeResult,
    GetWeatherResponse,
    NormalizedWeather,
    TemperatureUnit,
    WeatherQueryRequest,
)


def test_unit_system_codes() -> None:
    assert TemperatureUnit.CELSIUS.unit_system == "metric"
    assert TemperatureUnit.FAHRENHEIT.unit_system == "imperial"


def test_request_defaults_to_celsius() -> None:
    request = WeatherQueryRequest(location="Tokyo")

    assert request.unit is None
    assert request.effective_unit is TemperatureUnit.CELSIUS


def test_request_parses_unit_string() -> None:
    request = WeatherQueryRequest.model_validate({"location": "Boston", "unit": "fahrenheit"})

    assert request.effective_unit is TemperatureUnit.FAHRENHEIT


def test_unknown_unit_is_rejected() -> None:
    with pytest.raises(ValidationError):
        WeatherQueryRequest.model_validate({"location": "Oslo", "unit": "kelvin"})


@pytest.mark.parametrize("location", ["", "   "])
def test_blank_location_is_rejected(location: str) -> None:
    with pytest.raises(ValidationError):
        WeatherQueryRequest(location=location)


def test_request_is_immutable() -> None:
    request = WeatherQueryRequest(location="Paris")

    with pytest.raises(ValidationError):
        request.location = "Lyon"  # type: ignore[misc]


def test_geocode_result_reads_lat_lon_and_ignores_extras() -> None:
    result = GeocodeResult.model_validate_json(
        json.dumps({"name": "Tokyo", "lat": 35.68, "lon": 139.69, "country": "JP", "local_names": {"ja": "東京"}})
    )

    assert result.latitude == pytest.approx(35.68)
    assert result.longitude == pytest.approx(139.69)


def test_geocode_result_rejects_string_coordinates() -> None:
    with pytest.raises(ValidationError):
        GeocodeResult.model_validate_json(json.dumps({"lat": "35.68", "lon": 139.69}))


def test_weather_round_trip_is_lossless(weather_payload) -> None:
    weather_payload["rain"] = {"1h": 0.4}
    weather_payload["wind"]["gust"] = 5.5
    weather = NormalizedWeather.model_validate_json(json.dumps(weather_payload))

    again = NormalizedWeather.model_validate_json(weather.model_dump_json(by_alias=True))

    assert again == weather
    assert again.rain is not None and again.rain.one_hour == pytest.approx(0.4)
    assert again.sys.sys_type == 2


def test_weather_dump_uses_provider_field_names(weather_payload) -> None:
    weather_payload["snow"] = {"1h": 1.25}
    weather = NormalizedWeather.model_validate_json(json.dumps(weather_payload))

    dumped = weather.model_dump(by_alias=True)

    assert dumped["snow"] == {"1h": 1.25}
    assert dumped["sys"]["type"] == 2
    assert "base" not in dumped


@pytest.mark.parametrize(
    "mutate",
    [
        lambda p: p.pop("main"),
        lambda p: p["sys"].pop("country"),
        lambda p: p.update(weather=[]),
        lambda p: p["main"].update(temp="warm"),
        lambda p: p["main"].update(pressure="1015"),
        lambda p: p.update(visibility=None),
        lambda p: p["weather"][0].pop("main"),
    ],
)
def test_weather_rejects_malformed_payloads(weather_payload, mutate) -> None:
    mutate(weather_payload)

    with pytest.raises(ValidationError):
        NormalizedWeather.model_validate_json(json.dumps(weather_payload))


def test_response_payload_has_single_weather_field() -> None:
    assert GetWeatherResponse(weather="report").model_dump() == {"weather": "report"}

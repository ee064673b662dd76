"""Tests for the OpenWeather lookup pipeline."""

import pytest

from clima.core.errors import DataUnavailable, NetworkError, ParseError
from clima.core.weather_api import build_params, parse_reading
from clima.models.weather import CityName, Coordinates, WeatherReading
from conftest import ENDPOINT, FakeWeatherEndpoint, connection_refused, read_timeout


PARIS = Coordinates(latitude=48.86, longitude=2.35)


@pytest.mark.asyncio
async def test_coordinates_lookup_returns_reading(service, endpoint):
    """A full payload yields the normalized reading."""
    reading = await service.fetch_weather(PARIS)

    assert reading == WeatherReading(
        city_name="Paris", temperature_kelvin=300.0, condition_code=800
    )
    assert endpoint.last_params == {"lat": "48.86", "lon": "2.35", "appid": "test-key"}
    assert str(endpoint.requests[-1].url).startswith(ENDPOINT)


@pytest.mark.asyncio
async def test_city_lookup_sends_q_param(service, endpoint):
    await service.fetch_weather(CityName(text="London"))
    assert endpoint.last_params == {"q": "London", "appid": "test-key"}


@pytest.mark.asyncio
async def test_explicit_api_key_overrides_config(service, endpoint):
    await service.fetch_weather(CityName(text="London"), api_key="other-key")
    assert endpoint.last_params["appid"] == "other-key"


@pytest.mark.asyncio
async def test_empty_api_key_is_rejected(make_service):
    endpoint = FakeWeatherEndpoint()
    service = make_service(endpoint, api_key="")

    with pytest.raises(ValueError):
        await service.fetch_weather(PARIS)
    assert endpoint.requests == []


@pytest.mark.asyncio
async def test_missing_temperature_is_data_unavailable(make_service):
    payload = {"name": "Paris", "weather": [{"id": 800}], "main": {"humidity": 40}}
    service = make_service(FakeWeatherEndpoint(payload=payload))

    with pytest.raises(DataUnavailable) as exc_info:
        await service.fetch_weather(PARIS)
    assert exc_info.value.user_message == "Weather Unavailable"


@pytest.mark.asyncio
async def test_non_json_body_is_parse_error(make_service):
    service = make_service(FakeWeatherEndpoint(body=b"<html>oops</html>"))

    with pytest.raises(ParseError):
        await service.fetch_weather(PARIS)


@pytest.mark.asyncio
async def test_connection_refused_is_network_error(make_service):
    service = make_service(FakeWeatherEndpoint(error=connection_refused))

    with pytest.raises(NetworkError) as exc_info:
        await service.fetch_weather(PARIS)
    assert exc_info.value.user_message == "Connection Issues"
    assert exc_info.value.cause is not None


@pytest.mark.asyncio
async def test_timeout_is_network_error(make_service):
    service = make_service(FakeWeatherEndpoint(error=read_timeout))

    with pytest.raises(NetworkError):
        await service.fetch_weather(PARIS)


@pytest.mark.asyncio
async def test_error_status_is_network_error(make_service):
    payload = {"cod": "404", "message": "city not found"}
    service = make_service(FakeWeatherEndpoint(payload=payload, status_code=404))

    with pytest.raises(NetworkError):
        await service.fetch_weather(CityName(text="Atlantis"))


def test_build_params_for_each_variant():
    assert build_params(Coordinates(latitude=1.5, longitude=-2.0), "k") == {
        "lat": "1.5",
        "lon": "-2.0",
        "appid": "k",
    }
    assert build_params(CityName(text="Oslo"), "k") == {"q": "Oslo", "appid": "k"}


def test_parse_reading_defaults_optional_fields():
    """Only main.temp is required."""
    reading = parse_reading({"main": {"temp": 280}})
    assert reading.city_name == ""
    assert reading.condition_code == 0
    assert reading.temperature_kelvin == 280.0


@pytest.mark.parametrize(
    "payload",
    [
        {"main": {"temp": "300"}},
        {"main": {"temp": None}},
        {"main": {"temp": True}},
        {"main": []},
        {"name": "Paris"},
    ],
)
def test_parse_reading_requires_numeric_temperature(payload):
    with pytest.raises(DataUnavailable):
        parse_reading(payload)


def test_parse_reading_rejects_non_object():
    with pytest.raises(ParseError):
        parse_reading([1, 2, 3])


def test_parse_reading_ignores_malformed_weather_list():
    reading = parse_reading({"main": {"temp": 290.0}, "weather": [], "name": 42})
    assert reading.condition_code == 0
    assert reading.city_name == ""


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        b'{"main": {"temp": NaN}}',
        b'{"main": {"temp": Infinity}}',
        b'{"main": {"temp": 1e400}}',
        b'{"main": {"temp": -5.0}}',
    ],
)
async def test_unusable_temperature_is_data_unavailable(make_service, body):
    service = make_service(FakeWeatherEndpoint(body=body))

    with pytest.raises(DataUnavailable):
        await service.fetch_weather(PARIS)


@pytest.mark.asyncio
async def test_overflowing_condition_code_falls_back_to_zero(make_service):
    body = b'{"main": {"temp": 300.0}, "name": "Paris", "weather": [{"id": 1e400}]}'
    service = make_service(FakeWeatherEndpoint(body=body))

    reading = await service.fetch_weather(PARIS)

    assert reading.condition_code == 0
    assert reading.temperature_kelvin == 300.0


def test_parse_reading_rejects_huge_integer_temperature():
    with pytest.raises(DataUnavailable):
        parse_reading({"main": {"temp": 10**400}})

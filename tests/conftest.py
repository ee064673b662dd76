"""Shared fixtures: a lookup service backed by httpx.MockTransport."""

import json
import httpx
import pytest

from clima.config import LookupConfig
from clima.core.weather_api import WeatherLookupService

ENDPOINT = "https://weather.test/data/2.5/weather"

PARIS_PAYLOAD = {
    "coord": {"lon": 2.35, "lat": 48.86},
    "weather": [{"id": 800, "main": "Clear", "description": "clear sky"}],
    "main": {"temp": 300.0, "humidity": 40},
    "name": "Paris",
}


class FakeWeatherEndpoint:
    """Records requests and answers them with a canned response."""

    def __init__(self, payload=PARIS_PAYLOAD, status_code=200, body=None, error=None):
        self.payload = payload
        self.status_code = status_code
        self.body = body
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        if self.body is not None:
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, content=json.dumps(self.payload))

    @property
    def last_params(self):
        return dict(self.requests[-1].url.params)


def connection_refused(request: httpx.Request):
    return httpx.ConnectError("Connection refused", request=request)


def read_timeout(request: httpx.Request):
    return httpx.ReadTimeout("timed out", request=request)


@pytest.fixture
def endpoint():
    return FakeWeatherEndpoint()


@pytest.fixture
def make_service():
    def _make(endpoint: FakeWeatherEndpoint, api_key: str = "test-key"):
        config = LookupConfig(endpoint=ENDPOINT, api_key=api_key, timeout_seconds=5)
        return WeatherLookupService(config, transport=httpx.MockTransport(endpoint))

    return _make


@pytest.fixture
def service(endpoint, make_service):
    return make_service(endpoint)

"""Client for fetching current weather from the OpenWeather API."""

import httpx
import math
from typing import Optional, Dict, Any
from clima.config import LookupConfig
from clima.core.errors import DataUnavailable, NetworkError, ParseError
from clima.models.weather import CityName, Coordinates, WeatherQuery, WeatherReading
import logging

logger = logging.getLogger(__name__)

# Readings above this are treated as garbage rather than rendered
MAX_KELVIN = 1000.0


def build_params(query: WeatherQuery, api_key: str) -> Dict[str, str]:
    """Query-string parameters for a lookup."""
    if isinstance(query, Coordinates):
        params = {"lat": str(query.latitude), "lon": str(query.longitude)}
    elif isinstance(query, CityName):
        params = {"q": query.text}
    else:
        raise TypeError(f"Unsupported weather query: {query!r}")
    params["appid"] = api_key
    return params


def parse_reading(data: Any) -> WeatherReading:
    """
    Normalizes a decoded OpenWeather payload.

    Only `main.temp` is required, and it must be a finite Kelvin value in
    [0, MAX_KELVIN]. `name` and `weather[0].id` fall back to empty/zero when
    missing, non-finite or of the wrong type.
    """
    if not isinstance(data, dict):
        raise ParseError("Weather response is not a JSON object")

    main = data.get("main")
    temperature = main.get("temp") if isinstance(main, dict) else None
    if isinstance(temperature, bool) or not isinstance(temperature, (int, float)):
        raise DataUnavailable("Weather response has no main.temp")
    # json accepts NaN, Infinity and overflowing literals such as 1e400
    try:
        temperature = float(temperature)
    except OverflowError:
        raise DataUnavailable("Weather response main.temp is out of range")
    if not math.isfinite(temperature) or not 0 <= temperature <= MAX_KELVIN:
        raise DataUnavailable(
            f"Weather response main.temp is out of range: {temperature}"
        )

    name = data.get("name")
    city_name = name if isinstance(name, str) else ""

    condition_code = 0
    weather = data.get("weather")
    if isinstance(weather, list) and weather and isinstance(weather[0], dict):
        code = weather[0].get("id")
        if isinstance(code, int) and not isinstance(code, bool):
            condition_code = code
        elif isinstance(code, float) and math.isfinite(code):
            condition_code = int(code)

    return WeatherReading(
        city_name=city_name,
        temperature_kelvin=temperature,
        condition_code=condition_code,
    )


class WeatherLookupService:
    """
    Turns a coordinates or city query into a WeatherReading with a single GET.

    There are no retries, no caching and no cancellation: every call issues
    exactly one request and either returns a reading or raises a WeatherError.
    """

    def __init__(
        self,
        config: LookupConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._transport = transport

    async def fetch_weather(
        self, query: WeatherQuery, api_key: Optional[str] = None
    ) -> WeatherReading:
        """Fetch and normalize the current weather for a query."""
        key = api_key if api_key is not None else self.config.api_key
        if not key:
            raise ValueError("An OpenWeather API key is required")

        params = build_params(query, key)
        logger.info(f"Requesting weather for {query!r}")

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self.config.timeout_seconds
            ) as client:
                response = await client.get(self.config.endpoint, params=params)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"OpenWeather request failed for {query!r}: {e}")
            raise NetworkError(e) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"OpenWeather returned a non-JSON body: {e}")
            raise ParseError("Weather response is not valid JSON") from e

        reading = parse_reading(data)
        logger.info(
            f"Weather for '{reading.city_name}': {reading.temperature_kelvin}K, "
            f"condition {reading.condition_code}"
        )
        return reading

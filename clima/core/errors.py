"""Typed failures of the weather lookup pipeline."""

from typing import Optional


class WeatherError(Exception):
    """Base class for every recoverable lookup failure."""

    user_message = "Weather Unavailable"


class NetworkError(WeatherError):
    """Transport failure: connection error, timeout or non-2xx status."""

    user_message = "Connection Issues"

    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(f"Weather request failed: {cause}")
        self.cause = cause


class ParseError(WeatherError):
    """The response body is not a JSON object."""


class DataUnavailable(WeatherError):
    """The response carries no usable temperature."""


class LocationUnavailable(WeatherError):
    """The location source could not produce a fix."""

    user_message = "Location Unavailable"

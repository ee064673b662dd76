"""Pydantic models for weather queries, readings and API responses."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from typing import Annotated, Literal, Optional, Union


class TemperatureUnit(str, Enum):
    """Unit the temperature is displayed in."""

    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    def toggled(self) -> "TemperatureUnit":
        if self is TemperatureUnit.CELSIUS:
            return TemperatureUnit.FAHRENHEIT
        return TemperatureUnit.CELSIUS


class Coordinates(BaseModel):
    """Query by geographic position."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["coordinates"] = "coordinates"
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class CityName(BaseModel):
    """Query by free-text city name."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["city"] = "city"
    text: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


WeatherQuery = Annotated[Union[Coordinates, CityName], Field(discriminator="kind")]


class WeatherReading(BaseModel):
    """Normalized result of one successful lookup. Temperature is in Kelvin."""

    model_config = ConfigDict(frozen=True)

    city_name: str = ""
    temperature_kelvin: float
    condition_code: int = 0


class LocationFix(BaseModel):
    """A position event pushed by the location source."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    accuracy: float


class LocationErrorRequest(BaseModel):
    """Reported when the location source cannot produce a fix."""

    reason: str = "unknown"


class CityRequest(BaseModel):
    """City name entered by the user"""

    city: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class WeatherDisplay(BaseModel):
    """What the presentation layer renders for a reading."""

    city: str
    temperature: float
    temperature_text: str
    icon: str
    unit: TemperatureUnit


class WeatherResponse(BaseModel):
    """API response wrapping the display data and a status message."""

    success: bool
    data: Optional[WeatherDisplay] = None
    message: str
    unit: TemperatureUnit

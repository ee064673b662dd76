"""Derives display values from a stored reading."""

from clima.core.conditions import icon_for_condition
from clima.core.units import convert, format_temperature
from clima.models.weather import TemperatureUnit, WeatherDisplay, WeatherReading


def render(reading: WeatherReading, unit: TemperatureUnit) -> WeatherDisplay:
    """Build the display for a reading in the requested unit."""
    temperature = convert(reading.temperature_kelvin, unit)
    return WeatherDisplay(
        city=reading.city_name,
        temperature=temperature,
        temperature_text=format_temperature(temperature),
        icon=icon_for_condition(reading.condition_code),
        unit=unit,
    )

"""Temperature conversion helpers. Readings are always kept in Kelvin."""

from clima.models.weather import TemperatureUnit

KELVIN_OFFSET = 273.15


def convert(temp_kelvin: float, to: TemperatureUnit) -> float:
    """Convert a Kelvin temperature to the given display unit."""
    celsius = temp_kelvin - KELVIN_OFFSET
    if to is TemperatureUnit.FAHRENHEIT:
        return celsius * 1.8 + 32
    return celsius


def to_kelvin(value: float, unit: TemperatureUnit) -> float:
    """Inverse of convert()."""
    if unit is TemperatureUnit.FAHRENHEIT:
        return (value - 32) / 1.8 + KELVIN_OFFSET
    return value + KELVIN_OFFSET


def format_temperature(value: float) -> str:
    # int() truncates toward zero, so -0.7 renders as "0°"
    return f"{int(value)}°"

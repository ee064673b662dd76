"""Maps OpenWeather condition codes to display icon names."""

from typing import List, Tuple

DEFAULT_ICON = "dunno"

# Inclusive (low, high, icon) bands, checked in order.
CONDITION_BANDS: List[Tuple[int, int, str]] = [
    (0, 300, "tstorm1"),
    (301, 500, "light_rain"),
    (501, 600, "shower3"),
    (601, 700, "snow4"),
    (701, 771, "fog"),
    (772, 799, "tstorm3"),
    (800, 800, "sunny"),
    (801, 804, "cloudy2"),
    (900, 902, "tstorm3"),
    (903, 903, "snow5"),
    (904, 904, "sunny"),
    (905, 1000, "tstorm3"),
]


def icon_for_condition(code: int) -> str:
    """Return the icon name for a condition code, or DEFAULT_ICON if unmapped."""
    for low, high, icon in CONDITION_BANDS:
        if low <= code <= high:
            return icon
    return DEFAULT_ICON

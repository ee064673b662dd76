"""Per-session orchestration of location, city and unit events."""

import logging
from typing import Callable, List, Optional

from clima.core.errors import LocationUnavailable, WeatherError
from clima.core.presenter import render
from clima.core.weather_api import WeatherLookupService
from clima.models.weather import (
    CityName,
    Coordinates,
    LocationFix,
    TemperatureUnit,
    WeatherQuery,
    WeatherReading,
    WeatherResponse,
)

logger = logging.getLogger(__name__)

Listener = Callable[[WeatherResponse], None]


class WeatherController:
    """
    Consumes location and city-entry events, runs lookups and keeps the
    latest reading for display.

    In-flight lookups are never cancelled. If an older request finishes
    after a newer one, its reading overwrites the newer one.
    """

    def __init__(
        self,
        service: WeatherLookupService,
        unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT,
    ):
        self.service = service
        self.unit = unit
        self.reading: Optional[WeatherReading] = None
        self.message = "Waiting for location"
        self.location_active = True
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener):
        """Register a callback notified after every state change"""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def snapshot(self) -> WeatherResponse:
        """Current state as the presentation layer sees it."""
        if self.reading is None:
            return WeatherResponse(success=False, message=self.message, unit=self.unit)
        return WeatherResponse(
            success=True,
            data=render(self.reading, self.unit),
            message=self.message,
            unit=self.unit,
        )

    async def handle_location(self, fix: LocationFix) -> WeatherResponse:
        """Look up weather for the first accurate fix; later fixes are ignored."""
        if not self.location_active:
            logger.debug("Location updates stopped, ignoring fix")
            return self.snapshot()
        if fix.accuracy <= 0:
            logger.debug(f"Ignoring fix with accuracy {fix.accuracy}")
            return self.snapshot()

        self.location_active = False
        query = Coordinates(latitude=fix.latitude, longitude=fix.longitude)
        return await self._lookup(query)

    def handle_location_error(self, cause: Optional[str] = None) -> WeatherResponse:
        logger.warning(f"Location source failed: {cause}")
        self._fail(LocationUnavailable(cause))
        return self.snapshot()

    def reset_location(self) -> WeatherResponse:
        """Start accepting location fixes again."""
        self.location_active = True
        return self.snapshot()

    async def submit_city(self, city: str) -> WeatherResponse:
        return await self._lookup(CityName(text=city))

    def toggle_unit(self) -> WeatherResponse:
        """Switch units; the display is re-derived from the Kelvin reading."""
        self.unit = self.unit.toggled()
        self._notify()
        return self.snapshot()

    async def _lookup(self, query: WeatherQuery) -> WeatherResponse:
        try:
            reading = await self.service.fetch_weather(query)
        except WeatherError as e:
            self._fail(e)
            return self.snapshot()

        self.reading = reading
        self.message = "Weather data retrieved successfully"
        self._notify()
        return self.snapshot()

    def _fail(self, error: WeatherError):
        # The last good reading is dropped so the UI shows the error text
        self.reading = None
        self.message = error.user_message
        self._notify()

    def _notify(self):
        state = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(f"Weather listener {listener!r} failed: {e}", exc_info=True)

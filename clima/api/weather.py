"""API endpoints for weather lookups and per-session weather state"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from typing import Optional

from clima.config import settings
from clima.core.errors import DataUnavailable, WeatherError
from clima.core.presenter import render
from clima.core.session_manager import UserSession, session_manager
from clima.core.weather_api import WeatherLookupService
from clima.models.weather import (
    CityName,
    CityRequest,
    Coordinates,
    LocationErrorRequest,
    LocationFix,
    TemperatureUnit,
    WeatherQuery,
    WeatherResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather", tags=["weather"])
lookup_service = WeatherLookupService(settings.lookup_config())


# --- Dependencies ---


def get_lookup_service() -> WeatherLookupService:
    """Shared lookup service; fails with 503 if no API key is configured."""
    if not lookup_service.config.api_key:
        raise HTTPException(
            status_code=503, detail="OpenWeather API key is not configured."
        )
    return lookup_service


async def get_user_session(request: Request) -> UserSession:
    """Session for the ID attached by SessionMiddleware, created on first use."""
    session_id = getattr(request.state, "session_id", None)
    return await session_manager.get_or_create_session(session_id)


async def _direct_lookup(
    service: WeatherLookupService, query: WeatherQuery, unit: TemperatureUnit
) -> WeatherResponse:
    try:
        reading = await service.fetch_weather(query)
    except DataUnavailable as e:
        raise HTTPException(status_code=404, detail=e.user_message)
    except WeatherError as e:
        raise HTTPException(status_code=502, detail=e.user_message)

    return WeatherResponse(
        success=True,
        data=render(reading, unit),
        message="Weather data retrieved successfully",
        unit=unit,
    )


# --- Direct lookups ---


@router.get("/coordinates", response_model=WeatherResponse)
async def get_weather_by_coordinates(
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180),
    unit: TemperatureUnit = settings.default_unit,
    service: WeatherLookupService = Depends(get_lookup_service),
):
    """Get weather for a latitude/longitude pair"""
    query = Coordinates(latitude=lat, longitude=lon)
    return await _direct_lookup(service, query, unit)


@router.get("/city/{city_name}", response_model=WeatherResponse)
async def get_weather_by_city(
    city_name: str,
    unit: TemperatureUnit = settings.default_unit,
    service: WeatherLookupService = Depends(get_lookup_service),
):
    """Get weather for a specific city"""
    if not city_name.strip():
        raise HTTPException(status_code=422, detail="City name must not be blank.")
    return await _direct_lookup(service, CityName(text=city_name), unit)


# --- Session events ---


@router.post("/location", response_model=WeatherResponse)
async def report_location(
    fix: LocationFix,
    session: UserSession = Depends(get_user_session),
    _: WeatherLookupService = Depends(get_lookup_service),
):
    """
    Location update from the client. Only the first fix with a positive
    accuracy triggers a lookup; later fixes are ignored until reset.
    """
    return await session.controller.handle_location(fix)


@router.post("/location/error", response_model=WeatherResponse)
async def report_location_error(
    error: LocationErrorRequest,
    session: UserSession = Depends(get_user_session),
):
    """The client could not determine its location"""
    return session.controller.handle_location_error(error.reason)


@router.post("/location/reset", response_model=WeatherResponse)
async def reset_location(session: UserSession = Depends(get_user_session)):
    """Accept location fixes again"""
    return session.controller.reset_location()


@router.post("/city", response_model=WeatherResponse)
async def submit_city(
    city_request: CityRequest,
    session: UserSession = Depends(get_user_session),
    _: WeatherLookupService = Depends(get_lookup_service),
):
    """City name entered manually by the user"""
    logger.info(f"City '{city_request.city}' submitted for {session.session_id}")
    return await session.controller.submit_city(city_request.city)


@router.post("/unit/toggle", response_model=WeatherResponse)
async def toggle_unit(session: UserSession = Depends(get_user_session)):
    """Switch the session between Celsius and Fahrenheit"""
    return session.controller.toggle_unit()


@router.get("/current", response_model=WeatherResponse)
async def current_weather(
    session: UserSession = Depends(get_user_session),
    unit: Optional[TemperatureUnit] = None,
):
    """The session's latest reading, optionally rendered in another unit"""
    state = session.controller.snapshot()
    if unit is None or state.data is None or unit is state.unit:
        return state
    return WeatherResponse(
        success=True,
        data=render(session.controller.reading, unit),
        message=state.message,
        unit=unit,
    )

"""Main FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from clima.config import settings
from clima.core.session_manager import session_manager
from clima.middleware.session import SessionMiddleware
import logging

from clima.api.weather import router as weather_router
from clima.api.session import router as session_router

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manages application startup and shutdown events."""
    logger.info("Starting Clima API")
    if not settings.openweather_api_key:
        logger.warning("OPENWEATHER_API_KEY is not set; lookups will be refused")

    await session_manager.start()

    yield

    logger.info("Shutting down Clima API")
    await session_manager.stop()


app = FastAPI(
    title="Clima API",
    description="Current weather by location or city name",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    SessionMiddleware,
    session_cookie_name=settings.session_cookie_name,
    max_age_seconds=settings.session_idle_timeout_minutes * 60,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Session-ID"],
)

app.include_router(weather_router)
app.include_router(session_router)


@app.get("/")
async def root():
    """Provides basic information about the running API."""
    return {
        "message": "Clima API",
        "status": "running",
        "default_unit": settings.default_unit.value,
    }


@app.get("/health")
async def health_check():
    """Performs a health check of the API."""
    return {
        "status": "healthy",
        "api_key_configured": bool(settings.openweather_api_key),
        "active_sessions": session_manager.active_sessions,
    }


@app.get("/sessions")
async def get_sessions():
    """(Admin) Gets information about all active sessions."""
    return session_manager.get_session_info()

"""Application configuration management using Pydantic's BaseSettings."""

from pydantic import BaseModel
from pydantic_settings import BaseSettings
from typing import Optional

from clima.models.weather import TemperatureUnit


class LookupConfig(BaseModel):
    """Everything the lookup service needs to talk to the weather endpoint."""

    endpoint: str
    api_key: Optional[str] = None
    timeout_seconds: float = 10.0


class Settings(BaseSettings):
    """Defines all configuration settings for the API, loaded from .env file."""

    # API Keys
    openweather_api_key: Optional[str] = None

    # App settings
    debug: bool = True
    log_level: str = "INFO"

    # OpenWeather settings
    openweather_url: str = "https://api.openweathermap.org/data/2.5/weather"
    request_timeout_seconds: float = 10.0

    # Display settings
    default_unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT

    # Session settings
    session_cookie_name: str = "clima_session_id"
    session_idle_timeout_minutes: int = 30

    class Config:
        """Pydantic model configuration."""

        env_file = ".env"

    def lookup_config(self) -> LookupConfig:
        """Builds the config struct handed to the lookup service."""
        return LookupConfig(
            endpoint=self.openweather_url,
            api_key=self.openweather_api_key,
            timeout_seconds=self.request_timeout_seconds,
        )


settings = Settings()

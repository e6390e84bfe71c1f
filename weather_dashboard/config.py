# ABOUTME: Client configuration for the forecast backend and the reverse geocoder.
# ABOUTME: Loads base URLs, timeouts, and headers from the environment via python-dotenv.

import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict

DEFAULT_WEATHER_API_URL = "http://localhost:8000"
DEFAULT_GEOCODER_URL = "https://nominatim.openstreetmap.org"
DEFAULT_USER_AGENT = "WeatherApp/1.0"

FORECAST_TIMEOUT_MS = 20_000
GEOCODER_TIMEOUT_MS = 10_000


class ClientConfig(BaseModel):
    """Connection settings for one HTTP backend."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    timeout_ms: int
    headers: dict[str, str] = {}

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


class Settings(BaseModel):
    """Configuration for both backends used by the dashboard."""

    model_config = ConfigDict(frozen=True)

    forecast: ClientConfig
    geocoder: ClientConfig


def forecast_config(base_url: str = DEFAULT_WEATHER_API_URL, timeout_ms: int = FORECAST_TIMEOUT_MS) -> ClientConfig:
    return ClientConfig(
        base_url=base_url,
        timeout_ms=timeout_ms,
        headers={"Content-Type": "application/json", "Accept": "application/json"},
    )


def geocoder_config(
    base_url: str = DEFAULT_GEOCODER_URL,
    timeout_ms: int = GEOCODER_TIMEOUT_MS,
    user_agent: str = DEFAULT_USER_AGENT,
) -> ClientConfig:
    # Nominatim's usage policy requires an identifying User-Agent
    return ClientConfig(
        base_url=base_url,
        timeout_ms=timeout_ms,
        headers={"Accept": "application/json", "User-Agent": user_agent},
    )


def load_settings() -> Settings:
    """Build Settings from the environment, reading a .env file from the working directory first."""
    load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        forecast=forecast_config(
            base_url=os.environ.get("WEATHER_API_URL") or DEFAULT_WEATHER_API_URL,
            timeout_ms=int(os.environ.get("WEATHER_API_TIMEOUT_MS", FORECAST_TIMEOUT_MS)),
        ),
        geocoder=geocoder_config(
            base_url=os.environ.get("GEOCODER_URL") or DEFAULT_GEOCODER_URL,
            timeout_ms=int(os.environ.get("GEOCODER_TIMEOUT_MS", GEOCODER_TIMEOUT_MS)),
            user_agent=os.environ.get("GEOCODER_USER_AGENT") or DEFAULT_USER_AGENT,
        ),
    )

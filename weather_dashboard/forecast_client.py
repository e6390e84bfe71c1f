# ABOUTME: Client for the forecast backend's city and coordinate endpoints.
# ABOUTME: Reshapes responses into Forecast models and enriches coordinate lookups with a geocoded place name.

import asyncio
import logging

import httpx
from pydantic import ValidationError

from weather_dashboard.config import ClientConfig, forecast_config
from weather_dashboard.deps import create_http_client
from weather_dashboard.errors import ForecastAPIError, ForecastConnectionError, ForecastResponseError
from weather_dashboard.geocode_client import GeocodeClient
from weather_dashboard.models import Forecast, Units

logger = logging.getLogger(__name__)

CITY_PATH = "/api/weather/forecast/city"
COORDINATES_PATH = "/api/weather/forecast/coordinates"


class ForecastClient:
    def __init__(
        self,
        config: ClientConfig | None = None,
        geocoder: GeocodeClient | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config or forecast_config()
        self.geocoder = geocoder or GeocodeClient()
        self.http_client = http_client or create_http_client(self.config)

    async def forecast_by_city(self, city: str, units: Units = Units.METRIC) -> Forecast:
        """Fetch the forecast for a city name."""
        return await self._fetch(CITY_PATH, {"city": city, "units": Units(units).value})

    async def forecast_by_coordinates(self, lat: float, lon: float, units: Units = Units.METRIC) -> Forecast:
        """Fetch the forecast for a coordinate pair, naming the place via reverse geocoding.

        The geocode lookup and the forecast request run concurrently. A geocoding failure
        only leaves the backend's place name in place; a forecast failure propagates.
        """
        lookup = asyncio.create_task(self.geocoder.lookup(lat, lon))
        try:
            forecast = await self._fetch(COORDINATES_PATH, {"lat": lat, "lon": lon, "units": Units(units).value})
        except BaseException:
            lookup.cancel()
            raise

        result = await lookup
        if result.place is None:
            return forecast
        return forecast.with_place(result.place)

    async def _fetch(self, path: str, params: dict) -> Forecast:
        try:
            resp = await self.http_client.get(path, params=params)
        except httpx.TimeoutException as e:
            logger.exception("Forecast request to %s timed out", path)
            raise ForecastConnectionError(
                f"Request to the weather server timed out after {self.config.timeout_seconds:g}s", timed_out=True
            ) from e
        except httpx.HTTPError as e:
            logger.exception("Forecast request to %s failed", path)
            raise ForecastConnectionError(f"Could not connect to the weather server: {e}") from e

        if resp.is_error:
            logger.error("Forecast backend returned HTTP %s for %s", resp.status_code, path)
            raise ForecastAPIError(resp.status_code, _error_message(resp))

        try:
            return Forecast.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            logger.exception("Forecast backend returned an invalid body for %s", path)
            raise ForecastResponseError() from e

    async def aclose(self) -> None:
        await self.http_client.aclose()
        await self.geocoder.aclose()


def _error_message(resp: httpx.Response) -> str | None:
    """Extract the human-readable message from a backend error body, if it carries one."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    message = body.get("error") or body.get("detail")
    return message if isinstance(message, str) else None

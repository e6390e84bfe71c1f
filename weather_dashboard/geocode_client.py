# ABOUTME: Reverse-geocoding client for the Nominatim API.
# ABOUTME: Resolves coordinates to a place name; failures are absorbed into a GeocodeResult.

import logging

import httpx
from pydantic import ValidationError

from weather_dashboard.config import ClientConfig, geocoder_config
from weather_dashboard.deps import create_http_client
from weather_dashboard.models import GeocodeResult, NominatimAddress, NominatimResponse, PlaceDescriptor

logger = logging.getLogger(__name__)

REVERSE_PATH = "/reverse"

# City/town level detail
ZOOM_LEVEL = 10

UNKNOWN_LOCATION = "Unknown Location"

NAME_FIELDS = ("city", "town", "village", "county")


def pick_display_name(address: NominatimAddress) -> str:
    """Return the first non-empty of city, town, village, county, else a placeholder."""
    for key in NAME_FIELDS:
        value = getattr(address, key)
        if value:
            return value
    return UNKNOWN_LOCATION


def parse_place(data: object) -> PlaceDescriptor:
    """Build a PlaceDescriptor from a Nominatim reverse response.

    Coordinates come from the response, since Nominatim may snap to a resolved point.
    """
    record = NominatimResponse.model_validate(data)
    return PlaceDescriptor(
        name=pick_display_name(record.address),
        country=record.address.country,
        state=record.address.state,
        lat=record.lat,
        lon=record.lon,
    )


class GeocodeClient:
    def __init__(self, config: ClientConfig | None = None, http_client: httpx.AsyncClient | None = None):
        self.config = config or geocoder_config()
        self.http_client = http_client or create_http_client(self.config)

    async def lookup(self, lat: float, lon: float) -> GeocodeResult:
        """Reverse-geocode a coordinate pair without ever raising."""
        try:
            resp = await self.http_client.get(
                REVERSE_PATH,
                params={"lat": lat, "lon": lon, "format": "json", "zoom": ZOOM_LEVEL, "addressdetails": 1},
            )
            resp.raise_for_status()
            place = parse_place(resp.json())
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers both JSONDecodeError and pydantic's ValidationError
            reason = _describe(e)
            logger.warning("Reverse geocoding failed for (%s, %s): %s", lat, lon, reason)
            return GeocodeResult(error=reason)
        return GeocodeResult(place=place)

    async def resolve_place(self, lat: float, lon: float) -> PlaceDescriptor | None:
        return (await self.lookup(lat, lon)).place

    async def aclose(self) -> None:
        await self.http_client.aclose()


def _describe(error: Exception) -> str:
    if isinstance(error, httpx.TimeoutException):
        return "request timed out"
    if isinstance(error, httpx.HTTPStatusError):
        return f"geocoder returned HTTP {error.response.status_code}"
    if isinstance(error, httpx.HTTPError):
        return f"transport error: {error}"
    if isinstance(error, ValidationError):
        return "unexpected address record"
    return f"malformed response: {error}"

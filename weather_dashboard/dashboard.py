# ABOUTME: Dashboard session state: search box text, last forecast, units, loading flags, and errors.
# ABOUTME: Drives search, locate, unit toggle, and refetch, discarding responses superseded by newer requests.

import logging
from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass, field

from weather_dashboard.errors import ForecastConnectionError, ForecastError
from weather_dashboard.forecast_client import ForecastClient
from weather_dashboard.formatting import (
    default_icon_url,
    format_date,
    format_speed,
    format_temperature,
    format_temperature_range,
    icon_url,
    wind_direction,
)
from weather_dashboard.models import DailyForecast, Forecast, HourlyForecast, Units

logger = logging.getLogger(__name__)

SEARCH_FAILED = "Failed to fetch weather data"
LOCATE_FAILED = "Could not get weather for your location. Please try searching by city name instead."
LOCATE_TIMED_OUT = (
    "Connection timed out. The weather server might be slow or unavailable. Try searching by city name instead."
)
REFETCH_FAILED = "Failed to update weather data"

OUTLOOK_DAYS = 3
PLACEHOLDER_OUTLOOK = (("Tomorrow", "clouds"), ("Day After", "clear"), ("In 3 Days", "rain"))


@dataclass(frozen=True)
class Locator:
    """The best available way to fetch the current location again."""

    lat: float | None = None
    lon: float | None = None
    city: str | None = None

    @property
    def by_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None


@dataclass(frozen=True)
class OutlookCard:
    label: str
    icon_url: str
    description: str
    temperature: str


@dataclass
class DashboardSession:
    """Presentation state for one dashboard viewer.

    Every fetch takes a generation number. When a response arrives after a newer fetch
    has started, it is dropped so an outdated forecast never replaces a newer one.
    """

    client: ForecastClient
    units: Units = Units.METRIC
    city: str = ""
    forecast: Forecast | None = None
    error: str | None = None
    loading: bool = False
    geo_loading: bool = False
    _generation: int = field(default=0, repr=False)

    async def search(self, city: str) -> None:
        self.city = city
        if not city.strip():
            return
        await self._run(
            lambda: self.client.forecast_by_city(city, self.units),
            by_coordinates=False,
            describe=_search_error,
        )

    async def locate(self, lat: float, lon: float) -> None:
        forecast = await self._run(
            lambda: self.client.forecast_by_coordinates(lat, lon, self.units),
            by_coordinates=True,
            describe=_locate_error,
        )
        if forecast is not None and forecast.city_info.name:
            self.city = forecast.city_info.name

    def location_failed(self, message: str) -> None:
        """Record that the device could not provide a position."""
        self._generation += 1
        self.loading = self.geo_loading = False
        self.error = f"Error getting location: {message}"

    async def toggle_units(self) -> None:
        self.units = self.units.toggled()
        await self.refetch()

    def locator(self) -> Locator | None:
        """Prefer the last forecast's coordinates; fall back to the search box text."""
        if self.forecast is not None:
            info = self.forecast.city_info
            return Locator(lat=info.lat, lon=info.lon)
        if self.city.strip():
            return Locator(city=self.city)
        return None

    async def refetch(self) -> None:
        self.error = None
        locator = self.locator()
        if locator is None:
            return
        if locator.by_coordinates:
            await self._run(
                lambda: self.client.forecast_by_coordinates(locator.lat, locator.lon, self.units),
                by_coordinates=True,
                describe=_refetch_error,
            )
        else:
            await self._run(
                lambda: self.client.forecast_by_city(locator.city, self.units),
                by_coordinates=False,
                describe=_refetch_error,
            )

    async def _run(
        self,
        fetch: Callable[[], Awaitable[Forecast]],
        by_coordinates: bool,
        describe: Callable[[ForecastError], str],
    ) -> Forecast | None:
        self._generation += 1
        generation = self._generation
        self.error = None
        # Only the newest request owns the loading flags
        self.loading = self.geo_loading = False
        self._set_loading(by_coordinates, True)
        try:
            forecast = await fetch()
        except ForecastError as e:
            if generation != self._generation:
                logger.debug("Dropping failure from superseded request %d", generation)
                return None
            logger.error("Weather fetch failed: %s", e.message)
            self.error = describe(e)
            return None
        finally:
            if generation == self._generation:
                self._set_loading(by_coordinates, False)

        if generation != self._generation:
            logger.debug("Dropping response from superseded request %d", generation)
            return None
        self.forecast = forecast
        return forecast

    def _set_loading(self, by_coordinates: bool, value: bool) -> None:
        if by_coordinates:
            self.geo_loading = value
        else:
            self.loading = value

    @property
    def busy(self) -> bool:
        return self.loading or self.geo_loading

    @property
    def current_day(self) -> DailyForecast | None:
        if self.forecast is None or not self.forecast.daily_forecasts:
            return None
        return self.forecast.daily_forecasts[0]

    @property
    def current_hour(self) -> HourlyForecast | None:
        day = self.current_day
        if day is None or not day.hourly_forecasts:
            return None
        return day.hourly_forecasts[0]

    @property
    def humidity(self) -> float | None:
        hour = self.current_hour
        return hour.main.humidity if hour else None

    @property
    def wind_speed(self) -> float | None:
        hour = self.current_hour
        return hour.wind.speed if hour else None

    @property
    def wind_deg(self) -> float | None:
        hour = self.current_hour
        return hour.wind.deg if hour else None

    def outlook(self) -> list[OutlookCard]:
        """Cards for the days after today, or placeholders before any forecast loads."""
        if self.forecast is None:
            return [
                OutlookCard(label, default_icon_url(condition), condition.title(), format_temperature(None, self.units))
                for label, condition in PLACEHOLDER_OUTLOOK
            ]
        days = self.forecast.daily_forecasts[1 : 1 + OUTLOOK_DAYS]
        return [
            OutlookCard(
                label="Tomorrow" if i == 0 else day.day_of_week,
                icon_url=icon_url(day.weather_icon),
                description=day.weather_description,
                temperature=format_temperature_range(day.min_temp, day.max_temp, self.units),
            )
            for i, day in enumerate(days)
        ]

    def view(self) -> dict:
        """Flatten the session into the values the page renders."""
        day = self.current_day
        hour = self.current_hour
        return {
            "location": self.forecast.city_info.name if self.forecast else "Location",
            "date": format_date(day.date) if day else "",
            "icon_url": icon_url(day.weather_icon) if day else default_icon_url(),
            "description": day.weather_description if day else "Unknown",
            "temperature": format_temperature(hour.main.temp if hour else None, self.units),
            "wind_speed": format_speed(self.wind_speed, self.units),
            "wind_direction": wind_direction(self.wind_deg),
            "humidity": self.humidity,
            "outlook": [asdict(card) for card in self.outlook()],
        }


def _search_error(error: ForecastError) -> str:
    return error.detail or SEARCH_FAILED


def _locate_error(error: ForecastError) -> str:
    if isinstance(error, ForecastConnectionError) and error.timed_out:
        return LOCATE_TIMED_OUT
    return error.detail or LOCATE_FAILED


def _refetch_error(error: ForecastError) -> str:
    return error.detail or REFETCH_FAILED

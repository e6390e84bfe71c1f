# ABOUTME: Display helpers for the dashboard: compass points, icons, units, and date labels.
# ABOUTME: Pure functions shared by the session view and the HTML page.

import math
from datetime import date, datetime

from weather_dashboard.models import Units

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")

ICON_URL = "https://openweathermap.org/img/wn/{code}@2x.png"

DEFAULT_ICONS = {"clear": "01d", "clouds": "03d", "rain": "10d"}


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def wind_direction(deg: float | None) -> str:
    """Map a wind bearing in degrees to one of eight compass points."""
    if deg is None:
        return "N/A"
    sector = round_half_up((deg % 360) / 45)
    return COMPASS_POINTS[sector % len(COMPASS_POINTS)]


def icon_url(code: str | None) -> str:
    if not code:
        return ""
    return ICON_URL.format(code=code)


def default_icon_url(condition: str = "clear") -> str:
    """Placeholder icon shown before any forecast is loaded."""
    return ICON_URL.format(code=DEFAULT_ICONS.get(condition, "01d"))


def temperature_symbol(units: Units) -> str:
    return "°C" if Units(units) is Units.METRIC else "°F"


def speed_unit(units: Units) -> str:
    return "km/h" if Units(units) is Units.METRIC else "mph"


def format_temperature(value: float | None, units: Units) -> str:
    if value is None:
        return f"-- {temperature_symbol(units)}"
    return f"{round_half_up(value)}{temperature_symbol(units)}"


def format_temperature_range(low: float, high: float, units: Units) -> str:
    return f"{round_half_up(low)}-{round_half_up(high)} {temperature_symbol(units)}"


def format_speed(value: float | None, units: Units) -> str:
    if value is None:
        return f"-- {speed_unit(units)}"
    return f"{value:.1f} {speed_unit(units)}"


def format_date(value: str | None) -> str:
    """Format an ISO date as e.g. 'Jan 15'; empty input gives an empty label."""
    if not value:
        return ""
    parsed = date.fromisoformat(value[:10])
    return f"{parsed:%b} {parsed.day}"


def format_today(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"{now:%b} {now.day}, {now.year}"


def format_clock(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return now.strftime("%I:%M %p")

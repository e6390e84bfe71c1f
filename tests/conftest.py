# ABOUTME: Shared test fixtures for the weather dashboard test suite.
# ABOUTME: Provides forecast and Nominatim payload builders plus mock HTTP client helpers.

from unittest.mock import AsyncMock

import httpx
import pytest


def mock_http_client(json_data=None, status_code: int = 200, content: bytes | None = None) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient whose get() returns one canned response."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    request = httpx.Request("GET", "https://test")
    if content is not None:
        response = httpx.Response(status_code=status_code, content=content, request=request)
    else:
        response = httpx.Response(status_code=status_code, json=json_data, request=request)
    mock.get.return_value = response
    return mock


def hourly_sample(dt: int, dt_txt: str, temp: float, humidity: int = 70, deg: int = 200, rain: float | None = None) -> dict:
    sample = {
        "dt": dt,
        "main": {
            "temp": temp,
            "feels_like": temp - 1.5,
            "temp_min": temp - 0.5,
            "temp_max": temp + 0.5,
            "pressure": 1012,
            "sea_level": 1012,
            "grnd_level": 1004,
            "humidity": humidity,
            "temp_kf": 0.3,
        },
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "clouds": {"all": 75},
        "wind": {"speed": 4.6, "deg": deg, "gust": 7.9},
        "visibility": 10000,
        "pop": 0.4,
        "sys": {"pod": "d"},
        "dt_txt": dt_txt,
    }
    if rain is not None:
        sample["rain"] = {"3h": rain}
    return sample


def daily_entry(date: str, day_of_week: str, temps: list[float], start_dt: int) -> dict:
    hours = [
        hourly_sample(start_dt + i * 10800, f"{date} {(i * 3) % 24:02d}:00:00", t, rain=0.25 if i == 0 else None)
        for i, t in enumerate(temps)
    ]
    return {
        "date": date,
        "day_of_week": day_of_week,
        "avg_temp": sum(temps) / len(temps),
        "min_temp": min(temps),
        "max_temp": max(temps),
        "weather_condition": "Rain",
        "weather_description": "light rain",
        "weather_icon": "10d",
        "hourly_forecasts": hours,
    }


def forecast_payload(name: str = "Paris", country: str = "FR", lat: float = 48.8534, lon: float = 2.3488) -> dict:
    return {
        "city": {
            "id": 2988507,
            "name": name,
            "coord": {"lat": lat, "lon": lon},
            "country": country,
            "population": 2138551,
            "timezone": 3600,
            "sunrise": 1736926205,
            "sunset": 1736957871,
        },
        "daily_forecasts": [
            daily_entry("2025-01-15", "Wednesday", [12.5, 13.25, 11.0], 1736942400),
            daily_entry("2025-01-16", "Thursday", [8.0, 10.5], 1737028800),
            daily_entry("2025-01-17", "Friday", [6.5, 9.0], 1737115200),
            daily_entry("2025-01-18", "Saturday", [4.0, 7.5], 1737201600),
            daily_entry("2025-01-19", "Sunday", [5.0, 6.0], 1737288000),
        ],
        "city_info": {"name": name, "country": country, "lat": lat, "lon": lon},
    }


def nominatim_payload(address: dict, lat: str = "51.5073219", lon: str = "-0.1276474") -> dict:
    return {
        "place_id": 344385499,
        "licence": "Data © OpenStreetMap contributors, ODbL 1.0. http://osm.org/copyright",
        "osm_type": "relation",
        "osm_id": 65606,
        "lat": lat,
        "lon": lon,
        "display_name": "London, Greater London, England, United Kingdom",
        "address": address,
        "boundingbox": ["51.2867601", "51.6918741", "-0.5103751", "0.3340155"],
    }


@pytest.fixture
def paris_payload() -> dict:
    return forecast_payload()

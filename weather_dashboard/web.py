# ABOUTME: ASGI web entry point rendering the weather dashboard.
# ABOUTME: Creates a Starlette app with an HTML page and a JSON endpoint backed by a DashboardSession.

import contextlib
import logging
from pathlib import Path
from urllib.parse import urlencode

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.templating import Jinja2Templates

from weather_dashboard.config import load_settings
from weather_dashboard.dashboard import DashboardSession
from weather_dashboard.forecast_client import ForecastClient
from weather_dashboard.formatting import format_clock, format_today
from weather_dashboard.geocode_client import GeocodeClient
from weather_dashboard.models import Coordinates, Units

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


class BadQuery(ValueError):
    pass


def parse_query(request: Request) -> dict:
    """Read city, lat, lon, units and geo_error from the query string."""
    params = request.query_params
    try:
        units = Units(params.get("units", Units.METRIC.value))
    except ValueError as e:
        raise BadQuery(f"units must be 'metric' or 'imperial', got {params.get('units')!r}") from e

    lat, lon = params.get("lat"), params.get("lon")
    if (lat is None) != (lon is None):
        raise BadQuery("lat and lon must be given together")
    try:
        coords = Coordinates(latitude=lat, longitude=lon) if lat is not None else None
    except ValidationError as e:
        raise BadQuery("lat and lon must be numbers") from e

    return {"city": params.get("city", ""), "coords": coords, "units": units, "geo_error": params.get("geo_error")}


async def load_session(client: ForecastClient, query: dict) -> DashboardSession:
    session = DashboardSession(client=client, units=query["units"])
    coords = query["coords"]
    if query["geo_error"]:
        session.location_failed(query["geo_error"])
    elif coords is not None:
        await session.locate(coords.latitude, coords.longitude)
    elif query["city"]:
        await session.search(query["city"])
    return session


def toggle_link(session: DashboardSession) -> str:
    """Query string that reloads the page in the other unit system."""
    params = {"units": session.units.toggled().value}
    locator = session.locator()
    if locator is not None and locator.by_coordinates:
        params.update(lat=locator.lat, lon=locator.lon)
    elif locator is not None:
        params["city"] = locator.city
    return "?" + urlencode(params)


def render_page(request: Request, session: DashboardSession, geolocate: bool):
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "session": session,
            "view": session.view(),
            "units": session.units.value,
            "unit_label": "°C" if session.units is Units.METRIC else "°F",
            "toggle_href": toggle_link(session),
            "today": format_today(),
            "clock": format_clock(),
            "geolocate": geolocate,
        },
    )


def create_app(forecast_client: ForecastClient | None = None) -> Starlette:
    """Build the dashboard app; clients default to the environment's configuration."""
    if forecast_client is None:
        settings = load_settings()
        forecast_client = ForecastClient(settings.forecast, GeocodeClient(settings.geocoder))

    async def homepage(request: Request):
        try:
            query = parse_query(request)
        except BadQuery as e:
            return JSONResponse({"error": str(e)}, status_code=400)
        session = await load_session(forecast_client, query)
        # Geolocate on first load and when the location link is followed
        geolocate = session.forecast is None and not session.error and (
            not request.query_params or "locate" in request.query_params
        )
        return render_page(request, session, geolocate)

    async def dashboard_json(request: Request):
        try:
            query = parse_query(request)
        except BadQuery as e:
            return JSONResponse({"error": str(e)}, status_code=400)
        session = await load_session(forecast_client, query)
        return JSONResponse(
            {
                "units": session.units.value,
                "city": session.city,
                "error": session.error,
                "forecast": session.forecast.model_dump(mode="json", by_alias=True) if session.forecast else None,
                "view": session.view(),
            }
        )

    @contextlib.asynccontextmanager
    async def lifespan(app):
        yield
        logger.info("Closing weather HTTP clients")
        await forecast_client.aclose()

    return Starlette(
        routes=[Route("/", homepage), Route("/api/dashboard", dashboard_json)],
        lifespan=lifespan,
    )


app = create_app()

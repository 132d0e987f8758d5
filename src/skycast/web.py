# ABOUTME: ASGI web entry point exposing city search, current conditions and forecasts as JSON.
# ABOUTME: Builds a Starlette app whose lifespan owns the HTTP client and the selected-city state.

import logging
import unicodedata
from contextlib import asynccontextmanager

import httpx
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from skycast.config import Settings
from skycast.deps import SkycastDeps, create_http_client
from skycast.errors import (
    GENERIC_MESSAGE,
    CityNotFoundError,
    MalformedResponseError,
    describe_http_error,
    not_found_message,
)
from skycast.state import ConditionsState, SelectedCityState
from skycast.viewmodel import build_current_view
from skycast.weather_service import get_comprehensive

logger = logging.getLogger(__name__)

MAX_FORECAST_DAYS = 16
TEMPERATURE_UNITS = ("C", "F")
PRESSURE_UNITS = ("hPa", "mmHg", "inHg")


def normalize_search_term(value: str) -> str:
    """Trim, strip diacritics and lowercase a search term ("  São Paulo " -> "sao paulo")."""
    decomposed = unicodedata.normalize("NFD", value.strip())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).lower()


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def get_city(request: Request) -> JSONResponse:
    city = request.app.state.selected.city
    return JSONResponse({"city": city.model_dump(mode="json") if city else None})


async def search_city(request: Request) -> JSONResponse:
    """Resolve a user search and make it the selected city.

    The raw term is echoed in the not-found message; the geocoder receives the
    normalized term.
    """
    try:
        body = await request.json()
    except ValueError:
        return _error("Request body must be JSON", 400)
    query = body.get("query") if isinstance(body, dict) else None
    raw = query.strip() if isinstance(query, str) else ""
    if not raw:
        return _error("Enter a city name", 400)

    try:
        city = await request.app.state.selected.search(normalize_search_term(raw))
    except CityNotFoundError:
        logger.info("No geocoding match for %r", raw)
        return _error(not_found_message(raw), 404)
    if city is None:
        return JSONResponse({"city": None, "superseded": True}, status_code=409)
    return JSONResponse({"city": city.model_dump(mode="json")})


async def current_weather(request: Request) -> JSONResponse:
    unit = request.query_params.get("unit", "C")
    pressure_unit = request.query_params.get("pressure_unit", "hPa")
    if unit not in TEMPERATURE_UNITS or pressure_unit not in PRESSURE_UNITS:
        return _error("Unsupported unit", 400)

    city = request.app.state.selected.city
    if city is None:
        return JSONResponse({"city": None, "view": None, "loading": True})

    conditions: ConditionsState = request.app.state.conditions
    current = await conditions.conditions_for(city)
    if current is None:
        if conditions.city == city and conditions.has_error:
            return _error(conditions.error, 502)
        # superseded by a newer selection while fetching
        return JSONResponse({"city": city.model_dump(mode="json"), "view": None, "loading": True})

    view = build_current_view(city, current, unit=unit, pressure_unit=pressure_unit)
    return JSONResponse({"city": city.model_dump(mode="json"), "view": view.model_dump(mode="json")})


async def forecast(request: Request) -> JSONResponse:
    deps: SkycastDeps = request.app.state.deps
    city_name = request.query_params.get("city", "").strip()
    if not city_name:
        return _error("Query parameter 'city' is required", 400)
    try:
        days = int(request.query_params.get("days", deps.settings.forecast_days))
    except ValueError:
        return _error("Query parameter 'days' must be an integer", 400)
    if not 1 <= days <= MAX_FORECAST_DAYS:
        return _error(f"Query parameter 'days' must be between 1 and {MAX_FORECAST_DAYS}", 400)

    try:
        data = await get_comprehensive(deps.http_client, city_name, forecast_days=days)
    except CityNotFoundError:
        return _error(not_found_message(city_name), 404)
    return JSONResponse(data.model_dump(mode="json"))


async def _http_error_handler(request: Request, exc: httpx.HTTPError) -> JSONResponse:
    info = describe_http_error(exc)
    return JSONResponse({"error": info.message, "status": info.status}, status_code=502)


async def _malformed_handler(request: Request, exc: MalformedResponseError) -> JSONResponse:
    logger.error("Malformed upstream payload: %s", exc)
    return _error(GENERIC_MESSAGE, 502)


def create_app(settings: Settings | None = None, http_client: httpx.AsyncClient | None = None) -> Starlette:
    """Create the ASGI app. An injected http_client is used as-is and left open on shutdown."""
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: Starlette):
        client = http_client or create_http_client(settings)
        selected = SelectedCityState(client, settings)
        conditions = ConditionsState(client, selected)
        app.state.deps = SkycastDeps(http_client=client, settings=settings)
        app.state.selected = selected
        app.state.conditions = conditions
        selected.start()
        try:
            yield
        finally:
            await conditions.aclose()
            await selected.aclose()
            if http_client is None:
                await client.aclose()

    return Starlette(
        routes=[
            Route("/api/city", get_city, methods=["GET"]),
            Route("/api/search", search_city, methods=["POST"]),
            Route("/api/current", current_weather, methods=["GET"]),
            Route("/api/forecast", forecast, methods=["GET"]),
        ],
        exception_handlers={
            httpx.HTTPError: _http_error_handler,
            MalformedResponseError: _malformed_handler,
        },
        lifespan=lifespan,
    )


app = create_app()

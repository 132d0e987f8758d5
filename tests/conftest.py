# ABOUTME: Shared test fixtures for the skycast test suite.
# ABOUTME: Provides Open-Meteo sample payloads and a URL-routed mock httpx.AsyncClient.

from unittest.mock import AsyncMock

import httpx
import pytest

from skycast.weather_service import AIR_QUALITY_URL, FORECAST_URL, GEOCODING_URL

SAO_PAULO = {
    "latitude": -23.5475,
    "longitude": -46.63611,
    "name": "São Paulo",
    "country": "Brazil",
    "country_code": "BR",
    "admin1": "São Paulo",
}

CURRENT_WEATHER = {
    "latitude": -23.5,
    "longitude": -46.625,
    "timezone": "GMT",
    "current": {
        "time": "2025-01-15T12:00",
        "temperature_2m": 25.4,
        "relative_humidity_2m": 62,
        "apparent_temperature": 27.6,
        "is_day": 1,
        "precipitation": 0.0,
        "rain": 0.0,
        "showers": 0.0,
        "snowfall": 0.0,
        "weather_code": 2,
        "cloud_cover": 40,
        "pressure_msl": 1013.2,
        "surface_pressure": 925.1,
        "wind_speed_10m": 11.6,
        "wind_direction_10m": 135,
        "wind_gusts_10m": 24.5,
    },
}

DETAILED_FORECAST = {
    "latitude": -23.5,
    "longitude": -46.625,
    "timezone": "America/Sao_Paulo",
    "hourly": {
        "time": ["2025-01-15T00:00", "2025-01-15T01:00"],
        "temperature_2m": [21.3, 20.8],
        "apparent_temperature": [22.0, 21.1],
        "weather_code": [3, 61],
    },
    "daily": {
        "time": ["2025-01-15"],
        "temperature_2m_max": [28.1],
        "temperature_2m_min": [19.4],
        "sunrise": ["2025-01-15T05:30"],
        "uv_index_max": [11.2],
    },
}

CURRENT_AIR_QUALITY = {
    "latitude": -23.5,
    "longitude": -46.6,
    "current": {
        "time": "2025-01-15T12:00",
        "european_aqi": 38,
        "us_aqi": 55,
        "pm10": 22.1,
        "pm2_5": 12.4,
        "uv_index": 7.3,
    },
}

DETAILED_AIR_QUALITY = {
    "latitude": -23.5,
    "longitude": -46.6,
    "timezone": "America/Sao_Paulo",
    "hourly": {
        "time": ["2025-01-15T00:00", "2025-01-15T01:00"],
        "european_aqi": [30, 34],
        "us_aqi": [48, 52],
    },
}


def json_response(url: str, payload: dict, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code=status_code, json=payload, request=httpx.Request("GET", url))


def route_client(routes: dict) -> AsyncMock:
    """Create a mock httpx.AsyncClient whose get() answers by URL.

    A route value may be a payload dict, an exception instance to raise, or an
    async callable (url, params) returning either.
    """
    mock = AsyncMock(spec=httpx.AsyncClient)

    async def get(url, params=None, **kwargs):
        handler = routes[url]
        if callable(handler):
            handler = await handler(url, params)
        if isinstance(handler, Exception):
            raise handler
        if isinstance(handler, httpx.Response):
            return handler
        return json_response(url, handler)

    mock.get.side_effect = get
    return mock


def calls_to(client: AsyncMock, url: str) -> list[dict]:
    """Query params of every get() issued to `url`."""
    return [call.kwargs["params"] for call in client.get.call_args_list if call.args[0] == url]


@pytest.fixture
def weather_client() -> AsyncMock:
    """Client where every endpoint succeeds; forecast answers depend on the requested blocks."""

    async def forecast(url, params):
        return CURRENT_WEATHER if "current" in params else DETAILED_FORECAST

    async def air_quality(url, params):
        return CURRENT_AIR_QUALITY if "current" in params else DETAILED_AIR_QUALITY

    return route_client(
        {
            GEOCODING_URL: {"results": [SAO_PAULO]},
            FORECAST_URL: forecast,
            AIR_QUALITY_URL: air_quality,
        }
    )

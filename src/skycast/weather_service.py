# ABOUTME: Service layer for Open-Meteo geocoding, forecast and air-quality calls.
# ABOUTME: Chains geocoding into concurrent forecast/air-quality fetches and parses payloads into models.

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from skycast.errors import CityNotFoundError, MalformedResponseError
from skycast.models import (
    AirQualityResponse,
    ComprehensiveWeatherData,
    CurrentConditions,
    ResolvedCity,
    WeatherResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
AIR_QUALITY_URL = "https://air-quality-api.open-meteo.com/v1/air-quality"

# The air-quality API only forecasts this many days ahead.
AIR_QUALITY_MAX_FORECAST_DAYS = 5

CURRENT_WEATHER_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "is_day",
    "precipitation",
    "rain",
    "showers",
    "snowfall",
    "weather_code",
    "cloud_cover",
    "pressure_msl",
    "surface_pressure",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
)

HOURLY_WEATHER_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation_probability",
    "precipitation",
    "rain",
    "showers",
    "snowfall",
    "weather_code",
    "pressure_msl",
    "surface_pressure",
    "cloud_cover",
    "cloud_cover_low",
    "cloud_cover_mid",
    "cloud_cover_high",
    "visibility",
    "evapotranspiration",
    "et0_fao_evapotranspiration",
    "vapour_pressure_deficit",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
    "uv_index",
    "uv_index_clear_sky",
    "is_day",
    "shortwave_radiation",
    "direct_radiation",
    "diffuse_radiation",
    "direct_normal_irradiance",
    "sunshine_duration",
    "daylight_duration",
)

DAILY_WEATHER_FIELDS = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "apparent_temperature_max",
    "apparent_temperature_min",
    "sunrise",
    "sunset",
    "daylight_duration",
    "sunshine_duration",
    "uv_index_max",
    "uv_index_clear_sky_max",
    "precipitation_sum",
    "rain_sum",
    "showers_sum",
    "snowfall_sum",
    "precipitation_hours",
    "precipitation_probability_max",
    "wind_speed_10m_max",
    "wind_gusts_10m_max",
    "wind_direction_10m_dominant",
    "shortwave_radiation_sum",
    "et0_fao_evapotranspiration",
)

CURRENT_AIR_QUALITY_FIELDS = (
    "european_aqi",
    "us_aqi",
    "pm10",
    "pm2_5",
    "carbon_monoxide",
    "nitrogen_dioxide",
    "sulphur_dioxide",
    "ozone",
    "aerosol_optical_depth",
    "dust",
    "uv_index",
    "uv_index_clear_sky",
)

HOURLY_AIR_QUALITY_FIELDS = (
    "pm10",
    "pm2_5",
    "carbon_monoxide",
    "nitrogen_dioxide",
    "sulphur_dioxide",
    "ozone",
    "aerosol_optical_depth",
    "dust",
    "uv_index",
    "uv_index_clear_sky",
    "european_aqi",
    "european_aqi_pm2_5",
    "european_aqi_pm10",
    "european_aqi_nitrogen_dioxide",
    "european_aqi_ozone",
    "european_aqi_sulphur_dioxide",
    "us_aqi",
    "us_aqi_pm2_5",
    "us_aqi_pm10",
    "us_aqi_nitrogen_dioxide",
    "us_aqi_ozone",
    "us_aqi_sulphur_dioxide",
    "us_aqi_carbon_monoxide",
)

CURRENT_WEATHER_PARAMS = ",".join(CURRENT_WEATHER_FIELDS)
HOURLY_WEATHER_PARAMS = ",".join(HOURLY_WEATHER_FIELDS)
DAILY_WEATHER_PARAMS = ",".join(DAILY_WEATHER_FIELDS)
CURRENT_AIR_QUALITY_PARAMS = ",".join(CURRENT_AIR_QUALITY_FIELDS)
HOURLY_AIR_QUALITY_PARAMS = ",".join(HOURLY_AIR_QUALITY_FIELDS)


async def resolve_city(client: httpx.AsyncClient, name: str) -> ResolvedCity:
    """Geocode a city name and return the provider's first match.

    The name is sent as given. An empty result list, a null one and a missing
    `results` key all raise the same CityNotFoundError.
    """
    data = await _get_json(client, GEOCODING_URL, {"name": name})

    results = data.get("results")
    if not results:
        raise CityNotFoundError(name)

    city = _parse(ResolvedCity, results[0], "geocoding")
    logger.debug("Resolved %r to %s (%s, %s)", name, city.display_name, city.latitude, city.longitude)
    return city


async def get_current_weather(client: httpx.AsyncClient, latitude: float, longitude: float) -> WeatherResponse:
    """Fetch the instantaneous weather reading for a location."""
    data = await _get_json(
        client,
        FORECAST_URL,
        {
            "latitude": latitude,
            "longitude": longitude,
            "current": CURRENT_WEATHER_PARAMS,
        },
    )
    return _parse(WeatherResponse, data, "forecast")


async def get_detailed_forecast(
    client: httpx.AsyncClient,
    latitude: float,
    longitude: float,
    days: int = 7,
) -> WeatherResponse:
    """Fetch hourly and daily forecast series for `days` days in the location's own timezone."""
    data = await _get_json(
        client,
        FORECAST_URL,
        {
            "latitude": latitude,
            "longitude": longitude,
            "hourly": HOURLY_WEATHER_PARAMS,
            "daily": DAILY_WEATHER_PARAMS,
            "forecast_days": days,
            "timezone": "auto",
        },
    )
    return _parse(WeatherResponse, data, "forecast")


async def get_current_air_quality(
    client: httpx.AsyncClient, latitude: float, longitude: float
) -> AirQualityResponse:
    """Fetch the instantaneous air-quality reading for a location."""
    data = await _get_json(
        client,
        AIR_QUALITY_URL,
        {
            "latitude": latitude,
            "longitude": longitude,
            "current": CURRENT_AIR_QUALITY_PARAMS,
        },
    )
    return _parse(AirQualityResponse, data, "air-quality")


async def get_detailed_air_quality(
    client: httpx.AsyncClient,
    latitude: float,
    longitude: float,
    days: int = 5,
) -> AirQualityResponse:
    """Fetch hourly air-quality series. Callers composing with a weather forecast clamp `days`."""
    data = await _get_json(
        client,
        AIR_QUALITY_URL,
        {
            "latitude": latitude,
            "longitude": longitude,
            "hourly": HOURLY_AIR_QUALITY_PARAMS,
            "forecast_days": days,
            "timezone": "auto",
        },
    )
    return _parse(AirQualityResponse, data, "air-quality")


async def get_current_conditions(
    client: httpx.AsyncClient, latitude: float, longitude: float
) -> CurrentConditions:
    """Fetch current weather and current air quality concurrently.

    Both must succeed; the first failure cancels the other request and is re-raised.
    """
    weather, air_quality = await _run_together(
        get_current_weather(client, latitude, longitude),
        get_current_air_quality(client, latitude, longitude),
    )
    return CurrentConditions(weather=weather, air_quality=air_quality)


async def get_comprehensive(
    client: httpx.AsyncClient,
    city_name: str,
    forecast_days: int = 7,
) -> ComprehensiveWeatherData:
    """Resolve a city, then fetch its forecast and air quality concurrently.

    No forecast or air-quality request is issued unless geocoding succeeds.
    The air-quality horizon is min(forecast_days, 5) whatever the weather horizon.
    """
    location = await resolve_city(client, city_name)
    air_quality_days = min(forecast_days, AIR_QUALITY_MAX_FORECAST_DAYS)
    logger.info(
        "Fetching %d-day forecast and %d-day air quality for %s",
        forecast_days,
        air_quality_days,
        location.display_name,
    )
    weather, air_quality = await _run_together(
        get_detailed_forecast(client, location.latitude, location.longitude, forecast_days),
        get_detailed_air_quality(client, location.latitude, location.longitude, air_quality_days),
    )
    return ComprehensiveWeatherData(location=location, weather=weather, air_quality=air_quality)


async def _get_json(client: httpx.AsyncClient, url: str, params: dict[str, Any]) -> dict:
    resp = await client.get(url, params=params)
    resp.raise_for_status()
    try:
        data = resp.json()
    except ValueError as e:
        raise MalformedResponseError(f"Response from {url} is not valid JSON") from e
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Response from {url} is not a JSON object")
    return data


def _parse(model: type[ModelT], data: Any, source: str) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(f"Unexpected {source} payload: {e}") from e


async def _run_together(*aws: Awaitable) -> list:
    """Await several operations concurrently and return their results in order.

    Fails as soon as any of them fails: the remaining tasks are cancelled and
    awaited before the error propagates, so nothing is left running.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        for task in tasks:
            if task in done and task.exception() is not None:
                raise task.exception()
        return [task.result() for task in tasks]
    finally:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

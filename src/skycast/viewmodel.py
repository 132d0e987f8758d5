# ABOUTME: Builds the display-ready current-weather view from a city and its current conditions.
# ABOUTME: Combines normalizer projections with interpreter classifications; missing values become placeholders.

from pydantic import BaseModel

from skycast.interpreters import (
    PressureUnit,
    TemperatureUnit,
    air_quality_level,
    convert_pressure,
    format_temperature,
    round_half_up,
    uv_index_level,
    weather_description,
    weather_emoji,
    weather_icon,
    wind_direction,
)
from skycast.models import AirQualityLevel, CurrentConditions, ResolvedCity, UVIndexLevel
from skycast.normalize import extract_air_quality_index, extract_temperature, extract_wind

LOADING = "Loading..."
NO_DATA = "--"


class CurrentWeatherView(BaseModel):
    """Strings and classifications the current-weather card renders."""

    location: str
    temperature: str
    apparent_temperature: str
    min_temperature: str
    max_temperature: str
    description: str
    icon: str
    emoji: str
    humidity: str
    wind_speed: str
    wind_direction: str
    wind_gusts: str
    pressure: str
    cloud_cover: str
    european_aqi: float | None = None
    air_quality: AirQualityLevel | None = None
    uv_index: float | None = None
    uv_level: UVIndexLevel | None = None


def build_current_view(
    city: ResolvedCity | None,
    conditions: CurrentConditions | None,
    unit: TemperatureUnit = "C",
    pressure_unit: PressureUnit = "hPa",
) -> CurrentWeatherView:
    """Assemble the card view. Speeds are shown in the km/h the forecast API returns by default."""
    location = city.display_name if city else LOADING
    current = conditions.weather.current if conditions else None

    temperatures = extract_temperature(conditions.weather) if conditions else None
    temperature = temperatures.temperature if temperatures else None
    apparent = temperatures.apparent_temperature if temperatures else None

    min_temperature = max_temperature = f"{NO_DATA}°"
    if temperature is not None and apparent is not None:
        low, high = sorted((round_half_up(temperature), round_half_up(apparent)))
        min_temperature = format_temperature(low, unit)
        max_temperature = format_temperature(high, unit)

    wind = extract_wind(conditions.weather) if conditions else None
    pressure = NO_DATA
    if current is not None and current.pressure_msl is not None:
        value = convert_pressure(current.pressure_msl, pressure_unit)
        if pressure_unit == "hPa":
            value = round_half_up(value)
        pressure = f"{value} {pressure_unit}"

    if current is not None and current.weather_code is not None:
        description = weather_description(current.weather_code)
        icon = weather_icon(current.weather_code, current.is_day)
        emoji = weather_emoji(current.weather_code, current.is_day)
    else:
        description, icon, emoji = LOADING, "help", ""

    aqi = extract_air_quality_index(conditions.air_quality) if conditions else None
    european_aqi = aqi.european_aqi if aqi else None
    aq_current = conditions.air_quality.current if conditions else None
    uv_index = aq_current.uv_index if aq_current else None

    return CurrentWeatherView(
        location=location,
        temperature=format_temperature(temperature, unit) if temperature is not None else f"{NO_DATA}°",
        apparent_temperature=format_temperature(apparent, unit) if apparent is not None else f"{NO_DATA}°",
        min_temperature=min_temperature,
        max_temperature=max_temperature,
        description=description,
        icon=icon,
        emoji=emoji,
        humidity=_percent(current.relative_humidity_2m if current else None),
        wind_speed=_speed(wind.speed if wind else None),
        wind_direction=_bearing(wind.direction if wind else None),
        wind_gusts=_speed(wind.gusts if wind else None),
        pressure=pressure,
        cloud_cover=_percent(current.cloud_cover if current else None),
        european_aqi=european_aqi,
        air_quality=air_quality_level(european_aqi) if european_aqi is not None else None,
        uv_index=uv_index,
        uv_level=uv_index_level(uv_index) if uv_index is not None else None,
    )


def _percent(value: float | None) -> str:
    return f"{NO_DATA}%" if value is None else f"{round_half_up(value)}%"


def _speed(value: float | None) -> str:
    return f"{NO_DATA} km/h" if value is None else f"{round_half_up(value)} km/h"


def _bearing(value: float | None) -> str:
    if value is None:
        return f"{NO_DATA}°"
    return f"{round_half_up(value)}° {wind_direction(value)}"

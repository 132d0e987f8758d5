# ABOUTME: Narrow projections over parsed forecast, air-quality and geocoding models.
# ABOUTME: Each extractor returns None when its source block is absent and never converts units.

from skycast.models import (
    AirQualityIndex,
    AirQualityResponse,
    Coordinates,
    HourlyTemperatureSeries,
    LocationInfo,
    ResolvedCity,
    TemperaturePair,
    WeatherResponse,
    WindReading,
)


def extract_temperature(weather: WeatherResponse) -> TemperaturePair | None:
    """Current air and apparent temperature, in the units the API returned."""
    current = weather.current
    if current is None:
        return None
    return TemperaturePair(temperature=current.temperature_2m, apparent_temperature=current.apparent_temperature)


def extract_wind(weather: WeatherResponse) -> WindReading | None:
    """Current wind speed, bearing and gusts."""
    current = weather.current
    if current is None:
        return None
    return WindReading(
        speed=current.wind_speed_10m,
        direction=current.wind_direction_10m,
        gusts=current.wind_gusts_10m,
    )


def extract_hourly_temperature(weather: WeatherResponse) -> HourlyTemperatureSeries | None:
    """Hourly temperature and apparent temperature aligned with the time axis.

    A column the API did not return is padded with None so that index i still
    refers to time[i] in every list.
    """
    hourly = weather.hourly
    if hourly is None:
        return None
    return HourlyTemperatureSeries(
        time=list(hourly.time),
        temperature=_column(hourly.temperature_2m, len(hourly.time)),
        apparent_temperature=_column(hourly.apparent_temperature, len(hourly.time)),
    )


def extract_air_quality_index(air_quality: AirQualityResponse) -> AirQualityIndex | None:
    """Current European and US AQI values."""
    current = air_quality.current
    if current is None:
        return None
    return AirQualityIndex(european_aqi=current.european_aqi, us_aqi=current.us_aqi)


def extract_location_info(city: ResolvedCity) -> LocationInfo:
    return LocationInfo(
        name=city.name,
        country=city.country,
        country_code=city.country_code,
        admin1=city.admin1,
    )


def extract_coordinates(city: ResolvedCity) -> Coordinates:
    return Coordinates(latitude=city.latitude, longitude=city.longitude)


def _column(values: list | None, length: int) -> list:
    if values is None:
        return [None] * length
    return list(values)

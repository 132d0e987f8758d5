# ABOUTME: Pydantic BaseModels for geocoding, forecast and air-quality payloads.
# ABOUTME: Also holds the narrowed extractor results and interpreter classification types.

from pydantic import BaseModel, ConfigDict, computed_field, model_validator


class Coordinates(BaseModel):
    """Latitude/longitude pair resolved from geocoding."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class LocationInfo(BaseModel):
    """Descriptive fields of a geocoded place. Optional fields stay None when the provider omits them."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str | None = None
    country_code: str | None = None
    admin1: str | None = None


class ResolvedCity(Coordinates, LocationInfo):
    """First geocoding match for a search term."""

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def display_name(self) -> str:
        if self.country_code:
            return f"{self.name}, {self.country_code}"
        return self.name


class _ColumnSeries(BaseModel):
    """Open-Meteo column-oriented block: a time axis plus parallel value arrays."""

    model_config = ConfigDict(frozen=True)

    time: list[str] = []

    @model_validator(mode="after")
    def _columns_match_time(self):
        expected = len(self.time)
        for name, column in self:
            if name == "time" or not isinstance(column, list):
                continue
            if len(column) != expected:
                raise ValueError(f"column '{name}' has {len(column)} values, expected {expected}")
        return self


class CurrentWeather(BaseModel):
    """Point-in-time reading from the forecast endpoint's `current` block."""

    model_config = ConfigDict(frozen=True)

    time: str | None = None
    temperature_2m: float | None = None
    relative_humidity_2m: float | None = None
    apparent_temperature: float | None = None
    is_day: int | None = None
    precipitation: float | None = None
    rain: float | None = None
    showers: float | None = None
    snowfall: float | None = None
    weather_code: int | None = None
    cloud_cover: float | None = None
    pressure_msl: float | None = None
    surface_pressure: float | None = None
    wind_speed_10m: float | None = None
    wind_direction_10m: float | None = None
    wind_gusts_10m: float | None = None


class HourlySeries(_ColumnSeries):
    """Hourly forecast columns."""

    temperature_2m: list[float | None] | None = None
    relative_humidity_2m: list[float | None] | None = None
    apparent_temperature: list[float | None] | None = None
    precipitation_probability: list[float | None] | None = None
    precipitation: list[float | None] | None = None
    rain: list[float | None] | None = None
    showers: list[float | None] | None = None
    snowfall: list[float | None] | None = None
    weather_code: list[int | None] | None = None
    pressure_msl: list[float | None] | None = None
    surface_pressure: list[float | None] | None = None
    cloud_cover: list[float | None] | None = None
    cloud_cover_low: list[float | None] | None = None
    cloud_cover_mid: list[float | None] | None = None
    cloud_cover_high: list[float | None] | None = None
    visibility: list[float | None] | None = None
    evapotranspiration: list[float | None] | None = None
    et0_fao_evapotranspiration: list[float | None] | None = None
    vapour_pressure_deficit: list[float | None] | None = None
    wind_speed_10m: list[float | None] | None = None
    wind_direction_10m: list[float | None] | None = None
    wind_gusts_10m: list[float | None] | None = None
    uv_index: list[float | None] | None = None
    uv_index_clear_sky: list[float | None] | None = None
    is_day: list[int | None] | None = None
    shortwave_radiation: list[float | None] | None = None
    direct_radiation: list[float | None] | None = None
    diffuse_radiation: list[float | None] | None = None
    direct_normal_irradiance: list[float | None] | None = None
    sunshine_duration: list[float | None] | None = None
    daylight_duration: list[float | None] | None = None


class DailySeries(_ColumnSeries):
    """Daily forecast columns."""

    weather_code: list[int | None] | None = None
    temperature_2m_max: list[float | None] | None = None
    temperature_2m_min: list[float | None] | None = None
    apparent_temperature_max: list[float | None] | None = None
    apparent_temperature_min: list[float | None] | None = None
    sunrise: list[str | None] | None = None
    sunset: list[str | None] | None = None
    daylight_duration: list[float | None] | None = None
    sunshine_duration: list[float | None] | None = None
    uv_index_max: list[float | None] | None = None
    uv_index_clear_sky_max: list[float | None] | None = None
    precipitation_sum: list[float | None] | None = None
    rain_sum: list[float | None] | None = None
    showers_sum: list[float | None] | None = None
    snowfall_sum: list[float | None] | None = None
    precipitation_hours: list[float | None] | None = None
    precipitation_probability_max: list[float | None] | None = None
    wind_speed_10m_max: list[float | None] | None = None
    wind_gusts_10m_max: list[float | None] | None = None
    wind_direction_10m_dominant: list[float | None] | None = None
    shortwave_radiation_sum: list[float | None] | None = None
    et0_fao_evapotranspiration: list[float | None] | None = None


class WeatherResponse(BaseModel):
    """Parsed response from the Open-Meteo forecast endpoint. Every data block is optional."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    timezone: str | None = None
    elevation: float | None = None
    current: CurrentWeather | None = None
    hourly: HourlySeries | None = None
    daily: DailySeries | None = None
    hourly_units: dict[str, str] | None = None
    daily_units: dict[str, str] | None = None


class CurrentAirQuality(BaseModel):
    """Point-in-time reading from the air-quality endpoint's `current` block."""

    model_config = ConfigDict(frozen=True)

    time: str | None = None
    european_aqi: float | None = None
    us_aqi: float | None = None
    pm10: float | None = None
    pm2_5: float | None = None
    carbon_monoxide: float | None = None
    nitrogen_dioxide: float | None = None
    sulphur_dioxide: float | None = None
    ozone: float | None = None
    aerosol_optical_depth: float | None = None
    dust: float | None = None
    uv_index: float | None = None
    uv_index_clear_sky: float | None = None


class HourlyAirQualitySeries(_ColumnSeries):
    """Hourly air-quality columns."""

    pm10: list[float | None] | None = None
    pm2_5: list[float | None] | None = None
    carbon_monoxide: list[float | None] | None = None
    nitrogen_dioxide: list[float | None] | None = None
    sulphur_dioxide: list[float | None] | None = None
    ozone: list[float | None] | None = None
    aerosol_optical_depth: list[float | None] | None = None
    dust: list[float | None] | None = None
    uv_index: list[float | None] | None = None
    uv_index_clear_sky: list[float | None] | None = None
    ammonia: list[float | None] | None = None
    european_aqi: list[float | None] | None = None
    european_aqi_pm2_5: list[float | None] | None = None
    european_aqi_pm10: list[float | None] | None = None
    european_aqi_nitrogen_dioxide: list[float | None] | None = None
    european_aqi_ozone: list[float | None] | None = None
    european_aqi_sulphur_dioxide: list[float | None] | None = None
    us_aqi: list[float | None] | None = None
    us_aqi_pm2_5: list[float | None] | None = None
    us_aqi_pm10: list[float | None] | None = None
    us_aqi_nitrogen_dioxide: list[float | None] | None = None
    us_aqi_ozone: list[float | None] | None = None
    us_aqi_sulphur_dioxide: list[float | None] | None = None
    us_aqi_carbon_monoxide: list[float | None] | None = None


class AirQualityResponse(BaseModel):
    """Parsed response from the Open-Meteo air-quality endpoint."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    timezone: str | None = None
    elevation: float | None = None
    current: CurrentAirQuality | None = None
    hourly: HourlyAirQualitySeries | None = None
    hourly_units: dict[str, str] | None = None


class CurrentConditions(BaseModel):
    """Current weather and current air quality fetched together."""

    model_config = ConfigDict(frozen=True)

    weather: WeatherResponse
    air_quality: AirQualityResponse


class ComprehensiveWeatherData(BaseModel):
    """Resolved city plus its detailed forecast and air-quality series."""

    model_config = ConfigDict(frozen=True)

    location: ResolvedCity
    weather: WeatherResponse
    air_quality: AirQualityResponse


# Extractor results


class TemperaturePair(BaseModel):
    temperature: float | None = None
    apparent_temperature: float | None = None


class WindReading(BaseModel):
    speed: float | None = None
    direction: float | None = None
    gusts: float | None = None


class HourlyTemperatureSeries(BaseModel):
    time: list[str]
    temperature: list[float | None]
    apparent_temperature: list[float | None]


class AirQualityIndex(BaseModel):
    european_aqi: float | None = None
    us_aqi: float | None = None


# Interpreter results


class WindDirectionInfo(BaseModel):
    """Normalized bearing with its 8-point compass name."""

    model_config = ConfigDict(frozen=True)

    degrees: float
    cardinal: str
    description: str


class AirQualityLevel(BaseModel):
    """European AQI bucket with a display color."""

    model_config = ConfigDict(frozen=True)

    level: str
    description: str
    color: str


class UVIndexLevel(BaseModel):
    """UV index bucket with a sun-protection advisory."""

    model_config = ConfigDict(frozen=True)

    level: str
    description: str
    recommendation: str


class ErrorInfo(BaseModel):
    """User-facing description of a failed upstream request."""

    status: int
    message: str

# ABOUTME: Contract tests for the response normalizer extractors.
# ABOUTME: Validates narrow projections and the None sentinel for absent payload blocks.

from conftest import CURRENT_AIR_QUALITY, CURRENT_WEATHER, DETAILED_FORECAST, SAO_PAULO
from skycast.models import AirQualityResponse, ResolvedCity, WeatherResponse
from skycast.normalize import (
    extract_air_quality_index,
    extract_coordinates,
    extract_hourly_temperature,
    extract_location_info,
    extract_temperature,
    extract_wind,
)

EMPTY_WEATHER = WeatherResponse(latitude=0.0, longitude=0.0)
EMPTY_AIR_QUALITY = AirQualityResponse(latitude=0.0, longitude=0.0)


class TestCurrentWeatherExtractors:
    def test_temperature_pair(self):
        """extract_temperature projects air and apparent temperature untouched.

        Implementation: Extracts from the current-weather fixture.
        Passing implies: No rounding or unit conversion happens in the normalizer.
        """
        pair = extract_temperature(WeatherResponse.model_validate(CURRENT_WEATHER))
        assert pair.temperature == 25.4
        assert pair.apparent_temperature == 27.6

    def test_wind_triple(self):
        wind = extract_wind(WeatherResponse.model_validate(CURRENT_WEATHER))
        assert wind.speed == 11.6
        assert wind.direction == 135
        assert wind.gusts == 24.5

    def test_absent_current_block_returns_none(self):
        """Extractors return None when the payload has no current block.

        Implementation: Uses a payload with coordinates only.
        Passing implies: Absence is reported as a sentinel, never an exception.
        """
        assert extract_temperature(EMPTY_WEATHER) is None
        assert extract_wind(EMPTY_WEATHER) is None


class TestHourlyTemperature:
    def test_series(self):
        series = extract_hourly_temperature(WeatherResponse.model_validate(DETAILED_FORECAST))
        assert series.time == ["2025-01-15T00:00", "2025-01-15T01:00"]
        assert series.temperature == [21.3, 20.8]
        assert series.apparent_temperature == [22.0, 21.1]

    def test_missing_column_is_padded(self):
        """A column absent from the hourly block becomes a list of None of matching length.

        Implementation: Hourly block with time and temperature only.
        Passing implies: Every returned list stays aligned with the time axis.
        """
        weather = WeatherResponse.model_validate(
            {"latitude": 0, "longitude": 0, "hourly": {"time": ["t0", "t1"], "temperature_2m": [1.0, 2.0]}}
        )
        series = extract_hourly_temperature(weather)
        assert series.apparent_temperature == [None, None]

    def test_absent_hourly_block_returns_none(self):
        assert extract_hourly_temperature(EMPTY_WEATHER) is None


class TestAirQualityIndex:
    def test_index_pair(self):
        index = extract_air_quality_index(AirQualityResponse.model_validate(CURRENT_AIR_QUALITY))
        assert index.european_aqi == 38
        assert index.us_aqi == 55

    def test_absent_current_block_returns_none(self):
        assert extract_air_quality_index(EMPTY_AIR_QUALITY) is None


class TestCityExtractors:
    def test_location_info(self):
        info = extract_location_info(ResolvedCity.model_validate(SAO_PAULO))
        assert info.name == "São Paulo"
        assert info.country == "Brazil"
        assert info.country_code == "BR"
        assert info.admin1 == "São Paulo"

    def test_location_info_passes_absent_fields_through(self):
        """Missing optional fields stay None instead of being defaulted.

        Implementation: Extracts from a city with only a name.
        Passing implies: Consumers can tell "unknown" apart from an empty value.
        """
        info = extract_location_info(ResolvedCity(latitude=1, longitude=2, name="Somewhere"))
        assert info.country is None
        assert info.country_code is None
        assert info.admin1 is None

    def test_coordinates(self):
        coords = extract_coordinates(ResolvedCity.model_validate(SAO_PAULO))
        assert (coords.latitude, coords.longitude) == (-23.5475, -46.63611)

# ABOUTME: Contract tests for the Pydantic models used to parse Open-Meteo payloads.
# ABOUTME: Validates optional blocks, column-length invariants, immutability and city display names.

import pytest
from pydantic import ValidationError

from conftest import CURRENT_AIR_QUALITY, CURRENT_WEATHER, DETAILED_FORECAST, SAO_PAULO
from skycast.models import AirQualityResponse, Coordinates, HourlySeries, ResolvedCity, WeatherResponse


class TestResolvedCity:
    def test_parses_geocoding_result(self):
        """ResolvedCity accepts a raw geocoding result entry.

        Implementation: Validates the São Paulo geocoding fixture.
        Passing implies: Coordinates and location fields map from upstream names.
        """
        city = ResolvedCity.model_validate(SAO_PAULO)
        assert city.latitude == -23.5475
        assert city.longitude == -46.63611
        assert city.name == "São Paulo"
        assert city.country_code == "BR"
        assert city.admin1 == "São Paulo"

    def test_optional_fields_default_to_none(self):
        """ResolvedCity works with only coordinates and a name.

        Implementation: Constructs a city without country fields.
        Passing implies: Missing optional provider fields stay None, not empty strings.
        """
        city = ResolvedCity(latitude=0.0, longitude=0.0, name="Null Island")
        assert city.country is None
        assert city.country_code is None
        assert city.admin1 is None

    def test_display_name_includes_country_code(self):
        """display_name appends the country code when one is known.

        Implementation: Compares display names with and without country_code.
        Passing implies: The location label matches what the weather card shows.
        """
        assert ResolvedCity.model_validate(SAO_PAULO).display_name == "São Paulo, BR"
        assert ResolvedCity(latitude=0, longitude=0, name="Nowhere").display_name == "Nowhere"

    def test_is_immutable(self):
        """Resolved coordinates cannot be modified in place.

        Implementation: Attempts to assign latitude on a frozen model.
        Passing implies: Updates must replace the whole value.
        """
        city = ResolvedCity.model_validate(SAO_PAULO)
        with pytest.raises(ValidationError):
            city.latitude = 1.0

    def test_is_a_coordinates(self):
        city = ResolvedCity.model_validate(SAO_PAULO)
        assert isinstance(city, Coordinates)


class TestWeatherResponse:
    def test_all_blocks_optional(self):
        """WeatherResponse parses with no current, hourly or daily block.

        Implementation: Validates a payload with only coordinates.
        Passing implies: Absent blocks are tolerated rather than treated as malformed.
        """
        weather = WeatherResponse.model_validate({"latitude": 1.0, "longitude": 2.0})
        assert weather.current is None
        assert weather.hourly is None
        assert weather.daily is None

    def test_parses_current_block(self):
        weather = WeatherResponse.model_validate(CURRENT_WEATHER)
        assert weather.current.temperature_2m == 25.4
        assert weather.current.is_day == 1
        assert weather.current.weather_code == 2

    def test_parses_series_blocks(self):
        weather = WeatherResponse.model_validate(DETAILED_FORECAST)
        assert weather.hourly.time == ["2025-01-15T00:00", "2025-01-15T01:00"]
        assert weather.hourly.temperature_2m == [21.3, 20.8]
        assert weather.hourly.rain is None
        assert weather.daily.uv_index_max == [11.2]


class TestColumnSeries:
    def test_rejects_column_length_mismatch(self):
        """A column whose length differs from the time axis fails validation.

        Implementation: Builds an hourly block with 2 timestamps and 3 temperatures.
        Passing implies: Index i always describes the same instant across columns.
        """
        with pytest.raises(ValidationError, match="temperature_2m"):
            HourlySeries(time=["a", "b"], temperature_2m=[1.0, 2.0, 3.0])

    def test_allows_null_values_inside_columns(self):
        series = HourlySeries(time=["a", "b"], temperature_2m=[1.0, None])
        assert series.temperature_2m == [1.0, None]

    def test_empty_series(self):
        series = HourlySeries()
        assert series.time == []


class TestAirQualityResponse:
    def test_parses_current_block(self):
        air_quality = AirQualityResponse.model_validate(CURRENT_AIR_QUALITY)
        assert air_quality.current.european_aqi == 38
        assert air_quality.current.us_aqi == 55
        assert air_quality.current.ozone is None
        assert air_quality.hourly is None

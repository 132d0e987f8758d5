# ABOUTME: Pure functions turning raw Open-Meteo numbers into display-ready classifications.
# ABOUTME: Covers WMO weather codes, AQI and UV buckets, wind bearings and unit conversions.

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Literal

from skycast.models import AirQualityLevel, UVIndexLevel, WindDirectionInfo

PressureUnit = Literal["hPa", "mmHg", "inHg"]
TemperatureUnit = Literal["C", "F"]

UNKNOWN_CONDITION = "unknown condition"

WEATHER_DESCRIPTIONS: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snowfall",
    73: "Moderate snowfall",
    75: "Heavy snowfall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

# (day, night) Material Symbols icon names
_WEATHER_ICONS: dict[int, tuple[str, str]] = {
    0: ("clear_day", "bedtime"),
    1: ("wb_sunny", "wb_twilight"),
    2: ("partly_cloudy_day", "partly_cloudy_night"),
    3: ("filter_drama", "cloud"),
    45: ("foggy", "foggy"),
    48: ("mist", "mist"),
    51: ("grain", "grain"),
    53: ("weather_mix", "weather_mix"),
    55: ("water_drop", "water_drop"),
    56: ("ac_unit", "ac_unit"),
    57: ("severe_cold", "severe_cold"),
    61: ("rainy_light", "rainy_light"),
    63: ("rainy", "rainy"),
    65: ("rainy_heavy", "rainy_heavy"),
    66: ("weather_mix", "weather_mix"),
    67: ("ac_unit", "ac_unit"),
    71: ("weather_snowy", "weather_snowy"),
    73: ("snowing", "snowing"),
    75: ("severe_cold", "severe_cold"),
    77: ("weather_hail", "weather_hail"),
    80: ("rainy_light", "rainy_light"),
    81: ("rainy", "rainy"),
    82: ("rainy_heavy", "rainy_heavy"),
    85: ("weather_snowy", "weather_snowy"),
    86: ("snowing", "snowing"),
    95: ("thunderstorm", "thunderstorm"),
    96: ("weather_hail", "weather_hail"),
    99: ("bolt", "bolt"),
}

_FALLBACK_ICON = ("partly_cloudy_day", "partly_cloudy_night")

_EMOJI_GROUPS: tuple[tuple[frozenset[int], str], ...] = (
    (frozenset({1, 2}), "⛅"),
    (frozenset({3}), "☁️"),
    (frozenset({45, 48}), "🌫️"),
    (frozenset({51, 53, 55, 56, 57}), "🌦️"),
    (frozenset({61, 63, 65, 66, 67, 80, 81, 82}), "🌧️"),
    (frozenset({71, 73, 75, 77, 85, 86}), "❄️"),
    (frozenset({95, 96, 99}), "⛈️"),
)

_AQI_BANDS: tuple[tuple[float, AirQualityLevel], ...] = (
    (20, AirQualityLevel(level="Good", description="Excellent air quality", color="#00e400")),
    (40, AirQualityLevel(level="Fair", description="Acceptable air quality", color="#ffff00")),
    (60, AirQualityLevel(level="Moderate", description="Moderate air quality", color="#ff7e00")),
    (80, AirQualityLevel(level="Poor", description="Poor air quality", color="#ff0000")),
    (100, AirQualityLevel(level="VeryPoor", description="Very poor air quality", color="#8f3f97")),
)
_AQI_WORST = AirQualityLevel(level="ExtremelyPoor", description="Hazardous air quality", color="#7e0023")

_UV_BANDS: tuple[tuple[float, UVIndexLevel], ...] = (
    (3, UVIndexLevel(level="Low", description="Minimal risk", recommendation="No protection needed")),
    (6, UVIndexLevel(level="Moderate", description="Low risk", recommendation="Use SPF 15+ sunscreen")),
    (
        8,
        UVIndexLevel(
            level="High", description="Moderate risk", recommendation="Use SPF 30+ sunscreen and sunglasses"
        ),
    ),
    (
        11,
        UVIndexLevel(
            level="VeryHigh",
            description="High risk",
            recommendation="Avoid sun exposure from 10am to 4pm. Use SPF 50+ sunscreen",
        ),
    ),
)
_UV_WORST = UVIndexLevel(
    level="Extreme", description="Extreme risk", recommendation="Avoid sun exposure. Stay in the shade"
)

CARDINAL_POINTS: tuple[tuple[str, str], ...] = (
    ("N", "North"),
    ("NE", "Northeast"),
    ("E", "East"),
    ("SE", "Southeast"),
    ("S", "South"),
    ("SW", "Southwest"),
    ("W", "West"),
    ("NW", "Northwest"),
)

MMHG_PER_HPA = 0.750062
INHG_PER_HPA = 0.02953


def weather_description(code: int) -> str:
    """Describe a WMO weather code, or return "unknown condition" for codes outside the table."""
    return WEATHER_DESCRIPTIONS.get(code, UNKNOWN_CONDITION)


def weather_icon(code: int, is_day: bool | int) -> str:
    """Material Symbols icon name for a WMO code; is_day accepts the API's 0/1 flag."""
    day, night = _WEATHER_ICONS.get(code, _FALLBACK_ICON)
    return day if is_day else night


def weather_emoji(code: int, is_day: bool | int) -> str:
    if code == 0:
        return "☀️" if is_day else "🌙"
    for codes, emoji in _EMOJI_GROUPS:
        if code in codes:
            return emoji
    return "🌡️"


def air_quality_level(aqi: float) -> AirQualityLevel:
    """Classify a European AQI value. Boundary values belong to the lower (better) bucket."""
    for upper, level in _AQI_BANDS:
        if aqi <= upper:
            return level
    return _AQI_WORST


def uv_index_level(uv_index: float) -> UVIndexLevel:
    """Classify a UV index value. Boundary values belong to the higher bucket."""
    for upper, level in _UV_BANDS:
        if uv_index < upper:
            return level
    return _UV_WORST


def wind_direction_info(degrees: float) -> WindDirectionInfo:
    """Map a bearing to one of 8 compass points, normalizing any input into [0, 360).

    NaN and infinite bearings are reported as 0 degrees (North).
    """
    if not math.isfinite(degrees):
        degrees = 0
    normalized = ((degrees % 360) + 360) % 360
    index = round_half_up(normalized / 45) % 8
    cardinal, description = CARDINAL_POINTS[index]
    return WindDirectionInfo(degrees=normalized, cardinal=cardinal, description=description)


def wind_direction(degrees: float) -> str:
    return wind_direction_info(degrees).cardinal


def convert_wind_speed(meters_per_second: float) -> float:
    """Convert m/s to whole km/h. NaN and infinite speeds pass through unrounded."""
    return round_half_up(meters_per_second * 3.6)


def convert_pressure(hpa: float, unit: PressureUnit = "hPa") -> float:
    """Convert hectopascals to mmHg (whole number) or inHg (two decimals); hPa passes through.

    Non-finite readings are converted but not rounded.
    """
    if unit == "mmHg":
        return round_half_up(hpa * MMHG_PER_HPA)
    if unit == "inHg":
        return round_half_up(hpa * INHG_PER_HPA * 100) / 100
    return hpa


def format_temperature(celsius: float, unit: TemperatureUnit = "C", precision: int = 0) -> str:
    """Format a Celsius reading with its degree suffix.

    The Celsius value is rounded to `precision` decimals before any Fahrenheit
    conversion, and the converted value is rounded again to the same precision.
    Trailing zeros are dropped, so 25.60 renders as "25.6". NaN and infinite
    readings render as the "--" placeholder.
    """
    if not math.isfinite(celsius):
        return f"--°{unit}"
    rounded = _to_fixed(celsius, precision)
    if unit == "F":
        fahrenheit = float(rounded) * 9 / 5 + 32
        if not math.isfinite(fahrenheit):
            return "--°F"
        return f"{_render(_to_fixed(fahrenheit, precision))}°F"
    return f"{_render(rounded)}°C"


def round_half_up(value: float) -> float:
    """Round to the nearest integer with .5 going up, matching Math.round in browsers.

    Like Math.round, NaN and infinities come back unchanged.
    """
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def _to_fixed(value: float, precision: int) -> Decimal:
    """Round the exact binary value of `value` half away from zero."""
    precision = max(precision, 0)
    exact = Decimal(value)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the requested decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + precision + 2)
        return exact.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)


def _render(number: Decimal) -> str:
    if number == 0:
        return "0"
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text

"""Open-Meteo forecast adapter.

Maps the Open-Meteo payload into the canonical ``Weather`` schema. WMO
weather interpretation codes:

- 0: clear sky; 1-3: mainly clear to overcast; 45, 48: fog
- 51-57: drizzle; 61-67: rain; 80-82: rain showers
- 71-77: snow; 85-86: snow showers
- 95-99: thunderstorm
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy
from app.schemas.weather import CurrentWeather, DailyForecast, HourlyForecast, Weather, WeatherCategory
from app.services.http_client import ExternalServiceError, fetch_json

logger = get_logger(__name__)

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
HOT_THRESHOLD_C = 30
COLD_THRESHOLD_C = 10

_CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,apparent_temperature,weather_code,wind_speed_10m"
_HOURLY_FIELDS = "temperature_2m,precipitation_probability"
_DAILY_FIELDS = "weather_code,temperature_2m_max,temperature_2m_min"

_WEATHER_DESCRIPTIONS: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
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
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
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

_WEATHER_CONDITIONS: tuple[tuple[int, int, str], ...] = (
    (0, 0, "Clear"),
    (1, 3, "Cloudy"),
    (45, 48, "Fog"),
    (51, 57, "Drizzle"),
    (61, 67, "Rain"),
    (71, 77, "Snow"),
    (80, 82, "Showers"),
    (85, 86, "Snow Showers"),
    (95, 99, "Thunderstorm"),
)

_RAIN_CODE_RANGES = ((51, 67), (80, 82), (95, 99))
_SNOW_CODE_RANGES = ((71, 77), (85, 86))


class WeatherServiceError(ExternalServiceError):
    """Raised when the forecast cannot be fetched or read."""

    service_name = "Weather API"


def _in_ranges(code: int, ranges: tuple[tuple[int, int], ...]) -> bool:
    return any(low <= code <= high for low, high in ranges)


def categorize_weather(weather_code: int, temperature: float) -> WeatherCategory:
    """Bucket a WMO code and temperature; precipitation wins over temperature."""
    if _in_ranges(weather_code, _RAIN_CODE_RANGES):
        return WeatherCategory.RAINY
    if _in_ranges(weather_code, _SNOW_CODE_RANGES):
        return WeatherCategory.COLD
    if temperature >= HOT_THRESHOLD_C:
        return WeatherCategory.HOT
    if temperature <= COLD_THRESHOLD_C:
        return WeatherCategory.COLD
    return WeatherCategory.CLEAR


def weather_description(weather_code: int) -> str:
    return _WEATHER_DESCRIPTIONS.get(weather_code, "Unknown")


def weather_condition(weather_code: int) -> str:
    for low, high, label in _WEATHER_CONDITIONS:
        if low <= weather_code <= high:
            return label
    return "Unknown"


def _round(value: float | None) -> float | None:
    if value is None:
        return None
    return math.floor(value + 0.5)


def map_open_meteo_payload(data: dict[str, Any]) -> Weather:
    """Convert an Open-Meteo forecast response into ``Weather``."""
    current = data.get("current") or {}
    hourly = data.get("hourly") or {}
    daily = data.get("daily") or {}

    weather_code = current.get("weather_code")
    temperature = current.get("temperature_2m")
    if weather_code is None or temperature is None:
        raise WeatherServiceError("Weather API response is missing current conditions")

    code = int(weather_code)
    try:
        return Weather(
            temperature=_round(temperature),
            condition=weather_condition(code),
            category=categorize_weather(code, temperature),
            description=weather_description(code),
            icon=str(code),
            hourly=HourlyForecast(
                time=hourly.get("time") or [],
                temperature_2m=hourly.get("temperature_2m") or [],
                precipitation_probability=hourly.get("precipitation_probability") or [],
            ),
            daily=DailyForecast(
                time=daily.get("time") or [],
                temperature_2m_max=daily.get("temperature_2m_max") or [],
                temperature_2m_min=daily.get("temperature_2m_min") or [],
                weather_code=daily.get("weather_code") or [],
            ),
            current=CurrentWeather(
                relative_humidity_2m=current.get("relative_humidity_2m"),
                apparent_temperature=_round(current.get("apparent_temperature")),
                wind_speed_10m=current.get("wind_speed_10m"),
                uv_index=0,
            ),
        )
    except ValidationError as exc:
        raise WeatherServiceError(f"Weather API response could not be read: {exc}") from exc


class OpenMeteoWeatherService:
    """Fetches the current forecast from Open-Meteo (no API key needed)."""

    def __init__(self, timeout_seconds: int = 10, base_url: str = OPEN_METEO_URL) -> None:
        self._timeout_seconds = timeout_seconds
        self._base_url = base_url

    @classmethod
    def from_settings(cls) -> OpenMeteoWeatherService:
        timeout_policy = get_timeout_policy(get_settings())
        return cls(timeout_seconds=timeout_policy.weather_timeout_seconds)

    async def current(self, lat: float, lng: float) -> Weather:
        """Return current weather and forecasts for a coordinate."""
        params = {
            "latitude": str(lat),
            "longitude": str(lng),
            "current": _CURRENT_FIELDS,
            "hourly": _HOURLY_FIELDS,
            "daily": _DAILY_FIELDS,
            "timezone": "auto",
        }
        logger.info("Weather fetch started: lat=%s lng=%s", lat, lng)
        data = await fetch_json(
            self._base_url,
            params,
            timeout_seconds=self._timeout_seconds,
            error_cls=WeatherServiceError,
        )
        weather = map_open_meteo_payload(data)
        logger.info("Weather fetch completed: category=%s temperature=%s", weather.category.value, weather.temperature)
        return weather


def get_weather_service() -> OpenMeteoWeatherService:
    return OpenMeteoWeatherService.from_settings()

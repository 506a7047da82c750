"""Canonical weather schema shared by every weather provider adapter."""

from enum import StrEnum

from pydantic import Field

from app.schemas.common import ApiModel


class WeatherCategory(StrEnum):
    """Coarse weather bucket used to bias recommendations."""

    RAINY = "rainy"
    HOT = "hot"
    COLD = "cold"
    CLEAR = "clear"


class HourlyForecast(ApiModel):
    """Hourly forecast series."""

    time: list[str] = Field(default_factory=list)
    temperature_2m: list[float | None] = Field(default_factory=list, alias="temperature2m")
    precipitation_probability: list[float | None] = Field(default_factory=list)


class DailyForecast(ApiModel):
    """Daily forecast series."""

    time: list[str] = Field(default_factory=list)
    temperature_2m_max: list[float | None] = Field(default_factory=list, alias="temperature2mMax")
    temperature_2m_min: list[float | None] = Field(default_factory=list, alias="temperature2mMin")
    weather_code: list[int | None] = Field(default_factory=list)


class CurrentWeather(ApiModel):
    """Extra current-condition readings."""

    relative_humidity_2m: float | None = Field(default=None, alias="relativeHumidity2m")
    apparent_temperature: float | None = None
    wind_speed_10m: float | None = Field(default=None, alias="windSpeed10m")
    uv_index: float = 0


class Weather(ApiModel):
    """Current weather at the user's location."""

    temperature: float = Field(..., description="Temperature in Celsius")
    condition: str = Field(..., description="Short condition label")
    category: WeatherCategory = Field(..., description="Weather bucket")
    description: str = Field(..., description="Condition description")
    icon: str = Field(..., description="Icon key")
    hourly: HourlyForecast | None = None
    daily: DailyForecast | None = None
    current: CurrentWeather | None = None

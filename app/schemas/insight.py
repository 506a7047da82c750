"""AI insight request/response schemas."""

from typing import Literal

from pydantic import Field

from app.schemas.common import ApiModel
from app.schemas.weather import CurrentWeather


class InsightPlace(ApiModel):
    """Subset of a ranked place sent by the client for a blurb."""

    name: str = Field(..., min_length=1, description="Place name")
    types: list[str] = Field(default_factory=list, description="Place type tags")
    rating: float | None = Field(default=None, description="Average rating")
    explanation: str | None = Field(default=None, description="Ranking explanation")
    distance: float | None = Field(default=None, description="Distance in km")
    is_open: bool | None = Field(default=None, description="Open status")


class InsightWeather(ApiModel):
    """Weather fields the prompts need; every field is optional."""

    temperature: float | None = None
    description: str | None = None
    category: str | None = None
    condition: str | None = None
    current: CurrentWeather | None = None


class PlaceInsightRequest(ApiModel):
    """Body of ``POST /api/ai/place-insights``."""

    place: InsightPlace
    weather: InsightWeather
    local_time: str | None = None
    timezone: str | None = None


class PlaceInsight(ApiModel):
    """Short visit blurb for one place."""

    headline: str = Field(..., description="Headline, max 8 words")
    tip: str = Field(..., description="Why to go now, 1-2 sentences")
    weather_note: str = Field(..., description="How the weather affects the visit")


class WeatherAlert(ApiModel):
    """Single weather safety alert."""

    id: str = Field(..., description="Alert id")
    title: str = Field(..., description="Short title")
    message: str = Field(..., description="Alert text")
    severity: Literal["warning", "caution"] = Field(..., description="Alert severity")


class WeatherAlertsRequest(ApiModel):
    """Body of ``POST /api/ai/alerts``."""

    weather: InsightWeather


class WeatherAlertsResponse(ApiModel):
    """Up to three weather alerts."""

    alerts: list[WeatherAlert] = Field(default_factory=list, max_length=3)


class PackingRequest(ApiModel):
    """Body of ``POST /api/ai/packing``; ``weather`` is checked by the router."""

    weather: InsightWeather | None = None
    local_time: str | None = None
    timezone: str | None = None


class PackingAdvice(ApiModel):
    """Packing advice for a short outing."""

    summary: str = Field(..., description="One-line summary, max 30 words")
    packing_list: list[str] = Field(default_factory=list, max_length=6, description="Short items to bring")
    safety: str = Field(..., description="One weather caution")


class BriefingPlace(ApiModel):
    """Recommended place as echoed back by the client."""

    name: str = Field(..., min_length=1)
    explanation: str | None = None


class BriefingRequest(ApiModel):
    """Body of ``POST /api/briefing``; both fields are checked by the router."""

    weather: InsightWeather | None = None
    recommendations: list[BriefingPlace] | None = None
    local_time: str | None = None


class BriefingResponse(ApiModel):
    """Short personal briefing."""

    briefing: str

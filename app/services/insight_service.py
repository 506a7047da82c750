"""LLM-generated place blurbs, weather alerts, packing advice and briefings."""

from __future__ import annotations

import asyncio

from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, Field

from app.core.llm_router import Stage, ainvoke, strip_code_fence
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy
from app.schemas.common import ApiModel
from app.schemas.insight import (
    BriefingRequest,
    BriefingResponse,
    InsightWeather,
    PackingAdvice,
    PackingRequest,
    PlaceInsight,
    PlaceInsightRequest,
    WeatherAlert,
    WeatherAlertsResponse,
)

logger = get_logger(__name__)

MAX_ALERTS = 3
MAX_PACKING_ITEMS = 6
MAX_BRIEFING_PLACES = 3
FALLBACK_BRIEFING = "Getting ready for your day!"


class AlertsOutput(BaseModel):
    """Raw LLM alert list before truncation."""

    alerts: list[WeatherAlert] = Field(default_factory=list)


class PackingOutput(ApiModel):
    """Raw LLM packing advice; missing fields get fixed text."""

    summary: str | None = None
    packing_list: list[str] = Field(default_factory=list)
    safety: str | None = None


_INSIGHT_SYSTEM_PROMPT = "You give concise, upbeat visit suggestions tailored to current weather."
_INSIGHT_USER_PROMPT = (
    "You are a local concierge. Craft a short blurb for the selected place.\n"
    "Place: {name}\n"
    "Rating: {rating}\n"
    "Types: {types}\n"
    "Distance: {distance}\n"
    "Open Now: {open_now}\n"
    "Description: {explanation}\n"
    "Weather: {temperature}°C, {conditions} ({category})\n"
    "Local Time: {local_time}\n\n"
    "headline is at most 8 words, tip is 1-2 sentences on why to go now (max 45 words), "
    "weatherNote is 1 sentence about how the weather impacts the visit. "
    "Keep the tone friendly and actionable.\n\n"
    "{format_instructions}"
)

_ALERTS_SYSTEM_PROMPT = "Return safety alerts tuned for a weather-and-places web app."
_ALERTS_USER_PROMPT = (
    "You are a concise safety assistant. Current weather: {temperature}°C, {description} ({category}). "
    "Feels like {apparent}°C, wind {wind} km/h, humidity {humidity}%. "
    "Provide up to 3 short alerts. severity is \"warning\" or \"caution\". "
    "Keep titles under 6 words and messages under 28 words.\n\n"
    "{format_instructions}"
)


def fallback_place_insight(place_name: str) -> PlaceInsight:
    return PlaceInsight(
        headline=f"{place_name} is a solid pick right now",
        tip="This spot aligns well with the current vibe, worth a look while you're nearby.",
        weather_note="Check the sky and dress for comfort.",
    )


def _fmt(value: object, default: str = "n/a") -> str:
    return default if value is None or value == "" else str(value)


async def generate_place_insight(request: PlaceInsightRequest, timeout_seconds: int | None = None) -> PlaceInsight:
    """Ask the LLM for a visit blurb; any failure falls back to fixed text."""
    place = request.place
    weather = request.weather
    parser = PydanticOutputParser(pydantic_object=PlaceInsight)
    timeout = timeout_seconds or get_timeout_policy().llm_timeout_seconds

    prompt = ChatPromptTemplate.from_messages(
        [("system", _INSIGHT_SYSTEM_PROMPT), ("human", _INSIGHT_USER_PROMPT)]
    )
    messages = prompt.format_messages(
        name=place.name,
        rating=_fmt(place.rating),
        types=", ".join(place.types),
        distance=f"{place.distance:.1f} km" if place.distance else "unknown",
        open_now="Yes" if place.is_open else "No or unsure",
        explanation=place.explanation or "Weather-matched spot",
        temperature=_fmt(weather.temperature, "?"),
        conditions=weather.description or weather.condition or "",
        category=_fmt(weather.category),
        local_time=f"{request.local_time or 'unknown'} {request.timezone or ''}".strip(),
        format_instructions=parser.get_format_instructions(),
    )

    try:
        response = await asyncio.wait_for(ainvoke(Stage.PLACE_INSIGHT, messages, timeout_seconds=timeout), timeout)
        raw_content = response.content if isinstance(response.content, str) else str(response.content)
        return parser.parse(strip_code_fence(raw_content))
    except asyncio.TimeoutError:
        logger.warning("Place insight timed out: place=%s timeout=%s", place.name, timeout)
    except Exception:
        logger.exception("Place insight generation failed: place=%s", place.name)
    return fallback_place_insight(place.name)


async def generate_weather_alerts(weather: InsightWeather, timeout_seconds: int | None = None) -> WeatherAlertsResponse:
    """Ask the LLM for up to three safety alerts; failures yield no alerts."""
    parser = PydanticOutputParser(pydantic_object=AlertsOutput)
    timeout = timeout_seconds or get_timeout_policy().llm_timeout_seconds
    current = weather.current

    prompt = ChatPromptTemplate.from_messages([("system", _ALERTS_SYSTEM_PROMPT), ("human", _ALERTS_USER_PROMPT)])
    messages = prompt.format_messages(
        temperature=_fmt(weather.temperature, "?"),
        description=weather.description or weather.condition or "",
        category=_fmt(weather.category),
        apparent=_fmt(current.apparent_temperature if current else None, _fmt(weather.temperature, "?")),
        wind=_fmt(current.wind_speed_10m if current else None, "0"),
        humidity=_fmt(current.relative_humidity_2m if current else None),
        format_instructions=parser.get_format_instructions(),
    )

    try:
        response = await asyncio.wait_for(ainvoke(Stage.WEATHER_ALERTS, messages, timeout_seconds=timeout), timeout)
        raw_content = response.content if isinstance(response.content, str) else str(response.content)
        parsed = parser.parse(strip_code_fence(raw_content))
    except asyncio.TimeoutError:
        logger.warning("Weather alerts timed out: timeout=%s", timeout)
        return WeatherAlertsResponse()
    except Exception:
        logger.exception("Weather alerts generation failed")
        return WeatherAlertsResponse()

    return WeatherAlertsResponse(alerts=parsed.alerts[:MAX_ALERTS])


_PACKING_SYSTEM_PROMPT = "You are a concise packing assistant for quick neighborhood trips."
_PACKING_USER_PROMPT = (
    "Current weather: {temperature}°C, {conditions} ({category}). Local time: {local_time} {timezone}.\n"
    "Provide concise packing advice for a short outing within the next few hours. "
    "summary is at most 30 words, packingList has 5-6 short phrases, "
    "safety is 1 short caution tailored to the weather. Prioritize comfort and weather readiness.\n\n"
    "{format_instructions}"
)

_BRIEFING_SYSTEM_PROMPT = "You are a concise weather and lifestyle expert."
_BRIEFING_USER_PROMPT = (
    "You are a helpful, witty assistant for WeatherWise Nearby.\n"
    "Current Local Time: {local_time}\n"
    "Current Weather: {temperature}°C, {description} ({category})\n"
    "Recommended Nearby Places: {places}\n\n"
    "Write a catchy 2-3 sentence briefing for the user. Mention the current weather vibe and "
    "suggest one of the recommended places for it. Keep it personal, max 60 words, "
    "no markdown except bold place names."
)


def fallback_packing_advice() -> PackingAdvice:
    return PackingAdvice(
        summary="Pack light and stay comfy for the current conditions.",
        packing_list=[],
        safety="Check the sky and stay hydrated.",
    )


async def generate_packing_advice(request: PackingRequest, timeout_seconds: int | None = None) -> PackingAdvice:
    """Ask the LLM for packing advice; unusable output falls back field by field."""
    weather = request.weather or InsightWeather()
    parser = PydanticOutputParser(pydantic_object=PackingOutput)
    timeout = timeout_seconds or get_timeout_policy().llm_timeout_seconds
    fallback = fallback_packing_advice()

    prompt = ChatPromptTemplate.from_messages([("system", _PACKING_SYSTEM_PROMPT), ("human", _PACKING_USER_PROMPT)])
    messages = prompt.format_messages(
        temperature=_fmt(weather.temperature, "?"),
        conditions=weather.description or weather.condition or "unknown conditions",
        category=_fmt(weather.category),
        local_time=request.local_time or "unknown",
        timezone=request.timezone or "local",
        format_instructions=parser.get_format_instructions(),
    )

    try:
        response = await asyncio.wait_for(ainvoke(Stage.PACKING_ADVICE, messages, timeout_seconds=timeout), timeout)
        raw_content = response.content if isinstance(response.content, str) else str(response.content)
        parsed = parser.parse(strip_code_fence(raw_content))
    except asyncio.TimeoutError:
        logger.warning("Packing advice timed out: timeout=%s", timeout)
        return fallback
    except Exception:
        logger.exception("Packing advice generation failed")
        return fallback

    return PackingAdvice(
        summary=parsed.summary or fallback.summary,
        packing_list=parsed.packing_list[:MAX_PACKING_ITEMS],
        safety=parsed.safety or fallback.safety,
    )


async def generate_briefing(request: BriefingRequest, timeout_seconds: int | None = None) -> BriefingResponse:
    """Ask the LLM for a short briefing over the top recommendations."""
    weather = request.weather or InsightWeather()
    places = (request.recommendations or [])[:MAX_BRIEFING_PLACES]
    timeout = timeout_seconds or get_timeout_policy().llm_timeout_seconds

    prompt = ChatPromptTemplate.from_messages([("system", _BRIEFING_SYSTEM_PROMPT), ("human", _BRIEFING_USER_PROMPT)])
    messages = prompt.format_messages(
        local_time=request.local_time or "unknown",
        temperature=_fmt(weather.temperature, "?"),
        description=weather.description or weather.condition or "",
        category=_fmt(weather.category),
        places=", ".join(f"{place.name} ({place.explanation or 'nearby'})" for place in places) or "none",
    )

    try:
        response = await asyncio.wait_for(ainvoke(Stage.DAILY_BRIEFING, messages, timeout_seconds=timeout), timeout)
    except asyncio.TimeoutError:
        logger.warning("Briefing timed out: timeout=%s", timeout)
        return BriefingResponse(briefing=FALLBACK_BRIEFING)
    except Exception:
        logger.exception("Briefing generation failed")
        return BriefingResponse(briefing=FALLBACK_BRIEFING)

    content = response.content if isinstance(response.content, str) else str(response.content)
    return BriefingResponse(briefing=content.strip() or FALLBACK_BRIEFING)

"""AI insight endpoints."""

from fastapi import APIRouter, HTTPException, status

from app.core.logger import get_logger
from app.schemas.insight import (
    BriefingRequest,
    BriefingResponse,
    PackingAdvice,
    PackingRequest,
    PlaceInsight,
    PlaceInsightRequest,
    WeatherAlertsRequest,
    WeatherAlertsResponse,
)
from app.services.insight_service import (
    generate_briefing,
    generate_packing_advice,
    generate_place_insight,
    generate_weather_alerts,
)

router = APIRouter(prefix="/api", tags=["ai"])
logger = get_logger(__name__)


@router.post("/ai/place-insights", response_model=PlaceInsight)
async def place_insights(request: PlaceInsightRequest) -> PlaceInsight:
    """Return a short, weather-aware blurb for a place."""
    logger.info("Place insight request received: place=%s", request.place.name)
    return await generate_place_insight(request)


@router.post("/ai/alerts", response_model=WeatherAlertsResponse)
async def weather_alerts(request: WeatherAlertsRequest) -> WeatherAlertsResponse:
    """Return up to three safety alerts for the current weather."""
    return await generate_weather_alerts(request.weather)


@router.post("/ai/packing", response_model=PackingAdvice)
async def packing_advice(request: PackingRequest) -> PackingAdvice:
    """Return packing advice for a short outing in the current weather."""
    if request.weather is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Weather details are required")
    return await generate_packing_advice(request)


@router.post("/briefing", response_model=BriefingResponse)
async def briefing(request: BriefingRequest) -> BriefingResponse:
    """Return a short briefing tying the weather to the top recommendations."""
    if request.weather is None or request.recommendations is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Weather and recommendations are required",
        )
    logger.info("Briefing request received: recommendations=%d", len(request.recommendations))
    return await generate_briefing(request)

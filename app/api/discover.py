"""Weather-aware nearby discovery API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import get_places_service, get_timezone_provider, get_weather_provider
from app.core.config import get_settings
from app.core.logger import get_logger
from app.schemas.discover import DiscoveryResponse
from app.services.discovery_service import discover_nearby
from app.services.http_client import ExternalServiceError
from app.services.places_service import PlacesServiceProtocol
from app.services.timezone_service import GoogleTimezoneService
from app.services.weather_service import OpenMeteoWeatherService

router = APIRouter(prefix="/api", tags=["discover"])
logger = get_logger(__name__)


@router.get("/discover", response_model=DiscoveryResponse)
async def discover(
    lat: float = Query(..., ge=-90.0, le=90.0, description="User latitude"),
    lng: float = Query(..., ge=-180.0, le=180.0, description="User longitude"),
    q: str | None = Query(default=None, description="Optional search keyword"),
    places_service: PlacesServiceProtocol = Depends(get_places_service),  # noqa: B008
    weather_service: OpenMeteoWeatherService = Depends(get_weather_provider),  # noqa: B008
    timezone_service: GoogleTimezoneService = Depends(get_timezone_provider),  # noqa: B008
) -> DiscoveryResponse:
    """Return current weather and nearby places ranked for it."""
    logger.info("Discover request received: lat=%s lng=%s q=%s", lat, lng, q)

    try:
        return await discover_nearby(
            lat=lat,
            lng=lng,
            keyword=q,
            places_service=places_service,
            weather_service=weather_service,
            timezone_service=timezone_service,
        )
    except ExternalServiceError as exc:
        logger.error("Discover failed: %s", exc)
        detail = "Failed to fetch recommendations"
        if get_settings().EXPOSE_INTERNAL_ERRORS:
            detail = f"{detail}: {exc}"
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail) from exc

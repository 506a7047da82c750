"""Discovery pipeline: fetch weather, places and timezone, then rank."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

from app.core.config import get_settings
from app.core.logger import get_logger
from app.schemas.discover import DiscoveryResponse
from app.schemas.place import GeoPoint
from app.services.places_service import PlacesServiceProtocol
from app.services.ranking import rank_places
from app.services.timezone_service import GoogleTimezoneService
from app.services.weather_service import OpenMeteoWeatherService

logger = get_logger(__name__)


async def discover_nearby(
    *,
    lat: float,
    lng: float,
    keyword: str | None,
    places_service: PlacesServiceProtocol,
    weather_service: OpenMeteoWeatherService,
    timezone_service: GoogleTimezoneService,
    radius_meters: int | None = None,
    now: datetime | None = None,
) -> DiscoveryResponse:
    """Fetch the three upstream inputs concurrently and rank the places.

    Any upstream ``ExternalServiceError`` propagates to the caller.
    """
    instant = now or datetime.now(UTC)
    radius = radius_meters or get_settings().PLACES_SEARCH_RADIUS_METERS
    user_location = GeoPoint(lat=lat, lng=lng)

    weather, places, timezone_info = await asyncio.gather(
        weather_service.current(lat, lng),
        places_service.nearby(lat, lng, radius_meters=radius, keyword=keyword),
        timezone_service.lookup(lat, lng, now=instant),
    )

    recommendations = rank_places(
        places,
        user_location,
        weather.category,
        timezone_info.timezone_id,
        now=instant,
    )
    logger.info(
        "Discovery completed: lat=%s lng=%s keyword=%s recommendations=%d",
        lat,
        lng,
        keyword,
        len(recommendations),
    )

    return DiscoveryResponse(
        weather=weather,
        local_time=timezone_info.local_time,
        timezone=timezone_info.timezone_id,
        recommendations=recommendations,
    )

"""Google Time Zone API adapter."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone
from typing import Any

from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy
from app.schemas.discover import TimezoneInfo
from app.services.http_client import ExternalServiceError, fetch_json

logger = get_logger(__name__)

TIMEZONE_API_URL = "https://maps.googleapis.com/maps/api/timezone/json"


class TimezoneServiceError(ExternalServiceError):
    """Raised when the timezone for a coordinate cannot be resolved."""

    service_name = "Timezone API"


def build_timezone_info(data: dict[str, Any], now: datetime) -> TimezoneInfo:
    """Turn a Time Zone API response into ``TimezoneInfo`` at ``now``."""
    if data.get("status") != "OK":
        raise TimezoneServiceError(f"Timezone API error: {data.get('status')} - {data.get('errorMessage')}")

    timezone_id = data.get("timeZoneId")
    if not timezone_id:
        raise TimezoneServiceError("Timezone API response is missing timeZoneId")

    offset_seconds = int(data.get("rawOffset") or 0) + int(data.get("dstOffset") or 0)
    local_zone = timezone(timedelta(seconds=offset_seconds))
    local_time = now.astimezone(local_zone).isoformat(timespec="seconds")
    return TimezoneInfo(timezone_id=timezone_id, local_time=local_time)


class GoogleTimezoneService:
    """Resolves IANA timezone ids with the Places API key."""

    def __init__(self, api_key: str, timeout_seconds: int = 10) -> None:
        if not api_key:
            raise TimezoneServiceError("PLACES_API_KEY is not configured")
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls) -> GoogleTimezoneService:
        settings = get_settings()
        timeout_policy = get_timeout_policy(settings)
        return cls(
            api_key=settings.PLACES_API_KEY or "",
            timeout_seconds=timeout_policy.external_api_timeout_seconds,
        )

    async def lookup(self, lat: float, lng: float, now: datetime | None = None) -> TimezoneInfo:
        """Return the timezone id and local time at a coordinate.

        A naive ``now`` is read as UTC.
        """
        instant = now or datetime.now(UTC)
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        params = {
            "location": f"{lat},{lng}",
            "timestamp": str(int(instant.timestamp())),
            "key": self._api_key,
        }
        data = await fetch_json(
            TIMEZONE_API_URL,
            params,
            timeout_seconds=self._timeout_seconds,
            error_cls=TimezoneServiceError,
        )
        info = build_timezone_info(data, instant)
        logger.info("Timezone resolved: lat=%s lng=%s timezone=%s", lat, lng, info.timezone_id)
        return info


def get_timezone_service() -> GoogleTimezoneService:
    return GoogleTimezoneService.from_settings()

"""Google Places API service implementation."""

from __future__ import annotations

from functools import lru_cache
from typing import Any
from urllib.parse import urlencode

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy
from app.schemas.place import GeoPoint, OpeningHours, OpeningPeriod, OpeningTime, Place, PlaceDetails
from app.services.http_client import ExternalServiceError, fetch_json
from app.services.places_service import PlacesServiceProtocol

logger = get_logger(__name__)

_OK_STATUSES = frozenset({"OK", "ZERO_RESULTS"})


class GooglePlacesError(ExternalServiceError):
    """Raised when a Google Places call fails or is not configured."""

    service_name = "Places API"


def parse_hhmm(value: str | None) -> tuple[int, int] | None:
    """Parse a Places ``"HHMM"`` time string into ``(hour, minute)``."""
    text = (value or "").strip()
    if len(text) < 4 or not text[:4].isdigit():
        return None
    hour, minute = int(text[:2]), int(text[2:4])
    if not (0 <= hour < 24 and 0 <= minute < 60):
        return None
    return hour, minute


def _to_opening_time(raw: dict[str, Any] | None) -> OpeningTime | None:
    if not raw:
        return None
    parsed = parse_hhmm(raw.get("time"))
    if parsed is None:
        return None
    try:
        return OpeningTime(day=raw.get("day"), hour=parsed[0], minute=parsed[1])
    except ValidationError:
        return None


def normalize_opening_hours(raw: dict[str, Any] | None) -> OpeningHours | None:
    """Map Google ``opening_hours`` to ``OpeningHours``.

    A period without a close runs to 23:59 on its opening day. Periods with
    unreadable times are dropped.
    """
    if not raw:
        return None

    periods: list[OpeningPeriod] | None = None
    raw_periods = raw.get("periods")
    if raw_periods is not None:
        periods = []
        for raw_period in raw_periods:
            open_time = _to_opening_time(raw_period.get("open"))
            if open_time is None:
                continue
            close_time = _to_opening_time(raw_period.get("close"))
            if close_time is None:
                close_time = OpeningTime(day=open_time.day, hour=23, minute=59)
            periods.append(OpeningPeriod(open=open_time, close=close_time))

    open_now = raw.get("open_now")
    return OpeningHours(
        open_now=open_now if isinstance(open_now, bool) else None,
        periods=periods,
    )


class GooglePlacesService(PlacesServiceProtocol):
    """Places service backed by the Google Places web service."""

    _BASE_URL = "https://maps.googleapis.com/maps/api/place"
    _NEARBY_PATH = "/nearbysearch/json"
    _DETAILS_PATH = "/details/json"
    _PHOTO_PATH = "/photo"
    _DETAILS_FIELDS = "website,url,formatted_phone_number,international_phone_number"
    _PHOTO_MAX_WIDTH = 400

    def __init__(self, api_key: str, timeout_seconds: int = 10, max_results: int = 60) -> None:
        if not api_key:
            raise GooglePlacesError("PLACES_API_KEY is not configured")
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._max_results = max_results

    @classmethod
    def from_settings(cls) -> GooglePlacesService:
        """Build the service from application settings."""
        settings = get_settings()
        timeout_policy = get_timeout_policy(settings)
        if not settings.PLACES_API_KEY:
            logger.error("PLACES_API_KEY is not configured.")
        return cls(
            api_key=settings.PLACES_API_KEY or "",
            timeout_seconds=timeout_policy.places_timeout_seconds,
            max_results=settings.PLACES_MAX_RESULTS,
        )

    async def nearby(
        self,
        lat: float,
        lng: float,
        radius_meters: int = 1500,
        keyword: str | None = None,
    ) -> list[Place]:
        """Run a Nearby Search around the coordinate."""
        params: dict[str, Any] = {
            "location": f"{lat},{lng}",
            "radius": str(radius_meters),
            "key": self._api_key,
        }
        if keyword and keyword.strip():
            params["keyword"] = keyword.strip()
        else:
            params["type"] = self.DEFAULT_TYPE_FILTER

        logger.info("Places nearby search started: lat=%s lng=%s radius=%s", lat, lng, radius_meters)
        data = await fetch_json(
            f"{self._BASE_URL}{self._NEARBY_PATH}",
            params,
            timeout_seconds=self._timeout_seconds,
            error_cls=GooglePlacesError,
        )
        self._raise_for_status(data)

        results = data.get("results") or []
        places = [place for place in (self._map_place(item) for item in results[: self._max_results]) if place]
        logger.info("Places nearby search completed: count=%d", len(places))
        return places

    async def details(self, place_id: str) -> PlaceDetails | None:
        """Fetch website and phone details for a place."""
        if not place_id:
            return None

        data = await fetch_json(
            f"{self._BASE_URL}{self._DETAILS_PATH}",
            {"place_id": place_id, "fields": self._DETAILS_FIELDS, "key": self._api_key},
            timeout_seconds=self._timeout_seconds,
            error_cls=GooglePlacesError,
        )
        self._raise_for_status(data)

        result = data.get("result") or {}
        website = result.get("website")
        maps_url = result.get("url")
        return PlaceDetails(
            website=website,
            menu_url=website or maps_url,
            google_maps_url=maps_url,
            phone=result.get("international_phone_number") or result.get("formatted_phone_number"),
        )

    def build_photo_url(self, photo_reference: str) -> str:
        query = urlencode(
            {"maxwidth": self._PHOTO_MAX_WIDTH, "photo_reference": photo_reference, "key": self._api_key}
        )
        return f"{self._BASE_URL}{self._PHOTO_PATH}?{query}"

    @staticmethod
    def build_maps_url(lat: float, lng: float, place_id: str) -> str:
        query = urlencode({"api": 1, "query": f"{lat},{lng}", "query_place_id": place_id})
        return f"https://www.google.com/maps/search/?{query}"

    @staticmethod
    def _raise_for_status(data: dict[str, Any]) -> None:
        status = data.get("status")
        if status not in _OK_STATUSES:
            raise GooglePlacesError(f"Places API error: {status} - {data.get('error_message')}")

    def _map_place(self, raw: dict[str, Any]) -> Place | None:
        location = (raw.get("geometry") or {}).get("location") or {}
        latitude = location.get("lat")
        longitude = location.get("lng")
        place_id = raw.get("place_id")
        name = raw.get("name")

        if not (name and place_id and latitude is not None and longitude is not None):
            return None

        photos = raw.get("photos") or []
        photo_reference = photos[0].get("photo_reference") if photos else None

        try:
            return Place(
                id=place_id,
                name=name,
                types=raw.get("types") or [],
                location=GeoPoint(lat=latitude, lng=longitude),
                opening_hours=normalize_opening_hours(raw.get("opening_hours")),
                rating=raw.get("rating"),
                vicinity=raw.get("vicinity"),
                photo_url=self.build_photo_url(photo_reference) if photo_reference else None,
                google_maps_url=self.build_maps_url(latitude, longitude, place_id),
            )
        except ValidationError as exc:
            logger.warning("Skipping malformed place: place_id=%s error=%s", place_id, exc)
            return None


@lru_cache(maxsize=1)
def get_google_places_service() -> GooglePlacesService:
    """Return the process-wide service instance."""
    return GooglePlacesService.from_settings()

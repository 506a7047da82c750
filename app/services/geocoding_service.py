"""Google geocoding adapters: text search, reverse geocoding and autocomplete."""

from __future__ import annotations

from typing import Any

from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy
from app.schemas.location import AutocompletePrediction, GeocodeResult, ReverseGeocodeResult
from app.services.http_client import ExternalServiceError, fetch_json

logger = get_logger(__name__)

TEXT_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"
REVERSE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
AUTOCOMPLETE_URL = "https://maps.googleapis.com/maps/api/place/autocomplete/json"
REVERSE_RESULT_TYPES = "locality|administrative_area_level_1|country"
_ACCEPTED_STATUSES = frozenset({"OK", "ZERO_RESULTS"})


class GeocodingServiceError(ExternalServiceError):
    """Raised when a geocoding call fails or is not configured."""

    service_name = "Geocoding API"


def _check_status(data: dict[str, Any]) -> None:
    status = data.get("status")
    if status not in _ACCEPTED_STATUSES:
        raise GeocodingServiceError(f"Geocoding API error: {status} - {data.get('error_message')}")


def _component(components: list[dict[str, Any]], component_type: str, key: str) -> str | None:
    for component in components:
        if component_type in (component.get("types") or []):
            return component.get(key)
    return None


def build_reverse_geocode_result(primary: dict[str, Any]) -> ReverseGeocodeResult:
    """Build a ``City, Region, Country`` label from the first geocoding result.

    Without both a city and a country the formatted address (or the country)
    is used instead.
    """
    components = primary.get("address_components") or []
    city = _component(components, "locality", "long_name")
    admin = _component(components, "administrative_area_level_1", "short_name")
    country = _component(components, "country", "long_name")
    formatted = primary.get("formatted_address") or None

    if city and country:
        label = f"{city}, {admin}, {country}" if admin else f"{city}, {country}"
    else:
        label = formatted or country

    return ReverseGeocodeResult(label=label, city=city, admin=admin, country=country, formatted=formatted)


class GoogleGeocodingService:
    """Location lookups backed by the Places API key."""

    def __init__(self, api_key: str, timeout_seconds: int = 10) -> None:
        if not api_key:
            raise GeocodingServiceError("PLACES_API_KEY is not configured")
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls) -> GoogleGeocodingService:
        settings = get_settings()
        return cls(
            api_key=settings.PLACES_API_KEY or "",
            timeout_seconds=get_timeout_policy(settings).external_api_timeout_seconds,
        )

    async def _get(self, url: str, params: dict[str, str]) -> dict[str, Any]:
        return await fetch_json(
            url,
            {**params, "key": self._api_key},
            timeout_seconds=self._timeout_seconds,
            error_cls=GeocodingServiceError,
        )

    async def search(self, query: str) -> GeocodeResult | None:
        """Return the first Text Search match for ``query``, or None."""
        data = await self._get(TEXT_SEARCH_URL, {"query": query})
        _check_status(data)

        results = data.get("results") or []
        if not results:
            logger.info("Geocode found no results: query=%s", query)
            return None

        first = results[0]
        location = (first.get("geometry") or {}).get("location") or {}
        if location.get("lat") is None or location.get("lng") is None or not first.get("place_id"):
            raise GeocodingServiceError("Geocoding API result is missing a location")
        return GeocodeResult(
            name=first.get("name") or query,
            address=first.get("formatted_address"),
            lat=location.get("lat"),
            lng=location.get("lng"),
            place_id=first.get("place_id"),
        )

    async def reverse(self, lat: float, lng: float) -> ReverseGeocodeResult | None:
        """Return a readable label for a coordinate, or None when nothing matches."""
        data = await self._get(
            REVERSE_GEOCODE_URL,
            {"latlng": f"{lat},{lng}", "result_type": REVERSE_RESULT_TYPES},
        )
        _check_status(data)

        results = data.get("results") or []
        if not results:
            logger.info("Reverse geocode found no results: lat=%s lng=%s", lat, lng)
            return None
        return build_reverse_geocode_result(results[0])

    async def autocomplete(self, text: str) -> list[AutocompletePrediction]:
        """Return geocode-type suggestions for partial input."""
        data = await self._get(AUTOCOMPLETE_URL, {"input": text, "types": "geocode"})
        _check_status(data)

        return [
            AutocompletePrediction(description=item["description"], place_id=item["place_id"])
            for item in data.get("predictions") or []
            if item.get("description") and item.get("place_id")
        ]


def get_geocoding_service() -> GoogleGeocodingService:
    return GoogleGeocodingService.from_settings()

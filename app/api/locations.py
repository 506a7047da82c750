"""Location search API: geocoding, reverse geocoding and autocomplete."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import get_geocoding_provider
from app.core.config import get_settings
from app.core.logger import get_logger
from app.schemas.location import AutocompleteResponse, GeocodeRequest, GeocodeResult, ReverseGeocodeResult
from app.services.geocoding_service import GoogleGeocodingService
from app.services.http_client import ExternalServiceError

router = APIRouter(prefix="/api", tags=["locations"])
logger = get_logger(__name__)

MIN_AUTOCOMPLETE_INPUT_LENGTH = 2


def _bad_gateway(message: str, exc: ExternalServiceError) -> HTTPException:
    logger.error("%s: %s", message, exc)
    detail = f"{message}: {exc}" if get_settings().EXPOSE_INTERNAL_ERRORS else message
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


@router.post("/geocode", response_model=GeocodeResult)
async def geocode(
    request: GeocodeRequest,
    geocoding_service: GoogleGeocodingService = Depends(get_geocoding_provider),  # noqa: B008
) -> GeocodeResult:
    """Resolve a free-form query to the best matching location."""
    query = (request.query or "").strip()
    if not query:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Query is required")

    try:
        result = await geocoding_service.search(query)
    except ExternalServiceError as exc:
        raise _bad_gateway("Failed to search location", exc) from exc

    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No results found")
    return result


@router.get("/reverse-geocode", response_model=ReverseGeocodeResult)
async def reverse_geocode(
    lat: float = Query(..., ge=-90.0, le=90.0, description="Latitude"),
    lng: float = Query(..., ge=-180.0, le=180.0, description="Longitude"),
    geocoding_service: GoogleGeocodingService = Depends(get_geocoding_provider),  # noqa: B008
) -> ReverseGeocodeResult:
    """Return a readable city/region/country label for a coordinate."""
    try:
        result = await geocoding_service.reverse(lat, lng)
    except ExternalServiceError as exc:
        raise _bad_gateway("Failed to reverse geocode", exc) from exc

    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No location found")
    return result


@router.get("/autocomplete", response_model=AutocompleteResponse)
async def autocomplete(
    input: str = Query(default="", description="Partial location text"),  # noqa: A002
    geocoding_service: GoogleGeocodingService = Depends(get_geocoding_provider),  # noqa: B008
) -> AutocompleteResponse:
    """Suggest locations for partial input of at least two characters."""
    text = input.strip()
    if len(text) < MIN_AUTOCOMPLETE_INPUT_LENGTH:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="input is required")

    try:
        predictions = await geocoding_service.autocomplete(text)
    except ExternalServiceError as exc:
        raise _bad_gateway("Failed to fetch suggestions", exc) from exc
    return AutocompleteResponse(predictions=predictions)

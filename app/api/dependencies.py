"""API dependencies."""

from fastapi import HTTPException, status

from app.core.logger import get_logger
from app.services.geocoding_service import GoogleGeocodingService, get_geocoding_service
from app.services.google_places_service import get_google_places_service
from app.services.http_client import ExternalServiceError
from app.services.places_service import PlacesServiceProtocol
from app.services.timezone_service import GoogleTimezoneService, get_timezone_service
from app.services.weather_service import OpenMeteoWeatherService, get_weather_service

logger = get_logger(__name__)


def _service_unavailable(exc: ExternalServiceError) -> HTTPException:
    logger.error("External service not configured: %s", exc)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"{exc.service_name} is not configured.",
    )


def get_places_service() -> PlacesServiceProtocol:
    """Provide the Places service."""
    try:
        return get_google_places_service()
    except ExternalServiceError as exc:
        raise _service_unavailable(exc) from exc


def get_weather_provider() -> OpenMeteoWeatherService:
    """Provide the weather service."""
    return get_weather_service()


def get_timezone_provider() -> GoogleTimezoneService:
    """Provide the timezone service."""
    try:
        return get_timezone_service()
    except ExternalServiceError as exc:
        raise _service_unavailable(exc) from exc


def get_geocoding_provider() -> GoogleGeocodingService:
    """Provide the geocoding service."""
    try:
        return get_geocoding_service()
    except ExternalServiceError as exc:
        raise _service_unavailable(exc) from exc

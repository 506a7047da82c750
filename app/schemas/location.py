"""Location search schemas: forward/reverse geocoding and autocomplete."""

from pydantic import Field

from app.schemas.common import ApiModel


class GeocodeRequest(ApiModel):
    """Body of ``POST /api/geocode``; an empty query is rejected by the router."""

    query: str | None = None


class GeocodeResult(ApiModel):
    """Best text-search match for a free-form query."""

    name: str = Field(..., description="Place name")
    address: str | None = Field(default=None, description="Formatted address")
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)
    place_id: str = Field(..., description="Google Places ID")


class ReverseGeocodeResult(ApiModel):
    """Human-readable label for a coordinate."""

    label: str | None = Field(default=None, description="City, region and country")
    city: str | None = None
    admin: str | None = Field(default=None, description="First-level administrative area, short form")
    country: str | None = None
    formatted: str | None = Field(default=None, description="Full formatted address")


class AutocompletePrediction(ApiModel):
    description: str
    place_id: str


class AutocompleteResponse(ApiModel):
    predictions: list[AutocompletePrediction] = Field(default_factory=list)

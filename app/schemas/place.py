"""Place models normalised from the Places provider and the ranked output."""

from enum import StrEnum

from pydantic import Field

from app.schemas.common import FrozenApiModel


class PlaceCategory(StrEnum):
    """Indoor/outdoor bucket derived from a place's type tags."""

    INDOOR = "indoor"
    OUTDOOR = "outdoor"
    MIXED = "mixed"


class GeoPoint(FrozenApiModel):
    """Latitude/longitude pair in degrees."""

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude")
    lng: float = Field(..., ge=-180.0, le=180.0, description="Longitude")


class OpeningTime(FrozenApiModel):
    """A weekday and wall-clock time in the place's local timezone."""

    day: int = Field(..., ge=0, le=6, description="Day of week, 0=Sunday")
    hour: int = Field(..., ge=0, le=23, description="Hour of day")
    minute: int = Field(..., ge=0, le=59, description="Minute of hour")

    @property
    def minutes(self) -> int:
        return self.hour * 60 + self.minute


class OpeningPeriod(FrozenApiModel):
    """One continuous open interval, possibly crossing midnight."""

    open: OpeningTime = Field(..., description="Opening time")
    close: OpeningTime = Field(..., description="Closing time")


class OpeningHours(FrozenApiModel):
    """Opening schedule; ``open_now`` wins over ``periods`` when present."""

    open_now: bool | None = Field(default=None, description="Provider-reported open flag")
    periods: list[OpeningPeriod] | None = Field(default=None, description="Weekly opening periods")


class Place(FrozenApiModel):
    """A candidate point of interest."""

    id: str = Field(..., min_length=1, description="Provider place id")
    name: str = Field(..., description="Display name")
    types: list[str] = Field(default_factory=list, description="Provider type tags")
    location: GeoPoint = Field(..., description="Place coordinates")
    opening_hours: OpeningHours | None = Field(default=None, description="Opening schedule")
    rating: float | None = Field(default=None, ge=0.0, le=5.0, description="Average rating")
    vicinity: str | None = Field(default=None, description="Short address")
    photo_url: str | None = Field(default=None, description="Photo URL")
    google_maps_url: str | None = Field(default=None, description="Google Maps link")


class ScoredPlace(Place):
    """A place with its ranking score and explanation."""

    score: int = Field(..., description="Aggregate suitability score")
    distance: float = Field(..., ge=0.0, description="Distance from the user in km")
    is_open: bool = Field(..., description="Whether the place is open now")
    explanation: str = Field(..., description="Human-readable reason for the score")


class PlaceDetails(FrozenApiModel):
    """Contact details looked up for a single place."""

    website: str | None = Field(default=None, description="Official website")
    menu_url: str | None = Field(default=None, description="Website, or the maps page when no website")
    google_maps_url: str | None = Field(default=None, description="Google Maps page")
    phone: str | None = Field(default=None, description="Phone number")

"""Discovery API schemas."""

from pydantic import Field

from app.schemas.common import ApiModel
from app.schemas.place import ScoredPlace
from app.schemas.weather import Weather


class TimezoneInfo(ApiModel):
    """Timezone resolved for a coordinate."""

    timezone_id: str = Field(..., description="IANA timezone id")
    local_time: str = Field(..., description="Local wall-clock time as ISO 8601")


class DiscoveryResponse(ApiModel):
    """Weather plus ranked nearby places."""

    weather: Weather = Field(..., description="Current weather")
    local_time: str = Field(..., description="Local time at the user's location")
    timezone: str = Field(..., description="IANA timezone id")
    recommendations: list[ScoredPlace] = Field(default_factory=list, description="Places, best first")

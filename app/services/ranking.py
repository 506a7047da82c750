"""Weather-aware scoring and ranking of nearby places."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import UTC, datetime

from app.core.geo import distance_km
from app.core.logger import get_logger
from app.core.opening_hours import is_place_open
from app.core.place_category import classify_place, is_indoor_place
from app.schemas.place import GeoPoint, Place, PlaceCategory, ScoredPlace
from app.schemas.weather import WeatherCategory

logger = get_logger(__name__)

BASE_SCORE = 50
OPEN_BONUS = 20
CLOSED_PENALTY = 20
DISTANCE_PENALTY_PER_KM = 5
MAX_DISTANCE_PENALTY = 25
RATING_BASELINE = 3
RATING_WEIGHT = 5
CLOSED_SUFFIX = " (currently closed)"

_WEATHER_MATCH_SCORES: dict[WeatherCategory, dict[PlaceCategory, int]] = {
    WeatherCategory.RAINY: {PlaceCategory.INDOOR: 30, PlaceCategory.MIXED: 10, PlaceCategory.OUTDOOR: -10},
    WeatherCategory.HOT: {PlaceCategory.INDOOR: 25, PlaceCategory.MIXED: 10, PlaceCategory.OUTDOOR: 0},
    WeatherCategory.COLD: {PlaceCategory.INDOOR: 25, PlaceCategory.MIXED: 10, PlaceCategory.OUTDOOR: -5},
    WeatherCategory.CLEAR: {PlaceCategory.INDOOR: 5, PlaceCategory.MIXED: 15, PlaceCategory.OUTDOOR: 30},
}

# (indoor reason, outdoor reason) per weather category.
_WEATHER_REASONS: dict[WeatherCategory, tuple[str, str]] = {
    WeatherCategory.RAINY: (
        "Great choice for rainy weather — stay dry indoors",
        "Outdoor spot, but might want to wait for better weather",
    ),
    WeatherCategory.HOT: (
        "Perfect for hot weather — enjoy the AC",
        "Outdoor location — consider visiting in cooler hours",
    ),
    WeatherCategory.COLD: (
        "Warm indoor spot for cold weather",
        "Outdoor spot — bundle up!",
    ),
    WeatherCategory.CLEAR: (
        "Nice indoor option for clear weather",
        "Great outdoor spot for clear weather",
    ),
}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def weather_match_score(place_category: PlaceCategory, weather_category: WeatherCategory) -> int:
    """Return the bonus a place category earns under the given weather."""
    return _WEATHER_MATCH_SCORES[WeatherCategory(weather_category)][PlaceCategory(place_category)]


def calculate_score(
    place: Place,
    distance: float,
    is_open: bool,
    weather_category: WeatherCategory,
) -> int:
    """Aggregate the weather, open-status, distance and rating terms.

    The distance penalty is capped; nothing else is clamped, so the score can
    go above 100 or below 0.
    """
    score = float(BASE_SCORE)
    score += weather_match_score(classify_place(place.types), weather_category)
    score += OPEN_BONUS if is_open else -CLOSED_PENALTY
    score -= min(distance * DISTANCE_PENALTY_PER_KM, MAX_DISTANCE_PENALTY)

    if place.rating is not None:
        score += (place.rating - RATING_BASELINE) * RATING_WEIGHT

    return _round_half_up(score)


def generate_explanation(place: Place, is_open: bool, weather_category: WeatherCategory) -> str:
    indoor_reason, outdoor_reason = _WEATHER_REASONS[WeatherCategory(weather_category)]
    reason = indoor_reason if is_indoor_place(place.types) else outdoor_reason
    return reason if is_open else f"{reason}{CLOSED_SUFFIX}"


def score_place(
    place: Place,
    user_location: GeoPoint,
    weather_category: WeatherCategory,
    timezone_id: str,
    now: datetime,
) -> ScoredPlace:
    distance = distance_km(user_location, place.location)
    is_open = is_place_open(place.opening_hours, timezone_id, now)

    return ScoredPlace(
        **place.model_dump(),
        score=calculate_score(place, distance, is_open, weather_category),
        distance=distance,
        is_open=is_open,
        explanation=generate_explanation(place, is_open, weather_category),
    )


def rank_places(
    places: Sequence[Place],
    user_location: GeoPoint,
    weather_category: WeatherCategory,
    timezone_id: str,
    now: datetime | None = None,
) -> list[ScoredPlace]:
    """Score every place and return them best first.

    Ordering is score descending, then distance ascending, then id ascending.
    ``now`` is fixed once so every place is judged against the same instant.

    Args:
        places: Candidate places from the Places provider.
        user_location: Where the user is.
        weather_category: Current weather bucket at the user's location.
        timezone_id: IANA timezone used to read opening hours.
        now: Evaluation instant, defaults to the current time.

    Returns:
        One ``ScoredPlace`` per input place.
    """
    instant = now or datetime.now(UTC)
    scored = [score_place(place, user_location, weather_category, timezone_id, instant) for place in places]
    scored.sort(key=lambda item: (-item.score, item.distance, item.id))

    logger.info(
        "Ranked places: count=%d weather=%s timezone=%s",
        len(scored),
        WeatherCategory(weather_category).value,
        timezone_id,
    )
    return scored

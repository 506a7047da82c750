"""Indoor/outdoor classification from Places type tags."""

from __future__ import annotations

from collections.abc import Iterable

from app.schemas.place import PlaceCategory

INDOOR_TYPES: frozenset[str] = frozenset(
    {
        "restaurant",
        "cafe",
        "bar",
        "museum",
        "shopping_mall",
        "gym",
        "library",
        "movie_theater",
        "spa",
        "bowling_alley",
        "casino",
        "night_club",
        "store",
        "supermarket",
        "book_store",
        "clothing_store",
        "department_store",
        "electronics_store",
        "furniture_store",
        "home_goods_store",
        "jewelry_store",
        "shoe_store",
        "art_gallery",
        "aquarium",
    }
)

OUTDOOR_TYPES: frozenset[str] = frozenset(
    {
        "park",
        "campground",
        "zoo",
        "amusement_park",
        "stadium",
        "tourist_attraction",
        "natural_feature",
    }
)

RESTAURANT_TYPES: frozenset[str] = frozenset(
    {
        "restaurant",
        "food",
        "meal_takeaway",
        "meal_delivery",
        "cafe",
    }
)


def is_indoor_place(types: Iterable[str]) -> bool:
    return any(place_type in INDOOR_TYPES for place_type in types)


def is_outdoor_place(types: Iterable[str]) -> bool:
    return any(place_type in OUTDOOR_TYPES for place_type in types)


def is_restaurant(types: Iterable[str]) -> bool:
    return any(place_type in RESTAURANT_TYPES for place_type in types)


def classify_place(types: Iterable[str]) -> PlaceCategory:
    """Classify type tags; hitting both sets or neither yields ``MIXED``."""
    tags = list(types)
    indoor = is_indoor_place(tags)
    outdoor = is_outdoor_place(tags)

    if indoor and not outdoor:
        return PlaceCategory.INDOOR
    if outdoor and not indoor:
        return PlaceCategory.OUTDOOR
    return PlaceCategory.MIXED

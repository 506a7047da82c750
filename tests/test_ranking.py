"""Ranking engine tests."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from app.schemas.place import GeoPoint, OpeningHours, Place, PlaceCategory
from app.schemas.weather import WeatherCategory
from app.services.ranking import (
    calculate_score,
    generate_explanation,
    rank_places,
    weather_match_score,
)

USER = GeoPoint(lat=0.0, lng=0.0)
NOW = datetime(2024, 1, 8, 12, 0, tzinfo=UTC)


def _place(
    place_id: str,
    types: list[str],
    *,
    lng: float = 0.0,
    open_now: bool | None = True,
    rating: float | None = None,
) -> Place:
    return Place(
        id=place_id,
        name=place_id.title(),
        types=types,
        location=GeoPoint(lat=0.0, lng=lng),
        opening_hours=OpeningHours(open_now=open_now),
        rating=rating,
    )


@pytest.mark.parametrize(
    ("weather", "indoor", "mixed", "outdoor"),
    [
        (WeatherCategory.RAINY, 30, 10, -10),
        (WeatherCategory.HOT, 25, 10, 0),
        (WeatherCategory.COLD, 25, 10, -5),
        (WeatherCategory.CLEAR, 5, 15, 30),
    ],
)
def test_weather_match_table(weather: WeatherCategory, indoor: int, mixed: int, outdoor: int) -> None:
    assert weather_match_score(PlaceCategory.INDOOR, weather) == indoor
    assert weather_match_score(PlaceCategory.MIXED, weather) == mixed
    assert weather_match_score(PlaceCategory.OUTDOOR, weather) == outdoor


def test_score_rounds_half_up() -> None:
    # 50 + 30 + 20 - 5 + 7.5 = 102.5
    place = _place("cafe", ["cafe"], rating=4.5)

    assert calculate_score(place, 1.0, True, WeatherCategory.RAINY) == 103


def test_score_caps_distance_penalty_and_does_not_clamp() -> None:
    place = _place("park", ["park"], rating=0.0)

    # 50 - 10 - 20 - 25 - 15 = -20
    assert calculate_score(place, 40.0, False, WeatherCategory.RAINY) == -20


def test_score_without_rating_has_no_rating_term() -> None:
    place = _place("museum", ["museum"], rating=None)

    assert calculate_score(place, 0.0, True, WeatherCategory.CLEAR) == 75


def test_explanation_templates() -> None:
    indoor = _place("mall", ["shopping_mall"])
    outdoor = _place("zoo", ["zoo"])

    assert generate_explanation(indoor, True, WeatherCategory.RAINY) == (
        "Great choice for rainy weather — stay dry indoors"
    )
    assert generate_explanation(outdoor, True, WeatherCategory.CLEAR) == "Great outdoor spot for clear weather"
    assert generate_explanation(outdoor, False, WeatherCategory.COLD) == "Outdoor spot — bundle up! (currently closed)"


def test_mixed_place_uses_indoor_framing_when_it_has_an_indoor_tag() -> None:
    place = _place("park-cafe", ["park", "cafe"])

    assert generate_explanation(place, True, WeatherCategory.HOT) == "Perfect for hot weather — enjoy the AC"


def test_rank_places_orders_by_score_then_distance_then_id() -> None:
    places = [
        _place("far-park", ["park"], lng=0.1),
        _place("near-park", ["park"], lng=0.06),
        _place("b-museum", ["museum"], lng=0.0),
        _place("a-museum", ["museum"], lng=0.0),
    ]

    ranked = rank_places(places, USER, WeatherCategory.CLEAR, "UTC", now=NOW)

    # Parks beyond 5 km share the capped penalty: 50 + 30 + 20 - 25 = 75.
    assert [place.id for place in ranked] == ["a-museum", "b-museum", "near-park", "far-park"]
    assert ranked[2].score == ranked[3].score == 75
    assert ranked[2].distance < ranked[3].distance


def test_rank_places_preserves_cardinality_and_fields() -> None:
    places = [
        _place("bar", ["bar"], lng=0.01, open_now=False, rating=4.2),
        _place("park", ["park"], lng=0.02),
        _place("unknown", [], lng=0.03, open_now=None),
    ]

    ranked = rank_places(places, USER, WeatherCategory.RAINY, "UTC", now=NOW)

    assert len(ranked) == len(places)
    assert sorted(place.id for place in ranked) == ["bar", "park", "unknown"]
    by_id = {place.id: place for place in ranked}
    assert by_id["bar"].is_open is False
    assert by_id["bar"].explanation.endswith("(currently closed)")
    assert by_id["bar"].rating == 4.2
    assert by_id["unknown"].is_open is True
    assert all(isinstance(place.score, int) for place in ranked)


def test_rank_places_empty_input() -> None:
    assert rank_places([], USER, WeatherCategory.HOT, "UTC", now=NOW) == []


def test_scored_place_serialises_with_camel_case_keys() -> None:
    ranked = rank_places([_place("cafe", ["cafe"], lng=0.01)], USER, WeatherCategory.HOT, "UTC", now=NOW)

    payload = ranked[0].model_dump(by_alias=True)

    assert payload["isOpen"] is True
    assert payload["openingHours"] == {"openNow": True, "periods": None}
    assert "photoUrl" in payload

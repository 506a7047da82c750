"""Google Places adapter tests."""

from __future__ import annotations

import asyncio

import pytest

import app.services.google_places_service as google_places_service
from app.services.google_places_service import (
    GooglePlacesError,
    GooglePlacesService,
    normalize_opening_hours,
    parse_hhmm,
)


def _raw_place(index: int, **overrides) -> dict:
    raw = {
        "place_id": f"place-{index}",
        "name": f"Place {index}",
        "types": ["cafe", "food"],
        "geometry": {"location": {"lat": 37.5 + index * 0.001, "lng": 127.0}},
        "vicinity": "Jongno-gu",
        "rating": 4.2,
        "opening_hours": {"open_now": True},
        "photos": [{"photo_reference": f"photo-{index}"}],
    }
    raw.update(overrides)
    return raw


def _install_fake_fetch(monkeypatch, payload: dict) -> dict:
    captured: dict = {}

    async def _fake_fetch_json(url, params, *, timeout_seconds, error_cls):
        captured.update(url=url, params=params)
        return payload

    monkeypatch.setattr(google_places_service, "fetch_json", _fake_fetch_json)
    return captured


def test_service_requires_api_key() -> None:
    with pytest.raises(GooglePlacesError):
        GooglePlacesService(api_key="")


def test_parse_hhmm() -> None:
    assert parse_hhmm("0930") == (9, 30)
    assert parse_hhmm("2359") == (23, 59)
    assert parse_hhmm("2460") is None
    assert parse_hhmm("9:3") is None
    assert parse_hhmm(None) is None


def test_normalize_opening_hours_fills_missing_close() -> None:
    hours = normalize_opening_hours(
        {
            "open_now": False,
            "periods": [
                {"open": {"day": 1, "time": "0930"}, "close": {"day": 1, "time": "1730"}},
                {"open": {"day": 0, "time": "0000"}},
                {"open": {"day": 2, "time": "bad"}},
            ],
        }
    )

    assert hours.open_now is False
    assert len(hours.periods) == 2
    assert (hours.periods[0].open.hour, hours.periods[0].open.minute) == (9, 30)
    assert (hours.periods[1].close.day, hours.periods[1].close.hour, hours.periods[1].close.minute) == (0, 23, 59)
    assert normalize_opening_hours(None) is None


def test_nearby_maps_results_and_uses_type_filter(monkeypatch) -> None:
    captured = _install_fake_fetch(
        monkeypatch,
        {"status": "OK", "results": [_raw_place(1), _raw_place(2, name=None), _raw_place(3, photos=[])]},
    )
    service = GooglePlacesService(api_key="test-key")

    places = asyncio.run(service.nearby(37.5, 127.0, radius_meters=5000))

    assert [place.id for place in places] == ["place-1", "place-3"]
    assert places[0].opening_hours.open_now is True
    assert places[0].photo_url.startswith("https://maps.googleapis.com/maps/api/place/photo?")
    assert "photo_reference=photo-1" in places[0].photo_url
    assert "query_place_id=place-1" in places[0].google_maps_url
    assert places[1].photo_url is None
    assert captured["params"]["type"] == GooglePlacesService.DEFAULT_TYPE_FILTER
    assert captured["params"]["radius"] == "5000"
    assert "keyword" not in captured["params"]


def test_nearby_with_keyword_and_result_cap(monkeypatch) -> None:
    captured = _install_fake_fetch(
        monkeypatch,
        {"status": "OK", "results": [_raw_place(index) for index in range(5)]},
    )
    service = GooglePlacesService(api_key="test-key", max_results=3)

    places = asyncio.run(service.nearby(37.5, 127.0, keyword=" ramen "))

    assert len(places) == 3
    assert captured["params"]["keyword"] == "ramen"
    assert "type" not in captured["params"]


def test_nearby_accepts_zero_results(monkeypatch) -> None:
    _install_fake_fetch(monkeypatch, {"status": "ZERO_RESULTS", "results": []})

    assert asyncio.run(GooglePlacesService(api_key="test-key").nearby(0.0, 0.0)) == []


def test_nearby_raises_on_error_status(monkeypatch) -> None:
    _install_fake_fetch(monkeypatch, {"status": "REQUEST_DENIED", "error_message": "bad key"})

    with pytest.raises(GooglePlacesError, match="REQUEST_DENIED"):
        asyncio.run(GooglePlacesService(api_key="test-key").nearby(0.0, 0.0))


def test_details_prefers_website_for_menu_url(monkeypatch) -> None:
    _install_fake_fetch(
        monkeypatch,
        {
            "status": "OK",
            "result": {
                "url": "https://maps.google.com/?cid=1",
                "formatted_phone_number": "02-123-4567",
                "international_phone_number": "+82 2-123-4567",
            },
        },
    )

    details = asyncio.run(GooglePlacesService(api_key="test-key").details("place-1"))

    assert details.website is None
    assert details.menu_url == "https://maps.google.com/?cid=1"
    assert details.phone == "+82 2-123-4567"

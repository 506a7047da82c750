"""AI insight generation tests with a stubbed LLM call."""

from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace

import app.services.insight_service as insight_service
from app.schemas.insight import (
    BriefingPlace,
    BriefingRequest,
    InsightPlace,
    InsightWeather,
    PackingRequest,
    PlaceInsightRequest,
)


def _request() -> PlaceInsightRequest:
    return PlaceInsightRequest(
        place=InsightPlace(name="Seoul Museum of History", types=["museum"], rating=4.5, distance=0.8, is_open=True),
        weather=InsightWeather(temperature=18, description="Moderate rain", category="rainy"),
        local_time="2024-06-01T12:00:00+09:00",
        timezone="Asia/Seoul",
    )


def _stub_llm(monkeypatch, content: str) -> list:
    calls: list = []

    async def _fake_ainvoke(stage, messages, *, timeout_seconds=None, settings=None):
        calls.append((stage, messages))
        return SimpleNamespace(content=content)

    monkeypatch.setattr(insight_service, "ainvoke", _fake_ainvoke)
    return calls


def test_generate_place_insight_parses_llm_json(monkeypatch) -> None:
    calls = _stub_llm(
        monkeypatch,
        "```json\n"
        + json.dumps({"headline": "Stay dry with history", "tip": "Great rainy-day pick.", "weatherNote": "Rain."})
        + "\n```",
    )

    insight = asyncio.run(insight_service.generate_place_insight(_request()))

    assert insight.headline == "Stay dry with history"
    assert insight.weather_note == "Rain."
    assert calls[0][0] == insight_service.Stage.PLACE_INSIGHT
    assert "Seoul Museum of History" in calls[0][1][1].content


def test_generate_place_insight_falls_back_on_unparseable_output(monkeypatch) -> None:
    _stub_llm(monkeypatch, "not json")

    insight = asyncio.run(insight_service.generate_place_insight(_request()))

    assert insight.headline == "Seoul Museum of History is a solid pick right now"
    assert insight.weather_note == "Check the sky and dress for comfort."


def test_generate_weather_alerts_truncates_to_three(monkeypatch) -> None:
    alerts = [
        {"id": str(index), "title": f"Alert {index}", "message": "Take care.", "severity": "caution"}
        for index in range(4)
    ]
    _stub_llm(monkeypatch, json.dumps({"alerts": alerts}))

    response = asyncio.run(insight_service.generate_weather_alerts(_request().weather))

    assert [alert.id for alert in response.alerts] == ["0", "1", "2"]


def test_generate_weather_alerts_returns_empty_on_failure(monkeypatch) -> None:
    async def _failing_ainvoke(stage, messages, *, timeout_seconds=None, settings=None):
        raise RuntimeError("upstream unavailable")

    monkeypatch.setattr(insight_service, "ainvoke", _failing_ainvoke)

    response = asyncio.run(insight_service.generate_weather_alerts(_request().weather))

    assert response.alerts == []


def test_generate_packing_advice_truncates_list_and_fills_missing_fields(monkeypatch) -> None:
    items = [f"item {index}" for index in range(8)]
    calls = _stub_llm(monkeypatch, json.dumps({"summary": "Bring rain gear.", "packingList": items}))
    request = PackingRequest(weather=_request().weather, local_time="12:00", timezone="Asia/Seoul")

    advice = asyncio.run(insight_service.generate_packing_advice(request))

    assert advice.summary == "Bring rain gear."
    assert advice.packing_list == items[:6]
    assert advice.safety == "Check the sky and stay hydrated."
    assert calls[0][0] == insight_service.Stage.PACKING_ADVICE


def test_generate_packing_advice_falls_back_on_failure(monkeypatch) -> None:
    _stub_llm(monkeypatch, "no json here")

    advice = asyncio.run(insight_service.generate_packing_advice(PackingRequest(weather=_request().weather)))

    assert advice == insight_service.fallback_packing_advice()


def test_generate_briefing_uses_top_three_places(monkeypatch) -> None:
    calls = _stub_llm(monkeypatch, "  Rainy and cozy: head to **Seoul Museum of History**.  ")
    request = BriefingRequest(
        weather=_request().weather,
        recommendations=[BriefingPlace(name=f"Place {index}", explanation="Indoor") for index in range(5)],
        local_time="12:00",
    )

    response = asyncio.run(insight_service.generate_briefing(request))

    assert response.briefing == "Rainy and cozy: head to **Seoul Museum of History**."
    prompt = calls[0][1][1].content
    assert "Place 2 (Indoor)" in prompt
    assert "Place 3" not in prompt
    assert calls[0][0] == insight_service.Stage.DAILY_BRIEFING


def test_generate_briefing_falls_back_on_failure(monkeypatch) -> None:
    async def _failing_ainvoke(stage, messages, *, timeout_seconds=None, settings=None):
        raise RuntimeError("upstream unavailable")

    monkeypatch.setattr(insight_service, "ainvoke", _failing_ainvoke)
    request = BriefingRequest(weather=_request().weather, recommendations=[])

    response = asyncio.run(insight_service.generate_briefing(request))

    assert response.briefing == insight_service.FALLBACK_BRIEFING

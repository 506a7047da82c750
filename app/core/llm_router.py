"""Stage-based LLM client helpers."""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from time import perf_counter
from typing import Any

from langchain_openai import ChatOpenAI

from app.core.config import Settings, get_settings
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy

logger = get_logger(__name__)


class Stage(StrEnum):
    """LLM call stage."""

    PLACE_INSIGHT = "PLACE_INSIGHT"
    WEATHER_ALERTS = "WEATHER_ALERTS"
    PACKING_ADVICE = "PACKING_ADVICE"
    DAILY_BRIEFING = "DAILY_BRIEFING"


# Stages missing here sample at settings.LLM_TEMPERATURE.
_STAGE_TEMPERATURE: dict[Stage, float] = {
    Stage.WEATHER_ALERTS: 0.4,
    Stage.PACKING_ADVICE: 0.5,
    Stage.DAILY_BRIEFING: 0.7,
}

_STAGE_MAX_TOKENS: dict[Stage, int] = {
    Stage.PLACE_INSIGHT: 280,
    Stage.WEATHER_ALERTS: 300,
    Stage.PACKING_ADVICE: 300,
    Stage.DAILY_BRIEFING: 150,
}


class LLMNotConfiguredError(RuntimeError):
    """Raised when no OpenAI API key is configured."""


def strip_code_fence(text: str) -> str:
    """Remove a surrounding Markdown code fence."""
    content = (text or "").strip()
    if content.startswith("```"):
        parts = content.split("```")
        if len(parts) > 1:
            content = parts[1].strip()
            if content.startswith("json"):
                content = content[4:].strip()
    return content.strip()


@lru_cache(maxsize=32)
def _get_chat_openai_client(
    model: str,
    temperature: float,
    max_tokens: int,
    timeout_seconds: int,
    api_key: str,
) -> ChatOpenAI:
    return ChatOpenAI(
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
        api_key=api_key,
        request_timeout=timeout_seconds,
    )


def clear_llm_client_cache() -> None:
    """Drop cached clients (tests, key rotation)."""
    _get_chat_openai_client.cache_clear()


def _resolve_timeout_seconds(timeout_seconds: int | None, settings: Settings) -> int:
    if timeout_seconds is None:
        return get_timeout_policy(settings).llm_timeout_seconds
    return max(1, int(timeout_seconds))


async def ainvoke(
    stage: Stage,
    payload: Any,
    *,
    settings: Settings | None = None,
    timeout_seconds: int | None = None,
) -> Any:
    """Run an async LLM call with the stage's sampling settings."""
    resolved_settings = settings or get_settings()
    if not resolved_settings.OPENAI_API_KEY:
        raise LLMNotConfiguredError("OPENAI_API_KEY is not configured")

    model = resolved_settings.LLM_MODEL_NAME.strip()
    resolved_timeout = _resolve_timeout_seconds(timeout_seconds, resolved_settings)
    client = _get_chat_openai_client(
        model,
        _STAGE_TEMPERATURE.get(stage, resolved_settings.LLM_TEMPERATURE),
        _STAGE_MAX_TOKENS[stage],
        resolved_timeout,
        resolved_settings.OPENAI_API_KEY,
    )

    started = perf_counter()
    try:
        response = await client.ainvoke(payload)
    except Exception as exc:
        logger.warning(
            "LLM async call failed: stage=%s model=%s latency_ms=%.1f",
            stage.value,
            model,
            (perf_counter() - started) * 1000,
            exc_info=exc,
        )
        raise

    logger.info(
        "LLM call succeeded: stage=%s model=%s latency_ms=%.1f",
        stage.value,
        model,
        (perf_counter() - started) * 1000,
    )
    return response

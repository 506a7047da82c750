"""Timeout budget for inbound requests and the upstream calls they fan out to.

The request timeout bounds everything. LLM and generic external calls are
capped by it, and the per-provider Places and weather timeouts are capped by
the external one, so one slow provider can never outlive the request.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.core.config import Settings, get_settings

_MIN_TIMEOUT_SECONDS = 1
_MAX_CONNECT_TIMEOUT_SECONDS = 5.0
_CONNECT_TIMEOUT_RATIO = 0.3


def _seconds(value: int | float | None, default: int, ceiling: int | None = None) -> int:
    try:
        seconds = int(default if value is None else value)
    except (TypeError, ValueError):
        seconds = default

    seconds = max(_MIN_TIMEOUT_SECONDS, seconds)
    return seconds if ceiling is None else min(seconds, ceiling)


@dataclass(frozen=True, slots=True)
class TimeoutPolicy:
    """Resolved timeouts, all in whole seconds."""

    request_timeout_seconds: int
    llm_timeout_seconds: int
    external_api_timeout_seconds: int
    places_timeout_seconds: int
    weather_timeout_seconds: int


def build_timeout_policy(settings: Settings) -> TimeoutPolicy:
    request = _seconds(settings.REQUEST_TIMEOUT_SECONDS, 30)
    external = _seconds(settings.EXTERNAL_API_TIMEOUT_SECONDS, 15, ceiling=request)

    return TimeoutPolicy(
        request_timeout_seconds=request,
        llm_timeout_seconds=_seconds(settings.LLM_TIMEOUT_SECONDS, 20, ceiling=request),
        external_api_timeout_seconds=external,
        places_timeout_seconds=_seconds(settings.PLACES_TIMEOUT_SECONDS, 10, ceiling=external),
        weather_timeout_seconds=_seconds(settings.WEATHER_TIMEOUT_SECONDS, 10, ceiling=external),
    )


def get_timeout_policy(settings: Settings | None = None) -> TimeoutPolicy:
    """Return the policy for ``settings`` or the process settings."""
    return build_timeout_policy(settings or get_settings())


def to_requests_timeout(total_timeout_seconds: int) -> tuple[float, float]:
    """Split a total budget into the ``(connect, read)`` pair ``requests`` expects.

    Connect gets 30% of the budget (at least 1s, at most 5s) and read gets the
    rest. Budgets too small to split give read half the total.
    """
    total = float(max(_MIN_TIMEOUT_SECONDS, int(total_timeout_seconds)))
    connect = min(_MAX_CONNECT_TIMEOUT_SECONDS, max(1.0, round(total * _CONNECT_TIMEOUT_RATIO, 1)))
    read = total - connect if total > connect else total / 2
    return connect, max(0.5, read)

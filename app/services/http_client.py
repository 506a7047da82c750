"""Blocking JSON GET run off the event loop, shared by the provider adapters."""

from __future__ import annotations

import asyncio
from typing import Any

import requests

from app.core.logger import get_logger
from app.core.timeout_policy import to_requests_timeout

logger = get_logger(__name__)


class ExternalServiceError(RuntimeError):
    """Raised when a third-party API is misconfigured, unreachable or answers with an error."""

    service_name = "External API"


async def fetch_json(
    url: str,
    params: dict[str, Any],
    *,
    timeout_seconds: int,
    error_cls: type[ExternalServiceError] = ExternalServiceError,
) -> dict[str, Any]:
    """GET ``url`` and return the decoded JSON object.

    Raises:
        ExternalServiceError: ``error_cls`` on transport errors, non-2xx
            responses or a body that is not a JSON object.
    """
    request_timeout = to_requests_timeout(timeout_seconds)

    def _send() -> requests.Response:
        with requests.Session() as session:
            return session.get(url, params=params, timeout=request_timeout)

    try:
        response = await asyncio.to_thread(_send)
        response.raise_for_status()
        data = response.json()
    except requests.HTTPError as exc:
        response = exc.response
        status_code = response.status_code if response is not None else None
        body = (response.text or "")[:200] if response is not None else ""
        logger.error("%s error: status=%s body=%s", error_cls.service_name, status_code, body)
        raise error_cls(f"{error_cls.service_name} error: {status_code} - {body}") from exc
    except requests.RequestException as exc:
        logger.error("%s request failed: %s", error_cls.service_name, exc)
        raise error_cls(f"{error_cls.service_name} request failed: {exc}") from exc
    except ValueError as exc:
        logger.error("%s response parse failed: %s", error_cls.service_name, exc)
        raise error_cls(f"{error_cls.service_name} returned invalid JSON") from exc

    if not isinstance(data, dict):
        raise error_cls(f"{error_cls.service_name} returned an unexpected payload")
    return data

"""Process logging setup built on uvicorn's dictConfig."""

from __future__ import annotations

import copy
import logging.config
import os
from typing import Any

from uvicorn.config import LOGGING_CONFIG as UVICORN_LOGGING_CONFIG

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_VALID_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def resolve_log_level(level: str | None = None) -> str:
    """Return ``level`` or ``LOG_LEVEL``, falling back to INFO for unknown names."""
    candidate = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    return candidate if candidate in _VALID_LEVELS else "INFO"


def build_logging_config(level: str | None = None) -> dict[str, Any]:
    """Build a dictConfig sharing uvicorn's handlers, with an ``app`` formatter."""
    log_level = resolve_log_level(level)
    config = copy.deepcopy(UVICORN_LOGGING_CONFIG)

    config["formatters"]["app"] = {"format": LOG_FORMAT, "datefmt": LOG_DATE_FORMAT}
    config["handlers"]["app"] = {
        "formatter": "app",
        "class": "logging.StreamHandler",
        "stream": "ext://sys.stdout",
    }
    config["root"] = {"handlers": ["app"], "level": log_level}
    config["loggers"]["app"] = {"level": log_level}

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        config["loggers"][name]["level"] = log_level

    return config


def configure_logging(level: str | None = None) -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(build_logging_config(level))

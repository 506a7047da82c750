"""Module logger factory."""

import logging
import sys

from app.core.logging_config import LOG_DATE_FORMAT, LOG_FORMAT, resolve_log_level


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``.

    Once ``configure_logging`` has installed root handlers, records simply
    propagate to them. Before that (scripts, bare test runs) a stdout
    handler is attached so nothing is lost.

    Args:
        name: Logger name, usually ``__name__``.
    """
    logger = logging.getLogger(name)
    logger.setLevel(resolve_log_level())

    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    return logger

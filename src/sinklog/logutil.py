"""Diagnostics channel for sinklog's own problems.

Handlers and loggers swallow their failures, so the only trace of a dropped
record is a DEBUG entry on the stdlib logger named ``"sinklog"``. That logger
stays at WARNING (configuration mistakes only) unless ``SINKLOG_DEBUG`` is
set, in which case dropped-record notices are shown too. An application that
already attached handlers to ``"sinklog"`` keeps its own setup.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

DIAGNOSTICS_NAME = "sinklog"
DIAGNOSTICS_FORMAT = "[sinklog] %(levelname)s: %(message)s"

_LOGGER: Optional[logging.Logger] = None


def _debug_requested() -> bool:
    return (os.getenv("SINKLOG_DEBUG") or "0").strip().lower() in ("1", "true", "yes", "on")


def get_logger() -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        logger = logging.getLogger(DIAGNOSTICS_NAME)
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(DIAGNOSTICS_FORMAT))
            logger.addHandler(handler)
            logger.setLevel(logging.DEBUG if _debug_requested() else logging.WARNING)
        _LOGGER = logger
    return _LOGGER


def dropped(source: str, level: str, exc: BaseException) -> None:
    """Note a record that ``source`` could not deliver."""
    get_logger().debug("%s dropped a %s record: %s: %s", source, level, type(exc).__name__, exc)


__all__ = ["get_logger", "dropped", "DIAGNOSTICS_NAME"]

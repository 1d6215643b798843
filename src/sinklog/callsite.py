"""Call-site helpers that fill in the caller's file and line.

    from sinklog import callsite
    callsite.warn_once("cache disabled")          # default logger
    callsite.error("upload failed", name="net")   # sinklog.get_logger("net")

The core ``Logger`` API takes file and line as plain arguments and never
looks at frames; these wrappers are the only place that does.
"""
from __future__ import annotations

import inspect
from typing import Optional, Tuple

from .logger import NO_LINE, UNKNOWN_FILE, Logger
from .registry import get_default_logger, get_logger


def caller_location(depth: int = 1) -> Tuple[str, int]:
    """Return ``(filename, lineno)`` of the frame ``depth`` levels above the caller."""
    frame = inspect.currentframe()
    for _ in range(depth + 1):
        if frame is None:
            break
        frame = frame.f_back
    if frame is None:
        # Interpreters without frame support
        return UNKNOWN_FILE, NO_LINE
    return frame.f_code.co_filename, frame.f_lineno


def _target(name: Optional[str]) -> Logger:
    return get_default_logger() if name is None else get_logger(name)


def debug(text: str, name: Optional[str] = None) -> None:
    file, line = caller_location()
    _target(name).debug(text, file, line)


def info(text: str, name: Optional[str] = None) -> None:
    file, line = caller_location()
    _target(name).info(text, file, line)


def warn(text: str, name: Optional[str] = None) -> None:
    file, line = caller_location()
    _target(name).warn(text, file, line)


def warn_once(text: str, name: Optional[str] = None) -> None:
    file, line = caller_location()
    _target(name).warn_once(text, file, line)


def error(text: str, name: Optional[str] = None) -> None:
    file, line = caller_location()
    _target(name).error(text, file, line)


__all__ = ["caller_location", "debug", "info", "warn", "warn_once", "error"]

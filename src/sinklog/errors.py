from __future__ import annotations

from typing import Optional


class SinklogError(Exception):
    """Base exception for sinklog."""


class HandlerOpenError(SinklogError, OSError):
    """A file sink could not open its target path."""

    def __init__(self, filename: str, reason: str, errno: Optional[int] = None) -> None:
        # OSError keeps errno, strerror and filename; __str__ below replaces
        # its "[Errno n] ..." rendering.
        OSError.__init__(self, errno, reason, filename)
        self.reason = reason

    def __str__(self) -> str:
        return f"cannot open log file '{self.filename}': {self.reason}"


class FormatError(SinklogError, ValueError):
    pass


__all__ = ["SinklogError", "HandlerOpenError", "FormatError"]

"""Severity levels and the gate that decides whether a record passes.

The threshold is a floor of what passes: NONE suppresses everything and
DEBUG lets everything through.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Union


class Severity(IntEnum):
    NONE = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4

    @property
    def label(self) -> str:
        return self.name

    @classmethod
    def parse(cls, value: Union["Severity", int, str]) -> "Severity":
        """Coerce a Severity, an int 0..4 or a case-insensitive name.

        ``"warning"`` is accepted as an alias for WARN. Raises ValueError for
        anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"invalid severity: {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            key = value.strip().upper()
            if key.isdigit():
                return cls(int(key))
            key = _ALIASES.get(key, key)
            try:
                return cls[key]
            except KeyError:
                raise ValueError(f"invalid severity: {value!r}") from None
        raise ValueError(f"invalid severity: {value!r}")


_ALIASES = {"WARNING": "WARN", "ERR": "ERROR", "OFF": "NONE"}


def should_emit(threshold: Severity, severity: Severity) -> bool:
    return threshold >= severity


__all__ = ["Severity", "should_emit"]

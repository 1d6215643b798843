"""Named logger: level gate, record rendering and handler fan-out."""
from __future__ import annotations

import threading
from datetime import datetime
from typing import List, Optional, Tuple, Union

from .dedup import WarnOnceRegistry, get_warn_once_registry
from .formatting import render_record
from .handlers import Handler
from .levels import Severity, should_emit
from .logutil import dropped

UNKNOWN_FILE = "unknown"
NO_LINE = -1


class Logger:
    """
    Emits leveled records to an ordered list of handlers.

    Each call checks the threshold first and returns immediately when the
    level is disabled; only then is the record rendered and passed to every
    handler, in attachment order, on the calling thread. Calls never raise.
    """

    def __init__(
        self,
        name: str,
        level: Union[Severity, int, str] = Severity.DEBUG,
        warn_once_registry: Optional[WarnOnceRegistry] = None,
    ) -> None:
        self._name = name
        self._level = Severity.parse(level)
        self._handlers: List[Handler] = []
        self._lock = threading.Lock()
        self._warn_once = warn_once_registry if warn_once_registry is not None else get_warn_once_registry()

    @property
    def name(self) -> str:
        return self._name

    @property
    def level(self) -> Severity:
        return self._level

    @property
    def handlers(self) -> Tuple[Handler, ...]:
        with self._lock:
            return tuple(self._handlers)

    def add_handler(self, handler: Handler) -> None:
        # Attaching the same handler twice delivers each record to it twice.
        with self._lock:
            self._handlers.append(handler)

    def set_level(self, level: Union[Severity, int, str]) -> None:
        self._level = Severity.parse(level)

    def is_enabled_for(self, level: Severity) -> bool:
        return should_emit(self._level, level)

    def debug(self, text: str, file: str = UNKNOWN_FILE, line: int = NO_LINE) -> None:
        if not should_emit(self._level, Severity.DEBUG):
            return
        self._write(Severity.DEBUG, text, file, line)

    def info(self, text: str, file: str = UNKNOWN_FILE, line: int = NO_LINE) -> None:
        if not should_emit(self._level, Severity.INFO):
            return
        self._write(Severity.INFO, text, file, line)

    def warn(self, text: str, file: str = UNKNOWN_FILE, line: int = NO_LINE) -> None:
        if not should_emit(self._level, Severity.WARN):
            return
        self._write(Severity.WARN, text, file, line)

    def warn_once(self, text: str, file: str = UNKNOWN_FILE, line: int = NO_LINE) -> None:
        """Warn the first time a ``(file, line)`` site is seen in this process.

        Takes a lock and a dict lookup on every call, suppressed or not, so
        keep it out of tight loops. Without a line number there is no site
        key and this behaves like ``warn``.
        """
        if line == NO_LINE:
            self.warn(text, file, line)
            return
        if not self._warn_once.first_time(file, line):
            return
        self.warn(text, file, line)

    def error(self, text: str, file: str = UNKNOWN_FILE, line: int = NO_LINE) -> None:
        if not should_emit(self._level, Severity.ERROR):
            return
        self._write(Severity.ERROR, text, file, line)

    def _write(self, level: Severity, text: str, file: str, line: int) -> None:
        try:
            message = render_record(text, file, line)
        except Exception as exc:  # noqa: BLE001 - logging must not break the caller
            dropped(f"logger {self._name!r}", level.label, exc)
            return
        with self._lock:
            handlers = tuple(self._handlers)
        for handler in handlers:
            try:
                handler.write(self, datetime.now(), level.label, message)
            except Exception as exc:  # noqa: BLE001 - foreign Handler subclasses may override write
                dropped(repr(handler), level.label, exc)

    def __repr__(self) -> str:
        return f"Logger({self._name!r}, level={self._level.label})"


__all__ = ["Logger", "UNKNOWN_FILE", "NO_LINE"]

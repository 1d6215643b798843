"""Sink abstractions.

A handler receives a fully rendered record and persists or displays it.
Delivery is best-effort: ``Handler.write`` never lets a sink failure escape
into the logging call. Construction-time failures (a file that cannot be
opened) are the exception and raise HandlerOpenError.
"""
from __future__ import annotations

import sys
import threading
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, TextIO

from .errors import HandlerOpenError
from .formatting import PositionalFormatter
from .logutil import dropped, get_logger

if TYPE_CHECKING:  # pragma: no cover - typing only
    from rich.console import Console as _Console
    from .logger import Logger
else:  # runtime optional import
    try:  # noqa: SIM105
        from rich.console import Console as _Console  # type: ignore
    except Exception:  # noqa: BLE001
        _Console = None  # type: ignore

# {0}=timestamp {1}=level label {2}=logger name {3}=rendered message
DEFAULT_LINE_FORMAT = "{3}"
LINE_FIELDS = 4

LEVEL_STYLES = {
    "ERROR": "bold red",
    "WARN": "yellow",
    "INFO": "default",
    "DEBUG": "dim",
}


class Handler:
    """Base sink. Subclasses implement ``emit``.

    ``line_format`` may use any subset of the four record fields; a
    placeholder beyond ``{3}`` raises FormatError here rather than on every
    write.
    """

    def __init__(self, line_format: str = DEFAULT_LINE_FORMAT) -> None:
        self.line_format = line_format
        self._formatter = PositionalFormatter(line_format, allow_unused=True)
        self._formatter.check(LINE_FIELDS)

    def format_line(self, logger: Optional["Logger"], timestamp: datetime, level: str, message: str) -> str:
        if self.line_format == DEFAULT_LINE_FORMAT:
            return message
        name = getattr(logger, "name", "")
        return self._formatter.format(timestamp.isoformat(), level, name, message)

    def write(self, logger: Optional["Logger"], timestamp: datetime, level: str, message: str) -> None:
        try:
            line = self.format_line(logger, timestamp, level, message)
            self.emit(logger, timestamp, level, line)
        except Exception as exc:  # noqa: BLE001 - a sink must never break the caller
            dropped(type(self).__name__, level, exc)

    def emit(self, logger: Optional["Logger"], timestamp: datetime, level: str, line: str) -> None:
        raise NotImplementedError

    def close(self) -> None:  # pragma: no cover - nothing to release by default
        pass


class StdIOHandler(Handler):
    """Console sink: ERROR records go to stderr, everything else to stdout.

    Streams are looked up on every write so redirected ``sys.stdout`` /
    ``sys.stderr`` are honoured. With ``color=True`` and rich installed the
    line is styled by level; otherwise it is written as plain text.
    """

    def __init__(self, color: bool = False, line_format: str = DEFAULT_LINE_FORMAT) -> None:
        super().__init__(line_format)
        self.color = color and _Console is not None
        self._lock = threading.Lock()
        self._consoles: Dict[str, "_Console"] = {}

    @staticmethod
    def stream_for(level: str) -> TextIO:
        return sys.stderr if level == "ERROR" else sys.stdout

    def _console_for(self, key: str, stream: TextIO) -> "_Console":
        # Rebuilt only when the stream behind sys.stdout/sys.stderr was swapped.
        console = self._consoles.get(key)
        if console is None or console.file is not stream:
            console = _Console(file=stream, color_system="truecolor", force_terminal=True, highlight=False, soft_wrap=True)
            self._consoles[key] = console
        return console

    def emit(self, logger: Optional["Logger"], timestamp: datetime, level: str, line: str) -> None:
        stream = self.stream_for(level)
        with self._lock:
            if self.color:
                console = self._console_for("stderr" if stream is sys.stderr else "stdout", stream)
                console.print(line, style=LEVEL_STYLES.get(level, "default"), markup=False)
            else:
                stream.write(line + "\n")
            stream.flush()


class FileHandler(Handler):
    """Append records to a file kept open for the handler's lifetime."""

    def __init__(self, filename: str, line_format: str = DEFAULT_LINE_FORMAT) -> None:
        super().__init__(line_format)
        self.filename = str(filename)
        self._lock = threading.Lock()
        try:
            self._fh: Optional[TextIO] = open(self.filename, "a", encoding="utf-8")
        except OSError as exc:
            raise HandlerOpenError(self.filename, exc.strerror or str(exc), exc.errno) from exc

    @property
    def closed(self) -> bool:
        return self._fh is None

    def emit(self, logger: Optional["Logger"], timestamp: datetime, level: str, line: str) -> None:
        with self._lock:
            if self._fh is None:
                get_logger().debug("write to closed FileHandler(%s) dropped", self.filename)
                return
            self._fh.write(line + "\n")
            self._fh.flush()

    def close(self) -> None:
        with self._lock:
            fh, self._fh = self._fh, None
        if fh is not None:
            try:
                fh.close()
            except OSError as exc:  # pragma: no cover - close failures are rare
                get_logger().debug("closing %s failed: %s", self.filename, exc)

    def __enter__(self) -> "FileHandler":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __del__(self) -> None:  # pragma: no cover - depends on GC timing
        fh = getattr(self, "_fh", None)
        if fh is not None:
            try:
                fh.close()
            except Exception:  # noqa: BLE001
                pass

    def __repr__(self) -> str:
        return f"FileHandler({self.filename!r})"


class CallbackHandler(Handler):
    """Forward each record to a callable ``func(logger, timestamp, level, line)``."""

    def __init__(self, func: Callable[[Optional["Logger"], datetime, str, str], Any], line_format: str = DEFAULT_LINE_FORMAT) -> None:
        super().__init__(line_format)
        self.func = func

    def emit(self, logger: Optional["Logger"], timestamp: datetime, level: str, line: str) -> None:
        self.func(logger, timestamp, level, line)


__all__ = [
    "Handler",
    "StdIOHandler",
    "FileHandler",
    "CallbackHandler",
    "DEFAULT_LINE_FORMAT",
    "LEVEL_STYLES",
]

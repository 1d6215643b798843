"""sinklog: named loggers, pluggable sinks and warn-once deduplication.

Package-level ``debug``/``info``/``warn``/``warn_once``/``error`` delegate to
the default logger; ``get_logger(name)`` returns a named logger. For calls that
record their own file and line, use ``sinklog.callsite``.

The version is read from importlib.metadata so an editable install or wheel
reports the version declared in pyproject.toml, with a hardcoded fallback for
direct source usage without installation.
"""

from __future__ import annotations

from importlib import metadata as _metadata

from .errors import FormatError, HandlerOpenError, SinklogError
from .formatting import PositionalFormatter, format_positional, render_record
from .handlers import CallbackHandler, FileHandler, Handler, StdIOHandler
from .levels import Severity, should_emit
from .logger import Logger
from .registry import (
	add_handler,
	debug,
	error,
	get_default_logger,
	get_logger,
	info,
	set_level,
	warn,
	warn_once,
)
from . import callsite

__all__ = [
	"__version__",
	"Severity",
	"should_emit",
	"Logger",
	"Handler",
	"StdIOHandler",
	"FileHandler",
	"CallbackHandler",
	"PositionalFormatter",
	"format_positional",
	"render_record",
	"SinklogError",
	"HandlerOpenError",
	"FormatError",
	"get_logger",
	"get_default_logger",
	"debug",
	"info",
	"warn",
	"warn_once",
	"error",
	"set_level",
	"add_handler",
	"callsite",
]

_FALLBACK_VERSION = "0.1.0"  # MUST match pyproject.toml [project].version

try:  # pragma: no cover - success path covered indirectly via CLI test
	__version__ = _metadata.version("sinklog")  # type: ignore[assignment]
except Exception:  # pragma: no cover - fallback exercised if metadata missing
	__version__ = _FALLBACK_VERSION

"""Process-wide named loggers and the default logger behind the free functions."""
from __future__ import annotations

import threading
from typing import Dict, Optional, Union

from .config import LoggingConfig, apply_config
from .errors import HandlerOpenError
from .handlers import Handler
from .levels import Severity
from .logger import NO_LINE, UNKNOWN_FILE, Logger
from .logutil import get_logger as _diag

DEFAULT_LOGGER_NAME = "root"

_LOGGERS: Dict[str, Logger] = {}
_LOCK = threading.RLock()
_DEFAULT: Optional[Logger] = None


def get_logger(name: str) -> Logger:
    """Return the logger registered under ``name``, creating it on first use.

    New loggers start at DEBUG with no handlers.
    """
    with _LOCK:
        logger = _LOGGERS.get(name)
        if logger is None:
            logger = Logger(name)
            _LOGGERS[name] = logger
        return logger


def get_default_logger() -> Logger:
    """Return the default logger, building it from the environment once."""
    global _DEFAULT
    if _DEFAULT is None:
        with _LOCK:
            if _DEFAULT is None:
                logger = get_logger(DEFAULT_LOGGER_NAME)
                cfg = LoggingConfig.from_env()
                try:
                    apply_config(logger, cfg)
                except HandlerOpenError as exc:
                    _diag().warning("%s; default logger continues without a file sink", exc)
                _DEFAULT = logger
    return _DEFAULT


def debug(text: str, file: str = UNKNOWN_FILE, line: int = NO_LINE) -> None:
    get_default_logger().debug(text, file, line)


def info(text: str, file: str = UNKNOWN_FILE, line: int = NO_LINE) -> None:
    get_default_logger().info(text, file, line)


def warn(text: str, file: str = UNKNOWN_FILE, line: int = NO_LINE) -> None:
    get_default_logger().warn(text, file, line)


def warn_once(text: str, file: str = UNKNOWN_FILE, line: int = NO_LINE) -> None:
    get_default_logger().warn_once(text, file, line)


def error(text: str, file: str = UNKNOWN_FILE, line: int = NO_LINE) -> None:
    get_default_logger().error(text, file, line)


def set_level(level: Union[Severity, int, str]) -> None:
    get_default_logger().set_level(level)


def add_handler(handler: Handler) -> None:
    get_default_logger().add_handler(handler)


__all__ = [
    "DEFAULT_LOGGER_NAME",
    "get_logger",
    "get_default_logger",
    "debug",
    "info",
    "warn",
    "warn_once",
    "error",
    "set_level",
    "add_handler",
]

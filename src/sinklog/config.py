"""Environment-driven configuration for the default logger.

SINKLOG_LEVEL    severity name or number (default DEBUG)
SINKLOG_FILE     path of a file sink to attach (unset: none)
SINKLOG_CONSOLE  attach a console sink (default on)
SINKLOG_COLOR    colorize console output when rich is installed (default off)
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .handlers import FileHandler, StdIOHandler
from .levels import Severity
from .logger import Logger
from .logutil import get_logger


def env_flag(name: str, default: str = "0", env: Optional[Mapping[str, str]] = None) -> bool:
    source = os.environ if env is None else env
    v = (source.get(name) or default).strip().lower()
    return v in ("1", "true", "yes", "on")


@dataclass
class LoggingConfig:
    level: Severity = Severity.DEBUG
    log_file: Optional[str] = None
    console: bool = True
    color: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "LoggingConfig":
        source = os.environ if env is None else env
        cfg = cls()
        raw_level = source.get("SINKLOG_LEVEL")
        if raw_level:
            try:
                cfg.level = Severity.parse(raw_level)
            except ValueError:
                get_logger().warning("invalid SINKLOG_LEVEL %r; using %s", raw_level, cfg.level.label)
        cfg.log_file = source.get("SINKLOG_FILE") or None
        cfg.console = env_flag("SINKLOG_CONSOLE", "1", env=source)
        cfg.color = env_flag("SINKLOG_COLOR", "0", env=source)
        return cfg


def apply_config(logger: Logger, cfg: LoggingConfig) -> Logger:
    """Set the threshold and attach the configured sinks.

    A file sink that cannot be opened raises HandlerOpenError.
    """
    logger.set_level(cfg.level)
    if cfg.console:
        logger.add_handler(StdIOHandler(color=cfg.color))
    if cfg.log_file:
        logger.add_handler(FileHandler(cfg.log_file))
    return logger


__all__ = ["LoggingConfig", "apply_config", "env_flag"]

"""Structured logging setup and `Env.log_fn` factories."""

from __future__ import annotations

import logging
from typing import Any

import structlog

from firstapp.appm import LogFn
from firstapp.config import Settings, get_settings

# Map log level string to logging constant
_LOG_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def _get_log_level(settings: Settings) -> int:
    """Get numeric log level from settings."""
    return _LOG_LEVEL_MAP.get(settings.log_level.lower(), logging.INFO)


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog for the process."""
    settings = settings or get_settings()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer()
            if settings.log_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level(settings)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def structlog_log_fn(logger: Any = None, *, level: str = "info", **bound: Any) -> LogFn:
    """
    Build a log function that emits each message as a structlog event.

    Args:
        logger: Logger to write to (defaults to `structlog.get_logger()`)
        level: Level name every message is logged at
        **bound: Key/values attached to every line

    Returns:
        A callable suitable for `Env.log_fn`
    """
    level = level.lower()
    if level not in _LOG_LEVEL_MAP:
        raise ValueError(f"Unknown log level: {level!r}")

    def log_fn(message: str) -> None:
        # Resolved per call so configure_logging() applies to earlier-built functions.
        target = logger if logger is not None else structlog.get_logger()
        if bound:
            target = target.bind(**bound)
        getattr(target, level)(message)

    return log_fn


def noop_log_fn(message: str) -> None:
    """Discard `message`."""
    return None

"""Structured logging for graphql-rescue.

This module provides level-named logging functions that take a message and
optional structured fields. Events are rendered by structlog and handed to
the standard library logger named ``graphql_rescue``, so applications keep
control of levels and handlers through the usual logging configuration.

Example:
    >>> from graphql_rescue.logging import log_debug
    >>>
    >>> log_debug("Rescued failure", {
    ...     "error_type": "TimeoutFailure",
    ...     "category": "TimeoutFailure",
    ... })
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from .types import LogContext, RescueSettings

LOGGER_NAME = "graphql_rescue"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _build_logger(json: bool = False) -> Any:
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.processors.KeyValueRenderer(key_order=["event"])
    )
    return structlog.wrap_logger(
        logging.getLogger(LOGGER_NAME),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


_logger = _build_logger()


def configure_logging(level: str | None = None, *, json: bool = False) -> None:
    """Set the level and rendering of the graphql_rescue logger.

    A stream handler is attached when the logger has none, so events are
    visible without further setup.

    Args:
        level: Minimum level name (debug, info, warn, error). Defaults to
            GRAPHQL_RESCUE_LOG_LEVEL, then "info".
        json: Render events as JSON instead of key=value pairs.

    Raises:
        ValueError: If the level name is unknown.
        ConfigurationError: If the level comes from an invalid
            GRAPHQL_RESCUE_LOG_LEVEL.
    """
    global _logger

    if level is None:
        level = RescueSettings.from_env().log_level

    try:
        numeric_level = _LEVELS[level.lower()]
    except KeyError:
        raise ValueError(f"unknown log level: {level}") from None

    stdlib_logger = logging.getLogger(LOGGER_NAME)
    stdlib_logger.setLevel(numeric_level)
    if not stdlib_logger.handlers:
        stdlib_logger.addHandler(logging.StreamHandler())
    _logger = _build_logger(json)


def is_debug_enabled() -> bool:
    """Check whether DEBUG events of the graphql_rescue logger are emitted."""
    return logging.getLogger(LOGGER_NAME).isEnabledFor(logging.DEBUG)


def log_warn(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a WARN level message with structured fields.

    Args:
        message: The log message.
        fields: Optional structured fields for context. Can be a dict
                or a LogContext instance.
    """
    _logger.warning(message, **_normalize_fields(fields))


def log_info(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an INFO level message with structured fields.

    Use this for configuration lifecycle events.
    """
    _logger.info(message, **_normalize_fields(fields))


def log_debug(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a DEBUG level message with structured fields.

    Use this for per-registration and per-dispatch detail.
    """
    _logger.debug(message, **_normalize_fields(fields))


def _normalize_fields(fields: dict[str, Any] | LogContext | None) -> dict[str, str]:
    """Normalize fields to a dict of strings.

    Args:
        fields: Input fields as dict, LogContext, or None.

    Returns:
        Dict with string values; empty if no fields.
    """
    if fields is None:
        return {}

    if isinstance(fields, LogContext):
        return {k: str(v) for k, v in fields.model_dump().items() if v is not None}

    return {k: str(v) for k, v in fields.items()}


__all__ = [
    "LOGGER_NAME",
    "configure_logging",
    "is_debug_enabled",
    "log_warn",
    "log_info",
    "log_debug",
]

"""Pydantic models for graphql-rescue.

This module provides the validated data models used by the declarative
YAML loader, the environment settings, and structured logging.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

CONFIG_PATH_ENV = "GRAPHQL_RESCUE_CONFIG_PATH"
LOG_LEVEL_ENV = "GRAPHQL_RESCUE_LOG_LEVEL"

_LOG_LEVELS = ("debug", "info", "warn", "warning", "error")


class RescueDeclaration(BaseModel):
    """One rescue declaration: exception classes routed to a handler.

    Both fields hold dotted import paths which are resolved by the loader.

    Example:
        >>> declaration = RescueDeclaration(
        ...     errors=["myapp.errors.TimeoutFailure"],
        ...     handler="myapp.rescue.timeout_payload",
        ... )
    """

    errors: list[str] = Field(
        min_length=1,
        description="Dotted paths of the exception classes to rescue.",
    )
    handler: str = Field(
        min_length=1,
        description="Dotted path of the handler callable.",
    )

    model_config = {"extra": "forbid"}


class RescueConfig(BaseModel):
    """Top-level document of a rescue declaration file.

    Declarations are registered in file order, so an earlier declaration
    shadows a later one for any exception both would match.
    """

    rescues: list[RescueDeclaration] = Field(
        default_factory=list,
        description="Rescue declarations in registration order.",
    )

    model_config = {"extra": "forbid"}


class RescueSettings(BaseModel):
    """Process-level settings for graphql-rescue.

    Example:
        >>> settings = RescueSettings.from_env()
        >>> settings.log_level
        'info'
    """

    config_path: str | None = Field(
        default=None,
        description="Path to a YAML rescue declaration file.",
    )
    log_level: str = Field(
        default="info",
        description="Log level (debug, info, warn, error).",
    )

    model_config = {"extra": "forbid"}

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.lower()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls) -> RescueSettings:
        """Build settings from GRAPHQL_RESCUE_* environment variables.

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        values: dict[str, str] = {}
        config_path = os.environ.get(CONFIG_PATH_ENV)
        if config_path:
            values["config_path"] = config_path
        log_level = os.environ.get(LOG_LEVEL_ENV)
        if log_level:
            values["log_level"] = log_level

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"invalid GRAPHQL_RESCUE_* environment: {e}") from e


class LogContext(BaseModel):
    """Context fields for structured logging.

    Example:
        >>> context = LogContext(type_name="Query", field_name="viewer")
        >>> log_debug("Rescued failure", context)
    """

    type_name: str | None = Field(
        default=None,
        description="Schema type owning the field.",
    )
    field_name: str | None = Field(
        default=None,
        description="Field being resolved.",
    )
    error_type: str | None = Field(
        default=None,
        description="Class name of the raised failure.",
    )
    category: str | None = Field(
        default=None,
        description="Registered category that matched.",
    )


__all__ = [
    "CONFIG_PATH_ENV",
    "LOG_LEVEL_ENV",
    "RescueDeclaration",
    "RescueConfig",
    "RescueSettings",
    "LogContext",
]

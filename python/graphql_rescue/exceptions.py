"""Custom exceptions for graphql-rescue.

This module provides the hierarchy of exceptions raised while configuring
failure rescue for a schema. Failures raised by resolvers at request time
are never wrapped in these classes: a rescued failure is replaced by its
handler's result and an unrescued failure propagates unchanged.
"""

from __future__ import annotations

from typing import Any


class RescueError(Exception):
    """Base exception for all graphql-rescue errors.

    Example:
        >>> try:
        ...     configure(schema, None)
        ... except RescueError as e:
        ...     print(f"Rescue setup failed: {e}")
    """

    pass


class ConfigurationError(RescueError):
    """Raised when rescue configuration is invalid.

    Configuration errors surface at schema-setup time, before any request
    is served. The ``kind`` attribute tells the concrete cases apart.
    """

    kind: str = "configuration"


class EmptyConfigurationError(ConfigurationError):
    """Raised when configure() is called without a configuration block.

    Example:
        >>> try:
        ...     configure(schema, None)
        ... except EmptyConfigurationError:
        ...     print("Pass a block that registers handlers")
    """

    kind = "empty_configuration"

    def __init__(self, message: str = "configure() requires a configuration block") -> None:
        super().__init__(message)


class EmptyRescueError(ConfigurationError):
    """Raised when rescue_from() is called without a handler.

    Example:
        >>> registrar.rescue_from(TimeoutError)
        Traceback (most recent call last):
        ...
        EmptyRescueError: rescue_from() requires a handler
    """

    kind = "empty_rescue"

    def __init__(self, message: str = "rescue_from() requires a handler") -> None:
        super().__init__(message)


class RegistryFrozenError(ConfigurationError):
    """Raised when registering a handler after configuration completed."""

    kind = "frozen_registry"

    def __init__(
        self, message: str = "rescue registry is frozen; register handlers inside configure()"
    ) -> None:
        super().__init__(message)


class NotRescuableError(RescueError):
    """Raised when a registered category is not an exception class.

    The message is the ``repr()`` of the offending value, so the failing
    registration can be found from the error alone.

    Attributes:
        value: The value that was passed as a category.

    Example:
        >>> registrar.rescue_from("TimeoutError", handler=on_timeout)
        Traceback (most recent call last):
        ...
        NotRescuableError: 'TimeoutError'
    """

    def __init__(self, value: Any) -> None:
        super().__init__(repr(value))
        self.value = value


__all__ = [
    "RescueError",
    "ConfigurationError",
    "EmptyConfigurationError",
    "EmptyRescueError",
    "RegistryFrozenError",
    "NotRescuableError",
]

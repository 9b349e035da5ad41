"""
graphql-rescue

Declarative routing of resolver failures to handlers for GraphQL-style
schemas. Handlers are registered once per schema, per exception class;
every field resolver of the schema then hands the failures it raises to
the first registered handler whose class matches.

Example:
    >>> from graphql_rescue import configure
    >>>
    >>> class TimeoutFailure(Exception):
    ...     pass
    ...
    >>> def rescues(registrar):
    ...     registrar.rescue_from(
    ...         TimeoutFailure,
    ...         handler=lambda error, obj, args, ctx: {"error": "timeout"},
    ...     )
    ...
    >>> configure(schema, rescues)

    >>> # Or declare the same in YAML
    >>> from graphql_rescue import configure_from_file
    >>> configure_from_file(schema, "config/rescues.yaml")
"""

from __future__ import annotations

from graphql_rescue.exceptions import (
    ConfigurationError,
    EmptyConfigurationError,
    EmptyRescueError,
    NotRescuableError,
    RegistryFrozenError,
    RescueError,
)
from graphql_rescue.instrumentation import (
    FieldInstrumenter,
    InstrumentableField,
    InstrumentableSchema,
    build_registry,
    configure,
)
from graphql_rescue.loader import configure_from_file, load_rescue_config
from graphql_rescue.logging import (
    configure_logging,
    is_debug_enabled,
    log_debug,
    log_info,
    log_warn,
)
from graphql_rescue.registry import (
    DispatchWrapper,
    HandlerRegistration,
    Registrar,
    RescueHandler,
    RescueRegistry,
)
from graphql_rescue.types import (
    LogContext,
    RescueConfig,
    RescueDeclaration,
    RescueSettings,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Configuration entry points
    "configure",
    "configure_from_file",
    "build_registry",
    "load_rescue_config",
    # Registry and dispatch
    "RescueRegistry",
    "Registrar",
    "HandlerRegistration",
    "RescueHandler",
    "DispatchWrapper",
    "FieldInstrumenter",
    # Host protocols
    "InstrumentableField",
    "InstrumentableSchema",
    # Models
    "RescueConfig",
    "RescueDeclaration",
    "RescueSettings",
    "LogContext",
    # Logging
    "configure_logging",
    "is_debug_enabled",
    "log_warn",
    "log_info",
    "log_debug",
    # Exceptions
    "RescueError",
    "ConfigurationError",
    "EmptyConfigurationError",
    "EmptyRescueError",
    "RegistryFrozenError",
    "NotRescuableError",
]

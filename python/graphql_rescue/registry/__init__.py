"""Rescue registry and dispatch infrastructure.

This package holds the two pieces every instrumented field relies on:

- RescueRegistry: ordered mapping of exception classes to handlers,
  populated through a Registrar while a schema is configured
- DispatchWrapper: callable wrapping one resolution callable and routing
  its failures through the registry

Example:
    from graphql_rescue.registry import DispatchWrapper, RescueRegistry

    registry = RescueRegistry()
    registry.rescue_from(TimeoutError, handler=on_timeout)
    registry.freeze()

    resolve = DispatchWrapper(original_resolve, registry)
"""

from __future__ import annotations

from .dispatch_wrapper import DispatchWrapper, Resolver
from .handler_registration import HandlerRegistration, RescueHandler
from .rescue_registry import Registrar, RescueRegistry, is_rescuable

__all__ = [
    # Core types
    "HandlerRegistration",
    "RescueHandler",
    "Resolver",
    # Registry
    "RescueRegistry",
    "Registrar",
    "is_rescuable",
    # Dispatch
    "DispatchWrapper",
]

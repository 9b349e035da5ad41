"""Schema instrumentation for failure rescue.

This module provides configure(), the entry point an application calls once
per schema, and the FieldInstrumenter it installs on the schema. The host
schema calls the instrumenter for each field; the instrumenter replaces the
field's eager and lazy resolution callables with DispatchWrappers sharing
one frozen RescueRegistry.

Example:
    >>> from graphql_rescue import configure
    >>>
    >>> def rescues(registrar):
    ...     registrar.rescue_from(
    ...         TimeoutError,
    ...         handler=lambda error, obj, args, ctx: {"error": "timeout"},
    ...     )
    ...
    >>> configure(schema, rescues)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, TypeVar

from .exceptions import EmptyConfigurationError
from .logging import log_info
from .registry import DispatchWrapper, Registrar, RescueRegistry, Resolver

FieldT = TypeVar("FieldT", bound="InstrumentableField")

ConfigurationBlock = Callable[[Registrar], Any]


class InstrumentableField(Protocol):
    """Field shape the instrumenter works with.

    ``redefine`` returns a field with the given slots replaced; the host
    decides whether that is a copy or the same object. A ``name`` attribute,
    when present, is used in log events.
    """

    resolve: Resolver | None
    lazy_resolve: Resolver | None

    def redefine(self: FieldT, **slots: Any) -> FieldT: ...


class InstrumentableSchema(Protocol):
    """Schema shape configure() installs instrumentation on."""

    def instrument(self, kind: str, instrumenter: Any) -> None: ...


class FieldInstrumenter:
    """Field instrumenter wrapping resolution callables in DispatchWrappers.

    Attributes:
        registry: The frozen registry every wrapper consults.
    """

    kind = "field"

    def __init__(self, registry: RescueRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> RescueRegistry:
        return self._registry

    def instrument(self, type_name: str, field: FieldT) -> FieldT:
        """Wrap a field's eager and lazy resolution callables.

        Args:
            type_name: Name of the schema type owning the field.
            field: The field to instrument.

        Returns:
            The field returned by ``field.redefine()``.
        """
        field_name = getattr(field, "name", None)
        return field.redefine(
            resolve=DispatchWrapper(
                field.resolve, self._registry, type_name=type_name, field_name=field_name
            ),
            lazy_resolve=DispatchWrapper(
                field.lazy_resolve, self._registry, type_name=type_name, field_name=field_name
            ),
        )

    def __repr__(self) -> str:
        return f"FieldInstrumenter({self._registry!r})"


def build_registry(block: ConfigurationBlock | None) -> RescueRegistry:
    """Run a configuration block against a new registry and freeze it.

    Args:
        block: Callable receiving a Registrar.

    Returns:
        The frozen registry.

    Raises:
        EmptyConfigurationError: If no block is given.
    """
    if block is None:
        raise EmptyConfigurationError()

    registry = RescueRegistry()
    block(Registrar(registry))
    registry.freeze()
    return registry


def configure(target: InstrumentableSchema, block: ConfigurationBlock | None = None) -> None:
    """Install failure rescue on a schema.

    Builds a registry from the block and installs a FieldInstrumenter on
    the target. Errors raised by the block propagate and nothing is
    installed.

    Args:
        target: Schema exposing ``instrument(kind, instrumenter)``.
        block: Callable receiving a Registrar; its ``rescue_from`` calls
            define the registrations.

    Raises:
        EmptyConfigurationError: If no block is given.
        EmptyRescueError: If the block registers without a handler.
        NotRescuableError: If the block registers a category that is not a class.

    Example:
        >>> configure(schema, lambda r: r.rescue_from(KeyError, handler=on_missing))
    """
    registry = build_registry(block)
    instrumenter = FieldInstrumenter(registry)
    target.instrument(FieldInstrumenter.kind, instrumenter)
    log_info(
        "Installed rescue instrumentation",
        {"categories": len(registry), "target": type(target).__name__},
    )


__all__ = [
    "ConfigurationBlock",
    "InstrumentableField",
    "InstrumentableSchema",
    "FieldInstrumenter",
    "build_registry",
    "configure",
]

"""Ordered registry of exception classes and their rescue handlers.

The registry is populated once while a schema is configured, then frozen
and shared read-only by every dispatch wrapper of that schema.

Matching is a linear scan in registration order: the first registered
category the failure is an instance of wins, even when a more specific
category was registered later.

Example:
    >>> registry = RescueRegistry()
    >>> registry.register([LookupError], on_lookup)
    >>> registry.register([KeyError], on_key)  # shadowed by LookupError
    >>> registry.find_handler(KeyError("id")) is on_lookup
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import Any

from ..exceptions import (
    ConfigurationError,
    EmptyRescueError,
    NotRescuableError,
    RegistryFrozenError,
)
from ..logging import log_debug, log_warn
from .handler_registration import HandlerRegistration, RescueHandler


def is_rescuable(category: Any) -> bool:
    """Check whether a value can be registered as a failure category.

    Any class qualifies, including BaseException and mixin classes that
    exception classes inherit from; instances and other values do not.
    """
    return isinstance(category, type)


class RescueRegistry:
    """Registry mapping exception classes to rescue handlers.

    Registration follows get-or-set semantics: registering a category that
    is already present keeps the first handler.

    Attributes:
        frozen: Whether configuration completed and registration is closed.
    """

    def __init__(self) -> None:
        self._registrations: dict[type, HandlerRegistration] = {}
        self._view: MappingProxyType[type, HandlerRegistration] = MappingProxyType(
            self._registrations
        )
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def registrations(self) -> MappingProxyType[type, HandlerRegistration]:
        """Read-only view of the registrations, in registration order."""
        return self._view

    @property
    def categories(self) -> tuple[type, ...]:
        """Registered categories in registration order."""
        return tuple(self._registrations)

    def register(
        self,
        categories: Iterable[Any],
        handler: RescueHandler | None,
    ) -> None:
        """Register a handler for each category not already present.

        Categories are processed in order; when one of them is not
        rescuable, the ones before it stay registered.

        Args:
            categories: Exception classes to route to the handler.
            handler: Callable taking (failure, subject, arguments, context).

        Raises:
            EmptyRescueError: If no handler is given.
            ConfigurationError: If the handler is not callable.
            NotRescuableError: If a category is not a class.
            RegistryFrozenError: If configuration already completed.
        """
        if self._frozen:
            raise RegistryFrozenError()
        if handler is None:
            raise EmptyRescueError()
        if not callable(handler):
            raise ConfigurationError(f"rescue handler is not callable: {handler!r}")

        categories = list(categories)
        if not categories:
            log_warn("rescue_from called without categories", {"handler": _describe(handler)})
            return

        for category in categories:
            if not is_rescuable(category):
                raise NotRescuableError(category)

            if category in self._registrations:
                log_debug(
                    "Ignoring duplicate rescue registration",
                    {
                        "category": category.__qualname__,
                        "handler": _describe(handler),
                    },
                )
                continue

            self._registrations[category] = HandlerRegistration(category, handler)
            log_debug(
                "Registered rescue handler",
                {"category": category.__qualname__, "handler": _describe(handler)},
            )

    def rescue_from(self, *categories: Any, handler: RescueHandler | None = None) -> None:
        """Register a handler for one or more exception classes.

        Example:
            >>> registry.rescue_from(TimeoutError, ConnectionError, handler=on_network)
        """
        self.register(categories, handler)

    def find_registration(self, failure: BaseException) -> HandlerRegistration | None:
        """Return the first registration whose category matches the failure."""
        for registration in self._registrations.values():
            if registration.matches(failure):
                return registration
        return None

    def find_handler(self, failure: BaseException) -> RescueHandler | None:
        """Return the handler for a failure, or None if nothing matches.

        Args:
            failure: The exception raised by a resolver.

        Returns:
            The handler of the earliest registered matching category.
        """
        registration = self.find_registration(failure)
        if registration is None:
            return None
        return registration.handler

    def freeze(self) -> None:
        """Close registration. Lookups remain available."""
        self._frozen = True

    def __len__(self) -> int:
        return len(self._registrations)

    def __contains__(self, category: object) -> bool:
        return category in self._registrations

    def __iter__(self) -> Iterator[HandlerRegistration]:
        return iter(self._registrations.values())

    def __repr__(self) -> str:
        names = ", ".join(category.__qualname__ for category in self._registrations)
        return f"RescueRegistry([{names}], frozen={self._frozen})"


class Registrar:
    """Builder handed to a configuration block.

    Exposes only rescue_from(), so a configuration block can register
    handlers but cannot look them up or freeze the registry.

    Example:
        >>> def rescues(registrar: Registrar) -> None:
        ...     registrar.rescue_from(TimeoutError, handler=on_timeout)
        >>> configure(schema, rescues)
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: RescueRegistry) -> None:
        self._registry = registry

    def rescue_from(self, *categories: Any, handler: RescueHandler | None = None) -> None:
        """Register a handler for one or more exception classes.

        Args:
            *categories: Exception classes to route to the handler.
            handler: Callable taking (failure, subject, arguments, context).

        Raises:
            EmptyRescueError: If no handler is given.
            ConfigurationError: If the handler is not callable.
            NotRescuableError: If a category is not a class.
        """
        self._registry.register(categories, handler)


def _describe(handler: Any) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)

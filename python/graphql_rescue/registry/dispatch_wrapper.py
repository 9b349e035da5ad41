"""Dispatch wrapper routing resolver failures to rescue handlers.

This module provides the DispatchWrapper class that invokes a field's
original resolution callable and, when it raises, hands the failure to the
handler registered for the failure's category.

A field can carry two resolution callables: the eager resolver and the
lazy continuation that completes a deferred value. Each one is wrapped by
its own DispatchWrapper, and every wrapper of a schema shares the same
frozen RescueRegistry.

Example:
    >>> def viewer(subject, arguments, context):
    ...     raise TimeoutError("upstream too slow")
    ...
    >>> registry = RescueRegistry()
    >>> registry.rescue_from(
    ...     TimeoutError, handler=lambda e, obj, args, ctx: {"error": "timeout"}
    ... )
    >>> wrapped = DispatchWrapper(viewer, registry)
    >>> wrapped(None, {}, {})
    {'error': 'timeout'}
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from ..logging import is_debug_enabled, log_debug
from ..types import LogContext
from .handler_registration import HandlerRegistration
from .rescue_registry import RescueRegistry

Resolver = Callable[[Any, Any, Any], Any]


class DispatchWrapper:
    """Callable that rescues failures raised by a resolution callable.

    The wrapper keeps the calling contract of the original: it takes
    (subject, arguments, context) and returns what the original returns.
    When the original returns an awaitable, the wrapper returns an
    awaitable that rescues failures raised while it is awaited.

    Failures with no matching registration are re-raised unchanged.
    Failures raised by a handler are not rescued.

    Attributes:
        original: The wrapped callable, or None for an unset slot.
        registry: The shared registry consulted on failure.
    """

    __slots__ = ("_original", "_registry", "_type_name", "_field_name")

    def __init__(
        self,
        original: Resolver | None,
        registry: RescueRegistry,
        *,
        type_name: str | None = None,
        field_name: str | None = None,
    ) -> None:
        """Initialize the wrapper.

        Args:
            original: The resolution callable to wrap. None wraps an unset
                slot and makes the wrapper a no-op returning None.
            registry: Registry consulted when the original raises.
            type_name: Schema type owning the field, for logging.
            field_name: Name of the wrapped field, for logging.
        """
        self._original = original
        self._registry = registry
        self._type_name = type_name
        self._field_name = field_name

    @property
    def original(self) -> Resolver | None:
        return self._original

    @property
    def registry(self) -> RescueRegistry:
        return self._registry

    @property
    def field_name(self) -> str | None:
        return self._field_name

    @property
    def type_name(self) -> str | None:
        return self._type_name

    @property
    def has_original(self) -> bool:
        """Check whether the wrapped slot held a callable."""
        return self._original is not None

    def call(self, subject: Any, arguments: Any, context: Any) -> Any:
        """Invoke the original callable, rescuing registered failures.

        Args:
            subject: The object the field is resolved on (or the deferred
                value, for a lazy continuation).
            arguments: The field arguments.
            context: The request context.

        Returns:
            The original result, or the handler's result when the original
            raised a rescued failure.
        """
        if self._original is None:
            return None

        try:
            result = self._original(subject, arguments, context)
        except Exception as failure:
            registration = self._find_registration(failure)
            if registration is None:
                raise
            return registration.handler(failure, subject, arguments, context)

        if inspect.isawaitable(result):
            return self._call_deferred(result, subject, arguments, context)
        return result

    __call__ = call

    async def _call_deferred(
        self,
        awaitable: Awaitable[Any],
        subject: Any,
        arguments: Any,
        context: Any,
    ) -> Any:
        try:
            return await awaitable
        except Exception as failure:
            registration = self._find_registration(failure)
            if registration is None:
                raise
            replacement = registration.handler(failure, subject, arguments, context)

        if inspect.isawaitable(replacement):
            replacement = await replacement
        return replacement

    def _find_registration(self, failure: Exception) -> HandlerRegistration | None:
        registration = self._registry.find_registration(failure)
        if registration is not None and is_debug_enabled():
            log_debug(
                "Rescued resolver failure",
                LogContext(
                    type_name=self._type_name,
                    field_name=self._field_name,
                    error_type=type(failure).__qualname__,
                    category=registration.category.__qualname__,
                ),
            )
        return registration

    def unwrap(self) -> Resolver | None:
        """Get the original unwrapped callable.

        Useful for testing and debugging.
        """
        return self._original

    def __repr__(self) -> str:
        return f"DispatchWrapper({self._original!r}, categories={len(self._registry)})"

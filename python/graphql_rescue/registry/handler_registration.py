"""Handler registration record for the rescue registry."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

RescueHandler = Callable[[Exception, Any, Any, Any], Any]
"""Handler calling convention: (failure, subject, arguments, context) -> value."""


@dataclass(frozen=True)
class HandlerRegistration:
    """An exception class routed to the handler that rescues it.

    Attributes:
        category: Class matched with isinstance(); usually an exception class.
        handler: Callable producing the replacement value for the field.

    Example:
        >>> registration = HandlerRegistration(TimeoutError, on_timeout)
        >>> registration.matches(TimeoutError("slow"))
        True
    """

    category: type
    handler: RescueHandler

    def matches(self, failure: BaseException) -> bool:
        """Check whether a raised failure belongs to this category."""
        return isinstance(failure, self.category)

"""Domain exception hierarchy for the event hook registry."""

from __future__ import annotations


class EventHooksError(RuntimeError):
    """Base class for all registry-level errors."""


class InvalidArgumentError(EventHooksError, ValueError):
    """Raised when a registration call is malformed."""


class InvalidHandlerError(InvalidArgumentError):
    """Raised when a handler is not callable."""


class InvalidEventNameError(InvalidArgumentError):
    """Raised when an event name is rejected under strict naming."""


class ConfigValidationError(EventHooksError):
    """Raised when configuration cannot be validated safely."""

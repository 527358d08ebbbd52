"""Top-level package for eventhooks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .exceptions import (
    ConfigValidationError,
    EventHooksError,
    InvalidArgumentError,
    InvalidEventNameError,
    InvalidHandlerError,
)
from .hooks import (
    append,
    bind,
    bound,
    clear,
    fire,
    fire_async,
    fired,
    first,
    first_async,
    get_registry,
    handlers,
    insert,
    names,
    on,
    rebind,
    reset,
    unbind,
    until,
    until_async,
)
from .registry import EventRegistry, HandlerEntry, is_empty

if TYPE_CHECKING:
    from .config import load_config
    from .logging_utils import configure_logging

__all__ = [
    "ConfigValidationError",
    "EventHooksError",
    "EventRegistry",
    "HandlerEntry",
    "InvalidArgumentError",
    "InvalidEventNameError",
    "InvalidHandlerError",
    "append",
    "bind",
    "bound",
    "clear",
    "configure_logging",
    "fire",
    "fire_async",
    "fired",
    "first",
    "first_async",
    "get_registry",
    "handlers",
    "insert",
    "is_empty",
    "load_config",
    "names",
    "on",
    "rebind",
    "reset",
    "unbind",
    "until",
    "until_async",
]


def __getattr__(name: str) -> Any:
    """Lazily import config and logging helpers so pydantic/structlog load on demand."""
    if name == "load_config":
        from .config import load_config

        return load_config
    if name == "configure_logging":
        from .logging_utils import configure_logging

        return configure_logging
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

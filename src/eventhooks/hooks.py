"""Process-wide default registry and module-level shortcuts.

Usage:
    from eventhooks import hooks

    @hooks.on("app.start")
    def greet(name):
        return f"hello {name}"

    hooks.fire("app.start", ["world"])  # ["hello world"]
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .registry import EventRegistry, Handler, HandlerEntry

_default_registry = EventRegistry()


def get_registry() -> EventRegistry:
    """Return the process-wide registry used by the module-level functions."""
    return _default_registry


def bind(name: str, callback: Handler, once: bool = False) -> None:
    _default_registry.bind(name, callback, once)


def append(name: str, callback: Handler, once: bool = False) -> None:
    _default_registry.append(name, callback, once)


def insert(name: str, callback: Handler, once: bool = False) -> None:
    _default_registry.insert(name, callback, once)


def rebind(name: str, callback: Handler, once: bool = False) -> None:
    _default_registry.rebind(name, callback, once)


def on(name: str, once: bool = False, first: bool = False) -> Callable[[Handler], Handler]:
    return _default_registry.on(name, once=once, first=first)


def fire(name: str, args: Any = None, stop: bool = False) -> list[Any] | None:
    return _default_registry.fire(name, args, stop)


async def fire_async(name: str, args: Any = None, stop: bool = False) -> list[Any] | None:
    return await _default_registry.fire_async(name, args, stop)


def first(name: str, args: Any = None) -> Any:
    return _default_registry.first(name, args)


def until(name: str, args: Any = None) -> Any:
    return _default_registry.until(name, args)


def bound(name: str) -> bool:
    return _default_registry.bound(name)


def fired(name: str) -> bool:
    return _default_registry.fired(name)


def handlers(name: str) -> list[HandlerEntry]:
    return _default_registry.handlers(name)


def unbind(name: str | None = None) -> None:
    _default_registry.unbind(name)


def reset(name: str | None = None) -> None:
    _default_registry.reset(name)


async def first_async(name: str, args: Any = None) -> Any:
    return await _default_registry.first_async(name, args)


async def until_async(name: str, args: Any = None) -> Any:
    return await _default_registry.until_async(name, args)


def names() -> list[str]:
    return _default_registry.names()


def clear() -> None:
    """Drop every handler and fired flag from the default registry."""
    _default_registry.clear()

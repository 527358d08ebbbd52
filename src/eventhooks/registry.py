"""Named-event registry: bind callbacks to event names and fire them.

Usage:
    registry = EventRegistry()

    registry.bind("router.match", lambda route: f"matched {route}")
    registry.insert("router.match", audit_route, once=True)

    responses = registry.fire("router.match", ["/home"])
    first = registry.first("router.match", ["/home"])
    handled = registry.until("router.match", ["/home"])

An event is *bound* once anything has been registered for it, and stays
bound (possibly with no handlers left) until it is explicitly unbound.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
import inspect
import logging
import threading
from typing import TYPE_CHECKING, Any

from .exceptions import (
    ConfigValidationError,
    InvalidEventNameError,
    InvalidHandlerError,
)

if TYPE_CHECKING:
    from .config import RegistryConfig

LOGGER = logging.getLogger(__name__)

Handler = Callable[..., Any]


@dataclass(eq=False)
class HandlerEntry:
    """A registered callback and whether it is dropped after one call."""

    callback: Handler
    once: bool = False


def is_empty(value: Any) -> bool:
    """Return True for results that do not stop an ``until`` pass.

    ``None``, ``False``, zero, ``""`` and empty containers are empty. A value
    whose truthiness is undefined (``__bool__`` raises) counts as a real
    response.
    """
    try:
        return not value
    except (TypeError, ValueError):
        return False


def _normalize_args(args: Any) -> tuple[Any, ...]:
    if args is None:
        return ()
    if isinstance(args, (list, tuple)):
        return tuple(args)
    # A scalar payload becomes the single positional argument.
    return (args,)


class EventRegistry:
    """Ordered handler lists per event name plus a set of fired names.

    All state is guarded by one re-entrant lock. The lock is never held
    while a handler runs, so handlers may fire, bind or unbind events on the
    same registry.
    """

    def __init__(
        self,
        *,
        validate_handlers: bool = True,
        strict_names: bool = False,
        log_fires: bool = True,
    ) -> None:
        self._handlers: dict[str, list[HandlerEntry]] = {}
        self._fired: set[str] = set()
        self._in_flight: set[HandlerEntry] = set()
        self._lock = threading.RLock()
        self.validate_handlers = validate_handlers
        self.strict_names = strict_names
        self.log_fires = log_fires

    @classmethod
    def from_config(
        cls, registry_config: RegistryConfig | Mapping[str, Any] | None = None
    ) -> EventRegistry:
        """Build a registry from the ``[registry]`` config section."""
        from pydantic import ValidationError

        from .config import RegistryConfig

        if registry_config is None:
            settings = RegistryConfig()
        elif isinstance(registry_config, RegistryConfig):
            settings = registry_config
        else:
            try:
                settings = RegistryConfig.model_validate(dict(registry_config))
            except ValidationError as exc:
                raise ConfigValidationError(
                    f"Invalid registry configuration: {exc}"
                ) from exc
        return cls(**settings.model_dump())

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def _make_entry(self, name: str, callback: Handler, once: bool) -> HandlerEntry:
        if self.strict_names and (not isinstance(name, str) or not name.strip()):
            raise InvalidEventNameError(
                f"Event name must be a non-empty string, got {name!r}."
            )
        if self.validate_handlers and not callable(callback):
            raise InvalidHandlerError(
                f"Handler for event {name!r} must be callable, got {type(callback).__name__}."
            )
        return HandlerEntry(callback=callback, once=bool(once))

    def append(self, name: str, callback: Handler, once: bool = False) -> None:
        """Add a handler to the end of the event's queue."""
        entry = self._make_entry(name, callback, once)
        with self._lock:
            self._handlers.setdefault(name, []).append(entry)
        LOGGER.debug(
            "registry.bind",
            extra={"event": "registry.bind", "event_name": name, "once": entry.once},
        )

    bind = append

    def insert(self, name: str, callback: Handler, once: bool = False) -> None:
        """Add a handler to the start of the event's queue."""
        entry = self._make_entry(name, callback, once)
        with self._lock:
            entries = self._handlers.get(name)
            if entries is None:
                self._handlers[name] = [entry]
            else:
                entries.insert(0, entry)
        LOGGER.debug(
            "registry.bind",
            extra={
                "event": "registry.bind",
                "event_name": name,
                "once": entry.once,
                "position": "first",
            },
        )

    def rebind(self, name: str, callback: Handler, once: bool = False) -> None:
        """Replace every handler for an event with a single new one."""
        entry = self._make_entry(name, callback, once)
        with self._lock:
            self._handlers[name] = [entry]
        LOGGER.debug(
            "registry.rebind",
            extra={"event": "registry.rebind", "event_name": name, "once": entry.once},
        )

    def on(
        self, name: str, once: bool = False, first: bool = False
    ) -> Callable[[Handler], Handler]:
        """Decorator form of :meth:`append` (or :meth:`insert` with ``first``)."""

        def decorator(callback: Handler) -> Handler:
            if first:
                self.insert(name, callback, once)
            else:
                self.append(name, callback, once)
            return callback

        return decorator

    # ------------------------------------------------------------------
    # Firing
    # ------------------------------------------------------------------

    def _begin(self, name: str) -> list[HandlerEntry] | None:
        with self._lock:
            entries = self._handlers.get(name)
            if entries is None:
                return None
            self._fired.add(name)
            return list(entries)

    def _claim(self, name: str, entry: HandlerEntry) -> bool:
        """Reserve a once-handler for this pass.

        Returns False when the entry was already consumed (or removed) by
        another pass, so it is never invoked twice.
        """
        if not entry.once:
            return True
        with self._lock:
            if entry in self._in_flight:
                return False
            if not any(e is entry for e in self._handlers.get(name, ())):
                return False
            self._in_flight.add(entry)
            return True

    def _release(self, name: str, entry: HandlerEntry, succeeded: bool) -> None:
        if not entry.once:
            return
        with self._lock:
            self._in_flight.discard(entry)
            if not succeeded:
                return
            entries = self._handlers.get(name)
            if entries is None:
                return
            for index, candidate in enumerate(entries):
                if candidate is entry:
                    del entries[index]
                    break

    def _handler_failed(self, name: str, entry: HandlerEntry, exc: Exception) -> None:
        LOGGER.warning(
            "registry.handler.failed",
            extra={
                "event": "registry.handler.failed",
                "event_name": name,
                "handler": getattr(entry.callback, "__qualname__", repr(entry.callback)),
                "error_type": type(exc).__name__,
                "error": str(exc),
            },
        )

    def _log_fire(
        self, name: str, snapshot: list[HandlerEntry], results: list[Any], stopped: bool
    ) -> None:
        if not self.log_fires:
            return
        LOGGER.debug(
            "registry.fire",
            extra={
                "event": "registry.fire",
                "event_name": name,
                "handlers": len(snapshot),
                "results": len(results),
                "stopped": stopped,
            },
        )

    def fire(self, name: str, args: Any = None, stop: bool = False) -> list[Any] | None:
        """Call every handler for ``name`` in order and collect the responses.

        Returns ``None`` when the event is unbound, otherwise a list with one
        response per invoked handler (empty responses included). With
        ``stop`` set, returns as soon as a handler gives a non-empty response.
        Handler exceptions propagate to the caller and end the pass.
        """
        snapshot = self._begin(name)
        if snapshot is None:
            return None

        call_args = _normalize_args(args)
        results: list[Any] = []
        stopped = False
        for entry in snapshot:
            if not self._claim(name, entry):
                continue
            try:
                response = entry.callback(*call_args)
            except Exception as exc:
                self._release(name, entry, succeeded=False)
                self._handler_failed(name, entry, exc)
                raise
            except BaseException:
                # Interrupted (cancelled, KeyboardInterrupt): keep the entry queued.
                self._release(name, entry, succeeded=False)
                raise
            self._release(name, entry, succeeded=True)
            results.append(response)
            if stop and not is_empty(response):
                stopped = True
                break

        self._log_fire(name, snapshot, results, stopped)
        return results

    async def fire_async(
        self, name: str, args: Any = None, stop: bool = False
    ) -> list[Any] | None:
        """Like :meth:`fire`, but awaits responses from coroutine handlers."""
        snapshot = self._begin(name)
        if snapshot is None:
            return None

        call_args = _normalize_args(args)
        results: list[Any] = []
        stopped = False
        for entry in snapshot:
            if not self._claim(name, entry):
                continue
            try:
                response = entry.callback(*call_args)
                if inspect.isawaitable(response):
                    response = await response
            except Exception as exc:
                self._release(name, entry, succeeded=False)
                self._handler_failed(name, entry, exc)
                raise
            except BaseException:
                # Interrupted (cancelled, KeyboardInterrupt): keep the entry queued.
                self._release(name, entry, succeeded=False)
                raise
            self._release(name, entry, succeeded=True)
            results.append(response)
            if stop and not is_empty(response):
                stopped = True
                break

        self._log_fire(name, snapshot, results, stopped)
        return results

    def first(self, name: str, args: Any = None) -> Any:
        """Fire the event and return only the first response, even if empty."""
        results = self.fire(name, args)
        return results[0] if results else None

    def until(self, name: str, args: Any = None) -> Any:
        """Fire the event and return the first non-empty response.

        If no handler gives one, the last handler's response is returned.
        """
        results = self.fire(name, args, stop=True)
        return results[-1] if results else None

    async def first_async(self, name: str, args: Any = None) -> Any:
        results = await self.fire_async(name, args)
        return results[0] if results else None

    async def until_async(self, name: str, args: Any = None) -> Any:
        results = await self.fire_async(name, args, stop=True)
        return results[-1] if results else None

    # ------------------------------------------------------------------
    # Queries and cleanup
    # ------------------------------------------------------------------

    def bound(self, name: str) -> bool:
        """Return True if anything was ever registered for ``name``."""
        with self._lock:
            return name in self._handlers

    def fired(self, name: str) -> bool:
        with self._lock:
            return name in self._fired

    def handlers(self, name: str) -> list[HandlerEntry]:
        """Return a copy of the handler queue for ``name``."""
        with self._lock:
            return list(self._handlers.get(name, ()))

    def names(self) -> list[str]:
        """Return bound event names in registration order."""
        with self._lock:
            return list(self._handlers)

    def unbind(self, name: str | None = None) -> None:
        """Remove the handlers for one event, or for every event."""
        with self._lock:
            if name is None:
                self._handlers.clear()
            else:
                self._handlers.pop(name, None)
        LOGGER.debug(
            "registry.unbind", extra={"event": "registry.unbind", "event_name": name}
        )

    def reset(self, name: str | None = None) -> None:
        """Clear the fired flag for one event, or for every event."""
        with self._lock:
            if name is None:
                self._fired.clear()
            else:
                self._fired.discard(name)
        LOGGER.debug(
            "registry.reset", extra={"event": "registry.reset", "event_name": name}
        )

    def clear(self) -> None:
        """Drop all handlers and fired flags."""
        with self._lock:
            self._handlers.clear()
            self._fired.clear()

"""Simple synchronous in-process event emitter."""

from __future__ import annotations

import logging
import threading
from contextlib import nullcontext
from types import BuiltinMethodType, MethodType
from typing import Any

from evemit.domain.events import Event, EventHandler, now_ms
from evemit.domain.models import EmitterOptions, Listener
from evemit.repos.memory import ListenerRegistry

logger = logging.getLogger(__name__)


def _is_valid_type(event_type: Any) -> bool:
    return isinstance(event_type, str)


def _is_valid_handler(handler: Any) -> bool:
    return callable(handler)


def _same_handler(a: Any, b: Any) -> bool:
    """Identity match; bound methods match when owner and function are the same objects."""
    if a is b:
        return True
    if isinstance(a, MethodType) and isinstance(b, MethodType):
        return a.__self__ is b.__self__ and a.__func__ is b.__func__
    if isinstance(a, BuiltinMethodType) and isinstance(b, BuiltinMethodType):
        return a.__self__ is b.__self__ and a.__name__ == b.__name__
    return False


class EventEmitter:
    """Publish/subscribe emitter keyed by event-type strings.

    Handlers are called synchronously in registration order. Exceptions
    raised by a handler propagate out of ``fire`` and stop the remaining
    handlers for that pass.

    It can be subclassed to give other classes event behaviour::

        emitter = EventEmitter()
        emitter.on("change:name", lambda evt: print(evt.data))
        emitter.fire("change:name", "new name")
    """

    def __init__(self, options: EmitterOptions | None = None, **overrides: Any) -> None:
        options = options or EmitterOptions()
        if overrides:
            options = EmitterOptions(**{**options.model_dump(), **overrides})
        self.options = options
        self._registry = ListenerRegistry()
        self._lock = threading.RLock() if options.thread_safe else nullcontext()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, event_type: str, handler: EventHandler) -> bool:
        """Listen on *event_type*. Returns False for invalid or duplicate handlers."""
        with self._lock:
            return self._add(event_type, handler) is not None

    def register_once(self, event_type: str, handler: EventHandler) -> bool:
        """Like ``register``, but the handler is removed after its first call."""
        with self._lock:
            if not self.register(event_type, handler):
                return False
            # flag only after a successful add, so an existing registration is untouched
            for listener in self._registry.get(event_type) or ():
                if _same_handler(listener.handler, handler):
                    listener.once = True
                    break
            return True

    def unregister(
        self, event_type: str | None = None, handler: EventHandler | None = None
    ) -> None:
        """Remove one handler, every handler for a type, or everything.

        With no arguments the whole registry is discarded. With only
        *event_type* that type's handlers are emptied. With both, the first
        matching handler is removed.
        """
        with self._lock:
            if event_type is None and handler is None:
                self._registry.clear()
                logger.debug("Removed all listeners")
                return

            if not _is_valid_type(event_type):
                return

            if handler is None:
                self._registry.reset(event_type)
                logger.debug("Removed all listeners for %r", event_type)
                return

            self._remove(event_type, handler)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def fire(self, event_type: str, data: Any = None) -> None:
        """Call every handler registered for *event_type* with a new Event."""
        with self._lock:
            if not _is_valid_type(event_type):
                return

            listeners = self._registry.snapshot(event_type)
            if not listeners:
                return

            logger.debug("Firing %r to %d listener(s)", event_type, len(listeners))
            timestamp = now_ms()
            shared = None
            if self.options.shared_event:
                shared = Event(type=event_type, data=data, timestamp=timestamp)

            for listener in listeners:
                if not _is_valid_handler(listener.handler):
                    continue

                if shared is not None:
                    event = shared
                    if listener.once:
                        event.once = True
                else:
                    event = Event(
                        type=event_type,
                        data=data,
                        timestamp=timestamp,
                        once=listener.once,
                    )

                listener.handler(event)

                if event.once:
                    self.unregister(event_type, listener.handler)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def listeners(self, event_type: str) -> list[EventHandler]:
        """Return the handlers for *event_type* in dispatch order."""
        with self._lock:
            if not _is_valid_type(event_type):
                return []
            return [listener.handler for listener in self._registry.snapshot(event_type)]

    def event_types(self) -> list[str]:
        """Return the known event types, including ones emptied by a reset."""
        with self._lock:
            return self._registry.event_types()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _add(self, event_type: str, handler: EventHandler) -> Listener | None:
        if not _is_valid_type(event_type):
            logger.debug("Rejected listener: event type %r is not a string", event_type)
            return None
        if not _is_valid_handler(handler):
            logger.debug("Rejected listener for %r: handler is not callable", event_type)
            return None

        listeners = self._registry.get_or_create(event_type)
        if any(_same_handler(existing.handler, handler) for existing in listeners):
            logger.debug("Rejected duplicate listener for %r", event_type)
            return None

        listener = Listener(handler=handler, once=False)
        listeners.append(listener)
        logger.debug("Added listener for %r", event_type)
        return listener

    def _remove(self, event_type: str, handler: EventHandler) -> None:
        if not _is_valid_handler(handler):
            return

        listeners = self._registry.get(event_type)
        if not listeners:
            return

        for index, listener in enumerate(listeners):
            if _same_handler(listener.handler, handler):
                del listeners[index]
                logger.debug("Removed listener for %r", event_type)
                break

    # ------------------------------------------------------------------
    # Aliases
    # ------------------------------------------------------------------

    def on(self, event_type: str, handler: EventHandler) -> bool:
        return self.register(event_type, handler)

    def add_listener(self, event_type: str, handler: EventHandler) -> bool:
        return self.register(event_type, handler)

    def once(self, event_type: str, handler: EventHandler) -> bool:
        return self.register_once(event_type, handler)

    def off(
        self, event_type: str | None = None, handler: EventHandler | None = None
    ) -> None:
        self.unregister(event_type, handler)

    def remove_listener(
        self, event_type: str | None = None, handler: EventHandler | None = None
    ) -> None:
        self.unregister(event_type, handler)

    def emit(self, event_type: str, data: Any = None) -> None:
        self.fire(event_type, data)

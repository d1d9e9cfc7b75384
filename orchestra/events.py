"""Synchronous event subscription for Orchestra lifecycle events."""

import logging
from collections import defaultdict
from typing import Any, Callable

from orchestra.core.enums import OrchestraEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], None]


class EventEmitter:
    """
    Minimal observer used by the Orchestra facade.

    Handlers run synchronously, in subscription order, on the emitting
    coroutine. A handler that raises is logged and skipped so that a faulty
    subscriber cannot fail the operation that emitted the event.
    """

    def __init__(self) -> None:
        self._handlers: dict[OrchestraEvent, list[EventHandler]] = defaultdict(list)

    def on(self, event: OrchestraEvent | str, handler: EventHandler) -> EventHandler:
        """Subscribe a handler. Returns the handler so it can be used as a decorator."""
        self._handlers[OrchestraEvent(event)].append(handler)
        return handler

    def once(self, event: OrchestraEvent | str, handler: EventHandler) -> EventHandler:
        """Subscribe a handler that is removed after its first call."""
        event = OrchestraEvent(event)

        def wrapper(payload: Any) -> None:
            self.off(event, wrapper)
            handler(payload)

        wrapper.listener = handler  # type: ignore[attr-defined]
        self._handlers[event].append(wrapper)
        return wrapper

    def off(self, event: OrchestraEvent | str, handler: EventHandler) -> None:
        """
        Unsubscribe a handler; no-op if it was never subscribed.

        Accepts either the handler passed to `once` or the wrapper it returned.
        """
        handlers = self._handlers.get(OrchestraEvent(event), [])
        for subscribed in handlers:
            if subscribed == handler or getattr(subscribed, "listener", None) == handler:
                handlers.remove(subscribed)
                return

    def listener_count(self, event: OrchestraEvent | str) -> int:
        return len(self._handlers.get(OrchestraEvent(event), []))

    def emit(self, event: OrchestraEvent | str, payload: Any = None) -> bool:
        """Deliver payload to every subscriber. Returns True if any were called."""
        event = OrchestraEvent(event)
        handlers = list(self._handlers.get(event, []))

        for handler in handlers:
            try:
                handler(payload)
            except Exception as e:
                logger.warning("Handler for %s failed: %s", event.value, e)

        return bool(handlers)

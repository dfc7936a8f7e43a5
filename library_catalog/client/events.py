"""
In-Process Event Bus

Lets one list view tell its siblings that something changed without the
views knowing about each other. The author list publishes
``authorUpdated`` after editing or deleting an author; the book list
listens and re-fetches, because its rows embed author names.

There is no global instance: the composition root (CatalogPage) creates
one bus and hands it to every view. Tests build their own bus or call
reset().

Delivery rules:
- publish() is synchronous and returns after every handler ran
- handlers run in subscription order
- handlers see the registry as it was when publish() started, so a
  handler may subscribe or unsubscribe without affecting the current
  delivery
- nothing is queued: a handler subscribed after publish() never sees it
- a handler that raises is logged and the remaining handlers still run

Usage:
    bus = EventBus()
    bus.subscribe(CatalogEvent.AUTHOR_UPDATED, on_author_updated)
    bus.publish(CatalogEvent.AUTHOR_UPDATED, {"id": 3})
"""

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Any]


class CatalogEvent(StrEnum):
    """Events exchanged between the list views."""

    AUTHOR_UPDATED = "authorUpdated"


class EventBus:
    """Synchronous publish/subscribe registry keyed by event name."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """
        Register handler for event_name.

        The same handler may be registered more than once; it is then
        called once per registration.
        """
        self._handlers.setdefault(event_name, []).append(handler)

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None:
        """
        Remove handler from event_name.

        Handlers are matched with ==, so a bound method obtained again
        from the same object still matches. Does nothing if the handler
        is not registered.
        """
        handlers = self._handlers.get(event_name)
        if not handlers:
            return

        remaining = [h for h in handlers if h != handler]
        if remaining:
            self._handlers[event_name] = remaining
        else:
            del self._handlers[event_name]

    def publish(self, event_name: str, payload: Any = None) -> None:
        """
        Call every handler currently registered for event_name.

        Args:
            event_name: Event to deliver
            payload: Passed to each handler as its only argument
        """
        # Snapshot so handlers can change the registry while we iterate
        handlers = list(self._handlers.get(event_name, ()))
        if not handlers:
            logger.debug(f"No handlers for '{event_name}'")
            return

        for handler in handlers:
            try:
                handler(payload)
            except Exception:
                logger.exception(f"Handler {handler!r} failed for '{event_name}'")

    def handler_count(self, event_name: str) -> int:
        """Number of registrations for event_name."""
        return len(self._handlers.get(event_name, ()))

    def reset(self) -> None:
        """Drop every registration."""
        self._handlers.clear()

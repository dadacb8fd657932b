"""In-process publish/subscribe for real-time alert events."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Subscriber = Callable[[str, Any], None]


class EventBus:
    """Fans each broadcast event out to every subscriber.

    A subscriber that raises is logged and skipped; the remaining
    subscribers still receive the event.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register *subscriber*; returns a callable that unsubscribes it."""
        with self._lock:
            self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            with self._lock:
                if subscriber in self._subscribers:
                    self._subscribers.remove(subscriber)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def broadcast(self, event_name: str, payload: Any) -> int:
        """Deliver *payload* to all subscribers; returns how many succeeded."""
        with self._lock:
            subscribers = list(self._subscribers)

        sent = 0
        for subscriber in subscribers:
            try:
                subscriber(event_name, payload)
                sent += 1
            except Exception:
                logger.warning("Subscriber failed for event %s", event_name, exc_info=True)
        logger.debug("Broadcast %s to %d/%d subscribers", event_name, sent, len(subscribers))
        return sent

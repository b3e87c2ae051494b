"""
Notification channels - synchronous in-process callbacks.

A Notification is one event type. Subscribers are called on the
emitting thread, in the order they subscribed. A subscriber that raises
stops delivery and the error reaches whoever emitted.
"""

from __future__ import annotations
import threading
from typing import Any, Callable

Callback = Callable[..., Any]


class Notification:
    """One independently subscribable event channel."""

    def __init__(self, name: str):
        self.name = name
        self._subscribers: list[Callback] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Callback) -> Callback:
        """Add a subscriber. Returns it, so this works as a decorator."""
        with self._lock:
            self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback: Callback) -> bool:
        """Remove the first registration of callback. Returns False if absent."""
        with self._lock:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                return False
        return True

    def emit(self, *args: Any) -> None:
        with self._lock:
            subscribers = tuple(self._subscribers)
        for callback in subscribers:
            callback(*args)

    def clear(self) -> None:
        with self._lock:
            self._subscribers.clear()

    def __len__(self) -> int:
        return len(self._subscribers)

    def __repr__(self):
        return f"Notification({self.name!r}, subscribers={len(self)})"

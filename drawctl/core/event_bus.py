"""
Lightweight in-process event bus: subscribe/emit with ordered, synchronous callbacks.
"""
import threading
from collections import defaultdict
from typing import Any, Callable

from .logger import get_logger

logger = get_logger("event_bus")


class EventBus:
    """
    Event bus: event_name -> list of callbacks, kept in subscription order.
    Callbacks are invoked with (data) on the emitting thread; errors are caught and logged.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable[[Any], None]]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, event_name: str, callback: Callable[[Any], None]) -> None:
        """Register callback for event_name. Same callback can be subscribed multiple times."""
        if not callable(callback):
            raise TypeError("callback must be callable, got %r" % (callback,))
        with self._lock:
            self._handlers[event_name].append(callback)

    def unsubscribe(self, event_name: str, callback: Callable[[Any], None]) -> None:
        """Remove one occurrence of callback for event_name."""
        with self._lock:
            if event_name not in self._handlers:
                return
            try:
                self._handlers[event_name].remove(callback)
            except ValueError:
                pass
            if not self._handlers[event_name]:
                del self._handlers[event_name]

    def subscribers(self, event_name: str) -> int:
        """Number of callbacks registered for event_name."""
        with self._lock:
            return len(self._handlers.get(event_name, ()))

    def emit(self, event_name: str, data: Any = None) -> None:
        """Invoke all callbacks for event_name with (data), in order. Errors are logged, not raised."""
        with self._lock:
            callbacks = list(self._handlers.get(event_name, ()))
        for cb in callbacks:
            try:
                cb(data)
            except Exception as e:
                logger.exception("EventBus callback error [%s]: %s", event_name, e)

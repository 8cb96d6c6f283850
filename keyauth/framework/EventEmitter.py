"""
In-process publish/subscribe registry owned by one client instance.
"""
import logging
import threading
from typing import Any, Callable, Dict, List, Tuple, Union

from keyauth.enums.EventType import EventType

logger = logging.getLogger(__name__)

EventName = Union[EventType, str]
Callback = Callable[[Dict[str, Any]], Any]


class EventEmitter:
    """
    Maps event names to ordered subscriber lists.

    Delivery is synchronous, in registration order, on the emitting thread.
    The registry is locked while it changes; callbacks run outside the lock.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Tuple[Callback, bool]]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(event: EventName) -> str:
        return event.value if isinstance(event, EventType) else str(event)

    def subscribe(self, event: EventName, callback: Callback) -> Callback:
        """Register `callback` for every future `event`. Returns the callback."""
        return self._add(event, callback, once=False)

    def subscribeOnce(self, event: EventName, callback: Callback) -> Callback:
        """Register `callback` for the next `event` only."""
        return self._add(event, callback, once=True)

    on = subscribe
    once = subscribeOnce

    def _add(self, event: EventName, callback: Callback, once: bool) -> Callback:
        if not callable(callback):
            raise TypeError("callback must be callable")
        with self._lock:
            self._listeners.setdefault(self._key(event), []).append((callback, once))
        return callback

    def off(self, event: EventName, callback: Callback) -> bool:
        """
        Remove the first registration of `callback` for `event`.

        Returns:
            True if a registration was removed
        """
        key = self._key(event)
        with self._lock:
            listeners = self._listeners.get(key, [])
            for index, (registered, _) in enumerate(listeners):
                if registered == callback:
                    del listeners[index]
                    return True
        return False

    def listenerCount(self, event: EventName) -> int:
        with self._lock:
            return len(self._listeners.get(self._key(event), []))

    def emit(self, event: EventName, data: Dict[str, Any]) -> bool:
        """
        Deliver `data` to every subscriber of `event`.

        A subscriber that raises is logged and skipped; delivery continues.

        Returns:
            True if the event had subscribers
        """
        key = self._key(event)
        with self._lock:
            listeners = list(self._listeners.get(key, []))
            if not listeners:
                return False
            self._listeners[key] = [entry for entry in self._listeners[key] if not entry[1]]

        for callback, _ in listeners:
            try:
                callback(data)
            except Exception as e:
                logger.error(
                    "EVENT_EMITTER :: Subscriber failed | Event: %s | Error: %s",
                    key,
                    str(e),
                    exc_info=True
                )

        return True

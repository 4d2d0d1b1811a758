from __future__ import annotations

from collections import defaultdict
from threading import Lock
from typing import Callable, DefaultDict, List

from tyre_twin.core.events import Event

EventHandler = Callable[[Event], None]
Unsubscribe = Callable[[], None]


class EventBus:
    """Synchronous observer registry shared by the tick loop, the HTTP controls and the vision worker.

    Handlers run on the publishing thread, in subscription order. Subscribing
    returns a callable that detaches the handler again.
    """

    def __init__(self) -> None:
        self._observers: DefaultDict[str, List[EventHandler]] = defaultdict(list)
        self._lock = Lock()

    def subscribe(self, event_name: str, handler: EventHandler) -> Unsubscribe:
        with self._lock:
            self._observers[event_name].append(handler)

        def unsubscribe() -> None:
            with self._lock:
                observers = self._observers.get(event_name, [])
                if handler in observers:
                    observers.remove(handler)

        return unsubscribe

    def publish(self, event: Event) -> None:
        with self._lock:
            observers = tuple(self._observers.get(event.name, ()))
        for observer in observers:
            observer(event)

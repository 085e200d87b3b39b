# application/events/event_dispatcher.py
from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Protocol, Tuple, Union

Listener = Callable[[Any], None]


class EventSubscriber(Protocol):
    def subscribed_events(self) -> Mapping[str, Union[str, Tuple[str, int]]]:
        ...


class EventDispatcher:
    """
    Calls listeners registered for an event name.

    Higher priority runs first; equal priorities keep registration order.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Tuple[int, int, Listener]]] = {}
        self._seq = 0

    def add_listener(self, event_name: str, listener: Listener, priority: int = 0) -> None:
        self._seq += 1
        self._listeners.setdefault(event_name, []).append((priority, self._seq, listener))

    def add_subscriber(self, subscriber: EventSubscriber) -> None:
        for event_name, entry in subscriber.subscribed_events().items():
            if isinstance(entry, str):
                method_name, priority = entry, 0
            else:
                method_name, priority = entry
            self.add_listener(event_name, getattr(subscriber, method_name), priority)

    def remove_listener(self, event_name: str, listener: Listener) -> None:
        entries = self._listeners.get(event_name)
        if not entries:
            return
        self._listeners[event_name] = [e for e in entries if e[2] != listener]

    def get_listeners(self, event_name: str) -> List[Listener]:
        entries = sorted(self._listeners.get(event_name, []), key=lambda e: (-e[0], e[1]))
        return [listener for _, _, listener in entries]

    def has_listeners(self, event_name: str) -> bool:
        return bool(self._listeners.get(event_name))

    def dispatch(self, event_name: str, event: Any) -> Any:
        for listener in self.get_listeners(event_name):
            listener(event)
        return event

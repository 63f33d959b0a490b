"""Listener registry used by the reference store."""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, DefaultDict, Dict, Iterable, List, Protocol

STATE_CHANGED = "state_changed"


class EventListener(Protocol):
    """Callable signature for event listeners."""

    def __call__(self, event: str, payload: Dict[str, object]) -> None:  # pragma: no cover - Protocol
        ...


class EventBus:
    """In-process notifier for store events.

    ``emit`` walks a snapshot of the listeners taken when it starts: a listener
    added during notification is first called on the next emit, and one removed
    during notification is still called this round.
    """

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[EventListener]] = defaultdict(list)

    def subscribe(self, event: str, listener: EventListener) -> Callable[[], None]:
        """Register ``listener`` for ``event`` and return its removal handle."""

        self._listeners[event].append(listener)
        subscribed = True

        def unsubscribe() -> None:
            nonlocal subscribed
            if not subscribed:
                return
            subscribed = False
            self.unsubscribe(event, listener)

        return unsubscribe

    def unsubscribe(self, event: str, listener: EventListener) -> None:
        if listener in self._listeners[event]:
            self._listeners[event].remove(listener)

    def emit(self, event: str, payload: Dict[str, object] | None = None) -> int:
        """Notify listeners of ``event`` and return how many were called."""

        payload = payload or {}
        snapshot = tuple(self._listeners[event])
        for listener in snapshot:
            listener(event, payload)
        return len(snapshot)

    def listeners(self, event: str) -> Iterable[EventListener]:
        return tuple(self._listeners[event])

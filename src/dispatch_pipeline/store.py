"""Reference state container the pipeline is assembled around."""

from __future__ import annotations

from typing import Any, Callable

from .actions import action_type
from .events import STATE_CHANGED, EventBus
from .exceptions import (
    DispatchInProgressError,
    InvalidActionError,
    MiddlewareConstructionError,
)
from .logging import get_logger
from .middleware import Dispatch, Middleware
from .pipeline import StoreView, compose

LOGGER = get_logger("store")

Reducer = Callable[[Any, Any], Any]
Listener = Callable[[], None]
StoreCreator = Callable[..., "Store"]
Enhancer = Callable[[StoreCreator], StoreCreator]


class Store:
    """Holds state produced by a reducer and notifies subscribers.

    ``dispatch`` is a plain method here; the mutating composer replaces it
    with an instance attribute.
    """

    def __init__(self, reducer: Reducer, initial_state: Any = None) -> None:
        if not callable(reducer):
            raise TypeError("Expected the reducer to be a function")
        self._reducer = reducer
        self._state = initial_state
        self._dispatching = False
        self._events = EventBus()

    def get_state(self) -> Any:
        if self._dispatching:
            raise DispatchInProgressError(
                "get_state may not be called while the reducer is executing"
            )
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        if not callable(listener):
            raise TypeError("Expected the listener to be a function")

        def handler(event: str, payload: dict) -> None:
            listener()

        return self._events.subscribe(STATE_CHANGED, handler)

    def dispatch(self, action: Any) -> Any:
        kind = action_type(action)
        if kind is None:
            raise InvalidActionError(f"Actions must carry a type tag, got {action!r}")
        if self._dispatching:
            raise DispatchInProgressError("Reducers may not dispatch actions")

        self._dispatching = True
        try:
            self._state = self._reducer(self._state, action)
        finally:
            self._dispatching = False

        self._events.emit(STATE_CHANGED, {"action_type": kind})
        return action

    def replace_reducer(self, reducer: Reducer) -> None:
        if not callable(reducer):
            raise TypeError("Expected the reducer to be a function")
        self._reducer = reducer
        LOGGER.debug("reducer replaced")


def create_store(
    reducer: Reducer,
    initial_state: Any = None,
    enhancer: Enhancer | None = None,
) -> Any:
    """Create a :class:`Store`, optionally through a store ``enhancer``."""

    if enhancer is not None:
        if not callable(enhancer):
            raise TypeError("Expected the enhancer to be a function")
        return enhancer(create_store)(reducer, initial_state)
    return Store(reducer, initial_state)


class _MiddlewareAPI:
    """Store handle given to interceptors built by :func:`middleware_enhancer`."""

    __slots__ = ("_store", "_dispatch")

    def __init__(self, store: Any) -> None:
        self._store = store
        self._dispatch: Dispatch | None = None

    def get_state(self) -> Any:
        return self._store.get_state()

    def dispatch(self, action: Any) -> Any:
        if self._dispatch is None:
            raise MiddlewareConstructionError(
                "Dispatching while constructing the interceptor chain is not allowed"
            )
        return self._dispatch(action)


def middleware_enhancer(*middlewares: Middleware) -> Enhancer:
    """Return a store enhancer that installs ``middlewares`` on new stores.

    Unlike :func:`apply_middleware` called on an existing store, interceptors
    receive an API whose ``dispatch`` re-enters the full chain, so an
    interceptor can dispatch follow-up actions from the top.
    """

    def enhancer(create: StoreCreator) -> StoreCreator:
        def create_enhanced(reducer: Reducer, initial_state: Any = None) -> Any:
            store = create(reducer, initial_state)
            api = _MiddlewareAPI(store)
            chain = [middleware(api) for middleware in middlewares]
            dispatch = compose(*chain)(store.dispatch)
            api._dispatch = dispatch
            return StoreView(store, dispatch)

        return create_enhanced

    return enhancer


__all__ = ["Store", "create_store", "middleware_enhancer"]

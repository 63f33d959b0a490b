"""Dispatch composition primitives.

Two composers are provided. :func:`patch_dispatch` rewrites ``store.dispatch``
in place, one factory at a time. :func:`apply_middleware` folds three-level
interceptors over the original dispatch and returns a new store view, leaving
the original store untouched.
"""

from __future__ import annotations

from functools import reduce
from typing import Any, Callable, Iterable, Sequence

from .logging import get_logger, log_event
from .middleware import Dispatch, Middleware, PatchMiddleware, middleware_name

LOGGER = get_logger("pipeline")


def compose(*funcs: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Compose single-argument functions from right to left.

    ``compose(f, g, h)(x)`` is ``f(g(h(x)))``; ``compose()`` is the identity.
    """

    if not funcs:
        return lambda value: value
    if len(funcs) == 1:
        return funcs[0]
    return reduce(lambda outer, inner: lambda value: outer(inner(value)), funcs)


class StoreView:
    """Store-like object carrying a composed dispatch.

    Every attribute other than ``dispatch`` is read from the wrapped store, so
    state accessors keep observing the live container.
    """

    __slots__ = ("_store", "_dispatch")

    def __init__(self, store: Any, dispatch: Dispatch) -> None:
        self._store = store
        self._dispatch = dispatch

    @property
    def dispatch(self) -> Dispatch:
        return self._dispatch

    @property
    def original(self) -> Any:
        """The store this view was built from."""

        return self._store

    def __getattr__(self, name: str) -> Any:
        # Private and dunder lookups stay local; _store may be unset mid-copy
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._store, name)

    def __copy__(self) -> "StoreView":
        return StoreView(self._store, self._dispatch)

    def __repr__(self) -> str:
        return f"StoreView({self._store!r})"


def apply_middleware(store: Any, middlewares: Sequence[Middleware]) -> StoreView:
    """Return a copy of ``store`` whose dispatch runs through ``middlewares``.

    The first interceptor in ``middlewares`` is the outermost wrapper and sees
    each action first. With no interceptors the view dispatches straight to
    ``store.dispatch``.
    """

    chain = list(middlewares)
    dispatch = reduce(
        lambda inner, middleware: middleware(store)(inner),
        reversed(chain),
        store.dispatch,
    )
    LOGGER.debug(
        "composed dispatch through %d interceptor(s): %s",
        len(chain),
        [middleware_name(m) for m in chain],
        extra={"mode": "compose"},
    )
    return StoreView(store, dispatch)


def patch_dispatch(store: Any, middlewares: Iterable[PatchMiddleware]) -> None:
    """Rewrite ``store.dispatch`` in place with each two-level factory.

    Each factory reads the store's current dispatch as its ``next`` when it is
    called, so the overwrite has to happen immediately for every factory. The
    list is walked from last to first so the first factory ends up outermost.
    An empty list leaves ``store.dispatch`` untouched.
    """

    chain = list(middlewares)
    for middleware in reversed(chain):
        store.dispatch = middleware(store)
        LOGGER.debug(
            "patched dispatch with %s",
            middleware_name(middleware),
            extra={"mode": "patch", "interceptor": middleware_name(middleware)},
        )
    if chain:
        log_event(
            LOGGER,
            "dispatch_patched",
            {"interceptors": [middleware_name(m) for m in chain]},
        )


__all__ = ["StoreView", "apply_middleware", "compose", "patch_dispatch"]

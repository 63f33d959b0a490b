"""Interceptor authoring contract.

An interceptor ("middleware") is written as three nested callables, each bound
at a different time:

``factory(store)``
    called once at assembly time with the store-like object;
``wrap(next)``
    called once with the downstream dispatch function;
``dispatch(action)``
    called for every action flowing through the pipeline.

The mutating composer (:func:`dispatch_pipeline.pipeline.patch_dispatch`)
consumes an older two-level shape, ``factory(store) -> dispatch(action)``,
where the factory reads ``store.dispatch`` itself as its ``next``.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

Dispatch = Callable[[Any], Any]
DispatchWrapper = Callable[[Dispatch], Dispatch]


class StoreLike(Protocol):
    """Capability bundle handed to interceptor factories."""

    dispatch: Dispatch


class Middleware(Protocol):
    """Signature of a three-level interceptor factory."""

    def __call__(self, store: Any) -> DispatchWrapper:  # pragma: no cover - interface only
        ...


class PatchMiddleware(Protocol):
    """Signature of a two-level factory used by the mutating composer."""

    def __call__(self, store: Any) -> Dispatch:  # pragma: no cover - interface only
        ...


def as_patch(middleware: Middleware) -> PatchMiddleware:
    """Adapt a three-level interceptor to the two-level patching shape.

    ``next`` is bound to whatever ``store.dispatch`` is when the returned
    factory is called, so the adapter must be applied synchronously during
    registration.
    """

    def factory(store: Any) -> Dispatch:
        return middleware(store)(store.dispatch)

    factory.__name__ = getattr(middleware, "__name__", "middleware")
    factory.__wrapped__ = middleware  # type: ignore[attr-defined]
    return factory


def middleware_name(middleware: Any) -> str:
    """Best effort display name for logging."""

    return getattr(middleware, "__name__", None) or type(middleware).__name__


__all__ = [
    "Dispatch",
    "DispatchWrapper",
    "Middleware",
    "PatchMiddleware",
    "StoreLike",
    "as_patch",
    "middleware_name",
]

"""Builtin interceptors.

Every public name here is a three-level interceptor factory, or a function
returning one when it needs arguments.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Tuple

from .actions import action_type
from .logging import get_logger
from .middleware import Dispatch, DispatchWrapper, Middleware
from .telemetry import MetricsCollector

LOGGER = get_logger("interceptors")


def _describe(action: Any) -> str:
    return action_type(action) or repr(action)


def log_action(store: Any) -> DispatchWrapper:
    """Log every action before passing it on."""

    def wrap(next_dispatch: Dispatch) -> Dispatch:
        def dispatch(action: Any) -> Any:
            LOGGER.info(
                "-> Action received: %s",
                _describe(action),
                extra={"action_type": action_type(action)},
            )
            return next_dispatch(action)

        return dispatch

    return wrap


def log_state(store: Any) -> DispatchWrapper:
    """Log the store state once the rest of the chain has handled an action."""

    def wrap(next_dispatch: Dispatch) -> Dispatch:
        def dispatch(action: Any) -> Any:
            result = next_dispatch(action)
            LOGGER.info(
                "** Current State is: %s",
                store.get_state(),
                extra={"action_type": action_type(action)},
            )
            return result

        return dispatch

    return wrap


def crash_reporter(store: Any) -> DispatchWrapper:
    """Log failures raised further down the chain, then re-raise them."""

    def wrap(next_dispatch: Dispatch) -> Dispatch:
        def dispatch(action: Any) -> Any:
            try:
                return next_dispatch(action)
            except Exception:
                LOGGER.exception(
                    "dispatch failed for %s",
                    _describe(action),
                    extra={"action_type": action_type(action)},
                )
                raise

        return dispatch

    return wrap


def block_actions(types: Iterable[str]) -> Middleware:
    """Build an interceptor that swallows actions whose type is in ``types``.

    Blocked actions never reach inner interceptors or the store; dispatch
    returns ``None`` for them.
    """

    blocked = frozenset(types)

    def factory(store: Any) -> DispatchWrapper:
        def wrap(next_dispatch: Dispatch) -> Dispatch:
            def dispatch(action: Any) -> Any:
                if action_type(action) in blocked:
                    LOGGER.debug("blocked %s", _describe(action))
                    return None
                return next_dispatch(action)

            return dispatch

        return wrap

    factory.__name__ = "block_actions"
    return factory


def record_actions(history: List[Tuple[Any, Any]] | None = None) -> Middleware:
    """Build an interceptor appending ``(action, state_after)`` to ``history``.

    The list is also exposed as ``factory.history``.
    """

    records: List[Tuple[Any, Any]] = history if history is not None else []

    def factory(store: Any) -> DispatchWrapper:
        def wrap(next_dispatch: Dispatch) -> Dispatch:
            def dispatch(action: Any) -> Any:
                result = next_dispatch(action)
                records.append((action, store.get_state()))
                return result

            return dispatch

        return wrap

    factory.__name__ = "record_actions"
    factory.history = records  # type: ignore[attr-defined]
    return factory


def measure_dispatch(collector: MetricsCollector | None = None) -> Middleware:
    """Build an interceptor that counts and times dispatches."""

    metrics = collector if collector is not None else MetricsCollector()

    def factory(store: Any) -> DispatchWrapper:
        def wrap(next_dispatch: Dispatch) -> Dispatch:
            def dispatch(action: Any) -> Any:
                metrics.increment("actions_dispatched")
                with metrics.time(f"dispatch.{_describe(action)}"):
                    return next_dispatch(action)

            return dispatch

        return wrap

    factory.__name__ = "measure_dispatch"
    factory.metrics = metrics  # type: ignore[attr-defined]
    return factory


BUILTIN_INTERCEPTORS: dict[str, Callable[..., Any]] = {
    "log_action": log_action,
    "log_state": log_state,
    "crash_reporter": crash_reporter,
}

BUILTIN_INTERCEPTOR_BUILDERS: dict[str, Callable[..., Middleware]] = {
    "block_actions": block_actions,
    "record_actions": record_actions,
    "measure_dispatch": measure_dispatch,
}

from __future__ import annotations

import copy

import pytest

from dispatch_pipeline.pipeline import StoreView, apply_middleware, compose


def test_compose_applies_right_to_left() -> None:
    add_one = lambda value: value + 1  # noqa: E731
    double = lambda value: value * 2  # noqa: E731

    assert compose(add_one, double)(5) == 11
    assert compose(double, add_one)(5) == 12


def test_compose_without_functions_is_identity() -> None:
    marker = object()
    assert compose()(marker) is marker


def test_compose_single_function_is_returned() -> None:
    assert compose(str) is str


def test_zero_interceptors_keeps_original_dispatch(fake_store) -> None:
    view = apply_middleware(fake_store, [])

    assert view.dispatch == fake_store.dispatch
    assert view.dispatch({"type": "PING"}) == {"type": "PING"}
    assert fake_store.received == [{"type": "PING"}]


def test_interceptors_run_in_list_order(fake_store, tracing_middleware) -> None:
    trace: list[str] = []
    first = tracing_middleware("A", trace)
    second = tracing_middleware("B", trace)
    original = fake_store.dispatch

    def recording_dispatch(action):
        trace.append("store")
        return original(action)

    fake_store.dispatch = recording_dispatch
    view = apply_middleware(fake_store, [first, second])
    view.dispatch({"type": "X"})

    assert trace == ["A:before", "B:before", "store", "B:after", "A:after"]


def test_original_store_is_not_mutated(fake_store, tracing_middleware) -> None:
    original = fake_store.dispatch
    view = apply_middleware(fake_store, [tracing_middleware("A", [])])

    assert fake_store.dispatch == original
    assert view.dispatch is not original
    assert isinstance(view, StoreView)
    assert view.original is fake_store


def test_view_reads_live_state(fake_store) -> None:
    view = apply_middleware(fake_store, [])
    view.dispatch({"type": "X"})
    view.dispatch({"type": "Y"})

    assert view.get_state() == 2
    assert fake_store.get_state() == 2


def test_view_dispatch_is_read_only(fake_store) -> None:
    view = apply_middleware(fake_store, [])
    with pytest.raises(AttributeError):
        view.dispatch = lambda action: action


def test_short_circuit_skips_inner_chain(fake_store, tracing_middleware) -> None:
    trace: list[str] = []

    def swallow(store):
        def wrap(next_dispatch):
            def dispatch(action):
                trace.append("swallow")
                return "stopped"

            return dispatch

        return wrap

    view = apply_middleware(fake_store, [swallow, tracing_middleware("inner", trace)])

    assert view.dispatch({"type": "X"}) == "stopped"
    assert trace == ["swallow"]
    assert fake_store.received == []


def test_interceptor_can_transform_action(fake_store) -> None:
    def tag(store):
        def wrap(next_dispatch):
            def dispatch(action):
                return next_dispatch({**action, "tagged": True})

            return dispatch

        return wrap

    view = apply_middleware(fake_store, [tag])
    view.dispatch({"type": "X"})

    assert fake_store.received == [{"type": "X", "tagged": True}]


def test_failure_propagates_and_skips_post_steps(fake_store, tracing_middleware) -> None:
    trace: list[str] = []

    def failing_dispatch(action):
        raise ValueError("boom")

    fake_store.dispatch = failing_dispatch
    view = apply_middleware(
        fake_store, [tracing_middleware("A", trace), tracing_middleware("B", trace)]
    )

    with pytest.raises(ValueError, match="boom"):
        view.dispatch({"type": "X"})
    assert trace == ["A:before", "B:before"]


def test_factories_are_bound_once_at_assembly(fake_store) -> None:
    calls = {"store": 0, "next": 0}

    def counting(store):
        calls["store"] += 1

        def wrap(next_dispatch):
            calls["next"] += 1
            return next_dispatch

        return wrap

    view = apply_middleware(fake_store, [counting])
    for _ in range(3):
        view.dispatch({"type": "X"})

    assert calls == {"store": 1, "next": 1}


def test_factories_receive_the_original_store(fake_store) -> None:
    seen = []

    def capture(store):
        seen.append(store)
        return lambda next_dispatch: next_dispatch

    apply_middleware(fake_store, [capture])
    assert seen == [fake_store]


def test_same_factory_twice_runs_twice(fake_store, tracing_middleware) -> None:
    trace: list[str] = []
    twice = tracing_middleware("A", trace)

    view = apply_middleware(fake_store, [twice, twice])
    view.dispatch({"type": "X"})

    assert trace == ["A:before", "A:before", "A:after", "A:after"]


def test_three_interceptors_nest_in_list_order(fake_store, tracing_middleware) -> None:
    trace: list[str] = []
    view = apply_middleware(
        fake_store,
        [tracing_middleware(label, trace) for label in ("A", "B", "C")],
    )

    view.dispatch({"type": "X"})

    assert trace == ["A:before", "B:before", "C:before", "C:after", "B:after", "A:after"]
    assert fake_store.received == [{"type": "X"}]


def test_compose_three_functions_is_associative() -> None:
    trace: list[str] = []

    def step(label):
        def run(value):
            trace.append(label)
            return f"{label}({value})"

        return run

    assert compose(step("f"), step("g"), step("h"))("x") == "f(g(h(x)))"
    assert trace == ["h", "g", "f"]


def test_view_can_be_shallow_copied(fake_store) -> None:
    view = apply_middleware(fake_store, [])

    duplicate = copy.copy(view)

    assert isinstance(duplicate, StoreView)
    assert duplicate.original is fake_store
    assert duplicate.dispatch == view.dispatch
    duplicate.dispatch({"type": "X"})
    assert view.get_state() == 1


def test_view_does_not_forward_private_names(fake_store) -> None:
    fake_store._secret = "hidden"
    view = apply_middleware(fake_store, [])

    with pytest.raises(AttributeError):
        view._secret

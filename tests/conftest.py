from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, List

import pytest


# Ensure src/ is importable for all tests (CI and local)
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for p in (ROOT, SRC):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


def pytest_collection_modifyitems(config, items):
    """Default all tests to 'unit' unless explicitly marked otherwise.

    - If a test has @pytest.mark.integ or @pytest.mark.smoke, leave it.
    - If it already has @pytest.mark.unit, leave it.
    - Else, add @pytest.mark.unit to make unit the default selection.
    """
    for item in items:
        marks = {m.name for m in item.iter_markers()}
        if not ("integ" in marks or "smoke" in marks or "unit" in marks):
            item.add_marker(pytest.mark.unit)


class FakeStore:
    """Minimal store-like object recording what reached the raw dispatch."""

    def __init__(self) -> None:
        self.received: List[Any] = []
        self.state = 0

    def get_state(self) -> int:
        return self.state

    def dispatch(self, action: Any) -> Any:
        self.received.append(action)
        self.state += 1
        return action


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def tracing_middleware() -> Callable[[str, List[str]], Any]:
    """Return a builder for interceptors that trace their pre/post steps."""

    def build(label: str, trace: List[str]) -> Any:
        def factory(store: Any) -> Any:
            def wrap(next_dispatch: Any) -> Any:
                def dispatch(action: Any) -> Any:
                    trace.append(f"{label}:before")
                    result = next_dispatch(action)
                    trace.append(f"{label}:after")
                    return result

                return dispatch

            return wrap

        factory.__name__ = label
        return factory

    return build

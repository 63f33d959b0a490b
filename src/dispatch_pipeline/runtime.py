"""Assemble a configured interceptor chain around a store."""

from __future__ import annotations

from typing import Any, List

from .config import PipelineSettings
from .logging import get_logger, log_event
from .middleware import as_patch
from .pipeline import apply_middleware, patch_dispatch
from .registry import InterceptorRegistry

LOGGER = get_logger("runtime")


def assemble(
    store: Any,
    settings: PipelineSettings,
    registry: InterceptorRegistry | None = None,
) -> Any:
    """Install the interceptors named in ``settings`` on ``store``.

    In ``compose`` mode a new store view is returned and ``store`` is left as
    is. In ``patch`` mode ``store.dispatch`` is rewritten and ``store`` itself
    is returned.
    """

    registry = registry or InterceptorRegistry.default()
    middlewares: List[Any] = [registry.resolve(entry) for entry in settings.interceptors]

    if settings.mode == "patch":
        patch_dispatch(store, [as_patch(middleware) for middleware in middlewares])
        assembled = store
    else:
        assembled = apply_middleware(store, middlewares)

    log_event(
        LOGGER,
        "pipeline_assembled",
        {"name": settings.name, "mode": settings.mode, "interceptors": settings.interceptor_names()},
    )
    return assembled

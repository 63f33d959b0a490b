"""Dispatch interception pipeline."""

from .actions import Action, create_action
from .pipeline import StoreView, apply_middleware, compose, patch_dispatch
from .middleware import as_patch
from .runtime import assemble
from .store import Store, create_store, middleware_enhancer

__all__ = [
    "Action",
    "Store",
    "StoreView",
    "apply_middleware",
    "as_patch",
    "assemble",
    "compose",
    "create_action",
    "create_store",
    "middleware_enhancer",
    "patch_dispatch",
]

"""Registry resolving interceptor names to factories."""

from __future__ import annotations

from importlib import import_module
from typing import Any, Callable, Dict, Iterable, Mapping

from .config import InterceptorSettings
from .exceptions import ConfigurationError, UnknownInterceptorError
from .interceptors import BUILTIN_INTERCEPTOR_BUILDERS, BUILTIN_INTERCEPTORS
from .logging import get_logger

LOGGER = get_logger("registry")


class InterceptorRegistry:
    """Registry that exposes interceptor factories by name.

    Plain entries are factories used as is. Parameterized entries are called
    with the configured ``options`` to produce a factory.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, Callable[..., Any]] = {}
        self._builders: Dict[str, Callable[..., Any]] = {}

    def register(self, name: str, factory: Callable[..., Any], *, parameterized: bool = False) -> None:
        target = self._builders if parameterized else self._factories
        other = self._factories if parameterized else self._builders
        other.pop(name, None)
        target[name] = factory

    def configure(self, mappings: Mapping[str, Callable[..., Any]]) -> None:
        for name, factory in mappings.items():
            self.register(name, factory)

    def names(self) -> Iterable[str]:
        return tuple(sorted({*self._factories, *self._builders}))

    def resolve(self, entry: InterceptorSettings) -> Callable[..., Any]:
        """Return the interceptor factory described by ``entry``."""

        if entry.name in self._factories:
            if entry.options:
                raise ConfigurationError(
                    f"Interceptor {entry.name} does not take options"
                )
            return self._factories[entry.name]
        if entry.name in self._builders:
            return self._builders[entry.name](**entry.options)
        if ":" in entry.name:
            target = _load_entrypoint(entry.name)
            return target(**entry.options) if entry.options else target
        raise UnknownInterceptorError(f"Unknown interceptor: {entry.name}")

    @classmethod
    def default(cls) -> "InterceptorRegistry":
        """Return a registry holding the builtin interceptors."""

        registry = cls()
        registry.configure(BUILTIN_INTERCEPTORS)
        for name, builder in BUILTIN_INTERCEPTOR_BUILDERS.items():
            registry.register(name, builder, parameterized=True)
        return registry


def _load_entrypoint(entrypoint: str) -> Callable[..., Any]:
    module_name, function_name = entrypoint.split(":")
    try:
        module = import_module(module_name)
        target = getattr(module, function_name)
    except (ModuleNotFoundError, AttributeError, ValueError, TypeError) as exc:
        raise UnknownInterceptorError(
            f"Unable to resolve interceptor entrypoint {entrypoint}"
        ) from exc
    LOGGER.debug("resolved entrypoint %s", entrypoint)
    return target

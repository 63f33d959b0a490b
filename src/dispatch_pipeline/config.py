"""Configuration models for assembling dispatch pipelines."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field, ValidationError, model_validator

from .exceptions import ConfigurationError


class InterceptorSettings(BaseModel):
    """One entry of the interceptor chain."""

    name: str = Field(..., description="Registered interceptor name or 'module:function' entrypoint")
    options: Dict[str, Any] = Field(
        default_factory=dict,
        description="Keyword arguments for interceptors that are built from parameters.",
    )

    @model_validator(mode="after")
    def validate_name(self) -> "InterceptorSettings":
        if not self.name.strip():
            raise ValueError("Interceptor name must not be blank")
        if ":" in self.name:
            module_name, _, function_name = self.name.partition(":")
            if ":" in function_name or not module_name.strip() or not function_name.strip():
                raise ValueError("Entrypoints must be in 'module:function' format")
        return self


class PipelineSettings(BaseModel):
    """High level configuration for a dispatch pipeline."""

    name: str = "default"
    mode: Literal["compose", "patch"] = Field(
        default="compose",
        description="'compose' returns a new store view, 'patch' rewrites store.dispatch in place.",
    )
    interceptors: List[InterceptorSettings] = Field(default_factory=list)

    def interceptor_names(self) -> List[str]:
        return [entry.name for entry in self.interceptors]


def build_settings_from_dict(raw: Dict[str, Any]) -> PipelineSettings:
    """Build :class:`PipelineSettings` from a plain dictionary.

    Interceptors may be given as bare names instead of mappings.
    """

    if not isinstance(raw, dict):
        raise ConfigurationError("Pipeline configuration must be a mapping")
    data = dict(raw)
    entries = data.get("interceptors", [])
    if isinstance(entries, list):
        data["interceptors"] = [{"name": entry} if isinstance(entry, str) else entry for entry in entries]
    try:
        return PipelineSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid pipeline configuration: {exc}") from exc


def load_settings(path: Path) -> PipelineSettings:
    """Load settings from a JSON or YAML file at ``path``."""

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        if path.suffix.lower() in {".yaml", ".yml"}:
            import yaml

            try:
                data = yaml.safe_load(handle)
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Unable to parse {path}") from exc
        else:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ConfigurationError(f"Unable to parse {path}") from exc

    return build_settings_from_dict(data or {})


__all__ = [
    "InterceptorSettings",
    "PipelineSettings",
    "build_settings_from_dict",
    "load_settings",
]

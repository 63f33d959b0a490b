"""Action records and action creators."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping

from .exceptions import InvalidActionError


@dataclass(frozen=True, slots=True)
class Action:
    """Immutable unit of work identified by its ``type`` tag."""

    type: str
    payload: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.type, str) or not self.type:
            raise InvalidActionError("Action type must be a non-empty string")
        if "type" in self.payload:
            raise InvalidActionError("Action payload may not carry its own type key")
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the action to a flat JSON compatible mapping."""

        return {"type": self.type, **self.payload}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Action":
        """Build an :class:`Action` from a flat mapping carrying a ``type`` key."""

        if "type" not in payload:
            raise InvalidActionError(f"Action mapping has no type: {dict(payload)!r}")
        fields = {key: value for key, value in payload.items() if key != "type"}
        return cls(type=str(payload["type"]), payload=fields)


def action_type(action: Any) -> str | None:
    """Return the type tag of ``action`` or ``None`` if it has none."""

    if isinstance(action, Mapping):
        value = action.get("type")
    else:
        value = getattr(action, "type", None)
    return value if isinstance(value, str) and value else None


def create_action(type_: str) -> Callable[..., Action]:
    """Return an action creator producing :class:`Action` records of ``type_``.

    Keyword arguments passed to the creator become the action payload. The
    creator exposes ``type`` so reducers can match on it without string
    literals.
    """

    def creator(**payload: Any) -> Action:
        return Action(type=type_, payload=payload)

    creator.type = type_  # type: ignore[attr-defined]
    creator.__name__ = type_.lower()
    return creator

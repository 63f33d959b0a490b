"""Task list sample domain used by the CLI and end-to-end checks."""

from __future__ import annotations

from typing import Any, List, Mapping

from .actions import action_type, create_action
from .store import Store, create_store

ADD_TASK = "ADD_TASK"
REMOVE_TASK = "REMOVE_TASK"

add_task = create_action(ADD_TASK)
remove_task = create_action(REMOVE_TASK)


def _field(action: Any, key: str) -> Any:
    if isinstance(action, Mapping):
        return action.get(key)
    payload = getattr(action, "payload", {}) or {}
    return payload.get(key)


def tasks_reducer(state: List[Mapping[str, str]] | None, action: Any) -> List[Mapping[str, str]]:
    """Return the next task list; unknown actions leave ``state`` as is."""

    tasks = list(state or [])
    kind = action_type(action)
    if kind == ADD_TASK:
        return [*tasks, {"name": str(_field(action, "name")), "category": str(_field(action, "category"))}]
    if kind == REMOVE_TASK:
        name = _field(action, "name")
        return [task for task in tasks if task.get("name") != name]
    return state if state is not None else []


def create_task_store(initial: List[Mapping[str, str]] | None = None) -> Store:
    """Return a store holding an (initially empty) task list."""

    return create_store(tasks_reducer, list(initial or []))

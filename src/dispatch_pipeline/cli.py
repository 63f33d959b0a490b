"""Command line interface for running a task list through a dispatch pipeline."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

from rich.console import Console
from rich.table import Table

from .config import PipelineSettings, build_settings_from_dict, load_settings
from .registry import InterceptorRegistry
from .runtime import assemble
from .tasks import add_task, create_task_store

DEFAULT_INTERCEPTORS = ["log_action", "log_state"]


def load_configuration(path: Path | None) -> PipelineSettings:
    """Load :class:`PipelineSettings` from ``path`` or return the default chain."""

    if path is None:
        return build_settings_from_dict({"interceptors": DEFAULT_INTERCEPTORS})
    return load_settings(path)


def _parse_task(value: str) -> tuple[str, str]:
    name, sep, category = value.rpartition(":")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Tasks must look like 'name:category', got {value!r}")
    return name, category


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Dispatch actions through an interceptor pipeline")
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a pipeline configuration JSON or YAML file",
    )

    subparsers = parser.add_subparsers(dest="command")
    parser.set_defaults(handler=_run_command, task=[])

    run_parser = subparsers.add_parser("run", help="Add tasks through the configured pipeline")
    run_parser.add_argument(
        "--task",
        action="append",
        type=_parse_task,
        default=[],
        help="Task to add as 'name:category' (repeatable)",
    )
    run_parser.set_defaults(handler=_run_command)

    list_parser = subparsers.add_parser("interceptors", help="List builtin interceptors")
    list_parser.set_defaults(handler=_list_command)

    return parser


def _run_command(arguments: argparse.Namespace, console: Console) -> int:
    settings = load_configuration(arguments.config)
    store = assemble(create_task_store(), settings)
    tasks: List[tuple[str, str]] = arguments.task or [("Read ES6 spec", "Reading")]
    for name, category in tasks:
        store.dispatch(add_task(name=name, category=category))
    console.print_json(data=store.get_state())
    return 0


def _list_command(arguments: argparse.Namespace, console: Console) -> int:
    table = Table(title="Builtin interceptors")
    table.add_column("name")
    for name in InterceptorRegistry.default().names():
        table.add_row(name)
    console.print(table)
    return 0


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    """CLI entry point used by ``python -m dispatch_pipeline.cli``."""

    parser = _build_parser()
    arguments = parser.parse_args(argv)
    handler = getattr(arguments, "handler", None)
    if handler is None:
        parser.error("No command handler configured")
    return handler(arguments, console or Console())


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())

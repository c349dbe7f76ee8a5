"""Provide the `tasks` command-line entrypoint.

Each subcommand runs one load (and, for mutating commands, one save) against
the CSV data file, then exits. Tracker errors are printed to stderr and turn
into exit status 1.
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from loguru import logger
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .commands import add_task, complete_task, delete_task, list_tasks
from .config import load_settings
from .errors import InvalidTaskIDError, TaskTrackerError
from .model import Task
from .store import TaskStore
from .utils import format_relative, parse_decimal


def _configure_logging(level: str = "WARNING") -> None:
    """Configure loguru logger with the specified level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{module}</cyan>:<cyan>{line}</cyan>\n"
            "{message}"
        ),
    )


# Initialize with default level; will be reconfigured in main() once settings are known
_configure_logging()


def _parse_task_id(raw: str) -> int:
    task_id = parse_decimal(raw)
    if task_id is None:
        raise InvalidTaskIDError(raw)
    return task_id


def _render_tasks(tasks: list[Task], show_all: bool, now: Optional[datetime] = None) -> None:
    now = now or datetime.now(timezone.utc)
    table = Table(box=None, pad_edge=False)
    table.add_column("ID", justify="right")
    table.add_column("Task")
    table.add_column("Created")
    if show_all:
        table.add_column("Done")

    for task in tasks:
        row = [str(task.id), Text(task.description), format_relative(task.created_at, now)]
        if show_all:
            row.append("true" if task.is_completed else "false")
        table.add_row(*row)

    Console().print(table)


def _add(store: TaskStore, args: argparse.Namespace) -> int:
    task = add_task(store, args.description)
    sys.stdout.write(f"Added task {task.id}: {task.description}\n")
    return 0


def _list(store: TaskStore, args: argparse.Namespace) -> int:
    tasks = list_tasks(store, include_all=args.all)
    if args.json:
        sys.stdout.write(json.dumps({"tasks": [task.to_dict() for task in tasks]}, indent=2) + "\n")
        return 0
    _render_tasks(tasks, show_all=args.all)
    return 0


def _complete(store: TaskStore, args: argparse.Namespace) -> int:
    task = complete_task(store, _parse_task_id(args.task_id))
    sys.stdout.write(f"Marked task {task.id} as complete\n")
    return 0


def _delete(store: TaskStore, args: argparse.Namespace) -> int:
    task = delete_task(store, _parse_task_id(args.task_id))
    sys.stdout.write(f"Deleted task {task.id}\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tasks", description="A simple CLI todo application")
    parser.add_argument(
        "--data-file",
        default=None,
        help="CSV file holding the task list (default: ./.tasks.csv)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for diagnostics on stderr (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Add a new task")
    add.add_argument("description")
    add.set_defaults(func=_add)

    lst = subparsers.add_parser("list", help="List all tasks")
    lst.add_argument("-a", "--all", action="store_true", help="Show all tasks including completed ones")
    lst.add_argument("--json", action="store_true", help="Print tasks as JSON")
    lst.set_defaults(func=_list)

    complete = subparsers.add_parser("complete", help="Mark a task as complete")
    complete.add_argument("task_id")
    complete.set_defaults(func=_complete)

    delete = subparsers.add_parser("delete", help="Delete a task")
    delete.add_argument("task_id")
    delete.set_defaults(func=_delete)

    return parser


def main(argv: list[str] | None = None, cwd: Optional[Path] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "func", None)
    if handler is None:
        parser.print_help()
        return 1

    settings = load_settings(cwd, data_file=args.data_file, log_level=args.log_level)
    _configure_logging(settings.log_level)
    store = TaskStore(settings.data_file)
    logger.debug("Running {} against {}", args.command, store.path)
    try:
        return int(handler(store, args) or 0)
    except TaskTrackerError as exc:
        logger.debug("{} failed: {!r}", args.command, exc)
        sys.stderr.write(f"Error: {exc}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())

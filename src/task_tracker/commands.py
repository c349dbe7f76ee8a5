"""Command operations: load, transform in memory, save.

Every mutating command performs a fresh :meth:`TaskStore.load_all`, edits the
list in memory and writes it back with :meth:`TaskStore.save_all`. When the
target task is missing the command raises before saving, so the data file is
left untouched.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from loguru import logger

from .errors import NotFoundError
from .model import Task
from .store import TaskStore, next_id
from .utils import _now_local


def find_task(tasks: list[Task], task_id: int) -> int:
    """Return the index of ``task_id`` in ``tasks`` or raise NotFoundError."""
    for idx, task in enumerate(tasks):
        if task.id == task_id:
            return idx
    raise NotFoundError(task_id)


def add_task(store: TaskStore, description: str, now: Optional[datetime] = None) -> Task:
    tasks = store.load_all()
    created_at = (now or _now_local()).replace(microsecond=0)
    task = Task(id=next_id(tasks), description=description, created_at=created_at)
    tasks.append(task)
    store.save_all(tasks)
    logger.info("Added task {}: {}", task.id, task.description)
    return task


def list_tasks(store: TaskStore, include_all: bool = False) -> list[Task]:
    tasks = store.load_all()
    if include_all:
        return tasks
    return [task for task in tasks if not task.is_completed]


def complete_task(store: TaskStore, task_id: int) -> Task:
    tasks = store.load_all()
    task = tasks[find_task(tasks, task_id)]
    task.complete()
    store.save_all(tasks)
    logger.info("Marked task {} as complete", task_id)
    return task


def delete_task(store: TaskStore, task_id: int) -> Task:
    tasks = store.load_all()
    removed = tasks.pop(find_task(tasks, task_id))
    store.save_all(tasks)
    logger.info("Deleted task {}", task_id)
    return removed

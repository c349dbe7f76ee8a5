"""Provide the public `task_tracker` package exports."""

from __future__ import annotations

from .errors import (
    DecodeError,
    EncodeError,
    InvalidTaskIDError,
    LockError,
    NotFoundError,
    StoreIOError,
    TaskTrackerError,
)
from .model import Task
from .store import TaskStore

__all__ = [
    "DecodeError",
    "EncodeError",
    "InvalidTaskIDError",
    "LockError",
    "NotFoundError",
    "StoreIOError",
    "Task",
    "TaskStore",
    "TaskTrackerError",
]

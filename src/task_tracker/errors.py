"""Error taxonomy for the task store and its command layer."""

from __future__ import annotations

from typing import Optional


class TaskTrackerError(Exception):
    """Base class for every error the CLI reports to the user."""


class StoreIOError(TaskTrackerError):
    """The data file could not be opened, created, written or flushed."""


class LockError(TaskTrackerError):
    """The exclusive lock could not be taken for a reason other than contention."""


class DecodeError(TaskTrackerError):
    """The record stream is structurally malformed."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class NotFoundError(TaskTrackerError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"task with ID {task_id} not found")


class InvalidTaskIDError(TaskTrackerError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"invalid task ID: {raw}")


class EncodeError(TaskTrackerError):
    """A task cannot be written as UTF-8 text; nothing was saved."""

"""File-based task store guarded by an exclusive advisory lock.

Tasks live in a single CSV file. :meth:`TaskStore.load_all` and
:meth:`TaskStore.save_all` each take the lock on that file for their whole
duration, so a reader never observes a half-written save. The lock is *not*
held between a load and the following save: two commands that interleave
as load, load, save, save lose the first command's change (last save wins).
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Iterable

from loguru import logger

from .codec import read_tasks, write_tasks
from .errors import EncodeError, StoreIOError
from .io_utils import LockedFile
from .model import Task


def next_id(tasks: Iterable[Task]) -> int:
    """Return ``1 + max(ids)``, or ``1`` for an empty sequence."""
    return max((task.id for task in tasks), default=0) + 1


class TaskStore:
    """Flat-file store for :class:`Task` objects.

    Parameters
    ----------
    path:
        Location of the CSV data file. Created on first access.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"TaskStore(path={str(self.path)!r})"

    def _lock(self) -> LockedFile:
        return LockedFile(self.path)

    def load_all(self) -> list[Task]:
        """Read every task in file order under the exclusive lock."""
        with self._lock() as locked:
            try:
                text = locked.read_text()
            except (OSError, UnicodeDecodeError) as exc:
                raise StoreIOError(f"failed to read {self.path}: {exc}") from exc
            tasks = read_tasks(io.StringIO(text, newline=""))
        logger.debug("Loaded {} task(s) from {}", len(tasks), self.path)
        return tasks

    def save_all(self, tasks: list[Task]) -> None:
        """Replace the file's entire content with ``tasks`` under the lock."""
        buf = io.StringIO(newline="")
        write_tasks(buf, tasks)
        text = buf.getvalue()
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as exc:
            bad = text[exc.start:exc.end].encode("unicode_escape").decode("ascii")
            raise EncodeError(f"cannot store '{bad}' in {self.path}: not valid UTF-8 text") from exc

        with self._lock() as locked:
            try:
                locked.rewind_for_write().write(text)
            except OSError as exc:
                raise StoreIOError(f"failed to write {self.path}: {exc}") from exc
            locked.commit()
        logger.debug("Saved {} task(s) to {}", len(tasks), self.path)

    def next_id(self, tasks: Iterable[Task]) -> int:
        return next_id(tasks)

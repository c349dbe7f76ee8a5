from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import IO, Any, Optional

from loguru import logger

from .constants import WINDOWS_LOCK_BYTES
from .errors import LockError, StoreIOError


class LockedFile:
    """Exclusive advisory lock held on the data file itself.

    The file is opened read/write (created if missing) and locked for the
    lifetime of the ``with`` block. Waiting for the lock blocks without a
    timeout. The lock is cooperative: a process that opens the file without
    going through this class is not stopped.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.handle: Optional[IO[str]] = None
        self.lock_bytes = WINDOWS_LOCK_BYTES

    def __enter__(self) -> "LockedFile":
        return self.acquire()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def acquire(self) -> "LockedFile":
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_RDWR | os.O_CREAT, 0o666)
            handle = os.fdopen(fd, "r+", encoding="utf-8", newline="")
        except OSError as exc:
            raise StoreIOError(f"failed to open {self.path}: {exc}") from exc

        logger.debug("Waiting for lock on {}", self.path)
        try:
            _lock(handle, self.lock_bytes)
        except LockError:
            handle.close()
            raise
        except OSError as exc:
            handle.close()
            raise LockError(f"failed to lock {self.path}: {exc}") from exc
        logger.debug("Acquired lock on {}", self.path)
        self.handle = handle
        return self

    def release(self) -> None:
        if not self.handle:
            return
        try:
            _unlock(self.handle, self.lock_bytes)
        finally:
            self.handle.close()
            self.handle = None
            logger.debug("Released lock on {}", self.path)

    def read_text(self) -> str:
        handle = self._require_handle()
        handle.seek(0)
        return handle.read()

    def rewind_for_write(self) -> IO[str]:
        handle = self._require_handle()
        handle.seek(0)
        return handle

    def commit(self) -> None:
        """Cut the file at the current write position and push it to disk."""
        handle = self._require_handle()
        try:
            handle.truncate()
            handle.flush()
            os.fsync(handle.fileno())
        except OSError as exc:
            raise StoreIOError(f"failed to flush {self.path}: {exc}") from exc

    def _require_handle(self) -> IO[str]:
        if self.handle is None:
            raise RuntimeError(f"lock on {self.path} is not held")
        return self.handle


def _lock(handle: IO[str], lock_bytes: int) -> None:
    try:
        import fcntl
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
    except ImportError:
        if os.name != "nt":
            raise LockError("no advisory file lock primitive is available on this platform")
        import msvcrt
        _msvcrt_lock(msvcrt, handle, lock_bytes)


def _msvcrt_lock(msvcrt: Any, handle: IO[str], lock_bytes: int) -> None:
    # LK_LOCK gives up with EDEADLOCK after ~10 one-second attempts.
    while True:
        handle.seek(0)
        try:
            msvcrt.locking(handle.fileno(), msvcrt.LK_LOCK, lock_bytes)
            return
        except OSError as exc:
            if exc.errno != errno.EDEADLOCK:
                raise
            logger.debug("Still waiting for lock on {}", getattr(handle, "name", handle))


def _unlock(handle: IO[str], lock_bytes: int) -> None:
    try:
        import fcntl
        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
    except ImportError:
        if os.name == "nt":
            import msvcrt
            handle.seek(0)
            msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, lock_bytes)

"""
Cross-process lock for the storage directory.

Only one ksrs process may work on a storage directory at a time. The lock
is advisory (``flock``) and is released automatically if the process dies.
"""

from __future__ import annotations

import fcntl
import os
from pathlib import Path

from loguru import logger

from .persistence import StorageError, StorageLockedError

LOCK_FILE_NAME = ".lock"


class StorageLock:
    """Exclusive non-blocking lock on ``<directory>/.lock``."""

    def __init__(self, directory: Path):
        self.path = Path(directory) / LOCK_FILE_NAME
        self._fd: int | None = None

    @property
    def locked(self) -> bool:
        return self._fd is not None

    def acquire(self) -> None:
        """
        Take the lock.

        Raises:
            StorageLockedError: If another process already holds it
            StorageError: If the lock file cannot be created
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_RDWR | os.O_CREAT, 0o644)
        except OSError as e:
            raise StorageError(f"Cannot open {self.path}: {e}") from e

        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError as e:
            os.close(fd)
            raise StorageLockedError(f"{self.path.parent} is in use by another ksrs process") from e

        self._fd = fd
        logger.debug(f"Acquired {self.path}")

    def release(self) -> None:
        if self._fd is None:
            return
        fcntl.flock(self._fd, fcntl.LOCK_UN)
        os.close(self._fd)
        self._fd = None
        logger.debug(f"Released {self.path}")

    def __enter__(self) -> StorageLock:
        self.acquire()
        return self

    def __exit__(self, *exc) -> None:
        self.release()

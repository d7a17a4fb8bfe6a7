from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from threading import RLock
from typing import Optional

from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Storage(ABC):
    """
    Durable storage contract for a single serialized record.

    The task store hands over the full serialized collection on every change
    and reads it back once at load time.
    """

    @abstractmethod
    def read(self) -> Optional[bytes]:
        """Return the stored bytes, or None if nothing has been stored yet."""

    @abstractmethod
    def write(self, data: bytes) -> bool:
        """Replace the stored bytes. Return True on success, False on failure."""


class InMemoryStorage(Storage):
    """
    Process-local storage suitable for testing and throwaway runs.
    """

    def __init__(self, initial: Optional[bytes] = None) -> None:
        self._lock = RLock()
        self._data = initial

    def read(self) -> Optional[bytes]:
        with self._lock:
            return self._data

    def write(self, data: bytes) -> bool:
        with self._lock:
            self._data = bytes(data)
            return True


class FileStorage(Storage):
    """
    Stores the record as `<directory>/<key>.json`.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so a reader never sees a half-written record.
    """

    def __init__(self, directory: str, key: str) -> None:
        self._directory = directory
        self._path = os.path.join(directory, f"{key}.json")

    @property
    def path(self) -> str:
        return self._path

    def read(self) -> Optional[bytes]:
        try:
            with open(self._path, "rb") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except OSError:
            logger.exception("Failed to read %s", self._path)
            return None

    def write(self, data: bytes) -> bool:
        tmp_path = None
        try:
            os.makedirs(self._directory or ".", exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._directory or ".", prefix=".aurora-", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_path, self._path)
            return True
        except OSError:
            logger.exception("Failed to write %s", self._path)
            if tmp_path is not None:
                try:
                    os.remove(tmp_path)
                except FileNotFoundError:
                    pass
                except OSError:
                    logger.warning("Could not remove temporary file %s", tmp_path)
            return False


# PUBLIC_INTERFACE
def get_storage(settings: Optional[Settings] = None) -> Storage:
    """
    Factory to return the configured storage based on settings.
    - memory: InMemoryStorage
    - file: FileStorage under settings.data_dir
    - sqlite: SQLiteStorage at settings.sqlite_db_path
    """
    settings = settings or get_settings()
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteStorage

        return SQLiteStorage(settings.sqlite_db_path, settings.storage_key)
    if settings.persistence_backend == "memory":
        return InMemoryStorage()
    return FileStorage(settings.data_dir, settings.storage_key)

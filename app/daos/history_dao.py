"""Data access layer for reading and writing the search history file."""

from __future__ import annotations

import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional, Union


class HistoryDAOError(RuntimeError):
    """Raised when the history file cannot be read or written."""


# Grows by one entry per distinct history file and is never evicted.
_LOCKS: Dict[str, threading.RLock] = {}
_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    """Return the lock shared by every DAO bound to the same file."""

    key = os.path.normcase(str(path.resolve()))
    with _LOCKS_GUARD:
        lock = _LOCKS.get(key)
        if lock is None:
            lock = threading.RLock()
            _LOCKS[key] = lock
        return lock


class HistoryFileDAO:
    """Provide whole-file access to the JSON document backing the history."""

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8") -> None:
        """Persist the target path and resolve its shared lock."""
        self._path = Path(path)
        self._encoding = encoding
        self.lock = _lock_for(self._path)

    @property
    def path(self) -> Path:
        return self._path

    def read_all(self) -> Optional[str]:
        """Return the file content or ``None`` when the file does not exist."""
        with self.lock:
            try:
                return self._path.read_text(encoding=self._encoding)
            except FileNotFoundError:
                return None
            except (OSError, UnicodeDecodeError) as exc:
                raise HistoryDAOError(f"No fue posible leer '{self._path}': {exc}") from exc

    def write_all(self, text: str) -> None:
        """Replace the file content atomically with ``text``."""
        with self.lock:
            tmp_name: Optional[str] = None
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{self._path.name}.",
                    suffix=".tmp",
                    dir=str(self._path.parent),
                )
                with os.fdopen(fd, "w", encoding=self._encoding) as handle:
                    handle.write(text)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, self._path)
                tmp_name = None
            except OSError as exc:
                raise HistoryDAOError(f"No fue posible guardar '{self._path}': {exc}") from exc
            finally:
                if tmp_name is not None:
                    try:
                        os.unlink(tmp_name)
                    except OSError:
                        pass

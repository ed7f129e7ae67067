"""Key-value storage for persisted client state.

The permission cache and the auth token live in a small string-keyed
store scoped to one origin. ``MemoryStorage`` backs tests and ephemeral
sessions; ``FileStorage`` persists one JSON document per origin.
"""

import json
import logging
import os
import tempfile
import threading
from hashlib import sha256
from pathlib import Path
from typing import Protocol, runtime_checkable

_log = logging.getLogger("waypost.storage")


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal synchronous storage protocol (string keys, string values)."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage. Lost when the process exits."""

    __slots__ = ("_data",)

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage:
    """One JSON object per origin under ``directory``.

    Writes replace the file atomically. A missing or unreadable file
    reads as empty storage.
    """

    __slots__ = ("_lock", "_path")

    def __init__(self, directory: str | Path, origin: str) -> None:
        digest = sha256(origin.encode()).hexdigest()[:16]
        self._path = Path(directory) / f"{digest}.json"
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            _log.warning("Discarding unreadable storage file %s: %s", self._path, exc)
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            _log.warning("Discarding unreadable storage file %s", self._path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if data.pop(key, None) is not None:
                self._write(data)

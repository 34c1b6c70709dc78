from __future__ import annotations

import copy
import logging
import threading
from pathlib import Path
from typing import Any

from json_store import atomic_write_json, read_json

from .interfaces import OrderedKeyValueMap

logger = logging.getLogger(__name__)


class PathLockRegistry:
    """
    Hands out one lock per resolved file path, so two maps opened on the same
    file serialize their read-modify-write cycles.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def lock_for(self, path: Path) -> threading.RLock:
        key = str(path.resolve())
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock


GLOBAL_PATH_LOCKS = PathLockRegistry()


class DiskJsonOrderedMap(OrderedKeyValueMap):
    """
    Ordered map persisted as a single JSON object on disk.

    - Every mutation rewrites the file atomically (temp file + replace), so a
      crash leaves either the old or the new map, never a partial one.
    - Reads go to disk each time; another process (or a restart) sees the
      last completed write.
    - Key order is JSON object order, i.e. first-insertion order.
    """

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        raw = read_json(self._path, strict=True)
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ValueError(f"{self._path} does not hold a JSON object")
        return raw

    def insert(self, key: str, value: dict[str, Any]) -> None:
        with GLOBAL_PATH_LOCKS.lock_for(self._path):
            data = self._load()
            data[key] = value
            atomic_write_json(self._path, data)

    def get(self, key: str) -> dict[str, Any] | None:
        with GLOBAL_PATH_LOCKS.lock_for(self._path):
            rec = self._load().get(key)
        return rec if isinstance(rec, dict) else None

    def remove(self, key: str) -> dict[str, Any] | None:
        with GLOBAL_PATH_LOCKS.lock_for(self._path):
            data = self._load()
            if key not in data:
                return None
            rec = data.pop(key)
            atomic_write_json(self._path, data)
        return rec if isinstance(rec, dict) else None

    def values(self) -> list[dict[str, Any]]:
        with GLOBAL_PATH_LOCKS.lock_for(self._path):
            data = self._load()
        return [v for v in data.values() if isinstance(v, dict)]


class InMemoryOrderedMap(OrderedKeyValueMap):
    """
    Process-lifetime map with the same contract as DiskJsonOrderedMap.

    Values are deep-copied in and out so callers never share state with the map.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: dict[str, dict[str, Any]] = {}

    def insert(self, key: str, value: dict[str, Any]) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)

    def get(self, key: str) -> dict[str, Any] | None:
        with self._lock:
            rec = self._data.get(key)
            return copy.deepcopy(rec) if rec is not None else None

    def remove(self, key: str) -> dict[str, Any] | None:
        with self._lock:
            return copy.deepcopy(self._data.pop(key, None))

    def values(self) -> list[dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(list(self._data.values()))

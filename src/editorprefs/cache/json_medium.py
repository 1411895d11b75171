# src/editorprefs/cache/json_medium.py — v1
"""Bounded JSON file medium (CACHE_BACKEND=json).

The whole store lives in one JSON object on disk; every mutation rewrites it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from editorprefs.cache.base_medium import BaseStoreMedium, CapacityExceeded, entry_size

logger = logging.getLogger(__name__)


class JsonFileStoreMedium(BaseStoreMedium):
    """Single-file medium; suited to small caches and debugging."""

    def __init__(self, path: Path | str, quota: int | None = None) -> None:
        self._path = Path(path).expanduser()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._quota = quota
        self._data = self._load()

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self._quota is not None:
            required = sum(
                entry_size(k, v) for k, v in self._data.items() if k != key
            ) + entry_size(key, value)
            if required > self._quota:
                raise CapacityExceeded(key, required, self._quota)
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def key(self, index: int) -> str | None:
        if 0 <= index < len(self._data):
            return list(self._data)[index]
        return None

    @property
    def length(self) -> int:
        return len(self._data)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning("Discarding unreadable cache file %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Discarding cache file %s: not a JSON object", self._path)
            return {}
        entries = {k: v for k, v in data.items() if isinstance(v, str)}
        if len(entries) != len(data):
            logger.warning(
                "Skipping %d non-string entries in cache file %s",
                len(data) - len(entries), self._path,
            )
        return entries

    def _flush(self) -> None:
        self._path.write_text(json.dumps(self._data), encoding="utf-8")

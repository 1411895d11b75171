# src/editorprefs/cache/memory_medium.py — v1
"""In-process medium with a simulated quota (CACHE_BACKEND=memory)."""

from __future__ import annotations

from editorprefs.cache.base_medium import BaseStoreMedium, CapacityExceeded, entry_size


class MemoryStoreMedium(BaseStoreMedium):
    """Dict-backed medium. ``quota=None`` disables the capacity check."""

    def __init__(self, quota: int | None = None) -> None:
        self._data: dict[str, str] = {}
        self._quota = quota
        self._used = 0

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        current = self._data.get(key)
        released = entry_size(key, current) if current is not None else 0
        required = self._used - released + entry_size(key, value)
        if self._quota is not None and required > self._quota:
            raise CapacityExceeded(key, required, self._quota)
        self._data[key] = value
        self._used = required

    def remove(self, key: str) -> None:
        value = self._data.pop(key, None)
        if value is not None:
            self._used -= entry_size(key, value)

    def key(self, index: int) -> str | None:
        if 0 <= index < len(self._data):
            return list(self._data)[index]
        return None

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def used(self) -> int:
        """Quota units currently consumed."""
        return self._used

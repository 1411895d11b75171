# src/editorprefs/cache/base_medium.py — v1
"""Abstract quota-limited key/value medium.

Mirrors the browser localStorage contract: synchronous, string values,
indexed key enumeration, and a capacity error on oversized writes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class CapacityExceeded(Exception):
    """Raised by a medium when a write would exceed its quota."""

    def __init__(self, key: str, required: int, quota: int):
        self.key = key
        self.required = required
        self.quota = quota
        super().__init__(
            f"Storing {key!r} needs {required} units but quota is {quota}"
        )


def entry_size(key: str, value: str) -> int:
    """Quota units charged for one entry (characters of key and value)."""
    return len(key) + len(value)


class BaseStoreMedium(ABC):
    """Unified interface for local cache persistence backends."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value.

        Raises:
            CapacityExceeded: If the write does not fit in the quota.
        """

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""

    @abstractmethod
    def key(self, index: int) -> str | None:
        """Return the key at position ``index`` or None when out of range."""

    @property
    @abstractmethod
    def length(self) -> int:
        """Number of stored keys."""

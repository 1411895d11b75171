# src/editorprefs/cache/evicting_store.py — v1
"""Quota-aware key/value cache with timestamp-driven eviction.

Entries may carry a companion ``<key>-ts`` record holding the millisecond
timestamp of their last write. When the medium runs out of room,
``write_safely`` purges timestamped entries older than successively smaller
ages from the eviction ladder before giving up. Entries without a companion
timestamp are never purged by age.
"""

from __future__ import annotations

import json
import logging
import re
import time
from typing import Callable

from editorprefs.cache.base_medium import BaseStoreMedium, CapacityExceeded
from editorprefs.cache.models import (
    DEFAULT_EVICTION_LADDER,
    EvictionLadder,
    is_timestamp_key,
    primary_key,
    timestamp_key,
)

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


def _parse_timestamp(raw: str | None) -> int | None:
    """Parse the leading integer of a stored timestamp.

    Returns None for missing, non-numeric or zero values, all of which
    classify the entry as stale.
    """
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    value = int(match.group(1))
    return value or None


class EvictingKeyValueStore:
    """Cache front-end over a quota-limited medium."""

    def __init__(
        self,
        medium: BaseStoreMedium,
        ladder: EvictionLadder = DEFAULT_EVICTION_LADDER,
        max_attempts: int | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            medium: Underlying persistence medium.
            ladder: Eviction thresholds, most permissive first.
            max_attempts: Failed direct writes tolerated before falling back
                to a best-effort write. Capped at the ladder length.
            clock: Millisecond clock; defaults to wall-clock time.
        """
        self._medium = medium
        self._ladder = ladder
        limit = len(ladder) if max_attempts is None else max_attempts
        self._max_attempts = min(limit, len(ladder))
        self._clock = clock or _wall_clock_ms

    @property
    def medium(self) -> BaseStoreMedium:
        return self._medium

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def get(self, key: str) -> str | None:
        """Read a value straight from the medium."""
        return self._medium.get(key)

    def write(self, key: str, value: str) -> bool:
        """Best-effort write: dropped with a warning when the quota is hit.

        Returns:
            True if the value was stored.
        """
        try:
            self._medium.set(key, value)
        except CapacityExceeded:
            logger.warning("Tried to add to local storage: %s : %s", key, value)
            logger.warning("Local storage quota exceeded. Ignoring request")
            return False
        return True

    def write_safely(
        self,
        key: str,
        value: str,
        include_timestamp: bool = False,
        attempt: int = 0,
    ) -> bool:
        """Write, purging stale entries and retrying while the quota is hit.

        Each failed attempt purges with the ladder threshold at that depth.
        Once ``max_attempts`` is reached the request falls back to ``write``.

        Args:
            key: Entry key.
            value: Entry value.
            include_timestamp: Also record ``<key>-ts`` with the current time.
                The companion is written before the value; when either
                cannot be stored the value is not written.
            attempt: Starting depth on the eviction ladder.

        Returns:
            True if the value is present in the medium afterwards.
        """
        if not include_timestamp:
            return self._write_with_eviction(key, value, attempt)

        # Fresh companion first: its age of 0 keeps it out of every purge below
        ts_key = timestamp_key(key)
        if not self._write_with_eviction(ts_key, str(self.current_timestamp()), attempt):
            return False
        self._write_with_eviction(key, value, attempt)
        if self._medium.get(key) != value:
            self._medium.remove(ts_key)
            return False
        return True

    def _write_with_eviction(self, key: str, value: str, attempt: int) -> bool:
        while True:
            if attempt >= self._max_attempts:
                logger.warning("Tried to add to local storage: %s : %s", key, value)
                logger.warning("Tried too many times. Falling back to best-effort write.")
                return self.write(key, value)
            try:
                self._medium.set(key, value)
                return True
            except CapacityExceeded:
                threshold = self._ladder[attempt]
                logger.warning("Tried to add to local storage: %s : %s", key, value)
                logger.warning(
                    "Local storage quota exceeded. Purging parts of local storage and trying again"
                )
                logger.warning(
                    "Purging keys that are %s old or later", threshold.label
                )
                self.purge_stale(threshold.max_age_ms)
                attempt += 1

    def purge_stale(self, max_age_ms: int) -> list[str]:
        """Remove timestamped entries older than ``max_age_ms``.

        Entries whose timestamp is malformed are treated as stale. Keys are
        collected first and removed afterwards so removal never disturbs the
        index-based iteration over the medium.

        Returns:
            The keys that were removed.
        """
        now = self.current_timestamp()
        keys_to_purge: list[str] = []

        for index in range(self._medium.length):
            key = self._medium.key(index)
            if key is None or not is_timestamp_key(key):
                continue
            ts = _parse_timestamp(self._medium.get(key))
            if ts is not None and now - ts <= max_age_ms:
                continue
            keys_to_purge.append(key)
            other_key = primary_key(key)
            if self._medium.get(other_key) is not None:
                keys_to_purge.append(other_key)

        logger.warning("Purging %d keys from local storage", len(keys_to_purge))
        for key in keys_to_purge:
            self._medium.remove(key)
        return keys_to_purge

    def remove(self, key: str, include_timestamp: bool = True) -> None:
        """Explicitly drop an entry and, by default, its timestamp."""
        self._medium.remove(key)
        if include_timestamp:
            self._medium.remove(timestamp_key(key))

    def timestamp_of(self, key: str) -> int | None:
        """Return the parsed write timestamp of ``key`` if it has one."""
        return _parse_timestamp(self._medium.get(timestamp_key(key)))

    def current_timestamp(self) -> int:
        """Millisecond timestamp used to stamp writes."""
        return self._clock()

    def size_in_bytes(self) -> int:
        """Length of the JSON serialisation of the whole medium.

        Walks every entry; meant for diagnostics only.
        """
        snapshot: dict[str, str | None] = {}
        for index in range(self._medium.length):
            key = self._medium.key(index)
            if key is not None:
                snapshot[key] = self._medium.get(key)
        return len(json.dumps(snapshot))

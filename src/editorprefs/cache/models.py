# src/editorprefs/cache/models.py — v1
"""Cache domain models: EvictionThreshold, EvictionLadder, timestamp conventions."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, field_validator

TIMESTAMP_SUFFIX = "-ts"

TWO_MINUTES_MS = 1000 * 60 * 2
ONE_HOUR_MS = 1000 * 60 * 60
SIX_HOURS_MS = ONE_HOUR_MS * 6
ONE_DAY_MS = ONE_HOUR_MS * 24
TWO_DAYS_MS = ONE_DAY_MS * 2


def timestamp_key(key: str) -> str:
    """Return the companion key holding the timestamp of ``key``."""
    return f"{key}{TIMESTAMP_SUFFIX}"


def is_timestamp_key(key: str) -> bool:
    return key.endswith(TIMESTAMP_SUFFIX)


def primary_key(ts_key: str) -> str:
    """Return the primary key a timestamp companion belongs to."""
    return ts_key[: -len(TIMESTAMP_SUFFIX)]


class EvictionThreshold(BaseModel):
    """One rung of the eviction ladder: entries older than max_age_ms go."""

    model_config = ConfigDict(frozen=True)

    label: str
    max_age_ms: int


class EvictionLadder(BaseModel):
    """Ordered thresholds from most permissive to most aggressive.

    Consulted by position only: the n-th failed write purges with the n-th
    threshold.
    """

    model_config = ConfigDict(frozen=True)

    thresholds: tuple[EvictionThreshold, ...]

    @field_validator("thresholds")
    @classmethod
    def validate_strictly_decreasing(cls, v: tuple[EvictionThreshold, ...]):  # noqa: N805
        if not v:
            raise ValueError("eviction ladder needs at least one threshold")
        for prev, cur in zip(v, v[1:]):
            if cur.max_age_ms >= prev.max_age_ms:
                raise ValueError(
                    f"eviction ladder must be strictly decreasing: "
                    f"{prev.label!r} ({prev.max_age_ms}ms) -> "
                    f"{cur.label!r} ({cur.max_age_ms}ms)"
                )
        return v

    def __len__(self) -> int:
        return len(self.thresholds)

    def __getitem__(self, depth: int) -> EvictionThreshold:
        return self.thresholds[depth]

    def __iter__(self) -> Iterator[EvictionThreshold]:  # type: ignore[override]
        return iter(self.thresholds)


DEFAULT_EVICTION_LADDER = EvictionLadder(
    thresholds=(
        EvictionThreshold(label="two days", max_age_ms=TWO_DAYS_MS),
        EvictionThreshold(label="one day", max_age_ms=ONE_DAY_MS),
        EvictionThreshold(label="six hours", max_age_ms=SIX_HOURS_MS),
        EvictionThreshold(label="one hour", max_age_ms=ONE_HOUR_MS),
        EvictionThreshold(label="two minutes", max_age_ms=TWO_MINUTES_MS),
    )
)

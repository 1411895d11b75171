# src/editorprefs/cache/medium_factory.py — v1
"""Factory for store medium instantiation."""

from __future__ import annotations

from editorprefs.cache.base_medium import BaseStoreMedium
from editorprefs.config.settings import Settings


def create_store_medium(settings: Settings | None = None) -> BaseStoreMedium:
    """Instantiate the configured cache medium.

    Args:
        settings: Application settings. Defaults to an in-memory medium.

    Returns:
        Configured BaseStoreMedium implementation.
    """
    backend = "memory" if settings is None else settings.cache_backend
    quota = None if settings is None else settings.cache_quota_bytes

    if backend == "memory":
        from editorprefs.cache.memory_medium import MemoryStoreMedium
        return MemoryStoreMedium(quota=quota)

    cache_root = "~/.editorprefs/cache" if settings is None else str(settings.cache_root)

    if backend == "sqlite":
        from editorprefs.cache.sqlite_medium import SqliteStoreMedium
        return SqliteStoreMedium(db_path=f"{cache_root}/editorprefs_cache.db", quota=quota)

    if backend == "json":
        from editorprefs.cache.json_medium import JsonFileStoreMedium
        return JsonFileStoreMedium(path=f"{cache_root}/editorprefs_cache.json", quota=quota)

    raise ValueError(f"Unsupported cache backend: {backend!r}")

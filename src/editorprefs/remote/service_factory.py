# src/editorprefs/remote/service_factory.py — v1
"""Factory for remote configuration service instantiation."""

from __future__ import annotations

from editorprefs.config.settings import Settings
from editorprefs.remote.base_remote_config import BaseRemoteConfigService


def create_config_service(settings: Settings) -> BaseRemoteConfigService:
    """Create the configuration service selected by REMOTE_CONFIG_BACKEND.

    Raises:
        ValueError: If the backend is not supported.
    """
    if settings.remote_config_backend == "json":
        from editorprefs.remote.json_file_service import JsonFileConfigService
        return JsonFileConfigService(root=settings.remote_config_root)

    if settings.remote_config_backend == "memory":
        from editorprefs.remote.memory_service import MemoryConfigService
        return MemoryConfigService()

    raise ValueError(
        f"Unsupported remote config backend: {settings.remote_config_backend!r}"
    )

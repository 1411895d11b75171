# src/editorprefs/remote/memory_service.py — v1
"""In-process configuration service (REMOTE_CONFIG_BACKEND=memory)."""

from __future__ import annotations

from editorprefs.keybindings.models import ConfigurationDocument
from editorprefs.remote.base_remote_config import BaseRemoteConfigService


class MemoryConfigService(BaseRemoteConfigService):
    """Keeps copies of documents in a dict; nothing survives the process."""

    def __init__(self, documents: dict[str, ConfigurationDocument] | None = None) -> None:
        self._documents = {k: dict(v) for k, v in (documents or {}).items()}

    async def fetch(self, name: str) -> ConfigurationDocument:
        return dict(self._documents.get(name, {}))

    async def store(self, name: str, document: ConfigurationDocument) -> None:
        self._documents[name] = dict(document)

# src/editorprefs/remote/base_remote_config.py — v1
"""Abstract remote configuration service storing named configuration documents."""

from __future__ import annotations

from abc import ABC, abstractmethod

from editorprefs.keybindings.models import ConfigurationDocument


class RemoteConfigError(Exception):
    """Base error for remote configuration access."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Config '{name}': {reason}")


class RemoteFetchFailed(RemoteConfigError):
    """A configuration document could not be retrieved."""


class RemoteStoreFailed(RemoteConfigError):
    """A configuration document could not be written."""


class BaseRemoteConfigService(ABC):
    """Unified interface for per-user configuration stores."""

    @abstractmethod
    async def fetch(self, name: str) -> ConfigurationDocument:
        """Retrieve a document; a document never stored reads as empty.

        Raises:
            RemoteFetchFailed: If the document cannot be read or is malformed.
        """

    @abstractmethod
    async def store(self, name: str, document: ConfigurationDocument) -> None:
        """Replace the named document with ``document``.

        Raises:
            RemoteStoreFailed: If the document cannot be written.
        """

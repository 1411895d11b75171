# src/editorprefs/remote/json_file_service.py — v1
"""JSON file-based configuration service (default REMOTE_CONFIG_BACKEND=json).

Each named document is kept as ``<root>/<name>.json``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from editorprefs.keybindings.models import ConfigurationDocument, validate_document
from editorprefs.remote.base_remote_config import (
    BaseRemoteConfigService,
    RemoteFetchFailed,
    RemoteStoreFailed,
)

logger = logging.getLogger(__name__)


class JsonFileConfigService(BaseRemoteConfigService):
    """Configuration documents stored as JSON files in one directory."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root).expanduser()

    async def fetch(self, name: str) -> ConfigurationDocument:
        """Read a document; a missing file is an empty document."""
        path = self._document_path(name)
        if not path.exists():
            logger.debug("No stored config %s, using empty document", name)
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return validate_document(data)
        except OSError as e:
            raise RemoteFetchFailed(name, f"cannot read {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise RemoteFetchFailed(name, f"not UTF-8 text in {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise RemoteFetchFailed(name, f"invalid JSON in {path}: {e}") from e
        except ValidationError as e:
            raise RemoteFetchFailed(
                name, f"not a flat string mapping: {e.error_count()} errors"
            ) from e

    async def store(self, name: str, document: ConfigurationDocument) -> None:
        """Write a document, replacing any previous content."""
        path = self._document_path(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        except OSError as e:
            raise RemoteStoreFailed(name, f"cannot write {path}: {e}") from e

    def _document_path(self, name: str) -> Path:
        """Return file path for a document name."""
        safe_name = name.replace("/", "_").replace("\\", "_")
        return self._root / f"{safe_name}.json"

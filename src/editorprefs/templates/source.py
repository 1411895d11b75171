# src/editorprefs/templates/source.py — v1
"""Template sources: where the scope -> templates catalog comes from."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from editorprefs.templates.models import Template, TemplateCatalog

_CATALOG_ADAPTER: TypeAdapter[TemplateCatalog] = TypeAdapter(TemplateCatalog)


class TemplateLoadError(Exception):
    """Templates could not be loaded from their source."""


def parse_catalog(data: Any) -> TemplateCatalog:
    """Validate raw JSON data (scope -> list of template dicts)."""
    return _CATALOG_ADAPTER.validate_python(data)


def dump_catalog(catalog: TemplateCatalog) -> str:
    """Serialise a catalog back to the raw JSON layout it was read from."""
    return json.dumps(
        {
            scope: [t.model_dump(by_alias=True, exclude_none=True) for t in templates]
            for scope, templates in catalog.items()
        }
    )


class BaseTemplateSource(ABC):
    """Unified interface for template catalog providers."""

    @abstractmethod
    async def load(self) -> TemplateCatalog:
        """Return the full catalog.

        Raises:
            TemplateLoadError: If the catalog cannot be retrieved.
        """


class JsonFileTemplateSource(BaseTemplateSource):
    """Catalog stored as one JSON file mapping scope names to template lists."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()

    async def load(self) -> TemplateCatalog:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return parse_catalog(data)
        except (OSError, ValueError) as e:
            raise TemplateLoadError(f"Error loading templates from {self._path}: {e}") from e

# src/editorprefs/templates/content_assist.py — v1
"""Template-based content assist.

The template catalog is loaded at most once per session and shared by every
TemplateContentAssist instance through a TemplateRegistry. When a local
cache is available the raw catalog is kept there with a timestamp, so the
age-based eviction can reclaim it under quota pressure.
"""

from __future__ import annotations

import asyncio
import json
import logging

from editorprefs.cache.evicting_store import EvictingKeyValueStore
from editorprefs.cache.models import ONE_DAY_MS
from editorprefs.templates.models import (
    PositionList,
    TemplateCatalog,
    TemplatePosition,
    TemplateProposal,
)
from editorprefs.templates.source import (
    BaseTemplateSource,
    TemplateLoadError,
    dump_catalog,
    parse_catalog,
)

logger = logging.getLogger(__name__)

TEMPLATES_CACHE_KEY = "content-assist-templates"


class TemplateRegistry:
    """Session-wide holder of the template catalog."""

    def __init__(
        self,
        source: BaseTemplateSource,
        store: EvictingKeyValueStore | None = None,
        max_age_ms: int = ONE_DAY_MS,
    ) -> None:
        self._source = source
        self._store = store
        self._max_age_ms = max_age_ms
        self._catalog: TemplateCatalog | None = None
        self._loading: asyncio.Task[bool] | None = None

    @property
    def is_installed(self) -> bool:
        return self._catalog is not None

    @property
    def catalog(self) -> TemplateCatalog | None:
        return self._catalog

    async def ensure_loaded(self) -> bool:
        """Load the catalog unless already loaded; returns whether it is available.

        Concurrent callers share one in-flight load. A failed load is
        forgotten so that a later call can retry.
        """
        if self._catalog is not None:
            return True

        if self._loading is None:
            self._loading = asyncio.create_task(self._load())
        loading = self._loading
        loaded = await asyncio.shield(loading)
        if not loaded and self._loading is loading:
            self._loading = None
        return loaded

    async def _load(self) -> bool:
        cached = self._read_cache()
        if cached is not None:
            self._catalog = cached
            return True

        try:
            catalog = await self._source.load()
        except TemplateLoadError as e:
            logger.error("%s", e)
            return False

        self._catalog = catalog
        if self._store is not None:
            self._store.write_safely(
                TEMPLATES_CACHE_KEY, dump_catalog(catalog), include_timestamp=True
            )
        return True

    def _read_cache(self) -> TemplateCatalog | None:
        if self._store is None:
            return None
        raw = self._store.get(TEMPLATES_CACHE_KEY)
        ts = self._store.timestamp_of(TEMPLATES_CACHE_KEY)
        if raw is None or ts is None:
            return None
        if self._store.current_timestamp() - ts > self._max_age_ms:
            logger.debug("Cached templates are stale, reloading")
            return None
        try:
            return parse_catalog(json.loads(raw))
        except ValueError as e:
            logger.warning("Ignoring unreadable cached templates: %s", e)
            return None


def _shift_positions(
    positions: PositionList | None, offset: int
) -> PositionList | None:
    if positions is None:
        return None
    shifted: PositionList = []
    for position in positions:
        if isinstance(position, list):
            shifted.append(
                [TemplatePosition(offset=p.offset + offset, length=p.length) for p in position]
            )
        else:
            shifted.append(
                TemplatePosition(offset=position.offset + offset, length=position.length)
            )
    return shifted


class TemplateContentAssist:
    """Proposes templates of one scope (e.g. a language) whose trigger matches."""

    def __init__(self, registry: TemplateRegistry, scope: str) -> None:
        self._registry = registry
        self.scope = scope

    async def install(self) -> bool:
        return await self._registry.ensure_loaded()

    def compute_proposals(
        self, buffer: str, invocation_offset: int, prefix: str
    ) -> list[TemplateProposal]:
        """Return proposals for templates whose trigger starts with ``prefix``.

        Offsets in the templates are relative to the start of the word being
        completed, i.e. ``invocation_offset - len(prefix)``.
        """
        catalog = self._registry.catalog
        if not catalog:
            return []
        templates = catalog.get(self.scope)
        if not templates:
            return []

        offset = invocation_offset - len(prefix)
        proposals: list[TemplateProposal] = []
        for template in templates:
            if not template.trigger.startswith(prefix):
                continue
            escape = template.escape_position
            proposals.append(
                TemplateProposal(
                    proposal=template.proposal,
                    description=template.description,
                    escape_position=offset + escape if escape else None,
                    positions=_shift_positions(template.positions, offset),
                )
            )
        return proposals

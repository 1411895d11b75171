# tests/integration/conftest.py — v1
"""Shared fixtures for integration tests: real files under tmp_path."""

from __future__ import annotations

import pytest

from editorprefs.cache.evicting_store import EvictingKeyValueStore
from editorprefs.cache.sqlite_medium import SqliteStoreMedium
from editorprefs.remote.json_file_service import JsonFileConfigService


def pytest_collection_modifyitems(items):
    for item in items:
        if "integration" in str(item.path):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def rc_service(tmp_path) -> JsonFileConfigService:
    return JsonFileConfigService(root=tmp_path / "scriptedrc")


@pytest.fixture
def sqlite_store(tmp_path, clock) -> EvictingKeyValueStore:
    medium = SqliteStoreMedium(db_path=tmp_path / "cache.db", quota=200)
    return EvictingKeyValueStore(medium, clock=clock)

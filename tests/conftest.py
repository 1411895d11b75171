# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides a controllable clock, quota-limited mediums, editor surfaces with
built-in defaults, and in-memory remote config services.
No external dependencies: all I/O is in memory or under tmp_path.
"""

from __future__ import annotations

import logging

import pytest

from editorprefs.cache.evicting_store import EvictingKeyValueStore
from editorprefs.cache.memory_medium import MemoryStoreMedium
from editorprefs.keybindings.editor import InMemoryEditorSurface
from editorprefs.logging.context import clear_context
from editorprefs.remote.memory_service import MemoryConfigService

NOW_MS = 1_700_000_000_000


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = NOW_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


# === FIXTURES: Cache ===


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def medium() -> MemoryStoreMedium:
    """Unbounded in-memory medium."""
    return MemoryStoreMedium()


@pytest.fixture
def store(medium: MemoryStoreMedium, clock: FakeClock) -> EvictingKeyValueStore:
    return EvictingKeyValueStore(medium, clock=clock)


# === FIXTURES: Key bindings ===


@pytest.fixture
def default_bindings() -> dict[str, str | None]:
    return {
        "Ctrl+S": "save",
        "Ctrl+F": "find",
        "Ctrl+Z": "undo",
    }


@pytest.fixture
def default_actions() -> list[str]:
    return ["save", "find", "undo", "redo", "formatDocument"]


@pytest.fixture
def editor(default_bindings, default_actions) -> InMemoryEditorSurface:
    return InMemoryEditorSurface(default_bindings, default_actions)


@pytest.fixture
def make_editor(default_bindings, default_actions):
    """Factory for extra editors sharing the same built-in defaults."""

    def _make() -> InMemoryEditorSurface:
        return InMemoryEditorSurface(default_bindings, default_actions)

    return _make


@pytest.fixture
def remote() -> MemoryConfigService:
    return MemoryConfigService()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    clear_context()
    root = logging.getLogger("editorprefs")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)

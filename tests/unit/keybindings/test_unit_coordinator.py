# tests/unit/keybindings/test_unit_coordinator.py — v1
"""Tests for keybindings/coordinator.py — install, set_binding, persist cycle."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from editorprefs.keybindings.coordinator import BindingSyncCoordinator
from editorprefs.keybindings.notifier import BindingChangeNotifier
from editorprefs.keybindings.session import SessionContext
from editorprefs.remote.base_remote_config import (
    BaseRemoteConfigService,
    RemoteFetchFailed,
    RemoteStoreFailed,
)
from editorprefs.remote.memory_service import MemoryConfigService

CONFIG = "keymap-linux"


@pytest.fixture
def coordinator(remote) -> BindingSyncCoordinator:
    return BindingSyncCoordinator(remote=remote, platform_id="linux")


def _failing_remote(fetch_error=None, store_error=None) -> MagicMock:
    remote = MagicMock(spec=BaseRemoteConfigService)
    remote.fetch = AsyncMock(return_value={}, side_effect=fetch_error)
    remote.store = AsyncMock(return_value=None, side_effect=store_error)
    return remote


class TestInstallOn:
    @pytest.mark.asyncio
    async def test_captures_baseline(self, coordinator, editor, default_bindings):
        outcome = await coordinator.install_on(editor)
        assert outcome.ok
        assert outcome.operation == "install"
        assert coordinator.baseline.keybindings == default_bindings
        assert coordinator.baseline.unbound_names == ("redo", "formatDocument")

    @pytest.mark.asyncio
    async def test_applies_remote_document(self, editor):
        remote = MemoryConfigService(
            {CONFIG: {"Ctrl+S": None, "Ctrl+Y": "redo", "Ctrl+F": "formatDocument"}}
        )
        coordinator = BindingSyncCoordinator(remote=remote, platform_id="linux")
        outcome = await coordinator.install_on(editor)

        assert outcome.document == {
            "Ctrl+S": None, "Ctrl+Y": "redo", "Ctrl+F": "formatDocument",
        }
        live = editor.get_live_bindings()
        assert "Ctrl+S" not in live
        assert live["Ctrl+Y"] == "redo"
        assert live["Ctrl+F"] == "formatDocument"
        # Unbinding keeps the action available
        assert "save" in editor.get_all_action_names()

    @pytest.mark.asyncio
    async def test_baseline_taken_before_overrides(self, editor, default_bindings):
        remote = MemoryConfigService({CONFIG: {"Ctrl+S": None}})
        coordinator = BindingSyncCoordinator(remote=remote, platform_id="linux")
        await coordinator.install_on(editor)
        assert coordinator.baseline.keybindings == default_bindings

    @pytest.mark.asyncio
    async def test_fetch_failure_keeps_defaults(self, editor, default_bindings):
        remote = _failing_remote(fetch_error=RemoteFetchFailed(CONFIG, "offline"))
        coordinator = BindingSyncCoordinator(remote=remote, platform_id="linux")
        outcome = await coordinator.install_on(editor)

        assert outcome.ok is False
        assert "offline" in outcome.error
        assert editor.get_live_bindings() == default_bindings
        assert coordinator.baseline is not None

    @pytest.mark.asyncio
    async def test_fetches_platform_qualified_name(self, editor):
        remote = _failing_remote()
        coordinator = BindingSyncCoordinator(remote=remote, platform_id="mac")
        await coordinator.install_on(editor)
        remote.fetch.assert_awaited_once_with("keymap-mac")
        assert coordinator.config_name == "keymap-mac"

    @pytest.mark.asyncio
    async def test_second_install_reuses_baseline(self, coordinator, editor, default_bindings):
        from editorprefs.keybindings.editor import InMemoryEditorSurface

        await coordinator.install_on(editor)
        other = InMemoryEditorSurface({"F1": "help"}, ["help"])
        await coordinator.install_on(other)
        assert coordinator.baseline.keybindings == default_bindings

    @pytest.mark.asyncio
    async def test_shared_session_across_coordinators(self, remote, editor, make_editor):
        session = SessionContext()
        first = BindingSyncCoordinator(remote=remote, session=session, platform_id="linux")
        second = BindingSyncCoordinator(remote=remote, session=session, platform_id="linux")
        await first.install_on(editor)
        baseline = session.baseline
        await second.install_on(make_editor())
        assert session.baseline is baseline

    @pytest.mark.asyncio
    async def test_secondary_registration(self, coordinator, editor, make_editor):
        sub = make_editor()
        await coordinator.install_on(editor)
        await coordinator.install_on(sub, secondary=True)
        assert coordinator.editors == [editor, sub]


    @pytest.mark.asyncio
    async def test_new_primary_demotes_previous(self, coordinator, editor, make_editor):
        second = make_editor()
        await coordinator.install_on(editor)
        await coordinator.install_on(second)
        assert coordinator.editors == [second, editor]

    @pytest.mark.asyncio
    async def test_reinstalling_primary_is_idempotent(self, coordinator, editor):
        await coordinator.install_on(editor)
        await coordinator.install_on(editor)
        assert coordinator.editors == [editor]


class TestSetBinding:
    @pytest.mark.asyncio
    async def test_reaches_replaced_primary(self, coordinator, editor, make_editor):
        second = make_editor()
        await coordinator.install_on(editor)
        await coordinator.install_on(second)

        await coordinator.set_binding("Ctrl+Y", "redo")

        assert editor.get_live_bindings()["Ctrl+Y"] == "redo"
        assert second.get_live_bindings()["Ctrl+Y"] == "redo"

    @pytest.mark.asyncio
    async def test_binds_all_editors_and_persists(self, coordinator, remote, editor, make_editor):
        sub = make_editor()
        await coordinator.install_on(editor)
        coordinator.add_secondary_editor(sub)

        outcome = await coordinator.set_binding("Ctrl+Y", "redo")

        assert outcome.ok
        assert editor.get_live_bindings()["Ctrl+Y"] == "redo"
        assert sub.get_live_bindings()["Ctrl+Y"] == "redo"
        assert await remote.fetch(CONFIG) == {"Ctrl+Y": "redo"}

    @pytest.mark.asyncio
    async def test_unbind_default_key(self, coordinator, remote, editor):
        await coordinator.install_on(editor)
        outcome = await coordinator.set_binding("Ctrl+Z", None)
        assert outcome.document == {"Ctrl+Z": None}
        assert await remote.fetch(CONFIG) == {"Ctrl+Z": None}

    @pytest.mark.asyncio
    async def test_unbind_never_bound_key_is_not_persisted(self, coordinator, remote, editor):
        await coordinator.install_on(editor)
        outcome = await coordinator.set_binding("Ctrl+Alt+Q", None)
        assert outcome.ok
        assert "Ctrl+Alt+Q" not in outcome.document
        assert await remote.fetch(CONFIG) == {}

    @pytest.mark.asyncio
    async def test_restoring_default_drops_override(self, coordinator, remote, editor):
        await coordinator.install_on(editor)
        await coordinator.set_binding("Ctrl+S", "formatDocument")
        assert await remote.fetch(CONFIG) == {"Ctrl+S": "formatDocument"}
        await coordinator.set_binding("Ctrl+S", "save")
        assert await remote.fetch(CONFIG) == {}

    @pytest.mark.asyncio
    async def test_remote_replaced_not_merged(self, editor):
        remote = MemoryConfigService({CONFIG: {"Ctrl+Y": "redo"}})
        coordinator = BindingSyncCoordinator(remote=remote, platform_id="linux")
        await coordinator.install_on(editor)
        await coordinator.set_binding("Ctrl+Y", None)
        assert await remote.fetch(CONFIG) == {}

    @pytest.mark.asyncio
    async def test_notifies_before_persist(self, editor):
        calls: list[str] = []
        remote = _failing_remote()
        remote.store.side_effect = lambda *_: calls.append("store")
        notifier = BindingChangeNotifier()
        notifier.subscribe(lambda k, a: calls.append(f"refresh:{k}"))
        coordinator = BindingSyncCoordinator(
            remote=remote, notifier=notifier, platform_id="linux"
        )
        await coordinator.install_on(editor)

        await coordinator.set_binding("Ctrl+Y", "redo")

        assert calls == ["refresh:Ctrl+Y", "store"]

    @pytest.mark.asyncio
    async def test_store_failure_is_rejected_outcome(self, editor):
        remote = _failing_remote(store_error=RemoteStoreFailed(CONFIG, "disk full"))
        coordinator = BindingSyncCoordinator(remote=remote, platform_id="linux")
        await coordinator.install_on(editor)

        outcome = await coordinator.set_binding("Ctrl+Y", "redo")

        assert outcome.ok is False
        assert outcome.operation == "persist"
        assert "disk full" in outcome.error
        assert outcome.document == {"Ctrl+Y": "redo"}
        # The editor keeps working with the new binding
        assert editor.get_live_bindings()["Ctrl+Y"] == "redo"

    @pytest.mark.asyncio
    async def test_without_editor_rejected(self, coordinator, remote):
        outcome = await coordinator.set_binding("Ctrl+Y", "redo")
        assert outcome.ok is False
        assert "no editor" in outcome.error


class TestPersist:
    @pytest.mark.asyncio
    async def test_reads_current_live_state(self, coordinator, remote, editor):
        await coordinator.install_on(editor)
        editor.bind("Ctrl+P", "print")
        outcome = await coordinator.persist()
        assert outcome.document == {"Ctrl+P": "print"}

    @pytest.mark.asyncio
    async def test_patch_attached_to_log_record(self, coordinator, editor, caplog):
        await coordinator.install_on(editor)
        editor.bind("Ctrl+P", "print")
        with caplog.at_level(logging.INFO, logger="editorprefs"):
            await coordinator.persist()
        records = [r for r in caplog.records if r.getMessage().startswith("Persisting")]
        assert records[0].data == {"patch": {"Ctrl+P": "print"}}

    @pytest.mark.asyncio
    async def test_without_install_rejected(self, coordinator):
        outcome = await coordinator.persist()
        assert outcome.ok is False

    @pytest.mark.asyncio
    async def test_no_changes_stores_empty_patch(self, coordinator, remote, editor):
        await coordinator.install_on(editor)
        outcome = await coordinator.persist()
        assert outcome.ok
        assert outcome.document == {}


class TestSecondaryEditors:
    def test_add_remove(self, coordinator, make_editor):
        sub = make_editor()
        coordinator.add_secondary_editor(sub)
        coordinator.add_secondary_editor(sub)
        assert coordinator.editors == [sub]
        coordinator.remove_secondary_editor(sub)
        coordinator.remove_secondary_editor(sub)
        assert coordinator.editors == []

# src/editorprefs/keybindings/coordinator.py — v1
"""Key-binding synchronisation between live editors and the remote config store.

Lifecycle of one session:
    1. install_on(editor): capture the baseline once, fetch the user's
       override document and apply it onto the editor.
    2. set_binding(keystroke, action): change every live editor, notify
       listeners, then persist.
    3. persist(): diff baseline vs. current bindings and store the patch as
       the complete remote document (replace, never merge).

Remote failures are logged and returned as rejected SyncOutcome values; they
never interrupt the editor.
"""

from __future__ import annotations

import logging

from editorprefs.keybindings.diff import config_diff
from editorprefs.keybindings.editor import BaseEditorSurface, get_key_bindings
from editorprefs.keybindings.models import ConfigurationDocument, KeyBindingBaseline, SyncOutcome
from editorprefs.keybindings.notifier import BindingChangeNotifier
from editorprefs.keybindings.os_identity import keymap_config_name
from editorprefs.keybindings.session import SessionContext
from editorprefs.logging.context import set_operation_context, set_session_context
from editorprefs.remote.base_remote_config import (
    BaseRemoteConfigService,
    RemoteFetchFailed,
    RemoteStoreFailed,
)

logger = logging.getLogger(__name__)


class BindingSyncCoordinator:
    """Applies and persists user key-binding overrides for one session."""

    def __init__(
        self,
        remote: BaseRemoteConfigService,
        session: SessionContext | None = None,
        notifier: BindingChangeNotifier | None = None,
        platform_id: str | None = None,
    ) -> None:
        self._remote = remote
        self._session = session or SessionContext()
        self._notifier = notifier or BindingChangeNotifier()
        self._config_name = keymap_config_name(platform_id)
        self._primary: BaseEditorSurface | None = None
        self._secondaries: list[BaseEditorSurface] = []
        set_session_context(self._session.session_id, self._config_name)

    @property
    def config_name(self) -> str:
        return self._config_name

    @property
    def session(self) -> SessionContext:
        return self._session

    @property
    def notifier(self) -> BindingChangeNotifier:
        return self._notifier

    @property
    def baseline(self) -> KeyBindingBaseline | None:
        return self._session.baseline

    @property
    def editors(self) -> list[BaseEditorSurface]:
        """Primary editor first, then secondary editors."""
        primary = [self._primary] if self._primary is not None else []
        return primary + list(self._secondaries)

    def add_secondary_editor(self, editor: BaseEditorSurface) -> None:
        if editor is not self._primary and editor not in self._secondaries:
            self._secondaries.append(editor)

    def remove_secondary_editor(self, editor: BaseEditorSurface) -> None:
        if editor in self._secondaries:
            self._secondaries.remove(editor)

    async def install_on(
        self, editor: BaseEditorSurface, secondary: bool = False
    ) -> SyncOutcome:
        """Register an editor and apply the user's stored overrides to it.

        The first editor ever installed provides the session baseline;
        later editors are assumed to share the same built-in defaults.

        Args:
            editor: Editor surface to configure.
            secondary: Register as a secondary editor instead of the primary.
                A new primary demotes the previous one to secondary.

        Returns:
            SyncOutcome carrying the applied document, or a rejected outcome
            when the remote fetch failed (editor defaults are then kept).
        """
        set_operation_context("install")
        if secondary:
            self.add_secondary_editor(editor)
        elif editor is not self._primary:
            # A replaced primary stays live as a secondary editor
            previous = self._primary
            self.remove_secondary_editor(editor)
            self._primary = editor
            if previous is not None:
                self.add_secondary_editor(previous)

        # Capture defaults before touching any binding
        self._session.capture_baseline(editor)

        try:
            document = await self._remote.fetch(self._config_name)
        except RemoteFetchFailed as e:
            logger.error("Failed to retrieve config %s: %s", self._config_name, e)
            return self._rejected("install", e)

        logger.info(
            "Retrieved config: %s", self._config_name, extra={"data": {"document": document}}
        )
        for keystroke, action_name in document.items():
            editor.bind(keystroke, action_name)

        return SyncOutcome(
            operation="install",
            config_name=self._config_name,
            ok=True,
            document=document,
        )

    async def set_binding(
        self, keystroke: str, action_name: str | None
    ) -> SyncOutcome:
        """Bind (or unbind with None) a keystroke in every live editor and persist.

        The change notification fires before the persist write is issued.
        """
        if self._primary is None:
            logger.error("Cannot bind %s: no editor installed", keystroke)
            return self._rejected("persist", "no editor installed")

        for editor in self.editors:
            editor.bind(keystroke, action_name)
        self._notifier.notify(keystroke, action_name)
        return await self.persist()

    async def persist(self) -> SyncOutcome:
        """Store the difference between the baseline and the current bindings."""
        set_operation_context("persist")
        baseline = self._session.baseline
        if self._primary is None or baseline is None:
            logger.error("Cannot persist %s: no editor installed", self._config_name)
            return self._rejected("persist", "no editor installed")

        current = get_key_bindings(self._primary)
        patch = config_diff(baseline.keybindings, current)
        logger.info(
            "Persisting %d key binding overrides to %s",
            len(patch),
            self._config_name,
            extra={"data": {"patch": patch}},
        )

        try:
            await self._remote.store(self._config_name, patch)
        except RemoteStoreFailed as e:
            logger.error("Failed to store config %s: %s", self._config_name, e)
            return self._rejected("persist", e, patch)

        return SyncOutcome(
            operation="persist",
            config_name=self._config_name,
            ok=True,
            document=patch,
        )

    def _rejected(
        self,
        operation: str,
        error: Exception | str,
        document: ConfigurationDocument | None = None,
    ) -> SyncOutcome:
        return SyncOutcome(
            operation=operation,  # type: ignore[arg-type]
            config_name=self._config_name,
            ok=False,
            document=document or {},
            error=str(error),
        )

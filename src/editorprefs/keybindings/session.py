# src/editorprefs/keybindings/session.py — v1
"""Session-scoped state shared by every editor of one editing session.

The baseline is captured at most once. All editor instances are assumed to
start from identical built-in defaults, so later captures reuse the first.
"""

from __future__ import annotations

import json
import logging
import uuid

from editorprefs.keybindings.editor import (
    BaseEditorSurface,
    get_key_bindings,
    get_unbound_action_names,
)
from editorprefs.keybindings.models import KeyBindingBaseline

logger = logging.getLogger(__name__)


class SessionContext:
    """Holds the frozen key-binding baseline for one session."""

    def __init__(self, session_id: str | None = None) -> None:
        self.session_id = session_id or str(uuid.uuid4())
        self._baseline: KeyBindingBaseline | None = None

    @property
    def baseline(self) -> KeyBindingBaseline | None:
        return self._baseline

    @property
    def is_captured(self) -> bool:
        return self._baseline is not None

    def capture_baseline(self, editor: BaseEditorSurface) -> KeyBindingBaseline:
        """Freeze the editor's current bindings as defaults; first call wins."""
        if self._baseline is not None:
            return self._baseline

        self._baseline = KeyBindingBaseline(
            keybindings=get_key_bindings(editor),
            unbound_names=tuple(get_unbound_action_names(editor)),
        )
        logger.debug(
            "Default keybindings are: %s",
            json.dumps(self._baseline.keybindings, indent=2),
        )
        logger.debug(
            "Default unbound action names are: %s",
            json.dumps(list(self._baseline.unbound_names)),
        )
        return self._baseline

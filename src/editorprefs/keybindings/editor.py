# src/editorprefs/keybindings/editor.py — v1
"""Editor surface interface and the helpers reading bindings from it."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod

from editorprefs.keybindings.models import ConfigurationDocument

logger = logging.getLogger(__name__)


class BaseEditorSurface(ABC):
    """Live key-binding state owned by one editor instance."""

    @abstractmethod
    def get_live_bindings(self) -> ConfigurationDocument:
        """Return the current keystroke -> action name mapping."""

    @abstractmethod
    def get_all_action_names(self) -> list[str]:
        """Return every registered action, bound or not, in editor order."""

    @abstractmethod
    def bind(self, keystroke: str, action_name: str | None) -> None:
        """Bind a keystroke to an action, or unbind it when action_name is None.

        Unbinding must keep the action registered so it can be rebound later.
        """


class InMemoryEditorSurface(BaseEditorSurface):
    """Plain in-process editor state (headless sessions, CLI and tests)."""

    def __init__(
        self,
        bindings: ConfigurationDocument | None = None,
        action_names: list[str] | None = None,
    ) -> None:
        self._bindings: ConfigurationDocument = dict(bindings or {})
        if action_names is None:
            action_names = list(
                dict.fromkeys(v for v in self._bindings.values() if v)
            )
        self._actions = list(action_names)

    def get_live_bindings(self) -> ConfigurationDocument:
        return dict(self._bindings)

    def get_all_action_names(self) -> list[str]:
        return list(self._actions)

    def bind(self, keystroke: str, action_name: str | None) -> None:
        if action_name is None:
            self._bindings.pop(keystroke, None)
            return
        if action_name not in self._actions:
            logger.debug("Registering previously unknown action %r", action_name)
            self._actions.append(action_name)
        self._bindings[keystroke] = action_name


def get_key_bindings(editor: BaseEditorSurface) -> ConfigurationDocument:
    """Current bindings of ``editor``, keeping only keys bound to a named action."""
    return {k: v for k, v in editor.get_live_bindings().items() if v}


def get_unbound_action_names(editor: BaseEditorSurface) -> list[str]:
    """Valid action names not bound to any keystroke, in editor order."""
    bound = set(get_key_bindings(editor).values())
    return [name for name in editor.get_all_action_names() if name not in bound]


def dump_key_bindings(editor: BaseEditorSurface) -> str:
    """Pretty JSON of the current bindings, ready to paste into a config file."""
    return json.dumps(get_key_bindings(editor), indent=2)

# src/editorprefs/keybindings/notifier.py — v1
"""Targeted notification of key-binding changes to interested UI parts."""

from __future__ import annotations

from typing import Callable, Optional

BindingListener = Callable[[str, Optional[str]], None]


class BindingChangeNotifier:
    """Observer registry fired after every binding change."""

    def __init__(self) -> None:
        self._listeners: list[BindingListener] = []

    def subscribe(self, listener: BindingListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, keystroke: str, action_name: str | None) -> None:
        for listener in list(self._listeners):
            listener(keystroke, action_name)

    def __len__(self) -> int:
        return len(self._listeners)

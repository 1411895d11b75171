# src/editorprefs/keybindings/os_identity.py — v1
"""Platform identity used to namespace key-binding configuration names."""

from __future__ import annotations

import platform

KEYMAP_CONFIG_PREFIX = "keymap-"

_SYSTEM_NAMES = {
    "windows": "windows",
    "darwin": "mac",
    "linux": "linux",
}


def platform_identifier(system: str | None = None) -> str:
    """Map an OS name (platform.system() by default) to a short identifier."""
    name = (system if system is not None else platform.system()).lower()
    return _SYSTEM_NAMES.get(name, name or "unknown")


def keymap_config_name(platform_id: str | None = None) -> str:
    """Name of the remote document holding this platform's key bindings."""
    return KEYMAP_CONFIG_PREFIX + (platform_id or platform_identifier())

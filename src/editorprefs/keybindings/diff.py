# src/editorprefs/keybindings/diff.py — v1
"""Minimal patch computation between two flat configuration documents.

Only primitive values (strings and None) are supported; this is not a deep
merge and must not be used on nested structures.
"""

from __future__ import annotations

from editorprefs.keybindings.models import ConfigurationDocument


def config_diff(
    base: ConfigurationDocument, target: ConfigurationDocument
) -> ConfigurationDocument:
    """Compute the properties that must be set on ``base`` to obtain ``target``.

    Keys changed or added in target carry target's value, keys missing from
    target carry None (explicit unbind), and keys equal in both are omitted.
    """
    result: ConfigurationDocument = {}
    for key, base_value in base.items():
        if key in target:
            if base_value != target[key]:
                result[key] = target[key]
        else:
            result[key] = None
    for key, target_value in target.items():
        if key not in base:
            result[key] = target_value
    return result


def apply_patch(
    base: ConfigurationDocument, patch: ConfigurationDocument
) -> ConfigurationDocument:
    """Apply a patch produced by config_diff; None values delete the key."""
    result = dict(base)
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = value
    return result

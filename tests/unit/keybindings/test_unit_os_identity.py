# tests/unit/keybindings/test_unit_os_identity.py — v1
"""Tests for keybindings/os_identity.py."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from editorprefs.keybindings.os_identity import keymap_config_name, platform_identifier


class TestPlatformIdentifier:
    @pytest.mark.parametrize(
        "system,expected",
        [("Windows", "windows"), ("Darwin", "mac"), ("Linux", "linux"), ("FreeBSD", "freebsd")],
    )
    def test_mapping(self, system, expected):
        assert platform_identifier(system) == expected

    def test_empty_system(self):
        assert platform_identifier("") == "unknown"

    def test_detects_current_system(self):
        with patch("editorprefs.keybindings.os_identity.platform.system", return_value="Darwin"):
            assert platform_identifier() == "mac"


class TestKeymapConfigName:
    def test_explicit(self):
        assert keymap_config_name("linux") == "keymap-linux"

    def test_detected(self):
        with patch("editorprefs.keybindings.os_identity.platform.system", return_value="Windows"):
            assert keymap_config_name() == "keymap-windows"

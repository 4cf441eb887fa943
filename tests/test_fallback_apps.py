"""Unit tests for fallback application provisioning"""

import os
import sys
from unittest.mock import Mock

# Add the parent directory to the path so we can import modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.fallback_apps import provision_fallback_apps, resolve_fallback_command


def which_from(available):
    return lambda command: f"/usr/bin/{command}" if command in available else None


class TestFallbackApps:
    """Test the four canonical utilities"""

    def test_linux_picks_first_available(self):
        """Test the first resolvable candidate wins"""
        apps = provision_fallback_apps(
            "linux", which=which_from({"konsole", "xterm", "kate"}), log=Mock()
        )
        by_id = {app.id: app for app in apps}

        assert by_id["terminal"].launch_path == "konsole"
        assert by_id["text-editor"].launch_path == "kate"

    def test_linux_defaults_when_nothing_resolves(self):
        """Test hardcoded defaults are used when PATH has none"""
        apps = provision_fallback_apps("linux", which=which_from(set()), log=Mock())
        by_id = {app.id: app.launch_path for app in apps}

        assert by_id == {
            "terminal": "xterm",
            "file-manager": "nautilus",
            "calculator": "gnome-calculator",
            "text-editor": "nano",
        }

    def test_macos_commands_are_split(self):
        """Test macOS commands carry structured argv"""
        apps = provision_fallback_apps("darwin", which=which_from(set()), log=Mock())
        terminal = next(app for app in apps if app.id == "terminal")

        assert terminal.launch_path == "open -a Terminal"
        assert terminal.argv == ["open", "-a", "Terminal"]

    def test_windows_commands(self):
        """Test Windows uses the built-in tools"""
        apps = provision_fallback_apps("windows", log=Mock())

        assert {app.id: app.launch_path for app in apps} == {
            "terminal": "cmd",
            "file-manager": "explorer",
            "calculator": "calc",
            "text-editor": "notepad",
        }

    def test_unknown_os_omits_everything(self):
        """Test records without a command are left out"""
        assert provision_fallback_apps("plan9", log=Mock()) == []

    def test_records_have_metadata(self):
        """Test descriptive fields and keywords are filled"""
        apps = provision_fallback_apps("windows", log=Mock())
        calc = next(app for app in apps if app.id == "calculator")

        assert calc.display_name == "Calculator"
        assert calc.category == "Utilities"
        assert "math" in calc.keywords
        assert calc.description

    def test_empty_default_is_omitted(self):
        """Test an unresolved command with no default yields nothing"""
        commands = {"linux": (["missing"], "")}

        assert resolve_fallback_command(commands, "linux", which=which_from(set())) == ""

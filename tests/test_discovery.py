"""Unit tests for application discovery probes"""

import os
import sys
from unittest.mock import Mock, patch

import pytest

# Add the parent directory to the path so we can import modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.discovery import AppDiscovery, host_platform, split_command
from core.exceptions import UnsupportedPlatformError


def write_file(path, content=""):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


class TestLinuxProbe:
    """Test .desktop file discovery"""

    def setup_method(self):
        self.discovery = AppDiscovery(logger=Mock())

    def test_name_and_exec_yield_one_record(self, tmp_path):
        """Test a minimal entry produces exactly one record"""
        write_file(
            str(tmp_path / "apps" / "editor.desktop"),
            "[Desktop Entry]\nName=Editor\nExec=  editor --new-window %F  \n",
        )

        apps = self.discovery.discover_linux([str(tmp_path / "apps")])

        assert len(apps) == 1
        assert apps[0].display_name == "Editor"
        assert apps[0].name == "Editor"
        assert apps[0].launch_path == "editor --new-window"
        assert apps[0].argv == ["editor", "--new-window"]
        assert apps[0].id == "editor.desktop"

    def test_all_placeholders_removed(self, tmp_path):
        """Test %f %F %u %U are stripped from Exec"""
        write_file(
            str(tmp_path / "browser.desktop"),
            "Name=Browser\nExec=browser %u %U %f %F\n",
        )

        apps = self.discovery.discover_linux([str(tmp_path)])

        assert [app.launch_path for app in apps] == ["browser"]

    def test_full_metadata(self, tmp_path):
        """Test comment, icon, categories and keywords are read"""
        write_file(
            str(tmp_path / "term.desktop"),
            "[Desktop Entry]\n"
            "Name=Term\n"
            "Comment=A terminal emulator\n"
            "Exec=term\n"
            "Icon=utilities-terminal\n"
            "Categories=System;TerminalEmulator;\n"
            "Keywords=shell;prompt;\n",
        )

        app = self.discovery.discover_linux([str(tmp_path)])[0]

        assert app.description == "A terminal emulator"
        assert app.icon == "utilities-terminal"
        assert app.category == "System"
        assert app.keywords == ["shell", "prompt"]

    def test_missing_categories_uses_default(self, tmp_path):
        """Test category defaults when Categories is absent"""
        write_file(str(tmp_path / "a.desktop"), "Name=A\nExec=a\n")

        app = self.discovery.discover_linux([str(tmp_path)])[0]

        assert app.category == "Application"

    def test_missing_name_yields_nothing(self, tmp_path):
        """Test entries without Name are rejected"""
        write_file(str(tmp_path / "noname.desktop"), "[Desktop Entry]\nExec=thing\n")

        assert self.discovery.discover_linux([str(tmp_path)]) == []

    def test_exec_empty_after_stripping_yields_nothing(self, tmp_path):
        """Test an Exec made only of placeholders is rejected"""
        write_file(str(tmp_path / "empty.desktop"), "Name=Empty\nExec= %U \n")

        assert self.discovery.discover_linux([str(tmp_path)]) == []

    def test_action_groups_do_not_override(self, tmp_path):
        """Test [Desktop Action] keys are ignored"""
        write_file(
            str(tmp_path / "firefox.desktop"),
            "[Desktop Entry]\nName=Firefox\nExec=firefox %u\n\n"
            "[Desktop Action new-private-window]\nName=New Private Window\n"
            "Exec=firefox --private-window %u\n",
        )

        apps = self.discovery.discover_linux([str(tmp_path)])

        assert len(apps) == 1
        assert apps[0].name == "Firefox"
        assert apps[0].launch_path == "firefox"

    def test_recursive_and_non_desktop_files_skipped(self, tmp_path):
        """Test subdirectories are walked and other files ignored"""
        write_file(str(tmp_path / "nested" / "deep" / "one.desktop"), "Name=One\nExec=one\n")
        write_file(str(tmp_path / "readme.txt"), "Name=Nope\nExec=nope\n")

        apps = self.discovery.discover_linux([str(tmp_path)])

        assert {app.name for app in apps} == {"One"}

    def test_missing_directory_is_skipped(self, tmp_path):
        """Test a missing location is logged and the scan continues"""
        write_file(str(tmp_path / "real" / "x.desktop"), "Name=X\nExec=x\n")
        logger = Mock()
        discovery = AppDiscovery(logger=logger)

        apps = discovery.discover_linux([str(tmp_path / "missing"), str(tmp_path / "real")])

        assert [app.name for app in apps] == ["X"]
        logger.warning.assert_called()

    def test_unreadable_file_is_skipped(self, tmp_path):
        """Test a file that cannot be opened does not abort the scan"""
        write_file(str(tmp_path / "bad.desktop"), "Name=Bad\nExec=bad\n")
        write_file(str(tmp_path / "good.desktop"), "Name=Good\nExec=good\n")
        real_open = open

        def fake_open(path, *args, **kwargs):
            if str(path).endswith("bad.desktop"):
                raise PermissionError("denied")
            return real_open(path, *args, **kwargs)

        with patch("builtins.open", side_effect=fake_open):
            apps = self.discovery.discover_linux([str(tmp_path)])

        assert [app.name for app in apps] == ["Good"]

    def test_duplicate_ids_first_wins(self, tmp_path):
        """Test the first directory's entry wins for a repeated file name"""
        write_file(str(tmp_path / "system" / "app.desktop"), "Name=System App\nExec=sys\n")
        write_file(str(tmp_path / "user" / "app.desktop"), "Name=User App\nExec=user\n")

        apps = self.discovery.discover_linux(
            [str(tmp_path / "system"), str(tmp_path / "user")]
        )

        assert [app.name for app in apps] == ["System App"]


class TestMacOSProbe:
    """Test .app bundle discovery"""

    def test_bundles_become_records(self, tmp_path):
        """Test bundle directories are listed and named without suffix"""
        write_file(str(tmp_path / "Safari.app" / "Contents" / "Info.plist"), "<plist/>")
        os.makedirs(tmp_path / "Bare.app")
        os.makedirs(tmp_path / "NotAnApp")
        write_file(str(tmp_path / "file.app"), "not a directory")

        apps = AppDiscovery(logger=Mock()).discover_macos([str(tmp_path)])
        by_name = {app.name: app for app in apps}

        assert set(by_name) == {"Safari", "Bare"}
        assert by_name["Safari"].launch_path == str(tmp_path / "Safari.app")
        assert by_name["Safari"].description == "macOS application: Safari"
        assert by_name["Bare"].description == ""
        assert by_name["Bare"].display_name == "Bare"

    def test_not_recursive(self, tmp_path):
        """Test only direct children are considered"""
        os.makedirs(tmp_path / "Utilities" / "Console.app")

        apps = AppDiscovery(logger=Mock()).discover_macos([str(tmp_path)])

        assert apps == []


class TestWindowsProbe:
    """Test executable and shortcut discovery"""

    def test_executables_and_shortcuts(self, tmp_path):
        """Test .exe and .lnk are accepted case-insensitively"""
        write_file(str(tmp_path / "Vendor" / "Tool.EXE"))
        write_file(str(tmp_path / "Menu" / "Shortcut.lnk"))
        write_file(str(tmp_path / "Vendor" / "notes.txt"))

        apps = AppDiscovery(logger=Mock()).discover_windows([str(tmp_path)])
        by_name = {app.name: app for app in apps}

        assert set(by_name) == {"Tool", "Shortcut"}
        assert by_name["Tool"].launch_path == str(tmp_path / "Vendor" / "Tool.EXE")
        assert by_name["Tool"].description == "Windows application: Tool"


class TestDiscover:
    """Test OS selection"""

    def test_unsupported_os_raises(self):
        """Test an unknown OS is reported"""
        with pytest.raises(UnsupportedPlatformError):
            AppDiscovery(logger=Mock()).discover("plan9")

    def test_dispatches_to_linux(self):
        """Test linux runs the desktop file probe"""
        discovery = AppDiscovery(logger=Mock())
        with patch.object(discovery, "discover_linux", return_value=[]) as probe:
            assert discovery.discover("linux") == []
        probe.assert_called_once_with()

    def test_host_platform(self):
        """Test sys.platform normalization"""
        assert host_platform("linux") == "linux"
        assert host_platform("darwin") == "darwin"
        assert host_platform("win32") == "windows"
        assert host_platform("sunos5") == "sunos5"

    def test_split_command_quoting(self):
        """Test quoted arguments survive splitting"""
        assert split_command('app --title "My Doc"') == ["app", "--title", "My Doc"]
        assert split_command('broken "quote') == ["broken", '"quote']

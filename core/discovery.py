"""
Per-OS application discovery.

Each probe turns local install metadata into AppRecords. Scans are
best-effort: a missing directory, a permission error or an unreadable file
is logged and skipped, never raised to the caller.
"""

import logging
import os
import shlex
import sys
from typing import Iterable, List, Optional, Set

from utils.desktop_entry import (
    first_category,
    is_hidden,
    parse_desktop_entry,
    split_list_value,
    strip_exec_placeholders,
)

from .app_models import AppRecord
from .config import CATALOG_CONFIG
from .exceptions import UnsupportedPlatformError

LINUX = "linux"
MACOS = "darwin"
WINDOWS = "windows"


def host_platform(platform: Optional[str] = None) -> str:
    """Normalize sys.platform into linux, darwin or windows.

    Unknown platforms are returned unchanged so callers can report them.
    """
    platform = platform or sys.platform
    if platform.startswith("linux"):
        return LINUX
    if platform == "darwin":
        return MACOS
    if platform in ("win32", "cygwin"):
        return WINDOWS
    return platform


def split_command(command_line: str) -> List[str]:
    """Split a command line into argv, honouring shell-style quoting."""
    try:
        return shlex.split(command_line)
    except ValueError:
        # Unbalanced quotes
        return command_line.split()


def expand_dirs(dirs: Iterable[str]) -> List[str]:
    return [os.path.expanduser(os.path.expandvars(d)) for d in dirs]


class AppDiscovery:
    """Scans the host for installed applications."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("Discovery")

    def discover(self, host_os: str) -> List[AppRecord]:
        """Run the probe for host_os.

        Raises:
            UnsupportedPlatformError: host_os is not linux, darwin or windows
        """
        if host_os == LINUX:
            records = self.discover_linux()
        elif host_os == MACOS:
            records = self.discover_macos()
        elif host_os == WINDOWS:
            records = self.discover_windows()
        else:
            raise UnsupportedPlatformError(host_os)

        self.logger.info(f"Discovered {len(records)} applications on {host_os}")
        return records

    # Linux

    def discover_linux(self, dirs: Optional[List[str]] = None) -> List[AppRecord]:
        suffix = CATALOG_CONFIG["desktop_suffix"]
        records: List[AppRecord] = []
        seen: Set[str] = set()

        for directory in expand_dirs(dirs or CATALOG_CONFIG["linux_dirs"]):
            for path in self._walk_files(directory):
                if not path.endswith(suffix):
                    continue
                record = self.parse_desktop_file(path)
                if record:
                    self._add(records, seen, record)

        return records

    def parse_desktop_file(self, path: str) -> Optional[AppRecord]:
        """Build a record from a .desktop file, or None if it is unusable."""
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as f:
                values = parse_desktop_entry(f.read())
        except OSError as e:
            self.logger.warning(f"Failed to read {path}: {e}")
            return None

        if not CATALOG_CONFIG["show_hidden_apps"] and is_hidden(values):
            return None

        name = values.get("Name", "")
        launch_path = strip_exec_placeholders(values.get("Exec", ""))
        if not name or not launch_path:
            return None

        return AppRecord(
            id=os.path.basename(path),
            name=name,
            display_name=name,
            launch_path=launch_path,
            description=values.get("Comment", ""),
            icon=values.get("Icon", ""),
            category=first_category(values.get("Categories", ""))
            or CATALOG_CONFIG["default_category"],
            keywords=split_list_value(values.get("Keywords", "")),
            argv=split_command(launch_path),
        )

    # macOS

    def discover_macos(self, dirs: Optional[List[str]] = None) -> List[AppRecord]:
        suffix = CATALOG_CONFIG["bundle_suffix"]
        records: List[AppRecord] = []
        seen: Set[str] = set()

        for directory in expand_dirs(dirs or CATALOG_CONFIG["macos_dirs"]):
            if not os.path.isdir(directory):
                self.logger.warning(f"Skipping missing directory {directory}")
                continue
            try:
                entries = sorted(os.scandir(directory), key=lambda e: e.name)
            except OSError as e:
                self.logger.warning(f"Failed to scan {directory}: {e}")
                continue

            for entry in entries:
                try:
                    if not entry.is_dir() or not entry.name.endswith(suffix):
                        continue
                except OSError as e:
                    self.logger.warning(f"Failed to inspect {entry.path}: {e}")
                    continue
                self._add(records, seen, self.parse_macos_app(entry.path))

        return records

    def parse_macos_app(self, path: str) -> AppRecord:
        name = os.path.basename(path.rstrip("/"))
        name = name[: -len(CATALOG_CONFIG["bundle_suffix"])]

        description = ""
        if os.path.exists(os.path.join(path, "Contents", "Info.plist")):
            description = f"macOS application: {name}"

        return AppRecord(
            id=name,
            name=name,
            display_name=name,
            launch_path=path,
            description=description,
            icon=CATALOG_CONFIG["default_icon"],
            argv=[path],
        )

    # Windows

    def discover_windows(self, dirs: Optional[List[str]] = None) -> List[AppRecord]:
        extensions = tuple(ext.lower() for ext in CATALOG_CONFIG["windows_extensions"])
        records: List[AppRecord] = []
        seen: Set[str] = set()

        for directory in expand_dirs(dirs or CATALOG_CONFIG["windows_dirs"]):
            for path in self._walk_files(directory):
                if path.lower().endswith(extensions):
                    self._add(records, seen, self.parse_windows_app(path))

        return records

    def parse_windows_app(self, path: str) -> AppRecord:
        name = os.path.splitext(os.path.basename(path))[0]
        return AppRecord(
            id=name,
            name=name,
            display_name=name,
            launch_path=path,
            description=f"Windows application: {name}",
            icon=CATALOG_CONFIG["default_icon"],
            argv=[path],
        )

    # Helpers

    def _walk_files(self, directory: str) -> Iterable[str]:
        """Yield file paths under directory in sorted order, logging failures."""
        if not os.path.isdir(directory):
            self.logger.warning(f"Skipping missing directory {directory}")
            return

        def on_error(error: OSError) -> None:
            self.logger.warning(f"Failed to scan {error.filename}: {error}")

        for root, dirnames, filenames in os.walk(directory, onerror=on_error):
            dirnames.sort()
            for filename in sorted(filenames):
                yield os.path.join(root, filename)

    def _add(self, records: List[AppRecord], seen: Set[str], record: AppRecord) -> None:
        # First record with a given id wins
        if record.id in seen:
            self.logger.debug(f"Skipping duplicate application id {record.id}")
            return
        seen.add(record.id)
        records.append(record)

"""
Minimal reader for freedesktop .desktop files.

Only the keys the catalog needs are recognized. Lines are plain Key=Value;
keys inside [Desktop Action ...] or any other non-main group are ignored so
actions cannot override the main entry.
"""

import logging
from typing import Dict, List, Optional

from core.config import CATALOG_CONFIG

logger = logging.getLogger("DesktopEntry")

MAIN_GROUP = "Desktop Entry"
RECOGNIZED_KEYS = ("Name", "Comment", "Exec", "Icon", "Categories", "Keywords", "NoDisplay", "Hidden")


def parse_desktop_entry(text: str) -> Dict[str, str]:
    """Parse the main group of a desktop entry into a key/value dict.

    Lines before any group header count as part of the main group.
    Later duplicates of a key win, as in a plain line scan.
    """
    values: Dict[str, str] = {}
    in_main = True

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("[") and line.endswith("]"):
            in_main = line[1:-1].strip() == MAIN_GROUP
            continue
        if not in_main or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if key in RECOGNIZED_KEYS:
            values[key] = value.strip()

    return values


def strip_exec_placeholders(exec_line: str, placeholders: Optional[List[str]] = None) -> str:
    """Remove file/URL field codes from an Exec value and trim it."""
    for token in placeholders or CATALOG_CONFIG["exec_placeholders"]:
        exec_line = exec_line.replace(token, "")
    return exec_line.strip()


def split_list_value(value: str) -> List[str]:
    """Split a ;-delimited value, dropping empty tokens."""
    return [item.strip() for item in value.split(";") if item.strip()]


def first_category(value: str) -> str:
    """Return the first ;-delimited category, or "" when there is none."""
    return value.split(";")[0].strip() if value else ""


def is_hidden(values: Dict[str, str]) -> bool:
    return (
        values.get("NoDisplay", "false").lower() == "true"
        or values.get("Hidden", "false").lower() == "true"
    )

"""
pal - a personal launcher backend.

Discovers installed applications and makes them searchable and launchable,
and keeps a timestamped history of clipboard text.
"""

__version__ = "0.1.0"
__description__ = "Application catalog, launcher and clipboard history daemon"

from core.app_manager import CatalogManager
from core.backend import Backend
from core.clip_daemon import ClipboardDaemon
from core.clip_store import ClipStore

__all__ = [
    "CatalogManager",
    "Backend",
    "ClipboardDaemon",
    "ClipStore",
]

"""
JSON boundary between the catalog/clipboard core and a presentation layer.

Listing, searching and history never raise here: failures are logged and
come back as an empty JSON array. Launching is the one call that raises.
"""

import json
import logging
import subprocess
import threading
from typing import Callable, List, Optional

from .app_manager import CatalogManager
from .clip_daemon import ClipboardDaemon
from .clip_store import ClipStore
from .config import COMMAND_CONFIG
from .exceptions import PalError
from .refresh_signal import RefreshPump

EMPTY_JSON_ARRAY = "[]"

VisibilityCallback = Callable[[bool], None]


def to_json(items: List) -> str:
    return json.dumps([item.to_dict() for item in items], ensure_ascii=False)


class Backend:
    """Operations exposed to the launcher window."""

    def __init__(
        self,
        catalog: Optional[CatalogManager] = None,
        clip_store: Optional[ClipStore] = None,
        clip_daemon: Optional[ClipboardDaemon] = None,
        refresh_pump: Optional[RefreshPump] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger("Backend")
        self.catalog = catalog or CatalogManager()
        self.clip_store = clip_store or ClipStore()
        self.clip_daemon = clip_daemon or ClipboardDaemon(self.clip_store)
        self.refresh_pump = refresh_pump or RefreshPump(logger=self.logger)

        # Captures only post to the size-1 signal so the daemon never waits on the UI
        self.clip_daemon.set_refresh_callback(self.refresh_pump.post)

        self.visible = False
        self._visibility_lock = threading.RLock()
        self._visibility_callback: Optional[VisibilityCallback] = None
        self.last_command = ""
        self.last_output = ""

    # Lifecycle

    def startup(self) -> threading.Thread:
        """Start the refresh pump, the clipboard daemon and background discovery.

        Returns:
            The discovery thread
        """
        self.refresh_pump.start()
        self.clip_daemon.start()

        thread = threading.Thread(target=self._initialize_catalog, name="app-discovery", daemon=True)
        thread.start()
        return thread

    def shutdown(self) -> None:
        self.clip_daemon.stop(timeout=2)
        self.refresh_pump.stop(timeout=2)

    def _initialize_catalog(self) -> None:
        try:
            self.catalog.initialize()
        except PalError as e:
            self.logger.error(f"Failed to initialize application manager: {e}")

    # Applications

    def get_all_apps(self) -> str:
        try:
            return to_json(self.catalog.get_all_apps())
        except (PalError, TypeError, ValueError) as e:
            self.logger.error(f"GetAllApps error: {e}")
            return EMPTY_JSON_ARRAY

    def search_apps(self, query: str) -> str:
        try:
            return to_json(self.catalog.search_apps(query))
        except (PalError, TypeError, ValueError) as e:
            self.logger.error(f"SearchApps error: {e}")
            return EMPTY_JSON_ARRAY

    def launch_app(self, app_id: str) -> None:
        """Launch app_id and hide the window.

        Raises:
            AppNotFoundError, LaunchError, UnsupportedPlatformError
        """
        try:
            self.catalog.launch_app(app_id)
        except PalError as e:
            self.logger.error(f"LaunchApp error: {e}")
            raise
        self.hide_window()

    def refresh_apps(self) -> None:
        self.catalog.refresh()
        self.refresh_pump.post()

    def get_app_count(self) -> int:
        return self.catalog.count()

    # Clipboard

    def get_clip_history(self) -> str:
        try:
            return to_json(self.clip_store.history())
        except (TypeError, ValueError) as e:
            self.logger.error(f"GetClipHistory error: {e}")
            return EMPTY_JSON_ARRAY

    # Notifications and visibility

    def on_refresh(self, callback: Optional[Callable[[], None]]) -> None:
        """Register the refresh subscriber, replacing any earlier one."""
        self.refresh_pump.subscribe(callback)

    def on_visibility_changed(self, callback: Optional[VisibilityCallback]) -> None:
        with self._visibility_lock:
            self._visibility_callback = callback

    def toggle_visibility(self) -> bool:
        """Hotkey handler: flip visibility and request a coalesced refresh.

        Returns:
            The new visibility
        """
        with self._visibility_lock:
            visible = not self.visible
            self._set_visible(visible)
        if not self.refresh_pump.post():
            self.logger.debug("Refresh already pending, toggle refresh dropped")
        return visible

    def show_window(self) -> None:
        self._set_visible(True)

    def hide_window(self) -> None:
        self._set_visible(False)

    def _set_visible(self, visible: bool) -> None:
        # Shared by the hotkey thread and launch requests
        with self._visibility_lock:
            self.visible = visible
            callback = self._visibility_callback
            if callback is not None:
                callback(visible)

    # Command execution

    def execute_command(self, command: str) -> str:
        """Run a whitespace-split command and return its combined output."""
        if not command.strip():
            return "Error: Empty command"

        self.last_command = command
        parts = command.split()

        try:
            result = subprocess.run(
                parts,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
                timeout=COMMAND_CONFIG["timeout"],
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            output = f"Error: {e}\n"
        else:
            output = result.stdout or ""
            if result.returncode != 0:
                output = f"Error: exit status {result.returncode}\n{output}"

        self.last_output = output
        return output

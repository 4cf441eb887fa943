"""
Background clipboard capture.

One thread watches the clipboard for plain-text changes and, for every
change, stores a timestamped, content-addressed ClipEntry and pokes the
registered refresh callback.
"""

import logging
import threading
from typing import Callable, Iterable, Optional

from utils.clipboard import ClipboardWatcher
from utils.text import content_hash, preview, unix_millis

from .app_models import ClipEntry
from .clip_store import ClipStore
from .config import CLIPBOARD_CONFIG
from .exceptions import ClipboardUnavailableError

RefreshCallback = Callable[[], None]


class ClipboardDaemon:
    """Captures clipboard text history for the life of the process."""

    def __init__(
        self,
        store: ClipStore,
        watcher: Optional[ClipboardWatcher] = None,
        clock: Optional[Callable[[], int]] = None,
        preview_length: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.logger = logger or logging.getLogger("ClipboardDaemon")
        self.watcher = watcher or ClipboardWatcher(logger=self.logger)
        self.clock = clock or unix_millis
        self.preview_length = (
            preview_length if preview_length is not None else CLIPBOARD_CONFIG["preview_length"]
        )

        self._refresh_callback: Optional[RefreshCallback] = None
        self._callback_lock = threading.Lock()
        self._last_timestamp = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def set_refresh_callback(self, callback: Optional[RefreshCallback]) -> None:
        """Register the refresh subscriber; the last registration wins."""
        with self._callback_lock:
            self._refresh_callback = callback

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Open the clipboard and start the capture thread.

        Returns:
            False if the clipboard cannot be used; the daemon then stays off
        """
        if self.running:
            return True

        try:
            self.watcher.open()
        except ClipboardUnavailableError as e:
            self.logger.error(f"Clipboard capture disabled: {e}")
            return False

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="clipboard-daemon", daemon=True)
        self._thread.start()
        return True

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        self.logger.info("Clipboard recording started...")
        try:
            self.consume(self.watcher.watch(self._stop_event))
        except Exception:
            self.logger.exception("Clipboard recording stopped unexpectedly")
            raise
        self.logger.info("Clipboard recording stopped")

    def consume(self, changes: Iterable[str]) -> None:
        """Record every change in arrival order until the source ends or stop is requested."""
        for text in changes:
            self.record(text)
            if self._stop_event.is_set():
                break

    def record(self, text: str) -> ClipEntry:
        """Capture one clipboard value: hash, timestamp, persist, notify."""
        entry = ClipEntry(
            content_hash=content_hash(text),
            timestamp=self._next_timestamp(),
            content=text,
        )

        # A failed write is logged by the store; the capture still counts
        self.store.put(entry)
        self.logger.info(f"{preview(text, self.preview_length)}... COPIED!")

        with self._callback_lock:
            callback = self._refresh_callback
        if callback is not None:
            try:
                callback()
            except Exception:
                self.logger.exception("Refresh callback failed")

        return entry

    def _next_timestamp(self) -> int:
        # Strictly increasing even when the clock repeats or steps back
        timestamp = max(self.clock(), self._last_timestamp + 1)
        self._last_timestamp = timestamp
        return timestamp

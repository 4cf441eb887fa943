# pyright: reportMissingTypeStubs=false
# pyright: reportUnknownMemberType=false
# pyright: reportUnusedCallResult=false
# ruff: ignore

"""Plain-text clipboard readers and a change watcher built on top of them."""

import logging
import os
import subprocess
import sys
import threading
from enum import Enum
from typing import Iterator, List, Optional

import pyperclip

from core.config import CLIPBOARD_CONFIG
from core.exceptions import ClipboardUnavailableError

from .deps import check_command_exists

logger = logging.getLogger("Clipboard")


class ClipboardBackend(Enum):
    """Available clipboard backends."""

    WL_CLIPBOARD = "wl-clipboard"  # Use wl-clipboard (Wayland only)
    XCLIP = "xclip"  # Use xclip (X11 only)
    XSEL = "xsel"  # Use xsel (X11 only)
    PYPERCLIP = "pyperclip"  # macOS pbpaste / Windows clipboard API


PASTE_COMMANDS = {
    ClipboardBackend.WL_CLIPBOARD: ["wl-paste", "--no-newline", "--type", "text"],
    ClipboardBackend.XCLIP: ["xclip", "-selection", "clipboard", "-o"],
    ClipboardBackend.XSEL: ["xsel", "--output", "--clipboard"],
}


def detect_backend(platform: Optional[str] = None) -> ClipboardBackend:
    """Pick a backend for the running session.

    Raises:
        ClipboardUnavailableError: no usable reader on Linux
    """
    platform = platform or sys.platform
    if not platform.startswith("linux"):
        return ClipboardBackend.PYPERCLIP

    if os.environ.get("WAYLAND_DISPLAY") and check_command_exists("wl-paste"):
        return ClipboardBackend.WL_CLIPBOARD
    if check_command_exists("xclip"):
        return ClipboardBackend.XCLIP
    if check_command_exists("xsel"):
        return ClipboardBackend.XSEL
    raise ClipboardUnavailableError(
        "no clipboard reader found; install wl-clipboard, xclip or xsel"
    )


class ClipboardManager:
    """Reads plain text from the system clipboard."""

    def __init__(self, backend: ClipboardBackend, timeout: Optional[float] = None):
        """Initialize the clipboard manager.

        Args:
            backend: The clipboard backend to use
            timeout: Seconds allowed for one external paste command
        """
        self.backend = backend
        self.timeout = timeout if timeout is not None else CLIPBOARD_CONFIG["read_timeout"]

    def check(self) -> None:
        """Verify the backend can be used.

        Raises:
            ClipboardUnavailableError: the backend cannot read the clipboard
        """
        if self.backend == ClipboardBackend.PYPERCLIP:
            try:
                pyperclip.paste()
            except pyperclip.PyperclipException as e:
                raise ClipboardUnavailableError(str(e)) from e
            return

        command = PASTE_COMMANDS[self.backend][0]
        if not check_command_exists(command):
            raise ClipboardUnavailableError(f"{command} not found")

    def paste(self) -> Optional[str]:
        """Paste text from clipboard.

        Returns:
            The clipboard contents, or None if unavailable or not text
        """
        if self.backend == ClipboardBackend.PYPERCLIP:
            return self._paste_pyperclip()
        return self._paste_command(PASTE_COMMANDS[self.backend])

    def _paste_pyperclip(self) -> Optional[str]:
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.debug(f"pyperclip paste failed: {e}")
            return None
        return text if isinstance(text, str) else None

    def _paste_command(self, command: List[str]) -> Optional[str]:
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            return None
        except (subprocess.TimeoutExpired, OSError, UnicodeDecodeError) as e:
            logger.debug(f"Error pasting with {command[0]}: {e}")
            return None

        # Non-zero exit means empty clipboard or a non-text selection
        if result.returncode == 0:
            return result.stdout
        return None


class ClipboardWatcher:
    """Polls the clipboard and yields each new plain-text value."""

    def __init__(
        self,
        manager: Optional[ClipboardManager] = None,
        poll_interval: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.manager = manager
        self.poll_interval = (
            poll_interval if poll_interval is not None else CLIPBOARD_CONFIG["poll_interval"]
        )
        self.logger = logger or logging.getLogger("ClipboardWatcher")
        self._last_text: Optional[str] = None

    def open(self) -> None:
        """Select and verify a backend.

        Raises:
            ClipboardUnavailableError: the clipboard cannot be read
        """
        if self.manager is None:
            configured = CLIPBOARD_CONFIG.get("backend")
            backend = ClipboardBackend(configured) if configured else detect_backend()
            self.manager = ClipboardManager(backend)
        self.manager.check()
        self.logger.info(f"Watching clipboard with {self.manager.backend.value}")

    def watch(self, stop_event: threading.Event) -> Iterator[str]:
        """Yield clipboard text whenever it differs from the previous read.

        The content present when watching starts is treated as already seen.
        """
        if self.manager is None:
            self.open()

        self._last_text = self.manager.paste()

        while not stop_event.wait(self.poll_interval):
            text = self.manager.paste()
            if not text or text == self._last_text:
                continue
            self._last_text = text
            yield text

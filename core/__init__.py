"""Core catalog, launch and clipboard capture components."""

from .app_models import AppRecord, ClipEntry
from .exceptions import (
    PalError,
    UnsupportedPlatformError,
    AppNotFoundError,
    LaunchError,
    ClipboardUnavailableError,
)

__all__ = [
    "AppRecord",
    "ClipEntry",
    "PalError",
    "UnsupportedPlatformError",
    "AppNotFoundError",
    "LaunchError",
    "ClipboardUnavailableError",
]

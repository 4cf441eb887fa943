class PalError(Exception):
    """Base class for errors reported by pal components."""


class UnsupportedPlatformError(PalError):
    """Raised when discovery or launching runs on an unknown host OS."""

    def __init__(self, host_os: str):
        super().__init__(f"unsupported operating system: {host_os}")
        self.host_os = host_os


class AppNotFoundError(PalError):
    """Raised when a launch request names an id that is not in the catalog."""

    def __init__(self, app_id: str):
        super().__init__(f"application not found: {app_id}")
        self.app_id = app_id


class LaunchError(PalError):
    """Raised when spawning an application process fails."""

    def __init__(self, argv, reason):
        super().__init__(f"failed to launch {argv!r}: {reason}")
        self.argv = list(argv)
        self.reason = reason


class ClipboardUnavailableError(PalError):
    """Raised when no plain-text clipboard backend can be used."""

import shutil
from typing import Callable, List, Optional


def check_command_exists(command: str) -> bool:
    """Check if a command is available on the system.

    Args:
        command: The command to check (e.g., "xterm", "wl-paste")

    Returns:
        True if the command exists, False otherwise
    """
    return shutil.which(command) is not None


def first_available_command(
    candidates: List[str],
    default: str = "",
    which: Optional[Callable[[str], Optional[str]]] = None,
) -> str:
    """Return the first candidate resolvable on PATH, else the default.

    Args:
        candidates: Command names in order of preference
        default: Returned when no candidate resolves
        which: PATH lookup, shutil.which unless given

    Returns:
        The chosen command (may be empty when default is empty)
    """
    lookup = which or shutil.which
    for candidate in candidates:
        if lookup(candidate):
            return candidate
    return default

import logging
from typing import Callable, List, Optional

from utils.deps import first_available_command

from .app_models import AppRecord
from .config import FALLBACK_APPS
from .discovery import split_command

logger = logging.getLogger("FallbackApps")


def resolve_fallback_command(
    commands: dict,
    host_os: str,
    which: Optional[Callable[[str], Optional[str]]] = None,
) -> str:
    """Pick the command for one fallback utility on host_os.

    Returns "" when the OS has no entry, so the utility can be dropped.
    """
    if host_os not in commands:
        return ""
    candidates, default = commands[host_os]
    return first_available_command(candidates, default, which=which)


def provision_fallback_apps(
    host_os: str,
    which: Optional[Callable[[str], Optional[str]]] = None,
    log: Optional[logging.Logger] = None,
) -> List[AppRecord]:
    """Synthesize the well-known utility entries used when discovery finds nothing.

    Entries whose command cannot be resolved are left out rather than added
    with an empty launch path.
    """
    log = log or logger
    records = []

    for entry in FALLBACK_APPS:
        command = resolve_fallback_command(entry["commands"], host_os, which=which)
        if not command:
            log.debug(f"No command for fallback app {entry['id']} on {host_os}")
            continue

        records.append(
            AppRecord(
                id=entry["id"],
                name=entry["name"],
                display_name=entry["name"],
                launch_path=command,
                description=entry["description"],
                icon=entry["icon"],
                category=entry["category"],
                keywords=list(entry["keywords"]),
                argv=split_command(command),
            )
        )

    log.info(f"Provisioned {len(records)} fallback applications")
    return records

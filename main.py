#!/usr/bin/env python3
# pyright: reportMissingTypeStubs=false
# pyright: reportUnknownMemberType=false
# ruff: ignore

import logging
import os
import signal
import sys
import threading
from typing import List, Optional

import setproctitle  # pyright: ignore

# Add current directory to path for absolute imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
from core.backend import Backend  # noqa: E402
from core.config import APPNAME, LOG_CONFIG, get_config_dir  # noqa: E402
from core.exceptions import PalError  # noqa: E402

USAGE = "Usage: pal [daemon] | list | search <query> | launch <id> | clips | run <command>"


def setup_logging() -> str:
    """Send all component loggers to the append-only log file in the config dir."""
    log_path = os.path.join(get_config_dir(), LOG_CONFIG["file"])
    logging.basicConfig(
        filename=log_path,
        filemode="a",
        level=getattr(logging, LOG_CONFIG["level"], logging.DEBUG),
        format=LOG_CONFIG["format"],
    )
    return log_path


def run_daemon(backend: Backend) -> int:
    """Run discovery and clipboard capture until SIGINT/SIGTERM."""
    setproctitle.setproctitle(APPNAME)
    stop_event = threading.Event()

    def on_signal(signum, frame):
        stop_event.set()

    signal.signal(signal.SIGINT, on_signal)
    signal.signal(signal.SIGTERM, on_signal)

    backend.startup()
    logging.getLogger("Main").info("pal daemon running")
    stop_event.wait()
    backend.shutdown()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the pal application."""
    argv = sys.argv[1:] if argv is None else argv
    setup_logging()
    backend = Backend()

    if not argv or argv[0] == "daemon":
        return run_daemon(backend)

    command, args = argv[0], argv[1:]

    if command == "list":
        print(backend.get_all_apps())
    elif command == "search":
        print(backend.search_apps(" ".join(args)))
    elif command == "clips":
        print(backend.get_clip_history())
    elif command == "launch" and args:
        try:
            backend.launch_app(args[0])
        except PalError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    elif command == "run" and args:
        print(backend.execute_command(" ".join(args)), end="")
    else:
        print(USAGE, file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

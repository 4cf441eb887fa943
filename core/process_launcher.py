# pyright: reportMissingTypeStubs=false
# pyright: reportUnknownMemberType=false
# pyright: reportAttributeAccessIssue=false
# pyright: reportUnusedCallResult=false
# pyright: reportMissingImports=false
# ruff: ignore

import logging
import os
import shutil
import subprocess
import sys
from typing import Dict, List, Optional

from .app_models import AppRecord
from .discovery import LINUX, MACOS, WINDOWS
from .exceptions import LaunchError, UnsupportedPlatformError

logger = logging.getLogger("ProcessLauncher")

SYSTEMD_RUN = "/usr/bin/systemd-run"


def detach_child() -> None:
    """
    Runs in the child process before execing.
    os.setsid() makes the child a session leader, detaching it from Python.
    """
    os.setsid()

    if not sys.stdout.isatty():
        with open(os.devnull, "w+b") as null_fp:
            null_fd = null_fp.fileno()
            for fp in [sys.stdin, sys.stdout, sys.stderr]:
                try:
                    os.dup2(null_fd, fp.fileno())
                except (OSError, ValueError):
                    pass


def child_env_vars() -> Dict[str, str]:
    env = dict(os.environ.items())
    # LD_PRELOAD set for this process must not leak into launched apps
    env.pop("LD_PRELOAD", None)
    return env


def child_environment(env: Optional[Dict[str, str]] = None) -> List[str]:
    env = child_env_vars() if env is None else env
    return [f"{k}={v}" for k, v in env.items()]


def resolve_program(program: str, env: Dict[str, str]) -> Optional[str]:
    """Locate program the way the child will, using the child's PATH."""
    if os.sep in program:
        return program if os.access(program, os.X_OK) else None
    return shutil.which(program, path=env.get("PATH"))


def launch_detached(cmd: List[str], working_dir: Optional[str] = None) -> None:
    """
    Spawns the process using GLib's async mechanism.

    Raises:
        LaunchError: GLib is unavailable, the program is not on PATH or the spawn failed
    """
    try:
        from gi.repository import GLib
    except ImportError as e:
        raise LaunchError(cmd, "PyGObject is required to launch applications on Linux") from e

    # The systemd-run wrapper always spawns, so a missing program must be caught here
    env = child_env_vars()
    if not cmd or resolve_program(cmd[0], env) is None:
        raise LaunchError(cmd, "command not found")

    # systemd-run --user puts the app in its own independent cgroup
    use_systemd_run = os.path.exists(SYSTEMD_RUN)
    final_cmd = cmd
    if use_systemd_run:
        final_cmd = ["systemd-run", "--user", "--scope", "--quiet"] + cmd

    try:
        GLib.spawn_async(
            argv=final_cmd,
            envp=child_environment(env),
            flags=GLib.SpawnFlags.SEARCH_PATH_FROM_ENVP | GLib.SpawnFlags.SEARCH_PATH,
            child_setup=None if use_systemd_run else detach_child,
            **({"working_directory": working_dir} if working_dir else {}),
        )
    except GLib.Error as e:
        raise LaunchError(final_cmd, e.message) from e

    logger.info("Process spawned: %s", " ".join(final_cmd))


def launch_process(cmd: List[str], new_session: bool = True) -> None:
    """Start cmd without waiting for it.

    Raises:
        LaunchError: the process could not be started
    """
    try:
        if new_session:
            subprocess.Popen(cmd, start_new_session=True)
        else:
            subprocess.Popen(cmd)
    except (OSError, ValueError) as e:
        raise LaunchError(cmd, e) from e

    logger.info("Process spawned: %s", " ".join(cmd))


class AppLauncher:
    """Spawns catalog records the way the host OS expects."""

    def __init__(self, host_os: str, logger: Optional[logging.Logger] = None):
        self.host_os = host_os
        self.logger = logger or logging.getLogger("ProcessLauncher")

    def command_for(self, record: AppRecord) -> List[str]:
        """Build the argv used to launch record on this host.

        Raises:
            LaunchError: the record has nothing to launch
            UnsupportedPlatformError: the host OS is unknown
        """
        if self.host_os == LINUX:
            cmd = record.command()
        elif self.host_os == MACOS:
            cmd = ["open", record.launch_path] if record.launch_path else []
        elif self.host_os == WINDOWS:
            cmd = ["cmd", "/c", "start", "", record.launch_path] if record.launch_path else []
        else:
            raise UnsupportedPlatformError(self.host_os)

        if not cmd:
            raise LaunchError([record.launch_path], "invalid path")
        return cmd

    def launch(self, record: AppRecord) -> None:
        """Fire-and-forget launch; only the spawn attempt can fail."""
        cmd = self.command_for(record)
        self.logger.debug(f"Launching {record.id}: {cmd}")

        try:
            if self.host_os == LINUX:
                launch_detached(cmd)
            else:
                launch_process(cmd, new_session=self.host_os == MACOS)
        except LaunchError as e:
            self.logger.error(f"Could not launch {record.id}: {e}")
            raise

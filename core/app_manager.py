"""
Catalog manager: lazy one-time discovery plus search, listing and launching.

The catalog and its initialized flag are shared between the startup
discovery thread, refresh requests and foreground lookups, so every read
and every state transition happens under one re-entrant lock.
"""

import logging
import threading
from datetime import datetime
from typing import Callable, Dict, List, Optional

from .app_models import AppRecord
from .app_search import rank_apps, sort_apps
from .discovery import AppDiscovery, host_platform
from .exceptions import AppNotFoundError
from .fallback_apps import provision_fallback_apps
from .process_launcher import AppLauncher


class CatalogManager:
    """Owns the in-memory application catalog for one session."""

    def __init__(
        self,
        host_os: Optional[str] = None,
        discover: Optional[Callable[[str], List[AppRecord]]] = None,
        provision_fallback: Optional[Callable[[str], List[AppRecord]]] = None,
        launcher: Optional[AppLauncher] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.host_os = host_os or host_platform()
        self.logger = logger or logging.getLogger("CatalogManager")
        self._discover = discover or AppDiscovery(logger=self.logger).discover
        self._provision_fallback = provision_fallback or (
            lambda host_os: provision_fallback_apps(host_os, log=self.logger)
        )
        self._launcher = launcher or AppLauncher(self.host_os, logger=self.logger)

        self._lock = threading.RLock()
        self._apps: List[AppRecord] = []
        self._index: Dict[str, AppRecord] = {}
        self._initialized = False

    @property
    def initialized(self) -> bool:
        with self._lock:
            return self._initialized

    def initialize(self) -> None:
        """Discover applications once; later calls are no-ops.

        Raises:
            UnsupportedPlatformError: discovery cannot run on this host
        """
        with self._lock:
            if self._initialized:
                return

            self.logger.info("Discovering installed applications...")
            apps = self._discover(self.host_os)
            if not apps:
                self.logger.info("No applications discovered, using fallback apps")
                apps = self._provision_fallback(self.host_os)

            self._set_catalog(apps)
            self._initialized = True
            self.logger.info(f"Discovered {len(self._apps)} applications")

    def refresh(self) -> None:
        """Drop the current catalog and run discovery again."""
        with self._lock:
            self._initialized = False
            self._set_catalog([])
            self.initialize()

    def get_all_apps(self) -> List[AppRecord]:
        """All apps sorted by case-insensitive display name."""
        with self._lock:
            self.initialize()
            return sort_apps(self._apps)

    def search_apps(self, query: str) -> List[AppRecord]:
        """Apps matching query, ranked; the whole catalog for an empty query."""
        with self._lock:
            self.initialize()
            return rank_apps(self._apps, query)

    def get_app(self, app_id: str) -> Optional[AppRecord]:
        with self._lock:
            self.initialize()
            return self._index.get(app_id)

    def launch_app(self, app_id: str) -> None:
        """Launch the app with app_id.

        Raises:
            AppNotFoundError: no app has that id; nothing is spawned
            LaunchError: the process could not be started
        """
        with self._lock:
            self.initialize()
            self._update_last_used(app_id)
            record = self._index.get(app_id)

        if record is None:
            self.logger.warning(f"Launch requested for unknown app {app_id}")
            raise AppNotFoundError(app_id)

        self._launcher.launch(record)

    def count(self) -> int:
        """Number of catalog entries, 0 until initialized."""
        with self._lock:
            if not self._initialized:
                return 0
            return len(self._apps)

    def _update_last_used(self, app_id: str) -> None:
        record = self._index.get(app_id)
        if record is not None:
            record.last_used_at = datetime.now()

    def _set_catalog(self, apps: List[AppRecord]) -> None:
        self._apps = list(apps)
        self._index = {}
        for app in self._apps:
            # Keep the first record for a repeated id
            self._index.setdefault(app.id, app)

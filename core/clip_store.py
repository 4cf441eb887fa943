import json
import logging
import os
import threading
from typing import Dict, List, Optional

from .app_models import ClipEntry
from .config import CLIPBOARD_CONFIG, get_config_dir


class ClipStore:
    """Durable key-value store of clip entries keyed by content hash."""

    def __init__(
        self,
        persist_path: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the clip store.

        Args:
            persist_path: Path to the JSON file; defaults to the config dir
            logger: Logger for read/write failures
        """
        self.logger = logger or logging.getLogger("ClipStore")
        if persist_path is None:
            persist_path = os.path.join(get_config_dir(), CLIPBOARD_CONFIG["store_file"])
        else:
            parent = os.path.dirname(persist_path)
            if parent:
                os.makedirs(parent, mode=0o700, exist_ok=True)

        self.persist_path = persist_path
        self._entries: Dict[str, ClipEntry] = {}
        self._lock = threading.RLock()

        self.load_from_disk()

    def put(self, entry: ClipEntry) -> bool:
        """Store entry under its hash, replacing any previous capture of the same text.

        Returns:
            True if the entry reached disk, False if the write failed
        """
        with self._lock:
            self._entries[entry.content_hash] = entry
            return self.save_to_disk()

    def get(self, content_hash: str) -> Optional[ClipEntry]:
        with self._lock:
            return self._entries.get(content_hash)

    def all(self) -> List[ClipEntry]:
        """All entries in no particular order."""
        with self._lock:
            return list(self._entries.values())

    def history(self) -> List[ClipEntry]:
        """All entries, most recent first."""
        return sorted(self.all(), key=lambda entry: entry.timestamp, reverse=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def load_from_disk(self) -> None:
        """Load entries from the JSON file, keeping whatever rows are readable."""
        with self._lock:
            self._entries = {}
            try:
                with open(self.persist_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except FileNotFoundError:
                return
            except (OSError, json.JSONDecodeError) as e:
                self.logger.warning(f"Failed to load clip history: {e}")
                return

            if not isinstance(data, dict):
                self.logger.warning("Clip history file is not a JSON object, ignoring it")
                return

            for key, row in data.items():
                try:
                    entry = ClipEntry.from_dict(row)
                except (KeyError, TypeError, ValueError) as e:
                    self.logger.warning(f"Skipping malformed clip entry {key}: {e}")
                    continue
                self._entries[entry.content_hash] = entry

            self.logger.debug(f"Loaded {len(self._entries)} clip entries")

    def save_to_disk(self) -> bool:
        """Write all entries atomically with owner-only permissions."""
        with self._lock:
            data = {key: entry.to_dict() for key, entry in self._entries.items()}
            temp_file = self.persist_path + ".tmp"
            try:
                fd = os.open(temp_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False)
                os.replace(temp_file, self.persist_path)
            except (OSError, TypeError, ValueError) as e:
                self.logger.error(f"Failed to save clip history: {e}")
                return False
            return True

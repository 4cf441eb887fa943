from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .config import CATALOG_CONFIG


@dataclass
class AppRecord:
    """One discoverable, launchable application."""

    id: str  # Desktop file name, bundle name or file base name
    name: str
    display_name: str  # Drives sorting and search
    launch_path: str  # Command line or bundle/file path, depending on OS
    description: str = ""
    icon: str = ""  # Icon name or glyph
    category: str = CATALOG_CONFIG["default_category"]
    keywords: List[str] = field(default_factory=list)
    argv: List[str] = field(default_factory=list)  # Resolved at discovery time
    last_used_at: Optional[datetime] = None

    def command(self) -> List[str]:
        """Return the argv to spawn, splitting launch_path when none was resolved."""
        if self.argv:
            return list(self.argv)
        return self.launch_path.split()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape handed to the presentation layer."""
        return {
            "id": self.id,
            "name": self.name,
            "displayName": self.display_name,
            "description": self.description,
            "icon": self.icon,
            "launchPath": self.launch_path,
            "category": self.category,
            "keywords": list(self.keywords),
            "lastUsedAt": self.last_used_at.isoformat() if self.last_used_at else None,
        }


@dataclass(frozen=True)
class ClipEntry:
    """One captured clipboard text snapshot."""

    content_hash: str  # Identity and storage key
    timestamp: int  # Milliseconds since epoch
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contentHash": self.content_hash,
            "timestamp": self.timestamp,
            "content": self.content,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClipEntry":
        return cls(
            content_hash=str(data["contentHash"]),
            timestamp=int(data["timestamp"]),
            content=str(data["content"]),
        )

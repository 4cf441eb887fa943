import hashlib
import re
import time


def content_hash(text: str) -> str:
    """SHA-256 hex digest of the UTF-8 encoded text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def unix_millis() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def standardize_spaces(text: str) -> str:
    """Collapse runs of spaces and tabs into single spaces and trim."""
    return re.sub(r"[ \t]+", " ", text).strip()


def truncate_text(text: str, length: int) -> str:
    if length <= 0:
        return ""
    return text[:length]


def preview(text: str, length: int = 10) -> str:
    """Single-line, truncated rendition of captured text for log output."""
    single_line = text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")
    return truncate_text(standardize_spaces(single_line), length)

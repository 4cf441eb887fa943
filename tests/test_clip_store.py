"""Unit tests for clip persistence"""

import json
import os
import stat
import sys
from unittest.mock import Mock, patch

# Add the parent directory to the path so we can import modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.app_models import ClipEntry
from core.clip_store import ClipStore


class TestClipStore:
    """Test the JSON key-value store"""

    def test_persists_across_instances(self, tmp_path):
        """Test entries survive reloading"""
        path = str(tmp_path / "clips.json")
        ClipStore(path, logger=Mock()).put(ClipEntry("h1", 10, "first"))

        reloaded = ClipStore(path, logger=Mock())

        assert reloaded.get("h1") == ClipEntry("h1", 10, "first")

    def test_history_newest_first(self, tmp_path):
        """Test history is sorted by timestamp descending"""
        store = ClipStore(str(tmp_path / "clips.json"), logger=Mock())
        store.put(ClipEntry("a", 1, "old"))
        store.put(ClipEntry("c", 3, "newest"))
        store.put(ClipEntry("b", 2, "middle"))

        assert [entry.content for entry in store.history()] == ["newest", "middle", "old"]

    def test_owner_only_permissions(self, tmp_path):
        """Test the store file is readable by the owner only"""
        path = str(tmp_path / "nested" / "clips.json")
        ClipStore(path, logger=Mock()).put(ClipEntry("a", 1, "x"))

        mode = stat.S_IMODE(os.stat(path).st_mode)
        assert mode & 0o077 == 0

    def test_corrupt_file_reads_empty(self, tmp_path):
        """Test unreadable JSON degrades to an empty history"""
        path = tmp_path / "clips.json"
        path.write_text("{not json")
        logger = Mock()

        store = ClipStore(str(path), logger=logger)

        assert store.history() == []
        logger.warning.assert_called()

    def test_malformed_rows_skipped(self, tmp_path):
        """Test partial results when some rows are bad"""
        path = tmp_path / "clips.json"
        path.write_text(
            json.dumps(
                {
                    "good": {"contentHash": "good", "timestamp": 5, "content": "ok"},
                    "bad": {"contentHash": "bad"},
                }
            )
        )

        store = ClipStore(str(path), logger=Mock())

        assert [entry.content for entry in store.history()] == ["ok"]

    def test_write_failure_is_logged(self, tmp_path):
        """Test write errors are reported without raising"""
        logger = Mock()
        store = ClipStore(str(tmp_path / "clips.json"), logger=logger)

        with patch("core.clip_store.os.replace", side_effect=OSError("disk full")):
            assert store.put(ClipEntry("a", 1, "x")) is False

        logger.error.assert_called()
        assert store.get("a") is not None

    def test_default_path_uses_config_dir(self, tmp_path):
        """Test PAL_CONFIG_DIR locates the store"""
        with patch.dict(os.environ, {"PAL_CONFIG_DIR": str(tmp_path / "cfg")}):
            store = ClipStore(logger=Mock())

        assert store.persist_path == str(tmp_path / "cfg" / "clips.json")

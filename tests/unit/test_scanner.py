"""
Unit tests for drop-in directory scanning.
"""

import os
import unittest
import tempfile
import shutil
from pathlib import Path
from src.syngestures.config.models import Severity
from src.syngestures.config.scanner import scan_directory


class TestScanDirectory(unittest.TestCase):
    """Tests for scan_directory."""

    def setUp(self):
        """Create temporary drop-in directory."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_dir = Path(self.temp_dir) / "syngestures.d"
        self.config_dir.mkdir()
        self.visited = []

    def tearDown(self):
        """Clean up temporary directory."""
        shutil.rmtree(self.temp_dir)

    def touch(self, name: str) -> Path:
        path = self.config_dir / name
        path.write_text("")
        return path

    def record(self, path: Path) -> None:
        self.visited.append(path.name)

    def test_missing_directory(self):
        """Test a missing directory is an empty source."""
        diagnostics = scan_directory(Path(self.temp_dir) / "nope", self.record)
        self.assertEqual(diagnostics, [])
        self.assertEqual(self.visited, [])

    def test_path_is_file(self):
        """Test a regular file in place of the directory is ignored."""
        path = Path(self.temp_dir) / "plain"
        path.write_text("")
        self.assertEqual(scan_directory(path, self.record), [])
        self.assertEqual(self.visited, [])

    def test_filters_by_suffix(self):
        """Test only .toml files are processed."""
        self.touch("a.toml")
        self.touch("b.conf")
        self.touch("c.toml.bak")
        self.touch("d.TOML")
        self.touch(".toml")

        scan_directory(self.config_dir, self.record)
        self.assertEqual(self.visited, ["a.toml"])

    def test_skips_subdirectories(self):
        """Test subdirectories are not processed or descended into."""
        nested = self.config_dir / "nested.toml"
        nested.mkdir()
        (nested / "inner.toml").write_text("")
        self.touch("a.toml")

        scan_directory(self.config_dir, self.record)
        self.assertEqual(self.visited, ["a.toml"])

    def test_file_name_order(self):
        """Test files are visited in file-name order."""
        for name in ("20-b.toml", "10-a.toml", "30-c.toml"):
            self.touch(name)

        scan_directory(self.config_dir, self.record)
        self.assertEqual(self.visited, ["10-a.toml", "20-b.toml", "30-c.toml"])

    def test_callback_failure_isolated(self):
        """Test one failing entry does not block its siblings."""
        for name in ("a.toml", "b.toml", "c.toml"):
            self.touch(name)

        def process(path: Path) -> None:
            if path.name == "b.toml":
                raise ValueError("broken")
            self.visited.append(path.name)

        diagnostics = scan_directory(self.config_dir, process)

        self.assertEqual(self.visited, ["a.toml", "c.toml"])
        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].severity, Severity.ENTRY)
        self.assertEqual(diagnostics[0].path, self.config_dir / "b.toml")
        self.assertEqual(diagnostics[0].cause, "broken")

    def test_symlink_to_directory_is_processed(self):
        """Test symlinked directories reach the callback."""
        target = Path(self.temp_dir) / "target"
        target.mkdir()
        os.symlink(target, self.config_dir / "link.toml")

        scan_directory(self.config_dir, self.record)
        self.assertEqual(self.visited, ["link.toml"])

    def test_custom_suffix(self):
        """Test the suffix is configurable."""
        self.touch("a.toml")
        self.touch("b.conf")

        scan_directory(self.config_dir, self.record, suffix=".conf")
        self.assertEqual(self.visited, ["b.conf"])


if __name__ == "__main__":
    unittest.main()

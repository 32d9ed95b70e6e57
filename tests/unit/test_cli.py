"""
Unit tests for the syngestures-ctl command-line tool.
"""

import io
import json
import unittest
import tempfile
import shutil
from contextlib import redirect_stdout, redirect_stderr
from pathlib import Path
from unittest import mock
from src.syngestures.cli import main
from src.syngestures.cli.syngestures_ctl import create_parser, store_to_dict
from src.syngestures.config import Action, ConfigurationStore
from src.syngestures.events import Direction, Gesture, GestureType


CONFIG = """
[[device]]
device = "touchpad0"
gestures = [
    { type = "swipe", direction = "left", fingers = 3, execute = "workspace-prev" },
    { type = "swipe", direction = "down", fingers = 4 },
]
"""


class TestSyngesturesCtl(unittest.TestCase):
    """Tests for syngestures-ctl commands."""

    def setUp(self):
        """Create temporary prefix with a system configuration file."""
        self.temp_dir = tempfile.mkdtemp()
        self.prefix = Path(self.temp_dir) / "usr"
        (self.prefix / "etc").mkdir(parents=True)
        self.config_home = Path(self.temp_dir) / "xdg"

        patcher = mock.patch.dict(
            "os.environ", {"XDG_CONFIG_HOME": str(self.config_home)})
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        """Clean up temporary directory."""
        shutil.rmtree(self.temp_dir)

    def run_ctl(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = main(["--prefix", str(self.prefix), *argv])
        return status, out.getvalue(), err.getvalue()

    def test_parser_commands(self):
        """Test the parser knows every command."""
        parser = create_parser()
        self.assertEqual(parser.parse_args(["paths"]).command, "paths")
        self.assertEqual(parser.parse_args(["show"]).command, "show")
        args = parser.parse_args(["check", "a.toml", "b.toml"])
        self.assertEqual(args.files, ["a.toml", "b.toml"])

    def test_no_command(self):
        """Test running without a command prints help."""
        status, out, _ = self.run_ctl()
        self.assertEqual(status, 0)
        self.assertIn("syngestures-ctl", out)

    def test_paths(self):
        """Test listing search paths with their status."""
        (self.prefix / "etc" / "syngestures.toml").write_text(CONFIG)

        status, out, _ = self.run_ctl("--json", "paths")
        paths = json.loads(out)

        self.assertEqual(status, 0)
        self.assertEqual(len(paths), 4)
        self.assertEqual(paths[0]["status"], "present")
        self.assertEqual(paths[1]["status"], "missing")
        self.assertEqual(paths[2]["location"],
                         str(self.config_home / "syngestures.toml"))

    def test_show_json(self):
        """Test showing the resolved configuration as JSON."""
        (self.prefix / "etc" / "syngestures.toml").write_text(CONFIG)

        status, out, _ = self.run_ctl("--json", "show")
        data = json.loads(out)

        self.assertEqual(status, 0)
        # Gestures are listed in sorted order
        down, left = data["touchpad0"]
        self.assertEqual(down["direction"], "down")
        self.assertNotIn("execute", down)
        self.assertEqual(left["direction"], "left")
        self.assertEqual(left["execute"], "workspace-prev")

    def test_show_text(self):
        """Test showing the resolved configuration as text."""
        (self.prefix / "etc" / "syngestures.toml").write_text(CONFIG)

        status, out, _ = self.run_ctl("show")

        self.assertEqual(status, 0)
        self.assertIn("touchpad0:", out)
        self.assertIn("swipe-left/3: execute 'workspace-prev'", out)
        self.assertIn("swipe-down/4: none", out)

    def test_show_empty(self):
        """Test an empty configuration is not a failure."""
        with self.assertLogs("syngestures", level="WARNING") as logs:
            status, out, _ = self.run_ctl("show")

        self.assertEqual(status, 0)
        self.assertIn("No devices configured", out)
        self.assertIn("No configuration found!", logs.output[0])

    def test_check(self):
        """Test checking good and bad files."""
        good = Path(self.temp_dir) / "good.toml"
        good.write_text(CONFIG)
        bad = Path(self.temp_dir) / "bad.toml"
        bad.write_text("devices = 1")

        status, out, err = self.run_ctl("check", str(good))
        self.assertEqual(status, 0)
        self.assertIn("OK", out)

        status, out, err = self.run_ctl("check", str(good), str(bad))
        self.assertEqual(status, 1)
        self.assertIn("bad.toml", err)

    def test_check_missing_file(self):
        """Test checking a missing file fails."""
        status, _, err = self.run_ctl("check", str(Path(self.temp_dir) / "nope.toml"))
        self.assertEqual(status, 1)
        self.assertIn("nope.toml", err)


class TestStoreToDict(unittest.TestCase):
    """Tests for the JSON view of a resolved store."""

    def test_store_to_dict(self):
        """Test devices, fields and optional execute entries."""
        store = ConfigurationStore()
        store.bind("touchpad0", Gesture(GestureType.SWIPE, Direction.LEFT, 3),
                   Action.execute("prev"))
        store.bind("touchpad0", Gesture(GestureType.SWIPE, Direction.RIGHT, 3),
                   Action.none())
        store.add_device("touchpad1")

        data = store_to_dict(store)

        self.assertEqual(data["touchpad1"], [])
        self.assertEqual(data["touchpad0"], [
            {"type": "swipe", "direction": "left", "fingers": 3, "execute": "prev"},
            {"type": "swipe", "direction": "right", "fingers": 3},
        ])


if __name__ == "__main__":
    unittest.main()

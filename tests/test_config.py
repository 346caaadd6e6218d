from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazypicker import config
from lazypicker.layout import BorderStyle, LayoutConfig


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_or_malformed_config_loads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazypicker.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                config_path.write_text("{not json", encoding="utf-8")
                self.assertEqual(config.load_config(), {})
                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

    def test_layout_defaults_overlay_valid_fields_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(
                json.dumps(
                    {
                        "layout": {
                            "border": "none",
                            "width_ratio": 0.4,
                            "height_ratio": "tall",
                            "auto_width": False,
                            "auto_height": "yes",
                        }
                    }
                ),
                encoding="utf-8",
            )
            with mock.patch("lazypicker.config.CONFIG_PATH", config_path):
                layout = config.load_layout_defaults()

        self.assertIs(layout.border, BorderStyle.NONE)
        self.assertEqual(layout.width_ratio, 0.4)
        self.assertIsNone(layout.height_ratio)
        self.assertFalse(layout.auto_width)
        self.assertTrue(layout.auto_height)

    def test_custom_border_without_glyphs_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(json.dumps({"layout": {"border": "custom"}}), encoding="utf-8")
            base = LayoutConfig(border=BorderStyle.ROUNDED)
            with mock.patch("lazypicker.config.CONFIG_PATH", config_path):
                layout = config.load_layout_defaults(base)

        self.assertIs(layout.border, BorderStyle.ROUNDED)

    def test_project_commands_round_trip_per_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("lazypicker.config.CONFIG_PATH", config_path):
                config.save_project_commands("/proj/a", ["./a.sh", "", "make"], 1)
                config.save_project_commands("/proj/b", ["./b.sh"], None)

                self.assertEqual(config.load_project_commands("/proj/a"), (["./a.sh", "make"], 1))
                self.assertEqual(config.load_project_commands("/proj/b"), (["./b.sh"], None))
                self.assertIsNone(config.load_project_commands("/proj/c"))

    def test_out_of_range_default_index_is_dropped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(
                json.dumps({"project_commands": {"/p": {"commands": ["x", 3], "default_index": 5}}}),
                encoding="utf-8",
            )
            with mock.patch("lazypicker.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_project_commands("/p"), (["x"], None))

    def test_unwritable_config_does_not_raise(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")
            with mock.patch("lazypicker.config.CONFIG_PATH", blocker / "config.json"):
                with self.assertLogs("lazypicker.config", level="WARNING"):
                    config.save_config({"layout": {}})


if __name__ == "__main__":
    unittest.main()

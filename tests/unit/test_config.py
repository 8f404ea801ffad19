import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from avatar_core.config import AppConfig, load_config, save_config


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing.json"
            cfg = load_config(path)
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual((cfg.render.width, cfg.render.height), (200, 200))
            self.assertEqual(cfg.render.font_size, 80.0)
            self.assertEqual(cfg.render.strategy, "advance")
            self.assertEqual(cfg.output.filename, "avatar.png")

    def test_load_default_when_corrupt(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "config.json"
            cfg = load_config(path)
            cfg.render.width = 128
            cfg.render.background = "#336699"
            cfg.render.strategy = "measured"
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.render.width, 128)
            self.assertEqual(reloaded.render.background, "#336699")
            self.assertEqual(reloaded.render.strategy, "measured")

    def test_migrate_v1_shape(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            old = {"width": 64, "height": 48, "font_size": 20, "font_path": "/fonts/a.ttf"}
            path.write_text(json.dumps(old), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.config_version, 2)
            self.assertEqual((cfg.render.width, cfg.render.height), (64, 48))
            self.assertEqual(cfg.render.font_size, 20.0)
            self.assertEqual(cfg.render.font_path, "/fonts/a.ttf")

    def test_normalizes_bad_values(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "config_version": 2,
                "render": {
                    "width": 0,
                    "height": 99999,
                    "font_size": -4,
                    "foreground": "not-a-color",
                    "strategy": "wild",
                },
                "logging": {"keep_log_files": 0},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.render.width, 1)
            self.assertEqual(cfg.render.height, 4096)
            self.assertEqual(cfg.render.font_size, 80.0)
            self.assertEqual(cfg.render.foreground, "#000000")
            self.assertEqual(cfg.render.strategy, "advance")
            self.assertEqual(cfg.logging.keep_log_files, 2)

    def test_tolerates_malformed_sections(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {"config_version": 2, "render": None, "output": [1, 2], "logging": {"keep_log_files": "many"}}
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.render.width, 200)
            self.assertEqual(cfg.output.filename, "avatar.png")
            self.assertEqual(cfg.logging.keep_log_files, 7)

    def test_tolerates_bad_version(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"config_version": "x", "width": 90}), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.config_version, 2)
            self.assertEqual(cfg.render.width, 90)

    def test_to_avatar_config(self):
        cfg = AppConfig()
        cfg.render.foreground = "#FF0000"
        avatar = cfg.render.to_avatar_config("/fonts/b.ttf")
        self.assertEqual(avatar.font_path, "/fonts/b.ttf")
        self.assertEqual(avatar.foreground, (255, 0, 0, 255))
        self.assertEqual(avatar.background, (255, 255, 255, 255))
        avatar.validate()


if __name__ == "__main__":
    unittest.main()

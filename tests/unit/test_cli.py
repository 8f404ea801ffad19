import io
import json
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "cli"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from font_fixture import bundled_font_bytes

from avatar_app.cli import build_parser
from avatar_core.config import AppConfig


class CliTests(unittest.TestCase):
    def test_render_command(self):
        parser = build_parser()
        args = parser.parse_args(["render", "AB", "--font", "a.ttf", "--width", "64", "--bg", "#336699"])
        self.assertEqual(args.command, "render")
        self.assertEqual(args.text, "AB")
        self.assertEqual(args.font, "a.ttf")
        self.assertEqual(args.width, 64)
        self.assertIsNone(args.height)
        self.assertEqual(args.bg, "#336699")
        self.assertIsNone(args.strategy)

    def test_render_strategy_choice(self):
        parser = build_parser()
        args = parser.parse_args(["render", "AB", "--strategy", "measured"])
        self.assertEqual(args.strategy, "measured")

    def test_render_rejects_bad_values(self):
        parser = build_parser()
        for argv in (
            ["render", "AB", "--width", "0"],
            ["render", "AB", "--fg", "not-a-color"],
            ["render", "AB", "--strategy", "random"],
        ):
            with self.assertRaises(SystemExit):
                parser.parse_args(argv)

    def test_config_commands(self):
        parser = build_parser()
        args = parser.parse_args(["config", "init", "--force"])
        self.assertEqual(args.command, "config")
        self.assertEqual(args.config_cmd, "init")
        self.assertTrue(args.force)
        args = parser.parse_args(["config", "show"])
        self.assertEqual(args.config_cmd, "show")


def _run(argv, cfg=None):
    args = build_parser().parse_args(argv)
    out = io.StringIO()
    with patch("avatar_app.cli.load_config", return_value=cfg or AppConfig()), redirect_stdout(out):
        code = args.func(args)
    return code, json.loads(out.getvalue())


class CliCommandTests(unittest.TestCase):
    def setUp(self):
        self.font_bytes = bundled_font_bytes()
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def _font(self):
        if self.font_bytes is None:
            self.skipTest("Pillow FreeType support not available")
        path = self.root / "bundled.ttf"
        path.write_bytes(self.font_bytes)
        return str(path)

    def test_render_writes_png_and_summary(self):
        font = self._font()
        out = self.root / "ab.png"
        code, payload = _run(["render", "AB", "--font", font, "--out", str(out), "--width", "64", "--bg", "#336699"])
        self.assertEqual(code, 0)
        self.assertTrue(payload["success"])
        self.assertEqual(payload["path"], str(out))
        self.assertEqual((payload["width"], payload["height"]), (64, 200))
        self.assertEqual(payload["background"], "#336699")
        self.assertEqual(payload["strategy"], "advance")
        self.assertTrue(out.read_bytes().startswith(b"\x89PNG"))

    def test_render_uses_configured_output_location(self):
        font = self._font()
        cfg = AppConfig()
        cfg.output.directory = str(self.root)
        cfg.output.filename = "from-config.png"
        cfg.render.strategy = "measured"
        code, payload = _run(["render", "AB", "--font", font], cfg)
        self.assertEqual(code, 0)
        self.assertEqual(payload["path"], str(self.root / "from-config.png"))
        self.assertEqual(payload["strategy"], "measured")
        self.assertTrue((self.root / "from-config.png").exists())

    def test_render_missing_font_exits_2(self):
        out = self.root / "ab.png"
        code, payload = _run(["render", "AB", "--font", str(self.root / "missing.ttf"), "--out", str(out)])
        self.assertEqual(code, 2)
        self.assertFalse(payload["success"])
        self.assertEqual(payload["operation"], "open font file")
        self.assertFalse(out.exists())

    def test_render_without_font_exits_2(self):
        code, payload = _run(["render", "AB"])
        self.assertEqual(code, 2)
        self.assertFalse(payload["success"])

    def test_config_init(self):
        path = self.root / "settings" / "config.json"
        code, payload = _run(["config", "init", "--path", str(path)])
        self.assertEqual(code, 0)
        self.assertEqual(payload["path"], str(path))
        self.assertEqual(json.loads(path.read_text(encoding="utf-8"))["config_version"], 2)

        code, payload = _run(["config", "init", "--path", str(path)])
        self.assertEqual(code, 2)
        self.assertFalse(payload["success"])

        code, _payload = _run(["config", "init", "--path", str(path), "--force"])
        self.assertEqual(code, 0)


if __name__ == "__main__":
    unittest.main()

"""CLI entrypoints for rendering avatars and managing settings."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path

from avatar_core import AppConfig, load_config, save_config
from avatar_core.config import config_path
from avatar_core.logging_setup import configure_logging, get_logger
from avatar_renderer import STRATEGIES, AvatarBuilder, AvatarError, rgba_to_hex, to_rgba


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _parse_size(value: str) -> int:
    size = int(value)
    if size <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return size


def cmd_render(args: argparse.Namespace) -> int:
    cfg = load_config()
    defaults = cfg.render
    font_path = args.font or defaults.font_path
    if not font_path:
        _print_json({"success": False, "error": "no font given; pass --font or set render.font_path"})
        return 2

    avatar_cfg = defaults.to_avatar_config(font_path)
    strategy = STRATEGIES[args.strategy or defaults.strategy]()

    if args.out:
        out = Path(args.out).expanduser()
    else:
        out_dir = Path(cfg.output.directory).expanduser() if cfg.output.directory else Path.cwd()
        out = out_dir / cfg.output.filename

    try:
        builder = AvatarBuilder(font_path, strategy, config=avatar_cfg)
        if args.width or args.height:
            builder.set_avatar_size(args.width or avatar_cfg.width, args.height or avatar_cfg.height)
        if args.font_size:
            builder.set_font_size(args.font_size)
        if args.fg:
            builder.set_foreground(args.fg)
        if args.bg:
            builder.set_background(args.bg)
        path = builder.generate_image_and_save(args.text, out)
    except AvatarError as exc:
        _print_json({"success": False, "operation": exc.operation, "error": str(exc)})
        return 2

    final = builder.config
    _print_json(
        {
            "success": True,
            "path": str(path),
            "width": final.width,
            "height": final.height,
            "font_size": final.font_size,
            "foreground": rgba_to_hex(final.foreground),
            "background": rgba_to_hex(final.background),
            "strategy": args.strategy or defaults.strategy,
        }
    )
    return 0


def cmd_config_show(_args: argparse.Namespace) -> int:
    cfg = load_config()
    payload = asdict(cfg)
    payload["path"] = str(config_path())
    _print_json(payload)
    return 0


def cmd_config_init(args: argparse.Namespace) -> int:
    path = Path(args.path).expanduser() if args.path else config_path()
    if path.exists() and not args.force:
        _print_json({"success": False, "error": f"{path} exists; use --force to overwrite"})
        return 2
    saved = save_config(AppConfig(), path)
    _print_json({"success": True, "path": str(saved)})
    return 0


def _color_arg(value: str) -> str:
    try:
        to_rgba(value)
    except AvatarError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="avatargen", description="Text avatar generator")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Render TEXT to a PNG avatar")
    render_cmd.add_argument("text")
    render_cmd.add_argument("--font", default=None, help="Path to a TrueType/OpenType font")
    render_cmd.add_argument("--out", default=None, help="Output PNG path")
    render_cmd.add_argument("--width", type=_parse_size, default=None)
    render_cmd.add_argument("--height", type=_parse_size, default=None)
    render_cmd.add_argument("--font-size", type=float, default=None)
    render_cmd.add_argument("--fg", type=_color_arg, default=None, help="Foreground color, e.g. '#FFFFFF'")
    render_cmd.add_argument("--bg", type=_color_arg, default=None, help="Background color, e.g. '#336699'")
    render_cmd.add_argument("--strategy", choices=sorted(STRATEGIES), default=None)
    render_cmd.set_defaults(func=cmd_render)

    config_cmd = sub.add_parser("config", help="Inspect or create the settings file")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    show_cmd = config_sub.add_parser("show", help="Print effective settings")
    show_cmd.set_defaults(func=cmd_config_show)
    init_cmd = config_sub.add_parser("init", help="Write the default settings file")
    init_cmd.add_argument("--path", default=None)
    init_cmd.add_argument("--force", action="store_true")
    init_cmd.set_defaults(func=cmd_config_init)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(keep_files=cfg.logging.keep_log_files, console=cfg.logging.console)
    parser = build_parser()
    args = parser.parse_args(argv)
    get_logger().info(f"command {args.command}", extra={"event": "cli_command"})
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())

"""Persistent avatargen settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from PIL import ImageColor

from avatar_renderer.models import AvatarConfig

CONFIG_VERSION = 2
MAX_SIDE = 4096


@dataclass
class RenderDefaults:
    width: int = 200
    height: int = 200
    font_size: float = 80.0
    font_path: str | None = None
    foreground: str = "#000000"
    background: str = "#FFFFFF"
    strategy: str = "advance"

    def to_avatar_config(self, font_path: str | None = None) -> AvatarConfig:
        return AvatarConfig(
            font_path=font_path or self.font_path or "",
            width=self.width,
            height=self.height,
            font_size=self.font_size,
            foreground=ImageColor.getcolor(self.foreground, "RGBA"),
            background=ImageColor.getcolor(self.background, "RGBA"),
        )


@dataclass
class OutputConfig:
    directory: str | None = None
    filename: str = "avatar.png"


@dataclass
class LoggingConfig:
    keep_log_files: int = 7
    console: bool = False


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    render: RenderDefaults = field(default_factory=RenderDefaults)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "Avatargen"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Avatargen"
    return Path.home() / ".config" / "avatargen"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _valid_color(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        ImageColor.getcolor(value, "RGBA")
    except ValueError:
        return False
    return True


def _normalize_render(cfg: AppConfig) -> None:
    r = cfg.render
    defaults = RenderDefaults()
    try:
        r.width = max(1, min(MAX_SIDE, int(r.width)))
        r.height = max(1, min(MAX_SIDE, int(r.height)))
    except (TypeError, ValueError):
        r.width, r.height = defaults.width, defaults.height
    try:
        r.font_size = float(r.font_size)
    except (TypeError, ValueError):
        r.font_size = defaults.font_size
    if not r.font_size > 0:
        r.font_size = defaults.font_size
    if not _valid_color(r.foreground):
        r.foreground = defaults.foreground
    if not _valid_color(r.background):
        r.background = defaults.background
    if r.strategy not in ("advance", "measured"):
        r.strategy = defaults.strategy


def _normalize_logging(cfg: AppConfig) -> None:
    cfg.logging.keep_log_files = max(2, _as_int(cfg.logging.keep_log_files, LoggingConfig().keep_log_files))


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = _as_int(raw.get("config_version", 1), 1)
    data = dict(raw)

    if version < 2:
        # v1 kept render settings flat at the top level.
        render = dict(_section(data, "render"))
        for key in ("width", "height", "font_size", "font_path", "foreground", "background"):
            if key in data:
                render.setdefault(key, data.pop(key))
        data["render"] = render
        data.setdefault("output", {})
        data.setdefault("logging", {})
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=_as_int(data.get("config_version"), CONFIG_VERSION),
        render=_merge(RenderDefaults, _section(data, "render")),
        output=_merge(OutputConfig, _section(data, "output")),
        logging=_merge(LoggingConfig, _section(data, "logging")),
    )

    _normalize_render(cfg)
    _normalize_logging(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path

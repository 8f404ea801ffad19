"""Typed renderer models."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import NamedTuple

from .errors import ConfigurationError

Color = tuple[int, int, int, int]

DEFAULT_WIDTH = 200
DEFAULT_HEIGHT = 200
DEFAULT_FONT_SIZE = 80.0
WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)


class AnchorPoint(NamedTuple):
    x: int
    y: int


@dataclass
class AvatarConfig:
    font_path: str = ""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    font_size: float = DEFAULT_FONT_SIZE
    foreground: Color = BLACK
    background: Color = WHITE

    def validate(self) -> None:
        validate_dimensions(self.width, self.height)
        validate_font_size(self.font_size)

    def copy(self) -> "AvatarConfig":
        return replace(self)


def validate_dimensions(width: int, height: int) -> None:
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError("validate size", f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise ConfigurationError("validate size", f"{name} must be positive, got {value}")


def validate_font_size(size: float) -> None:
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        raise ConfigurationError("validate font size", f"font size must be a number, got {size!r}")
    if not math.isfinite(size) or size <= 0:
        raise ConfigurationError("validate font size", f"font size must be positive, got {size}")

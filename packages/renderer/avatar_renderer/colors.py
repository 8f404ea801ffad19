"""Color conversion helpers."""

from __future__ import annotations

from typing import Union

from PIL import ImageColor

from .errors import ConfigurationError
from .models import Color

ColorLike = Union[str, tuple[int, int, int], tuple[int, int, int, int]]


def hex_to_rgba(value: int) -> Color:
    """Decode a packed ``0xRRGGBB`` integer; the top byte is ignored."""
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 255)


def to_rgba(value: ColorLike) -> Color:
    if isinstance(value, str):
        try:
            return ImageColor.getcolor(value, "RGBA")  # type: ignore[return-value]
        except ValueError as exc:
            raise ConfigurationError("parse color", str(exc)) from exc

    try:
        channels = tuple(value)
    except TypeError as exc:
        raise ConfigurationError("parse color", f"unsupported color value {value!r}") from exc
    if len(channels) not in (3, 4):
        raise ConfigurationError("parse color", f"expected 3 or 4 channels, got {len(channels)}")
    for c in channels:
        if isinstance(c, bool) or not isinstance(c, int) or not 0 <= c <= 255:
            raise ConfigurationError("parse color", f"channel out of range: {c!r}")
    if len(channels) == 3:
        channels = channels + (255,)
    return channels  # type: ignore[return-value]


def rgba_to_hex(color: Color) -> str:
    r, g, b, a = color
    if a == 255:
        return f"#{r:02X}{g:02X}{b:02X}"
    return f"#{r:02X}{g:02X}{b:02X}{a:02X}"

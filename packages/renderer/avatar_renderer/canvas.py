"""Canvas construction and pixel inspection."""

from __future__ import annotations

import numpy as np
from PIL import Image

from .models import Color, validate_dimensions


def build_canvas(width: int, height: int, background: Color) -> Image.Image:
    validate_dimensions(width, height)
    return Image.new("RGBA", (width, height), tuple(background))


def ink_bounds(image: Image.Image, background: Color) -> tuple[int, int, int, int] | None:
    """Bounding box ``(left, top, right, bottom)`` of non-background pixels.

    ``right`` and ``bottom`` are exclusive, matching Pillow's box convention.
    Returns None for an untouched canvas.
    """
    arr = np.asarray(image.convert("RGBA"), dtype=np.uint8)
    mask = np.any(arr != np.asarray(background, dtype=np.uint8), axis=2)
    if not mask.any():
        return None
    rows = np.flatnonzero(mask.any(axis=1))
    cols = np.flatnonzero(mask.any(axis=0))
    return int(cols[0]), int(rows[0]), int(cols[-1]) + 1, int(rows[-1]) + 1


def is_uniform(image: Image.Image, color: Color) -> bool:
    return ink_bounds(image, color) is None

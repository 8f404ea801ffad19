"""Font loading and the cached glyph-drawing context."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Callable

import freetype
from PIL import Image

from .errors import AssetNotFoundError, AssetUnreadableError, MalformedFontError, RenderError
from .models import AnchorPoint, Color

DPI = 72
HINTING_NONE = "none"
HINTING_FULL = "full"

FontLoader = Callable[[str], bytes]

log = logging.getLogger("avatargen.renderer")


def load_font_bytes(path: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except FileNotFoundError as exc:
        raise AssetNotFoundError("open font file", f"{path}: {exc.strerror}") from exc
    except OSError as exc:
        raise AssetUnreadableError("read font file", f"{path}: {exc}") from exc


def glyph_advance_width(font_size: float, dpi: int = DPI) -> int:
    """Approximate horizontal advance in whole pixels for ``font_size`` points.

    The size is scaled to 26.6 fixed point at ``dpi`` and the fraction is
    dropped. This does not look at any actual glyph.
    """
    fixed = int(font_size * dpi * 64 / 72)
    return fixed >> 6


def parse_font(data: bytes, font_size: float, dpi: int = DPI) -> freetype.Face:
    try:
        face = freetype.Face(BytesIO(data))
        face.set_char_size(int(round(font_size * 64)), 0, dpi, dpi)
    except (freetype.FT_Exception, OSError, ValueError) as exc:
        raise MalformedFontError("parse font file", str(exc)) from exc
    return face


@dataclass
class _Glyph:
    x: int
    y: int
    mask: Image.Image | None


@dataclass
class FontContext:
    face: freetype.Face
    font_size: float
    source: Color
    dpi: int = DPI
    hinting: str = HINTING_NONE
    destination: Image.Image | None = field(default=None, repr=False)
    clip: tuple[int, int, int, int] = (0, 0, 0, 0)

    @property
    def advance_width(self) -> int:
        return glyph_advance_width(self.font_size, self.dpi)

    @property
    def load_flags(self) -> int:
        if self.hinting == HINTING_NONE:
            return freetype.FT_LOAD_RENDER | freetype.FT_LOAD_NO_HINTING
        return freetype.FT_LOAD_RENDER | freetype.FT_LOAD_DEFAULT

    def retarget(self, canvas: Image.Image) -> None:
        """Point drawing at ``canvas`` and clip to its full bounds."""
        self.destination = canvas
        self.clip = (0, 0, canvas.width, canvas.height)

    def _layout(self, text: str, origin: AnchorPoint) -> tuple[list[_Glyph], int]:
        face = self.face
        flags = self.load_flags
        pen = origin.x * 64
        prev = None
        glyphs: list[_Glyph] = []
        for ch in text:
            if prev is not None and face.has_kerning:
                pen += face.get_kerning(prev, ch).x
            face.load_char(ch, flags)
            slot = face.glyph
            bitmap = slot.bitmap
            mask = None
            if bitmap.width > 0 and bitmap.rows > 0:
                mask = Image.frombytes(
                    "L", (bitmap.width, bitmap.rows), bytes(bitmap.buffer), "raw", "L", abs(bitmap.pitch)
                )
            glyphs.append(_Glyph((pen >> 6) + slot.bitmap_left, origin.y - slot.bitmap_top, mask))
            pen += slot.advance.x
            prev = ch
        return glyphs, pen >> 6

    def measure(self, text: str) -> tuple[int, int, int, int] | None:
        """Ink box of ``text`` drawn with its baseline start at (0, 0)."""
        try:
            glyphs, _end = self._layout(text, AnchorPoint(0, 0))
        except (freetype.FT_Exception, OSError, ValueError) as exc:
            raise RenderError("measure string", str(exc)) from exc
        boxes = [(g.x, g.y, g.x + g.mask.width, g.y + g.mask.height) for g in glyphs if g.mask is not None]
        if not boxes:
            return None
        return (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )

    def draw_string(self, text: str, anchor: AnchorPoint) -> AnchorPoint:
        """Rasterize ``text`` with its baseline starting at ``anchor``.

        Returns the pen position after the last glyph.
        """
        dest = self.destination
        if dest is None:
            raise RenderError("draw string", "font context has no destination canvas")

        try:
            glyphs, end_x = self._layout(text, anchor)
            cx0, cy0, cx1, cy1 = self.clip
            for g in glyphs:
                if g.mask is None:
                    continue
                left, top = max(g.x, cx0), max(g.y, cy0)
                right, bottom = min(g.x + g.mask.width, cx1), min(g.y + g.mask.height, cy1)
                if right <= left or bottom <= top:
                    continue
                mask = g.mask.crop((left - g.x, top - g.y, right - g.x, bottom - g.y))
                dest.paste(tuple(self.source), (left, top), mask)
        except (freetype.FT_Exception, OSError, ValueError) as exc:
            raise RenderError("draw string", str(exc)) from exc

        return AnchorPoint(end_x, anchor.y)


def prepare_font_context(
    font_path: str,
    font_size: float,
    foreground: Color,
    canvas: Image.Image,
    loader: FontLoader = load_font_bytes,
) -> FontContext:
    data = loader(font_path)
    face = parse_font(data, font_size)
    ctx = FontContext(face=face, font_size=font_size, source=foreground)
    ctx.retarget(canvas)
    log.debug(
        f"font context ready path={font_path} size={font_size}",
        extra={"event": "font_context_built"},
    )
    return ctx

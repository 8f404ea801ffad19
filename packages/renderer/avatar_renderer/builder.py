"""Avatar builder: renders a text label centered on a solid canvas as PNG."""

from __future__ import annotations

import logging
import os
from io import BytesIO
from pathlib import Path
from typing import Callable

from PIL import Image

from .canvas import build_canvas
from .centering import CenteringStrategy
from .colors import ColorLike, hex_to_rgba, to_rgba
from .errors import AvatarError, EncodeError, InvalidInputError, OutputWriteError, RenderError
from .fonts import FontContext, FontLoader, glyph_advance_width, load_font_bytes, prepare_font_context
from .models import AnchorPoint, AvatarConfig, validate_dimensions, validate_font_size

BuilderOption = Callable[[AvatarConfig], None]

log = logging.getLogger("avatargen.renderer")


def with_size(width: int, height: int) -> BuilderOption:
    def apply(cfg: AvatarConfig) -> None:
        cfg.width, cfg.height = width, height

    return apply


def with_font_size(size: float) -> BuilderOption:
    def apply(cfg: AvatarConfig) -> None:
        cfg.font_size = size

    return apply


def with_foreground(color: ColorLike) -> BuilderOption:
    def apply(cfg: AvatarConfig) -> None:
        cfg.foreground = to_rgba(color)

    return apply


def with_background(color: ColorLike) -> BuilderOption:
    def apply(cfg: AvatarConfig) -> None:
        cfg.background = to_rgba(color)

    return apply


def with_foreground_hex(value: int) -> BuilderOption:
    def apply(cfg: AvatarConfig) -> None:
        cfg.foreground = hex_to_rgba(value)

    return apply


def with_background_hex(value: int) -> BuilderOption:
    def apply(cfg: AvatarConfig) -> None:
        cfg.background = hex_to_rgba(value)

    return apply


class AvatarBuilder:
    """Draws ``text`` onto a fresh canvas per call, reusing one parsed font.

    The font context is built on first use and cached. Any setter drops it so
    the next call sees the new settings. Not safe for concurrent use.
    """

    def __init__(
        self,
        font_path: str,
        strategy: CenteringStrategy,
        config: AvatarConfig | None = None,
        font_loader: FontLoader = load_font_bytes,
    ) -> None:
        cfg = config.copy() if config is not None else AvatarConfig()
        cfg.font_path = str(font_path)
        cfg.validate()
        self._config = cfg
        self._strategy = strategy
        self._font_loader = font_loader
        self._ctx: FontContext | None = None

    @classmethod
    def with_options(
        cls,
        font_path: str,
        strategy: CenteringStrategy,
        *options: BuilderOption,
        font_loader: FontLoader = load_font_bytes,
    ) -> "AvatarBuilder":
        cfg = AvatarConfig(font_path=str(font_path))
        for opt in options:
            opt(cfg)
        return cls(font_path, strategy, config=cfg, font_loader=font_loader)

    @property
    def config(self) -> AvatarConfig:
        return self._config.copy()

    @property
    def font_context(self) -> FontContext | None:
        return self._ctx

    def _invalidate(self) -> None:
        if self._ctx is not None:
            log.debug("font context invalidated", extra={"event": "font_context_invalidated"})
        self._ctx = None

    def set_foreground(self, color: ColorLike) -> None:
        self._config.foreground = to_rgba(color)
        self._invalidate()

    def set_background(self, color: ColorLike) -> None:
        self._config.background = to_rgba(color)
        self._invalidate()

    def set_foreground_hex(self, value: int) -> None:
        self._config.foreground = hex_to_rgba(value)
        self._invalidate()

    def set_background_hex(self, value: int) -> None:
        self._config.background = hex_to_rgba(value)
        self._invalidate()

    def set_font_size(self, size: float) -> None:
        validate_font_size(size)
        self._config.font_size = size
        self._invalidate()

    def set_avatar_size(self, width: int, height: int) -> None:
        validate_dimensions(width, height)
        self._config.width, self._config.height = width, height
        self._invalidate()

    def glyph_advance_width(self) -> int:
        return glyph_advance_width(self._config.font_size)

    def generate_image(self, text: str) -> bytes:
        try:
            return self._generate(text)
        except AvatarError as exc:
            log.error(f"generate failed: {exc}", extra={"event": "generate_failed"})
            raise

    def _generate(self, text: str) -> bytes:
        if not text:
            raise InvalidInputError("generate image", "text must not be empty")

        cfg = self._config
        canvas = build_canvas(cfg.width, cfg.height, cfg.background)

        if self._ctx is None:
            self._ctx = prepare_font_context(
                cfg.font_path, cfg.font_size, cfg.foreground, canvas, loader=self._font_loader
            )
        else:
            self._ctx.retarget(canvas)

        anchor = self._strategy(text, cfg.copy(), self._ctx)
        try:
            anchor = AnchorPoint(int(anchor[0]), int(anchor[1]))
        except (TypeError, ValueError, IndexError) as exc:
            raise RenderError("calculate anchor", f"strategy returned {anchor!r}") from exc

        self._ctx.draw_string(text, anchor)
        data = encode_png(canvas)
        log.info(
            f"avatar generated text_len={len(text)} size={cfg.width}x{cfg.height} bytes={len(data)}",
            extra={"event": "avatar_generated"},
        )
        return data

    def generate_image_and_save(self, text: str, output_path: str | os.PathLike[str]) -> Path:
        data = self.generate_image(text)
        path = Path(output_path)
        try:
            write_output(data, path)
        except OutputWriteError as exc:
            log.error(f"save failed: {exc}", extra={"event": "save_failed"})
            raise
        log.info(f"avatar saved path={path}", extra={"event": "avatar_saved"})
        return path


def encode_png(canvas: Image.Image) -> bytes:
    buf = BytesIO()
    try:
        canvas.save(buf, format="PNG")
    except (OSError, ValueError) as exc:
        raise EncodeError("png encode", str(exc)) from exc
    return buf.getvalue()


def write_output(data: bytes, path: Path) -> None:
    """Write ``data`` to ``path`` through a sibling temp file.

    An existing file at ``path`` is only replaced once the new bytes are
    fully written and flushed; on failure the temp file is removed.
    """
    tmp = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    try:
        fh = tmp.open("wb")
    except OSError as exc:
        raise OutputWriteError("create file", str(exc)) from exc

    step = "write bytes to file"
    try:
        with fh:
            fh.write(data)
            step = "flush image"
            fh.flush()
        step = "replace file"
        os.replace(tmp, path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise OutputWriteError(step, str(exc)) from exc

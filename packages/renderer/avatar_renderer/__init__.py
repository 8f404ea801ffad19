"""Renderer package for text avatar generation."""

from .builder import (
    AvatarBuilder,
    BuilderOption,
    encode_png,
    with_background,
    with_background_hex,
    with_font_size,
    with_foreground,
    with_foreground_hex,
    with_size,
)
from .canvas import build_canvas, ink_bounds, is_uniform
from .centering import AdvanceCentering, CenteringStrategy, MeasuredCentering, canvas_center
from .colors import hex_to_rgba, rgba_to_hex, to_rgba
from .errors import (
    AssetNotFoundError,
    AssetUnreadableError,
    AvatarError,
    ConfigurationError,
    EncodeError,
    FontLoadError,
    InvalidInputError,
    MalformedFontError,
    OutputWriteError,
    RenderError,
)
from .fonts import FontContext, glyph_advance_width, load_font_bytes, parse_font, prepare_font_context
from .models import AnchorPoint, AvatarConfig

STRATEGIES = {
    "advance": AdvanceCentering,
    "measured": MeasuredCentering,
}

__all__ = [
    "AdvanceCentering",
    "AnchorPoint",
    "AssetNotFoundError",
    "AssetUnreadableError",
    "AvatarBuilder",
    "AvatarConfig",
    "AvatarError",
    "BuilderOption",
    "CenteringStrategy",
    "ConfigurationError",
    "EncodeError",
    "FontContext",
    "FontLoadError",
    "InvalidInputError",
    "MalformedFontError",
    "MeasuredCentering",
    "OutputWriteError",
    "RenderError",
    "STRATEGIES",
    "build_canvas",
    "canvas_center",
    "encode_png",
    "glyph_advance_width",
    "hex_to_rgba",
    "ink_bounds",
    "is_uniform",
    "load_font_bytes",
    "parse_font",
    "prepare_font_context",
    "rgba_to_hex",
    "to_rgba",
    "with_background",
    "with_background_hex",
    "with_font_size",
    "with_foreground",
    "with_foreground_hex",
    "with_size",
]

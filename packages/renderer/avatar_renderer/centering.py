"""Pluggable strategies that pick where text drawing starts.

A strategy is any callable ``(text, config, font) -> AnchorPoint``. It must be
pure: identical inputs give the identical anchor. The returned point is the
left end of the baseline of the first glyph.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .fonts import FontContext
from .models import AnchorPoint, AvatarConfig


class CenteringStrategy(Protocol):
    def __call__(self, text: str, config: AvatarConfig, font: FontContext) -> AnchorPoint: ...


def canvas_center(config: AvatarConfig) -> AnchorPoint:
    return AnchorPoint(config.width // 2, config.height // 2)


@dataclass(frozen=True)
class AdvanceCentering:
    """Estimates the string box from character count and the nominal advance.

    Cheap and font-agnostic; suits monospace-ish initials.
    """

    advance_ratio: float = 0.6
    ascent_ratio: float = 0.7

    def __call__(self, text: str, config: AvatarConfig, font: FontContext) -> AnchorPoint:
        advance = font.advance_width
        text_w = int(len(text) * advance * self.advance_ratio)
        text_h = int(advance * self.ascent_ratio)
        return AnchorPoint((config.width - text_w) // 2, (config.height + text_h) // 2)


@dataclass(frozen=True)
class MeasuredCentering:
    """Centers the actual ink box of ``text`` as rasterized by the font."""

    def __call__(self, text: str, config: AvatarConfig, font: FontContext) -> AnchorPoint:
        box = font.measure(text)
        if box is None:
            return canvas_center(config)
        left, top, right, bottom = box
        x = (config.width - (right - left)) // 2 - left
        y = (config.height - (bottom - top)) // 2 - top
        return AnchorPoint(x, y)

"""Glyph extraction: crop each rect out of a raster and label it."""

from __future__ import annotations

from dataclasses import dataclass

from glyph_cutter.core.raster_ops import crop
from glyph_cutter.core.types import Raster, Rect


@dataclass(frozen=True, eq=False)
class Glyph:
    """An extracted glyph raster and the rect it came from."""

    index: int
    rect: Rect
    raster: Raster
    char: str | None = None

    @property
    def label(self) -> str:
        """File-friendly name: glyph_007 or glyph_007_U+0041."""
        base = f'glyph_{self.index:03d}'
        if self.char:
            return f'{base}_U+{ord(self.char):04X}'
        return base


def extract_glyphs(raster: Raster | None, rects: list[Rect], chars: str = '') -> list[Glyph]:
    """Crop every rect in order. Glyph i is labelled chars[i] when available."""
    if raster is None or raster.is_empty:
        return []
    glyphs = []
    for i, rect in enumerate(rects):
        char = chars[i] if i < len(chars) else None
        glyphs.append(Glyph(index=i, rect=rect, raster=crop(raster, rect), char=char))
    return glyphs

"""Crop and binarisation over Raster values.

Every function returns a new Raster; sources are never modified. Rects that
fall partly or wholly outside the source are clamped instead of rejected,
so the result of a crop is always at least 1x1 for a non-empty source.
An empty source always yields Raster.empty().
"""

import numpy as np

from glyph_cutter.core.rules import match_mask
from glyph_cutter.core.types import BLACK, WHITE, ColorRule, Raster, Rect

DEFAULT_AVG_RANGE = (0, 72)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def clamp_rect(raster: Raster, rect: Rect | None) -> tuple[int, int, int, int]:
    """Clamp rect to the raster and return (x, y, w, h) with w, h >= 1.

    None means the whole raster. Caller must ensure the raster is non-empty.
    """
    if rect is None:
        return 0, 0, raster.width, raster.height
    x = _clamp(rect.left, 0, raster.width - 1)
    y = _clamp(rect.top, 0, raster.height - 1)
    w = _clamp(rect.width, 1, max(1, raster.width - x))
    h = _clamp(rect.height, 1, max(1, raster.height - y))
    return x, y, w, h


def crop(raster: Raster | None, rect: Rect | None) -> Raster:
    """Copy the pixels under rect into a new raster, value for value."""
    if raster is None or raster.is_empty:
        return Raster.empty()
    x, y, w, h = clamp_rect(raster, rect)
    return Raster(raster.pixels[y : y + h, x : x + w])


def binarize(raster: Raster | None, rules: list[ColorRule] | tuple, rect: Rect | None = None) -> Raster:
    """Map the region to WHITE where any enabled rule matches, BLACK elsewhere."""
    region = crop(raster, rect)
    if region.is_empty:
        return region
    mask = match_mask(region.pixels, rules)
    return Raster(np.where(mask, np.uint32(WHITE), np.uint32(BLACK)))


def binarize_by_rgb_avg(
    raster: Raster | None,
    low: int = DEFAULT_AVG_RANGE[0],
    high: int = DEFAULT_AVG_RANGE[1],
    rect: Rect | None = None,
) -> Raster:
    """Map the region to WHITE where low <= (R+G+B)//3 <= high, BLACK elsewhere."""
    region = crop(raster, rect)
    if region.is_empty:
        return region
    px = region.pixels
    total = ((px >> 16) & 0xFF) + ((px >> 8) & 0xFF) + (px & 0xFF)
    avg = total // 3
    mask = (avg >= low) & (avg <= high)
    return Raster(np.where(mask, np.uint32(WHITE), np.uint32(BLACK)))

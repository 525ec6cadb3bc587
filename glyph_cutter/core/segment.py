"""Region segmentation: 8-connected flood fill and uniform grids.

segment() scans the raster in row-major order and grows each unvisited
matching pixel into a component with a breadth-first fill over its eight
neighbours. Diagonal contact joins components, which keeps thin or broken
glyph strokes in one box. Components are emitted in the order their seed
pixel is met by the scan; callers rely on that order (e.g. taking the first
region as a grid origin).

Example:
    rects = segment(raster, [ColorRule('FFFFFF', '101010')], min_w=2, min_h=2)
    cells = generate_grid(GridSpec(0, 0, 10, 10, 2, 0, 3, 1))
"""

from collections import deque

import numpy as np

from glyph_cutter.core.rules import match_mask
from glyph_cutter.core.types import ColorRule, GridSpec, Raster, Rect

DEFAULT_MIN_W = 2
DEFAULT_MIN_H = 2

_NEIGHBOURS = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))


def segment(
    raster: Raster | None,
    rules: list[ColorRule] | tuple,
    min_w: int = DEFAULT_MIN_W,
    min_h: int = DEFAULT_MIN_H,
) -> list[Rect]:
    """Bounding boxes of the 8-connected components of matching pixels."""
    if raster is None or raster.is_empty:
        return []

    w, h = raster.width, raster.height
    mask = match_mask(raster.pixels, rules).ravel()
    if not mask.any():
        return []

    matches = mask.tolist()
    visited = bytearray(w * h)
    result: list[Rect] = []

    # Non-matching pixels can never seed a component, so the scan only
    # visits matching indices; row-major order is preserved by flatnonzero.
    for seed in np.flatnonzero(mask).tolist():
        if visited[seed]:
            continue

        min_x = max_x = seed % w
        min_y = max_y = seed // w
        queue = deque([seed])
        visited[seed] = 1

        while queue:
            idx = queue.popleft()
            cx, cy = idx % w, idx // w
            if cx < min_x:
                min_x = cx
            elif cx > max_x:
                max_x = cx
            if cy < min_y:
                min_y = cy
            elif cy > max_y:
                max_y = cy

            for dx, dy in _NEIGHBOURS:
                nx, ny = cx + dx, cy + dy
                if 0 <= nx < w and 0 <= ny < h:
                    n = ny * w + nx
                    if not visited[n]:
                        visited[n] = 1
                        if matches[n]:
                            queue.append(n)

        if max_x - min_x + 1 >= min_w and max_y - min_y + 1 >= min_h:
            result.append(Rect(min_x, min_y, max_x + 1, max_y + 1))

    return result


def generate_grid(spec: GridSpec) -> list[Rect]:
    """Row-major lattice of cell rects. Empty for non-positive cell sizes."""
    if spec.cell_w <= 0 or spec.cell_h <= 0:
        return []
    rects = []
    for r in range(spec.row_count):
        for c in range(spec.col_count):
            left = spec.origin_x + c * (spec.cell_w + spec.col_gap)
            top = spec.origin_y + r * (spec.cell_h + spec.row_gap)
            rects.append(Rect(left, top, left + spec.cell_w, top + spec.cell_h))
    return rects

"""Tests for glyph_cutter.core.segment — flood-fill regions and grids."""

import numpy as np
from glyph_cutter.core.segment import generate_grid, segment
from glyph_cutter.core.types import BLACK, WHITE, ColorRule, GridSpec, Raster, Rect

WHITE_RULE = [ColorRule(target='FFFFFF', tolerance='000000')]


def _canvas(width: int, height: int) -> np.ndarray:
    return np.full((height, width), BLACK, dtype=np.uint32)


def _paint(canvas: np.ndarray, left: int, top: int, right: int, bottom: int) -> None:
    canvas[top:bottom, left:right] = WHITE


class TestSegment:
    def test_single_block(self):
        c = _canvas(20, 12)
        _paint(c, 5, 3, 12, 9)
        rects = segment(Raster(c), WHITE_RULE)
        assert rects == [Rect(5, 3, 12, 9)]
        assert (rects[0].width, rects[0].height) == (7, 6)

    def test_separated_clusters(self):
        c = _canvas(20, 10)
        _paint(c, 1, 1, 4, 4)
        _paint(c, 5, 1, 8, 4)  # one black column between them
        rects = segment(Raster(c), WHITE_RULE)
        assert rects == [Rect(1, 1, 4, 4), Rect(5, 1, 8, 4)]

    def test_diagonal_touch_merges(self):
        c = _canvas(8, 8)
        _paint(c, 1, 1, 3, 3)
        _paint(c, 3, 3, 5, 5)  # corner (2,2) touches corner (3,3)
        rects = segment(Raster(c), WHITE_RULE)
        assert rects == [Rect(1, 1, 5, 5)]

    def test_two_diagonal_pixels_are_one_region(self):
        c = _canvas(4, 4)
        c[1, 1] = WHITE
        c[2, 2] = WHITE
        assert segment(Raster(c), WHITE_RULE) == [Rect(1, 1, 3, 3)]

    def test_size_filter(self):
        c = _canvas(10, 10)
        c[0, 0] = WHITE  # 1x1 noise
        _paint(c, 0, 4, 6, 5)  # 6x1 line
        _paint(c, 5, 7, 8, 10)  # 3x3 block
        assert segment(Raster(c), WHITE_RULE) == [Rect(5, 7, 8, 10)]
        assert segment(Raster(c), WHITE_RULE, min_w=1, min_h=1) == [
            Rect(0, 0, 1, 1),
            Rect(0, 4, 6, 5),
            Rect(5, 7, 8, 10),
        ]

    def test_emission_follows_seed_scan_order(self):
        c = _canvas(20, 20)
        _paint(c, 12, 2, 15, 5)  # seed (12, 2)
        _paint(c, 2, 4, 5, 12)  # seed (2, 4)
        _paint(c, 8, 1, 10, 3)  # seed (8, 1) — first in scan order
        rects = segment(Raster(c), WHITE_RULE)
        assert rects == [Rect(8, 1, 10, 3), Rect(12, 2, 15, 5), Rect(2, 4, 5, 12)]

    def test_order_uses_topmost_pixel_not_box_corner(self):
        # The cross on the right starts on an earlier row than the block on the left
        c = _canvas(12, 8)
        _paint(c, 0, 3, 3, 6)
        for i in range(4):
            c[i, 6 + i] = WHITE
            c[i, 11 - i] = WHITE
        rects = segment(Raster(c), WHITE_RULE)
        assert rects[0] == Rect(6, 0, 12, 4)
        assert rects[1] == Rect(0, 3, 3, 6)

    def test_concave_shape_is_one_region(self):
        c = _canvas(10, 10)
        _paint(c, 1, 1, 9, 2)
        _paint(c, 1, 1, 2, 9)
        _paint(c, 8, 1, 9, 9)  # "U" upside down
        assert segment(Raster(c), WHITE_RULE) == [Rect(1, 1, 9, 9)]

    def test_stable_across_runs(self):
        rng = np.random.default_rng(7)
        c = np.where(rng.random((40, 60)) > 0.7, np.uint32(WHITE), np.uint32(BLACK))
        raster = Raster(c)
        assert segment(raster, WHITE_RULE) == segment(raster, WHITE_RULE)

    def test_large_solid_region_no_recursion_limit(self):
        c = np.full((400, 400), WHITE, dtype=np.uint32)
        assert segment(Raster(c), WHITE_RULE) == [Rect(0, 0, 400, 400)]

    def test_no_match(self):
        assert segment(Raster(_canvas(5, 5)), WHITE_RULE) == []

    def test_no_rules(self):
        c = np.full((5, 5), WHITE, dtype=np.uint32)
        assert segment(Raster(c), []) == []

    def test_empty_raster(self):
        assert segment(Raster.empty(), WHITE_RULE) == []
        assert segment(None, WHITE_RULE) == []

    def test_tolerance_rules(self):
        c = _canvas(6, 6)
        c[1:4, 1:4] = 0xFF101010  # dark grey, close to black
        rects = segment(Raster(c), [ColorRule(target='181818', tolerance='080808')])
        assert rects == [Rect(1, 1, 4, 4)]


class TestGenerateGrid:
    def test_single_row_with_gap(self):
        rects = generate_grid(GridSpec(0, 0, 10, 10, 2, 0, 3, 1))
        assert [r.left for r in rects] == [0, 12, 24]
        assert all(r.width == 10 and r.height == 10 for r in rects)
        assert all(r.top == 0 for r in rects)

    def test_row_major_order(self):
        rects = generate_grid(GridSpec(5, 7, 4, 3, 1, 2, 2, 2))
        assert rects == [
            Rect(5, 7, 9, 10),
            Rect(10, 7, 14, 10),
            Rect(5, 12, 9, 15),
            Rect(10, 12, 14, 15),
        ]

    def test_zero_cell_width(self):
        assert generate_grid(GridSpec(0, 0, 0, 10, 0, 0, 3, 3)) == []

    def test_negative_cell_height(self):
        assert generate_grid(GridSpec(0, 0, 10, -1, 0, 0, 3, 3)) == []

    def test_zero_counts(self):
        assert generate_grid(GridSpec(0, 0, 10, 10, 0, 0, 0, 5)) == []

    def test_default_spec_is_one_cell(self):
        assert generate_grid(GridSpec()) == [Rect(0, 0, 15, 15)]

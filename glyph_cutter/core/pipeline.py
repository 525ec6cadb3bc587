"""One recomputation: the binarised preview and the rects for a source raster.

Rect selection:
  - grid mode: the lattice from the GridSpec, nothing else;
  - fixed_only with fixed rects: exactly those rects;
  - otherwise: flood-fill regions followed by the caller's fixed rects.
    Regions come from the RGB-average preview when avg_range is set, from
    white pixels when the source is already binarised, else from the
    enabled rules. With `region` set only that part of the source is
    segmented; the rects are still in source coordinates.

Preview selection:
  - avg_range set: RGB-average threshold;
  - otherwise rule binarisation, or None when no rule is enabled.
The preview covers `region` when given, else the whole raster.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from glyph_cutter.core.raster_ops import binarize, binarize_by_rgb_avg, clamp_rect, crop
from glyph_cutter.core.rules import MATCH_WHITE
from glyph_cutter.core.segment import DEFAULT_MIN_H, DEFAULT_MIN_W, generate_grid, segment
from glyph_cutter.core.types import ColorRule, GridSpec, Job, Raster, Rect


@dataclass(frozen=True, eq=False)
class Request:
    """Snapshot of every input to a recomputation."""

    raster: Raster | None
    rules: tuple[ColorRule, ...] = ()
    grid: GridSpec | None = None
    fixed_rects: tuple[Rect, ...] = ()
    binary: bool = False
    min_w: int = DEFAULT_MIN_W
    min_h: int = DEFAULT_MIN_H
    avg_range: tuple[int, int] | None = None
    region: Rect | None = None
    fixed_only: bool = False

    def __post_init__(self) -> None:
        # Freeze caller lists so later edits cannot leak into a running computation
        object.__setattr__(self, 'rules', tuple(self.rules))
        object.__setattr__(self, 'fixed_rects', tuple(self.fixed_rects))


@dataclass(frozen=True, eq=False)
class Result:
    preview: Raster | None
    rects: list[Rect] = field(default_factory=list)


def enabled_rules(rules) -> list[ColorRule]:
    return [r for r in rules if r.enabled]


def compute_preview(request: Request) -> Raster | None:
    if request.raster is None or request.raster.is_empty:
        return None
    if request.avg_range is not None:
        low, high = request.avg_range
        return binarize_by_rgb_avg(request.raster, low, high, request.region)
    rules = enabled_rules(request.rules)
    if not rules:
        return None
    return binarize(request.raster, rules, request.region)


def _shift(rects: list[Rect], dx: int, dy: int) -> list[Rect]:
    if not dx and not dy:
        return rects
    return [Rect(r.left + dx, r.top + dy, r.right + dx, r.bottom + dy) for r in rects]


def _segment_regions(request: Request) -> list[Rect]:
    raster = request.raster
    if raster is None or raster.is_empty:
        return []
    x, y, _, _ = clamp_rect(raster, request.region)

    if request.avg_range is not None:
        # the preview is already cropped to the region
        rects = segment(compute_preview(request), [MATCH_WHITE], request.min_w, request.min_h)
        return _shift(rects, x, y)

    rules = [MATCH_WHITE] if request.binary else enabled_rules(request.rules)
    if not rules:
        return []
    base = crop(raster, request.region) if request.region is not None else raster
    return _shift(segment(base, rules, request.min_w, request.min_h), x, y)


def compute_rects(request: Request) -> list[Rect]:
    if request.grid is not None:
        return generate_grid(request.grid)
    if request.fixed_only and request.fixed_rects:
        return list(request.fixed_rects)
    rects = _segment_regions(request)
    rects.extend(request.fixed_rects)
    return rects


def compute(request: Request) -> Result:
    return Result(preview=compute_preview(request), rects=compute_rects(request))


def request_for(job: Job, use_grid: bool = True) -> Request:
    """Snapshot a technique job as a Request. use_grid=False forces region mode."""
    return Request(
        raster=job.raster,
        rules=job.rules,
        grid=job.grid if use_grid else None,
        fixed_rects=job.fixed_rects,
        binary=job.binary,
        min_w=job.min_w,
        min_h=job.min_h,
        avg_range=job.avg_range,
        region=job.region,
        fixed_only=job.fixed_only,
    )

"""Shared types for glyph-tool: ColorRule, Rect, GridSpec, Raster, Job, Technique, Report."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import numpy as np

WHITE = 0xFFFFFFFF
BLACK = 0xFF000000


@dataclass(frozen=True)
class ColorRule:
    """Fuzzy colour predicate: target colour plus per-channel tolerance.

    `target` and `tolerance` are 24-bit RGB values, either as hex literals
    ('FFFFFF', '#101010') or ints. They are stored as given and decoded by
    the evaluator, so a malformed literal yields a rule that never matches.
    """

    target: str | int
    tolerance: str | int = '000000'
    enabled: bool = True
    id: int = field(default_factory=time.monotonic_ns, compare=False)


@dataclass(frozen=True)
class Rect:
    """Pixel rectangle, half-open on right/bottom. Normalised on construction."""

    left: int
    top: int
    right: int
    bottom: int

    def __post_init__(self) -> None:
        left, right = sorted((int(self.left), int(self.right)))
        top, bottom = sorted((int(self.top), int(self.bottom)))
        object.__setattr__(self, 'left', left)
        object.__setattr__(self, 'top', top)
        object.__setattr__(self, 'right', right)
        object.__setattr__(self, 'bottom', bottom)

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.left, self.top, self.right, self.bottom)


@dataclass(frozen=True)
class GridSpec:
    """Uniform lattice parameters: origin, cell size, gaps, counts."""

    origin_x: int = 0
    origin_y: int = 0
    cell_w: int = 15
    cell_h: int = 15
    col_gap: int = 0
    row_gap: int = 0
    col_count: int = 1
    row_count: int = 1


@dataclass(frozen=True, eq=False)
class Raster:
    """Immutable row-major ARGB pixel buffer.

    `pixels` is a read-only numpy uint32 array of shape (height, width),
    one 0xAARRGGBB value per pixel.
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        arr = np.array(self.pixels, dtype=np.uint32, copy=True)
        if arr.ndim != 2:
            arr = np.zeros((0, 0), dtype=np.uint32)
        arr.flags.writeable = False
        object.__setattr__(self, 'pixels', arr)

    @classmethod
    def empty(cls) -> Raster:
        return cls(np.zeros((0, 0), dtype=np.uint32))

    @classmethod
    def from_argb(cls, width: int, height: int, values) -> Raster:
        """Build from a flat row-major sequence of ARGB ints."""
        arr = np.asarray(values, dtype=np.uint32)
        if arr.size != width * height:
            raise ValueError(f'Expected {width * height} pixels for {width}x{height}, got {arr.size}')
        return cls(arr.reshape(height, width))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def is_empty(self) -> bool:
        return self.pixels.size == 0

    def pixel(self, x: int, y: int) -> int:
        return int(self.pixels[y, x])


@dataclass
class Job:
    """One source raster plus the parameters a technique needs to process it."""

    name: str
    raster: Raster
    rules: tuple[ColorRule, ...] = ()
    grid: GridSpec | None = None
    fixed_rects: tuple[Rect, ...] = ()
    region: Rect | None = None
    binary: bool = False
    min_w: int = 2
    min_h: int = 2
    avg_range: tuple[int, int] | None = None
    fixed_only: bool = False


class Technique:
    """A self-registering glyph-tool technique.

    Usage in a technique module:

        technique = Technique(name='regions', help='Flood-fill matching pixels into boxes')

        @technique.run
        def run(job, report, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, job: Job, report: Report, args: Any) -> None:
        if self._run_fn is None:
            raise RuntimeError(f'Technique {self.name} has no run function')
        self._run_fn(job, report, args)


@dataclass
class Report:
    """Accumulates technique results for text/JSON output."""

    image_path: str = ''
    image_width: int = 0
    image_height: int = 0
    results: dict[str, dict[str, Any]] = field(default_factory=dict)
    pass_count: int = 0
    fail_count: int = 0

    def add(self, technique_name: str, data: dict[str, Any]) -> None:
        self.results[technique_name] = data

    def rect_count(self) -> int | None:
        """Number of rects found by the segmenting techniques, or None if none ran."""
        counts = [data['count'] for name, data in self.results.items() if name in ('regions', 'grid')]
        return max(counts) if counts else None

    def check_count(self, count: int, minimum: int | None) -> None:
        """Record pass/fail for a minimum rect count; no-op without a minimum."""
        if minimum is None:
            return
        if count >= minimum:
            self.record_pass()
        else:
            self.record_fail()

    def record_pass(self) -> None:
        self.pass_count += 1

    def record_fail(self) -> None:
        self.fail_count += 1

"""Regex-based parsing of the rule, grid and rect strings given on the command line.

Rule:  TARGET[:TOLERANCE][:off]      e.g. 'FFFFFF:101010', '#000000', 'ff0000:000000:off'
Grid:  X,Y,W,H[,COLGAP,ROWGAP[,COLS,ROWS]]   e.g. '0,0,10,10,2,0,3,1'
Rect:  L,T,R,B                       e.g. '10,10,40,24'
Size:  WxH                           e.g. '2x2'
Point: X,Y                           e.g. '12,7'

Rule colours are kept as given: a malformed colour is not an error here, it
produces a rule that never matches. Grid, rect, size and point strings that
do not parse raise ValueError.
"""

import re

from glyph_cutter.core.types import ColorRule, GridSpec, Rect

_INT = r'\s*(-?\d+)\s*'
_RECT = re.compile(','.join([_INT] * 4))
_POINT = re.compile(','.join([_INT] * 2))
_SIZE = re.compile(r'\s*(\d+)\s*[xX]\s*(\d+)\s*')
_OFF = {'off', 'disabled'}


def parse_rule(text: str, default_tolerance: str = '101010') -> ColorRule:
    """Parse 'TARGET[:TOLERANCE][:off]' into a ColorRule."""
    parts = [p.strip() for p in text.split(':')]
    enabled = True
    if len(parts) > 1 and parts[-1].lower() in _OFF:
        enabled = False
        parts = parts[:-1]
    target = parts[0]
    tolerance = parts[1] if len(parts) > 1 and parts[1] else default_tolerance
    return ColorRule(target=target, tolerance=tolerance, enabled=enabled)


def parse_grid(text: str) -> GridSpec:
    """Parse 4, 6 or 8 comma-separated ints into a GridSpec."""
    values = _ints(text)
    if len(values) not in (4, 6, 8):
        raise ValueError(f'Grid needs X,Y,W,H[,COLGAP,ROWGAP[,COLS,ROWS]], got {text!r}')
    x, y, w, h = values[:4]
    col_gap, row_gap = values[4:6] if len(values) >= 6 else (0, 0)
    cols, rows = values[6:8] if len(values) == 8 else (1, 1)
    return GridSpec(
        origin_x=x,
        origin_y=y,
        cell_w=w,
        cell_h=h,
        col_gap=col_gap,
        row_gap=row_gap,
        col_count=cols,
        row_count=rows,
    )


def parse_rect(text: str) -> Rect:
    m = _RECT.fullmatch(text)
    if not m:
        raise ValueError(f'Rect needs L,T,R,B, got {text!r}')
    return Rect(*(int(g) for g in m.groups()))


def parse_point(text: str) -> tuple[int, int]:
    m = _POINT.fullmatch(text)
    if not m:
        raise ValueError(f'Point needs X,Y, got {text!r}')
    return (int(m.group(1)), int(m.group(2)))


def parse_size(text: str) -> tuple[int, int]:
    m = _SIZE.fullmatch(text)
    if not m:
        raise ValueError(f'Size needs WxH, got {text!r}')
    return (int(m.group(1)), int(m.group(2)))


def parse_range(text: str) -> tuple[int, int]:
    """Parse 'LOW,HIGH' into an ordered pair."""
    low, high = parse_point(text)
    return (low, high) if low <= high else (high, low)


def _ints(text: str) -> list[int]:
    parts = text.split(',')
    values = []
    for part in parts:
        m = re.fullmatch(_INT, part)
        if not m:
            raise ValueError(f'Not an integer: {part!r} in {text!r}')
        values.append(int(m.group(1)))
    return values

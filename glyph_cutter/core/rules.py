"""Colour rule evaluation.

A pixel matches a rule when each of its R, G and B channels lies within the
rule's own per-channel delta of the target. A rule set matches when any
enabled rule does. Malformed rule data never raises: such a rule simply
never matches.
"""

from collections.abc import Iterable

import numpy as np

from glyph_cutter.core.palette import parse_hex24, split_rgb
from glyph_cutter.core.types import ColorRule

# Segmentation rule for a raster that is already black/white.
MATCH_WHITE = ColorRule(target='FFFFFF', tolerance='000000', id=0)

MAX_RULES = 10


def decode_rule(rule: ColorRule) -> tuple[tuple[int, int, int], tuple[int, int, int]] | None:
    """Return ((tr, tg, tb), (dr, dg, db)) or None if the rule cannot match."""
    target = parse_hex24(getattr(rule, 'target', None))
    tolerance = parse_hex24(getattr(rule, 'tolerance', None))
    if target is None or tolerance is None:
        return None
    return split_rgb(target), split_rgb(tolerance)


def active_rules(rules: Iterable[ColorRule] | None) -> list[tuple[tuple[int, int, int], tuple[int, int, int]]]:
    """Decode the enabled, well-formed rules of a rule set."""
    decoded = []
    for rule in rules or ():
        if not getattr(rule, 'enabled', False):
            continue
        d = decode_rule(rule)
        if d is not None:
            decoded.append(d)
    return decoded


def is_match_any(pixel: int, rules: Iterable[ColorRule] | None) -> bool:
    r, g, b = split_rgb(int(pixel))
    for (tr, tg, tb), (dr, dg, db) in active_rules(rules):
        if abs(r - tr) <= dr and abs(g - tg) <= dg and abs(b - tb) <= db:
            return True
    return False


def match_mask(pixels: np.ndarray, rules: Iterable[ColorRule] | None) -> np.ndarray:
    """Vectorised is_match_any over an array of ARGB pixels.

    Returns a bool array of the same shape.
    """
    pixels = np.asarray(pixels, dtype=np.uint32)
    mask = np.zeros(pixels.shape, dtype=bool)
    decoded = active_rules(rules)
    if not decoded or pixels.size == 0:
        return mask

    # int16 so the subtraction below cannot wrap
    r = ((pixels >> 16) & 0xFF).astype(np.int16)
    g = ((pixels >> 8) & 0xFF).astype(np.int16)
    b = (pixels & 0xFF).astype(np.int16)
    for (tr, tg, tb), (dr, dg, db) in decoded:
        mask |= (np.abs(r - tr) <= dr) & (np.abs(g - tg) <= dg) & (np.abs(b - tb) <= db)
    return mask


def add_picked_rule(
    rules: Iterable[ColorRule],
    target: str,
    tolerance: str,
    limit: int = MAX_RULES,
) -> tuple[ColorRule, ...]:
    """Return a new rule set with a picked colour appended.

    The set is returned unchanged when it already holds `limit` rules or a
    rule with the same target colour.
    """
    current = tuple(rules)
    if len(current) >= limit:
        return current
    if any(_same_colour(r.target, target) for r in current):
        return current
    return current + (ColorRule(target=target, tolerance=tolerance),)


def _same_colour(a, b) -> bool:
    da, db = parse_hex24(a), parse_hex24(b)
    if da is None or db is None:
        return a == b
    return da == db

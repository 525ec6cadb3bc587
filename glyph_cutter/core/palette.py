"""Colour literal parsing and ARGB channel helpers.

Pixels are 0xAARRGGBB ints; rule colours and tolerances are 24-bit RGB.
Hex literals are six hex digits with an optional leading '#'.
"""

import numbers
import re

_HEX24 = re.compile(r'#?([0-9a-fA-F]{6})')


def parse_hex24(value) -> int | None:
    """Decode a 24-bit RGB literal. Returns None when malformed.

    Accepts '#RRGGBB', 'RRGGBB' or an int in [0, 0xFFFFFF].
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value) if 0 <= value <= 0xFFFFFF else None
    if not isinstance(value, str):
        return None
    m = _HEX24.fullmatch(value.strip())
    if not m:
        return None
    return int(m.group(1), 16)


def split_rgb(value: int) -> tuple[int, int, int]:
    """Split a 24- or 32-bit colour into (r, g, b); alpha is ignored."""
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """Parse a hex literal into (r, g, b). Malformed input gives black."""
    decoded = parse_hex24(value)
    if decoded is None:
        return (0, 0, 0)
    return split_rgb(decoded)


def argb(r: int, g: int, b: int, a: int = 0xFF) -> int:
    return ((a & 0xFF) << 24) | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def format_hex(pixel: int) -> str:
    """Format a pixel as '#RRGGBB' (upper case, alpha dropped)."""
    r, g, b = split_rgb(pixel)
    return f'#{r:02X}{g:02X}{b:02X}'

"""Conversion between already-decoded PIL images and Raster values.

Decoding and encoding files stays with the caller (Image.open / save).
"""

import numpy as np
from PIL import Image

from glyph_cutter.core.types import Raster


def raster_from_image(image: Image.Image) -> Raster:
    """Pack an image into 0xAARRGGBB pixels. Images without alpha become opaque."""
    arr = np.asarray(image.convert('RGBA'), dtype=np.uint32)
    if arr.size == 0:
        return Raster.empty()
    r, g, b, a = arr[..., 0], arr[..., 1], arr[..., 2], arr[..., 3]
    return Raster((a << 24) | (r << 16) | (g << 8) | b)


def image_from_raster(raster: Raster) -> Image.Image:
    """Unpack a raster into an RGBA image with identical channel values."""
    px = raster.pixels
    rgba = np.stack(
        [(px >> 16) & 0xFF, (px >> 8) & 0xFF, px & 0xFF, (px >> 24) & 0xFF],
        axis=-1,
    ).astype(np.uint8)
    return Image.fromarray(rgba)

#!/usr/bin/env python3
# chan_tui/rendering/resample.py
"""
Resampler: shrink a PixelMatrix to the pixel grid a cell budget needs.

- General algorithms hand the work to Pillow and return a new PixelMatrix;
  NEAREST_EXACT picks floor-indexed source pixels with numpy.
- FAST_NEAREST never builds an intermediate image. LazyNearestSource maps
  each destination coordinate back to the source with integer floor
  division and reads straight from the original pixels.
"""

from __future__ import annotations

import logging
from typing import Dict

import numpy as np
from PIL import Image, ImageFilter

from chan_tui.rendering.errors import InvalidDimensions, UnsupportedFilterConversion
from chan_tui.rendering.pixels import RGBA, PixelMatrix, PixelSource, ScaleAlgorithm

log = logging.getLogger(__name__)

__all__ = [
    "LazyNearestSource",
    "resample",
    "resize_matrix",
    "to_pillow_filter",
]

_FILTERS: Dict[ScaleAlgorithm, int] = {
    ScaleAlgorithm.NEAREST_EXACT: Image.NEAREST,
    ScaleAlgorithm.LINEAR: Image.BILINEAR,    # triangle
    ScaleAlgorithm.CUBIC: Image.BICUBIC,      # Catmull-Rom family (a = -0.5)
    ScaleAlgorithm.GAUSSIAN: Image.BOX,       # after a Gaussian pre-blur
    ScaleAlgorithm.LANCZOS: Image.LANCZOS,    # 3 lobes
}


def to_pillow_filter(algorithm: ScaleAlgorithm) -> int:
    """Return the Pillow resampling filter for a general algorithm.

    Raises UnsupportedFilterConversion for FAST_NEAREST, which callers must
    read as "use LazyNearestSource".
    """
    try:
        return _FILTERS[ScaleAlgorithm(algorithm)]
    except KeyError:
        raise UnsupportedFilterConversion(algorithm) from None


def _check_dimensions(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise InvalidDimensions(width, height)


class LazyNearestSource:
    """Nearest-neighbour view of a PixelMatrix at a different size.

    Destination (x, y) reads source (x * src_w // dst_w, y * src_h // dst_h).
    """

    __slots__ = ("matrix", "width", "height")

    def __init__(self, matrix: PixelMatrix, width: int, height: int):
        _check_dimensions(width, height)
        self.matrix = matrix
        self.width = width
        self.height = height

    def source_coords(self, x: int, y: int):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return x * self.matrix.width // self.width, y * self.matrix.height // self.height

    def pixel(self, x: int, y: int) -> RGBA:
        sx, sy = self.source_coords(x, y)
        return self.matrix.pixel(sx, sy)

    def __repr__(self) -> str:
        return f"LazyNearestSource({self.matrix!r} -> {self.width}x{self.height})"


def _nearest_floor(pixels: PixelMatrix, width: int, height: int) -> PixelMatrix:
    # Same index rule as LazyNearestSource. Pillow's NEAREST samples pixel
    # centres, which picks a different pixel at integer ratios.
    xs = np.arange(width) * pixels.width // width
    ys = np.arange(height) * pixels.height // height
    return PixelMatrix(pixels.array[ys[:, None], xs[None, :]])


def resize_matrix(pixels: PixelMatrix, width: int, height: int, algorithm: ScaleAlgorithm) -> PixelMatrix:
    """Eagerly resize. Output is exactly width x height.

    NEAREST_EXACT indexes the pixel array with the floor rule LazyNearestSource
    uses; every other algorithm goes through Pillow.
    """
    _check_dimensions(width, height)
    algorithm = ScaleAlgorithm(algorithm)
    resample_filter = to_pillow_filter(algorithm)

    if algorithm is ScaleAlgorithm.NEAREST_EXACT:
        return _nearest_floor(pixels, width, height)

    img = pixels.to_image()
    # Resize colour and alpha separately; Pillow would otherwise premultiply
    # RGBA and alter the colour channels of translucent pixels.
    rgb = img.convert("RGB")
    alpha = img.getchannel("A")

    if algorithm is ScaleAlgorithm.GAUSSIAN:
        ratio = max(pixels.width / width, pixels.height / height, 1.0)
        rgb = rgb.filter(ImageFilter.GaussianBlur(radius=0.5 * ratio))

    if (rgb.width, rgb.height) != (width, height):
        rgb = rgb.resize((width, height), resample_filter)
        alpha = alpha.resize((width, height), resample_filter)

    r, g, b = rgb.split()
    return PixelMatrix.from_image(Image.merge("RGBA", (r, g, b, alpha)))


def resample(pixels: PixelMatrix, width: int, height: int, algorithm: ScaleAlgorithm) -> PixelSource:
    """Resample to width x height, eagerly or lazily depending on algorithm."""
    _check_dimensions(width, height)
    try:
        to_pillow_filter(algorithm)
    except UnsupportedFilterConversion:
        log.debug("%s has no filter; sampling %r lazily", algorithm, pixels)
        return LazyNearestSource(pixels, width, height)
    return resize_matrix(pixels, width, height, algorithm)

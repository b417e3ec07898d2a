#!/usr/bin/env python3
# chan_tui/rendering/pixels.py
"""
Shared types for the renderer: pixel matrices, cell budgets and the
scale/render mode selectors.

PixelMatrix wraps a read-only (H, W, 4) uint8 numpy array. Both it and the
lazy sampler in resample.py satisfy the PixelSource protocol, so the glyph
compositor never needs to know whether resampling happened eagerly.
"""

from __future__ import annotations

import io
from enum import Enum
from typing import NamedTuple, Protocol, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from chan_tui.rendering.errors import DecodeError, InvalidDimensions

RGBA = Tuple[int, int, int, int]

__all__ = [
    "RGBA",
    "PixelSource",
    "PixelMatrix",
    "CellSize",
    "ScaleAlgorithm",
    "RenderMode",
    "decode_image",
]


class ScaleAlgorithm(str, Enum):
    NEAREST_EXACT = "nearest"
    LINEAR = "linear"
    CUBIC = "cubic"
    GAUSSIAN = "gaussian"
    LANCZOS = "lanczos"
    FAST_NEAREST = "fast_nearest"


class RenderMode(str, Enum):
    COLOR = "color"
    GRAYSCALE = "grayscale"
    # Hosted GUI window. Recognised, never implemented.
    GUI = "gui"


class CellSize(NamedTuple):
    """Terminal-cell budget: (columns, rows)."""

    columns: int
    rows: int

    def pixel_target(self) -> Tuple[int, int]:
        # Each glyph row carries two pixel rows (half-block technique).
        return self.columns, self.rows * 2


class PixelSource(Protocol):
    width: int
    height: int

    def pixel(self, x: int, y: int) -> RGBA:
        ...


class PixelMatrix:
    """Immutable RGBA pixel grid."""

    __slots__ = ("_data",)

    def __init__(self, data):
        arr = np.asarray(data)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"expected (height, width, 4) array, got shape {arr.shape}")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise InvalidDimensions(arr.shape[1], arr.shape[0])
        if arr.dtype != np.uint8 and (arr.min() < 0 or arr.max() > 255):
            raise ValueError("channel values must be within 0..255")
        arr = np.array(arr, dtype=np.uint8, copy=True)
        arr.setflags(write=False)
        self._data = arr

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelMatrix":
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        return cls(np.asarray(img, dtype=np.uint8))

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self._data), "RGBA")

    @property
    def array(self) -> np.ndarray:
        return self._data

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    def pixel(self, x: int, y: int) -> RGBA:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        r, g, b, a = self._data[y, x]
        return int(r), int(g), int(b), int(a)

    def __repr__(self) -> str:
        return f"PixelMatrix({self.width}x{self.height})"


def decode_image(buffer: bytes) -> PixelMatrix:
    """Decode compressed image bytes (JPEG, PNG, GIF, ...) to RGBA pixels."""
    try:
        with Image.open(io.BytesIO(buffer)) as img:
            img.load()
            return PixelMatrix.from_image(img)
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"cannot decode image ({len(buffer)} bytes): {exc}") from exc

import io

import numpy as np
import pytest
from PIL import Image

from chan_tui.rendering.pixels import PixelMatrix


def encode(img: Image.Image, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    img.save(buf, fmt)
    return buf.getvalue()


def solid_png(width, height, colour=(255, 0, 0, 255)) -> bytes:
    return encode(Image.new("RGBA", (width, height), colour))


def block_matrix(blocks_x, blocks_y, block) -> PixelMatrix:
    """Image made of block x block squares, each a distinct colour."""
    arr = np.zeros((blocks_y * block, blocks_x * block, 4), dtype=np.uint8)
    for by in range(blocks_y):
        for bx in range(blocks_x):
            arr[by * block:(by + 1) * block, bx * block:(bx + 1) * block] = (bx * 40, by * 40, 200, 255)
    return PixelMatrix(arr)


def gradient_png(width, height) -> bytes:
    xs = np.linspace(0, 255, width, dtype=np.float64)[None, :]
    ys = np.linspace(0, 255, height, dtype=np.float64)[:, None]
    arr = np.zeros((height, width, 3), dtype=np.uint8)
    arr[..., 0] = xs
    arr[..., 1] = ys
    arr[..., 2] = (xs + ys) / 2
    return encode(Image.fromarray(arr, "RGB"))


class RecordingSource:
    """PixelSource that records every coordinate read."""

    def __init__(self, matrix: PixelMatrix):
        self.matrix = matrix
        self.width = matrix.width
        self.height = matrix.height
        self.reads = []

    def pixel(self, x, y):
        self.reads.append((x, y))
        return self.matrix.pixel(x, y)


@pytest.fixture
def red_png():
    return solid_png(4, 4)

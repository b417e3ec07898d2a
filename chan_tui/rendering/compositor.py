#!/usr/bin/env python3
# chan_tui/rendering/compositor.py
"""
Glyph compositor: walk a resampled pixel grid two rows at a time.

- Colour: one lower half block per column. Background is the top pixel,
  foreground the bottom pixel, so the glyph's lit lower half shows the
  bottom pixel and the cell background shows the top one.
- Grayscale: average the two pixels' luma and pick a shade from LUMA_RAMP.

An odd trailing row is never read.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence, Tuple

from chan_tui.rendering.errors import InvalidLuma
from chan_tui.rendering.pixels import PixelSource

RGB = Tuple[int, int, int]

HALF_BLOCK = "▄"

# (inclusive upper bound, glyph), darkest to lightest
LUMA_RAMP: Tuple[Tuple[int, str], ...] = (
    (51, " "),
    (102, "░"),
    (153, "▒"),
    (204, "▓"),
    (255, "█"),
)

__all__ = [
    "RGB",
    "HALF_BLOCK",
    "LUMA_RAMP",
    "StyledGlyph",
    "compose_color",
    "compose_gray",
    "luma",
    "luma_glyph",
]


class StyledGlyph(NamedTuple):
    glyph: str
    fg: RGB
    bg: RGB


def luma(pixel: Sequence[int]) -> int:
    """Rec. 709 luma of an RGB(A) pixel, truncated. Alpha is ignored."""
    value = int(0.2126 * pixel[0] + 0.7152 * pixel[1] + 0.0722 * pixel[2])
    if not 0 <= value <= 255:
        raise InvalidLuma(value)
    return value


def luma_glyph(value: int) -> str:
    if not 0 <= value <= 255:
        raise InvalidLuma(value)
    for upper, glyph in LUMA_RAMP:
        if value <= upper:
            return glyph
    raise InvalidLuma(value)  # unreachable with a complete ramp


def compose_color(source: PixelSource, width: int, height: int) -> Tuple[Tuple[StyledGlyph, ...], ...]:
    rows = []
    for y in range(height // 2):
        row = []
        for x in range(width):
            top = source.pixel(x, y * 2)
            bottom = source.pixel(x, y * 2 + 1)
            row.append(StyledGlyph(HALF_BLOCK, fg=tuple(bottom[:3]), bg=tuple(top[:3])))
        rows.append(tuple(row))
    return tuple(rows)


def compose_gray(source: PixelSource, width: int, height: int) -> Tuple[str, ...]:
    rows = []
    for y in range(height // 2):
        buf = []
        for x in range(width):
            top = luma(source.pixel(x, y * 2))
            bottom = luma(source.pixel(x, y * 2 + 1))
            buf.append(luma_glyph((top + bottom) // 2))
        rows.append("".join(buf))
    return tuple(rows)

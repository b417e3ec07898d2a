#!/usr/bin/env python3
# chan_tui/rendering/errors.py
"""
Error taxonomy for the image-to-glyph renderer.

Every failure leaves render() as one of these; no partially built
RenderedImage is ever returned.
"""

from __future__ import annotations

__all__ = [
    "RenderError",
    "DecodeError",
    "InvalidDimensions",
    "InvalidLuma",
    "UnimplementedMode",
    "UnsupportedFilterConversion",
]


class RenderError(Exception):
    """Base class for renderer failures."""


class DecodeError(RenderError):
    """Image bytes were malformed or in an unsupported format."""


class InvalidDimensions(RenderError, ValueError):
    """A target or source size was zero or negative."""

    def __init__(self, width: int, height: int):
        super().__init__(f"invalid dimensions {width}x{height}")
        self.width = width
        self.height = height


class InvalidLuma(RenderError, ValueError):
    """A luma value fell outside 0..255, meaning a channel was out of range upstream."""

    def __init__(self, value):
        super().__init__(f"invalid luma {value!r}")
        self.value = value


class UnimplementedMode(RenderError, NotImplementedError):
    """The render mode is recognised but has no implementation."""

    def __init__(self, mode):
        super().__init__(f"render mode {getattr(mode, 'value', mode)} is not implemented")
        self.mode = mode


class UnsupportedFilterConversion(RenderError):
    """The scale algorithm has no general resampling filter equivalent.

    Not fatal: it tells the caller to take the lazy sampling path.
    """

    def __init__(self, algorithm):
        super().__init__(f"{getattr(algorithm, 'value', algorithm)} has no resampling filter")
        self.algorithm = algorithm

#!/usr/bin/env python3
# chan_tui/rendering/renderer.py
"""
Rendering dispatcher and the RenderedImage it produces.

- Common API: render(source_bytes, cell_budget, algorithm, mode)
- Backends are keyed by RenderMode; modes without a backend (GUI) fail
  with UnimplementedMode instead of falling back.
- RenderedImage.fragments() yields prompt_toolkit style runs
  list[tuple[str, str]] using "fg:#RRGGBB bg:#RRGGBB" style strings.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Protocol, Tuple, Union

from chan_tui.rendering.compositor import RGB, StyledGlyph, compose_color, compose_gray
from chan_tui.rendering.errors import UnimplementedMode
from chan_tui.rendering.pixels import (
    CellSize,
    PixelMatrix,
    PixelSource,
    RenderMode,
    ScaleAlgorithm,
    decode_image,
)
from chan_tui.rendering.resample import resample

log = logging.getLogger(__name__)

StyleRun = Tuple[str, str]                # (style, text)
LineFrag = List[StyleRun]                 # one terminal row as runs

__all__ = [
    "StyleRun",
    "LineFrag",
    "StyledRows",
    "PlainRows",
    "RenderedImage",
    "RenderBackend",
    "Renderer",
    "Surface",
    "render",
]


# -------------------------
# Output
# -------------------------

@dataclass(frozen=True)
class StyledRows:
    rows: Tuple[Tuple[StyledGlyph, ...], ...]


@dataclass(frozen=True)
class PlainRows:
    rows: Tuple[str, ...]


RenderedRows = Union[StyledRows, PlainRows]


class Surface(Protocol):
    """Anything draw() can paint on: a height and a row writer."""

    height: int

    def write(self, x: int, y: int, fragments: LineFrag) -> None:
        ...


def _rgb_to_hex(rgb: RGB) -> str:
    r, g, b = rgb
    return f"#{r:02x}{g:02x}{b:02x}"


@dataclass(frozen=True)
class RenderedImage:
    """Glyph rows for one image; exactly one of styled or plain."""

    content: RenderedRows
    size: Tuple[int, int] = field(init=False)

    def __post_init__(self):
        if not isinstance(self.content, (StyledRows, PlainRows)):
            raise TypeError(f"unsupported content {type(self.content).__name__}")
        rows = self.content.rows
        columns = len(rows[0]) if rows else 0
        object.__setattr__(self, "size", (columns, len(rows)))

    @property
    def styled(self) -> bool:
        return isinstance(self.content, StyledRows)

    def required_size(self) -> Tuple[int, int]:
        return self.size

    def fragments(self, y: int) -> LineFrag:
        """Row y as style runs, merging neighbouring glyphs with equal style."""
        row = self.content.rows[y]
        if not self.styled:
            return [("", row)]

        line: LineFrag = []
        run_style = None
        run_text: List[str] = []
        for cell in row:
            style = f"fg:{_rgb_to_hex(cell.fg)} bg:{_rgb_to_hex(cell.bg)}"
            if style != run_style and run_text:
                line.append((run_style, "".join(run_text)))
                run_text = []
            run_style = style
            run_text.append(cell.glyph)
        if run_text:
            line.append((run_style, "".join(run_text)))
        return line

    def text(self) -> str:
        """Plain text of every row, styles dropped."""
        return "\n".join("".join(text for _style, text in self.fragments(y)) for y in range(self.size[1]))

    def draw(self, surface: Surface) -> None:
        rows = self.content.rows
        for y in range(surface.height):
            if y >= len(rows):
                # surface is taller than the image; nothing more to paint
                return
            surface.write(0, y, self.fragments(y))


# -------------------------
# Backends
# -------------------------

class RenderBackend:
    """Interface for glyph compositors."""
    name: str = "base"

    def compose(self, source: PixelSource) -> RenderedRows:
        raise NotImplementedError


class ColorBackend(RenderBackend):
    name = "color"

    def compose(self, source: PixelSource) -> RenderedRows:
        return StyledRows(compose_color(source, source.width, source.height))


class GrayscaleBackend(RenderBackend):
    name = "grayscale"

    def compose(self, source: PixelSource) -> RenderedRows:
        return PlainRows(compose_gray(source, source.width, source.height))


# -------------------------
# Dispatcher
# -------------------------

@dataclass
class Renderer:
    """Maps RenderMode to a backend. Unregistered modes raise UnimplementedMode."""

    def __post_init__(self):
        self._backends: Dict[RenderMode, RenderBackend] = {}
        self.register(RenderMode.COLOR, ColorBackend())
        self.register(RenderMode.GRAYSCALE, GrayscaleBackend())

    def register(self, mode: RenderMode, backend: RenderBackend) -> None:
        self._backends[RenderMode(mode)] = backend

    def backend_for(self, mode: RenderMode) -> RenderBackend:
        mode = RenderMode(mode)
        backend = self._backends.get(mode)
        if backend is None:
            raise UnimplementedMode(mode)
        return backend

    def render_pixels(
        self,
        pixels: PixelMatrix,
        cell_budget: CellSize,
        algorithm: ScaleAlgorithm,
        mode: RenderMode,
    ) -> RenderedImage:
        backend = self.backend_for(mode)
        width, height = CellSize(*cell_budget).pixel_target()
        source = resample(pixels, width, height, ScaleAlgorithm(algorithm))
        return RenderedImage(backend.compose(source))

    def render(
        self,
        source_bytes: bytes,
        cell_budget: CellSize,
        algorithm: ScaleAlgorithm,
        mode: RenderMode,
    ) -> RenderedImage:
        # Resolve the backend first so an unimplemented mode fails on any input.
        self.backend_for(mode)
        t0 = time.perf_counter()
        pixels = decode_image(source_bytes)
        image = self.render_pixels(pixels, cell_budget, algorithm, mode)
        log.debug(
            "Rendered %r as %dx%d %s/%s in %.4f seconds",
            pixels, image.size[0], image.size[1],
            ScaleAlgorithm(algorithm).value, RenderMode(mode).value,
            time.perf_counter() - t0,
        )
        return image


def render(
    source_bytes: bytes,
    cell_budget: CellSize,
    algorithm: ScaleAlgorithm,
    mode: RenderMode,
) -> RenderedImage:
    """Decode source_bytes and render it into cell_budget terminal cells."""
    return Renderer().render(source_bytes, cell_budget, algorithm, mode)

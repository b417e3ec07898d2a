#!/usr/bin/env python3
# chan_tui/ui/image_control.py
"""prompt_toolkit UIControl that shows one RenderedImage."""

from __future__ import annotations

from typing import List, Optional

from prompt_toolkit.layout import Window
from prompt_toolkit.layout.controls import UIContent, UIControl
from prompt_toolkit.layout.dimension import Dimension

from chan_tui.rendering.renderer import LineFrag, RenderedImage


class LineSurface:
    """A Surface of `height` rows that collects fragments written by draw()."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.lines: List[LineFrag] = [[("", " " * width)] for _ in range(height)]

    def write(self, x: int, y: int, fragments: LineFrag) -> None:
        if not 0 <= y < self.height:
            return
        if x:
            fragments = [("", " " * x)] + list(fragments)
        self.lines[y] = list(fragments)


class ImageControl(UIControl):
    def __init__(self, image: Optional[RenderedImage] = None, placeholder: str = ""):
        self.image = image
        self.placeholder = placeholder

    def is_focusable(self) -> bool:
        return False

    def preferred_width(self, max_available_width: int) -> int:
        if self.image is None:
            return min(max_available_width, len(self.placeholder))
        return self.image.required_size()[0]

    def preferred_height(self, width, max_available_height, wrap_lines, get_line_prefix) -> int:
        if self.image is None:
            return 1 if self.placeholder else 0
        return self.image.required_size()[1]

    def create_content(self, width: int, height: int) -> UIContent:
        surface = LineSurface(width, height)
        if self.image is not None:
            self.image.draw(surface)
        elif self.placeholder and height:
            surface.write(0, 0, [("class:placeholder", self.placeholder[:width])])
        lines = surface.lines
        return UIContent(
            get_line=lambda i: lines[i] if 0 <= i < len(lines) else [],
            line_count=len(lines),
        )


def image_window(image: Optional[RenderedImage], placeholder: str = "") -> Window:
    """Window sized exactly to the image (or its placeholder text)."""
    control = ImageControl(image, placeholder)
    if image is not None:
        cols, rows = image.required_size()
    else:
        cols, rows = len(placeholder), 1
    return Window(
        content=control,
        width=Dimension.exact(cols),
        height=Dimension.exact(rows),
        dont_extend_width=True,
        dont_extend_height=True,
    )

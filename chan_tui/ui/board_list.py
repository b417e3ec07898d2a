#!/usr/bin/env python3
# chan_tui/ui/board_list.py
"""Selectable board list with type-to-jump navigation."""

from __future__ import annotations

import string
from typing import Callable, List, Optional, Sequence

from prompt_toolkit.data_structures import Point
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout.controls import UIContent, UIControl

from chan_tui.models import Board

JUMP_KEYS = string.ascii_lowercase + string.digits


def next_matching_index(labels: Sequence[str], current: int, ch: str) -> int:
    """
    Index of the first label after `current` whose board slug starts with
    `ch`, wrapping around to the start of the list. Returns `current` when
    nothing matches.
    """
    n = len(labels)
    ch = ch.lower()
    for step in range(1, n + 1):
        i = (current + step) % n
        if labels[i].lower().lstrip("/").startswith(ch):
            return i
    return current


class BoardListControl(UIControl):
    def __init__(self, on_submit: Optional[Callable[[Board], None]] = None):
        self.boards: List[Board] = []
        self.selected = 0
        self.on_submit = on_submit
        self._kb = self._build_key_bindings()

    # -------- data --------

    def set_boards(self, boards: Sequence[Board]) -> None:
        current = self.selected_board()
        self.boards = list(boards)
        self.selected = 0
        if current is not None:
            for i, b in enumerate(self.boards):
                if b.board == current.board:
                    self.selected = i
                    break

    def selected_board(self) -> Optional[Board]:
        if 0 <= self.selected < len(self.boards):
            return self.boards[self.selected]
        return None

    @property
    def labels(self) -> List[str]:
        return [b.label for b in self.boards]

    def move(self, delta: int) -> None:
        if self.boards:
            self.selected = max(0, min(len(self.boards) - 1, self.selected + delta))

    def jump(self, ch: str) -> None:
        if self.boards:
            self.selected = next_matching_index(self.labels, self.selected, ch)

    def submit(self) -> None:
        board = self.selected_board()
        if board is not None and self.on_submit is not None:
            self.on_submit(board)

    # -------- UIControl interface --------

    def is_focusable(self) -> bool:
        return True

    def preferred_width(self, max_available_width: int) -> int:
        widest = max((len(label) for label in self.labels), default=10)
        return min(max_available_width, widest + 1)

    def create_content(self, width: int, height: int) -> UIContent:
        labels = self.labels
        selected = self.selected

        def get_line(i: int):
            style = "class:board-list.selected" if i == selected else "class:board-list"
            return [(style, labels[i].ljust(width)[:width])]

        return UIContent(
            get_line=get_line,
            line_count=len(labels),
            cursor_position=Point(x=0, y=selected),
            show_cursor=False,
        )

    def get_key_bindings(self) -> KeyBindings:
        return self._kb

    def _build_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("up")
        def _(event):
            self.move(-1)

        @kb.add("down")
        def _(event):
            self.move(1)

        @kb.add("pageup")
        def _(event):
            self.move(-10)

        @kb.add("pagedown")
        def _(event):
            self.move(10)

        @kb.add("enter")
        def _(event):
            self.submit()

        for ch in JUMP_KEYS:
            kb.add(ch)(lambda event, ch=ch: self.jump(ch))

        return kb

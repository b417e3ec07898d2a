#!/usr/bin/env python3
# chan_tui/ui/state.py
"""Mutable runtime state for the chan TUI."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from chan_tui.config import Config
from chan_tui.models import Board, BoardsResponse
from chan_tui.rendering.pixels import CellSize, RenderMode, ScaleAlgorithm


@dataclass
class AppState:
    cfg: Config
    boards: BoardsResponse = field(default_factory=BoardsResponse)

    # Settings, seeded from config
    show_nsfw: bool = field(init=False)
    render_mode: RenderMode = field(init=False)
    scale_mode: ScaleAlgorithm = field(init=False)
    thumb_size: CellSize = field(init=False)

    # UI hints
    current_board: Optional[str] = None
    loading: bool = False
    last_load_ms: float = 0.0
    info_msg: str = ""

    # Internal lock for multi-thread updates
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self):
        self.show_nsfw = self.cfg.show_nsfw
        self.render_mode = self.cfg.render_mode
        self.scale_mode = self.cfg.scale_mode
        im = self.cfg["image"]
        self.thumb_size = CellSize(int(im["thumb_cols"]), int(im["thumb_rows"]))

    # ------------- boards -------------

    def visible_boards(self) -> List[Board]:
        return self.boards.visible(self.show_nsfw)

    def toggle_nsfw(self) -> bool:
        with self._lock:
            self.show_nsfw = not self.show_nsfw
            self.cfg["boards"]["show_nsfw"] = self.show_nsfw
            return self.show_nsfw

    # ------------- image settings -------------

    def set_render_mode(self, mode: RenderMode) -> None:
        with self._lock:
            self.render_mode = RenderMode(mode)
            self.cfg["image"]["render_mode"] = self.render_mode.value

    def set_scale_mode(self, mode: ScaleAlgorithm) -> None:
        with self._lock:
            self.scale_mode = ScaleAlgorithm(mode)
            self.cfg["image"]["scale_mode"] = self.scale_mode.value

    # ------------- info -------------

    def set_info(self, msg: str) -> None:
        with self._lock:
            self.info_msg = msg

    def start_load(self, board: str) -> None:
        with self._lock:
            self.loading = True
            self.info_msg = f"Loading /{board}/ ..."

    def finish_load(self, board: str, elapsed_ms: float) -> None:
        with self._lock:
            self.current_board = board
            self.last_load_ms = elapsed_ms
            self.loading = False

    # ------------- export -------------

    def snapshot(self) -> Tuple[RenderMode, ScaleAlgorithm, CellSize]:
        """Settings a load job needs, read atomically."""
        with self._lock:
            return self.render_mode, self.scale_mode, self.thumb_size

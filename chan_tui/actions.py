#!/usr/bin/env python3
# chan_tui/actions.py
"""
Shared action functions used by key bindings and menu entries.
Each action updates AppState and refreshes the affected control.
"""

from __future__ import annotations

from prompt_toolkit.application import get_app_or_none

from chan_tui.models import Board
from chan_tui.rendering.pixels import RenderMode, ScaleAlgorithm
from chan_tui.ui.board_list import BoardListControl
from chan_tui.ui.state import AppState
from chan_tui.ui.thread_list import ThreadListPane


def nsfw_menu_label(show_nsfw: bool) -> str:
    return "Hide NSFW Boards" if show_nsfw else "Show NSFW Boards"


def toggle_nsfw(state: AppState, board_list: BoardListControl) -> str:
    """Flip NSFW visibility, refill the board list, return the new menu label."""
    shown = state.toggle_nsfw()
    board_list.set_boards(state.visible_boards())
    state.set_info("NSFW boards shown" if shown else "NSFW boards hidden")
    return nsfw_menu_label(shown)


def set_scale_mode(state: AppState, mode: ScaleAlgorithm) -> None:
    state.set_scale_mode(mode)
    state.set_info(f"Scale mode {state.scale_mode.value}; reopen a board to apply")


def set_render_mode(state: AppState, mode: RenderMode) -> None:
    state.set_render_mode(mode)
    state.set_info(f"Render mode {state.render_mode.value}; reopen a board to apply")


def open_board(state: AppState, threads: ThreadListPane, board: Board) -> None:
    threads.request_board(board.board)
    app = get_app_or_none()
    if app:
        app.invalidate()


def quit_app():
    app = get_app_or_none()
    if app:
        app.exit()

#!/usr/bin/env python3
# chan_tui/ui/statusbar.py

from __future__ import annotations

from prompt_toolkit.layout import Window
from prompt_toolkit.layout.controls import FormattedTextControl

from chan_tui.ui.state import AppState


class StatusBar:
    def __init__(self, state: AppState):
        self.state = state
        self.window = Window(FormattedTextControl(self.text), height=1, style="class:status")

    def __pt_container__(self):
        return self.window

    def text(self) -> str:
        s = self.state
        board = f"/{s.current_board}/" if s.current_board else "-"
        load = "loading" if s.loading else f"load={s.last_load_ms:.1f}ms"
        return (
            f" board={board} render={s.render_mode.value} scale={s.scale_mode.value} "
            f"nsfw={'on' if s.show_nsfw else 'off'} {load}  {s.info_msg}"
        )

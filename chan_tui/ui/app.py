#!/usr/bin/env python3
# chan_tui/ui/app.py
"""Compose the prompt_toolkit application for the board browser."""

import logging
from functools import partial
from typing import Optional

from prompt_toolkit.application import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.bindings.focus import focus_next, focus_previous
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.widgets import Frame, MenuContainer, MenuItem

from chan_tui import actions
from chan_tui.config import Config
from chan_tui.net import ApiClient, FetchError
from chan_tui.rendering.pixels import RenderMode, ScaleAlgorithm
from chan_tui.rendering.renderer import Renderer
from chan_tui.styles import make_style
from chan_tui.ui.board_list import BoardListControl
from chan_tui.ui.helppane import HelpPane
from chan_tui.ui.state import AppState
from chan_tui.ui.statusbar import StatusBar
from chan_tui.ui.thread_list import ThreadListPane

log = logging.getLogger(__name__)

SCALE_MENU = (
    ("Fast Nearest Neighbor", ScaleAlgorithm.FAST_NEAREST),
    ("Nearest Neighbor", ScaleAlgorithm.NEAREST_EXACT),
    ("Linear", ScaleAlgorithm.LINEAR),
    ("Cubic", ScaleAlgorithm.CUBIC),
    ("Gaussian", ScaleAlgorithm.GAUSSIAN),
    ("Lanczos", ScaleAlgorithm.LANCZOS),
)
RENDER_MENU = (
    ("Color", RenderMode.COLOR),
    ("Grayscale", RenderMode.GRAYSCALE),
    ("GUI (unimplemented!)", RenderMode.GUI),
)


class ChanApp:
    def __init__(self, cfg: Optional[Config] = None, client: Optional[ApiClient] = None):
        self.cfg = cfg or Config.load()
        self.client = client or ApiClient.from_config(self.cfg)
        self.state = AppState(self.cfg)
        self.renderer = Renderer()

        self.threads = ThreadListPane(self.state, self.client, self.renderer)
        self.board_list = BoardListControl(
            on_submit=lambda board: actions.open_board(self.state, self.threads, board)
        )
        self._load_boards()

        self.status = StatusBar(self.state)
        self.help_pane = HelpPane()

        # Layout: boards on the left, threads fill the rest, accessories below.
        self.board_window = Window(content=self.board_list, wrap_lines=False)
        body = HSplit([
            VSplit([
                Frame(self.board_window, title="Boards", width=self._board_width()),
                Frame(self.threads, title="Threads"),
            ]),
            self.status,
            self.help_pane,
        ])

        self.nsfw_item = MenuItem(actions.nsfw_menu_label(self.state.show_nsfw), handler=self._toggle_nsfw)
        self.menu = MenuContainer(
            body=body,
            menu_items=[
                MenuItem("Quit", handler=actions.quit_app),
                MenuItem("Settings", children=[
                    self.nsfw_item,
                    MenuItem("Image Settings", children=[
                        MenuItem("Scale Mode", children=[
                            MenuItem(label, handler=partial(actions.set_scale_mode, self.state, mode))
                            for label, mode in SCALE_MENU
                        ]),
                        MenuItem("Render Mode", children=[
                            MenuItem(label, handler=partial(actions.set_render_mode, self.state, mode))
                            for label, mode in RENDER_MENU
                        ]),
                    ]),
                ]),
                MenuItem("Press [ESC] to access the menu", handler=lambda: None),
            ],
        )

        self.kb = self._build_key_bindings()
        self.app = Application(
            layout=Layout(self.menu, focused_element=self.board_window),
            key_bindings=self.kb,
            full_screen=True,
            style=make_style(self.cfg),
            mouse_support=True,
        )

    def _load_boards(self) -> None:
        try:
            self.state.boards = self.client.load_boards()
        except FetchError as exc:
            log.error("Could not load boards: %s", exc)
            self.state.set_info("Could not load boards list")
        self.board_list.set_boards(self.state.visible_boards())

    def _board_width(self) -> int:
        return min(40, max((len(b.label) for b in self.state.boards.boards), default=20) + 2)

    def _toggle_nsfw(self) -> None:
        self.nsfw_item.text = actions.toggle_nsfw(self.state, self.board_list)

    def _build_key_bindings(self):
        kb = KeyBindings()

        @kb.add("c-q")
        @kb.add("c-c")
        def _(event):
            event.app.exit()

        @kb.add("escape")
        def _(event):
            event.app.layout.focus(self.menu.window)

        @kb.add("tab")
        def _(event):
            focus_next(event)

        @kb.add("s-tab")
        def _(event):
            focus_previous(event)

        @kb.add("f1")
        def _(event):
            self.help_pane.toggle()
            event.app.invalidate()

        return kb

    def run(self):
        try:
            self.app.run()
        finally:
            self.threads.shutdown()
            try:
                self.cfg.save()
            except OSError as exc:
                log.warning("Could not save config: %s", exc)

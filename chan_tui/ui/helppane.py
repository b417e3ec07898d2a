#!/usr/bin/env python3
# chan_tui/ui/helppane.py

from __future__ import annotations

from prompt_toolkit.layout import ConditionalContainer, HSplit
from prompt_toolkit.filters import Condition
from prompt_toolkit.widgets import Frame, TextArea

_HELP_TEXT = (
    "Key Bindings:\n"
    "  ↑ ↓        Move in the board list\n"
    "  a-z 0-9    Jump to the next board starting with that key\n"
    "  Enter      Open board\n"
    "  Tab        Switch between boards and threads\n"
    "  Esc        Open the menu (settings, image modes)\n"
    "  F1         Toggle this help\n"
    "  Ctrl-Q     Quit\n"
)


class HelpPane:
    def __init__(self):
        self._visible = False
        self.text_area = TextArea(
            text=_HELP_TEXT,
            style="class:help",
            read_only=True,
            focusable=False,
        )
        self.frame = Frame(self.text_area, title="Help", style="class:help")
        self.container = ConditionalContainer(HSplit([self.frame]), filter=Condition(lambda: self._visible))

    def __pt_container__(self):
        return self.container

    @property
    def visible(self) -> bool:
        return self._visible

    def toggle(self) -> None:
        self._visible = not self._visible

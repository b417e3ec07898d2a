#!/usr/bin/env python3
# chan_tui/styles.py
"""
Style definitions for the chan TUI.
Provides light, dark, and auto themes for prompt_toolkit.
"""

import os

from prompt_toolkit.styles import Style

from chan_tui.config import Config

BASE_DARK = {
    "status": "bg:#303030 #cccccc",
    "help": "bg:#202020 #dddddd",
    "board-list": "#dddddd",
    "board-list.selected": "reverse bold",
    "thread-subject": "#8888ff bold",
    "divider": "#555555",
    "placeholder": "#888888 italic",
}
BASE_LIGHT = {
    "status": "bg:#cccccc #000000",
    "help": "bg:#eeeeee #000000",
    "board-list": "#000000",
    "board-list.selected": "reverse bold",
    "thread-subject": "#0000aa bold",
    "divider": "#aaaaaa",
    "placeholder": "#666666 italic",
}


def make_style(cfg: Config) -> Style:
    theme = cfg["ui"].get("theme", "auto")

    if theme == "light":
        return Style.from_dict(BASE_LIGHT)
    if theme == "dark":
        return Style.from_dict(BASE_DARK)

    # Auto-detect via environment
    if os.getenv("TERM_THEME", "").lower() == "light":
        return Style.from_dict(BASE_LIGHT)
    return Style.from_dict(BASE_DARK)

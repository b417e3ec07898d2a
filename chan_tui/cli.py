#!/usr/bin/env python3
# chan_tui/cli.py
"""
Entry point for the chan TUI.
Loads configuration, sets up logging and runs ChanApp or the thread watcher.
"""

import argparse
import os
import sys

from chan_tui.config import Config
from chan_tui.logging_conf import setup_logging
from chan_tui.version import version_info


def _watch(cfg: Config, path: str) -> None:
    from chan_tui.net import ApiClient
    from chan_tui.watchlist import ThreadWatcher, load_watch_list

    configs = load_watch_list(path)
    watcher = ThreadWatcher(
        ApiClient.from_config(cfg),
        configs,
        poll_interval=float(cfg["watch"]["poll_interval_s"]),
        request_gap=float(cfg["watch"]["request_gap_s"]),
    )
    try:
        watcher.run()
    except KeyboardInterrupt:
        watcher.stop()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Browse image-board threads in the terminal")
    parser.add_argument("-c", "--config", default=None, help="Path to config JSON (default: per-user config)")
    parser.add_argument(
        "-w", "--watch", nargs="?", const="", default=None, metavar="FILE",
        help="Poll the threads listed in FILE (default: watch.file from config) instead of starting the UI",
    )
    parser.add_argument("--version", action="version", version=version_info())
    args = parser.parse_args(argv)

    cfg = Config.load(args.config)

    if args.watch is not None:
        path = args.watch or cfg["watch"]["file"]
        if not path or not os.path.exists(path):
            print(f"Watch list not found: {path or '(none configured)'}", file=sys.stderr)
            sys.exit(1)
        setup_logging(cfg, console=True)
        _watch(cfg, path)
        return

    if os.name == "nt" and not sys.stdout.isatty():
        print("No Windows console detected. Run from cmd, PowerShell, or Windows Terminal.")
        raise SystemExit(1)

    setup_logging(cfg)
    from chan_tui.ui.app import ChanApp

    ChanApp(cfg).run()


if __name__ == "__main__":
    main()

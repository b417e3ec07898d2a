#!/usr/bin/env python3
# chan_tui/watchlist.py
"""
Thread watch list: parse a list of thread links and poll them for changes.

File format, one thread per line:

    4chan/g/47357   optional display name
    4chan/g/23612

The link must have exactly three "/"-separated parts (site/board/id);
anything else is logged and skipped. The name defaults to the link.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional

from chan_tui.models import Post
from chan_tui.net import ApiClient, FetchError

log = logging.getLogger(__name__)

UNIX_EPOCH = datetime.fromtimestamp(0, timezone.utc)

__all__ = ["ThreadConfig", "ThreadWatcher", "parse_watch_list", "load_watch_list"]


@dataclass
class ThreadConfig:
    board: str
    id: str
    name: str
    last_modified: datetime = field(default=UNIX_EPOCH)


def parse_watch_list(text: str) -> List[ThreadConfig]:
    configs: List[ThreadConfig] = []
    for i, line in enumerate(text.split("\n")):
        parts = line.strip().split(None, 1)
        if not parts:
            continue
        link = parts[0]
        target = link.split("/")
        if len(target) != 3:
            log.info("Unrecognized board link structure at line %d: %s", i, link)
            continue
        name = parts[1].strip() if len(parts) > 1 else link
        configs.append(ThreadConfig(board=target[1], id=target[2], name=name))
    return configs


def load_watch_list(path: str) -> List[ThreadConfig]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_watch_list(f.read())


class ThreadWatcher:
    """
    Poll watched threads with If-Modified-Since until stop() is called.
    on_posts is called with (config, posts) whenever a thread changed.
    """

    def __init__(
        self,
        client: ApiClient,
        configs: List[ThreadConfig],
        poll_interval: float = 20.0,
        request_gap: float = 1.0,
        on_posts: Optional[Callable[[ThreadConfig, List[Post]], None]] = None,
    ):
        self.client = client
        self.configs = configs
        self.poll_interval = poll_interval
        self.request_gap = request_gap
        self.on_posts = on_posts or self._log_posts
        self._lock = threading.Lock()
        self._stop = threading.Event()

    @staticmethod
    def _log_posts(cfg: ThreadConfig, posts: List[Post]) -> None:
        for post in posts:
            log.info("[%s] %s", cfg.name, post)

    def poll_once(self) -> int:
        """One pass over every thread. Returns how many threads changed."""
        changed = 0
        with self._lock:
            for cfg in self.configs:
                if self._stop.is_set():
                    break
                checked_at = datetime.now(timezone.utc)
                try:
                    thread = self.client.get_thread(cfg.board, cfg.id, since=cfg.last_modified)
                except FetchError as exc:
                    log.warning("Polling /%s/%s failed: %s", cfg.board, cfg.id, exc)
                    thread = None
                else:
                    cfg.last_modified = checked_at
                if thread is not None:
                    changed += 1
                    self.on_posts(cfg, thread.posts)
                # avoid spamming the API
                self._stop.wait(self.request_gap)
        return changed

    def run(self) -> None:
        log.info("Watch daemon started with these threads:")
        for cfg in self.configs:
            log.info('Thread "%s" in board "%s" with name "%s"', cfg.id, cfg.board, cfg.name)
        while not self._stop.is_set():
            self.poll_once()
            self._stop.wait(self.poll_interval)

    def stop(self) -> None:
        self._stop.set()

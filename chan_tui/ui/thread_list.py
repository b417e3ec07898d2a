#!/usr/bin/env python3
# chan_tui/ui/thread_list.py
"""Thread list pane: loads a board's catalog and thumbnails off the UI thread."""

from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional

from prompt_toolkit.application import get_app_or_none
from prompt_toolkit.layout import DynamicContainer, HSplit, ScrollablePane, VSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl

from chan_tui.models import Post
from chan_tui.net import ApiClient, FetchError
from chan_tui.rendering.errors import RenderError, UnimplementedMode
from chan_tui.rendering.pixels import CellSize, RenderMode, ScaleAlgorithm
from chan_tui.rendering.renderer import RenderedImage, Renderer
from chan_tui.ui.image_control import image_window
from chan_tui.ui.state import AppState

log = logging.getLogger(__name__)

NO_THUMBNAIL = "[no thumbnail]"
UNIMPLEMENTED = "[render mode not implemented]"


@dataclass
class ThreadEntry:
    post: Post
    image: Optional[RenderedImage] = None
    note: str = ""


@dataclass
class BoardLoad:
    board: str
    entries: List[ThreadEntry] = field(default_factory=list)
    elapsed_ms: float = 0.0
    error: Optional[str] = None


def load_board(
    client: ApiClient,
    renderer: Renderer,
    board: str,
    mode: RenderMode,
    scale: ScaleAlgorithm,
    cell: CellSize,
) -> BoardLoad:
    """Fetch a board's threads and render each OP thumbnail. Blocking."""
    t0 = time.perf_counter()
    try:
        posts = client.get_threads_for_board(board)
    except FetchError as exc:
        log.error("Loading /%s/ failed: %s", board, exc)
        return BoardLoad(board, error=str(exc), elapsed_ms=(time.perf_counter() - t0) * 1000.0)

    try:
        renderer.backend_for(mode)
        mode_note = ""
    except UnimplementedMode as exc:
        log.warning("%s; thumbnails skipped", exc)
        mode_note = UNIMPLEMENTED

    entries: List[ThreadEntry] = []
    for post in posts:
        entry = ThreadEntry(post)
        if post.has_thumbnail:
            if mode_note:
                entry.note = mode_note
            else:
                try:
                    data = client.get_thumbnail(board, post.attachment.tim)
                    entry.image = renderer.render(data, cell, scale, mode)
                except (FetchError, RenderError) as exc:
                    log.warning("Thumbnail for /%s/%d failed: %s", board, post.no, exc)
                    entry.note = NO_THUMBNAIL
        entries.append(entry)
    return BoardLoad(board, entries, elapsed_ms=(time.perf_counter() - t0) * 1000.0)


class ThreadListPane:
    """Scrollable list of thread panels fed by a background worker."""

    def __init__(self, state: AppState, client: ApiClient, renderer: Renderer):
        self.state = state
        self.client = client
        self.renderer = renderer

        self._req_q: queue.Queue = queue.Queue(maxsize=2)
        self._res_q: queue.Queue = queue.Queue(maxsize=1)
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._load_worker, daemon=True)
        self._thread.start()

        self._body = self._placeholder("Select a board and press Enter.")
        self._container = DynamicContainer(self._get_container)

    def __pt_container__(self):
        return self._container

    # -------- worker logic --------

    def request_board(self, board: str) -> None:
        mode, scale, cell = self.state.snapshot()
        self.state.start_load(board)
        with self._req_q.mutex:
            self._req_q.queue.clear()
        try:
            self._req_q.put_nowait((board, mode, scale, cell))
        except queue.Full:
            pass

    def _load_worker(self) -> None:
        while not self._stop.is_set():
            try:
                job = self._req_q.get(timeout=0.2)
            except queue.Empty:
                continue

            if job is None or self._stop.is_set():
                break

            board, mode, scale, cell = job
            result = load_board(self.client, self.renderer, board, mode, scale, cell)

            with self._res_q.mutex:
                self._res_q.queue.clear()
            try:
                self._res_q.put_nowait(result)
            except queue.Full:
                pass

            app = get_app_or_none()
            if app:
                app.invalidate()

    # -------- helpers --------

    def _drain_results(self) -> Optional[BoardLoad]:
        result: Optional[BoardLoad] = None
        while True:
            try:
                result = self._res_q.get_nowait()
            except queue.Empty:
                break
        return result

    def _get_container(self):
        result = self._drain_results()
        if result is not None:
            self.show(result)
        return self._body

    def show(self, result: BoardLoad) -> None:
        self.state.finish_load(result.board, result.elapsed_ms)
        if result.error:
            self.state.set_info(f"/{result.board}/ failed: {result.error}")
            self._body = self._placeholder(f"Could not load /{result.board}/.")
            return
        notes = {e.note for e in result.entries if e.note}
        if UNIMPLEMENTED in notes:
            self.state.set_info(f"{self.state.render_mode.value} render mode is not implemented")
        else:
            self.state.set_info(f"/{result.board}/: {len(result.entries)} threads")
        self._body = self._build_body(result.entries)

    @staticmethod
    def _placeholder(text: str):
        return Window(FormattedTextControl(text), style="class:placeholder")

    @staticmethod
    def _thread_panel(entry: ThreadEntry):
        children = []
        if entry.image is not None or entry.note:
            children.append(image_window(entry.image, entry.note))
        children.append(
            Window(
                FormattedTextControl([("class:thread-subject", entry.post.subject)], focusable=True),
                dont_extend_height=True,
            )
        )
        return VSplit(children, padding=1)

    def _build_body(self, entries: List[ThreadEntry]):
        if not entries:
            return self._placeholder("No threads.")
        rows = []
        for i, entry in enumerate(entries):
            if i:
                rows.append(Window(height=1, char="-", style="class:divider"))
            rows.append(self._thread_panel(entry))
        return ScrollablePane(HSplit(rows))

    # -------- lifecycle --------

    def shutdown(self) -> None:
        self._stop.set()
        with self._req_q.mutex:
            self._req_q.queue.clear()
        try:
            self._req_q.put_nowait(None)
        except queue.Full:
            pass
        self._thread.join(timeout=0.5)

import threading

import pytest

from chan_tui.config import Config
from chan_tui.models import Post
from chan_tui.net import FetchError
from chan_tui.rendering.pixels import CellSize, RenderMode, ScaleAlgorithm
from chan_tui.rendering.renderer import Renderer
from chan_tui.ui.state import AppState
from chan_tui.ui.thread_list import NO_THUMBNAIL, UNIMPLEMENTED, BoardLoad, ThreadEntry, ThreadListPane, load_board

from conftest import solid_png

CELL = CellSize(4, 2)


def _post(no, tim=None, sub=None):
    d = {"no": no, "resto": 0, "time": 0, "replies": 0, "images": 0}
    if tim is not None:
        d["tim"] = tim
    if sub is not None:
        d["sub"] = sub
    return Post.from_json(d)


class FakeClient:
    def __init__(self, posts, thumbs=None):
        self.posts = posts
        self.thumbs = thumbs or {}
        self.thumb_calls = []

    def get_threads_for_board(self, board):
        if isinstance(self.posts, Exception):
            raise self.posts
        return self.posts

    def get_thumbnail(self, board, tim):
        self.thumb_calls.append((board, tim))
        data = self.thumbs[tim]
        if isinstance(data, Exception):
            raise data
        return data


def test_load_board_renders_thumbnails():
    client = FakeClient(
        [_post(1, tim=10, sub="hello"), _post(2), _post(3, tim=30), _post(4, tim=40)],
        {10: solid_png(8, 8), 30: FetchError("404"), 40: b"not an image"},
    )
    result = load_board(client, Renderer(), "g", RenderMode.COLOR, ScaleAlgorithm.LINEAR, CELL)
    assert result.error is None
    assert [e.post.no for e in result.entries] == [1, 2, 3, 4]

    first, no_file, missing, broken = result.entries
    assert first.image.required_size() == (4, 2)
    assert first.image.styled
    assert no_file.image is None and no_file.note == ""
    assert missing.image is None and missing.note == NO_THUMBNAIL
    assert broken.image is None and broken.note == NO_THUMBNAIL


def test_load_board_grayscale():
    client = FakeClient([_post(1, tim=10)], {10: solid_png(8, 8, (255, 255, 255, 255))})
    result = load_board(client, Renderer(), "g", RenderMode.GRAYSCALE, ScaleAlgorithm.FAST_NEAREST, CELL)
    assert result.entries[0].image.text() == "████\n████"


def test_load_board_gui_skips_thumbnails():
    client = FakeClient([_post(1, tim=10), _post(2)])
    result = load_board(client, Renderer(), "g", RenderMode.GUI, ScaleAlgorithm.LINEAR, CELL)
    assert client.thumb_calls == []
    assert result.entries[0].note == UNIMPLEMENTED
    assert result.entries[1].note == ""


def test_load_board_catalog_failure():
    client = FakeClient(FetchError("offline"))
    result = load_board(client, Renderer(), "g", RenderMode.COLOR, ScaleAlgorithm.LINEAR, CELL)
    assert result.entries == []
    assert "offline" in result.error


@pytest.fixture
def pane(tmp_path):
    state = AppState(Config.load(str(tmp_path / "chan_tui.json")))
    pane = ThreadListPane(state, FakeClient([]), Renderer())
    yield pane
    pane.shutdown()


def test_show_updates_state(pane):
    pane.state.loading = True
    pane.show(BoardLoad("g", [ThreadEntry(_post(1, sub="x"))], elapsed_ms=12.5))
    assert pane.state.current_board == "g"
    assert pane.state.loading is False
    assert pane.state.last_load_ms == 12.5
    assert pane.state.info_msg == "/g/: 1 threads"


def test_show_error(pane):
    pane.show(BoardLoad("g", error="offline"))
    assert pane.state.info_msg == "/g/ failed: offline"


def test_show_unimplemented(pane):
    pane.state.set_render_mode(RenderMode.GUI)
    pane.show(BoardLoad("g", [ThreadEntry(_post(1, tim=1), note=UNIMPLEMENTED)]))
    assert pane.state.info_msg == "gui render mode is not implemented"


def test_request_board_marks_loading(pane):
    pane.request_board("po")
    assert pane.state.loading is True
    assert pane.state.info_msg == "Loading /po/ ..."


def test_start_load_takes_state_lock(tmp_path):
    state = AppState(Config.load(str(tmp_path / "chan_tui.json")))
    with state._lock:
        worker = threading.Thread(target=state.start_load, args=("g",))
        worker.start()
        worker.join(timeout=0.1)
        assert worker.is_alive()
        assert state.loading is False
    worker.join(timeout=1.0)
    assert state.loading is True

import pytest

from chan_tui.models import Board
from chan_tui.ui.board_list import BoardListControl, next_matching_index

LABELS = ["/a/: Anime", "/b/: Random", "/biz/: Business", "/c/: Cute", "/3/: 3DCG"]


@pytest.mark.parametrize("current, ch, expected", [
    (0, "b", 1),
    (1, "b", 2),
    (2, "b", 1),     # wraps past the end
    (0, "3", 4),
    (4, "a", 0),
    (3, "z", 3),     # no match keeps the selection
    (0, "B", 1),
])
def test_next_matching_index(current, ch, expected):
    assert next_matching_index(LABELS, current, ch) == expected


def test_single_match_is_stable():
    assert next_matching_index(LABELS, 3, "c") == 3


def _boards(*slugs):
    return [Board(board=s, title=s.upper()) for s in slugs]


def test_move_clamps():
    ctl = BoardListControl()
    ctl.set_boards(_boards("a", "b", "c"))
    ctl.move(-1)
    assert ctl.selected == 0
    ctl.move(10)
    assert ctl.selected == 2


def test_empty_list_is_inert():
    submitted = []
    ctl = BoardListControl(on_submit=submitted.append)
    ctl.move(1)
    ctl.jump("a")
    ctl.submit()
    assert ctl.selected_board() is None
    assert submitted == []
    assert ctl.create_content(10, 5).line_count == 0


def test_jump_and_submit():
    submitted = []
    ctl = BoardListControl(on_submit=submitted.append)
    ctl.set_boards(_boards("a", "g", "gif", "po"))
    ctl.jump("g")
    ctl.jump("g")
    ctl.submit()
    assert [b.board for b in submitted] == ["gif"]


def test_set_boards_keeps_selection():
    ctl = BoardListControl()
    ctl.set_boards(_boards("a", "g", "po"))
    ctl.jump("p")
    ctl.set_boards(_boards("a", "b", "g", "po"))
    assert ctl.selected_board().board == "po"
    ctl.set_boards(_boards("a", "g"))
    assert ctl.selected == 0


def test_content_highlights_selection():
    ctl = BoardListControl()
    ctl.set_boards(_boards("a", "g"))
    ctl.move(1)
    content = ctl.create_content(12, 5)
    assert content.get_line(0) == [("class:board-list", "/a/: A".ljust(12))]
    assert content.get_line(1) == [("class:board-list.selected", "/g/: G".ljust(12))]

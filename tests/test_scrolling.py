"""Tests for viewport scrolling."""

from wikiview.actions import (
    ScrollDown,
    ScrollHalfDown,
    ScrollHalfUp,
    ScrollToBottom,
    ScrollToTop,
    ScrollUp,
    ToggleContents,
)
from wikiview.view import PageView


def _view(page, height=10):
    view = PageView(page)
    view.resize(80, height)
    return view


def test_long_page_layout(long_page):
    view = _view(long_page)
    # Blank row, then paragraph and blank row for each of the 30 paragraphs
    assert len(view.render()) == 61
    assert view.render().line_text(1) == "Paragraph 1."


def test_scroll_down_clamps_at_bottom(long_page):
    view = _view(long_page)
    view.update(ScrollDown(5))
    assert view.viewport.y == 5
    view.update(ScrollDown(100))
    assert view.viewport.y == 51


def test_scroll_up_clamps_at_top(long_page):
    view = _view(long_page)
    view.update(ScrollUp(3))
    assert view.viewport.y == 0
    view.update(ScrollDown(20))
    view.update(ScrollUp(5))
    assert view.viewport.y == 15


def test_half_page(long_page):
    view = _view(long_page, height=10)
    view.update(ScrollHalfDown())
    view.update(ScrollHalfDown())
    assert view.viewport.y == 10
    view.update(ScrollHalfUp())
    assert view.viewport.y == 5


def test_top_and_bottom(long_page):
    view = _view(long_page)
    view.update(ScrollToBottom())
    assert view.viewport.y == 51
    view.update(ScrollToTop())
    assert view.viewport.y == 0


def test_short_page_does_not_scroll(intro_page):
    view = _view(intro_page, height=20)
    view.update(ScrollDown(3))
    view.update(ScrollToBottom())
    assert view.viewport.y == 0


def test_resize_clamps_offset(long_page):
    view = _view(long_page)
    view.update(ScrollToBottom())
    view.resize(80, 40)
    assert view.viewport.y == 21


def test_scrolling_moves_contents_cursor_when_focused(intro_page):
    view = _view(intro_page, height=2)
    view.update(ToggleContents())
    assert view.is_contents

    view.update(ScrollDown(1))
    assert view.contents_state.selected == 1
    assert view.viewport.y == 0
    # Wraps around at both ends
    view.update(ScrollDown(1))
    assert view.contents_state.selected == 0
    view.update(ScrollUp(1))
    assert view.contents_state.selected == 1


def test_visible_lines_window(long_page):
    view = _view(long_page)
    view.update(ScrollDown(5))
    rows = view.visible_lines()
    assert len(rows) == 10
    texts = ["".join(span.text for span in row) for row in rows]
    assert texts == view.render().text_lines()[5:15]


def test_title_row_at_top(long_page):
    view = _view(long_page)
    rows = view.visible_lines()
    assert len(rows) == 10
    assert [span.text for span in rows[0]] == ["Long page"]
    assert "".join(span.text for span in rows[2]) == "Paragraph 1."


def test_scrollbar_state(long_page):
    view = _view(long_page)
    view.update(ScrollDown(7))
    assert view.scrollbar_state() == (51, 7)

"""Tests for jumping to a header by its anchor."""

import logging

from wikiview.actions import GoToHeader, LoadPage, SelectFirstLink
from wikiview.constants import ViewerConstants
from wikiview.document import DocumentBuilder, NodeKind, Page
from wikiview.model import Selection
from wikiview.view import PageView


def test_intro_scenario(intro_page):
    view = PageView(intro_page)
    view.resize(40, 3)

    view.update(SelectFirstLink())
    assert view.selected == Selection(5, 6)
    assert view.open_link().action == LoadPage("Other page")

    view.update(GoToHeader("intro"))
    # The header text, not the paragraph after it
    assert view.viewport.y == 1
    assert view.render().line_text(view.viewport.y) == "Intro"


def test_top_anchor_snaps_to_start(long_page):
    view = PageView(long_page)
    view.resize(80, 10)
    view.scroll_down(20)
    view.select_header(ViewerConstants.TOP_ANCHOR)
    assert view.viewport.y == 0


def test_unknown_anchor_leaves_offset(long_page, caplog):
    view = PageView(long_page)
    view.resize(80, 10)
    view.scroll_down(7)
    with caplog.at_level(logging.WARNING, logger="wikiview.view"):
        view.select_header("Missing")
    assert view.viewport.y == 7
    assert "Missing" in caplog.text


def test_header_found_after_rewrap():
    builder = DocumentBuilder()
    with builder.node(NodeKind.SECTION):
        with builder.node(NodeKind.PARAGRAPH):
            builder.text("word " * 40)
        with builder.node(NodeKind.HEADER, anchor="History", level=2):
            builder.text("History")
    view = PageView(Page(title="Rewrap", content=builder.build()))

    view.resize(80, 2)
    view.select_header("History")
    wide = view.viewport.y
    assert view.render().line_text(wide) == "History"

    view.resize(20, 2)
    view.select_header("History")
    assert view.viewport.y > wide
    assert view.render().line_text(view.viewport.y) == "History"


def test_empty_page_has_no_headers():
    view = PageView(Page(title="Empty", content=DocumentBuilder().build()))
    view.resize(80, 10)
    view.select_header("intro")
    assert view.viewport.y == 0

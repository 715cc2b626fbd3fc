"""Disambiguation notices are indented, marked and set apart by blank lines."""

from wikiview.constants import ViewerConstants
from wikiview.document import DocumentBuilder, NodeKind
from wikiview.model import Modifier, line_width
from wikiview.renderer import render_document


def _notice_document():
    builder = DocumentBuilder()
    with builder.node(NodeKind.SECTION):
        with builder.node(NodeKind.PARAGRAPH):
            builder.text("Before.")
        with builder.node(NodeKind.DISAMBIGUATION):
            builder.text("For the hardware devices, see ")
            with builder.node(NodeKind.WIKI_LINK, page="Computer terminal"):
                builder.text("terminal")
            builder.text(".")
        with builder.node(NodeKind.PARAGRAPH):
            builder.text("After.")
    return builder.build()


def test_notice_at_width_20():
    rendered = render_document(_notice_document(), 20)
    lines = rendered.text_lines()
    marker = " " * ViewerConstants.DISAMBIGUATION_PADDING + ViewerConstants.DISAMBIGUATION_PREFIX + " "

    notice = [i for i, text in enumerate(lines) if text.startswith(marker)]
    assert len(notice) >= 2
    # One contiguous block
    assert notice == list(range(notice[0], notice[-1] + 1))

    # Exactly one blank line before and after
    assert lines[notice[0] - 1] == ""
    assert lines[notice[0] - 2] != ""
    assert lines[notice[-1] + 1] == ""
    assert lines[notice[-1] + 2] != ""

    for y in notice:
        assert line_width(rendered[y]) <= 20
    assert [text.rstrip() for text in lines] == [
        "",
        "Before.",
        "",
        " | For the hardware",
        " | devices, see",
        " | terminal.",
        "",
        "After.",
        "",
    ]


def test_notice_text_is_italic_and_marker_is_synthetic():
    rendered = render_document(_notice_document(), 20)
    for line in rendered:
        if not line or line[0].content == "Before.":
            continue
        if line[0].content == "After.":
            break
        padding, prefix, *words = line
        assert padding.is_synthetic and prefix.is_synthetic
        for word in words:
            assert word.style.has(Modifier.ITALIC)


def test_padding_does_not_leak_after_notice():
    rendered = render_document(_notice_document(), 20)
    after = [line for line in rendered if line and line[0].content == "After."]
    assert len(after) == 1
    assert not after[0][0].style.has(Modifier.ITALIC)


def test_unbreakable_word_overflows_notice_margin():
    builder = DocumentBuilder()
    with builder.node(NodeKind.SECTION), builder.node(NodeKind.DISAMBIGUATION):
        builder.text("abcdefghijklmnopqr")
    rendered = render_document(builder.build(), 20)

    notice = [line for line in rendered if any(word.content == "abcdefghijklmnopqr" for word in line)]
    assert len(notice) == 1
    # Padding and marker stay, and the single word runs past the width
    assert notice[0][0].is_synthetic and notice[0][1].is_synthetic
    assert line_width(notice[0]) == 21

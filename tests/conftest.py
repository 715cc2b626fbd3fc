"""Shared documents and pages for the wikiview tests."""

import pytest

from wikiview.document import DocumentBuilder, Language, NodeKind, Page, Section


def build_intro_document():
    """Header "Intro" followed by a paragraph with one internal link.

    Node indices: 0 section, 1 header, 2 text, 3 paragraph, 4 text,
    5 wiki link, 6 link text, 7 text.
    """
    builder = DocumentBuilder()
    with builder.node(NodeKind.SECTION):
        with builder.node(NodeKind.HEADER, anchor="intro", level=2):
            builder.text("Intro")
        with builder.node(NodeKind.PARAGRAPH):
            builder.text("See the ")
            with builder.node(NodeKind.WIKI_LINK, page="Other page", title="Other page"):
                builder.text("other page")
            builder.text(".")
    return builder.build()


def build_links_document():
    """One paragraph holding three links of different kinds.

    Node indices: 0 section, 1 paragraph, 2 text, 3 wiki link, 4 text,
    5 text, 6 external link, 7 text, 8 text, 9 red link, 10 bold, 11 text,
    12 text.
    """
    builder = DocumentBuilder()
    with builder.node(NodeKind.SECTION):
        with builder.node(NodeKind.PARAGRAPH):
            builder.text("Links to ")
            with builder.node(NodeKind.WIKI_LINK, page="Alpha"):
                builder.text("alpha")
            builder.text(", ")
            with builder.node(NodeKind.EXTERNAL_LINK, href="https://example.org/beta"):
                builder.text("beta")
            builder.text(" and ")
            with builder.node(NodeKind.RED_LINK, title="Gamma"):
                with builder.node(NodeKind.BOLD):
                    builder.text("gamma")
            builder.text(".")
    return builder.build()


def build_long_document(paragraphs=30, with_links=False):
    """Section of numbered one-line paragraphs.

    Rendered at width 80 the paragraph n lands on row 2n - 1, with blank
    rows in between and around.
    """
    builder = DocumentBuilder()
    with builder.node(NodeKind.SECTION):
        for n in range(1, paragraphs + 1):
            with builder.node(NodeKind.PARAGRAPH):
                if with_links:
                    builder.text(f"Paragraph {n} links to ")
                    with builder.node(NodeKind.WIKI_LINK, page=f"Page {n}"):
                        builder.text(f"page {n}")
                else:
                    builder.text(f"Paragraph {n}.")
    return builder.build()


@pytest.fixture
def intro_document():
    return build_intro_document()


@pytest.fixture
def links_document():
    return build_links_document()


@pytest.fixture
def intro_page():
    return Page(
        title="Intro page",
        content=build_intro_document(),
        language=Language("en", "English"),
        sections=[
            Section("", "(Top)", "Content_Top"),
            Section("1", "Intro", "intro"),
        ],
        available_languages=3,
    )


@pytest.fixture
def long_page():
    return Page(title="Long page", content=build_long_document())


@pytest.fixture
def linked_page():
    return Page(title="Linked page", content=build_long_document(20, with_links=True))

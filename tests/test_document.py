"""Tests for the document tree and its containment ranges."""

import pytest

from wikiview.document import Document, DocumentBuilder, NodeKind


def _walk(node):
    """All strict descendants, found through the parent/child links only."""
    for child in node.children():
        yield child
        yield from _walk(child)


def _build_deep_tree(depth, siblings):
    builder = DocumentBuilder()

    def nest(level):
        for i in range(siblings):
            if level < depth and i == siblings // 2:
                with builder.node(NodeKind.SPAN):
                    nest(level + 1)
            else:
                builder.text(f"leaf {level}.{i}")

    with builder.node(NodeKind.SECTION):
        nest(0)
    return builder.build()


def test_indices_follow_document_order(intro_document):
    kinds = [node.kind for node in intro_document.nodes()]
    assert kinds == [
        NodeKind.SECTION,
        NodeKind.HEADER,
        NodeKind.TEXT,
        NodeKind.PARAGRAPH,
        NodeKind.TEXT,
        NodeKind.WIKI_LINK,
        NodeKind.TEXT,
        NodeKind.TEXT,
    ]
    assert [node.index for node in intro_document.nodes()] == list(range(8))


def test_parent_and_children(intro_document):
    paragraph = intro_document.nth(3)
    assert [child.index for child in paragraph.children()] == [4, 5, 7]
    assert paragraph.parent() == intro_document.root
    assert intro_document.root.parent() is None
    assert paragraph.last_child().index == 7


def test_last_descendant_reaches_nested_nodes(links_document):
    red_link = links_document.nth(9)
    # The link's only child is the bold span, whose text is the deepest node
    assert red_link.last_child().index == 10
    assert red_link.last_descendant().index == 11
    assert red_link.containment_range() == (9, 11)
    assert red_link.contains(11)
    assert not red_link.contains(12)


def test_containment_holds_for_deep_trees():
    document = _build_deep_tree(depth=40, siblings=3)
    for node in document.nodes():
        first, last = node.containment_range()
        for descendant in _walk(node):
            assert first <= descendant.index <= last
        # Nothing outside the subtree falls into the range
        inside = {node.index} | {d.index for d in _walk(node)}
        assert inside == set(range(first, last + 1))


def test_descendants_include_self(intro_document):
    header = intro_document.nth(1)
    assert [node.index for node in header.descendants()] == [1, 2]


def test_depth(links_document):
    assert links_document.root.depth() == 0
    assert links_document.nth(11).depth() == 4


def test_nth_out_of_range(intro_document):
    assert intro_document.nth(8) is None
    assert intro_document.nth(-1) is None


def test_empty_document():
    document = Document()
    assert document.is_empty()
    assert document.root is None
    assert len(document) == 0
    assert list(document.nodes()) == []


def test_builder_rejects_second_root():
    builder = DocumentBuilder()
    builder.text("first")
    with pytest.raises(ValueError):
        builder.text("second")


def test_builder_rejects_build_inside_open_node():
    builder = DocumentBuilder()
    with builder.node(NodeKind.SECTION):
        with pytest.raises(ValueError):
            builder.build()


def test_from_dict_maps_payload():
    document = Document.from_dict({
        "kind": "section",
        "children": [
            {"kind": "header", "anchor": "History", "level": 2,
             "children": [{"kind": "text", "text": "History"}]},
            {"kind": "external_link", "href": "https://example.org", "autonumber": True,
             "children": [{"kind": "text", "text": "site"}]},
            {"kind": "marquee"},
        ],
    })
    assert len(document) == 6
    header = document.nth(1)
    assert header.data.anchor == "History"
    assert header.data.level == 2
    assert document.nth(2).data.contents == "History"
    link = document.nth(3)
    assert link.data.is_link
    assert link.data.href == "https://example.org"
    assert link.data.autonumber is True
    assert document.nth(5).kind == NodeKind.UNKNOWN


def test_from_dict_without_tree():
    assert Document.from_dict(None).is_empty()

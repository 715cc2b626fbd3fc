"""Link selection movement over the document tree.

Every function returns the new Selection, or None when there is nothing to
move to; callers keep their current selection in that case.
"""

import logging
from typing import Optional

from .document import Document, Node, NodeKind
from .model import RenderedDocument, Selection

logger = logging.getLogger(__name__)


def _links(document: Document) -> list[Node]:
    if document.is_empty():
        return []
    return [node for node in document.nodes() if node.data.is_link]


def select_first(document: Document) -> Optional[Selection]:
    links = _links(document)
    if not links:
        logger.debug("no link to select in the document")
        return None
    return Selection.of(links[0])


def select_last(document: Document) -> Optional[Selection]:
    links = _links(document)
    if not links:
        logger.debug("no link to select in the document")
        return None
    return Selection.of(links[-1])


def select_next(document: Document, current: Selection) -> Optional[Selection]:
    """First link starting after the current selection."""
    for node in _links(document):
        if node.index > current.last:
            return Selection.of(node)
    logger.debug(f"no link after index '{current.last}'")
    return None


def select_prev(document: Document, current: Selection) -> Optional[Selection]:
    """Last link starting before the current selection."""
    found = None
    for node in _links(document):
        if node.index >= current.first:
            break
        found = node
    if found is None:
        logger.debug(f"no link before index '{current.first}'")
        return None
    return Selection.of(found)


def _visible_links(document: Document, rendered: RenderedDocument,
                   top: int, bottom: int) -> list[Node]:
    indices = set()
    for line in rendered.lines[max(top, 0):max(bottom, 0)]:
        for word in line:
            if word.index is not None:
                indices.add(word.index)
    visible = []
    for node in _links(document):
        first, last = node.containment_range()
        if any(first <= index <= last for index in indices):
            visible.append(node)
    return visible


def select_top(document: Document, rendered: RenderedDocument,
               top: int, bottom: int) -> Optional[Selection]:
    """First link with text on the visible rows [top, bottom)."""
    links = _visible_links(document, rendered, top, bottom)
    if not links:
        logger.debug(f"no link visible between rows '{top}' and '{bottom}'")
        return None
    return Selection.of(links[0])


def select_bottom(document: Document, rendered: RenderedDocument,
                  top: int, bottom: int) -> Optional[Selection]:
    """Last link with text on the visible rows [top, bottom)."""
    links = _visible_links(document, rendered, top, bottom)
    if not links:
        logger.debug(f"no link visible between rows '{top}' and '{bottom}'")
        return None
    return Selection.of(links[-1])


def link_target(document: Document, selection: Selection) -> Optional[str]:
    """Target page of the selected node if it is an internal link."""
    node = document.nth(selection.first)
    if node is None or node.kind != NodeKind.WIKI_LINK:
        return None
    return node.data.page

"""Renders a document tree into wrapped lines of styled words."""

import logging
from dataclasses import replace
from enum import Enum

from .constants import ViewerConstants
from .context import Context, StyleContext
from .document import Document, Node, NodeKind
from .model import Modifier, RenderedDocument, Style, Word, display_width
from .wrap import LineWrapper

logger = logging.getLogger(__name__)

# Kinds surrounded by exactly one blank line
BLOCK_KINDS = frozenset({
    NodeKind.SECTION,
    NodeKind.HEADER,
    NodeKind.DIVISION,
    NodeKind.PARAGRAPH,
    NodeKind.HATNOTE,
    NodeKind.REDIRECT_MESSAGE,
    NodeKind.DISAMBIGUATION,
    NodeKind.ORDERED_LIST,
    NodeKind.UNORDERED_LIST,
    NodeKind.LIST_ITEM,
    NodeKind.DESCRIPTION_LIST,
    NodeKind.DESCRIPTION_LIST_TERM,
    NodeKind.DESCRIPTION_LIST_DESCRIPTION,
})

LINK_STYLES = {
    NodeKind.WIKI_LINK: (Context.WIKI_LINK, Modifier.UNDERLINED),
    NodeKind.RED_LINK: (Context.RED_LINK, Modifier.ITALIC | Modifier.UNDERLINED),
    NodeKind.MEDIA_LINK: (Context.MEDIA_LINK, Modifier.ITALIC | Modifier.UNDERLINED),
    NodeKind.EXTERNAL_LINK: (Context.EXTERNAL_LINK, Modifier.ITALIC | Modifier.UNDERLINED),
}


class Renderer:
    """Visitor holding all transient layout state of a single render."""

    def __init__(self, document: Document, width: int):
        self.document = document
        self.context = StyleContext()
        self.wrapper = LineWrapper(width)

    def render(self) -> RenderedDocument:
        root = self.document.root
        if root is None:
            logger.warning("document contains no nodes, aborting the render")
            return RenderedDocument()
        self.render_node(root)
        return self.wrapper.finish()

    def render_node(self, node: Node):
        self.enter(node)
        for child in node.children():
            self.render_node(child)
        self.exit(node)

    def enter(self, node: Node):
        handler = _ENTER.get(node.kind)
        if handler is not None:
            handler(self, node)
        if node.kind in BLOCK_KINDS:
            self.wrapper.ensure_empty_line()

    def exit(self, node: Node):
        handler = _EXIT.get(node.kind)
        if handler is not None:
            handler(self, node)
        if node.kind in BLOCK_KINDS:
            self.wrapper.ensure_empty_line()

    # Enter hooks

    def _enter_header(self, node: Node):
        self.context.push(Context.HEADER)
        self.context.add_modifier(Modifier.BOLD)

    def _enter_text(self, node: Node):
        contents = node.data.contents or ""
        # Drop the gap an inline element left in front of trailing punctuation
        if contents.startswith(ViewerConstants.CLOSING_PUNCTUATION):
            self.wrapper.retract_whitespace()

        style = self.context.current_style()
        words = [
            Word(node.index, part, style, float(display_width(part)), 1.0)
            for part in contents.split()
        ]
        if words and not contents[-1:].isspace():
            words[-1] = replace(words[-1], whitespace_width=0.0)

        self.wrapper.wrap_append(words)

    def _enter_reflink(self, node: Node):
        self.context.push(Context.REFLINK)
        self.context.add_modifier(Modifier.ITALIC)

    def _enter_disambiguation(self, node: Node):
        self.context.add_modifier(Modifier.ITALIC)
        self.wrapper.left_padding += ViewerConstants.DISAMBIGUATION_PADDING
        self.wrapper.prefix = ViewerConstants.DISAMBIGUATION_PREFIX

    def _enter_bold(self, node: Node):
        self.context.add_modifier(Modifier.BOLD)

    def _enter_italic(self, node: Node):
        self.context.add_modifier(Modifier.ITALIC)

    def _enter_link(self, node: Node):
        context, modifier = LINK_STYLES[node.kind]
        self.context.push(context)
        self.context.add_modifier(modifier)

    # Exit hooks

    def _exit_header(self, node: Node):
        self.context.remove_modifier(Modifier.BOLD)
        self.context.pop()

    def _exit_span(self, node: Node):
        self.wrapper.add_whitespace()

    def _exit_reflink(self, node: Node):
        self.wrapper.add_whitespace()
        self.context.pop()
        self.context.remove_modifier(Modifier.ITALIC)

    def _exit_disambiguation(self, node: Node):
        self.context.remove_modifier(Modifier.ITALIC)
        self.wrapper.left_padding = max(
            0, self.wrapper.left_padding - ViewerConstants.DISAMBIGUATION_PADDING)
        self.wrapper.prefix = None

    def _exit_bold(self, node: Node):
        self.context.remove_modifier(Modifier.BOLD)

    def _exit_italic(self, node: Node):
        self.context.remove_modifier(Modifier.ITALIC)

    def _exit_link(self, node: Node):
        _, modifier = LINK_STYLES[node.kind]
        self.context.pop()
        self.context.remove_modifier(modifier)
        self.wrapper.add_whitespace()


_ENTER = {
    NodeKind.HEADER: Renderer._enter_header,
    NodeKind.TEXT: Renderer._enter_text,
    NodeKind.REFLINK: Renderer._enter_reflink,
    NodeKind.DISAMBIGUATION: Renderer._enter_disambiguation,
    NodeKind.BOLD: Renderer._enter_bold,
    NodeKind.ITALIC: Renderer._enter_italic,
    NodeKind.WIKI_LINK: Renderer._enter_link,
    NodeKind.RED_LINK: Renderer._enter_link,
    NodeKind.MEDIA_LINK: Renderer._enter_link,
    NodeKind.EXTERNAL_LINK: Renderer._enter_link,
}

_EXIT = {
    NodeKind.HEADER: Renderer._exit_header,
    NodeKind.SPAN: Renderer._exit_span,
    NodeKind.REFLINK: Renderer._exit_reflink,
    NodeKind.DISAMBIGUATION: Renderer._exit_disambiguation,
    NodeKind.BOLD: Renderer._exit_bold,
    NodeKind.ITALIC: Renderer._exit_italic,
    NodeKind.WIKI_LINK: Renderer._exit_link,
    NodeKind.RED_LINK: Renderer._exit_link,
    NodeKind.MEDIA_LINK: Renderer._exit_link,
    NodeKind.EXTERNAL_LINK: Renderer._exit_link,
}


def render_document(document: Document, width: int) -> RenderedDocument:
    return Renderer(document, width).render()


# Debug renderers: one unwrapped line per node, words keep their origin so
# selection highlighting still works.

def _debug_line(node: Node, text: str, indent: int = 0) -> tuple[Word, ...]:
    words = []
    if indent:
        words.append(Word.whitespace(indent))
    words.append(Word(node.index, text, Style(), float(display_width(text))))
    return tuple(words)


def _payload(node: Node) -> str:
    data = node.data
    fields = []
    for name in ("contents", "anchor", "level", "href", "title", "page"):
        value = getattr(data, name)
        if value is not None:
            fields.append(f"{name}={value!r}")
    if data.autonumber:
        fields.append("autonumber=True")
    return " ".join(fields)


def render_tree_data(document: Document) -> RenderedDocument:
    lines = []
    for node in document.nodes():
        payload = _payload(node)
        text = f"{node.kind.value} {payload}" if payload else node.kind.value
        lines.append(_debug_line(node, text, 2 * node.depth()))
    return RenderedDocument(tuple(lines))


def render_tree_raw(document: Document) -> RenderedDocument:
    return RenderedDocument(tuple(
        _debug_line(node, repr(node.data), 2 * node.depth())
        for node in document.nodes()
    ))


def render_nodes_raw(document: Document) -> RenderedDocument:
    lines = []
    for node in document.nodes():
        parent = node.parent()
        children = [child.index for child in node.children()]
        text = (f"{node.index}: {node.kind.value} "
                f"parent={parent.index if parent else None} children={children}")
        lines.append(_debug_line(node, text))
    return RenderedDocument(tuple(lines))


class RendererKind(Enum):
    DEFAULT = "default"
    TREE_DATA = "tree_data"
    TREE_RAW = "tree_raw"
    NODES_RAW = "nodes_raw"

    def next(self, debug: bool = False) -> "RendererKind":
        """Renderer to switch to; the debug renderers only cycle in debug mode."""
        if not debug:
            return RendererKind.DEFAULT
        order = list(RendererKind)
        return order[(order.index(self) + 1) % len(order)]

    def render(self, document: Document, width: int) -> RenderedDocument:
        if self is RendererKind.TREE_DATA:
            return render_tree_data(document)
        if self is RendererKind.TREE_RAW:
            return render_tree_raw(document)
        if self is RendererKind.NODES_RAW:
            return render_nodes_raw(document)
        return render_document(document, width)

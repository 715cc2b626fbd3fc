"""Read-only document tree and page metadata.

Nodes live in a flat list in document (pre-order) order, so a node's index is
its position in that list and its subtree always occupies the contiguous index
range ``[node.index, node.last_descendant().index]``.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional


class NodeKind(Enum):
    """Semantic kind of a document node."""
    SECTION = "section"
    HEADER = "header"
    TEXT = "text"
    DIVISION = "division"
    PARAGRAPH = "paragraph"
    SPAN = "span"
    REFLINK = "reflink"
    HATNOTE = "hatnote"
    REDIRECT_MESSAGE = "redirect_message"
    DISAMBIGUATION = "disambiguation"
    ORDERED_LIST = "ordered_list"
    UNORDERED_LIST = "unordered_list"
    LIST_ITEM = "list_item"
    DESCRIPTION_LIST = "description_list"
    DESCRIPTION_LIST_TERM = "description_list_term"
    DESCRIPTION_LIST_DESCRIPTION = "description_list_description"
    BOLD = "bold"
    ITALIC = "italic"
    WIKI_LINK = "wiki_link"
    RED_LINK = "red_link"
    MEDIA_LINK = "media_link"
    EXTERNAL_LINK = "external_link"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "NodeKind":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


LINK_KINDS = frozenset({
    NodeKind.WIKI_LINK,
    NodeKind.RED_LINK,
    NodeKind.MEDIA_LINK,
    NodeKind.EXTERNAL_LINK,
})


@dataclass(frozen=True)
class NodeData:
    """Kind of a node plus the payload that kind carries."""
    kind: NodeKind
    contents: Optional[str] = None  # text runs
    anchor: Optional[str] = None  # sections and headers
    level: Optional[int] = None  # headers
    href: Optional[str] = None  # links
    title: Optional[str] = None  # links
    page: Optional[str] = None  # target page of internal links
    autonumber: bool = False  # external links

    @property
    def is_link(self) -> bool:
        return self.kind in LINK_KINDS


@dataclass
class _NodeRecord:
    data: NodeData
    parent: Optional[int]
    children: list[int] = field(default_factory=list)


class Node:
    """Non-owning handle on one node of a Document."""

    __slots__ = ("_document", "_index")

    def __init__(self, document: "Document", index: int):
        self._document = document
        self._index = index

    def __repr__(self):
        return f"Node({self._index}, {self.kind.value})"

    def __eq__(self, other):
        return (isinstance(other, Node)
                and other._document is self._document
                and other._index == self._index)

    def __hash__(self):
        return hash((id(self._document), self._index))

    @property
    def _record(self) -> _NodeRecord:
        return self._document._records[self._index]

    @property
    def index(self) -> int:
        return self._index

    @property
    def data(self) -> NodeData:
        return self._record.data

    @property
    def kind(self) -> NodeKind:
        return self._record.data.kind

    def parent(self) -> Optional["Node"]:
        parent = self._record.parent
        return None if parent is None else Node(self._document, parent)

    def children(self) -> Iterator["Node"]:
        for child in self._record.children:
            yield Node(self._document, child)

    def last_child(self) -> Optional["Node"]:
        children = self._record.children
        return Node(self._document, children[-1]) if children else None

    def last_descendant(self) -> "Node":
        """Deepest last node of this subtree (the node itself if childless)."""
        index = self._index
        records = self._document._records
        while records[index].children:
            index = records[index].children[-1]
        return Node(self._document, index)

    def descendants(self) -> Iterator["Node"]:
        """Iterate this node and all its descendants in document order."""
        for index in range(self._index, self.last_descendant().index + 1):
            yield Node(self._document, index)

    def containment_range(self) -> tuple[int, int]:
        return (self._index, self.last_descendant().index)

    def contains(self, index: int) -> bool:
        first, last = self.containment_range()
        return first <= index <= last

    def depth(self) -> int:
        depth = 0
        parent = self._record.parent
        while parent is not None:
            depth += 1
            parent = self._document._records[parent].parent
        return depth


class Document:
    """Ordered, read-only tree of semantically tagged nodes."""

    def __init__(self, records: Optional[list[_NodeRecord]] = None):
        self._records: list[_NodeRecord] = records or []

    def __len__(self) -> int:
        return len(self._records)

    def is_empty(self) -> bool:
        return not self._records

    def nth(self, index: int) -> Optional[Node]:
        if 0 <= index < len(self._records):
            return Node(self, index)
        return None

    @property
    def root(self) -> Optional[Node]:
        return self.nth(0)

    def nodes(self) -> Iterator[Node]:
        for index in range(len(self._records)):
            yield Node(self, index)

    @classmethod
    def from_dict(cls, tree: Optional[dict]) -> "Document":
        """Build a document from nested ``{"kind": ..., "children": [...]}`` dicts.

        A ``"text"`` entry on any node becomes its ``contents``; the remaining
        keys map onto NodeData fields.
        """
        builder = DocumentBuilder()
        if tree:
            builder.add_dict(tree)
        return builder.build()


class DocumentBuilder:
    """Builds a Document in document order.

    Indices are assigned when a node is opened, so every subtree occupies a
    contiguous index range regardless of nesting depth.
    """

    def __init__(self):
        self._records: list[_NodeRecord] = []
        self._stack: list[int] = []

    def _open(self, data: NodeData) -> int:
        parent = self._stack[-1] if self._stack else None
        if parent is None and self._records:
            raise ValueError("document already has a root node")
        index = len(self._records)
        self._records.append(_NodeRecord(data=data, parent=parent))
        if parent is not None:
            self._records[parent].children.append(index)
        return index

    @contextmanager
    def node(self, kind: NodeKind, **payload) -> Iterator[int]:
        """Open a node; nodes created inside the block become its children."""
        index = self._open(NodeData(kind, **payload))
        self._stack.append(index)
        try:
            yield index
        finally:
            self._stack.pop()

    def leaf(self, kind: NodeKind, **payload) -> int:
        return self._open(NodeData(kind, **payload))

    def text(self, contents: str) -> int:
        return self.leaf(NodeKind.TEXT, contents=contents)

    def add_dict(self, tree: dict) -> int:
        payload = {
            key: tree[key]
            for key in ("anchor", "level", "href", "title", "page", "autonumber")
            if key in tree
        }
        if "text" in tree:
            payload["contents"] = tree["text"]
        kind = NodeKind.parse(str(tree.get("kind", "unknown")))
        with self.node(kind, **payload) as index:
            for child in tree.get("children", ()):
                self.add_dict(child)
        return index

    def build(self) -> Document:
        if self._stack:
            raise ValueError("cannot build while nodes are still open")
        return Document(self._records)


@dataclass(frozen=True)
class Section:
    """One entry of a page's table of contents."""
    number: str
    text: str
    anchor: str


@dataclass(frozen=True)
class Language:
    code: str
    name: str


@dataclass
class Page:
    """A loaded page: title, language metadata, sections and content tree."""
    title: str
    content: Document
    language: Language = field(default_factory=lambda: Language("en", "English"))
    sections: Optional[list[Section]] = None
    available_languages: int = 0

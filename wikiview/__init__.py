"""wikiview - A terminal reader for structured wiki pages."""

from .document import Document, DocumentBuilder, Node, NodeData, NodeKind, Page, Section
from .model import RenderedDocument, Selection, Word
from .renderer import render_document
from .view import PageView

__all__ = [
    'Document',
    'DocumentBuilder',
    'Node',
    'NodeData',
    'NodeKind',
    'Page',
    'Section',
    'RenderedDocument',
    'Selection',
    'Word',
    'render_document',
    'PageView',
]

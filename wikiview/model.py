from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Iterator, NamedTuple, Optional

import wcwidth

from .document import Document, Node


class Modifier(IntFlag):
    NONE = 0
    BOLD = 1
    UNDERLINED = 2
    ITALIC = 4


class Color(Enum):
    """Logical foreground color class; the terminal picks the palette."""
    DEFAULT = "default"
    RED = "red"
    GRAY = "gray"


@dataclass(frozen=True)
class Style:
    fg: Color = Color.DEFAULT
    modifiers: Modifier = Modifier.NONE

    def add_modifier(self, modifier: Modifier) -> "Style":
        return Style(self.fg, self.modifiers | modifier)

    def remove_modifier(self, modifier: Modifier) -> "Style":
        return Style(self.fg, self.modifiers & ~modifier)

    def patch(self, other: "Style") -> "Style":
        """Layer other on top of self: its color wins unless default, modifiers add up."""
        fg = other.fg if other.fg != Color.DEFAULT else self.fg
        return Style(fg, self.modifiers | other.modifiers)

    def has(self, modifier: Modifier) -> bool:
        return bool(self.modifiers & modifier)


def display_width(text: str) -> int:
    """Number of terminal cells needed to show text."""
    width = wcwidth.wcswidth(text)
    # Non-printable characters make wcswidth give up
    return width if width >= 0 else len(text)


@dataclass(frozen=True)
class Word:
    """Smallest unit of rendered output.

    index is the origin node of the fragment, or None for synthetic fragments
    (gaps, padding, prefixes) which never take part in selection.
    """
    index: Optional[int]
    content: str
    style: Style = Style()
    width: float = 0.0
    whitespace_width: float = 0.0
    penalty_width: float = 0.0

    @classmethod
    def whitespace(cls, n: int = 1) -> "Word":
        return cls(None, "", Style(), 0.0, float(n), 0.0)

    @property
    def is_synthetic(self) -> bool:
        return self.index is None

    def text(self) -> str:
        return self.content + " " * int(self.whitespace_width)

    def node(self, document: Document) -> Optional[Node]:
        if self.index is None:
            return None
        return document.nth(self.index)


Line = tuple[Word, ...]


def line_text(line: Line) -> str:
    return "".join(word.text() for word in line)


def line_width(line: Line) -> float:
    """Visible width of a line: every word plus the gaps between them.

    Trailing gap words do not count, they only ever separate the line from
    whatever would have followed on it.
    """
    end = len(line)
    while end and line[end - 1].is_synthetic and not line[end - 1].content:
        end -= 1
    if not end:
        return 0.0
    visible = line[:end]
    return sum(w.width + w.whitespace_width for w in visible) - visible[-1].whitespace_width


@dataclass(frozen=True)
class RenderedDocument:
    """Ordered rows of styled words. Never mutated once produced."""
    lines: tuple[Line, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def __getitem__(self, y: int) -> Line:
        return self.lines[y]

    def line_text(self, y: int) -> str:
        return line_text(self.lines[y])

    def text_lines(self) -> list[str]:
        return [line_text(line) for line in self.lines]

    def find_line(self, first: int, last: int) -> Optional[int]:
        """Row of the first word whose origin lies within [first, last]."""
        for y, line in enumerate(self.lines):
            for word in line:
                if word.index is not None and first <= word.index <= last:
                    return y
        return None


class Selection(NamedTuple):
    """Containment range of the selected link: (node index, last descendant index)."""
    first: int = 0
    last: int = 0

    @classmethod
    def of(cls, node: Node) -> "Selection":
        return cls(*node.containment_range())

    def contains(self, index: Optional[int]) -> bool:
        return index is not None and self.first <= index <= self.last


class Span(NamedTuple):
    text: str
    style: Style

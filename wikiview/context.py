"""Nested styling regions and the modifiers active while rendering."""

from enum import Enum

from .model import Color, Modifier, Style


class Context(Enum):
    NORMAL = "normal"
    HEADER = "header"
    WIKI_LINK = "wiki_link"
    MEDIA_LINK = "media_link"
    EXTERNAL_LINK = "external_link"
    RED_LINK = "red_link"
    REFLINK = "reflink"


_CONTEXT_COLORS = {
    Context.HEADER: Color.RED,
    Context.RED_LINK: Color.RED,
    Context.REFLINK: Color.GRAY,
}


class StyleContext:
    """Context stack plus an independent modifier set.

    Modifiers are added and removed by the node that owns them, so they
    survive pops of unrelated contexts (bold text inside a link).
    """

    def __init__(self):
        self._contexts: list[Context] = []
        self._modifier = Style()

    def push(self, context: Context):
        self._contexts.append(context)

    def pop(self):
        if self._contexts:
            self._contexts.pop()

    def current(self) -> Context:
        return self._contexts[-1] if self._contexts else Context.NORMAL

    def add_modifier(self, modifier: Modifier):
        self._modifier = self._modifier.add_modifier(modifier)

    def remove_modifier(self, modifier: Modifier):
        self._modifier = self._modifier.remove_modifier(modifier)

    @property
    def modifiers(self) -> Modifier:
        return self._modifier.modifiers

    @property
    def depth(self) -> int:
        return len(self._contexts)

    def current_style(self) -> Style:
        base = Style(fg=_CONTEXT_COLORS.get(self.current(), Color.DEFAULT))
        return base.patch(self._modifier)

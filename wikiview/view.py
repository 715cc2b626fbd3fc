"""Page view: render cache, viewport, link selection and contents panel."""

import logging
from dataclasses import dataclass
from typing import Optional

from .actions import (
    Action,
    ActionResult,
    GoToHeader,
    LoadPage,
    Resize,
    ScrollDown,
    ScrollHalfDown,
    ScrollHalfUp,
    ScrollToBottom,
    ScrollToTop,
    ScrollUp,
    SelectBottomLink,
    SelectFirstLink,
    SelectLastLink,
    SelectNextLink,
    SelectPrevLink,
    SelectTopLink,
    SwitchRenderer,
    ToggleContents,
)
from .constants import ViewerConstants
from .contents import ContentsState
from .document import NodeKind, Page, Section
from .keyboard import KeyEvent, KeyType
from .model import Color, Modifier, RenderedDocument, Selection, Span, Style
from .renderer import RendererKind
from . import selection

logger = logging.getLogger(__name__)


@dataclass
class Viewport:
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def top(self) -> int:
        return self.y

    @property
    def bottom(self) -> int:
        return self.y + self.height


class PageView:
    """Everything needed to show one page.

    Renders are cached per width and flushed wholesale on renderer switch or
    resize. The selection overlay is applied when building display rows, never
    baked into the cache.
    """

    def __init__(self, page: Page, debug: bool = False):
        self.page = page
        self.debug = debug
        self.renderer = RendererKind.DEFAULT
        self.render_cache: dict[int, RenderedDocument] = {}
        self.viewport = Viewport()
        self.selected = Selection()
        self.is_contents = False
        self.contents_state = ContentsState(len(page.sections or ()))

    # Rendering and cache

    def render_page(self, width: int) -> RenderedDocument:
        return self.renderer.render(self.page.content, width)

    def render(self, width: Optional[int] = None) -> RenderedDocument:
        """Cached render for width (the viewport width by default)."""
        if width is None:
            width = self.viewport.width
        rendered = self.render_cache.get(width)
        if rendered is None:
            logger.info(f"rebuilding cache for '{width}'")
            rendered = self.render_page(width)
            self.render_cache[width] = rendered
        return rendered

    def flush_cache(self):
        logger.debug(f"flushing '{len(self.render_cache)}' cached renders")
        self.render_cache.clear()
        if ViewerConstants.LINK_SELECT:
            self.selected = Selection()

    def switch_renderer(self, renderer: RendererKind):
        self.renderer = renderer
        self.flush_cache()

    def resize(self, width: int, height: int):
        self.viewport.width = width
        self.viewport.height = height
        self.flush_cache()
        if width > 0:
            self.viewport.y = min(self.viewport.y, self._max_y())

    # Scrolling

    def _max_y(self) -> int:
        return max(0, len(self.render()) - self.viewport.height)

    def scroll_down(self, amount: int):
        if self.is_contents:
            self.contents_state.next()
            return
        self.viewport.y = min(self.viewport.y + amount, self._max_y())

    def scroll_up(self, amount: int):
        if self.is_contents:
            self.contents_state.prev()
            return
        self.viewport.y = max(0, min(self.viewport.y, self._max_y()) - amount)

    def scroll_to(self, y: int):
        """Move the viewport to row y, clamped, whichever panel has focus."""
        self.viewport.y = max(0, min(y, self._max_y()))

    def scroll_to_top(self):
        self.viewport.y = 0

    def scroll_to_bottom(self):
        self.scroll_to(self._max_y())

    # Link selection

    def _apply_selection(self, new: Optional[Selection]):
        if new is not None:
            self.selected = new

    def select_first(self):
        self._apply_selection(selection.select_first(self.page.content))

    def select_last(self):
        self._apply_selection(selection.select_last(self.page.content))

    def select_next(self):
        self._apply_selection(selection.select_next(self.page.content, self.selected))

    def select_prev(self):
        self._apply_selection(selection.select_prev(self.page.content, self.selected))

    def select_top(self):
        top, bottom = self._visible_range()
        self._apply_selection(selection.select_top(self.page.content, self.render(), top, bottom))

    def select_bottom(self):
        top, bottom = self._visible_range()
        self._apply_selection(selection.select_bottom(self.page.content, self.render(), top, bottom))

    def open_link(self) -> ActionResult:
        target = selection.link_target(self.page.content, self.selected)
        if target is None:
            return ActionResult.consumed()
        return ActionResult.consumed(LoadPage(target))

    # Headers and contents

    def select_header(self, anchor: str):
        """Scroll so the header with the given anchor is the first visible row."""
        if anchor == ViewerConstants.TOP_ANCHOR:
            logger.info("special case: jumping to top")
            self.viewport.y = 0
            return

        header = None
        if not self.page.content.is_empty():
            header = next(
                (node for node in self.page.content.nodes()
                 if node.kind == NodeKind.HEADER and node.data.anchor == anchor),
                None,
            )
        if header is None:
            logger.warning(f"no header with the anchor '{anchor}' could be found")
            return

        first, last = header.containment_range()
        y = self.render().find_line(first, last)
        if y is None:
            logger.warning("no word could be matched to the header node")
            return
        self.viewport.y = y

    def selected_header(self) -> Optional[Section]:
        return self.contents_state.selected_section(self.page.sections)

    def contents_lines(self) -> list[str]:
        if not self.page.sections:
            return [ViewerConstants.NO_CONTENTS_MESSAGE]
        return [f"{section.number} {section.text}" for section in self.page.sections]

    # Commands

    def handle_key_event(self, key: KeyEvent) -> ActionResult:
        if self.is_contents:
            if key.key_type == KeyType.REGULAR and key.value == 't':
                return ActionResult.consumed(ToggleContents())
            if key.key_type == KeyType.SPECIAL and key.value == 'enter':
                header = self.selected_header()
                if header is None:
                    logger.info("no header selected")
                    return ActionResult.ignored()
                return ActionResult.consumed(GoToHeader(header.anchor))
            return ActionResult.ignored()

        if key.key_type == KeyType.CTRL and key.value == 'r':
            return ActionResult.consumed(SwitchRenderer(self.renderer.next(self.debug)))
        if key.key_type == KeyType.REGULAR and key.value == 't':
            return ActionResult.consumed(ToggleContents())
        if key.key_type == KeyType.SHIFT_SPECIAL:
            action = {
                'left': SelectFirstLink(),
                'right': SelectLastLink(),
                'up': SelectTopLink(),
                'down': SelectBottomLink(),
            }.get(key.value)
            return ActionResult.consumed(action) if action else ActionResult.ignored()
        if key.key_type == KeyType.SPECIAL:
            if key.value == 'left':
                return ActionResult.consumed(SelectPrevLink())
            if key.value == 'right':
                return ActionResult.consumed(SelectNextLink())
            if key.value == 'enter':
                return self.open_link()
        return ActionResult.ignored()

    def update(self, action: Action) -> ActionResult:
        """Apply one command; commands that are not for the page pass through."""
        if isinstance(action, SwitchRenderer):
            self.switch_renderer(action.renderer)
        elif isinstance(action, ToggleContents):
            self.is_contents = not self.is_contents
        elif isinstance(action, SelectFirstLink):
            self.select_first()
        elif isinstance(action, SelectLastLink):
            self.select_last()
        elif isinstance(action, SelectTopLink):
            self.select_top()
        elif isinstance(action, SelectBottomLink):
            self.select_bottom()
        elif isinstance(action, SelectPrevLink):
            self.select_prev()
        elif isinstance(action, SelectNextLink):
            self.select_next()
        elif isinstance(action, GoToHeader):
            self.select_header(action.anchor)
        elif isinstance(action, ScrollUp):
            self.scroll_up(action.amount)
        elif isinstance(action, ScrollDown):
            self.scroll_down(action.amount)
        elif isinstance(action, ScrollHalfUp):
            self.scroll_up(self.viewport.height // 2)
        elif isinstance(action, ScrollHalfDown):
            self.scroll_down(self.viewport.height // 2)
        elif isinstance(action, ScrollToTop):
            self.scroll_to_top()
        elif isinstance(action, ScrollToBottom):
            self.scroll_to_bottom()
        elif isinstance(action, Resize):
            self.resize(action.width, action.height)
        else:
            return ActionResult.ignored()
        return ActionResult.consumed()

    # Display

    def _visible_range(self) -> tuple[int, int]:
        """Rendered rows [top, bottom) actually on screen.

        At y == 0 the title takes the first screen row, pushing the last
        rendered row of the viewport out of view.
        """
        top, bottom = self.viewport.top, self.viewport.bottom
        if self.viewport.y == 0 and bottom > 0:
            bottom -= 1
        return top, bottom

    def visible_lines(self) -> list[list[Span]]:
        """Rows of the viewport with the selection overlay applied."""
        rendered = self.render()
        top, bottom = self._visible_range()
        rows = []
        for line in rendered.lines[top:bottom]:
            spans = []
            for word in line:
                style = word.style
                if ViewerConstants.LINK_SELECT and self.selected.contains(word.index):
                    style = style.add_modifier(Modifier.UNDERLINED)
                spans.append(Span(word.text(), style))
            rows.append(spans)

        if self.viewport.y == 0 and self.viewport.height > 0:
            rows.insert(0, [Span(self.page.title, Style(Color.RED, Modifier.BOLD))])
        return rows

    def scrollbar_state(self) -> tuple[int, int]:
        """(scrollable length, position) for drawing a scrollbar."""
        return (self._max_y(), self.viewport.top)

    def status_line(self) -> str:
        return ViewerConstants.STATUS_FORMAT.format(
            self.page.title,
            self.page.language.name,
            self.page.available_languages,
        )

"""Terminal interface using Blessed for display and Curtsies for input."""

import select
import sys
from typing import NamedTuple, Optional

import blessed
import wcwidth

from .constants import ViewerConstants
from .model import Color, Modifier, Span, Style, display_width


class Layout(NamedTuple):
    """Screen geometry of one frame."""
    top: int  # first row of the page and contents areas
    rows: int  # rows available to the page and contents areas
    main_left: int
    main_width: int  # page text plus scrollbar margins
    page_left: int
    page_width: int
    contents_left: int
    contents_width: int
    status_row: int


def compute_layout(width: int, height: int) -> Layout:
    """Split the screen into page (80 %), contents panel (20 %) and status line."""
    pad = ViewerConstants.PAGE_PADDING
    inner_width = max(0, width - 2 * pad)
    rows = max(0, height - 2 * pad - ViewerConstants.STATUS_HEIGHT)
    contents_width = inner_width * ViewerConstants.CONTENTS_PERCENT // 100
    main_width = inner_width - contents_width
    margin = ViewerConstants.SCROLLBAR_MARGIN if ViewerConstants.SCROLLBAR else 0
    page_width = max(0, main_width - 2 * margin)
    return Layout(
        top=pad,
        rows=rows,
        main_left=pad,
        main_width=main_width,
        page_left=pad + margin,
        page_width=page_width,
        contents_left=pad + main_width,
        contents_width=contents_width,
        status_row=pad + rows,
    )


def _truncate(text: str, width: int) -> str:
    """Longest prefix of text that fits into width cells."""
    out = []
    used = 0
    for ch in text:
        w = max(wcwidth.wcwidth(ch), 0)
        if used + w > width:
            break
        out.append(ch)
        used += w
    return ''.join(out)


def _fit(text: str, width: int) -> str:
    text = _truncate(text, width)
    return text + ' ' * (width - display_width(text))


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        # Last frame drawn, for minimal updates
        self._last_rows: Optional[list[str]] = None

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.hide_cursor, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input

            # Enter raw mode immediately so reads work
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def invalidate_frame(self) -> None:
        """Forget the last frame so the next update repaints everything."""
        self._last_rows = None

    def get_key(self, timeout=None):
        """Next key token from curtsies, or None on timeout."""
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            ready, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not ready:
                return None
        return str(next(self._curtsies_input))

    # Composition

    def style_sequence(self, style: Style) -> str:
        """Blessed attribute sequence for a style, starting from a reset."""
        seq = f"{self.term.normal}"
        if style.fg == Color.RED:
            seq += f"{self.term.red}"
        elif style.fg == Color.GRAY:
            seq += f"{self.term.bright_black}"
        if style.has(Modifier.BOLD):
            seq += f"{self.term.bold}"
        if style.has(Modifier.ITALIC):
            seq += f"{self.term.italic}"
        if style.has(Modifier.UNDERLINED):
            seq += f"{self.term.underline}"
        return seq

    def compose_spans(self, spans: list[Span], width: int) -> str:
        """Styled text of exactly width cells."""
        out = []
        used = 0
        for span in spans:
            if used >= width:
                break
            text = span.text
            if used + display_width(text) > width:
                text = _truncate(text, width - used)
            out.append(self.style_sequence(span.style) + text)
            used += display_width(text)
        out.append(f"{self.term.normal}")
        out.append(' ' * (width - used))
        return ''.join(out)

    def _scrollbar_cell(self, row: int, rows: int, length: int, position: int) -> str:
        if not ViewerConstants.SCROLLBAR or rows == 0:
            return ''
        thumb = 0 if length == 0 else position * (rows - 1) // length
        if row == thumb:
            return f"{self.term.blue}█{self.term.normal}"
        return ' '

    def _contents_cell(self, row: int, layout: Layout, entries: list[str],
                       selected: Optional[int], focused: bool) -> str:
        width = layout.contents_width
        if width < 2 or layout.rows < 2:
            return ' ' * width
        border = f"{self.term.yellow}" if focused else ''
        reset = f"{self.term.normal}"
        inner = width - 2
        if row == 0:
            title = _truncate("Contents", inner)
            return f"{border}┌{title}{'─' * (inner - display_width(title))}┐{reset}"
        if row == layout.rows - 1:
            return f"{border}└{'─' * inner}┘{reset}"

        visible = layout.rows - 2
        offset = 0
        if selected is not None and selected >= visible:
            offset = selected - visible + 1
        index = offset + row - 1
        text = _fit(entries[index], inner) if index < len(entries) else ' ' * inner
        if selected is not None and index == selected:
            text = f"{self.term.on_bright_black}{self.term.italic}{text}{reset}"
        return f"{border}│{reset}{text}{border}│{reset}"

    def render_rows(self, view, layout: Layout, width: int, height: int,
                    status_override: Optional[str] = None) -> list[str]:
        """Full-width rows of one frame."""
        page_rows = view.visible_lines()
        length, position = view.scrollbar_state()
        entries = view.contents_lines()
        selected = view.contents_state.selected if view.page.sections else None
        margin = layout.page_left - layout.main_left

        rows = [' ' * width for _ in range(height)]
        for i in range(layout.rows):
            y = layout.top + i
            if y >= height:
                break
            page = self.compose_spans(page_rows[i] if i < len(page_rows) else [], layout.page_width)
            scrollbar = self._scrollbar_cell(i, layout.rows, length, position)
            right_margin = ' ' * max(0, margin - (1 if scrollbar else 0))
            contents = self._contents_cell(i, layout, entries, selected, view.is_contents)
            pad = ' ' * layout.main_left
            rows[y] = f"{pad}{' ' * margin}{page}{right_margin}{scrollbar}{contents}{pad}"

        if 0 <= layout.status_row < height:
            status = status_override if status_override else view.status_line()
            rows[layout.status_row] = ' ' * layout.main_left + _fit(status, max(0, width - layout.main_left))
        return rows

    def update_frame(self, rows: list[str]) -> None:
        """Diff against last frame and write only changed rows."""
        if self._last_rows is None or len(self._last_rows) != len(rows):
            print(self.term.home + self.term.clear, end='')
            self._last_rows = ['' for _ in rows]

        for y, row in enumerate(rows):
            if row != self._last_rows[y]:
                print(self.term.move(y, 0) + row, end='')
                self._last_rows[y] = row
        print('', end='', flush=True)

    def draw_error_message(self, message: str):
        """Centered message on an otherwise empty screen."""
        print(self.term.home + self.term.clear, end='')
        y = self.term.height // 2
        x = max(0, (self.term.width - display_width(message)) // 2)
        print(self.term.move(y, x) + message, end='', flush=True)
        self.invalidate_frame()

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height

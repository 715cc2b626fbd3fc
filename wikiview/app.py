"""Main reader controller: event loop, resize handling and page switching."""

import logging
import os
import select
import signal
from pathlib import Path
from typing import Optional

from .actions import Action, ActionResult, LoadPage, Quit, Resize
from .commands import CommandRegistry
from .constants import ViewerConstants
from .keyboard import KeyboardHandler, KeyEvent
from .loader import PageLoadError, load_page, resolve_page_path
from .settings_persistence import SCROLL_Y, SHOW_CONTENTS, SettingsPersistence, get_persistence
from .terminal import TerminalInterface, compute_layout
from .view import PageView

logger = logging.getLogger(__name__)

RESIZE_PIPE_MARKER = b'R'


class Viewer:
    """Reader application controller."""

    def __init__(self, path, debug: bool = False,
                 terminal: Optional[TerminalInterface] = None,
                 persistence: Optional[SettingsPersistence] = None):
        self.debug = debug
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.command_registry = CommandRegistry()
        self.persistence = persistence or get_persistence()
        self.running = False
        self.status_message: Optional[str] = None
        self.path: Path = Path(path)
        self.view: PageView = PageView(load_page(self.path), debug=debug)
        self._pending_scroll_y: Optional[int] = None
        self._restore_settings()
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    # Pages and settings

    def _restore_settings(self):
        settings = self.persistence.load_settings(str(self.path))
        self.view.is_contents = settings.get(SHOW_CONTENTS, False)
        # Applied after the first resize, once the page has a width
        self._pending_scroll_y = settings.get(SCROLL_Y)

    def _save_settings(self):
        self.persistence.save_settings(str(self.path), {
            SCROLL_Y: self.view.viewport.y,
            SHOW_CONTENTS: self.view.is_contents,
        })

    def load_page(self, page_id: str):
        """Follow an internal link to a page stored next to the current one."""
        target = resolve_page_path(self.path, page_id)
        if target is None:
            self.status_message = ViewerConstants.PAGE_NOT_FOUND_MESSAGE.format(page_id)
            return
        try:
            page = load_page(target)
        except PageLoadError as e:
            logger.warning(f"could not open linked page: {e}")
            self.status_message = str(e)
            return

        self._save_settings()
        width, height = self.view.viewport.width, self.view.viewport.height
        self.path = target
        self.view = PageView(page, debug=self.debug)
        self._restore_settings()
        self.view.resize(width, height)
        self._apply_pending_scroll()
        self.terminal.invalidate_frame()

    def _apply_pending_scroll(self):
        if self._pending_scroll_y is not None and self.view.viewport.width > 0:
            self.view.scroll_to(self._pending_scroll_y)
            self._pending_scroll_y = None

    # Commands

    def dispatch(self, action: Optional[Action]) -> ActionResult:
        """Route a command to whoever owns it."""
        if action is None:
            return ActionResult.ignored()
        if isinstance(action, Quit):
            self.running = False
            return ActionResult.consumed()
        if isinstance(action, LoadPage):
            self.load_page(action.page)
            return ActionResult.consumed()
        result = self.view.update(action)
        if not result.handled:
            logger.debug(f"unhandled action {action!r}")
        return result

    def handle_key_event(self, key_event: KeyEvent):
        self.status_message = None
        result = self.view.handle_key_event(key_event)
        if result.handled:
            self.dispatch(result.action)
            return
        self.dispatch(self.command_registry.get_action(key_event, self.view.viewport.height))

    def resize(self):
        layout = compute_layout(self.terminal.width, self.terminal.height)
        self.dispatch(Resize(layout.page_width, layout.rows))
        self._apply_pending_scroll()
        self.terminal.invalidate_frame()

    # Loop

    def close(self):
        """Release the resize pipe; safe to call more than once."""
        for fd in (self._resize_pipe_r, self._resize_pipe_w):
            if fd is not None:
                os.close(fd)
        self._resize_pipe_r = self._resize_pipe_w = None

    def _handle_resize(self, signum, frame):
        del signum, frame  # Unused
        os.write(self._resize_pipe_w, RESIZE_PIPE_MARKER)

    def _draw(self):
        width, height = self.terminal.width, self.terminal.height
        layout = compute_layout(width, height)
        if layout.page_width < 1 or layout.rows < 1:
            self.terminal.draw_error_message("Terminal too small")
            return
        status = f" {self.status_message}" if self.status_message else None
        rows = self.terminal.render_rows(self.view, layout, width, height, status)
        self.terminal.update_frame(rows)

    def run(self):
        """Run the main reader loop."""
        self.terminal.setup()
        self.running = True
        # Self-pipe so SIGWINCH wakes up select()
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            self.resize()
            need_draw = True
            while self.running:
                if need_draw:
                    self._draw()
                    need_draw = False

                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    self.resize()
                    need_draw = True
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self.handle_key_event(key_event)
                        need_draw = True
        except KeyboardInterrupt:
            logger.info("interrupted")
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            self.close()
            self._save_settings()
            self.terminal.cleanup()

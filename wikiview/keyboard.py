"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys


@dataclass(frozen=True)
class KeyEvent:
    """A parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'enter')
    raw: str = ""  # The token as delivered by the terminal

    @property
    def is_ctrl(self) -> bool:
        return self.key_type == KeyType.CTRL

    @property
    def is_shift(self) -> bool:
        return self.key_type == KeyType.SHIFT_SPECIAL


SPECIAL_KEYS = frozenset({
    'left', 'right', 'up', 'down', 'home', 'end', 'enter',
    'page_up', 'page_down', 'backspace', 'delete', 'escape', 'tab',
})

_ALIASES = {
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'esc': 'escape',
    'return': 'enter',
}


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token ('<LEFT>', '<Ctrl-r>', '<Shift-LEFT>') or a plain character."""
        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            name = key_str[1:-1].lower().replace('+', '-')
            parts = name.split('-')
            base = _ALIASES.get(parts[-1], parts[-1])
            mods = set(parts[:-1])

            if base in ('space', 'spacebar') and not mods:
                return KeyEvent(KeyType.REGULAR, ' ', key_str)
            if 'ctrl' in mods and len(base) == 1:
                # Terminals deliver Enter as Ctrl-J or Ctrl-M
                if base in ('j', 'm'):
                    return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
                return KeyEvent(KeyType.CTRL, base, key_str)
            if 'shift' in mods and base in SPECIAL_KEYS:
                return KeyEvent(KeyType.SHIFT_SPECIAL, base, key_str)
            return KeyEvent(KeyType.SPECIAL, base, key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if o in (10, 13):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if o == 27:
                return KeyEvent(KeyType.SPECIAL, 'escape', key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                return KeyEvent(KeyType.CTRL, chr(ord('a') + o - 1), key_str)

        return KeyEvent(KeyType.REGULAR, key_str, key_str)

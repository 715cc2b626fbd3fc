"""Tests for the global key bindings."""

import pytest

from wikiview.actions import (
    Quit,
    ScrollDown,
    ScrollHalfDown,
    ScrollHalfUp,
    ScrollToBottom,
    ScrollToTop,
    ScrollUp,
)
from wikiview.commands import CommandRegistry
from wikiview.keyboard import KeyEvent, KeyType


@pytest.mark.parametrize("key_type, value, expected", [
    (KeyType.REGULAR, 'q', Quit()),
    (KeyType.CTRL, 'q', Quit()),
    (KeyType.CTRL, 'c', Quit()),
    (KeyType.REGULAR, 'j', ScrollDown(1)),
    (KeyType.SPECIAL, 'down', ScrollDown(1)),
    (KeyType.REGULAR, 'k', ScrollUp(1)),
    (KeyType.SPECIAL, 'up', ScrollUp(1)),
    (KeyType.CTRL, 'd', ScrollHalfDown()),
    (KeyType.CTRL, 'u', ScrollHalfUp()),
    (KeyType.REGULAR, 'g', ScrollToTop()),
    (KeyType.SPECIAL, 'home', ScrollToTop()),
    (KeyType.REGULAR, 'G', ScrollToBottom()),
    (KeyType.SPECIAL, 'end', ScrollToBottom()),
])
def test_default_bindings(key_type, value, expected):
    registry = CommandRegistry()
    assert registry.get_action(KeyEvent(key_type, value)) == expected


def test_paging_uses_page_height():
    registry = CommandRegistry()
    assert registry.get_action(KeyEvent(KeyType.SPECIAL, 'page_down'), 20) == ScrollDown(20)
    assert registry.get_action(KeyEvent(KeyType.SPECIAL, 'page_up'), 20) == ScrollUp(20)
    # Never a zero step
    assert registry.get_action(KeyEvent(KeyType.SPECIAL, 'page_down'), 0) == ScrollDown(1)


def test_unbound_key():
    registry = CommandRegistry()
    assert registry.get_action(KeyEvent(KeyType.REGULAR, 'x')) is None


def test_register_overrides():
    registry = CommandRegistry()
    registry.register((KeyType.REGULAR, 'x'), lambda height: Quit())
    registry.register((KeyType.REGULAR, 'j'), lambda height: ScrollDown(3))
    assert registry.get_action(KeyEvent(KeyType.REGULAR, 'x')) == Quit()
    assert registry.get_action(KeyEvent(KeyType.REGULAR, 'j')) == ScrollDown(3)

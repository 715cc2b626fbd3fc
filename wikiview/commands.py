"""Global key bindings that are not owned by the page view."""

from typing import Callable, Dict, Optional, Tuple, TYPE_CHECKING

from .actions import (
    Action,
    Quit,
    ScrollDown,
    ScrollHalfDown,
    ScrollHalfUp,
    ScrollToBottom,
    ScrollToTop,
    ScrollUp,
)
from .keyboard import KeyType

if TYPE_CHECKING:
    from .keyboard import KeyEvent

ActionFactory = Callable[[int], Action]


class CommandRegistry:
    """Registry for mapping key combinations to actions.

    Factories receive the current page height so paging keys can scroll by
    a full screen.
    """

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], ActionFactory] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Quit
        self.register((KeyType.REGULAR, 'q'), lambda height: Quit())
        self.register((KeyType.CTRL, 'q'), lambda height: Quit())
        self.register((KeyType.CTRL, 'c'), lambda height: Quit())

        # Line-wise scrolling
        self.register((KeyType.REGULAR, 'j'), lambda height: ScrollDown(1))
        self.register((KeyType.REGULAR, 'k'), lambda height: ScrollUp(1))
        self.register((KeyType.SPECIAL, 'down'), lambda height: ScrollDown(1))
        self.register((KeyType.SPECIAL, 'up'), lambda height: ScrollUp(1))

        # Half and full pages
        self.register((KeyType.CTRL, 'd'), lambda height: ScrollHalfDown())
        self.register((KeyType.CTRL, 'u'), lambda height: ScrollHalfUp())
        self.register((KeyType.SPECIAL, 'page_down'), lambda height: ScrollDown(max(height, 1)))
        self.register((KeyType.SPECIAL, 'page_up'), lambda height: ScrollUp(max(height, 1)))

        # Ends of the document
        self.register((KeyType.REGULAR, 'g'), lambda height: ScrollToTop())
        self.register((KeyType.SPECIAL, 'home'), lambda height: ScrollToTop())
        self.register((KeyType.REGULAR, 'G'), lambda height: ScrollToBottom())
        self.register((KeyType.SPECIAL, 'end'), lambda height: ScrollToBottom())

    def register(self, key: Tuple[KeyType, str], factory: ActionFactory):
        """Register an action factory for a key combination."""
        self._commands[key] = factory

    def get_action(self, key_event: 'KeyEvent', height: int = 0) -> Optional[Action]:
        """Action bound to the key event, or None when the key is unbound."""
        factory = self._commands.get((key_event.key_type, key_event.value))
        if factory is None:
            return None
        return factory(height)

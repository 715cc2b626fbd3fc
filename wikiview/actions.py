"""Commands exchanged between key handling, the page view and the app loop."""

from dataclasses import dataclass
from typing import Optional

from .renderer import RendererKind


class Action:
    """Base class for every command."""


@dataclass(frozen=True)
class ScrollUp(Action):
    amount: int = 1


@dataclass(frozen=True)
class ScrollDown(Action):
    amount: int = 1


@dataclass(frozen=True)
class ScrollHalfUp(Action):
    pass


@dataclass(frozen=True)
class ScrollHalfDown(Action):
    pass


@dataclass(frozen=True)
class ScrollToTop(Action):
    pass


@dataclass(frozen=True)
class ScrollToBottom(Action):
    pass


@dataclass(frozen=True)
class Resize(Action):
    width: int
    height: int


@dataclass(frozen=True)
class LoadPage(Action):
    page: str


@dataclass(frozen=True)
class Quit(Action):
    pass


class PageAction(Action):
    """Commands handled by the page view only."""


@dataclass(frozen=True)
class SwitchRenderer(PageAction):
    renderer: RendererKind


@dataclass(frozen=True)
class ToggleContents(PageAction):
    pass


@dataclass(frozen=True)
class SelectFirstLink(PageAction):
    pass


@dataclass(frozen=True)
class SelectLastLink(PageAction):
    pass


@dataclass(frozen=True)
class SelectTopLink(PageAction):
    pass


@dataclass(frozen=True)
class SelectBottomLink(PageAction):
    pass


@dataclass(frozen=True)
class SelectPrevLink(PageAction):
    pass


@dataclass(frozen=True)
class SelectNextLink(PageAction):
    pass


@dataclass(frozen=True)
class GoToHeader(PageAction):
    anchor: str


@dataclass(frozen=True)
class ActionResult:
    """Outcome of handling a key or command.

    handled is False when the receiver ignored it and it should pass through;
    action is a follow-up command for the caller to dispatch.
    """
    handled: bool
    action: Optional[Action] = None

    @classmethod
    def ignored(cls) -> "ActionResult":
        return cls(False)

    @classmethod
    def consumed(cls, action: Optional[Action] = None) -> "ActionResult":
        return cls(True, action)

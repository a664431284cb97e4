"""Canonical input actions the wizard understands.

The presentation layer turns key events into these; the wizard never sees keys.
"""

from dataclasses import dataclass
from enum import Enum


class ActionKind(Enum):
    # Input steps
    CHARACTER_ENTERED = "character_entered"
    ERASE = "erase"
    TOGGLE_MODE = "toggle_mode"
    ADVANCE = "advance"
    RETREAT = "retreat"
    CANCEL = "cancel"

    # Result steps
    QUIT = "quit"
    SHOW_SUMMARY = "show_summary"
    EXPORT = "export"
    NEXT_ROW = "next_row"
    PREVIOUS_ROW = "previous_row"
    TOP = "top"
    BOTTOM = "bottom"
    PAGE_FORWARD = "page_forward"
    PAGE_BACKWARD = "page_backward"


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    char: str | None = None  # Only for CHARACTER_ENTERED


def character_entered(char: str) -> Action:
    return Action(ActionKind.CHARACTER_ENTERED, char)


ERASE = Action(ActionKind.ERASE)
TOGGLE_MODE = Action(ActionKind.TOGGLE_MODE)
ADVANCE = Action(ActionKind.ADVANCE)
RETREAT = Action(ActionKind.RETREAT)
CANCEL = Action(ActionKind.CANCEL)
QUIT = Action(ActionKind.QUIT)
SHOW_SUMMARY = Action(ActionKind.SHOW_SUMMARY)
EXPORT = Action(ActionKind.EXPORT)
NEXT_ROW = Action(ActionKind.NEXT_ROW)
PREVIOUS_ROW = Action(ActionKind.PREVIOUS_ROW)
TOP = Action(ActionKind.TOP)
BOTTOM = Action(ActionKind.BOTTOM)
PAGE_FORWARD = Action(ActionKind.PAGE_FORWARD)
PAGE_BACKWARD = Action(ActionKind.PAGE_BACKWARD)

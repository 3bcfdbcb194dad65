"""Key events and cursor movement used by the interactive panes."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass

_PAGE_SIZE = 10


class KeyCode(enum.Enum):
    """The kind of key that was pressed."""

    CHAR = enum.auto()
    BACKSPACE = enum.auto()
    ENTER = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    PAGE_UP = enum.auto()
    PAGE_DOWN = enum.auto()
    TAB = enum.auto()
    BACK_TAB = enum.auto()
    DELETE = enum.auto()
    INSERT = enum.auto()
    ESC = enum.auto()


@dataclass(frozen=True)
class Key:
    """A key event: its code, the character for CHAR keys, and modifiers."""

    code: KeyCode
    char: str | None = None
    ctrl: bool = False
    alt: bool = False
    release: bool = False


class CursorDirection(enum.Enum):
    """A cursor movement within a list."""

    PAGE_DOWN = enum.auto()
    DOWN = enum.auto()
    UP = enum.auto()
    PAGE_UP = enum.auto()
    TO_TOP = enum.auto()
    TO_BOTTOM = enum.auto()

    def move_cursor(self, position: int) -> int:
        """Return the new position; moves upward stop at zero."""
        if self is CursorDirection.TO_TOP:
            return 0
        if self is CursorDirection.TO_BOTTOM:
            return sys.maxsize
        if self is CursorDirection.DOWN:
            return position + 1
        if self is CursorDirection.UP:
            return max(position - 1, 0)
        if self is CursorDirection.PAGE_DOWN:
            return position + _PAGE_SIZE
        return max(position - _PAGE_SIZE, 0)
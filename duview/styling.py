"""Colors, text styles and styled spans shared by the terminal widgets."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Color:
    """A terminal color, either one of the named palette entries or an RGB triple."""

    name: str
    rgb: tuple[int, int, int] | None = None

    RESET: ClassVar[Color]
    BLACK: ClassVar[Color]
    RED: ClassVar[Color]
    GREEN: ClassVar[Color]
    YELLOW: ClassVar[Color]
    BLUE: ClassVar[Color]
    MAGENTA: ClassVar[Color]
    CYAN: ClassVar[Color]
    GRAY: ClassVar[Color]
    DARK_GRAY: ClassVar[Color]
    LIGHT_RED: ClassVar[Color]
    LIGHT_GREEN: ClassVar[Color]
    LIGHT_YELLOW: ClassVar[Color]
    LIGHT_BLUE: ClassVar[Color]
    LIGHT_MAGENTA: ClassVar[Color]
    LIGHT_CYAN: ClassVar[Color]
    WHITE: ClassVar[Color]


Color.RESET = Color("reset")
Color.BLACK = Color("black")
Color.RED = Color("red")
Color.GREEN = Color("green")
Color.YELLOW = Color("yellow")
Color.BLUE = Color("blue")
Color.MAGENTA = Color("magenta")
Color.CYAN = Color("cyan")
Color.GRAY = Color("gray")
Color.DARK_GRAY = Color("dark_gray")
Color.LIGHT_RED = Color("light_red")
Color.LIGHT_GREEN = Color("light_green")
Color.LIGHT_YELLOW = Color("light_yellow")
Color.LIGHT_BLUE = Color("light_blue")
Color.LIGHT_MAGENTA = Color("light_magenta")
Color.LIGHT_CYAN = Color("light_cyan")
Color.WHITE = Color("white")


class Modifier(enum.Flag):
    """Text attributes that can be combined."""

    BOLD = enum.auto()
    DIM = enum.auto()
    ITALIC = enum.auto()
    UNDERLINED = enum.auto()
    SLOW_BLINK = enum.auto()
    RAPID_BLINK = enum.auto()
    REVERSED = enum.auto()
    HIDDEN = enum.auto()
    CROSSED_OUT = enum.auto()


@dataclass(frozen=True)
class Style:
    """Foreground, background and modifiers to apply to a piece of text."""

    fg: Color | None = None
    bg: Color | None = None
    add_modifier: Modifier = Modifier(0)
    sub_modifier: Modifier = Modifier(0)


@dataclass(frozen=True)
class Span:
    """A piece of text with a single style."""

    text: str
    style: Style = Style()


COLOR_MARKED = Color.YELLOW
COLOR_MARKED_DARK = Color("rgb", (176, 126, 0))

_COUNT_SUFFIXES = ("", "K", "M", "G", "T", "P", "E", "Z", "Y")
_COUNT_BASE = 1000


def entry_color(fg: Color | None, is_file: bool, is_marked: bool) -> Color | None:
    """Return the foreground color for an entry given its kind and mark state."""
    if is_file:
        return COLOR_MARKED_DARK if is_marked else fg
    return COLOR_MARKED if is_marked else Color.CYAN


def format_count(value: float) -> str:
    """Format a count with an SI suffix, no decimals and no separator."""
    value = float(value)
    if value < 0:
        return "-" + format_count(-value)
    index = 0
    while index < len(_COUNT_SUFFIXES) - 1 and value >= _COUNT_BASE ** (index + 1):
        index += 1
    scaled = value / _COUNT_BASE**index
    return f"{scaled:.0f}{_COUNT_SUFFIXES[index]}"
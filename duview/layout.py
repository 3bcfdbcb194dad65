"""Layout of the main window and the border styles of its panes."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from duview.styling import COLOR_MARKED, Color, Modifier, Style

_CONTENT_MAX_HEIGHT = 256


@dataclass(frozen=True)
class Rect:
    """A rectangular area of the terminal."""

    x: int
    y: int
    width: int
    height: int


class FocussedPane(enum.Enum):
    """The pane that receives key presses."""

    MAIN = enum.auto()
    HELP = enum.auto()
    MARK = enum.auto()
    GLOB = enum.auto()


def margin(rect: Rect, amount: int) -> Rect:
    """Shrink ``rect`` by ``amount`` on every side."""
    if rect.width < 2 * amount or rect.height < 2 * amount:
        raise ValueError(f"area {rect} is too small for a margin of {amount}")
    return Rect(
        rect.x + amount,
        rect.y + amount,
        rect.width - 2 * amount,
        rect.height - 2 * amount,
    )


def main_window_layout(area: Rect) -> tuple[Rect, Rect, Rect]:
    """Split into a one-line header, the content and a one-line footer.

    The content is at most 256 lines high; any space beyond goes to the footer
    so that the whole area is covered.
    """
    header_height = min(1, area.height)
    footer_height = min(1, area.height - header_height)
    content_height = min(_CONTENT_MAX_HEIGHT, area.height - header_height - footer_height)
    footer_height = area.height - header_height - content_height
    header = Rect(area.x, area.y, area.width, header_height)
    content = Rect(area.x, area.y + header_height, area.width, content_height)
    footer = Rect(area.x, content.y + content_height, area.width, footer_height)
    return header, content, footer


def content_layout(area: Rect) -> tuple[Rect, Rect]:
    """Split horizontally into two halves; an odd column goes to the right."""
    left_width = area.width // 2
    left = Rect(area.x, area.y, left_width, area.height)
    right = Rect(area.x + left_width, area.y, area.width - left_width, area.height)
    return left, right


def right_pane_layout(area: Rect) -> tuple[Rect, Rect]:
    """Split vertically into two halves; an odd line goes to the bottom."""
    top_height = area.height // 2
    top = Rect(area.x, area.y, area.width, top_height)
    bottom = Rect(area.x, area.y + top_height, area.width, area.height - top_height)
    return top, bottom


def header_background_color(is_marked: bool, focused_pane: FocussedPane) -> Color:
    """Return the header color; ``is_marked`` is True when nothing is marked."""
    if not is_marked:
        return Color.LIGHT_RED if focused_pane is FocussedPane.MARK else COLOR_MARKED
    return Color.WHITE


def pane_border_style(focused_pane: FocussedPane) -> tuple[Style, Style, Style, Style]:
    """Border styles of the entries, help, mark and glob panes; the focused one is bold."""
    grey = Style(fg=Color.DARK_GRAY, bg=Color.RESET, add_modifier=Modifier(0))
    bold = Style(add_modifier=Modifier.BOLD)
    order = (FocussedPane.MAIN, FocussedPane.HELP, FocussedPane.MARK, FocussedPane.GLOB)
    entries, help_, mark, glob = (bold if pane is focused_pane else grey for pane in order)
    return entries, help_, mark, glob
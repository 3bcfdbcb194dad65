"""The help pane: its scrolling and the lines describing every key binding."""

from __future__ import annotations

from dataclasses import dataclass

from duview.keys import CursorDirection, Key, KeyCode
from duview.styling import Color, Modifier, Style, Span

_KEY_COLUMN = 11
_SEPARATOR_SIZE = 3
_SCROLL_MASK = 0xFFFF

_CHAR_MOVES = {
    "H": CursorDirection.TO_TOP,
    "G": CursorDirection.TO_BOTTOM,
    "k": CursorDirection.UP,
    "j": CursorDirection.DOWN,
}

_CTRL_MOVES = {
    "u": CursorDirection.PAGE_UP,
    "d": CursorDirection.PAGE_DOWN,
}

_KEY_MOVES = {
    KeyCode.PAGE_UP: CursorDirection.PAGE_UP,
    KeyCode.PAGE_DOWN: CursorDirection.PAGE_DOWN,
    KeyCode.UP: CursorDirection.UP,
    KeyCode.DOWN: CursorDirection.DOWN,
}


@dataclass
class HelpPane:
    """Scroll state of the help pane."""

    scroll: int = 0

    def _scroll_help(self, direction: CursorDirection) -> None:
        self.scroll = direction.move_cursor(self.scroll) & _SCROLL_MASK

    def process_events(self, key: Key) -> None:
        """Scroll according to a key press; releases are ignored."""
        if key.release:
            return
        char = key.char if key.code is KeyCode.CHAR else None
        if char in ("H", "G"):
            self._scroll_help(_CHAR_MOVES[char])
        elif char in _CTRL_MOVES and key.ctrl:
            self._scroll_help(_CTRL_MOVES[char])
        elif char in _CHAR_MOVES:
            self._scroll_help(_CHAR_MOVES[char])
        elif key.code in _KEY_MOVES:
            self._scroll_help(_KEY_MOVES[key.code])

    def clamp_scroll(self, line_count: int, height: int) -> int:
        """Limit the scroll so the last line stays at the bottom; returns the new scroll."""
        self.scroll = min(self.scroll, max(line_count - height, 0))
        return self.scroll


def help_lines(trash_enabled: bool) -> list[list[Span]]:
    """Return the lines of the help text, each a list of spans."""
    lines: list[list[Span]] = []

    def newlines(count: int) -> None:
        lines.extend([Span("")] for _ in range(count))

    def spacer() -> None:
        newlines(2)

    def title(name: str) -> None:
        lines.append(
            [Span(name, Style(add_modifier=Modifier.BOLD | Modifier.UNDERLINED))]
        )
        newlines(1)

    def hotkey(keys: str, description: str, other_line: str | None = None) -> None:
        lines.append(
            [
                Span(f"{keys:>{_KEY_COLUMN}}", Style(fg=Color.GREEN)),
                Span(f" => {description}"),
            ]
        )
        if other_line is not None:
            lines.append([Span(f"{'':>{_KEY_COLUMN + _SEPARATOR_SIZE + 1}}{other_line}")])

    title("Pane control")
    hotkey(
        "q/<Esc>",
        "Close the current pane.",
        "Closes the program if no pane is open.",
    )
    hotkey(
        "<Tab>",
        "Cycle between all open panes.",
        "Activate 'Marked Items' pane to delete selected files.",
    )
    hotkey("?", "Show or hide this help pane.")
    spacer()

    title("Navigation")
    hotkey("j/<Down>", "Move down 1 entry.")
    hotkey("k/<Up>", "Move up 1 entry.")
    hotkey("o/l/<Enter>", "Descent into the selected directory.")
    hotkey("<Right>", "^")
    hotkey("u/h/<Left>", "Ascent one level into the parent directory.")
    hotkey("<Backspace>", "^")
    hotkey("Ctrl + d", "Move down 10 entries.")
    hotkey("<Page Down>", "^")
    hotkey("Ctrl + u", "Move up 10 entries.")
    hotkey("<Page Up>", "^")
    hotkey("H/<Home>", "Move to the top of the list.")
    hotkey("G/<End>", "Move to the bottom of the list.")
    spacer()

    title("Display")
    hotkey("s", "Toggle sort by size descending/ascending.")
    hotkey("m", "Toggle sort by modified time descending/ascending.")
    hotkey("M", "Show/hide modified time.")
    hotkey("c", "Toggle sort by entries descending/ascending.")
    hotkey("C", "Show/hide entry count.")
    hotkey("n", "Toggle sort by name ascending/descending.")
    hotkey("g/S", "Cycle through percentage display and bar options.")
    spacer()

    title("Open/Mark/Search")
    hotkey("Shift + o", "Open the selected entry with the associated program.")
    hotkey("d", "Toggle the currently selected entry and move down.")
    hotkey("x", "Mark the currently selected entry for deletion and move down.")
    hotkey("<Space>", "Toggle the currently selected entry.")
    hotkey("a", "Toggle all entries.")
    hotkey(
        "/",
        "Git-style glob search, case-insensitive.",
        "Search starts from the current directory.",
    )
    hotkey("r", "Refresh only the selected entry.")
    hotkey("R", "Refresh all entries in the current view.")
    spacer()

    title("Mark entries pane")
    hotkey("x/d/<Space>", "Remove the selected entry from the list.")
    hotkey("a", "Remove all entries from the list.")
    hotkey(
        "Ctrl + r",
        "Permanently delete all marked entries without prompt.",
        "This operation cannot be undone!",
    )
    if trash_enabled:
        hotkey(
            "Ctrl + t",
            "Move all marked entries to the trash bin.",
            "The entries can be restored from the trash bin.",
        )
    spacer()

    title("Application control")
    hotkey("Ctrl + c", "Close the application. No questions asked!")
    spacer()
    return lines
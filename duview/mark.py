"""The pane listing entries marked for deletion or for moving to the trash."""

from __future__ import annotations

import enum
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path, PurePath

from duview.keys import CursorDirection, Key, KeyCode


class MarkMode(enum.Enum):
    """What to do with the marked entries."""

    DELETE = enum.auto()
    TRASH = enum.auto()


@dataclass
class EntryMark:
    """A marked entry, remembered with the order in which it was marked."""

    size: int = 0
    path: Path = Path()
    index: int = 0
    num_errors_during_deletion: int = 0
    is_dir: bool = False
    entry_count: int | None = None

    def __post_init__(self) -> None:
        self.path = Path(self.path)


def calculate_size_and_count(marked: Mapping[int, EntryMark]) -> tuple[int, int]:
    """Return the total size and item count, not counting entries inside marked directories."""
    entries = sorted(marked.values(), key=lambda mark: PurePath(mark.path).parts)
    size = 0
    item_count = 0
    for position, entry in enumerate(entries):
        inside_marked_dir = any(
            other.is_dir and PurePath(entry.path).is_relative_to(other.path)
            for other in entries[:position]
        )
        if not inside_marked_dir:
            size += entry.size
            item_count += 1 if entry.entry_count is None else entry.entry_count
    return size, item_count


_MOVES = {
    KeyCode.PAGE_UP: CursorDirection.PAGE_UP,
    KeyCode.PAGE_DOWN: CursorDirection.PAGE_DOWN,
    KeyCode.UP: CursorDirection.UP,
    KeyCode.DOWN: CursorDirection.DOWN,
}

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


class MarkPane:
    """Marked entries keyed by tree index, with a selection for navigation and deletion.

    Operations that may empty the pane return the pane, or None once nothing
    is marked any more and the pane should close.
    """

    def __init__(self) -> None:
        self.selected: int | None = None
        self.has_focus = False
        self.total_size = 0
        self.item_count = 0
        self._marked: dict[int, EntryMark] = {}
        self._last_sorting_index = 0

    @property
    def marked(self) -> dict[int, EntryMark]:
        """The marked entries keyed by tree index."""
        return self._marked

    def set_focus(self, has_focus: bool) -> None:
        """Focus the pane, selecting the most recent mark, or drop the selection."""
        self.has_focus = has_focus
        self.selected = max(len(self._marked) - 1, 0) if has_focus else None

    def toggle_index(
        self,
        index: int,
        path: str | os.PathLike[str],
        size: int,
        entry_count: int | None,
        is_dir: bool,
        toggle: bool,
    ) -> MarkPane | None:
        """Mark ``index``, or unmark it if already marked and ``toggle`` is set."""
        if index not in self._marked:
            self._last_sorting_index += 1
            self._marked[index] = EntryMark(
                size=size,
                path=Path(path),
                index=self._last_sorting_index,
                num_errors_during_deletion=0,
                is_dir=is_dir,
                entry_count=entry_count,
            )
        elif toggle:
            del self._marked[index]
        if not self._marked:
            return None
        self.total_size, self.item_count = calculate_size_and_count(self._marked)
        return self

    def into_paths(self) -> list[Path]:
        """Return the marked paths in tree index order."""
        return [self._marked[index].path for index in sorted(self._marked)]

    def process_events(self, key: Key) -> tuple[MarkPane, MarkMode | None] | None:
        """Handle a key; returns the pane and a requested action, or None to close."""
        if key.release:
            return self, None
        char = key.char if key.code is KeyCode.CHAR else None
        if char is not None and key.ctrl:
            if char == "r":
                return self._prepare_deletion(MarkMode.DELETE)
            if char == "t":
                return self._prepare_deletion(MarkMode.TRASH)
            if char in _CTRL_MOVES:
                self._change_selection(_CTRL_MOVES[char])
                return self, None
        if char == "a":
            return None
        if char in _CHAR_MOVES:
            self._change_selection(_CHAR_MOVES[char])
        elif char in ("x", "d", " "):
            pane = self._remove_selected()
            return None if pane is None else (pane, None)
        elif key.code in _MOVES:
            self._change_selection(_MOVES[key.code])
        return self, None

    def iterate_deletable_items(self, delete_fn: Callable[[int], int]) -> MarkPane | None:
        """Delete marked entries starting at the selection.

        ``delete_fn`` receives a tree index and returns the number of errors met;
        zero means the entry is gone and its mark is removed. Entries that failed
        keep their error count and are skipped. Returns None once all are deleted.
        """
        pane: MarkPane | None = self
        while pane is not None:
            index = pane._next_entry_for_deletion()
            if index is None:
                return pane
            num_errors = delete_fn(index)
            if num_errors == 0:
                pane = pane._remove_selected()
            else:
                pane._set_error_on_marked_item(num_errors)
        return None

    def _sorted_indices(self) -> list[int]:
        return sorted(self._marked, key=lambda index: self._marked[index].index)

    def _tree_index_by_list_position(self, position: int) -> int | None:
        indices = self._sorted_indices()
        return indices[position] if 0 <= position < len(indices) else None

    def _next_entry_for_deletion(self) -> int | None:
        if self.selected is None:
            return None
        position = self.selected
        index = self._tree_index_by_list_position(position)
        if index is None:
            return None
        if self._marked[index].num_errors_during_deletion == 0:
            return index
        following = position + 1
        self.selected = following if following < len(self._marked) else max(
            len(self._marked) - 1, 0
        )
        return self._tree_index_by_list_position(following)

    def _set_error_on_marked_item(self, num_errors: int) -> None:
        if self.selected is None:
            return
        index = self._tree_index_by_list_position(self.selected)
        if index is not None:
            self._marked[index].num_errors_during_deletion = num_errors

    def _prepare_deletion(self, mode: MarkMode) -> tuple[MarkPane, MarkMode]:
        for mark in self._marked.values():
            mark.num_errors_during_deletion = 0
        self.selected = 0
        return self, mode

    def _remove_selected(self) -> MarkPane | None:
        if self.selected is None:
            return self
        selected = self.selected
        index = self._tree_index_by_list_position(selected)
        if index is None:
            return self
        del self._marked[index]
        new_len = len(self._marked)
        if new_len == 0:
            return None
        if new_len == selected:
            selected = max(selected - 1, 0)
        self.selected = selected
        return self

    def _change_selection(self, direction: CursorDirection) -> None:
        if self.selected is None:
            return
        self.selected = min(direction.move_cursor(self.selected), max(len(self._marked) - 1, 0))
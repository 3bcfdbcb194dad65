"""Formatting helpers for the entries list: names, columns and titles."""

from __future__ import annotations

import enum
from collections.abc import Collection, Sequence
from datetime import datetime, timezone
from typing import TypeVar

import regex
from wcwidth import wcswidth, wcwidth

from duview.styling import Color, Modifier, Style, entry_color, format_count

_ELLIPSIS = "…"
_ELLIPSIS_LEN = 1
_SEPARATOR = " | "
_GRAPHEME = regex.compile(r"\X")

T = TypeVar("T")


class SortMode(enum.Enum):
    """How the entries of a directory are ordered."""

    SIZE_ASCENDING = enum.auto()
    SIZE_DESCENDING = enum.auto()
    MTIME_ASCENDING = enum.auto()
    MTIME_DESCENDING = enum.auto()
    COUNT_ASCENDING = enum.auto()
    COUNT_DESCENDING = enum.auto()
    NAME_ASCENDING = enum.auto()
    NAME_DESCENDING = enum.auto()


class Column(enum.Enum):
    """An optional or sortable column of the entries list."""

    BYTES = enum.auto()
    MTIME = enum.auto()
    COUNT = enum.auto()


_SORTED_COLUMN = {
    SortMode.SIZE_ASCENDING: Column.BYTES,
    SortMode.SIZE_DESCENDING: Column.BYTES,
    SortMode.MTIME_ASCENDING: Column.MTIME,
    SortMode.MTIME_DESCENDING: Column.MTIME,
    SortMode.COUNT_ASCENDING: Column.COUNT,
    SortMode.COUNT_DESCENDING: Column.COUNT,
}


def _graphemes(text: str) -> list[str]:
    return _GRAPHEME.findall(text)


def _display_width(text: str) -> int:
    width = wcswidth(text)
    if width >= 0:
        return width
    return sum(max(wcwidth(char), 0) for char in text)


def shorten_input(text: str, width: int) -> str:
    """Shorten ``text`` around the middle with an ellipsis to fit ``width`` columns.

    Graphemes are counted as one column each when cutting, so wide characters
    produce a result narrower than requested.
    """
    total = _display_width(text)
    if total <= width:
        return text
    if _ELLIPSIS_LEN > width:
        return ""
    per_half = (width - _ELLIPSIS_LEN) // 2
    graphemes = _graphemes(text)
    head = graphemes[:per_half]
    tail = graphemes[per_half:][total - per_half * 2 :]
    return "".join(head) + _ELLIPSIS + "".join(tail)


def name_with_prefix(name: str, is_dir: bool) -> str:
    """Prefix directories with '/' and files with ' ', leaving explicit roots as they are."""
    if not is_dir:
        return " " + name
    if (
        name in (".", "..")
        or name.startswith("/")
        or name.startswith("./")
        or name.startswith("../")
    ):
        return name
    return "/" + name


def fill_background_to_right(text: str, width: int) -> str:
    """Pad ``text`` with spaces up to ``width``, measured in UTF-8 bytes."""
    length = len(text.encode("utf-8"))
    if length >= width:
        return text
    return text + " " * (width - length)


def entry_in_view(selected: T | None, indices: Sequence[T]) -> int | None:
    """Return the list position of ``selected``, 0 if absent, None if nothing is selected."""
    if selected is None:
        return None
    try:
        return list(indices).index(selected)
    except ValueError:
        return 0


def title(
    current_path: str, item_count: int, recursive_item_count: int, size_text: str
) -> str:
    """Return the title of the entries pane."""
    return (
        f" {current_path} ({item_count} visible, "
        f"{format_count(recursive_item_count)} total, {size_text}) "
    )


def show_mtime_column(sort_mode: SortMode, show_columns: Collection[Column]) -> bool:
    """Whether the modification time column is shown."""
    return _SORTED_COLUMN.get(sort_mode) is Column.MTIME or Column.MTIME in show_columns


def show_count_column(sort_mode: SortMode, show_columns: Collection[Column]) -> bool:
    """Whether the entry count column is shown."""
    return _SORTED_COLUMN.get(sort_mode) is Column.COUNT or Column.COUNT in show_columns


def format_mtime(mtime: float) -> str:
    """Format a modification time as UTC, right-aligned to 20 columns."""
    moment = datetime.fromtimestamp(mtime, tz=timezone.utc)
    return f"{moment.strftime('%d/%m/%Y %H:%M:%S'):>20}"


def format_count_column(entry_count: int | None) -> str:
    """Format an entry count right-aligned to 4 columns; empty if unknown."""
    text = "" if entry_count is None else format_count(entry_count)
    return f"{text:>4}"


def format_bytes_column(size_text: str, width: int) -> str:
    """Right-align a formatted size to ``width`` columns."""
    return f"{size_text:>{width}}"


def column_color(column: Column, sort_mode: SortMode, fg: Color | None) -> Color | None:
    """Return green for the column that is sorted by, otherwise ``fg``."""
    if _SORTED_COLUMN.get(sort_mode) is column:
        return Color.GREEN
    return fg


def columns_with_separators(columns: Sequence[str], insert_last_separator: bool) -> list[str]:
    """Interleave columns with separators, optionally adding one after the last."""
    result: list[str] = []
    last = len(columns) - 1
    for position, column in enumerate(columns):
        result.append(column)
        if insert_last_separator or position != last:
            result.append(_SEPARATOR)
    return result


def _text_style(is_selected: bool, is_focussed: bool) -> Style:
    modifier = Modifier(0)
    if is_selected:
        modifier |= Modifier.REVERSED
        if is_focussed:
            modifier |= Modifier.BOLD
    return Style(add_modifier=modifier)


def _percentage_style(fraction: float, style: Style) -> Style:
    if fraction > 0.9:
        return Style(
            fg=style.fg,
            bg=style.bg,
            add_modifier=style.add_modifier & ~Modifier.REVERSED,
            sub_modifier=style.sub_modifier | Modifier.REVERSED,
        )
    return style


def _name_style(is_marked: bool, exists: bool, is_dir: bool, style: Style) -> Style:
    fg = Color.RED if not exists else entry_color(style.fg, not is_dir, is_marked)
    return Style(fg=fg, bg=style.bg, add_modifier=style.add_modifier, sub_modifier=style.sub_modifier)
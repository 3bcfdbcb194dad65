import pytest

from duview.entries import (
    Column,
    SortMode,
    column_color,
    columns_with_separators,
    entry_in_view,
    fill_background_to_right,
    format_bytes_column,
    format_count_column,
    format_mtime,
    name_with_prefix,
    shorten_input,
    show_count_column,
    show_mtime_column,
    title,
)
from duview.styling import Color

NUMBERS = "12345678"
GRAPHEMES = "你好😁你好"


@pytest.mark.parametrize(
    "text, width, expected",
    [
        (NUMBERS, 8, NUMBERS),
        (NUMBERS, 7, "123…678"),
        (NUMBERS, 3, "1…8"),
        (NUMBERS, 2, "…"),
        (NUMBERS, 1, "…"),
        (NUMBERS, 0, ""),
        (GRAPHEMES, 0, ""),
        (GRAPHEMES, 1, "…"),
        (GRAPHEMES, 3, "你…"),
        (GRAPHEMES, 4, "你…"),
        (GRAPHEMES, 5, "你好…"),
        (GRAPHEMES, 6, "你好…"),
        (GRAPHEMES, 7, "你好😁…"),
        (GRAPHEMES, 8, "你好😁…"),
        (GRAPHEMES, 9, "你好😁你…"),
        (GRAPHEMES, 10, "你好😁你好"),
    ],
)
def test_shorten_string_middle(text, width, expected):
    assert shorten_input(text, width) == expected


@pytest.mark.parametrize(
    "name, is_dir, expected",
    [
        ("foo", True, "/foo"),
        ("foo", False, " foo"),
        (".", True, "."),
        ("..", True, ".."),
        ("/abs", True, "/abs"),
        ("./rel", True, "./rel"),
        ("../up", True, "../up"),
        ("./rel", False, " ./rel"),
    ],
)
def test_name_with_prefix(name, is_dir, expected):
    assert name_with_prefix(name, is_dir) == expected


def test_fill_background_to_right_pads():
    assert fill_background_to_right("ab", 5) == "ab   "


def test_fill_background_to_right_keeps_long_text():
    assert fill_background_to_right("abcdef", 3) == "abcdef"


def test_fill_background_counts_bytes():
    # "é" is two bytes in UTF-8
    assert fill_background_to_right("é", 4) == "é  "


def test_entry_in_view():
    assert entry_in_view(None, [1, 2, 3]) is None
    assert entry_in_view(3, [1, 2, 3]) == 2
    assert entry_in_view(9, [1, 2, 3]) == 0


def test_title():
    assert title("/tmp", 3, 1500, "1.00 KiB") == " /tmp (3 visible, 2K total, 1.00 KiB) "


def test_show_columns():
    assert show_mtime_column(SortMode.MTIME_ASCENDING, set())
    assert show_mtime_column(SortMode.SIZE_ASCENDING, {Column.MTIME})
    assert not show_mtime_column(SortMode.SIZE_ASCENDING, {Column.COUNT})
    assert show_count_column(SortMode.COUNT_DESCENDING, set())
    assert show_count_column(SortMode.NAME_ASCENDING, {Column.COUNT})
    assert not show_count_column(SortMode.MTIME_DESCENDING, set())


def test_format_mtime_epoch():
    assert format_mtime(0) == " 01/01/1970 00:00:00"
    assert len(format_mtime(1_000_000_000)) == 20


def test_format_count_column():
    assert format_count_column(None) == "    "
    assert format_count_column(5) == "   5"
    assert format_count_column(2000) == "  2K"


def test_format_bytes_column():
    assert format_bytes_column("12 B", 10) == "      12 B"


def test_column_color():
    assert column_color(Column.BYTES, SortMode.SIZE_DESCENDING, None) == Color.GREEN
    assert column_color(Column.MTIME, SortMode.MTIME_ASCENDING, Color.RED) == Color.GREEN
    assert column_color(Column.COUNT, SortMode.SIZE_ASCENDING, Color.RED) == Color.RED
    assert column_color(Column.BYTES, SortMode.NAME_ASCENDING, None) is None


def test_columns_with_separators():
    assert columns_with_separators(["a", "b"], False) == ["a", " | ", "b"]
    assert columns_with_separators(["a", "b"], True) == ["a", " | ", "b", " | "]
    assert columns_with_separators([], True) == []
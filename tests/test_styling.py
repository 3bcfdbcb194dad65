import pytest

from duview.styling import (
    COLOR_MARKED,
    COLOR_MARKED_DARK,
    Color,
    Modifier,
    Span,
    Style,
    entry_color,
    format_count,
)


def test_entry_color_unmarked_file_keeps_foreground():
    assert entry_color(Color.RED, True, False) == Color.RED
    assert entry_color(None, True, False) is None


def test_entry_color_marked_file_is_dark_marked():
    assert entry_color(Color.RED, True, True) == COLOR_MARKED_DARK


def test_entry_color_marked_directory():
    assert entry_color(Color.RED, False, True) == COLOR_MARKED


def test_entry_color_unmarked_directory_is_cyan():
    assert entry_color(Color.RED, False, False) == Color.CYAN


def test_marked_colors_differ():
    marked_file = entry_color(None, True, True)
    marked_dir = entry_color(None, False, True)
    assert marked_file.rgb == (176, 126, 0)
    assert marked_dir == Color.YELLOW
    assert marked_file != marked_dir


@pytest.mark.parametrize("value", [0, 1, 42, 999])
def test_format_count_small_values_are_plain(value):
    assert format_count(value) == str(value)


def test_format_count_thousands():
    assert format_count(1000) == "1K"


def test_format_count_millions():
    assert format_count(2_000_000) == "2M"


def test_format_count_negative_mirrors_positive():
    assert format_count(-1000) == "-" + format_count(1000)


def test_format_count_has_no_decimals():
    assert "." not in format_count(123_456_789)


def test_span_default_style():
    span = Span("hello")
    assert span.style == Style()
    assert span.text == "hello"


def test_style_modifier_combination():
    style = Style(add_modifier=Modifier.BOLD | Modifier.UNDERLINED)
    assert Modifier.BOLD in style.add_modifier
    assert Modifier.REVERSED not in style.add_modifier
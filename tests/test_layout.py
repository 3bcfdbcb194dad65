import pytest

from duview.layout import (
    FocussedPane,
    Rect,
    content_layout,
    header_background_color,
    main_window_layout,
    margin,
    pane_border_style,
    right_pane_layout,
)
from duview.styling import COLOR_MARKED, Color, Modifier


@pytest.mark.parametrize("height", [3, 24, 100, 256 + 2])
def test_main_window_layout_stacks_regions(height):
    area = Rect(0, 0, 80, height)
    header, content, footer = main_window_layout(area)
    assert header.height == 1
    assert footer.height == 1
    assert header.y == area.y
    assert content.y == header.y + header.height
    assert footer.y == content.y + content.height
    assert footer.y + footer.height == area.y + area.height
    assert {header.width, content.width, footer.width} == {area.width}


def test_main_window_content_is_capped():
    area = Rect(0, 0, 10, 400)
    _, content, footer = main_window_layout(area)
    assert content.height == 256
    assert footer.y + footer.height == area.height


@pytest.mark.parametrize("width", [10, 11, 1])
def test_content_layout_covers_width(width):
    area = Rect(2, 3, width, 5)
    left, right = content_layout(area)
    assert left.x == area.x
    assert right.x == left.x + left.width
    assert left.width + right.width == area.width
    assert abs(left.width - right.width) <= 1
    assert left.height == right.height == area.height


@pytest.mark.parametrize("height", [10, 11])
def test_right_pane_layout_covers_height(height):
    area = Rect(0, 1, 20, height)
    top, bottom = right_pane_layout(area)
    assert top.y == area.y
    assert bottom.y == top.y + top.height
    assert top.height + bottom.height == area.height
    assert abs(top.height - bottom.height) <= 1


def test_margin_shrinks_every_side():
    rect = Rect(2, 3, 10, 8)
    inner = margin(rect, 1)
    assert inner.x == rect.x + 1
    assert inner.y == rect.y + 1
    assert inner.x + inner.width == rect.x + rect.width - 1
    assert inner.y + inner.height == rect.y + rect.height - 1
    assert margin(rect, 0) == rect


def test_margin_too_large():
    with pytest.raises(ValueError):
        margin(Rect(0, 0, 1, 10), 1)


def test_header_background_color():
    assert header_background_color(False, FocussedPane.MARK) == Color.LIGHT_RED
    assert header_background_color(False, FocussedPane.MAIN) == COLOR_MARKED
    assert header_background_color(True, FocussedPane.MARK) == Color.WHITE
    assert header_background_color(True, FocussedPane.GLOB) == Color.WHITE


@pytest.mark.parametrize("position, pane", list(enumerate(FocussedPane)))
def test_pane_border_style(position, pane):
    styles = pane_border_style(pane)
    assert len(styles) == 4
    for index, style in enumerate(styles):
        if index == position:
            assert style.add_modifier == Modifier.BOLD
            assert style.fg is None
        else:
            assert style.fg == Color.DARK_GRAY
            assert style.bg == Color.RESET
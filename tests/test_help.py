from duview.help import HelpPane, help_lines
from duview.keys import Key, KeyCode
from duview.styling import Color, Modifier


def line_text(line):
    return "".join(span.text for span in line)


def test_down_and_up_keys():
    pane = HelpPane()
    pane.process_events(Key(KeyCode.CHAR, "j"))
    pane.process_events(Key(KeyCode.DOWN))
    assert pane.scroll == 2
    pane.process_events(Key(KeyCode.CHAR, "k"))
    pane.process_events(Key(KeyCode.UP))
    pane.process_events(Key(KeyCode.UP))
    assert pane.scroll == 0


def test_release_is_ignored():
    pane = HelpPane()
    pane.process_events(Key(KeyCode.CHAR, "j", release=True))
    assert pane.scroll == 0


def test_page_keys_move_ten():
    pane = HelpPane()
    pane.process_events(Key(KeyCode.CHAR, "d", ctrl=True))
    assert pane.scroll == 10
    pane.process_events(Key(KeyCode.PAGE_DOWN))
    pane.process_events(Key(KeyCode.CHAR, "u", ctrl=True))
    assert pane.scroll == 10
    pane.process_events(Key(KeyCode.PAGE_UP))
    assert pane.scroll == 0


def test_bottom_then_clamp():
    pane = HelpPane()
    pane.process_events(Key(KeyCode.CHAR, "G"))
    line_count, height = 40, 10
    assert pane.clamp_scroll(line_count, height) == line_count - height
    assert pane.scroll == line_count - height
    pane.process_events(Key(KeyCode.CHAR, "H"))
    assert pane.scroll == 0


def test_clamp_when_everything_fits():
    pane = HelpPane(scroll=5)
    assert pane.clamp_scroll(3, 10) == 0


def test_first_lines():
    lines = help_lines(False)
    assert line_text(lines[0]) == "Pane control"
    assert lines[0][0].style.add_modifier == Modifier.BOLD | Modifier.UNDERLINED
    assert line_text(lines[1]) == ""
    assert lines[2][0].text == "    q/<Esc>"
    assert lines[2][0].style.fg == Color.GREEN
    assert lines[2][1].text == " => Close the current pane."
    assert line_text(lines[3]).strip() == "Closes the program if no pane is open."
    assert line_text(lines[3]).startswith(" " * 15 + "Closes")


def test_trash_lines_only_when_enabled():
    without = help_lines(False)
    with_trash = help_lines(True)
    assert len(with_trash) == len(without) + 2
    assert any("Ctrl + t" in line_text(line) for line in with_trash)
    assert not any("Ctrl + t" in line_text(line) for line in without)


def test_key_columns_are_aligned():
    for line in help_lines(True):
        if len(line) == 2:
            assert len(line[0].text) >= 11
            assert line[1].text.startswith(" => ")
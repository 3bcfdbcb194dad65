"""The title line shown at the top of the main window."""

from __future__ import annotations

from duview.styling import Color, Modifier, Style, Span


def header_spans(bg_color: Color, version: str) -> list[Span]:
    """Return the styled spans of the header line on ``bg_color``."""
    standard = Style(fg=Color.BLACK, bg=bg_color)

    def modified(text: str, modifier: Modifier) -> Span:
        return Span(text, Style(fg=standard.fg, bg=standard.bg, add_modifier=modifier))

    def bold(text: str) -> Span:
        return modified(text, Modifier.BOLD)

    def underlined(text: str) -> Span:
        return modified(text, Modifier.UNDERLINED)

    def plain(text: str) -> Span:
        return Span(text, standard)

    return [
        bold(" D"),
        plain("isk "),
        bold("U"),
        plain("sage "),
        bold("A"),
        plain("nalyzer v"),
        plain(version),
        plain("    "),
        underlined("(press "),
        modified("?", Modifier.BOLD | Modifier.UNDERLINED),
        underlined(" for help)"),
    ]
"""Git-style glob search over the traversal tree, and the text input of the glob pane."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass

import regex
from wcwidth import wcswidth, wcwidth

from duview.keys import Key, KeyCode
from duview.tree import Tree

_GRAPHEME = regex.compile(r"\X")

_POSIX_CLASSES = {
    "alnum": "a-zA-Z0-9",
    "alpha": "a-zA-Z",
    "digit": "0-9",
    "lower": "a-z",
    "upper": "A-Z",
    "space": r"\s",
    "blank": " \t",
    "punct": re.escape(string.punctuation),
    "xdigit": "0-9a-fA-F",
    "cntrl": r"\x00-\x1f\x7f",
    "graph": "!-~",
    "print": " -~",
}


def _graphemes(text: str) -> list[str]:
    return _GRAPHEME.findall(text)


def _grapheme_width(grapheme: str) -> int:
    width = wcswidth(grapheme)
    if width >= 0:
        return width
    return sum(max(wcwidth(char), 0) for char in grapheme)


class GlobInput:
    """The editable text of the glob pane with a cursor counted in graphemes."""

    def __init__(self, text: str = "") -> None:
        self.input = text
        self.cursor = 0

    def _clamp(self, position: int) -> int:
        return min(max(position, 0), len(_graphemes(self.input)))

    def move_cursor_left(self) -> None:
        """Move the cursor one grapheme to the left."""
        self.cursor = self._clamp(self.cursor - 1)

    def move_cursor_right(self) -> None:
        """Move the cursor one grapheme to the right."""
        self.cursor = self._clamp(self.cursor + 1)

    def enter_char(self, char: str) -> None:
        """Insert ``char`` at the cursor and move the cursor past it."""
        graphemes = _graphemes(self.input)
        offset = sum(len(g) for g in graphemes[: self.cursor])
        self.input = self.input[:offset] + char + self.input[offset:]
        for _ in _graphemes(char):
            self.move_cursor_right()

    def delete_char(self) -> None:
        """Delete the grapheme before the cursor."""
        if self.cursor == 0:
            return
        graphemes = _graphemes(self.input)
        self.input = "".join(graphemes[: self.cursor - 1] + graphemes[self.cursor :])
        self.move_cursor_left()

    def process_events(self, key: Key) -> None:
        """Edit the input according to a key press; releases are ignored."""
        if key.release:
            return
        if key.code is KeyCode.CHAR and key.char is not None:
            self.enter_char(key.char)
        elif key.code is KeyCode.BACKSPACE:
            self.delete_char()
        elif key.code is KeyCode.LEFT:
            self.move_cursor_left()
        elif key.code is KeyCode.RIGHT:
            self.move_cursor_right()

    def cursor_column(self) -> int:
        """Return the display width of the text before the cursor."""
        return sum(_grapheme_width(g) for g in _graphemes(self.input)[: self.cursor])


@dataclass(frozen=True)
class GlobPattern:
    """A compiled, case-insensitive git-style glob."""

    text: str
    regex: re.Pattern[str]
    must_be_dir: bool
    absolute: bool
    basename_only: bool

    def matches(self, path: str, is_dir: bool, basename: str | None = None) -> bool:
        """Whether the repository-relative ``path`` matches this pattern."""
        if self.must_be_dir and not is_dir:
            return False
        if self.basename_only:
            subject = basename if basename is not None else path.rsplit("/", 1)[-1]
        else:
            subject = path
        return self.regex.fullmatch(subject) is not None


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    i = start + 1
    n = len(pattern)
    negate = False
    if i < n and pattern[i] in "!^":
        negate = True
        i += 1
    parts: list[str] = []
    first = True
    while i < n:
        char = pattern[i]
        if char == "]" and not first:
            body = "".join(parts)
            if negate:
                return f"[^/{body}]", i + 1
            if not body:
                return "(?!)", i + 1
            return f"(?!/)[{body}]", i + 1
        first = False
        if char == "[" and pattern.startswith("[:", i):
            end = pattern.find(":]", i + 2)
            if end != -1 and pattern[i + 2 : end] in _POSIX_CLASSES:
                parts.append(_POSIX_CLASSES[pattern[i + 2 : end]])
                i = end + 2
                continue
        if char == "\\" and i + 1 < n:
            parts.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if i + 2 < n and pattern[i + 1] == "-" and pattern[i + 2] != "]":
            low, high = char, pattern[i + 2]
            if low <= high:
                parts.append(f"{re.escape(low)}-{re.escape(high)}")
            i += 3
            continue
        parts.append(re.escape(char))
        i += 1
    return re.escape("["), start + 1


def _translate(pattern: str) -> str:
    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        if char == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            at_start = i == 0 or pattern[i - 1] == "/"
            at_end = j == n or pattern[j] == "/"
            if j - i >= 2 and at_start and at_end:
                if j == n:
                    out.append(".*")
                    i = j
                else:
                    out.append("(?:.*/)?")
                    i = j + 1
            else:
                out.append("[^/]*")
                i = j
        elif char == "?":
            out.append("[^/]")
            i += 1
        elif char == "[":
            translated, i = _translate_class(pattern, i)
            out.append(translated)
        elif char == "\\" and i + 1 < n:
            out.append(re.escape(pattern[i + 1]))
            i += 2
        else:
            out.append(re.escape(char))
            i += 1
    return "".join(out)


def _trim_trailing_whitespace(text: str) -> str:
    stripped = text.rstrip(" \t\r\n")
    escaped = stripped.endswith("\\") and not stripped.endswith("\\\\")
    if escaped and len(stripped) < len(text):
        stripped += text[len(stripped)]
    return stripped


def compile_glob(pattern: str) -> GlobPattern:
    """Compile a git-style glob; '!' is taken literally. Raises ValueError if empty."""
    text = _trim_trailing_whitespace(pattern)
    if not text.strip():
        raise ValueError("Glob was empty or only whitespace")
    must_be_dir = text.endswith("/")
    if must_be_dir:
        text = text[:-1]
    absolute = text.startswith("/")
    if absolute:
        text = text[1:]
    if not text:
        raise ValueError("Glob was empty or only whitespace")
    compiled = re.compile(_translate(text), re.IGNORECASE | re.DOTALL)
    return GlobPattern(
        text=text,
        regex=compiled,
        must_be_dir=must_be_dir,
        absolute=absolute,
        basename_only="/" not in text and not absolute,
    )


def glob_search(tree: Tree, root_index: int, pattern: str) -> list[int]:
    """Return the nodes below ``root_index`` matching ``pattern``; matches are not descended."""
    glob = compile_glob(pattern)
    results: list[int] = []

    def visit(index: int, prefix: str) -> None:
        for child in tree.children(index):
            node = tree[child]
            path = f"{prefix}/{node.name}" if prefix else node.name
            if glob.matches(path, node.is_dir, basename=node.name):
                results.append(child)
            else:
                visit(child, path)

    visit(root_index, "")
    return results
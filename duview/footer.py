"""Text of the status line shown at the bottom of the main window."""

from __future__ import annotations

import time

from duview.entries import SortMode

_LABELS = {
    SortMode.SIZE_ASCENDING: "size ascending",
    SortMode.SIZE_DESCENDING: "size descending",
    SortMode.MTIME_ASCENDING: "modified ascending",
    SortMode.MTIME_DESCENDING: "modified descending",
    SortMode.COUNT_ASCENDING: "items ascending",
    SortMode.COUNT_DESCENDING: "items descending",
    SortMode.NAME_ASCENDING: "name ascending",
    SortMode.NAME_DESCENDING: "name descending",
}


def sort_mode_label(sort_mode: SortMode) -> str:
    """Return the human readable name of a sort mode."""
    return _LABELS[sort_mode]


def _rate(entries: int, seconds: float) -> str:
    if seconds > 0:
        return f"{entries / seconds:.0f}"
    return "NaN" if entries == 0 else "inf"


def footer_text(
    sort_mode: SortMode,
    total_size_text: str,
    entries_traversed: int,
    elapsed: float | None,
    traversal_start: float,
) -> str:
    """Return the footer line; without ``elapsed`` the time since ``traversal_start`` is used."""
    if elapsed is not None:
        progress = f"in {elapsed:.2f}s"
    else:
        running = time.monotonic() - traversal_start
        progress = f"in {running:.0f}s ({_rate(entries_traversed, running)}/s)"
    return (
        f"Sort mode: {sort_mode_label(sort_mode)}  "
        f"Total disk usage: {total_size_text}  "
        f"Processed {entries_traversed} entries {progress}  "
    )
"""Literal substring search with wraparound, and single/bulk replace."""

from __future__ import annotations

from typing import Optional

from modal_edit.buffer.document import Document
from modal_edit.buffer.line_store import LineStore
from modal_edit.buffer.state import Cursor
from modal_edit.buffer.validation import clamp_cursor


def search_forward(store: LineStore, cursor: Cursor, query: bytes) -> Optional[Cursor]:
    """First match after the cursor, wrapping through the cursor line.

    Order: the rest of the cursor line past ``col``, every later line, then
    lines ``0..row`` from their start.
    """

    if not query:
        return None
    row, col = clamp_cursor(store, cursor)
    pos = store.line(row).find(query, col + 1)
    if pos >= 0:
        return (row, pos)
    for candidate in range(row + 1, len(store)):
        pos = store.line(candidate).find(query)
        if pos >= 0:
            return (candidate, pos)
    for candidate in range(0, row + 1):
        pos = store.line(candidate).find(query)
        if pos >= 0:
            return (candidate, pos)
    return None


def search_backward(store: LineStore, cursor: Cursor, query: bytes) -> Optional[Cursor]:
    """Mirror of :func:`search_forward` scanning right-to-left."""

    if not query:
        return None
    row, col = clamp_cursor(store, cursor)
    if col > 0:
        # Matches must start strictly before the cursor.
        pos = store.line(row).rfind(query, 0, col - 1 + len(query))
        if pos >= 0:
            return (row, pos)
    for candidate in range(row - 1, -1, -1):
        pos = store.line(candidate).rfind(query)
        if pos >= 0:
            return (candidate, pos)
    for candidate in range(len(store) - 1, row - 1, -1):
        pos = store.line(candidate).rfind(query)
        if pos >= 0:
            return (candidate, pos)
    return None


def replace_once(document: Document, find: bytes, replacement: bytes) -> Optional[int]:
    """Replace the first ``find`` at/after the cursor on the cursor line.

    The cursor lands just past the inserted text. Returns the match column,
    or ``None`` when the line has no match.
    """

    if not find:
        return None
    row, col = document.cursor
    pos = document.line(row).find(find, col)
    if pos < 0:
        return None
    document.replace_text(row, pos, pos + len(find), replacement)
    document.set_cursor(row, pos + len(replacement))
    return pos


def replace_all(document: Document, find: bytes, replacement: bytes) -> int:
    """Replace every non-overlapping ``find`` in the document; returns the count.

    Scanning resumes after each inserted replacement, so text produced by a
    substitution is never matched again.
    """

    if not find:
        return 0
    total = 0
    with document.transaction("replace_all"):
        for row in range(document.line_count):
            updated, count = _replace_in_line(document.line(row).data, find, replacement)
            if count:
                document.set_line(row, updated)
                total += count
    return total


def _replace_in_line(data: bytes, find: bytes, replacement: bytes) -> tuple[bytes, int]:
    parts = []
    count = 0
    offset = 0
    while True:
        pos = data.find(find, offset)
        if pos < 0:
            break
        parts.append(data[offset:pos])
        parts.append(replacement)
        offset = pos + len(find)
        count += 1
    parts.append(data[offset:])
    return b"".join(parts), count


__all__ = ["search_forward", "search_backward", "replace_once", "replace_all"]

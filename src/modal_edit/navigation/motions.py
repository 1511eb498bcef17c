"""Pure cursor motions over a :class:`~modal_edit.buffer.LineStore`.

Every function takes the store (read-only) and a ``(row, col)`` cursor and
returns the new cursor. Results are always clamped, so callers may feed in a
stale cursor left behind by an edit.
"""

from __future__ import annotations

from typing import Callable, Dict

from modal_edit.buffer.charclass import byte_class, leading_whitespace
from modal_edit.buffer.line_store import LineStore
from modal_edit.buffer.state import Cursor
from modal_edit.buffer.validation import clamp_cursor

Motion = Callable[[LineStore, Cursor], Cursor]

_WHITESPACE, _ALNUM, _OTHER = 0, 1, 2

_BRACKETS: Dict[int, tuple[int, int]] = {
    ord("("): (ord(")"), 1),
    ord(")"): (ord("("), -1),
    ord("["): (ord("]"), 1),
    ord("]"): (ord("["), -1),
    ord("{"): (ord("}"), 1),
    ord("}"): (ord("{"), -1),
}


def clamp(store: LineStore, cursor: Cursor) -> Cursor:
    return clamp_cursor(store, cursor)


def move_left(store: LineStore, cursor: Cursor) -> Cursor:
    row, col = clamp(store, cursor)
    if col > 0:
        return (row, col - 1)
    if row > 0:
        return (row - 1, len(store.line(row - 1)))
    return (row, col)


def move_right(store: LineStore, cursor: Cursor) -> Cursor:
    row, col = clamp(store, cursor)
    if col < len(store.line(row)):
        return (row, col + 1)
    if row < len(store) - 1:
        return (row + 1, 0)
    return (row, col)


def move_up(store: LineStore, cursor: Cursor) -> Cursor:
    row, col = clamp(store, cursor)
    if row == 0:
        return (row, col)
    return (row - 1, min(col, len(store.line(row - 1))))


def move_down(store: LineStore, cursor: Cursor) -> Cursor:
    row, col = clamp(store, cursor)
    if row >= len(store) - 1:
        return (row, col)
    return (row + 1, min(col, len(store.line(row + 1))))


def line_start(store: LineStore, cursor: Cursor) -> Cursor:
    """Soft home: first non-blank column, or column 0 when already there."""

    row, col = clamp(store, cursor)
    first = leading_whitespace(store.line(row).data)
    return (row, 0 if col == first else first)


def line_end(store: LineStore, cursor: Cursor) -> Cursor:
    row, _ = clamp(store, cursor)
    return (row, len(store.line(row)))


def word_forward(store: LineStore, cursor: Cursor) -> Cursor:
    """Skip the class run under the cursor, then any whitespace after it."""

    row, pos = clamp(store, cursor)
    data = store.line(row).data
    size = len(data)
    if pos < size:
        kind = byte_class(data[pos])
        if kind != _WHITESPACE:
            while pos < size and byte_class(data[pos]) == kind:
                pos += 1
    while pos < size and byte_class(data[pos]) == _WHITESPACE:
        pos += 1
    return (row, pos)


def word_backward(store: LineStore, cursor: Cursor) -> Cursor:
    row, pos = clamp(store, cursor)
    if pos == 0:
        return (row, pos)
    data = store.line(row).data
    pos -= 1
    while pos > 0 and byte_class(data[pos]) == _WHITESPACE:
        pos -= 1
    kind = _ALNUM if byte_class(data[pos]) == _ALNUM else _OTHER
    while pos > 0 and byte_class(data[pos - 1]) == kind:
        pos -= 1
    return (row, pos)


def page_up(store: LineStore, cursor: Cursor, height: int) -> Cursor:
    # Stepwise so the column clamps against every line passed, like repeated k.
    for _ in range(max(height - 1, 1)):
        if cursor[0] == 0:
            break
        cursor = move_up(store, cursor)
    return clamp(store, cursor)


def page_down(store: LineStore, cursor: Cursor, height: int) -> Cursor:
    for _ in range(max(height - 1, 1)):
        if cursor[0] >= len(store) - 1:
            break
        cursor = move_down(store, cursor)
    return clamp(store, cursor)


def file_start(store: LineStore, cursor: Cursor) -> Cursor:
    return (0, 0)


def file_end(store: LineStore, cursor: Cursor) -> Cursor:
    last = len(store) - 1
    return (last, len(store.line(last)))


def goto_line(store: LineStore, cursor: Cursor, number: int) -> Cursor:
    """Jump to 1-based line ``number`` (clamped), column 0."""

    number = max(1, min(number, len(store)))
    return (number - 1, 0)


def goto_column(store: LineStore, cursor: Cursor, col: int) -> Cursor:
    row, _ = clamp(store, cursor)
    return (row, max(0, min(col, len(store.line(row)))))


def matching_bracket(store: LineStore, cursor: Cursor) -> Cursor:
    """Jump to the bracket pairing the one under the cursor on the same line.

    The scan keeps a depth counter: the same bracket type nests, the
    complementary one unwinds. Without a partner the cursor stays put.
    """

    row, col = clamp(store, cursor)
    data = store.line(row).data
    if col >= len(data) or data[col] not in _BRACKETS:
        return (row, col)
    bracket = data[col]
    partner, step = _BRACKETS[bracket]
    depth = 1
    pos = col + step
    while 0 <= pos < len(data):
        if data[pos] == bracket:
            depth += 1
        elif data[pos] == partner:
            depth -= 1
            if depth == 0:
                return (row, pos)
        pos += step
    return (row, col)


__all__ = [
    "Motion",
    "clamp",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "line_start",
    "line_end",
    "word_forward",
    "word_backward",
    "page_up",
    "page_down",
    "file_start",
    "file_end",
    "goto_line",
    "goto_column",
    "matching_bracket",
]

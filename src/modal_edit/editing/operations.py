"""Cursor-relative edit operations composed from Document primitives.

Each operation acts on the document's cursor line and leaves the cursor
clamped. Positions the operation cannot act on (column 0 for transpose, an
empty clipboard for paste, ...) turn the call into a no-op; the return value
says whether anything happened so callers can report it.
"""

from __future__ import annotations

from typing import Callable, Tuple

from modal_edit.buffer.charclass import is_alnum, is_space, is_word, leading_whitespace
from modal_edit.buffer.clipboard import Clipboard
from modal_edit.buffer.document import Document
from modal_edit.navigation import motions
from modal_edit.runtime.settings import TAB_SIZE

COMMENT_PREFIX = b"// "
_COMMENT_MARK = b"//"
_OPEN_BRACE = ord("{")
_SPACE = ord(" ")


def insert_char(document: Document, byte: int) -> bool:
    row, col = document.cursor
    if not document.insert_char(row, col, byte):
        return False
    document.set_cursor(row, col + 1)
    return True


def insert_text(document: Document, data: bytes) -> bool:
    row, col = document.cursor
    if not document.insert_text(row, col, data):
        return False
    document.set_cursor(row, col + len(data))
    return True


def insert_tab(document: Document, size: int = TAB_SIZE) -> bool:
    return insert_text(document, b" " * size)


def delete_char(document: Document) -> bool:
    """Delete under the cursor; at end of line pull the next line up."""

    row, col = document.cursor
    if col < len(document.line(row)):
        return document.delete_char(row, col)
    return document.join_line(row)


def backspace(document: Document) -> bool:
    row, col = document.cursor
    if col > 0:
        if not document.delete_char(row, col - 1):
            return False
        document.set_cursor(row, col - 1)
        return True
    if row > 0:
        return document.join_line(row - 1)
    return False


def insert_newline(document: Document, *, auto_indent: bool = True) -> None:
    """Split at the cursor, seeding the new line with the indent above.

    After a line whose last non-blank byte is ``{`` one extra indent unit is
    added.
    """

    row, col = document.cursor
    with document.transaction("insert_newline"):
        new_row, _ = document.split_line(row, col)
        if not auto_indent:
            return
        indent = _indent_after(document.line(new_row - 1).data)
        if indent:
            document.insert_text(new_row, 0, indent)
            document.set_cursor(new_row, len(indent))


def open_line_below(document: Document, *, auto_indent: bool = True) -> None:
    document.set_cursor(*motions.line_end(document.store, document.cursor))
    insert_newline(document, auto_indent=auto_indent)


def open_line_above(document: Document, *, auto_indent: bool = True) -> None:
    row, _ = document.cursor
    current = document.line(row).data
    indent = current[: leading_whitespace(current)] if auto_indent else b""
    with document.transaction("open_line_above"):
        document.insert_line(row, indent)
        document.set_cursor(row, len(indent))


def delete_line(document: Document) -> None:
    document.delete_line(document.cursor[0])


def join_lines(document: Document) -> bool:
    return document.join_line(document.cursor[0])


def delete_word(document: Document) -> bool:
    row, start = document.cursor
    _, end = motions.word_forward(document.store, document.cursor)
    if end <= start:
        return False
    document.delete_text(row, start, end - start)
    document.set_cursor(row, start)
    return True


def delete_to_line_end(document: Document) -> bool:
    row, col = document.cursor
    length = len(document.line(row))
    if col >= length:
        return False
    return document.truncate_line(row, col)


def delete_to_line_start(document: Document) -> bool:
    row, col = document.cursor
    if col == 0:
        return False
    document.replace_text(row, 0, col, b"")
    document.set_cursor(row, 0)
    return True


def indent(document: Document, size: int = TAB_SIZE) -> None:
    row, col = document.cursor
    document.insert_text(row, 0, b" " * size)
    document.set_cursor(row, col + size)


def unindent(document: Document, size: int = TAB_SIZE) -> int:
    """Drop up to ``size`` leading spaces; returns how many were removed."""

    row, col = document.cursor
    data = document.line(row).data
    removed = 0
    while removed < size and removed < len(data) and data[removed] == _SPACE:
        removed += 1
    if removed:
        document.delete_text(row, 0, removed)
        document.set_cursor(row, max(col - removed, 0))
    return removed


def word_bounds(
    document: Document, predicate: Callable[[int], bool] = is_alnum
) -> Tuple[int, int]:
    """Return ``[start, end)`` of the ``predicate`` run touching the cursor."""

    row, col = document.cursor
    data = document.line(row).data
    start = col
    while start > 0 and predicate(data[start - 1]):
        start -= 1
    end = col
    while end < len(data) and predicate(data[end]):
        end += 1
    return start, end


def uppercase_word(document: Document) -> bool:
    return _transform_word(document, bytes.upper)


def lowercase_word(document: Document) -> bool:
    return _transform_word(document, bytes.lower)


def _transform_word(document: Document, func: Callable[[bytes], bytes]) -> bool:
    row, _ = document.cursor
    start, end = word_bounds(document)
    if start == end:
        return False
    data = document.line(row).data
    converted = func(data[start:end])
    if converted == data[start:end]:
        return False
    return document.replace_text(row, start, end, converted)


def transpose_chars(document: Document) -> bool:
    """Swap the bytes either side of the cursor and step right."""

    row, col = document.cursor
    if col == 0 or col >= len(document.line(row)):
        return False
    document.swap_chars(row, col - 1, col)
    document.set_cursor(*motions.move_right(document.store, document.cursor))
    return True


def toggle_comment(document: Document) -> bool:
    """Add ``// `` after the indent, or strip an existing marker.

    Returns ``True`` when the line was commented.
    """

    row, col = document.cursor
    data = document.line(row).data
    pos = leading_whitespace(data)
    if data[pos : pos + len(_COMMENT_MARK)] == _COMMENT_MARK:
        end = pos + len(_COMMENT_MARK)
        while end < len(data) and is_space(data[end]):
            end += 1
        document.replace_text(row, pos, end, b"")
        return False
    document.insert_text(row, pos, COMMENT_PREFIX)
    if col >= pos:
        document.set_cursor(row, col + len(COMMENT_PREFIX))
    return True


def duplicate_line(document: Document) -> None:
    row, col = document.cursor
    document.insert_line(row + 1, document.line(row).data)
    document.set_cursor(row, col)


def move_line_up(document: Document) -> bool:
    row, col = document.cursor
    if row == 0:
        return False
    document.swap_lines(row, row - 1)
    document.set_cursor(row - 1, col)
    return True


def move_line_down(document: Document) -> bool:
    row, col = document.cursor
    if row >= document.line_count - 1:
        return False
    document.swap_lines(row, row + 1)
    document.set_cursor(row + 1, col)
    return True


def copy_line(document: Document, clipboard: Clipboard) -> None:
    row = document.cursor[0]
    clipboard.set([document.line(row).data], rows=(row, row))


def yank_region(
    document: Document, clipboard: Clipboard, start: int, end: int
) -> int:
    """Copy rows ``start..end`` inclusive; returns the number copied."""

    last = document.line_count - 1
    start, end = max(start, 0), min(end, last)
    if end < start:
        return 0
    clipboard.set(
        (document.line(row).data for row in range(start, end + 1)),
        rows=(start, end),
    )
    return end - start + 1


def paste(document: Document, clipboard: Clipboard) -> int:
    """Insert the clipboard lines below the cursor line; cursor stays."""

    if not clipboard:
        return 0
    row, col = document.cursor
    with document.transaction("paste"):
        for offset, data in enumerate(clipboard.lines, start=1):
            document.insert_line(row + offset, data)
        document.set_cursor(row, col)
    return len(clipboard)


def current_word(document: Document) -> bytes:
    row, _ = document.cursor
    start, end = word_bounds(document, is_word)
    return document.line(row).data[start:end]


def _indent_after(previous: bytes) -> bytes:
    indent = previous[: leading_whitespace(previous)]
    if previous.rstrip().endswith(bytes((_OPEN_BRACE,))):
        indent += b" " * TAB_SIZE
    return indent


__all__ = [
    "COMMENT_PREFIX",
    "insert_char",
    "insert_text",
    "insert_tab",
    "delete_char",
    "backspace",
    "insert_newline",
    "open_line_below",
    "open_line_above",
    "delete_line",
    "join_lines",
    "delete_word",
    "delete_to_line_end",
    "delete_to_line_start",
    "indent",
    "unindent",
    "word_bounds",
    "uppercase_word",
    "lowercase_word",
    "transpose_chars",
    "toggle_comment",
    "duplicate_line",
    "move_line_up",
    "move_line_down",
    "copy_line",
    "yank_region",
    "paste",
    "current_word",
]

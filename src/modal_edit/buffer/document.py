"""Document: one line store plus cursor and scroll state, a filename and a modified flag."""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, Optional, Sequence

from modal_edit.runtime import telemetry
from modal_edit.runtime.settings import UNTITLED

from .line import Line
from .line_store import LineStore
from .state import BufferState, Cursor
from .validation import clamp_cursor


class Document:
    """The unit a user edits.

    Every mutating primitive runs inside a :class:`Transaction`, which marks
    the document modified when the store changed and re-clamps the cursor, so
    the cursor always addresses an existing line and column afterwards.
    """

    def __init__(
        self,
        *,
        filename: str = UNTITLED,
        store: Optional[LineStore] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.filename = filename or UNTITLED
        self.store = store or LineStore()
        self.state = state or BufferState()
        self.modified = False
        self.logger = telemetry.get_logger("modal_edit.buffer")

    @classmethod
    def from_lines(
        cls, lines: Iterable[bytes], *, filename: str = UNTITLED
    ) -> "Document":
        return cls(filename=filename, store=LineStore(lines))

    @classmethod
    def from_text(cls, text: str, *, filename: str = UNTITLED) -> "Document":
        return cls(filename=filename, store=LineStore.from_text(text))

    @property
    def name(self) -> str:
        return os.path.basename(self.filename) or UNTITLED

    @property
    def has_filename(self) -> bool:
        return bool(self.filename) and self.filename != UNTITLED

    @property
    def line_count(self) -> int:
        return len(self.store)

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def current_line(self) -> Line:
        return self.store.line(self.state.row)

    def line(self, row: int) -> Line:
        return self.store.line(row)

    def lines(self) -> Sequence[bytes]:
        return self.store.snapshot()

    def text(self) -> str:
        return "\n".join(line.text for line in self.store)

    def set_cursor(self, row: int, col: int) -> Cursor:
        self.state.cursor = clamp_cursor(self.store, (row, col))
        return self.state.cursor

    def clamp_cursor(self) -> Cursor:
        return self.set_cursor(*self.state.cursor)

    def transaction(self, label: str) -> "Transaction":
        return Transaction(self, label)

    def _row(self, row: int) -> int:
        return max(0, min(row, len(self.store) - 1))

    # -- structural primitives -------------------------------------------

    def insert_line(self, at: int, data: bytes = b"") -> int:
        """Insert a line before ``at`` (append when ``at`` is past the end)."""

        with self.transaction("insert_line"):
            return self.store.insert(at, Line(data))

    def delete_line(self, at: int) -> None:
        at = self._row(at)
        with self.transaction("delete_line"):
            single = len(self.store) == 1
            self.store.remove(at)
            row, col = self.state.cursor
            if single:
                row = 0
            elif row == at:
                row = max(at - 1, 0)
            elif row > at:
                row -= 1
            self.state.set_cursor(row, col)

    def split_line(self, row: int, col: int) -> Cursor:
        row = self._row(row)
        col = max(0, min(col, len(self.store.line(row))))
        with self.transaction("split_line"):
            new_row = self.store.split(row, col)
            self.state.set_cursor(new_row, 0)
        return self.state.cursor

    def join_line(self, row: int) -> bool:
        row = self._row(row)
        with self.transaction("join_line"):
            old_len = self.store.join(row)
            if old_len is None:
                return False
            self.state.set_cursor(row, old_len)
        return True

    def swap_lines(self, left: int, right: int) -> None:
        with self.transaction("swap_lines"):
            self.store.swap(left, right)

    # -- content primitives ----------------------------------------------

    def insert_char(self, row: int, col: int, byte: int) -> bool:
        return self.insert_text(row, col, bytes((byte,)))

    def insert_text(self, row: int, col: int, data: bytes) -> bool:
        with self.transaction("insert_text") as tx:
            if not self._in_store(row) or not self.store.line(row).insert(col, data):
                tx.reject(f"insert at ({row}, {col}) out of range")
                return False
            self.store.touch()
        return True

    def delete_char(self, row: int, col: int) -> bool:
        return self.delete_text(row, col, 1)

    def delete_text(self, row: int, col: int, count: int) -> bool:
        with self.transaction("delete_text") as tx:
            if not self._in_store(row) or not self.store.line(row).delete(col, count):
                tx.reject(f"delete at ({row}, {col}) out of range")
                return False
            self.store.touch()
        return True

    def replace_text(self, row: int, start: int, end: int, data: bytes) -> bool:
        with self.transaction("replace_text") as tx:
            if not self._in_store(row):
                tx.reject(f"replace on row {row} out of range")
                return False
            if not self.store.line(row).replace(start, end, data):
                tx.reject(f"replace [{start}:{end}] out of range")
                return False
            self.store.touch()
        return True

    def truncate_line(self, row: int, col: int) -> bool:
        with self.transaction("truncate_line") as tx:
            if not self._in_store(row) or not self.store.line(row).truncate(col):
                tx.reject(f"truncate at ({row}, {col}) out of range")
                return False
            self.store.touch()
        return True

    def swap_chars(self, row: int, left: int, right: int) -> bool:
        with self.transaction("swap_chars") as tx:
            if not self._in_store(row) or not self.store.line(row).swap(left, right):
                tx.reject(f"swap ({left}, {right}) on row {row} out of range")
                return False
            self.store.touch()
        return True

    def set_line(self, row: int, data: bytes) -> None:
        with self.transaction("set_line"):
            self.store.line(self._row(row)).set(data)
            self.store.touch()

    def reload(self, lines: Iterable[bytes]) -> None:
        """Replace the whole content (e.g. after loading) without dirtying."""

        self.store.replace_all(lines)
        self.state = BufferState()
        self.modified = False

    def mark_saved(self) -> None:
        self.modified = False

    def _in_store(self, row: int) -> bool:
        return 0 <= row < len(self.store)


class Transaction(AbstractContextManager["Transaction"]):
    """Telemetry span around one document mutation.

    On a clean exit the document is flagged modified when the store version
    moved, and the cursor is clamped against the (possibly shorter) lines.
    """

    def __init__(self, document: Document, label: str) -> None:
        self.document = document
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None
        self._version_before = 0

    def __enter__(self) -> "Transaction":
        self._version_before = self.document.store.version
        self._span_cm = telemetry.span(
            name=f"document::{self.label}",
            logger_name="modal_edit.buffer",
            component="document",
            metadata={"document": self.document.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    @property
    def changed(self) -> bool:
        return self.document.store.version != self._version_before

    def reject(self, reason: str) -> None:
        """Record a no-op caused by an out-of-range position."""

        if self._handle is not None:
            self._handle.note(reason)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            if self.changed:
                self.document.modified = True
            self.document.clamp_cursor()
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Document", "Transaction"]

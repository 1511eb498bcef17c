"""Cursor and scroll state tied to a document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column)


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + scroll offsets; clamping is the document's job."""

    cursor: Cursor = (0, 0)
    scroll_row: int = 0
    scroll_col: int = 0

    @property
    def row(self) -> int:
        return self.cursor[0]

    @property
    def col(self) -> int:
        return self.cursor[1]

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def set_scroll(self, row: int, col: int) -> None:
        self.scroll_row = max(0, row)
        self.scroll_col = max(0, col)

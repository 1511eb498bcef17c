"""Scroll arithmetic keeping the cursor inside the visible window."""

from __future__ import annotations

from dataclasses import dataclass

from modal_edit.buffer.line_store import LineStore
from modal_edit.buffer.state import BufferState
from modal_edit.runtime.settings import SCROLL_MARGIN


@dataclass(slots=True)
class Viewport:
    """Text area size in rows and columns, excluding the gutter."""

    height: int
    width: int
    margin: int = SCROLL_MARGIN

    @property
    def page_size(self) -> int:
        return max(self.height - 1, 1)


def follow_cursor(state: BufferState, viewport: Viewport) -> BufferState:
    """Shift scroll offsets by the minimum needed to show the cursor.

    Horizontally the window moves once the cursor comes within
    ``viewport.margin`` columns of the right edge. The margin is capped below
    the width so that narrow windows still show the cursor column.
    """

    row, col = state.cursor
    scroll_row, scroll_col = state.scroll_row, state.scroll_col

    if row < scroll_row:
        scroll_row = row
    elif row >= scroll_row + viewport.height:
        scroll_row = row - viewport.height + 1

    width = max(viewport.width, 1)
    margin = max(min(viewport.margin, width - 1), 0)
    if col < scroll_col:
        scroll_col = col
    elif col >= scroll_col + width - margin:
        scroll_col = col - width + margin + 1

    state.set_scroll(scroll_row, scroll_col)
    return state


def center_on_cursor(
    state: BufferState, store: LineStore, viewport: Viewport
) -> BufferState:
    top = state.row - viewport.height // 2
    top = min(top, len(store) - viewport.height)
    state.set_scroll(max(top, 0), state.scroll_col)
    return follow_cursor(state, viewport)


def visible_rows(state: BufferState, store: LineStore, viewport: Viewport) -> range:
    start = min(state.scroll_row, max(len(store) - 1, 0))
    return range(start, min(start + viewport.height, len(store)))


def screen_position(state: BufferState, gutter: int = 0) -> tuple[int, int]:
    return (state.row - state.scroll_row, state.col - state.scroll_col + gutter)


__all__ = [
    "Viewport",
    "follow_cursor",
    "center_on_cursor",
    "visible_rows",
    "screen_position",
]

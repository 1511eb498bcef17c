"""Boundary checks and clamping shared across buffer services."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .state import Cursor

if TYPE_CHECKING:  # pragma: no cover
    from .line_store import LineStore


class BoundaryError(IndexError):
    """Raised when a row or column falls outside the line store.

    Editor operations clamp before they get here, so this never reaches the
    status line; it only guards direct store access.
    """

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def clamp_cursor(store: "LineStore", cursor: Cursor) -> Cursor:
    row, col = cursor
    row = max(0, min(row, len(store) - 1))
    col = max(0, min(col, len(store.line(row))))
    return (row, col)


__all__ = ["BoundaryError", "clamp_cursor"]

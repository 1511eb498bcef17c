"""Cursor Navigator: pure motions plus viewport scroll arithmetic."""

from . import motions
from .motions import Motion, clamp
from .viewport import (
    Viewport,
    center_on_cursor,
    follow_cursor,
    screen_position,
    visible_rows,
)

__all__ = [
    "motions",
    "Motion",
    "clamp",
    "Viewport",
    "follow_cursor",
    "center_on_cursor",
    "visible_rows",
    "screen_position",
]

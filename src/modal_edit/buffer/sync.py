"""Render-side snapshot types handed to host adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Tuple

from .state import Cursor

if TYPE_CHECKING:  # pragma: no cover
    from modal_edit.syntax import Token


@dataclass(slots=True)
class MirrorLine:
    """One visible row: 1-based line number, raw bytes, and its tokens."""

    number: int
    text: bytes
    tokens: Tuple["Token", ...] = ()


@dataclass(slots=True)
class DocumentMirror:
    """Host-friendly snapshot of the active document and editor chrome."""

    filename: str
    modified: bool
    line_count: int
    cursor: Cursor
    screen_cursor: Tuple[int, int]
    lines: Tuple[MirrorLine, ...]
    mode: str = "normal"
    gutter: int = 0
    scroll_col: int = 0
    prompt: str = ""
    status: str = ""
    severity: str = "info"
    attributes: dict[str, str] = field(default_factory=dict)


__all__ = ["MirrorLine", "DocumentMirror"]

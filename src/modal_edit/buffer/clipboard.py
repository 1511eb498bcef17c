"""Session clipboard holding whole copied lines."""

from __future__ import annotations

from typing import Iterable, Tuple


class Clipboard:
    """Last-write-wins store of zero or more copied lines."""

    def __init__(self) -> None:
        self._lines: Tuple[bytes, ...] = ()
        self.source_rows: Tuple[int, int] | None = None

    def __len__(self) -> int:
        return len(self._lines)

    def __bool__(self) -> bool:
        return bool(self._lines)

    @property
    def lines(self) -> Tuple[bytes, ...]:
        return self._lines

    def set(self, lines: Iterable[bytes], *, rows: Tuple[int, int] | None = None) -> None:
        self._lines = tuple(bytes(line) for line in lines)
        self.source_rows = rows

    def clear(self) -> None:
        self._lines = ()
        self.source_rows = None


__all__ = ["Clipboard"]

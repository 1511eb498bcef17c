"""Ordered, index-addressable line storage."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence

from .line import Line
from .validation import BoundaryError


class LineStore:
    """List-of-lines text storage that always holds at least one line.

    ``version`` increases on every mutation made through the store so that
    observers (renderers, keymap caches) can cheaply detect change.
    """

    __slots__ = ("_lines", "version")

    def __init__(self, lines: Optional[Iterable[bytes]] = None) -> None:
        self._lines: List[Line] = [Line(data) for data in (lines or ())]
        if not self._lines:
            self._lines.append(Line())
        self.version = 0

    @classmethod
    def from_text(cls, text: str) -> "LineStore":
        return cls(part.encode("utf-8") for part in text.split("\n"))

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def snapshot(self) -> Sequence[bytes]:
        """Return the current contents without exposing internal mutability."""

        return tuple(line.data for line in self._lines)

    def line(self, row: int) -> Line:
        if row < 0 or row >= len(self._lines):
            raise BoundaryError(f"Row {row} out of range", cursor=(row, 0))
        return self._lines[row]

    def touch(self) -> None:
        self.version += 1

    def insert(self, at: int, line: Optional[Line] = None) -> int:
        """Insert ``line`` (default: empty) before ``at``; returns its index."""

        at = max(0, min(at, len(self._lines)))
        self._lines.insert(at, line if line is not None else Line())
        self.touch()
        return at

    def remove(self, at: int) -> Line:
        """Remove row ``at``; the last remaining line is cleared instead."""

        target = self.line(at)
        if len(self._lines) == 1:
            removed = Line(target.data)
            target.set(b"")
        else:
            removed = self._lines.pop(at)
        self.touch()
        return removed

    def split(self, row: int, col: int) -> int:
        """Move the suffix of ``row`` from ``col`` onward to a new next line."""

        suffix = self.line(row).split(col)
        self._lines.insert(row + 1, suffix)
        self.touch()
        return row + 1

    def join(self, row: int) -> Optional[int]:
        """Append ``row + 1`` onto ``row``; returns the old length of ``row``."""

        current = self.line(row)
        if row + 1 >= len(self._lines):
            return None
        following = self._lines.pop(row + 1)
        old_len = len(current)
        current.append(following.data)
        self.touch()
        return old_len

    def swap(self, left: int, right: int) -> None:
        first, second = self.line(left), self.line(right)
        self._lines[left], self._lines[right] = second, first
        self.touch()

    def replace_all(self, lines: Iterable[bytes]) -> None:
        self._lines = [Line(data) for data in lines] or [Line()]
        self.touch()


__all__ = ["LineStore"]

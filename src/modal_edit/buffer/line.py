"""Growable byte line used as the unit of vertical addressing."""

from __future__ import annotations

from typing import Iterator, Optional

INITIAL_CAPACITY = 64

_NEWLINE = 0x0A


class Line:
    """One row of text without its terminator.

    ``capacity`` models the reserved size: it starts at ``INITIAL_CAPACITY``
    and doubles whenever the content would reach it. It never shrinks.
    Position-taking methods return ``False`` and leave the line untouched when
    the position is out of range.
    """

    __slots__ = ("_data", "_capacity")

    def __init__(self, data: bytes = b"") -> None:
        _reject_newline(data)
        self._data = bytearray(data)
        self._capacity = INITIAL_CAPACITY
        self._reserve(len(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    def __getitem__(self, index: int) -> int:
        return self._data[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Line):
            return self._data == other._data
        if isinstance(other, (bytes, bytearray)):
            return self._data == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"Line({bytes(self._data)!r})"

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def data(self) -> bytes:
        return bytes(self._data)

    @property
    def text(self) -> str:
        return self._data.decode("utf-8", errors="replace")

    def _reserve(self, size: int) -> None:
        while self._capacity <= size:
            self._capacity *= 2

    def find(self, needle: bytes, start: int = 0) -> int:
        return self._data.find(needle, start)

    def rfind(self, needle: bytes, start: int = 0, end: Optional[int] = None) -> int:
        if end is None:
            return self._data.rfind(needle, start)
        return self._data.rfind(needle, start, end)

    def insert(self, pos: int, data: bytes) -> bool:
        if pos < 0 or pos > len(self._data):
            return False
        _reject_newline(data)
        self._reserve(len(self._data) + len(data))
        self._data[pos:pos] = data
        return True

    def append(self, data: bytes) -> None:
        self.insert(len(self._data), data)

    def delete(self, pos: int, count: int = 1) -> bool:
        if pos < 0 or pos >= len(self._data) or count <= 0:
            return False
        del self._data[pos : pos + count]
        return True

    def replace(self, start: int, end: int, data: bytes) -> bool:
        if start < 0 or end < start or end > len(self._data):
            return False
        _reject_newline(data)
        self._reserve(len(self._data) - (end - start) + len(data))
        self._data[start:end] = data
        return True

    def truncate(self, pos: int) -> bool:
        if pos < 0 or pos >= len(self._data):
            return False
        del self._data[pos:]
        return True

    def split(self, col: int) -> "Line":
        """Cut the suffix starting at ``col`` off into a new line."""

        col = max(0, min(col, len(self._data)))
        suffix = Line(bytes(self._data[col:]))
        del self._data[col:]
        return suffix

    def swap(self, left: int, right: int) -> bool:
        size = len(self._data)
        if not (0 <= left < size and 0 <= right < size):
            return False
        self._data[left], self._data[right] = self._data[right], self._data[left]
        return True

    def set(self, data: bytes) -> None:
        _reject_newline(data)
        self._reserve(len(data))
        self._data[:] = data


def _reject_newline(data: bytes) -> None:
    if _NEWLINE in data:
        raise ValueError("lines cannot embed a newline byte")


__all__ = ["Line", "INITIAL_CAPACITY"]

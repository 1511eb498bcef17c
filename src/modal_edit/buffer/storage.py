"""Newline-delimited persistence for documents."""

from __future__ import annotations

from pathlib import Path
from typing import List, Protocol, Sequence


class Storage(Protocol):
    """What the session needs from the file system."""

    def read_lines(self, path: str) -> List[bytes]:
        """Return the records of ``path``; raise ``FileNotFoundError``/``OSError``."""
        ...

    def write_lines(self, path: str, lines: Sequence[bytes]) -> None:
        """Write every record followed by one newline; raise ``OSError``."""
        ...


def read_lines(path: str) -> List[bytes]:
    data = Path(path).read_bytes()
    if not data:
        return []
    records = data.split(b"\n")
    if data.endswith(b"\n"):
        records.pop()
    return records


def write_lines(path: str, lines: Sequence[bytes]) -> None:
    payload = b"".join(bytes(line) + b"\n" for line in lines)
    Path(path).write_bytes(payload)


class FileStorage:
    """Default :class:`Storage` backed by the local file system."""

    def read_lines(self, path: str) -> List[bytes]:
        return read_lines(path)

    def write_lines(self, path: str, lines: Sequence[bytes]) -> None:
        write_lines(path, lines)


__all__ = ["Storage", "FileStorage", "read_lines", "write_lines"]

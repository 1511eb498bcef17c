"""ASCII byte classification shared by motions, edits, and the tokenizer.

Lines are raw bytes, so these mirror the C-locale ``ctype`` predicates:
anything outside ASCII is neither alnum nor whitespace.
"""

from __future__ import annotations

_SPACE = frozenset(b" \t\n\r\x0b\x0c")
_DIGIT = frozenset(b"0123456789")
_ALPHA = frozenset(b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_ALNUM = _ALPHA | _DIGIT


def is_space(byte: int) -> bool:
    return byte in _SPACE


def is_digit(byte: int) -> bool:
    return byte in _DIGIT


def is_alpha(byte: int) -> bool:
    return byte in _ALPHA


def is_alnum(byte: int) -> bool:
    return byte in _ALNUM


def is_word(byte: int) -> bool:
    return byte in _ALNUM or byte == 0x5F  # "_"


def is_printable(byte: int) -> bool:
    return 32 <= byte < 127


def byte_class(byte: int) -> int:
    """0 for whitespace, 1 for alnum, 2 for any other punctuation."""

    if byte in _SPACE:
        return 0
    if byte in _ALNUM:
        return 1
    return 2


def leading_whitespace(data: bytes) -> int:
    count = 0
    for byte in data:
        if byte not in _SPACE:
            break
        count += 1
    return count


__all__ = [
    "is_space",
    "is_digit",
    "is_alpha",
    "is_alnum",
    "is_word",
    "is_printable",
    "byte_class",
    "leading_whitespace",
]

"""Single-line lexical scanner used for highlighting and navigation.

``classify`` is stateless: it looks at one line's bytes from ``pos`` and
reports the kind and length of the token starting there. Callers advance by
that length until the line is exhausted. Nothing carries over between lines,
so block comments and multi-line strings are not recognised.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple

from modal_edit.buffer.charclass import is_alnum, is_alpha, is_digit, is_space

from .vocabulary import (
    COMPOUND_OPERATOR_BYTES,
    is_keyword,
    is_operator,
    is_special_variable,
)

_SLASH = 0x2F
_QUOTE = 0x22
_BACKSLASH = 0x5C
_DOT = 0x2E
_AT = 0x40
_UNDERSCORE = 0x5F
_TILDE = 0x7E
_DASH = 0x2D
_EQUALS = 0x3D
_OPEN_PAREN = 0x28


class TokenKind(str, Enum):
    NONE = "none"
    KEYWORD = "keyword"
    VARIABLE = "variable"
    STRING = "string"
    NUMBER = "number"
    COMMENT = "comment"
    OPERATOR = "operator"
    FUNCTION = "function"
    SPECIAL = "special"


@dataclass(frozen=True, slots=True)
class Token:
    start: int
    end: int
    kind: TokenKind

    @property
    def length(self) -> int:
        return self.end - self.start

    def text(self, line: bytes) -> bytes:
        return bytes(line[self.start : self.end])


def classify(line: bytes, pos: int) -> Tuple[TokenKind, int]:
    """Return ``(kind, length)`` for the token starting at ``pos``."""

    size = len(line)
    if pos < 0 or pos >= size:
        raise IndexError(f"position {pos} outside line of length {size}")
    byte = line[pos]

    if is_space(byte):
        return TokenKind.NONE, _run(line, pos, is_space) - pos

    if byte == _SLASH and pos + 1 < size and line[pos + 1] == _SLASH:
        return TokenKind.COMMENT, size - pos

    if byte == _QUOTE:
        return TokenKind.STRING, _scan_string(line, pos) - pos

    if is_digit(byte):
        end = _run(line, pos + 1, lambda b: is_digit(b) or b == _DOT)
        return TokenKind.NUMBER, end - pos

    if byte == _AT:
        end = _run(line, pos + 1, lambda b: is_alnum(b) or b == _UNDERSCORE)
        if is_special_variable(bytes(line[pos:end])):
            return TokenKind.SPECIAL, end - pos
        return TokenKind.VARIABLE, end - pos

    if is_alpha(byte) or byte in (_UNDERSCORE, _TILDE):
        end = _run(
            line, pos + 1, lambda b: is_alnum(b) or b in (_UNDERSCORE, _DASH)
        )
        if is_keyword(bytes(line[pos:end])):
            return TokenKind.KEYWORD, end - pos
        lookahead = _run(line, end, is_space)
        if lookahead < size and line[lookahead] == _OPEN_PAREN:
            return TokenKind.FUNCTION, end - pos
        return TokenKind.NONE, end - pos

    if is_operator(byte):
        if (
            byte in COMPOUND_OPERATOR_BYTES
            and pos + 1 < size
            and line[pos + 1] == _EQUALS
        ):
            return TokenKind.OPERATOR, 2
        return TokenKind.OPERATOR, 1

    return TokenKind.NONE, 1


def tokenize(line: bytes) -> Iterator[Token]:
    pos = 0
    size = len(line)
    while pos < size:
        kind, length = classify(line, pos)
        yield Token(pos, pos + length, kind)
        pos += length


def _run(line: bytes, start: int, predicate) -> int:
    pos = start
    size = len(line)
    while pos < size and predicate(line[pos]):
        pos += 1
    return pos


def _scan_string(line: bytes, start: int) -> int:
    size = len(line)
    pos = start + 1
    while pos < size and line[pos] != _QUOTE:
        if line[pos] == _BACKSLASH and pos + 1 < size:
            pos += 2
        else:
            pos += 1
    if pos < size:
        pos += 1  # closing quote
    return pos


__all__ = [
    "TokenKind",
    "Token",
    "classify",
    "tokenize",
]

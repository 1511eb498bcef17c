"""Word lists for the Droy language highlighted by the tokenizer."""

from __future__ import annotations

KEYWORDS: frozenset[bytes] = frozenset(
    word.encode("ascii")
    for word in (
        "set", "~s", "ret", "~r", "em", "~e", "text", "txt", "t",
        "fe", "f", "for", "sty", "pkg", "media",
        "link", "a-link", "yoex--links", "link-go", "create-link", "open-link",
        "api", "id", "block", "key",
    )
)

SPECIAL_VARIABLES: frozenset[bytes] = frozenset(
    word.encode("ascii")
    for word in (
        "@si", "@ui", "@yui", "@pop", "@ep", "@epx", "@epn",
        "@yep", "@yepx", "@yepn", "@yepv", "@yepvx", "@yepvn",
        "@yepa", "@yepax", "@yepan", "@yepb", "@yepbx", "@yepbn",
    )
)

OPERATOR_BYTES: frozenset[int] = frozenset(b"+-*/=<>!&|")

# Operators that absorb a following "=" ("+=", "==", ...).
COMPOUND_OPERATOR_BYTES: frozenset[int] = frozenset(b"+-*/=")


def is_keyword(word: bytes) -> bool:
    return word in KEYWORDS


def is_special_variable(word: bytes) -> bool:
    return word in SPECIAL_VARIABLES


def is_operator(byte: int) -> bool:
    return byte in OPERATOR_BYTES


__all__ = [
    "KEYWORDS",
    "SPECIAL_VARIABLES",
    "OPERATOR_BYTES",
    "COMPOUND_OPERATOR_BYTES",
    "is_keyword",
    "is_special_variable",
    "is_operator",
]

"""Tokenizer and language vocabulary."""

from .tokenizer import Token, TokenKind, classify, tokenize
from .vocabulary import KEYWORDS, SPECIAL_VARIABLES

__all__ = [
    "Token",
    "TokenKind",
    "classify",
    "tokenize",
    "KEYWORDS",
    "SPECIAL_VARIABLES",
]

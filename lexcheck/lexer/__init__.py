"""
lexcheck Lexer Package

Splits source lines into tokens and classifies each one.

Key Features:
- Scanner-based splitting on whitespace and punctuation
- Ordered classification (keywords before identifiers)
- Source location tracking for diagnostics
- Keyword suggestions for unrecognized tokens
"""

from .tokens import Token, TokenKind, ValueType, SourceLocation
from .lexer import Lexer, RawToken, scan, iter_tokens, tokenize, classify
from .errors import Diagnostic, LexerError, UnrecognizedTokenError

__all__ = [
    "Lexer",
    "RawToken",
    "scan",
    "iter_tokens",
    "tokenize",
    "classify",
    "Token",
    "TokenKind",
    "ValueType",
    "SourceLocation",
    "Diagnostic",
    "LexerError",
    "UnrecognizedTokenError",
]

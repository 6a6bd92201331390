"""
lexcheck lexer - splits source lines into tokens and classifies them

The splitter is a small scanner rather than a regex split: it walks the line
once, closing a word on whitespace and emitting each of + - * / ( ) { } ; ,
as a token of its own. Classification uses the lookup sets and patterns
from tokens.py, first match wins.
"""

import logging
from enum import Enum
from typing import Iterator, List, NamedTuple

from .tokens import (
    Token, TokenKind, SourceLocation, KEYWORDS, ARITHMETIC_OPERATORS, OPERATORS,
    SEPARATORS, SPLIT_CHARS, IDENTIFIER_PATTERN, NUMBER_PATTERN, STRING_PATTERN
)
from .errors import create_unrecognized_token_error

logger = logging.getLogger(__name__)


class RawToken(NamedTuple):
    """Unclassified lexeme with its 1-based column in the line."""
    text: str
    column: int


class _ScanState(Enum):
    BETWEEN = 0   # Outside a word (start of line, after whitespace or a split char)
    IN_WORD = 1


def scan(line: str) -> Iterator[RawToken]:
    """
    Lazily split a line into raw tokens.

    Runs of whitespace separate tokens and every character of SPLIT_CHARS
    becomes a token of its own, so ``x+5`` gives ``x``, ``+``, ``5``.
    Empty tokens are never produced.
    """
    state = _ScanState.BETWEEN
    start = 0

    for pos, char in enumerate(line):
        if char.isspace():
            if state is _ScanState.IN_WORD:
                yield RawToken(line[start:pos], start + 1)
            state = _ScanState.BETWEEN
        elif char in SPLIT_CHARS:
            if state is _ScanState.IN_WORD:
                yield RawToken(line[start:pos], start + 1)
            yield RawToken(char, pos + 1)
            state = _ScanState.BETWEEN
        elif state is _ScanState.BETWEEN:
            start = pos
            state = _ScanState.IN_WORD

    if state is _ScanState.IN_WORD:
        yield RawToken(line[start:], start + 1)


def iter_tokens(line: str) -> Iterator[str]:
    """Lazy sequence of raw token strings for ``line``."""
    for raw in scan(line):
        yield raw.text


def tokenize(line: str) -> List[str]:
    """Split ``line`` into raw token strings."""
    return list(iter_tokens(line))


def classify(lexeme: str) -> TokenKind:
    """
    Classify a single lexeme.

    The order of the checks matters: keywords are identifier-shaped, so they
    must be tried before the identifier pattern.
    """
    if lexeme in KEYWORDS:
        return TokenKind.KEYWORD
    if lexeme in ARITHMETIC_OPERATORS:
        return TokenKind.ARITHMETIC_OPERATOR
    if lexeme in OPERATORS:
        return TokenKind.OPERATOR
    if lexeme in SEPARATORS:
        return TokenKind.SEPARATOR
    if NUMBER_PATTERN.fullmatch(lexeme):
        return TokenKind.NUMBER
    if STRING_PATTERN.fullmatch(lexeme):
        return TokenKind.STRING
    if IDENTIFIER_PATTERN.fullmatch(lexeme):
        return TokenKind.IDENTIFIER
    return TokenKind.UNKNOWN


def is_identifier(text: str) -> bool:
    """True if ``text`` has identifier shape (keywords included)."""
    return IDENTIFIER_PATTERN.fullmatch(text) is not None


class Lexer:
    """
    Turns raw lexemes into classified tokens for one source.

    Keeps the filename so that tokens and errors carry usable locations.
    """

    def __init__(self, filename: str = "<input>"):
        self.filename = filename

    def location(self, line_no: int, column: int) -> SourceLocation:
        return SourceLocation(self.filename, line_no, column)

    def make_token(self, raw: RawToken, line_no: int) -> Token:
        """
        Classify a raw token.

        Raises:
            UnrecognizedTokenError: if the lexeme matches no rule
        """
        kind = classify(raw.text)
        location = self.location(line_no, raw.column)
        if kind is TokenKind.UNKNOWN:
            logger.debug("Unrecognized lexeme %r at %s", raw.text, location)
            raise create_unrecognized_token_error(raw.text, location)
        return Token(kind, raw.text, location)


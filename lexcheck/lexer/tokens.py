"""
Token definitions for the lexcheck lexer.

Defines the token kinds of the toy C-like language, the lookup sets used by
the classifier, and the value types the checker infers:
- Keywords (control flow and the four type keywords)
- Arithmetic, comparison and assignment operators
- Separators
- Numeric and string literals
- Identifiers
"""

import re
from enum import Enum
from dataclasses import dataclass
from typing import FrozenSet


class TokenKind(Enum):
    """Classification tag of a lexeme."""

    KEYWORD = "KEYWORD"
    IDENTIFIER = "IDENTIFIER"
    OPERATOR = "OPERATOR"
    ARITHMETIC_OPERATOR = "ARITHMETIC_OPERATOR"
    SEPARATOR = "SEPARATOR"
    NUMBER = "NUMBER"
    STRING = "STRING"
    UNKNOWN = "UNKNOWN"


class ValueType(Enum):
    """Types a variable can be declared with, plus ``unknown``."""

    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_keyword(cls, keyword: str) -> "ValueType":
        """Map a type keyword (``int``, ``float``...) to its ValueType."""
        if keyword not in TYPE_KEYWORDS:
            raise ValueError(f"'{keyword}' is not a type keyword")
        return cls(keyword)


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source.

    Used for error reporting. Line and column are 1-based.
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Token:
    """
    A classified lexeme.

    ``str(token)`` gives the ``('<lexeme>', '<KIND>')`` form written to the
    token sink.
    """
    kind: TokenKind
    lexeme: str
    location: SourceLocation

    def __str__(self) -> str:
        return f"('{self.lexeme}', '{self.kind.value}')"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.lexeme!r}, {self.location})"


# Lookup tables used by the classifier

TYPE_KEYWORDS: FrozenSet[str] = frozenset({"int", "float", "string", "boolean"})

KEYWORDS: FrozenSet[str] = frozenset({"if", "else", "return"}) | TYPE_KEYWORDS

ARITHMETIC_OPERATORS: FrozenSet[str] = frozenset({"+", "-", "*", "/"})

OPERATORS: FrozenSet[str] = frozenset({"==", "!=", ">", "<", "="})

SEPARATORS: FrozenSet[str] = frozenset({"(", ")", "{", "}", ",", ";"})

# Characters that always form a token of their own
SPLIT_CHARS: FrozenSet[str] = ARITHMETIC_OPERATORS | SEPARATORS

BOOLEAN_LITERALS: FrozenSet[str] = frozenset({"True", "False"})

ASSIGN = "="
TERMINATOR = ";"

IDENTIFIER_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9]*$")
NUMBER_PATTERN = re.compile(r"^[0-9]+(\.[0-9]+)?$")
STRING_PATTERN = re.compile(r'^".*"$')

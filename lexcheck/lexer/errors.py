"""
Error handling for the lexcheck lexer.

Provides the Diagnostic record shared by every stage, the lexer error
types, and the edit-distance helpers used to build suggestions.
"""

from typing import Iterable, List, Optional
from dataclasses import dataclass

from .tokens import SourceLocation, KEYWORDS


@dataclass
class Diagnostic:
    """A reportable problem (error, warning, info) found during analysis."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}[{self.code}]: {self.message}\n" if self.code \
            else f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer cannot classify a lexeme.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class UnrecognizedTokenError(LexerError):
    """A lexeme matched none of the classification rules."""

    def __init__(self, lexeme: str, location: SourceLocation, **kwargs):
        super().__init__(f"Error: Unrecognized token '{lexeme}'", location, **kwargs)
        self.lexeme = lexeme


class ErrorRecovery:
    """Suggestion helpers used when building diagnostics."""

    @staticmethod
    def suggest_keyword_corrections(invalid_word: str) -> List[str]:
        """Suggest keywords within edit distance 2 of a misspelt word."""
        return ErrorRecovery.closest_names(invalid_word.lower(), KEYWORDS)

    @staticmethod
    def closest_names(name: str, candidates: Iterable[str], limit: int = 3) -> List[str]:
        """Candidates within edit distance 2 of ``name``, closest first."""
        scored = []
        for candidate in candidates:
            if candidate == name:
                continue
            distance = ErrorRecovery._edit_distance(name, candidate)
            if distance <= 2:  # Allow up to 2 character differences
                scored.append((distance, candidate))

        return [candidate for _, candidate in sorted(scored)][:limit]

    @staticmethod
    def _edit_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return ErrorRecovery._edit_distance(s2, s1)

        if len(s2) == 0:
            return len(s1)

        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row

        return previous_row[-1]


# Lexer error codes
ERROR_CODES = {
    "L001": "Unrecognized token",
}


def create_unrecognized_token_error(lexeme: str, location: SourceLocation) -> UnrecognizedTokenError:
    """Create an error for a lexeme that is not part of the language."""
    suggestions = ErrorRecovery.suggest_keyword_corrections(lexeme)
    if lexeme.startswith('"') != lexeme.endswith('"'):
        help_text = "String literals cannot contain spaces or punctuation; the tokenizer splits on them."
    elif lexeme[:1].isdigit():
        help_text = "Identifiers must start with a letter; numbers are digits with an optional fraction."
    else:
        help_text = f"'{lexeme}' is not a keyword, operator, separator, literal or identifier."

    return UnrecognizedTokenError(
        lexeme,
        location,
        code="L001",
        help_text=help_text,
        suggestions=[f"Did you mean '{s}'?" for s in suggestions] or None
    )

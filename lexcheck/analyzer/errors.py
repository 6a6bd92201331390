"""
Semantic analysis error handling for lexcheck.

Error types for declaration and assignment checking: invalid names,
undeclared variables, type mismatches and redeclarations. Every error wraps
a Diagnostic so sinks can render it with or without location detail.
"""

from typing import Iterable, List, Optional

from ..lexer.tokens import SourceLocation, ValueType
from ..lexer.errors import Diagnostic, ErrorRecovery, ERROR_CODES as LEXER_ERROR_CODES


class SemanticError(Exception):
    """
    Exception raised when a statement fails a semantic check.

    Raised inside a statement check and caught at the line boundary; the
    statement is abandoned and analysis continues with the next line.
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


class InvalidIdentifierError(SemanticError):
    """Declared variable name does not have identifier shape."""


class UndeclaredVariableError(SemanticError):
    """A name is used before any declaration introduced it."""


class TypeMismatchDeclarationError(SemanticError):
    """Initializer type differs from the declared type."""


class TypeMismatchAssignmentError(SemanticError):
    """Assigned value type differs from the variable's stored type."""


class TypeMismatchInExpressionError(SemanticError):
    """Arithmetic expression mixes incompatible non-float operands."""


class RedeclaredVariableError(SemanticError):
    """Second declaration of a name under the ERROR redeclaration policy."""


class SourceReadError(Exception):
    """
    The input source could not be read.

    The only fatal condition: it is raised to the caller and halts the run.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"Error reading file: {reason}")
        self.path = path
        self.reason = reason


# Semantic error codes for categorization
SEMANTIC_ERROR_CODES = {
    "E001": "Invalid variable name",
    "E002": "Undeclared variable",
    "E003": "Type mismatch on declaration",
    "E004": "Type mismatch on assignment",
    "E005": "Type mismatch within expression",
    "E006": "Variable redeclared",
}


def describe_code(code: Optional[str]) -> str:
    """Short description of a lexer or semantic error code."""
    if code in SEMANTIC_ERROR_CODES:
        return SEMANTIC_ERROR_CODES[code]
    return LEXER_ERROR_CODES.get(code, "Unknown error")


# Helper functions for creating specific semantic errors

def create_invalid_identifier_error(name: str, location: SourceLocation) -> InvalidIdentifierError:
    """Create an error for a declaration whose variable name is malformed."""
    suggestions = []
    if name[:1].isdigit() and name.isalnum():
        suggestions.append(f"Start the name with a letter, e.g. 'v{name}'")
    suggestions.extend(
        f"Did you mean '{keyword}'?" for keyword in ErrorRecovery.suggest_keyword_corrections(name)
    )

    return InvalidIdentifierError(
        message=f"Error: Invalid variable name '{name}'",
        location=location,
        code="E001",
        help_text="Variable names start with a letter followed by letters or digits.",
        suggestions=suggestions or None
    )


def create_undeclared_variable_error(
    name: str,
    location: SourceLocation,
    known_names: Iterable[str] = ()
) -> UndeclaredVariableError:
    """Create an error for a use of a name that was never declared."""
    similar_names = ErrorRecovery.closest_names(name, known_names)
    suggestions = [f"Did you mean '{similar}'?" for similar in similar_names]
    suggestions.append(f"Declare '{name}' with a type keyword before using it")

    return UndeclaredVariableError(
        message=f"Error: Variable '{name}' not declared before use.",
        location=location,
        code="E002",
        help_text=f"'{name}' is not in the symbol table.",
        suggestions=suggestions
    )


def _mismatch_message(actual: ValueType, name: str, expected: ValueType) -> str:
    return (f"Type mismatch: cannot assign value of type '{actual}' "
            f"to variable '{name}' of type '{expected}'")


def create_declaration_mismatch_error(
    name: str,
    declared: ValueType,
    actual: ValueType,
    location: SourceLocation
) -> TypeMismatchDeclarationError:
    """Create an error for an initializer whose type differs from the declaration."""
    return TypeMismatchDeclarationError(
        message=_mismatch_message(actual, name, declared),
        location=location,
        code="E003",
        help_text=f"Declarations require an initializer of exactly type '{declared}'."
    )


def create_assignment_mismatch_error(
    name: str,
    stored: ValueType,
    actual: ValueType,
    location: SourceLocation
) -> TypeMismatchAssignmentError:
    """Create an error for an assignment whose value type differs from the variable's."""
    help_text = f"'{name}' was declared as '{stored}'."
    if stored is ValueType.FLOAT and actual is ValueType.INT:
        help_text += " Values are not promoted on assignment; write the literal with a fraction."

    return TypeMismatchAssignmentError(
        message=_mismatch_message(actual, name, stored),
        location=location,
        code="E004",
        help_text=help_text
    )


def create_expression_mismatch_error(
    expression: str,
    left: ValueType,
    right: ValueType,
    location: SourceLocation
) -> TypeMismatchInExpressionError:
    """Create an error for arithmetic on incompatible operand types."""
    return TypeMismatchInExpressionError(
        message=f"Type mismatch within expression: incompatible types in '{expression}'",
        location=location,
        code="E005",
        help_text=f"Cannot combine '{left}' with '{right}'; only int and float mix."
    )


def create_redeclared_variable_error(
    name: str,
    existing: ValueType,
    location: SourceLocation
) -> RedeclaredVariableError:
    """Create an error for declaring a name twice."""
    return RedeclaredVariableError(
        message=f"Error: Variable '{name}' already declared as '{existing}'",
        location=location,
        code="E006",
        suggestions=[f"Assign to '{name}' without a type keyword"]
    )

"""
lexcheck Semantic Analyzer Package

Implements the line-level checks:
- Statement classification (declaration, assignment, other)
- Type inference for literals and arithmetic expressions
- Declaration and assignment type checking
- Flat symbol table with a configurable redeclaration policy
- Pluggable output sinks
"""

from .type_checker import (
    TypeChecker, AnalyzerConfig, AnalysisResult, StatementKind,
    classify_statement, literal_type
)
from .symbol_table import SymbolTable, Symbol, RedeclarationPolicy
from .sinks import Sink, ConsoleSink, BufferSink, LoggingSink, MultiSink
from .errors import (
    SemanticError, InvalidIdentifierError, UndeclaredVariableError,
    TypeMismatchDeclarationError, TypeMismatchAssignmentError,
    TypeMismatchInExpressionError, RedeclaredVariableError, SourceReadError,
    describe_code
)

__all__ = [
    # Main checker
    "TypeChecker", "AnalyzerConfig", "AnalysisResult", "StatementKind",
    "classify_statement", "literal_type",

    # Symbol management
    "SymbolTable", "Symbol", "RedeclarationPolicy",

    # Output
    "Sink", "ConsoleSink", "BufferSink", "LoggingSink", "MultiSink",

    # Error handling
    "SemanticError", "InvalidIdentifierError", "UndeclaredVariableError",
    "TypeMismatchDeclarationError", "TypeMismatchAssignmentError",
    "TypeMismatchInExpressionError", "RedeclaredVariableError", "SourceReadError",
    "describe_code",
]

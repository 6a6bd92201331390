"""
lexcheck

A small lexical analyzer and type checker for a toy C-like language. Source
is processed one statement line at a time: each line is split into tokens,
every token is classified, and declarations and assignments are checked
against a flat symbol table.

Architecture:
    lexcheck/
    ├── lexer/           # Tokenization and token classification
    ├── analyzer/        # Statement checking, symbol table, output sinks
    └── cli.py           # Command-line entry point

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenKind, ValueType, tokenize, classify
from .analyzer import (
    TypeChecker, AnalyzerConfig, AnalysisResult, SymbolTable,
    RedeclarationPolicy, ConsoleSink, BufferSink
)

__all__ = [
    # Core classes
    "Lexer",
    "TypeChecker",
    "SymbolTable",

    # Tokens
    "Token",
    "TokenKind",
    "ValueType",
    "tokenize",
    "classify",

    # Configuration and results
    "AnalyzerConfig",
    "AnalysisResult",
    "RedeclarationPolicy",
    "ConsoleSink",
    "BufferSink",

    # Version info
    "__version__",
    "__license__",
]

"""
Statement checker for lexcheck.

Works one source line at a time:
- decides whether the line is a declaration, an assignment or anything else
- infers the type of the right-hand side (literals, known variables, and
  left-to-right folding of arithmetic expressions)
- checks it against the declared or stored type
- emits the classified tokens of every accepted statement to a Sink

Type rules worth knowing before changing anything here:
- inside arithmetic, a float operand promotes the whole result to float
- declarations and assignments require the exact type, with no promotion,
  so ``float f = 1;`` is rejected while ``float f = 1 + 0.5;`` is accepted
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, TextIO

from ..lexer.tokens import (
    Token, TokenKind, ValueType, SourceLocation, KEYWORDS, TYPE_KEYWORDS,
    ARITHMETIC_OPERATORS, BOOLEAN_LITERALS, NUMBER_PATTERN, STRING_PATTERN,
    ASSIGN, TERMINATOR
)
from ..lexer.lexer import Lexer, RawToken, scan, is_identifier
from ..lexer.errors import Diagnostic, LexerError
from .symbol_table import SymbolTable, RedeclarationPolicy
from .sinks import Sink, ConsoleSink, BufferSink, MultiSink
from .errors import (
    SemanticError, SourceReadError, create_invalid_identifier_error,
    create_undeclared_variable_error, create_declaration_mismatch_error,
    create_assignment_mismatch_error, create_expression_mismatch_error
)

logger = logging.getLogger(__name__)


class StatementKind(Enum):
    """Shape of a source line."""
    DECLARATION = "declaration"
    ASSIGNMENT = "assignment"
    OTHER = "other"


@dataclass
class AnalyzerConfig:
    """Settings for one analysis run."""
    redeclaration: RedeclarationPolicy = RedeclarationPolicy.OVERWRITE
    filename: str = "<input>"


@dataclass
class AnalysisResult:
    """
    Results of analyzing a sequence of lines.

    Cumulative for the checker that produced it: everything emitted since
    construction or the last ``TypeChecker.reset()``.
    """
    tokens: List[Token]
    diagnostics: List[Diagnostic]
    symbol_table: SymbolTable
    lines_analyzed: int

    def has_errors(self) -> bool:
        """Check if analysis reported any errors."""
        return any(d.severity == "error" for d in self.diagnostics)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == "error")

    def counts_by_code(self) -> Dict[str, int]:
        """Number of diagnostics per error code, in order of first appearance."""
        counts: Dict[str, int] = {}
        for diagnostic in self.diagnostics:
            code = diagnostic.code or "?"
            counts[code] = counts.get(code, 0) + 1
        return counts


def classify_statement(tokens: Sequence[str]) -> StatementKind:
    """Decide the statement shape from its raw tokens."""
    if len(tokens) >= 3 and tokens[0] in TYPE_KEYWORDS and tokens[2] == ASSIGN:
        return StatementKind.DECLARATION
    if len(tokens) >= 3 and tokens[1] == ASSIGN:
        return StatementKind.ASSIGNMENT
    return StatementKind.OTHER


def literal_type(text: str) -> ValueType:
    """Type of a literal, or UNKNOWN if ``text`` is not one."""
    if NUMBER_PATTERN.fullmatch(text):
        return ValueType.FLOAT if "." in text else ValueType.INT
    if text in BOOLEAN_LITERALS:
        return ValueType.BOOLEAN
    if STRING_PATTERN.fullmatch(text):
        return ValueType.STRING
    return ValueType.UNKNOWN


def is_variable_reference(text: str) -> bool:
    """Identifier-shaped text that names a variable rather than a keyword or literal."""
    return is_identifier(text) and text not in KEYWORDS and text not in BOOLEAN_LITERALS


def _read_lines(f: TextIO, path: str) -> Iterator[str]:
    """Yield lines from an open file, turning read failures into SourceReadError."""
    while True:
        try:
            line = f.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(path, str(e)) from e
        if not line:
            return
        yield line


class TypeChecker:
    """
    Line-by-line declaration and assignment checker.

    Owns the symbol table for the run. Lines must be fed in source order
    because later lines depend on declarations made by earlier ones.
    """

    def __init__(
        self,
        sink: Optional[Sink] = None,
        config: Optional[AnalyzerConfig] = None,
        symbol_table: Optional[SymbolTable] = None
    ):
        self.config = config or AnalyzerConfig()
        self.symbol_table = symbol_table if symbol_table is not None \
            else SymbolTable(self.config.redeclaration)
        self.sink = sink if sink is not None else ConsoleSink()
        self.lexer = Lexer(self.config.filename)

        # Everything emitted is also recorded for the AnalysisResult
        self._record = BufferSink()
        self._out = MultiSink(self._record, self.sink)
        self._lines_analyzed = 0

    def reset(self) -> None:
        """Forget all declarations and recorded output."""
        self.symbol_table.clear()
        self._record.clear()
        self._lines_analyzed = 0

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def analyze_file(self, path: str) -> AnalysisResult:
        """
        Analyze every line of a UTF-8 text file.

        Raises:
            SourceReadError: if the file cannot be opened or decoded. Errors
                raised by the sink while writing output propagate unchanged.
        """
        self.lexer.filename = path
        try:
            f = open(path, encoding="utf-8")
        except OSError as e:
            raise SourceReadError(path, str(e)) from e

        with f:
            return self.analyze_lines(_read_lines(f, path))

    def analyze_source(self, source: str) -> AnalysisResult:
        return self.analyze_lines(source.splitlines())

    def analyze_lines(self, lines: Iterable[str]) -> AnalysisResult:
        """
        Analyze lines in order and collect the results.

        The result covers everything since construction or the last
        ``reset()``: tokens, diagnostics and the line count accumulate over
        repeated calls, and line numbers continue where the previous call
        stopped.
        """
        for line_no, line in enumerate(lines, start=self._lines_analyzed + 1):
            self.analyze_line(line, line_no)

        return AnalysisResult(
            tokens=list(self._record.tokens),
            diagnostics=list(self._record.diagnostics),
            symbol_table=self.symbol_table,
            lines_analyzed=self._lines_analyzed
        )

    def analyze_line(self, line: str, line_no: Optional[int] = None) -> bool:
        """
        Check one statement line and emit its tokens.

        Returns False if the statement was rejected. Blank lines are skipped
        and count as accepted.
        """
        self._lines_analyzed += 1
        if line_no is None:
            line_no = self._lines_analyzed

        stripped = line.strip()
        if not stripped:
            return True

        raw_tokens = list(scan(line))
        kind = classify_statement([raw.text for raw in raw_tokens])
        logger.debug("line %d: %s %r", line_no, kind.value, stripped)

        if kind is StatementKind.OTHER:
            self._emit_value_tokens(raw_tokens, line_no)
            return True

        try:
            if kind is StatementKind.DECLARATION:
                self._check_declaration(raw_tokens, line, line_no)
            else:
                self._check_assignment(raw_tokens, line, line_no)
        except SemanticError as e:
            logger.debug("line %d rejected: %s", line_no, e.message)
            self._out.report(e.diagnostic)
            return False

        if stripped.endswith(TERMINATOR):
            self._emit(TokenKind.SEPARATOR, raw_tokens[-1], line_no)
        return True

    # ------------------------------------------------------------------
    # Type inference
    # ------------------------------------------------------------------

    def determine_type(self, expression: str, location: Optional[SourceLocation] = None) -> ValueType:
        """
        Infer the type of a right-hand side.

        Raises:
            UndeclaredVariableError: if the expression uses an unknown variable
        """
        location = location or self.lexer.location(self._lines_analyzed, 1)
        expression = expression.strip()

        if is_identifier(expression) and expression in self.symbol_table:
            return self.symbol_table.type_of(expression)
        if any(op in expression for op in ARITHMETIC_OPERATORS):
            return self._arithmetic_type(expression, location)
        if is_variable_reference(expression):
            raise self._undeclared(expression, location)
        return literal_type(expression)

    def _arithmetic_type(self, expression: str, location: SourceLocation) -> ValueType:
        """Fold operand types left to right; float wins over any other type."""
        result: Optional[ValueType] = None

        for raw in scan(expression):
            if raw.text in ARITHMETIC_OPERATORS:
                continue

            component_location = SourceLocation(
                location.filename, location.line, location.column + raw.column - 1
            )
            component_type = self._component_type(raw.text, component_location)

            if result is None:
                result = component_type
            elif ValueType.FLOAT in (result, component_type):
                result = ValueType.FLOAT
            elif result is not component_type:
                error = create_expression_mismatch_error(expression, result, component_type, location)
                self._out.report(error.diagnostic)
                return ValueType.UNKNOWN

        return result if result is not None else ValueType.UNKNOWN

    def _component_type(self, text: str, location: SourceLocation) -> ValueType:
        stored = self.symbol_table.type_of(text)
        if stored is not None:
            return stored
        if is_variable_reference(text):
            raise self._undeclared(text, location)
        return literal_type(text)

    # ------------------------------------------------------------------
    # Statement checks
    # ------------------------------------------------------------------

    def _check_declaration(self, raw_tokens: List[RawToken], line: str, line_no: int) -> None:
        type_raw, name_raw, assign_raw = raw_tokens[:3]
        value_raw = self._strip_terminator(raw_tokens[3:])
        name = name_raw.text

        if not is_identifier(name):
            raise create_invalid_identifier_error(name, self.lexer.location(line_no, name_raw.column))

        declared = ValueType.from_keyword(type_raw.text)
        actual = self.determine_type(
            self._value_text(line, value_raw), self._value_location(value_raw, assign_raw, line_no)
        )
        if actual is not declared:
            raise create_declaration_mismatch_error(
                name, declared, actual, self.lexer.location(line_no, name_raw.column)
            )

        self.symbol_table.declare(name, declared, self.lexer.location(line_no, name_raw.column))

        self._emit(TokenKind.KEYWORD, type_raw, line_no)
        self._emit(TokenKind.IDENTIFIER, name_raw, line_no)
        self._emit(TokenKind.OPERATOR, assign_raw, line_no)
        self._emit_value_tokens(value_raw, line_no)

    def _check_assignment(self, raw_tokens: List[RawToken], line: str, line_no: int) -> None:
        name_raw, assign_raw = raw_tokens[:2]
        value_raw = self._strip_terminator(raw_tokens[2:])
        name = name_raw.text

        stored = self.symbol_table.type_of(name)
        if stored is None:
            raise self._undeclared(name, self.lexer.location(line_no, name_raw.column))

        actual = self.determine_type(
            self._value_text(line, value_raw), self._value_location(value_raw, assign_raw, line_no)
        )
        if actual is not stored:
            raise create_assignment_mismatch_error(
                name, stored, actual, self.lexer.location(line_no, name_raw.column)
            )

        self._emit(TokenKind.IDENTIFIER, name_raw, line_no)
        self._emit(TokenKind.OPERATOR, assign_raw, line_no)
        self._emit_value_tokens(value_raw, line_no)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _strip_terminator(raw_tokens: List[RawToken]) -> List[RawToken]:
        end = len(raw_tokens)
        while end and raw_tokens[end - 1].text == TERMINATOR:
            end -= 1
        return raw_tokens[:end]

    @staticmethod
    def _value_text(line: str, value_raw: List[RawToken]) -> str:
        """Source text spanning the value tokens, inner whitespace included."""
        if not value_raw:
            return ""
        first, last = value_raw[0], value_raw[-1]
        return line[first.column - 1:last.column - 1 + len(last.text)]

    def _value_location(self, value_raw: List[RawToken], assign_raw: RawToken,
                        line_no: int) -> SourceLocation:
        column = value_raw[0].column if value_raw else assign_raw.column + 1
        return self.lexer.location(line_no, column)

    def _undeclared(self, name: str, location: SourceLocation) -> SemanticError:
        return create_undeclared_variable_error(name, location, self.symbol_table.names())

    def _emit(self, kind: TokenKind, raw: RawToken, line_no: int) -> None:
        self._out.emit_token(Token(kind, raw.text, self.lexer.location(line_no, raw.column)))

    def _emit_value_tokens(self, raw_tokens: Iterable[RawToken], line_no: int) -> None:
        """Classify and emit tokens; unrecognized ones are reported and skipped."""
        for raw in raw_tokens:
            try:
                self._out.emit_token(self.lexer.make_token(raw, line_no))
            except LexerError as e:
                self._out.report(e.diagnostic)

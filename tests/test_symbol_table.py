"""
Test suite for the lexcheck symbol table and output sinks.
"""

import io
import logging
import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from lexcheck.analyzer import (
    SymbolTable, RedeclarationPolicy, RedeclaredVariableError,
    BufferSink, ConsoleSink, LoggingSink, MultiSink
)
from lexcheck.lexer import Diagnostic, SourceLocation, Token, TokenKind, ValueType


LOC = SourceLocation("t.src", 1, 1)


class TestSymbolTable(unittest.TestCase):
    """Test cases for declaration and lookup."""

    def test_declare_and_lookup(self):
        table = SymbolTable()
        table.declare("x", ValueType.INT, LOC)

        self.assertIn("x", table)
        self.assertNotIn("y", table)
        self.assertIs(table.type_of("x"), ValueType.INT)
        self.assertIsNone(table.type_of("y"))
        self.assertEqual(table.lookup("x").location, LOC)
        self.assertEqual(len(table), 1)

    def test_overwrite(self):
        table = SymbolTable(RedeclarationPolicy.OVERWRITE)
        table.declare("x", ValueType.INT)
        table.declare("x", ValueType.STRING)

        self.assertIs(table.type_of("x"), ValueType.STRING)
        self.assertEqual(len(table.bindings("x")), 1)

    def test_error_policy(self):
        table = SymbolTable(RedeclarationPolicy.ERROR)
        table.declare("x", ValueType.INT, LOC)

        with self.assertRaises(RedeclaredVariableError) as ctx:
            table.declare("x", ValueType.FLOAT, SourceLocation("t.src", 2, 7))

        self.assertIs(table.type_of("x"), ValueType.INT)
        self.assertEqual(ctx.exception.diagnostic.code, "E006")
        self.assertEqual(ctx.exception.diagnostic.location.line, 2)

    def test_shadow_policy(self):
        table = SymbolTable(RedeclarationPolicy.SHADOW)
        table.declare("x", ValueType.INT)
        table.declare("x", ValueType.BOOLEAN)

        self.assertIs(table.type_of("x"), ValueType.BOOLEAN)
        self.assertEqual(len(table), 1)
        self.assertEqual(
            [str(s) for s in table.bindings("x")],
            ["x: int", "x: boolean"]
        )

    def test_as_dict_and_str(self):
        table = SymbolTable()
        table.declare("a", ValueType.FLOAT)
        table.declare("b", ValueType.STRING)

        self.assertEqual(table.as_dict(), {"a": "float", "b": "string"})
        self.assertEqual(str(table), "Symbol Table:\n  a: float\n  b: string")

    def test_clear(self):
        table = SymbolTable()
        table.declare("a", ValueType.INT)
        table.clear()
        self.assertEqual(table.names(), [])


class TestSinks(unittest.TestCase):

    def setUp(self):
        self.token = Token(TokenKind.NUMBER, "10", LOC)
        self.diagnostic = Diagnostic(
            message="Error: Variable 'y' not declared before use.",
            location=LOC,
            severity="error",
            code="E002",
            help_text="'y' is not in the symbol table."
        )

    def test_console_sink(self):
        stream = io.StringIO()
        sink = ConsoleSink(stream)
        sink.emit_token(self.token)
        sink.report(self.diagnostic)

        self.assertEqual(stream.getvalue(), (
            "('10', 'NUMBER')\n"
            "Error: Variable 'y' not declared before use.\n"
        ))

    def test_console_sink_verbose(self):
        stream = io.StringIO()
        ConsoleSink(stream, verbose=True).report(self.diagnostic)

        output = stream.getvalue()
        self.assertIn("ERROR[E002]: Error: Variable 'y' not declared before use.", output)
        self.assertIn("--> t.src:1:1", output)
        self.assertIn("help: 'y' is not in the symbol table.", output)

    def test_logging_sink(self):
        logger = logging.getLogger("lexcheck.test.sink")
        sink = LoggingSink(logger)

        with self.assertLogs(logger, level="DEBUG") as logs:
            sink.emit_token(self.token)
            sink.report(self.diagnostic)

        self.assertEqual([r.levelname for r in logs.records], ["DEBUG", "ERROR"])
        self.assertIn("('10', 'NUMBER')", logs.output[0])

    def test_multi_sink(self):
        first, second = BufferSink(), BufferSink()
        sink = MultiSink(first, second)
        sink.emit_token(self.token)
        sink.report(self.diagnostic)

        for buffer in (first, second):
            self.assertEqual(buffer.lines, ["('10', 'NUMBER')"])
            self.assertEqual(len(buffer.diagnostics), 1)


if __name__ == '__main__':
    unittest.main()

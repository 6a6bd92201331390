"""
Test suite for the lexcheck command-line entry point.
"""

import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from lexcheck.cli import main, EXIT_OK, EXIT_DIAGNOSTICS, EXIT_READ_ERROR


SAMPLE = """int x = 10;
float y = 2.5;
x = x + 5;
y = x;
z = 3;
"""


class TestCLI(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "sample.txt")
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(SAMPLE)

    def tearDown(self):
        self.tmpdir.cleanup()

    def _run(self, *args):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(list(args))
        return code, out.getvalue(), err.getvalue()

    def test_prints_tokens_and_diagnostics(self):
        code, out, _ = self._run(self.path)
        lines = out.splitlines()

        self.assertEqual(code, EXIT_OK)
        self.assertEqual(lines[:5], [
            "('int', 'KEYWORD')",
            "('x', 'IDENTIFIER')",
            "('=', 'OPERATOR')",
            "('10', 'NUMBER')",
            "(';', 'SEPARATOR')",
        ])
        self.assertIn(
            "Type mismatch: cannot assign value of type 'int' to variable 'y' of type 'float'",
            lines
        )
        self.assertEqual(lines[-1], "Error: Variable 'z' not declared before use.")

    def test_strict_exit_code(self):
        code, _, _ = self._run(self.path, "--strict")
        self.assertEqual(code, EXIT_DIAGNOSTICS)

    def test_summary_and_symbols(self):
        _, out, _ = self._run(self.path, "--summary", "--symbols")

        self.assertIn("Symbol Table:\n  x: int\n  y: float", out)
        self.assertIn("Lines: 5  Tokens: 16  Errors: 2", out)
        self.assertIn("  E004 Type mismatch on assignment: 1\n  E002 Undeclared variable: 1", out)

    def test_redeclaration_flag(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("int a = 1;\nint a = 2;\n")

        _, out, _ = self._run(self.path, "--redeclaration", "error")
        self.assertIn("Error: Variable 'a' already declared as 'int'", out)

    def test_missing_file(self):
        code, out, err = self._run(os.path.join(self.tmpdir.name, "nope.txt"))

        self.assertEqual(code, EXIT_READ_ERROR)
        self.assertEqual(out, "")
        self.assertTrue(err.startswith("Error reading file:"))


if __name__ == '__main__':
    unittest.main()

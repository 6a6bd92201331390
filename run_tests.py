#!/usr/bin/env python3
"""
Main test runner for lexcheck.

Runs a few end-to-end pipeline checks, then the unit test suite under tests/.
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_pipeline_checks():
    """Smoke-test the tokenizer and checker on small programs."""

    print("lexcheck Test Suite")
    print("=" * 60)

    try:
        from lexcheck.lexer import tokenize
        from lexcheck.analyzer import TypeChecker, BufferSink

        print("✅ All lexcheck modules imported successfully")
        print()

    except ImportError as e:
        print(f"❌ Failed to import lexcheck modules: {e}")
        return False

    print("Testing tokenizer...")
    tokens = tokenize("x+5")
    if tokens != ["x", "+", "5"]:
        print(f"     ❌ Unexpected tokens: {tokens}")
        return False
    print(f"     ✅ {tokens}")

    print("Testing declarations and assignments...")
    code = """
    int x = 10;
    float rate = 0.5;
    x = x * 2;
    rate = rate + x;
    """
    sink = BufferSink()
    result = TypeChecker(sink=sink).analyze_source(code)
    if result.has_errors():
        print(f"     ❌ Unexpected errors: {sink.messages}")
        return False
    print(f"     ✅ {len(result.tokens)} tokens, symbols {result.symbol_table.as_dict()}")

    print("Testing error reporting...")
    error_code = """
    int x = 10;
    x = 5.0;
    y = 3;
    int z = x + "a";
    """
    sink = BufferSink()
    result = TypeChecker(sink=sink).analyze_source(error_code)
    if result.error_count != 4:
        print(f"     ❌ Expected 4 errors, got {result.error_count}: {sink.messages}")
        return False
    for message in sink.messages:
        print(f"        {message}")
    print(f"     ✅ Caught {result.error_count} expected errors")
    print()
    return True


def run_unit_tests():
    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=1).run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_pipeline_checks() and run_unit_tests()
    sys.exit(0 if success else 1)

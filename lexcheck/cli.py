#!/usr/bin/env python3
"""
Command-line entry point for lexcheck.

Analyzes a source file and prints one ``('<lexeme>', '<KIND>')`` line per
accepted token, with diagnostics interleaved in source order.
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .analyzer import (
    TypeChecker, AnalyzerConfig, ConsoleSink, LoggingSink, MultiSink,
    RedeclarationPolicy, SourceReadError, describe_code
)

EXIT_OK = 0
EXIT_DIAGNOSTICS = 1
EXIT_READ_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lexcheck",
        description="Tokenize and type-check a toy C-like source file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    lexcheck program.txt                         # Print tokens and diagnostics
    lexcheck program.txt --verbose               # Diagnostics with location and help
    lexcheck program.txt --redeclaration error   # Reject duplicate declarations
    lexcheck program.txt --summary --symbols     # Append a summary and the symbol table
        """
    )

    parser.add_argument('source', help='source file to analyze')
    parser.add_argument('--redeclaration', choices=[p.value for p in RedeclarationPolicy],
                        default=RedeclarationPolicy.OVERWRITE.value,
                        help='how to treat a second declaration of a name (default: overwrite)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='print diagnostics with location, help text and suggestions')
    parser.add_argument('--summary', action='store_true',
                        help='print token and error counts, broken down by error code')
    parser.add_argument('--symbols', action='store_true',
                        help='print the final symbol table')
    parser.add_argument('--strict', action='store_true',
                        help='exit with status 1 if any diagnostic was reported')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='logging level for internal messages (default: WARNING)')
    parser.add_argument('--log-output', action='store_true',
                        help='also route tokens and diagnostics through the logger')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr
    )

    sink = ConsoleSink(verbose=args.verbose)
    if args.log_output:
        sink = MultiSink(sink, LoggingSink())

    config = AnalyzerConfig(
        redeclaration=RedeclarationPolicy(args.redeclaration),
        filename=args.source
    )
    checker = TypeChecker(sink=sink, config=config)

    try:
        result = checker.analyze_file(args.source)
    except SourceReadError as e:
        print(str(e), file=sys.stderr)
        return EXIT_READ_ERROR

    if args.symbols:
        print(result.symbol_table)

    if args.summary:
        print(f"Lines: {result.lines_analyzed}  Tokens: {len(result.tokens)}  "
              f"Errors: {result.error_count}")
        for code, count in result.counts_by_code().items():
            print(f"  {code} {describe_code(code)}: {count}")

    if args.strict and result.has_errors():
        return EXIT_DIAGNOSTICS
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

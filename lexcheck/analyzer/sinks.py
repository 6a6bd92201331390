"""
Output sinks for analysis results.

The checker never prints directly; it hands classified tokens and
diagnostics to a Sink, so output can go to a console, a buffer or a logger
without touching the analysis code.
"""

import logging
import sys
from abc import ABC, abstractmethod
from typing import List, Optional, TextIO

from ..lexer.tokens import Token
from ..lexer.errors import Diagnostic


class Sink(ABC):
    """Receives classified tokens and diagnostics in emission order."""

    @abstractmethod
    def emit_token(self, token: Token) -> None:
        pass

    @abstractmethod
    def report(self, diagnostic: Diagnostic) -> None:
        pass


class ConsoleSink(Sink):
    """
    Writes ``('<lexeme>', '<KIND>')`` lines and diagnostics to a stream.

    Diagnostics are a single line each unless ``verbose`` is set, in which
    case location, help text and suggestions are printed too.
    """

    def __init__(self, stream: Optional[TextIO] = None, verbose: bool = False):
        self._stream = stream
        self.verbose = verbose

    @property
    def stream(self) -> TextIO:
        # resolved lazily so redirected stdout is honoured
        return self._stream if self._stream is not None else sys.stdout

    def emit_token(self, token: Token) -> None:
        print(token, file=self.stream)

    def report(self, diagnostic: Diagnostic) -> None:
        if self.verbose:
            print(str(diagnostic).rstrip("\n"), file=self.stream)
        else:
            print(diagnostic.message, file=self.stream)


class BufferSink(Sink):
    """Collects everything in memory."""

    def __init__(self):
        self.tokens: List[Token] = []
        self.diagnostics: List[Diagnostic] = []

    def emit_token(self, token: Token) -> None:
        self.tokens.append(token)

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def lines(self) -> List[str]:
        """Token lines as the console sink would print them."""
        return [str(token) for token in self.tokens]

    @property
    def messages(self) -> List[str]:
        return [diagnostic.message for diagnostic in self.diagnostics]

    def clear(self) -> None:
        self.tokens.clear()
        self.diagnostics.clear()


class LoggingSink(Sink):
    """Tokens at DEBUG, diagnostics at ERROR (or WARNING) on a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("lexcheck.output")

    def emit_token(self, token: Token) -> None:
        self.logger.debug("%s %s", token.location, token)

    def report(self, diagnostic: Diagnostic) -> None:
        level = logging.WARNING if diagnostic.severity == "warning" else logging.ERROR
        self.logger.log(level, "%s: %s", diagnostic.location, diagnostic.message)


class MultiSink(Sink):
    """Fans every event out to several sinks."""

    def __init__(self, *sinks: Sink):
        self.sinks = list(sinks)

    def emit_token(self, token: Token) -> None:
        for sink in self.sinks:
            sink.emit_token(token)

    def report(self, diagnostic: Diagnostic) -> None:
        for sink in self.sinks:
            sink.report(diagnostic)

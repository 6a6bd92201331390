"""
Symbol table for lexcheck semantic analysis.

A flat, run-scoped mapping from variable name to declared type. There are no
scopes; what happens when a name is declared a second time is decided by the
table's RedeclarationPolicy.
"""

import logging
from typing import Dict, Iterator, List, Optional
from dataclasses import dataclass
from enum import Enum

from ..lexer.tokens import SourceLocation, ValueType
from .errors import create_redeclared_variable_error

logger = logging.getLogger(__name__)


class RedeclarationPolicy(Enum):
    """What to do when a declared name is declared again."""
    OVERWRITE = "overwrite"   # replace the stored type silently
    ERROR = "error"           # reject the second declaration
    SHADOW = "shadow"         # hide the old binding, keep it for inspection


@dataclass(frozen=True)
class Symbol:
    """A declared variable."""
    name: str
    value_type: ValueType
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        return f"{self.name}: {self.value_type}"


class SymbolTable:
    """
    Flat name -> type table.

    Each name maps to a stack of bindings; only SHADOW ever leaves more than
    one binding on the stack. Lookups always see the most recent binding.
    """

    def __init__(self, policy: RedeclarationPolicy = RedeclarationPolicy.OVERWRITE):
        self.policy = policy
        self._bindings: Dict[str, List[Symbol]] = {}

    def declare(self, name: str, value_type: ValueType,
                location: Optional[SourceLocation] = None) -> Symbol:
        """
        Add a declaration.

        Raises:
            RedeclaredVariableError: if ``name`` exists and the policy is ERROR
        """
        symbol = Symbol(name, value_type, location)
        existing = self._bindings.get(name)

        if not existing:
            self._bindings[name] = [symbol]
            logger.debug("declared %s", symbol)
            return symbol

        if self.policy is RedeclarationPolicy.ERROR:
            raise create_redeclared_variable_error(
                name, existing[-1].value_type, location or SourceLocation("<input>", 0, 0)
            )

        if self.policy is RedeclarationPolicy.SHADOW:
            existing.append(symbol)
            logger.debug("shadowed %s with %s", name, value_type)
        else:
            existing[-1] = symbol
            logger.debug("redeclared %s as %s", name, value_type)
        return symbol

    def lookup(self, name: str) -> Optional[Symbol]:
        bindings = self._bindings.get(name)
        return bindings[-1] if bindings else None

    def type_of(self, name: str) -> Optional[ValueType]:
        """Stored type of ``name``, or None when it was never declared."""
        symbol = self.lookup(name)
        return symbol.value_type if symbol else None

    def bindings(self, name: str) -> List[Symbol]:
        """All bindings of ``name``, oldest first."""
        return list(self._bindings.get(name, ()))

    def names(self) -> List[str]:
        return list(self._bindings)

    def clear(self) -> None:
        self._bindings.clear()

    def as_dict(self) -> Dict[str, str]:
        """Current name -> type name mapping."""
        return {name: str(stack[-1].value_type) for name, stack in self._bindings.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[Symbol]:
        for stack in self._bindings.values():
            yield stack[-1]

    def __str__(self) -> str:
        lines = ["Symbol Table:"]
        for symbol in self:
            lines.append(f"  {symbol}")
        return "\n".join(lines)

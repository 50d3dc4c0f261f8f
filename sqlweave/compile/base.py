"""Rewriter abstractions: CompiledSQL and the Placeholder ABC.

Statement trees always resolve to SQL written with the generic marker
(``?`` by default).  A ``Placeholder`` is the second, purely textual pass
that turns those markers into the form a driver expects:

- ``StaticPlaceholder`` swaps every marker for a fixed string (``?``, ``%s``).
- ``PositionalPlaceholder`` numbers them (``$1``, ``:1``, ``@p1``).

Both treat a doubled marker as an escape and emit one literal marker for it.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from sqlweave.statement.base import MARKER, Token, check_marker, tokenize


@dataclass(frozen=True)
class CompiledSQL:
    """The output of resolving and rewriting a statement.

    Attributes:
        sql: Driver-ready SQL text.
        args: Positional argument values, one per placeholder.
    """

    sql: str
    args: tuple[Any, ...]


class Placeholder(ABC):
    """Abstract base for placeholder rewriters.

    Args:
        marker: The generic marker character produced by statement templates.
    """

    def __init__(self, marker: str = MARKER) -> None:
        check_marker(marker)
        self.marker = marker

    def replace_placeholders(self, sql: str) -> str:
        """Return ``sql`` with every marker rewritten for the target driver.

        Args:
            sql: Resolved SQL containing generic markers.

        Returns:
            Rewritten SQL.  Escaped (doubled) markers become one literal
            marker.

        Raises:
            RewriteError: If ``sql`` cannot be rewritten.
        """
        parts: list[str] = []
        index = 0
        for kind, text in tokenize(sql, self.marker):
            if kind is Token.MARKER:
                index += 1
                parts.append(self.placeholder(index))
            else:
                parts.append(text)
        return "".join(parts)

    @abstractmethod
    def placeholder(self, index: int) -> str:
        """Return the driver placeholder for the ``index``-th marker (1-based)."""

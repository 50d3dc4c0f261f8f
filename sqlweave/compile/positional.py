"""Numbered placeholder rewriter."""
from __future__ import annotations

from sqlweave.compile.base import Placeholder
from sqlweave.errors import ProfileConfigError
from sqlweave.statement.base import MARKER


class PositionalPlaceholder(Placeholder):
    """Rewrites markers to ``<prefix><n>`` with ``n`` counting up from 1.

    Parameter style: ``$1`` (PostgreSQL wire protocol drivers such as
    ``asyncpg``), ``:1`` (DB-API ``numeric``, Oracle) or ``@p1`` (SQL Server).
    """

    def __init__(self, prefix: str, marker: str = MARKER) -> None:
        super().__init__(marker)
        if not prefix:
            raise ProfileConfigError("Placeholder prefix must not be empty.", field="prefix")
        self.prefix = prefix

    def __repr__(self) -> str:
        return f"PositionalPlaceholder({self.prefix!r})"

    def placeholder(self, index: int) -> str:
        return f"{self.prefix}{index}"


DOLLAR = PositionalPlaceholder("$")
COLON = PositionalPlaceholder(":")
AT_P = PositionalPlaceholder("@p")

"""Fixed-string placeholder rewriter."""
from __future__ import annotations

from sqlweave.compile.base import Placeholder
from sqlweave.errors import ProfileConfigError
from sqlweave.statement.base import MARKER


class StaticPlaceholder(Placeholder):
    """Rewrites every marker to the same literal.

    ``StaticPlaceholder("?")`` suits ``qmark`` drivers (``sqlite3``) and
    ``StaticPlaceholder("%s")`` suits ``format`` drivers (``psycopg``,
    ``PyMySQL``).  Escaped markers still collapse, so a literal ``??`` in a
    template reaches the driver as ``?``.
    """

    def __init__(self, literal: str, marker: str = MARKER) -> None:
        super().__init__(marker)
        if not literal:
            raise ProfileConfigError("Placeholder literal must not be empty.", field="literal")
        self.literal = literal

    def __repr__(self) -> str:
        return f"StaticPlaceholder({self.literal!r})"

    def placeholder(self, index: int) -> str:
        return self.literal


#: ``?`` markers, DB-API ``qmark`` style.
QUESTION = StaticPlaceholder("?")

#: ``%s`` markers, DB-API ``format`` style.
PYFORMAT = StaticPlaceholder("%s")

"""Statement abstractions: ``Fragment``, the ``Statement`` ABC, marker scanning.

Every node of a statement tree implements :meth:`Statement.to_sql`, a pure
function from a parameter value to a :class:`Fragment` (SQL text plus the
positionally ordered arguments for its markers).  Nodes are immutable, so one
tree can be resolved concurrently against any number of parameter values.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from sqlweave.errors import ProfileConfigError

#: The generic placeholder character recognised in template text.
MARKER = "?"

P = TypeVar("P")


@dataclass(frozen=True)
class Fragment:
    """The resolved output of one statement node.

    Attributes:
        sql: SQL text with generic markers.  Empty means the node elided.
        args: One value per unescaped marker in ``sql``, left to right.
    """

    sql: str = ""
    args: tuple[Any, ...] = ()

    @classmethod
    def of(cls, sql: str, args: Sequence[Any] = ()) -> Fragment:
        """Build a fragment, normalising empty SQL to :data:`EMPTY`.

        An empty fragment never carries arguments.
        """
        if not sql:
            return EMPTY
        return cls(sql, tuple(args))

    def __bool__(self) -> bool:
        return bool(self.sql)


EMPTY = Fragment()


def as_fragment(result: Fragment | tuple[str, Sequence[Any]]) -> Fragment:
    """Coerce a closure result (``Fragment`` or ``(sql, args)``) to a Fragment."""
    if isinstance(result, Fragment):
        return Fragment.of(result.sql, result.args)
    sql, args = result
    return Fragment.of(sql, args)


class Statement(ABC, Generic[P]):
    """Abstract base for every node of a statement tree."""

    @abstractmethod
    def to_sql(self, param: P) -> Fragment:
        """Resolve this node against ``param``.

        Args:
            param: The caller's parameter value.

        Returns:
            The resolved :class:`Fragment`.

        Raises:
            BuildError: (or any exception raised by a user closure) when the
                node cannot be resolved.  No partial result is produced.
        """


# ---------------------------------------------------------------------------
# Marker scanning (shared by templates and placeholder rewriters)
# ---------------------------------------------------------------------------


class Token(Enum):
    TEXT = "text"
    ESCAPE = "escape"
    MARKER = "marker"


def tokenize(sql: str, marker: str = MARKER) -> Iterator[tuple[Token, str]]:
    """Split ``sql`` into literal text, escaped markers and markers.

    A doubled marker is an escape and yields one ``ESCAPE`` token; a single
    marker yields a ``MARKER`` token.  Text between them is yielded as
    ``TEXT`` (never empty).
    """
    start = 0
    while True:
        index = sql.find(marker, start)
        if index < 0:
            if start < len(sql):
                yield Token.TEXT, sql[start:]
            return
        if index > start:
            yield Token.TEXT, sql[start:index]
        if sql.startswith(marker, index + 1):
            yield Token.ESCAPE, marker
            start = index + 2
        else:
            yield Token.MARKER, marker
            start = index + 1


def count_markers(sql: str, marker: str = MARKER) -> int:
    """Return the number of unescaped markers in ``sql``."""
    return sum(1 for kind, _ in tokenize(sql, marker) if kind is Token.MARKER)


def check_marker(marker: str) -> None:
    """Raise :class:`~sqlweave.errors.ProfileConfigError` unless ``marker`` is one character."""
    if len(marker) != 1:
        raise ProfileConfigError(
            f"Marker must be a single character, got {marker!r}.", field="marker"
        )


def check_separator(sep: str) -> None:
    """Reject an empty separator, which would fuse adjacent markers into an escape."""
    if not sep:
        raise ProfileConfigError("Separator must not be empty.", field="sep")

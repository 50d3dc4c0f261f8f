"""``Query`` and ``Exec``: statement + rewriter + scanners bound to a capability.

Both are immutable and hold no per-call state, so a single instance can be
shared across threads and reused for any number of parameter values::

    user_by_id = Query(
        stmt("SELECT id, name FROM users WHERE id = ?"),
        columns={"id": set_attr("id"), "name": set_attr("name")},
        factory=User,
    )
    user = user_by_id.one(DBAPIConnection(conn), 42)
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from sqlweave.compile.base import CompiledSQL, Placeholder
from sqlweave.compile.builder import StatementBuilder
from sqlweave.compile.static import QUESTION
from sqlweave.errors import ProfileConfigError
from sqlweave.execute.protocols import Executor, Querier
from sqlweave.execute.rows import Rows
from sqlweave.scan.binding import ColumnBinding
from sqlweave.scan.scanner import Scanner
from sqlweave.statement.base import MARKER, Statement, check_marker

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = TypeVar("P")


@dataclass(frozen=True)
class Query(Generic[T, P]):
    """A row-producing statement and the scanners decoding its rows.

    Attributes:
        statement: Statement tree resolved against each call's parameter.
        columns: Result column name → scanner.  Leave empty to read each row
            as one value (the single column, or a tuple of all columns).
        factory: Builds the per-row target the scanners write into.
            Required when ``columns`` is not empty.
        placeholder: Rewriter for the driver's placeholder style; ``None``
            sends the resolved SQL untouched.
        marker: Marker the statement is written with, checked against the
            argument count when ``placeholder`` is ``None``.
    """

    statement: Statement[P]
    columns: Mapping[str, Scanner[T] | None] = field(default_factory=dict)
    factory: Callable[[], T] | None = None
    placeholder: Placeholder | None = QUESTION
    marker: str = MARKER

    def __post_init__(self) -> None:
        check_marker(self.marker)
        if self.columns and self.factory is None:
            raise ProfileConfigError(
                "Query declares column scanners but no target factory.",
                field="factory",
            )
        object.__setattr__(self, "columns", MappingProxyType(dict(self.columns)))

    def compile(self, param: P) -> CompiledSQL:
        """Resolve and rewrite the statement without running it."""
        return StatementBuilder(self.placeholder, self.marker).build(self.statement, param)

    def rows(self, querier: Querier, param: P, context: Any = None) -> Rows[T]:
        """Run the query and return an open cursor over its rows.

        The caller owns the returned :class:`Rows` and must close it.
        """
        compiled = self.compile(param)
        cursor = querier.query(compiled.sql, compiled.args, context)
        try:
            binding = ColumnBinding.bind(self.columns, cursor.columns())
        except BaseException:
            cursor.close()
            raise
        return Rows(cursor, binding, self.factory)

    def all(self, querier: Querier, param: P, context: Any = None) -> list[T]:
        """Every row, in result order.  No rows gives ``[]``."""
        return self.rows(querier, param, context).all()

    def first(self, querier: Querier, param: P, context: Any = None) -> T:
        """The first row.  Raises ``NoRowsError`` when there is none."""
        return self.rows(querier, param, context).first()

    def one(self, querier: Querier, param: P, context: Any = None) -> T:
        """Exactly one row; ``NoRowsError`` or ``TooManyRowsError`` otherwise."""
        return self.rows(querier, param, context).one()


@dataclass(frozen=True)
class Exec(Generic[P]):
    """A statement executed for its effect rather than its rows.

    ``placeholder`` and ``marker`` behave as on :class:`Query`.
    """

    statement: Statement[P]
    placeholder: Placeholder | None = QUESTION
    marker: str = MARKER

    def __post_init__(self) -> None:
        check_marker(self.marker)

    def compile(self, param: P) -> CompiledSQL:
        return StatementBuilder(self.placeholder, self.marker).build(self.statement, param)

    def result(self, executor: Executor, param: P, context: Any = None) -> Any:
        """Run the statement and return the executor's outcome unchanged."""
        compiled = self.compile(param)
        return executor.execute(compiled.sql, compiled.args, context)

"""sqlweave – composable SQL statements and reflection-free row scanning.

Build the SQL from pieces, decode the rows with closures.

Public API
----------
Statements
    ``stmt``, ``expr``, ``where``, ``having``, ``and_``, ``join``,
    ``prefix``, ``list_of``, ``map_param``, ``recursive``, ``values`` and the
    node classes behind them.  A tree resolves a parameter value to SQL text
    with generic ``?`` markers plus the matching positional arguments.

Placeholders
    ``QUESTION``, ``PYFORMAT``, ``DOLLAR``, ``COLON``, ``AT_P`` rewrite the
    generic markers for a driver; ``DialectProfile`` selects one by name.

Scanning
    ``scan``, ``scan_time``, ``set_attr``, ``set_item`` build per-column
    decoders keyed by result column name.

Execution
    ``Query`` (``rows`` / ``all`` / ``first`` / ``one``) and ``Exec``
    (``result``) run against any querier/executor, e.g. ``DBAPIConnection``.

Example::

    import sqlite3
    from sqlweave import DBAPIConnection, Query, expr, set_attr, stmt, where

    users = Query(
        stmt(
            "SELECT id, name FROM users ? ORDER BY id",
            where(expr(lambda f: ("name LIKE ?", [f]) if f else ("", []))),
        ),
        columns={"id": set_attr("id"), "name": set_attr("name")},
        factory=User,
    )
    users.all(DBAPIConnection(sqlite3.connect("app.db")), "a%")

Extensibility
-------------
New placeholder styles can be registered via::

    from sqlweave.compile.registry import PlaceholderFactory

    @PlaceholderFactory.register("named")
    class NamedPlaceholder(Placeholder):
        def placeholder(self, index: int) -> str:
            return f":p{index}"
"""

from __future__ import annotations

from functools import partial

from sqlweave.compile.base import CompiledSQL, Placeholder
from sqlweave.compile.builder import StatementBuilder, compile_statement
from sqlweave.compile.positional import AT_P, COLON, DOLLAR, PositionalPlaceholder
from sqlweave.compile.registry import PlaceholderFactory
from sqlweave.compile.static import PYFORMAT, QUESTION, StaticPlaceholder
from sqlweave.dialect import DialectProfile, DialectProfileBuilder
from sqlweave.errors import (
    BuildError,
    ColumnDecodeError,
    NoRowsError,
    ProfileConfigError,
    RecursionDepthError,
    RewriteError,
    SqlweaveError,
    TooManyRowsError,
)
from sqlweave.execute.adapters import DBAPIConnection, SQLAlchemyConnection
from sqlweave.execute.protocols import ExecResult, Executor, Querier, ResultCursor
from sqlweave.execute.query import Exec, Query
from sqlweave.execute.rows import Rows
from sqlweave.scan.binding import ColumnBinding
from sqlweave.scan.scanner import ScanFunc, Scanner, scan, scan_time, set_attr, set_item
from sqlweave.statement.base import MARKER, Fragment, Statement
from sqlweave.statement.helpers import (
    and_,
    expr,
    having,
    join,
    list_of,
    map_param,
    prefix,
    recursive,
    stmt,
    values,
    where,
)
from sqlweave.statement.nodes import Func, Join, ListOf, Map, Prefix, Recursive
from sqlweave.statement.template import Template

# ---------------------------------------------------------------------------
# Register built-in placeholder styles with PlaceholderFactory
# ---------------------------------------------------------------------------

for _name in ("qmark", "sqlite"):
    PlaceholderFactory.register_builder(_name, partial(StaticPlaceholder, "?"))
for _name in ("format", "psycopg", "postgres", "mysql"):
    PlaceholderFactory.register_builder(_name, partial(StaticPlaceholder, "%s"))
for _name in ("numeric", "oracle"):
    PlaceholderFactory.register_builder(_name, partial(PositionalPlaceholder, ":"))
for _name in ("dollar", "asyncpg"):
    PlaceholderFactory.register_builder(_name, partial(PositionalPlaceholder, "$"))
for _name in ("atp", "mssql"):
    PlaceholderFactory.register_builder(_name, partial(PositionalPlaceholder, "@p"))
del _name

__all__ = [
    # Statements
    "MARKER",
    "Fragment",
    "Statement",
    "Template",
    "Func",
    "Prefix",
    "Join",
    "ListOf",
    "Map",
    "Recursive",
    "stmt",
    "expr",
    "prefix",
    "join",
    "where",
    "having",
    "and_",
    "list_of",
    "map_param",
    "recursive",
    "values",
    # Placeholders
    "CompiledSQL",
    "Placeholder",
    "StaticPlaceholder",
    "PositionalPlaceholder",
    "PlaceholderFactory",
    "StatementBuilder",
    "compile_statement",
    "QUESTION",
    "PYFORMAT",
    "DOLLAR",
    "COLON",
    "AT_P",
    # Configuration
    "DialectProfile",
    "DialectProfileBuilder",
    # Scanning
    "Scanner",
    "ScanFunc",
    "ColumnBinding",
    "scan",
    "scan_time",
    "set_attr",
    "set_item",
    # Execution
    "Query",
    "Exec",
    "Rows",
    "ExecResult",
    "Querier",
    "Executor",
    "ResultCursor",
    "DBAPIConnection",
    "SQLAlchemyConnection",
    # Errors
    "SqlweaveError",
    "BuildError",
    "RecursionDepthError",
    "RewriteError",
    "NoRowsError",
    "TooManyRowsError",
    "ColumnDecodeError",
    "ProfileConfigError",
]

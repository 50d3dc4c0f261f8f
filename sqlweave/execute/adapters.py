"""Querier/Executor adapters for common connection types.

``DBAPIConnection``
    Any PEP 249 connection (``sqlite3``, ``psycopg``, ``PyMySQL`` ...).  The
    DB-API has no cancellation hook, so ``context`` is accepted and ignored.

``SQLAlchemyConnection``
    A SQLAlchemy :class:`~sqlalchemy.engine.Connection`.  SQL is sent with
    ``exec_driver_sql`` so it must already be in the driver's placeholder
    style.  A mapping passed as ``context`` becomes the call's execution
    options.  Install the optional dependency first::

        pip install "sqlweave[sqlalchemy]"
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from sqlweave.execute.protocols import ExecResult

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, CursorResult


# ---------------------------------------------------------------------------
# PEP 249
# ---------------------------------------------------------------------------


class DBAPIResult:
    """:class:`~sqlweave.execute.protocols.ResultCursor` over a DB-API cursor."""

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor

    def columns(self) -> list[str]:
        return [column[0] for column in self._cursor.description or ()]

    def fetchone(self) -> Sequence[Any] | None:
        return self._cursor.fetchone()

    def close(self) -> None:
        self._cursor.close()


class DBAPIConnection:
    """Querier and Executor backed by a PEP 249 connection.

    Args:
        connection: An open DB-API connection.  Transactions stay under the
            caller's control; nothing here commits.
    """

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    def query(self, sql: str, args: Sequence[Any], context: Any = None) -> DBAPIResult:
        cursor = self._connection.cursor()
        try:
            cursor.execute(sql, tuple(args))
        except BaseException:
            cursor.close()
            raise
        return DBAPIResult(cursor)

    def execute(self, sql: str, args: Sequence[Any], context: Any = None) -> ExecResult:
        cursor = self._connection.cursor()
        try:
            cursor.execute(sql, tuple(args))
            rowcount = cursor.rowcount
            return ExecResult(
                rows_affected=rowcount if rowcount >= 0 else None,
                last_insert_id=getattr(cursor, "lastrowid", None),
            )
        finally:
            cursor.close()


# ---------------------------------------------------------------------------
# SQLAlchemy
# ---------------------------------------------------------------------------


class SQLAlchemyResult:
    """:class:`~sqlweave.execute.protocols.ResultCursor` over a ``CursorResult``."""

    def __init__(self, result: CursorResult) -> None:
        self._result = result

    def columns(self) -> list[str]:
        return list(self._result.keys())

    def fetchone(self) -> Sequence[Any] | None:
        return self._result.fetchone()

    def close(self) -> None:
        self._result.close()


class SQLAlchemyConnection:
    """Querier and Executor backed by a SQLAlchemy ``Connection``."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    def _run(self, sql: str, args: Sequence[Any], context: Any) -> CursorResult:
        if context:
            return self._connection.exec_driver_sql(
                sql, tuple(args), execution_options=dict(context)
            )
        return self._connection.exec_driver_sql(sql, tuple(args))

    def query(
        self, sql: str, args: Sequence[Any], context: Any = None
    ) -> SQLAlchemyResult:
        return SQLAlchemyResult(self._run(sql, args, context))

    def execute(self, sql: str, args: Sequence[Any], context: Any = None) -> ExecResult:
        result = self._run(sql, args, context)
        try:
            rowcount = result.rowcount
            return ExecResult(
                rows_affected=rowcount if rowcount >= 0 else None,
                last_insert_id=result.lastrowid,
            )
        finally:
            result.close()

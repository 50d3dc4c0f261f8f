"""sqlweave execution layer: queries, executions and result cursors."""
from sqlweave.execute.adapters import (
    DBAPIConnection,
    DBAPIResult,
    SQLAlchemyConnection,
    SQLAlchemyResult,
)
from sqlweave.execute.protocols import ExecResult, Executor, Querier, ResultCursor
from sqlweave.execute.query import Exec, Query
from sqlweave.execute.rows import Rows

__all__ = [
    "Query",
    "Exec",
    "Rows",
    "ExecResult",
    "Querier",
    "Executor",
    "ResultCursor",
    "DBAPIConnection",
    "DBAPIResult",
    "SQLAlchemyConnection",
    "SQLAlchemyResult",
]

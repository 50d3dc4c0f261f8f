"""Custom exception hierarchy for sqlweave.

All errors raised by sqlweave itself inherit from :class:`SqlweaveError` so
callers can catch the base class for any library-specific failure.  Errors
raised by a querier or executor capability (the database driver) are never
wrapped; they reach the caller unchanged.
"""
from __future__ import annotations

from typing import Any


class SqlweaveError(Exception):
    """Base exception for all sqlweave errors."""


class BuildError(SqlweaveError):
    """Raised when a statement cannot be resolved to SQL.

    Statement closures (``Func`` bodies, recursive builders) may raise this to
    signal an application-level failure.  Any other exception raised from a
    closure propagates verbatim; no partial SQL is produced either way.

    Args:
        message: Human-readable description.
        param: The parameter value being resolved, when known.
    """

    def __init__(self, message: str, param: Any = None) -> None:
        super().__init__(message)
        self.param = param


class RecursionDepthError(BuildError):
    """Raised when a recursive statement exhausts its depth budget.

    Args:
        depth: The depth budget the statement was created with.
    """

    def __init__(self, depth: int, param: Any = None) -> None:
        super().__init__(
            f"Recursive statement too deep (budget {depth}).", param=param
        )
        self.depth = depth


class RewriteError(SqlweaveError):
    """Raised when resolved SQL holds a malformed marker sequence.

    Args:
        message: Human-readable description.
        sql: The resolved SQL text that failed to rewrite.
    """

    def __init__(self, message: str, sql: str | None = None) -> None:
        super().__init__(message)
        self.sql = sql


class NoRowsError(SqlweaveError):
    """Raised when a query produced no row where one was required."""

    def __init__(self, message: str = "No rows in result set.") -> None:
        super().__init__(message)


class TooManyRowsError(SqlweaveError):
    """Raised when a query produced more than one row where one was required."""

    def __init__(self, message: str = "Too many rows in result set.") -> None:
        super().__init__(message)


class ColumnDecodeError(SqlweaveError):
    """Raised when a column scanner cannot decode its staged value.

    The original decoder exception is chained as ``__cause__``.

    Args:
        message: Human-readable description.
        column: Result column whose value failed to decode.  Filled in by the
            column binding when the scanner itself does not know it.
        value: The raw staged value.
    """

    def __init__(
        self,
        message: str,
        column: str | None = None,
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.column = column
        self.value = value

    def __str__(self) -> str:
        message = super().__str__()
        if self.column is None:
            return message
        return f"column '{self.column}': {message}"


class ProfileConfigError(SqlweaveError):
    """Raised when a dialect profile or rewriter is misconfigured.

    Detected at construction time, before any statement is executed.

    Args:
        message: Human-readable description.
        field: Name of the offending setting.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

"""Capability contracts consumed by ``Query`` and ``Exec``.

sqlweave never talks to a database itself.  The hosting application supplies
a *querier* (returns a cursor over result rows) and an *executor* (returns an
execution outcome); :mod:`sqlweave.execute.adapters` provides both for PEP 249
connections and SQLAlchemy connections.

``context`` is an opaque value threaded from the caller to the capability
unchanged.  Cancellation, deadlines and timeouts are entirely the
capability's business.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol


class ResultCursor(Protocol):
    """A live result set, consumed sequentially by exactly one reader."""

    def columns(self) -> Sequence[str]:
        """Column names in result order."""
        ...

    def fetchone(self) -> Sequence[Any] | None:
        """Advance to the next row; ``None`` at end of data."""
        ...

    def close(self) -> None:
        """Release the underlying result handle."""
        ...


class Querier(Protocol):
    def query(
        self, sql: str, args: Sequence[Any], context: Any = None
    ) -> ResultCursor: ...


class Executor(Protocol):
    def execute(self, sql: str, args: Sequence[Any], context: Any = None) -> Any: ...


@dataclass(frozen=True)
class ExecResult:
    """Generic execution outcome returned by the bundled adapters.

    Attributes:
        rows_affected: Rows changed by the statement, or ``None`` when the
            driver cannot tell.
        last_insert_id: Key generated by the last insert, when the driver
            reports one.
    """

    rows_affected: int | None
    last_insert_id: Any = None

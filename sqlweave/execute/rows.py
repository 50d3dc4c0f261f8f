"""The ``Rows`` cursor: sequential decoding of one live result set.

``Rows`` owns the driver cursor for its whole life.  It is strictly single
consumer; advance it to the end or close it on every exit path.  ``all``,
``first`` and ``one`` (and iteration to exhaustion) close it themselves.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from types import TracebackType
from typing import Any, Generic, TypeVar

from sqlweave.errors import NoRowsError, TooManyRowsError
from sqlweave.execute.protocols import ResultCursor
from sqlweave.scan.binding import ColumnBinding

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Rows(Generic[T]):
    """Cursor decoding rows into values of ``T``.

    Args:
        cursor: The driver result set.
        binding: Column binding resolved for this result set.
        factory: Creates a fresh target per row; unused in whole-row mode.
    """

    def __init__(
        self,
        cursor: ResultCursor,
        binding: ColumnBinding[T],
        factory: Callable[[], T] | None = None,
    ) -> None:
        self._cursor = cursor
        self._binding = binding
        self._factory = factory
        self._row: Any = None
        self._closed = False

    @property
    def columns(self) -> list[str]:
        """Column names reported by the driver, in result order."""
        return self._binding.names

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Row-by-row access
    # ------------------------------------------------------------------

    def next(self) -> bool:
        """Advance to the next row.  Returns ``False`` at end of data."""
        if self._closed:
            return False
        self._row = self._cursor.fetchone()
        return self._row is not None

    def scan(self, target: T | None = None) -> T:
        """Decode the current row into ``target`` and return the row value.

        Raises:
            NoRowsError: If there is no current row.
            ColumnDecodeError: If a column cannot be decoded.
        """
        if self._row is None:
            raise NoRowsError()
        self._binding.stage(self._row)
        return self._binding.apply(target)

    def value(self) -> T:
        """Decode the current row into a fresh target."""
        target = self._factory() if self._factory is not None else None
        return self.scan(target)

    def close(self) -> None:
        """Release the driver cursor.  Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._row = None
        logger.debug("closing result cursor")
        self._cursor.close()

    # ------------------------------------------------------------------
    # Result shapes
    # ------------------------------------------------------------------

    def all(self) -> list[T]:
        """Decode every remaining row.  An empty result gives ``[]``."""
        try:
            values: list[T] = []
            while self.next():
                values.append(self.value())
            return values
        finally:
            self.close()

    def first(self) -> T:
        """Decode the first row and ignore the rest.

        Raises:
            NoRowsError: If the result is empty.
        """
        try:
            if not self.next():
                raise NoRowsError()
            return self.value()
        finally:
            self.close()

    def one(self) -> T:
        """Decode the only row.

        Raises:
            NoRowsError: If the result is empty.
            TooManyRowsError: If the result holds more than one row.
        """
        try:
            if not self.next():
                raise NoRowsError()
            value = self.value()
            if self.next():
                raise TooManyRowsError()
            return value
        finally:
            self.close()

    # ------------------------------------------------------------------
    # Python protocols
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[T]:
        try:
            while self.next():
                yield self.value()
        finally:
            self.close()

    def __enter__(self) -> Rows[T]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

"""Late binding of declared scanners to the columns a query actually returned.

Binding happens once per execution, after the driver reports its column
names:

* a column with a declared scanner gets that scanner's slot and apply closure;
* a column without one gets a throwaway slot, so extra columns are harmless
  and ``SELECT`` order never matters;
* with no scanners declared at all, the row itself is the value: a single
  column yields that column's value, several columns yield the row as a tuple.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Generic, TypeVar

from sqlweave.errors import ColumnDecodeError
from sqlweave.scan.scanner import Scanner, Slot

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ColumnBinding(Generic[T]):
    """Slots and apply closures for one execution's column list.

    Attributes:
        names: Column names as reported by the driver, in result order.
        slots: One staging slot per result column, in result order.
    """

    def __init__(
        self,
        names: Sequence[str],
        slots: list[Slot],
        appliers: list[tuple[str, Callable[[T], None]]],
        whole_row: bool,
    ) -> None:
        self.names = list(names)
        self.slots = slots
        self._appliers = appliers
        self._whole_row = whole_row

    @classmethod
    def bind(
        cls,
        columns: Mapping[str, Scanner[T] | None] | None,
        names: Sequence[str],
    ) -> ColumnBinding[T]:
        """Resolve the declared ``columns`` against the reported ``names``.

        Each declared scanner is invoked once here, not once per row.
        """
        slots: list[Slot] = []
        appliers: list[tuple[str, Callable[[T], None]]] = []

        if not columns:
            slots = [Slot() for _ in names]
            return cls(names, slots, appliers, whole_row=True)

        for name in names:
            scanner = columns.get(name)
            if scanner is None:
                logger.debug("discarding unmapped column %r", name)
                slots.append(Slot())
                continue
            slot, apply = scanner.scan()
            slots.append(slot)
            appliers.append((name, apply))

        return cls(names, slots, appliers, whole_row=False)

    @property
    def whole_row(self) -> bool:
        """True when no scanners were declared and the row is the value."""
        return self._whole_row

    def stage(self, row: Sequence[Any]) -> None:
        """Copy the raw values of ``row`` into the staging slots."""
        for slot, value in zip(self.slots, row):
            slot.value = value

    def apply(self, target: T | None) -> T:
        """Apply the staged row to ``target`` and return the row value.

        In whole-row mode ``target`` is ignored and the staged value (or tuple
        of values) is returned instead.

        Raises:
            ColumnDecodeError: If a scanner cannot decode its value; the error
                carries the offending column name.
        """
        if self._whole_row:
            if len(self.slots) == 1:
                return self.slots[0].value
            return tuple(slot.value for slot in self.slots)  # type: ignore[return-value]

        for name, apply in self._appliers:
            try:
                apply(target)
            except ColumnDecodeError as exc:
                if exc.column is None:
                    exc.column = name
                raise
        return target  # type: ignore[return-value]

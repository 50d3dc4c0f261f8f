"""Per-column scanners.

A :class:`Scanner` is a factory invoked once per query execution for one
result column.  It returns a :class:`Slot` (refreshed with the raw column
value for every row) and an ``apply(target)`` closure that copies or decodes
the staged value into the row's target object.  Nothing inspects the target
type: each scanner is an explicit closure written by the caller.

Example::

    columns = {
        "id": scan(lambda u, v: setattr(u, "id", v)),
        "created": scan_time("%Y-%m-%d %H:%M:%S", lambda u, v: setattr(u, "created", v)),
        "nick": set_attr("nick").nullable("anonymous"),
        "prefs": set_attr("prefs").as_json(Preferences),
    }
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from sqlweave.errors import ColumnDecodeError

T = TypeVar("T")
V = TypeVar("V")
W = TypeVar("W")


class Slot:
    """Staging location for one column of the current row."""

    __slots__ = ("value",)

    def __init__(self) -> None:
        self.value: Any = None

    def __repr__(self) -> str:
        return f"Slot({self.value!r})"


class Scanner(ABC, Generic[T]):
    """Abstract base for column scanner factories."""

    @abstractmethod
    def scan(self) -> tuple[Slot, Callable[[T], None]]:
        """Create a fresh staging slot and its apply closure."""


class ScanFunc(Scanner[T], Generic[T, V]):
    """Scanner applying ``fn(target, value)`` for every row.

    Derived scanners (``as_string``, ``as_bytes``, ``as_json``, ``nullable``)
    decode the raw value first and then hand the result to ``fn``.  Each one
    also keeps the undecorated setter it was derived from, which ``nullable``
    uses to store its default without running any decoder.
    """

    def __init__(
        self,
        fn: Callable[[T, V], None],
        setter: Callable[[T, Any], None] | None = None,
    ) -> None:
        self._fn = fn
        self._setter = setter if setter is not None else fn

    def __call__(self, target: T, value: V) -> None:
        self._fn(target, value)

    def scan(self) -> tuple[Slot, Callable[[T], None]]:
        slot = Slot()

        def apply(target: T) -> None:
            self._fn(target, slot.value)

        return slot, apply

    def as_bytes(self, decode: Callable[[bytes], V]) -> ScanFunc[T, bytes]:
        """Decode a bytes column with ``decode`` before applying."""

        def fn(target: T, raw: bytes | str) -> None:
            if isinstance(raw, str):
                raw = raw.encode()
            self._fn(target, _decode(decode, raw))

        return ScanFunc(fn, self._setter)

    def as_string(self, decode: Callable[[str], V]) -> ScanFunc[T, str]:
        """Decode a text column with ``decode`` before applying."""

        def fn(target: T, raw: str | bytes) -> None:
            if isinstance(raw, (bytes, bytearray, memoryview)):
                raw = bytes(raw).decode()
            self._fn(target, _decode(decode, raw))

        return ScanFunc(fn, self._setter)

    def as_json(self, model: Any = None) -> ScanFunc[T, bytes]:
        """Decode a JSON payload before applying.

        Args:
            model: Optional type to validate the payload into (a pydantic
                model, a dataclass, ``list[int]`` ...).  Without it the value
                is the plain ``json.loads`` result.
        """
        adapter = TypeAdapter(model) if model is not None else None

        def fn(target: T, raw: bytes | str) -> None:
            if isinstance(raw, memoryview):
                raw = bytes(raw)
            try:
                value = adapter.validate_json(raw) if adapter else json.loads(raw)
            except (ValueError, TypeError, PydanticValidationError) as exc:
                raise ColumnDecodeError(f"invalid JSON payload: {exc}", value=raw) from exc
            self._fn(target, value)

        return ScanFunc(fn, self._setter)

    def nullable(
        self,
        default: V | None = None,
        transform: Callable[[Any], V] | None = None,
    ) -> ScanFunc[T, Any]:
        """Tolerate NULL: store ``default`` for NULL, else decode as usual.

        The default bypasses every decoder this scanner was derived with, so
        ``scan_time(...).nullable(None)`` or ``set_attr("prefs").as_json(Prefs)
        .nullable(None)`` store ``None`` for a NULL column.  A present value
        goes through ``transform`` (when given) and then this scanner::

            set_attr("born").nullable(None, date.fromisoformat)
        """
        setter = self._setter

        def fn(target: T, raw: Any) -> None:
            if raw is None:
                setter(target, default)
            elif transform is None:
                self._fn(target, raw)
            else:
                self._fn(target, _decode(transform, raw))

        return ScanFunc(fn, setter)


def _decode(decode: Callable[[W], V], raw: W) -> V:
    try:
        return decode(raw)
    except ColumnDecodeError:
        raise
    except (ValueError, TypeError) as exc:
        raise ColumnDecodeError(str(exc), value=raw) from exc


def scan(fn: Callable[[T, V], None]) -> ScanFunc[T, V]:
    """Direct-copy scanner: ``fn(target, value)``."""
    return ScanFunc(fn)


def scan_time(layout: str, fn: Callable[[T, datetime], None]) -> ScanFunc[T, str]:
    """Parse a textual timestamp with ``datetime.strptime(value, layout)``."""
    return ScanFunc(fn).as_string(lambda text: datetime.strptime(text, layout))


def set_attr(name: str) -> ScanFunc[Any, Any]:
    """Scanner storing the value on attribute ``name`` of the target."""

    def fn(target: Any, value: Any) -> None:
        setattr(target, name, value)

    return ScanFunc(fn)


def set_item(key: Any) -> ScanFunc[Any, Any]:
    """Scanner storing the value under ``key`` of a mapping target."""

    def fn(target: Any, value: Any) -> None:
        target[key] = value

    return ScanFunc(fn)

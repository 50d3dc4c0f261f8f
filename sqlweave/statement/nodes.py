"""Composite statement nodes.

``Func``       arbitrary ``param -> (sql, args)`` leaf
``Prefix``     keyword wrapper that elides with an empty child
``Join``       separator-joined children
``ListOf``     one child applied per element of a sequence
``Map``        parameter adapter in front of a child
``Recursive``  depth-bounded self reference
"""
from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

from sqlweave.errors import RecursionDepthError
from sqlweave.statement.base import (
    EMPTY,
    MARKER,
    Fragment,
    P,
    Statement,
    as_fragment,
    check_marker,
    check_separator,
)

Q = TypeVar("Q")


@dataclass(frozen=True)
class Func(Statement[P]):
    """Leaf statement delegating to ``fn(param)``.

    Exceptions raised by ``fn`` propagate unchanged.
    """

    fn: Callable[[P], Fragment | tuple[str, Sequence[Any]]]

    def to_sql(self, param: P) -> Fragment:
        return as_fragment(self.fn(param))


@dataclass(frozen=True)
class Prefix(Statement[P]):
    """Emits ``"<keyword> <child>"``, or nothing when the child is empty."""

    keyword: str
    child: Statement[P] | None = None

    def to_sql(self, param: P) -> Fragment:
        if self.child is None:
            return EMPTY
        fragment = self.child.to_sql(param)
        if not fragment:
            return EMPTY
        return Fragment.of(f"{self.keyword} {fragment.sql}", fragment.args)


@dataclass(frozen=True)
class Join(Statement[P]):
    """Joins the non-empty fragments of ``children`` with ``sep`` (never empty)."""

    sep: str
    children: tuple[Statement[P] | None, ...] = ()

    def __post_init__(self) -> None:
        check_separator(self.sep)

    def to_sql(self, param: P) -> Fragment:
        parts: list[str] = []
        args: list[Any] = []
        for child in self.children:
            if child is None:
                continue
            fragment = child.to_sql(param)
            if not fragment:
                continue
            parts.append(fragment.sql)
            args.extend(fragment.args)
        return Fragment.of(self.sep.join(parts), args)


@dataclass(frozen=True)
class ListOf(Statement[Sequence[P]]):
    """Applies ``child`` to every element of a sequence parameter.

    With no child, each element renders as one marker and is passed as one
    argument, which expands ``IN (?)`` or ``VALUES ?`` style lists.
    """

    child: Statement[P] | None = None
    sep: str = ","
    marker: str = MARKER

    def __post_init__(self) -> None:
        check_marker(self.marker)
        check_separator(self.sep)

    def to_sql(self, param: Sequence[P]) -> Fragment:
        parts: list[str] = []
        args: list[Any] = []
        for element in param:
            if self.child is None:
                parts.append(self.marker)
                args.append(element)
                continue
            fragment = self.child.to_sql(element)
            if not fragment:
                continue
            parts.append(fragment.sql)
            args.extend(fragment.args)
        return Fragment.of(self.sep.join(parts), args)


@dataclass(frozen=True)
class Map(Statement[P], Generic[P, Q]):
    """Converts the parameter with ``fn`` before resolving ``child``.

    With no child, the converted value is one argument behind one marker.
    """

    fn: Callable[[P], Q]
    child: Statement[Q] | None = None
    marker: str = MARKER

    def __post_init__(self) -> None:
        check_marker(self.marker)

    def to_sql(self, param: P) -> Fragment:
        value = self.fn(param)
        if self.child is None:
            return Fragment.of(self.marker, (value,))
        return self.child.to_sql(value)


@dataclass(frozen=True)
class Recursive(Statement[P]):
    """Statement that can reference itself, bounded by ``depth``.

    Each resolution hands ``builder`` a copy of this node with one less unit
    of depth.  Resolving a copy whose depth has gone negative raises
    :class:`~sqlweave.errors.RecursionDepthError`, so ``depth`` is the number
    of nested self references allowed below the outermost call.

    Attributes:
        depth: Remaining depth budget.
        builder: ``builder(self, param)`` returning a fragment or
            ``(sql, args)``.
        budget: The depth the outermost node was created with.
    """

    depth: int
    builder: Callable[[Statement[P], P], Fragment | tuple[str, Sequence[Any]]]
    budget: int | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.budget is None:
            object.__setattr__(self, "budget", self.depth)

    def to_sql(self, param: P) -> Fragment:
        if self.depth < 0:
            raise RecursionDepthError(self.budget, param=param)
        return as_fragment(self.builder(replace(self, depth=self.depth - 1), param))

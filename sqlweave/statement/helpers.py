"""Shorthand constructors for statement trees.

Example::

    from sqlweave.statement import and_, expr, stmt, where

    by_filter = stmt(
        "SELECT id, name FROM users ? ORDER BY id",
        where(
            expr(lambda f: ("name = ?", [f.name]) if f.name else ("", [])),
            expr(lambda f: ("age >= ?", [f.min_age]) if f.min_age else ("", [])),
        ),
    )
    by_filter.to_sql(Filter(name="ann"))
    # Fragment(sql="SELECT id, name FROM users WHERE name = ? ORDER BY id", args=("ann",))
"""
from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from sqlweave.statement.base import EMPTY, MARKER, Fragment, P, Statement
from sqlweave.statement.nodes import Func, Join, ListOf, Map, Prefix, Q, Recursive
from sqlweave.statement.template import Template


def stmt(sql: str, *bindings: Statement[P] | None, marker: str = MARKER) -> Template[P]:
    """Template with positional bindings (``None`` binds the parameter itself)."""
    return Template(sql, bindings, marker)


def expr(fn: Callable[[P], Fragment | tuple[str, Sequence[Any]]]) -> Func[P]:
    return Func(fn)


def prefix(keyword: str, child: Statement[P] | None) -> Prefix[P]:
    return Prefix(keyword, child)


def join(sep: str, *children: Statement[P] | None) -> Join[P]:
    return Join(sep, children)


def where(*children: Statement[P] | None) -> Prefix[P]:
    """``WHERE a AND b ...``; disappears when every child is empty."""
    return Prefix("WHERE", Join(" AND ", children))


def having(*children: Statement[P] | None) -> Prefix[P]:
    """``HAVING a AND b ...``; disappears when every child is empty."""
    return Prefix("HAVING", Join(" AND ", children))


def and_(*children: Statement[P] | None) -> Func[P]:
    """Parenthesised AND group, empty when every child is empty."""
    inner = Join(" AND ", children)

    def build(param: P) -> Fragment:
        fragment = inner.to_sql(param)
        if not fragment:
            return EMPTY
        return Fragment.of(f"({fragment.sql})", fragment.args)

    return Func(build)


def list_of(
    child: Statement[P] | None = None, sep: str = ",", marker: str = MARKER
) -> ListOf[P]:
    return ListOf(child, sep, marker)


def map_param(
    fn: Callable[[P], Q], child: Statement[Q] | None = None, marker: str = MARKER
) -> Map[P, Q]:
    return Map(fn, child, marker)


def recursive(
    depth: int,
    builder: Callable[[Statement[P], P], Fragment | tuple[str, Sequence[Any]]],
) -> Recursive[P]:
    return Recursive(depth, builder)


def values(fn: Callable[[P], Sequence[Any]], marker: str = MARKER) -> Func[P]:
    """Render ``(?,?,...)`` with one marker per value returned by ``fn``.

    Empty when ``fn`` returns no values.
    """

    def build(param: P) -> Fragment:
        args = fn(param)
        if not args:
            return EMPTY
        return Fragment.of("(" + ",".join([marker] * len(args)) + ")", args)

    return Func(build)

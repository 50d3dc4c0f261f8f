"""Literal SQL templates with ordered child bindings.

A :class:`Template` scans its text left to right for the marker.  Each single
marker is paired with the next binding:

* no binding (or ``None``): the marker stays and the whole parameter becomes
  one argument;
* a child statement resolving to SQL: the child's text replaces the marker and
  its arguments are appended;
* a child statement resolving to nothing: the marker is dropped together with
  one directly following space, so ``"SELECT * FROM t ? LIMIT 1"`` with an
  empty WHERE child becomes ``"SELECT * FROM t LIMIT 1"``.

A doubled marker is an escape.  It is kept doubled in the fragment so that it
survives further composition; the placeholder rewriter collapses it into one
literal marker.  Bindings left over once every marker is used are appended to
the end, separated by one space, when they resolve to SQL.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlweave.statement.base import (
    MARKER,
    Fragment,
    P,
    Statement,
    Token,
    check_marker,
    tokenize,
)


@dataclass(frozen=True)
class Template(Statement[P]):
    """Literal SQL text with one optional binding per marker.

    Attributes:
        sql: Template text.
        bindings: Child statements matched to markers in order.
        marker: The placeholder character (one character).
    """

    sql: str
    bindings: tuple[Statement[P] | None, ...] = ()
    marker: str = MARKER

    def __post_init__(self) -> None:
        check_marker(self.marker)

    def to_sql(self, param: P) -> Fragment:
        parts: list[str] = []
        args: list[Any] = []
        index = 0
        skip_space = False

        for kind, text in tokenize(self.sql, self.marker):
            if kind is Token.TEXT:
                if skip_space and text.startswith(" "):
                    text = text[1:]
                parts.append(text)
            elif kind is Token.ESCAPE:
                parts.append(self.marker * 2)
            else:
                binding = self.bindings[index] if index < len(self.bindings) else None
                index += 1
                if binding is None:
                    parts.append(self.marker)
                    args.append(param)
                else:
                    fragment = binding.to_sql(param)
                    if not fragment:
                        skip_space = True
                        continue
                    parts.append(fragment.sql)
                    args.extend(fragment.args)
            skip_space = False

        for binding in self.bindings[index:]:
            if binding is None:
                continue
            fragment = binding.to_sql(param)
            if not fragment:
                continue
            if parts:
                parts.append(" ")
            parts.append(fragment.sql)
            args.extend(fragment.args)

        return Fragment.of("".join(parts).strip(), args)

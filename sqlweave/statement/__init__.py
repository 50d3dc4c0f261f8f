"""sqlweave statement layer: composable nodes resolving to SQL + arguments."""
from sqlweave.statement.base import (
    EMPTY,
    MARKER,
    Fragment,
    Statement,
    count_markers,
    tokenize,
)
from sqlweave.statement.helpers import (
    and_,
    expr,
    having,
    join,
    list_of,
    map_param,
    prefix,
    recursive,
    stmt,
    values,
    where,
)
from sqlweave.statement.nodes import Func, Join, ListOf, Map, Prefix, Recursive
from sqlweave.statement.template import Template

__all__ = [
    "EMPTY",
    "MARKER",
    "Fragment",
    "Statement",
    "count_markers",
    "tokenize",
    "Template",
    "Func",
    "Prefix",
    "Join",
    "ListOf",
    "Map",
    "Recursive",
    "stmt",
    "expr",
    "prefix",
    "join",
    "where",
    "having",
    "and_",
    "list_of",
    "map_param",
    "recursive",
    "values",
]

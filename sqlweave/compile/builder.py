"""Statement → driver SQL compilation.

``StatementBuilder`` resolves a statement tree against one parameter value,
checks that the resolved text holds exactly one unescaped marker per argument,
then runs the placeholder rewriter.  Both ``Query`` and ``Exec`` go through it.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlweave.compile.base import CompiledSQL, Placeholder
from sqlweave.errors import RewriteError
from sqlweave.statement.base import MARKER, Statement, check_marker, count_markers

logger = logging.getLogger(__name__)


class StatementBuilder:
    """Compiles statements for one placeholder style.

    Args:
        placeholder: Rewriter applied to the resolved SQL.  ``None`` sends
            the resolved text unchanged (markers and escapes included).
        marker: Marker the statements are written with, used for the
            argument count when there is no rewriter.  A rewriter brings its
            own marker.
    """

    def __init__(self, placeholder: Placeholder | None, marker: str = MARKER) -> None:
        check_marker(marker)
        self._placeholder = placeholder
        self._marker = placeholder.marker if placeholder is not None else marker

    def build(self, statement: Statement[Any], param: Any) -> CompiledSQL:
        """Resolve ``statement`` against ``param`` and rewrite its markers.

        Raises:
            BuildError: Propagated from the statement tree.
            RewriteError: If the marker count and argument count disagree,
                or the rewriter rejects the text.
        """
        fragment = statement.to_sql(param)
        markers = count_markers(fragment.sql, self._marker)
        if markers != len(fragment.args):
            raise RewriteError(
                f"Resolved SQL has {markers} placeholder(s) "
                f"but {len(fragment.args)} argument(s).",
                sql=fragment.sql,
            )

        sql = fragment.sql
        if self._placeholder is not None:
            sql = self._placeholder.replace_placeholders(sql)

        logger.debug("compiled statement (%d args): %s", len(fragment.args), sql)
        return CompiledSQL(sql=sql, args=fragment.args)


def compile_statement(
    statement: Statement[Any],
    param: Any,
    placeholder: Placeholder | None = None,
    marker: str = MARKER,
) -> CompiledSQL:
    """Shorthand for ``StatementBuilder(placeholder, marker).build(statement, param)``."""
    return StatementBuilder(placeholder, marker).build(statement, param)

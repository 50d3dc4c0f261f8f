"""sqlweave compilation layer: resolved statements → driver SQL."""
from sqlweave.compile.base import CompiledSQL, Placeholder
from sqlweave.compile.builder import StatementBuilder, compile_statement
from sqlweave.compile.positional import AT_P, COLON, DOLLAR, PositionalPlaceholder
from sqlweave.compile.registry import PlaceholderFactory
from sqlweave.compile.static import PYFORMAT, QUESTION, StaticPlaceholder

__all__ = [
    "CompiledSQL",
    "Placeholder",
    "StatementBuilder",
    "compile_statement",
    "StaticPlaceholder",
    "PositionalPlaceholder",
    "PlaceholderFactory",
    "QUESTION",
    "PYFORMAT",
    "DOLLAR",
    "COLON",
    "AT_P",
]

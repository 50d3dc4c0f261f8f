"""Placeholder style registry (Open/Closed Principle).

``PlaceholderFactory`` maps a style name (``"qmark"``, ``"dollar"`` ...) to a
callable that builds a :class:`~sqlweave.compile.base.Placeholder` for a given
marker.  Register a custom rewriter once and every
:class:`~sqlweave.dialect.DialectProfile` naming it picks it up.

Usage::

    from sqlweave.compile.registry import PlaceholderFactory

    @PlaceholderFactory.register("named")
    class NamedPlaceholder(Placeholder):
        def placeholder(self, index: int) -> str:
            return f":p{index}"
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from sqlweave.compile.base import Placeholder
from sqlweave.errors import ProfileConfigError
from sqlweave.statement.base import MARKER

#: Builds a rewriter for the given marker character.
PlaceholderBuilder = Callable[[str], Placeholder]


class PlaceholderFactory:
    """Registry mapping style names to placeholder builders."""

    _styles: ClassVar[dict[str, PlaceholderBuilder]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[PlaceholderBuilder], PlaceholderBuilder]:
        """Decorator that registers a builder (or Placeholder subclass) under ``name``.

        Args:
            name: Style name (e.g. ``"named"``).

        Returns:
            A decorator that registers and returns the builder.
        """

        def decorator(builder: PlaceholderBuilder) -> PlaceholderBuilder:
            cls._styles[name] = builder
            return builder

        return decorator

    @classmethod
    def register_builder(cls, name: str, builder: PlaceholderBuilder) -> None:
        """Register a builder without using the decorator form."""
        cls._styles[name] = builder

    @classmethod
    def create(cls, name: str, marker: str = MARKER) -> Placeholder:
        """Build the rewriter registered for ``name``.

        Args:
            name: Style name.
            marker: Marker character the rewriter should recognise.

        Returns:
            A fresh :class:`Placeholder`.

        Raises:
            ProfileConfigError: If no builder is registered for ``name``.
        """
        builder = cls._styles.get(name)
        if builder is None:
            raise ProfileConfigError(
                f"Unsupported placeholder style: '{name}'. "
                f"Registered styles: {cls.registered_styles()}.",
                field="placeholder",
            )
        return builder(marker)

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._styles

    @classmethod
    def registered_styles(cls) -> list[str]:
        """Return the sorted list of registered style names."""
        return sorted(cls._styles)

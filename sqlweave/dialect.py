"""Pydantic model for the DialectProfile used to rewrite placeholders.

A profile names the driver's placeholder style and the marker character the
statement templates use.  Create one through the builder::

    from sqlweave import DialectProfile

    profile = DialectProfile.builder().placeholder("dollar").build()
    query = Query(statement, columns, factory=User, placeholder=profile.rewriter())

Profiles are plain configuration: build them once at start-up and share them.
They can also be loaded from settings files with ``model_validate``.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from sqlweave.compile.base import Placeholder
from sqlweave.compile.registry import PlaceholderFactory
from sqlweave.errors import ProfileConfigError
from sqlweave.statement.base import MARKER


class DialectProfile(BaseModel):
    """Placeholder configuration for one database driver.

    Attributes:
        placeholder: Registered placeholder style name (``"qmark"``,
            ``"format"``, ``"numeric"``, ``"dollar"``, ``"atp"`` or a driver
            alias such as ``"sqlite"`` or ``"postgres"``).
        marker: The generic marker character templates are written with.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    placeholder: str = "qmark"
    marker: str = MARKER

    @field_validator("marker")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("marker must be exactly one character")
        return value

    @classmethod
    def builder(cls) -> DialectProfileBuilder:
        """Return a fluent builder for a new profile."""
        return DialectProfileBuilder()

    def rewriter(self) -> Placeholder:
        """Build the placeholder rewriter described by this profile.

        Raises:
            ProfileConfigError: If the style is not registered.
        """
        return PlaceholderFactory.create(self.placeholder, self.marker)


class DialectProfileBuilder:
    """Fluent builder for :class:`DialectProfile`.

    ``build()`` checks the chosen style against
    :class:`~sqlweave.compile.registry.PlaceholderFactory` so a typo surfaces
    at start-up rather than on the first query.
    """

    def __init__(self) -> None:
        self._placeholder = "qmark"
        self._marker = MARKER

    def placeholder(self, style: str) -> DialectProfileBuilder:
        self._placeholder = style
        return self

    def marker(self, marker: str) -> DialectProfileBuilder:
        self._marker = marker
        return self

    def build(self) -> DialectProfile:
        """Validate and return the profile.

        Raises:
            ProfileConfigError: If the style is unknown or the marker is not a
                single character.
        """
        if not PlaceholderFactory.is_registered(self._placeholder):
            raise ProfileConfigError(
                f"Unknown placeholder style '{self._placeholder}'. "
                f"Registered styles: {PlaceholderFactory.registered_styles()}.",
                field="placeholder",
            )
        if len(self._marker) != 1:
            raise ProfileConfigError(
                f"Marker must be a single character, got {self._marker!r}.",
                field="marker",
            )
        return DialectProfile(placeholder=self._placeholder, marker=self._marker)

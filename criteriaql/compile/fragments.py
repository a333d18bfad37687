"""Immutable SQL fragments produced by the criteria builder.

Fragments are pre-rendered pieces of SQL text.  They never hold a reference
back to the root that produced them; the assembler only concatenates them.
"""

from __future__ import annotations

from dataclasses import dataclass

from criteriaql.schema.expressions import SortDirection


@dataclass(frozen=True)
class ColumnExpr:
    """A column reference or derived expression, optionally aliased.

    Attributes:
        expression: SQL text, e.g. ``m.first_name`` or ``LOWER(m.email)``.
        alias: Output alias used in a projection (``AS alias``), or ``None``.
    """

    expression: str
    alias: str | None = None

    def as_(self, alias: str) -> ColumnExpr:
        """Return a copy of this expression tagged with ``alias``."""
        return ColumnExpr(self.expression, alias)

    def __str__(self) -> str:
        return self.expression


@dataclass(frozen=True)
class Predicate:
    """An opaque SQL boolean condition."""

    condition: str

    @property
    def is_blank(self) -> bool:
        return not self.condition.strip()

    def __str__(self) -> str:
        return self.condition


@dataclass(frozen=True)
class OrderTerm:
    """A single ORDER BY entry."""

    column: ColumnExpr
    direction: SortDirection = SortDirection.ASC

    def render(self) -> str:
        return f"{self.column.expression} {self.direction.value}"


@dataclass(frozen=True)
class SelectFragment:
    """Partial ``SELECT ... FROM `` text awaiting the FROM/JOIN suffix."""

    text: str


@dataclass(frozen=True)
class DistinctOnFragment:
    """A ``DISTINCT ON (...)`` fragment that replaces plain DISTINCT."""

    text: str

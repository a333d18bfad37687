"""Closed enumerations used by the criteria builder and the query renderer.

Each enum carries the exact SQL text it renders to.  Rendering code looks the
text up in an explicit mapping rather than trusting ``.value`` so that adding
a member without a rendering fails loudly.
"""

from __future__ import annotations

from enum import Enum

from criteriaql.errors import CompilationError

# ---------------------------------------------------------------------------
# Join types
# ---------------------------------------------------------------------------


class JoinType(str, Enum):
    """Join flavours available to :meth:`CriteriaBuilder.join`."""

    JOIN = "JOIN"
    CROSS_JOIN = "CROSS_JOIN"
    LEFT_OUTER_JOIN = "LEFT_OUTER_JOIN"
    RIGHT_OUTER_JOIN = "RIGHT_OUTER_JOIN"
    FULL_OUTER_JOIN = "FULL_OUTER_JOIN"

    @property
    def sql(self) -> str:
        """The SQL keyword(s) for this join."""
        try:
            return _JOIN_SQL[self]
        except KeyError:
            raise CompilationError(f"No SQL keyword for {self!r}.", clause="JOIN") from None


_JOIN_SQL: dict[JoinType, str] = {
    JoinType.JOIN: "JOIN",
    JoinType.CROSS_JOIN: "CROSS JOIN",
    JoinType.LEFT_OUTER_JOIN: "LEFT OUTER JOIN",
    JoinType.RIGHT_OUTER_JOIN: "RIGHT OUTER JOIN",
    JoinType.FULL_OUTER_JOIN: "FULL OUTER JOIN",
}


# ---------------------------------------------------------------------------
# LIKE wildcard placement
# ---------------------------------------------------------------------------


class LikeMode(str, Enum):
    """Where ``%`` wildcards are placed around a LIKE value.

    ``ALL`` wraps both sides, ``START`` matches values starting with the
    pattern (``'john%'``) and ``END`` matches values ending with it
    (``'%john'``).
    """

    ALL = "ALL"
    START = "START"
    END = "END"

    def apply(self, value: str) -> str:
        """Return ``value`` with the wildcards for this mode."""
        if self is LikeMode.ALL:
            return f"%{value}%"
        if self is LikeMode.START:
            return f"{value}%"
        if self is LikeMode.END:
            return f"%{value}"
        raise CompilationError(f"Unknown LIKE mode: {self!r}.", clause="WHERE")


# ---------------------------------------------------------------------------
# Sort direction
# ---------------------------------------------------------------------------


class SortDirection(str, Enum):
    """ORDER BY direction, rendered lower-case."""

    ASC = "asc"
    DESC = "desc"

    def __str__(self) -> str:
        return self.value

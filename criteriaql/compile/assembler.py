"""Fluent assembly of a single SELECT statement.

``QueryAssembler`` collects the fragments produced by a
:class:`~criteriaql.compile.criteria.CriteriaBuilder` and renders them in a
fixed clause order::

    SELECT ... FROM <table> m [JOIN ...]* [WHERE ...] [GROUP BY ...]
        [ORDER BY ...] [LIMIT n] [OFFSET n]

Rendering reads the builder's roots but never changes any state, so calling
:meth:`QueryAssembler.build` repeatedly yields the same string.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from criteriaql.compile.clause_builders import (
    FromClauseBuilder,
    JoinClauseBuilder,
    SelectClauseBuilder,
)
from criteriaql.compile.fragments import (
    ColumnExpr,
    DistinctOnFragment,
    OrderTerm,
    Predicate,
    SelectFragment,
)
from criteriaql.errors import (
    BuilderStateError,
    EmptyPredicateError,
    OffsetWithoutLimitError,
)

if TYPE_CHECKING:
    from criteriaql.compile.criteria import CriteriaBuilder

logger = logging.getLogger(__name__)


class QueryAssembler:
    """Accumulates query fragments and renders the final SQL.

    Usually obtained from :meth:`CriteriaBuilder.query`.

    Args:
        criteria_builder: The builder whose FROM and JOIN roots are rendered.
    """

    def __init__(self, criteria_builder: CriteriaBuilder | None = None) -> None:
        self._cb = criteria_builder
        self._select: SelectFragment | None = None
        self._where: Predicate | None = None
        self._distinct_on: DistinctOnFragment | None = None
        self._distinct = False
        self._order_by = ""
        self._group_by = ""
        self._limit = 0
        self._offset: int | None = None

        self._select_clause = SelectClauseBuilder()
        self._from_clause = FromClauseBuilder()
        self._join_clause = JoinClauseBuilder()

    # ------------------------------------------------------------------
    # Fluent setters
    # ------------------------------------------------------------------

    def criteria_builder(self, criteria_builder: CriteriaBuilder) -> QueryAssembler:
        self._cb = criteria_builder
        return self

    def select(self, selection: SelectFragment) -> QueryAssembler:
        self._select = selection
        return self

    def where(self, predicate: Predicate) -> QueryAssembler:
        """Set the WHERE condition.

        Raises:
            EmptyPredicateError: If the condition is blank.
        """
        if predicate.is_blank:
            raise EmptyPredicateError("Predicates is empty in WHERE.", clause="WHERE")
        self._where = predicate
        return self

    def distinct_on(self, fragment: DistinctOnFragment) -> QueryAssembler:
        self._distinct_on = fragment
        return self

    def distinct(self, is_distinct: bool) -> QueryAssembler:
        self._distinct = is_distinct
        return self

    def order_by(self, *terms: OrderTerm | Iterable[OrderTerm]) -> QueryAssembler:
        """Set ORDER BY terms, given variadically or as one list."""
        if len(terms) == 1 and not isinstance(terms[0], OrderTerm):
            terms = tuple(terms[0])
        self._order_by = ",".join(f" {t.render()}" for t in terms)
        return self

    def group_by(self, *columns: ColumnExpr) -> QueryAssembler:
        self._group_by = " ,".join(c.expression for c in columns)
        return self

    def limit(self, value: int) -> QueryAssembler:
        self._limit = value
        return self

    def offset(self, value: int) -> QueryAssembler:
        self._offset = value
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def build(self) -> str:
        """Render the statement.

        Raises:
            BuilderStateError: If no criteria builder, SELECT, or FROM is set.
            DistinctConflictError: If DISTINCT and DISTINCT ON are both active.
            OffsetWithoutLimitError: If OFFSET is set without a positive LIMIT.
        """
        cb = self._require_builder()
        sql = "".join(
            (
                self._select_clause.build(self._select, self._distinct, self._distinct_on),
                self._from_clause.build(cb.from_root),
                self._join_clause.build(cb.join_roots.values()),
                self._build_where(),
                self._build_group_by(),
                self._build_order_by(),
                self._build_limit(),
                self._build_offset(),
            )
        )
        logger.debug("Assembled query: %s", sql)
        return sql

    def __str__(self) -> str:
        return self.build()

    def _require_builder(self) -> CriteriaBuilder:
        if self._cb is None:
            raise BuilderStateError("criteria builder is not set.", operation="build")
        return self._cb

    def _build_where(self) -> str:
        if self._where is None or self._where.is_blank:
            return ""
        return f" WHERE {self._where.condition}"

    def _build_group_by(self) -> str:
        return f" GROUP BY {self._group_by}" if self._group_by.strip() else ""

    def _build_order_by(self) -> str:
        return f" ORDER BY {self._order_by}" if self._order_by.strip() else ""

    def _build_limit(self) -> str:
        return f" LIMIT {self._limit}" if self._limit > 0 else ""

    def _build_offset(self) -> str:
        if self._offset is None:
            return ""
        if self._limit < 1:
            raise OffsetWithoutLimitError(self._offset, self._limit)
        return f" OFFSET {self._offset}"

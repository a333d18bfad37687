"""Table roots: an entity bound to one SQL alias.

A :class:`TableRoot` is the factory for every column expression scoped to
its alias.  The FROM root carries no join wiring; every JOIN root carries a
join type plus source and target columns, and optionally one extra predicate
appended to its ``ON`` clause.
"""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from criteriaql.compile.fragments import ColumnExpr, Predicate
from criteriaql.compile.literals import quote
from criteriaql.errors import BuilderStateError
from criteriaql.schema.expressions import JoinType
from criteriaql.schema.metadata import resolve_column_name, resolve_table_name

logger = logging.getLogger(__name__)

E = TypeVar("E")


class TableRoot(Generic[E]):
    """An entity type bound to a query alias.

    Roots are created by :class:`~criteriaql.compile.criteria.CriteriaBuilder`;
    the builder assigns the alias exactly once.

    Args:
        entity: The entity class this root selects from.
        escape_literals: Double single quotes in inlined patterns
            (see :class:`~criteriaql.schema.settings.BuilderSettings`).
    """

    def __init__(self, entity: type[E], escape_literals: bool = True) -> None:
        self._entity = entity
        self._escape_literals = escape_literals
        self._alias: str | None = None
        self._join_type: JoinType | None = None
        self._source_column: ColumnExpr | None = None
        self._target_column: ColumnExpr | None = None
        self._join_predicate: Predicate | None = None

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def entity(self) -> type[E]:
        return self._entity

    @property
    def alias(self) -> str:
        if self._alias is None:
            raise BuilderStateError(
                f"Root for {self._entity.__name__} has no alias; "
                "create roots through CriteriaBuilder.from_() or join().",
                operation="alias",
            )
        return self._alias

    def bind_alias(self, alias: str) -> None:
        """Assign the alias.  Called once by the owning builder."""
        if self._alias is not None:
            raise BuilderStateError(
                f"Alias already assigned ('{self._alias}').", operation="bind_alias"
            )
        self._alias = alias

    @property
    def table(self) -> str:
        """The resolved SQL table name."""
        return resolve_table_name(self._entity)

    # ------------------------------------------------------------------
    # Column factories
    # ------------------------------------------------------------------

    def get(self, field: str, alias: str | None = None) -> ColumnExpr:
        """Return ``alias.column`` for ``field``, optionally with an output alias.

        Raises:
            FieldNotFoundError: If ``field`` is not declared on the entity or
                its immediate base class.
        """
        column = resolve_column_name(self._entity, field)
        return ColumnExpr(f"{self.alias}.{column}", alias)

    def all(self) -> ColumnExpr:
        """Return the ``alias.*`` wildcard."""
        return ColumnExpr(f"{self.alias}.*")

    def count(self, field: str, alias: str | None = None) -> ColumnExpr:
        """Return ``COUNT(alias.column)``."""
        return ColumnExpr(f"COUNT({self.get(field).expression})", alias)

    def to_char(self, field: str, pattern: str, alias: str | None = None) -> ColumnExpr:
        """Return ``TO_CHAR(alias.column, 'pattern')`` for date formatting."""
        fmt = quote(pattern, self._escape_literals)
        return ColumnExpr(f"TO_CHAR({self.get(field).expression}, {fmt})", alias)

    # ------------------------------------------------------------------
    # Join wiring
    # ------------------------------------------------------------------

    @property
    def is_join(self) -> bool:
        return self._join_type is not None

    @property
    def join_type(self) -> JoinType | None:
        return self._join_type

    @property
    def source_column(self) -> ColumnExpr | None:
        return self._source_column

    @property
    def target_column(self) -> ColumnExpr | None:
        return self._target_column

    @property
    def join_predicate(self) -> Predicate | None:
        return self._join_predicate

    def attach_join(
        self,
        join_type: JoinType,
        source: ColumnExpr,
        target: ColumnExpr,
    ) -> None:
        """Configure this root as a JOIN target ``ON source = target``."""
        self._join_type = JoinType(join_type)
        self._source_column = source
        self._target_column = target
        logger.debug(
            "Join %s %s %s ON %s = %s",
            self._join_type.sql,
            self.table,
            self._alias,
            source.expression,
            target.expression,
        )

    def join_condition(self, predicate: Predicate) -> None:
        """Append ``AND predicate`` to this root's ``ON`` clause."""
        self._join_predicate = predicate

    def __repr__(self) -> str:
        return (
            f"TableRoot(entity={self._entity.__name__}, alias={self._alias!r}, "
            f"join_type={self._join_type})"
        )

"""The per-query criteria builder.

``CriteriaBuilder`` owns exactly one FROM root and any number of JOIN roots,
and is the factory for every fragment an assembled query is made of:
predicates, projections, column expressions, and sort terms.

A builder holds mutable alias state and is **not** safe to share between
threads or tasks.  Create one per query::

    cb = CriteriaBuilder()
    order = cb.from_(Order)
    customer = cb.join(Customer, order.get("customerId"), "id")

    sql = (
        cb.query()
        .select(cb.select(order))
        .where(cb.equal(order.get("active"), True))
        .order_by(cb.desc(order.get("createdAt")))
        .limit(20)
        .build()
    )
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from typing import TYPE_CHECKING, Any, TypeVar

from criteriaql.compile.fragments import (
    ColumnExpr,
    DistinctOnFragment,
    OrderTerm,
    Predicate,
    SelectFragment,
)
from criteriaql.compile.literals import literal_text, quote, quote_list
from criteriaql.compile.root import TableRoot
from criteriaql.errors import (
    BuilderStateError,
    CompilationError,
    EmptyPredicateError,
    InvalidConcatArgumentError,
)
from criteriaql.schema.expressions import JoinType, LikeMode, SortDirection
from criteriaql.schema.settings import DEFAULT_SETTINGS, BuilderSettings

if TYPE_CHECKING:
    from criteriaql.compile.assembler import QueryAssembler

logger = logging.getLogger(__name__)

E = TypeVar("E")


def get_unique_alias(existing: Collection[str], base: str) -> str:
    """Return ``base`` if unused, else the first free ``base1``, ``base2``, ...

    ``existing`` is only read, never modified.
    """
    if base not in existing:
        return base
    suffix = 1
    while f"{base}{suffix}" in existing:
        suffix += 1
    return f"{base}{suffix}"


class CriteriaBuilder:
    """Stateful context for building a single SELECT statement.

    Args:
        settings: Alias and literal-rendering configuration.  Defaults to
            :data:`~criteriaql.schema.settings.DEFAULT_SETTINGS`.
    """

    def __init__(self, settings: BuilderSettings | None = None) -> None:
        self._settings = settings or DEFAULT_SETTINGS
        self._from_root: TableRoot[Any] | None = None
        self._join_roots: dict[str, TableRoot[Any]] = {}

    @property
    def settings(self) -> BuilderSettings:
        return self._settings

    @property
    def from_root(self) -> TableRoot[Any] | None:
        return self._from_root

    @property
    def join_roots(self) -> dict[str, TableRoot[Any]]:
        """JOIN roots keyed by alias, in declaration order (a copy)."""
        return dict(self._join_roots)

    # ------------------------------------------------------------------
    # Query entry point
    # ------------------------------------------------------------------

    def query(self) -> QueryAssembler:
        """Return a new assembler bound to this builder."""
        from criteriaql.compile.assembler import QueryAssembler

        return QueryAssembler(self)

    # ------------------------------------------------------------------
    # FROM / JOIN roots
    # ------------------------------------------------------------------

    def from_(self, entity: type[E]) -> TableRoot[E]:
        """Declare the FROM table.

        Raises:
            BuilderStateError: If a FROM root was already declared.
        """
        if self._from_root is not None:
            raise BuilderStateError(
                f"FROM already defined for {self._from_root.entity.__name__}.",
                operation="from",
            )
        root = TableRoot(entity, self._settings.escape_literals)
        root.bind_alias(self._settings.from_alias)
        self._from_root = root
        logger.debug("FROM %s %s", root.table, root.alias)
        return root

    def join(
        self,
        entity: type[E],
        source: ColumnExpr,
        target_field: str,
        join_type: JoinType = JoinType.JOIN,
    ) -> TableRoot[E]:
        """Declare a JOIN on ``source = <new alias>.<target_field>``.

        Args:
            entity: The entity to join.
            source: Column on an already declared root.
            target_field: Field on ``entity`` matched against ``source``.
            join_type: Join flavour.

        Returns:
            The new root, aliased ``j``, ``j1``, ``j2``, ... in declaration order.

        Raises:
            BuilderStateError: If no FROM root has been declared.
            FieldNotFoundError: If ``target_field`` does not exist on ``entity``.
        """
        if self._from_root is None:
            raise BuilderStateError("FROM not defined before JOIN.", operation="join")
        root = TableRoot(entity, self._settings.escape_literals)
        # The FROM alias is reserved as well.
        taken = {self._from_root.alias, *self._join_roots}
        root.bind_alias(get_unique_alias(taken, self._settings.join_alias_base))
        root.attach_join(join_type, source, root.get(target_field))
        self._join_roots[root.alias] = root
        return root

    # ------------------------------------------------------------------
    # SELECT fragments
    # ------------------------------------------------------------------

    def select(self, root: TableRoot[Any]) -> SelectFragment:
        """``SELECT DISTINCT alias.* FROM``"""
        return SelectFragment(f"SELECT DISTINCT {root.all().expression} FROM ")

    def multi_select(self, *columns: ColumnExpr) -> SelectFragment:
        """``SELECT DISTINCT col [AS alias], ... FROM`` in argument order."""
        items = [
            f"{c.expression} AS {c.alias}" if c.alias else c.expression
            for c in columns
        ]
        return SelectFragment(f"SELECT DISTINCT {', '.join(items)} FROM ")

    def count(self, target: TableRoot[Any] | ColumnExpr, *columns: ColumnExpr) -> SelectFragment:
        """``SELECT COUNT(DISTINCT ...) FROM`` over a root or a column list."""
        if isinstance(target, TableRoot):
            inner = target.all().expression
        else:
            inner = _join_expressions((target, *columns))
        return SelectFragment(f"SELECT COUNT(DISTINCT {inner}) FROM ")

    def select_distinct_on(self, *columns: ColumnExpr) -> DistinctOnFragment:
        return DistinctOnFragment(f"DISTINCT ON ({_join_expressions(columns)})")

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def equal(self, column: ColumnExpr, value: Any) -> Predicate:
        return self._compare(column, "=", value)

    def greater_than(self, column: ColumnExpr, value: Any) -> Predicate:
        return self._compare(column, ">", value)

    def less_than(self, column: ColumnExpr, value: Any) -> Predicate:
        return self._compare(column, "<", value)

    def greater_than_equal(self, column: ColumnExpr, value: Any) -> Predicate:
        return self._compare(column, ">=", value)

    def less_than_equal(self, column: ColumnExpr, value: Any) -> Predicate:
        return self._compare(column, "<=", value)

    def in_(self, column: ColumnExpr, values: Iterable[Any]) -> Predicate:
        return Predicate(f" {column.expression} IN ({self._quote_list(values)}) ")

    def not_in(self, column: ColumnExpr, values: Iterable[Any]) -> Predicate:
        return Predicate(f" {column.expression} NOT IN ({self._quote_list(values)}) ")

    def like(
        self, column: ColumnExpr, value: Any, mode: LikeMode | None = LikeMode.ALL
    ) -> Predicate:
        """``column LIKE '%value%'`` with wildcards placed according to ``mode``.

        With ``mode=None`` the value is used as the exact pattern, so callers
        can write their own ``%`` and ``_`` wildcards.

        Raises:
            CompilationError: If ``mode`` is not a :class:`LikeMode`.
        """
        pattern = _like_pattern(value, mode)
        return Predicate(f" {column.expression} LIKE {self._quote(pattern)} ")

    def not_like(
        self, column: ColumnExpr, value: Any, mode: LikeMode | None = LikeMode.ALL
    ) -> Predicate:
        pattern = _like_pattern(value, mode)
        return Predicate(f" {column.expression} NOT LIKE {self._quote(pattern)} ")

    def between(self, column: ColumnExpr, low: Any, high: Any) -> Predicate:
        return Predicate(
            f" {column.expression} BETWEEN {self._quote(low)} and {self._quote(high)} "
        )

    def is_null(self, column: ColumnExpr) -> Predicate:
        return Predicate(f"{column.expression} IS NULL ")

    def is_not_null(self, column: ColumnExpr) -> Predicate:
        return Predicate(f"{column.expression} IS NOT NULL ")

    # ------------------------------------------------------------------
    # Logical combinators
    # ------------------------------------------------------------------

    def and_(self, *predicates: Predicate) -> Predicate:
        """Join ``predicates`` with ``and`` inside one pair of parentheses.

        Raises:
            EmptyPredicateError: If no predicates are given.
        """
        if not predicates:
            raise EmptyPredicateError("Predicates is empty in AND.", clause="AND")
        return Predicate(_group(" and ", predicates))

    def or_(self, *predicates: Predicate) -> Predicate:
        """Join ``predicates`` with ``or`` inside one pair of parentheses.

        Raises:
            EmptyPredicateError: If no predicates are given.
        """
        if not predicates:
            raise EmptyPredicateError("Predicates is empty in OR.", clause="OR")
        return Predicate(_group(" or ", predicates))

    # ------------------------------------------------------------------
    # Column expressions
    # ------------------------------------------------------------------

    def lower(self, column: ColumnExpr) -> ColumnExpr:
        return ColumnExpr(f"LOWER({column.expression})")

    def upper(self, column: ColumnExpr) -> ColumnExpr:
        return ColumnExpr(f"UPPER({column.expression})")

    def concat(self, *parts: ColumnExpr | str) -> ColumnExpr:
        """Concatenate columns and quoted string literals with ``||``.

        Raises:
            InvalidConcatArgumentError: If a part is neither a
                :class:`ColumnExpr` nor a ``str``.
        """
        rendered: list[str] = []
        for part in parts:
            if isinstance(part, ColumnExpr):
                rendered.append(part.expression)
            elif isinstance(part, str):
                rendered.append(self._quote(part))
            else:
                raise InvalidConcatArgumentError(part)
        return ColumnExpr(f"CONCAT({' || '.join(rendered)})")

    # ------------------------------------------------------------------
    # ORDER BY
    # ------------------------------------------------------------------

    def asc(self, column: ColumnExpr) -> OrderTerm:
        return OrderTerm(column, SortDirection.ASC)

    def desc(self, column: ColumnExpr) -> OrderTerm:
        return OrderTerm(column, SortDirection.DESC)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    get_unique_alias = staticmethod(get_unique_alias)

    def _quote(self, value: Any) -> str:
        return quote(value, self._settings.escape_literals)

    def _quote_list(self, values: Iterable[Any]) -> str:
        return quote_list(values, self._settings.escape_literals)

    def _compare(self, column: ColumnExpr, op: str, value: Any) -> Predicate:
        return Predicate(f" {column.expression} {op} {self._quote(value)} ")


def _join_expressions(columns: Iterable[ColumnExpr]) -> str:
    return ", ".join(c.expression for c in columns)


def _group(operator: str, predicates: Iterable[Predicate]) -> str:
    return f" ({operator.join(p.condition for p in predicates)}) "


def _like_pattern(value: Any, mode: LikeMode | None) -> str:
    text = literal_text(value)
    if mode is None:
        return text
    try:
        return LikeMode(mode).apply(text)
    except ValueError:
        raise CompilationError(f"Unknown LIKE mode: {mode!r}.", clause="WHERE") from None

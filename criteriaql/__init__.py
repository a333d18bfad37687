"""criteriaQL – typed SELECT assembly from entity declarations.

Build Queries. Don't Concatenate Them.

Public API
----------
``CriteriaBuilder``
    Per-query context: declares the FROM and JOIN roots and produces
    predicates, projections, column expressions, and sort terms.

``QueryAssembler``
    Fluent accumulator returned by ``CriteriaBuilder.query()``; ``build()``
    renders the final SQL string.

Entities
--------
Any annotated class can be queried.  Table and column names come from
``__tablename__`` and :func:`column` when declared, otherwise from the
snake-cased identifier::

    class Order(Entity):
        id: int
        customerId: int
        createdAt: datetime

    cb = CriteriaBuilder()
    order = cb.from_(Order)
    sql = cb.query().select(cb.select(order)).limit(20).build()
    # SELECT m.* FROM order m LIMIT 20

criteriaQL only assembles text.  It does not execute SQL, manage
connections, or check the statement against a live schema.
"""

from __future__ import annotations

from criteriaql.compile.assembler import QueryAssembler
from criteriaql.compile.criteria import CriteriaBuilder, get_unique_alias
from criteriaql.compile.fragments import (
    ColumnExpr,
    DistinctOnFragment,
    OrderTerm,
    Predicate,
    SelectFragment,
)
from criteriaql.compile.root import TableRoot
from criteriaql.errors import (
    BuilderStateError,
    CompilationError,
    CriteriaQLError,
    DistinctConflictError,
    EmptyPredicateError,
    FieldNotFoundError,
    InvalidConcatArgumentError,
    NullValueError,
    OffsetWithoutLimitError,
)
from criteriaql.schema.entity import Entity, column
from criteriaql.schema.expressions import JoinType, LikeMode, SortDirection
from criteriaql.schema.metadata import resolve_column_name, resolve_table_name
from criteriaql.schema.settings import BuilderSettings

__all__ = [
    # Core
    "CriteriaBuilder",
    "QueryAssembler",
    "TableRoot",
    "get_unique_alias",
    # Fragments
    "ColumnExpr",
    "Predicate",
    "OrderTerm",
    "SelectFragment",
    "DistinctOnFragment",
    # Entities and metadata
    "Entity",
    "column",
    "resolve_table_name",
    "resolve_column_name",
    # Enums and configuration
    "JoinType",
    "LikeMode",
    "SortDirection",
    "BuilderSettings",
    # Errors
    "CriteriaQLError",
    "BuilderStateError",
    "EmptyPredicateError",
    "FieldNotFoundError",
    "DistinctConflictError",
    "OffsetWithoutLimitError",
    "InvalidConcatArgumentError",
    "NullValueError",
    "CompilationError",
]

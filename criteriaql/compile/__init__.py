"""criteriaQL assembly layer: roots, fragments, and SQL rendering."""
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

__all__ = [
    "ColumnExpr",
    "CriteriaBuilder",
    "DistinctOnFragment",
    "OrderTerm",
    "Predicate",
    "QueryAssembler",
    "SelectFragment",
    "TableRoot",
    "get_unique_alias",
]

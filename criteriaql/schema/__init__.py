"""criteriaQL schema layer: entity declaration, metadata resolution, settings."""
from criteriaql.schema.entity import Entity, column
from criteriaql.schema.expressions import JoinType, LikeMode, SortDirection
from criteriaql.schema.metadata import (
    cache_info,
    clear_caches,
    resolve_column_name,
    resolve_table_name,
    to_snake_case,
)
from criteriaql.schema.settings import BuilderSettings

__all__ = [
    "BuilderSettings",
    "Entity",
    "JoinType",
    "LikeMode",
    "SortDirection",
    "cache_info",
    "clear_caches",
    "column",
    "resolve_column_name",
    "resolve_table_name",
    "to_snake_case",
]

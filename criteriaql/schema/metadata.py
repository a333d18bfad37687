"""Entity metadata resolution: class -> table name, (class, field) -> column name.

Resolution order for both lookups:

1. An explicit, non-blank name declared on the class or field
   (``__tablename__`` / :func:`~criteriaql.schema.entity.column`).
2. Otherwise the identifier converted from camel case to snake case.

Field lookup searches the annotations the class declares itself, then those
of its immediate base class (the first one listed in the class statement).
Deeper ancestors and further bases are not consulted.

Results are memoized process-wide with :func:`functools.lru_cache`.  Each
entry is a pure function of its key, so concurrent first-time resolution can
at worst repeat work; it can never store conflicting values.
"""
from __future__ import annotations

import dataclasses
import inspect
import logging
import re
from functools import lru_cache
from typing import Any

from pydantic import BaseModel

from criteriaql.errors import FieldNotFoundError
from criteriaql.schema.entity import COLUMN_KEY, TABLE_ATTR

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z]+)")


def to_snake_case(name: str) -> str:
    """Convert ``createdAt`` / ``OrderItem`` to ``created_at`` / ``order_item``.

    Only a lower-case letter followed by an upper-case run is split, so
    acronyms stay glued together (``HTTPServer`` -> ``httpserver``).
    """
    return _CAMEL_BOUNDARY.sub(r"\1_\2", name).lower()


# ---------------------------------------------------------------------------
# Public, memoized lookups
# ---------------------------------------------------------------------------


@lru_cache(maxsize=None)
def resolve_table_name(entity: type) -> str:
    """Return the SQL table name for ``entity``.

    Args:
        entity: The entity class.

    Returns:
        The declared ``__tablename__`` if non-blank, else the snake-cased
        class name.
    """
    declared = vars(entity).get(TABLE_ATTR)
    if isinstance(declared, str) and declared.strip():
        table = declared
    else:
        table = to_snake_case(entity.__name__)
    logger.debug("Resolved table for %s: %s", entity.__qualname__, table)
    return table


@lru_cache(maxsize=None)
def resolve_column_name(entity: type, field: str) -> str:
    """Return the SQL column name for ``entity.field``.

    Args:
        entity: The entity class.
        field: The Python attribute name.

    Returns:
        The declared column name if non-blank, else the snake-cased field name.

    Raises:
        FieldNotFoundError: If neither ``entity`` nor its immediate base
            class declares ``field``.
    """
    owner = _find_owner(entity, field)
    declared = _declared_column(owner, field)
    column = declared if declared else to_snake_case(field)
    logger.debug("Resolved column for %s.%s: %s", entity.__qualname__, field, column)
    return column


def cache_info() -> dict[str, Any]:
    """Return hit/miss statistics for both resolution caches."""
    return {
        "table": resolve_table_name.cache_info(),
        "column": resolve_column_name.cache_info(),
    }


def clear_caches() -> None:
    """Drop every memoized table and column name."""
    resolve_table_name.cache_clear()
    resolve_column_name.cache_clear()


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _declares(cls: type, field: str) -> bool:
    return field in inspect.get_annotations(cls)


def _find_owner(entity: type, field: str) -> type:
    """Return the class declaring ``field``: ``entity`` or its first declared base."""
    if _declares(entity, field):
        return entity
    parent = entity.__bases__[0] if entity.__bases__ else None
    if parent is not None and parent is not object and _declares(parent, field):
        return parent
    raise FieldNotFoundError(entity, field)


def _declared_column(owner: type, field: str) -> str | None:
    """Return the explicit column name declared for ``field`` on ``owner``."""
    declared = None
    if issubclass(owner, BaseModel):
        info = owner.model_fields.get(field)
        extra = info.json_schema_extra if info is not None else None
        if isinstance(extra, dict):
            declared = extra.get(COLUMN_KEY)
    elif dataclasses.is_dataclass(owner):
        dc_field = owner.__dataclass_fields__.get(field)
        if dc_field is not None:
            declared = dc_field.metadata.get(COLUMN_KEY)
    if isinstance(declared, str) and declared.strip():
        return declared
    return None

"""Inline rendering of Python values as quoted SQL literals.

Values are substituted into predicate text, not bound as parameters.  With
escaping on (the default) embedded single quotes are doubled, the same way
PostgreSQL string constants escape them.
"""
from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any

from criteriaql.errors import NullValueError


def literal_text(value: Any) -> str:
    """Return the unquoted text for ``value``.

    Raises:
        NullValueError: If ``value`` is ``None``.
    """
    if value is None:
        raise NullValueError()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def quote(value: Any, escape: bool = True) -> str:
    """Return ``value`` as a single-quoted SQL literal."""
    text = literal_text(value)
    if escape:
        text = text.replace("'", "''")
    return f"'{text}'"


def quote_list(values: Iterable[Any], escape: bool = True) -> str:
    """Return ``'a','b','c'`` for an IN list.

    An empty iterable renders as ``''`` so the list stays syntactically valid.
    """
    items = [quote(v, escape) for v in values]
    return ",".join(items) if items else "''"

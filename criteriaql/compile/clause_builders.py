"""Clause-level SQL renderers.

Each class handles exactly one clause of the assembled statement and holds
no state of its own.

Classes
-------
SelectClauseBuilder   : ``SELECT [DISTINCT | DISTINCT ON (...)] ... FROM``
FromClauseBuilder     : ``<table> <alias>``
JoinClauseBuilder     : ``<JOIN TYPE> <table> <alias> ON a = b [AND ...]``
"""
from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from criteriaql.compile.fragments import DistinctOnFragment, SelectFragment
from criteriaql.compile.root import TableRoot
from criteriaql.errors import BuilderStateError, DistinctConflictError

_DISTINCT = "DISTINCT"

# Single-quoted SQL string constant, with '' as an escaped quote.
_LITERAL = re.compile(r"('(?:[^']|'')*')")


def _replace_outside_literals(text: str, old: str, new: str) -> str:
    """Replace ``old`` with ``new`` everywhere except inside quoted literals."""
    parts = _LITERAL.split(text)
    # split() with one group puts the literals at odd indices.
    return "".join(
        part if i % 2 else part.replace(old, new) for i, part in enumerate(parts)
    )


class SelectClauseBuilder:
    """Resolves the DISTINCT keyword of a SELECT fragment.

    * ``distinct=False`` and no DISTINCT ON: the keyword is stripped.
    * DISTINCT ON present: the keyword is replaced by the ON fragment.
    * ``distinct=True`` and no DISTINCT ON: the fragment is kept verbatim.
    """

    def build(
        self,
        select: SelectFragment | None,
        distinct: bool,
        distinct_on: DistinctOnFragment | None,
    ) -> str:
        if select is None:
            raise BuilderStateError("No SELECT fragment set.", operation="select")
        on_text = distinct_on.text if distinct_on is not None else ""
        if distinct and on_text.strip():
            raise DistinctConflictError()
        if not on_text.strip():
            if distinct:
                return select.text
            return _replace_outside_literals(select.text, f"{_DISTINCT} ", "")
        return _replace_outside_literals(select.text, _DISTINCT, on_text)


class FromClauseBuilder:
    """Renders the FROM table and its alias."""

    def build(self, root: TableRoot[Any] | None) -> str:
        if root is None:
            raise BuilderStateError("FROM root not declared.", operation="from")
        return f"{root.table} {root.alias}"


class JoinClauseBuilder:
    """Renders every JOIN root in declaration order."""

    def build(self, roots: Iterable[TableRoot[Any]]) -> str:
        return "".join(self._build_one(root) for root in roots)

    @staticmethod
    def _build_one(root: TableRoot[Any]) -> str:
        if root.join_type is None or root.source_column is None or root.target_column is None:
            raise BuilderStateError(
                f"Join root '{root.alias}' has no join wiring.", operation="join"
            )
        sql = (
            f" {root.join_type.sql} {root.table} {root.alias}"
            f" ON {root.source_column.expression} = {root.target_column.expression}"
        )
        if root.join_predicate is not None:
            sql += f" AND {root.join_predicate.condition}"
        return f"{sql} "

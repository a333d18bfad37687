"""Pydantic model for the per-builder configuration.

``BuilderSettings`` controls how aliases are assigned and how literal values
are inlined into predicate text.  The defaults reproduce the conventional
output (``m`` for the FROM table, ``j``, ``j1``, ... for joins)::

    from criteriaql import BuilderSettings, CriteriaBuilder

    cb = CriteriaBuilder(BuilderSettings(from_alias="t", join_alias_base="x"))
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

#: Pattern every alias must satisfy.
ALIAS_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"


class BuilderSettings(BaseModel):
    """Configuration shared by a criteria builder and its assemblers.

    Attributes:
        from_alias: Alias assigned to the FROM root.
        join_alias_base: Base name tried for join aliases (``j``, ``j1``, ...).
        escape_literals: Double single quotes embedded in inlined values.
            Turning this off reproduces raw text substitution, which is
            open to SQL injection through predicate values.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    from_alias: str = Field(default="m", pattern=ALIAS_PATTERN)
    join_alias_base: str = Field(default="j", pattern=ALIAS_PATTERN)
    escape_literals: bool = True


#: Settings used when a builder is created without explicit configuration.
DEFAULT_SETTINGS = BuilderSettings()

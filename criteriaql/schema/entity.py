"""Declaring entities that map to SQL tables.

An entity is any class with annotated fields.  Pydantic models are the
primary form::

    from typing import ClassVar

    from criteriaql import Entity, column

    class Customer(Entity):
        __tablename__: ClassVar[str] = "customers"

        id: int
        first_name: str = column("fname")
        createdAt: str          # resolves to created_at

Dataclasses declare column names through field metadata instead::

    @dataclass
    class Invoice:
        total: float = field(metadata={"column": "amount_total"})
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import PydanticUndefined

#: Key under which an explicit column name is stored on a field.
COLUMN_KEY = "column"

#: Class attribute holding an explicit table name.
TABLE_ATTR = "__tablename__"


class Entity(BaseModel):
    """Convenience base for pydantic entities.

    Adds nothing to name resolution.  Unknown keys are ignored so entities can
    be populated from wider database rows.
    """

    model_config = ConfigDict(extra="ignore")


def column(name: str, default: Any = PydanticUndefined, **kwargs: Any) -> Any:
    """Declare a pydantic field stored under an explicit SQL column name.

    Args:
        name: The column name used in generated SQL.
        default: Default value for the field.  Omit it to keep the field
            required, as with a plain annotation.
        **kwargs: Passed through to :func:`pydantic.Field`.

    Returns:
        A pydantic ``FieldInfo`` carrying the column name.
    """
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[COLUMN_KEY] = name
    return Field(default=default, json_schema_extra=extra, **kwargs)

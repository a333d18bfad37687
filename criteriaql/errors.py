"""Custom exception hierarchy for criteriaQL.

All public errors inherit from CriteriaQLError so callers can catch the base
class for any criteriaQL-specific failure.  Every error is raised at the call
that detects the bad input; nothing is retried or corrected.
"""
from __future__ import annotations


class CriteriaQLError(Exception):
    """Base exception for all criteriaQL errors."""


class BuilderStateError(CriteriaQLError):
    """Raised when a builder or assembler is used in the wrong order.

    Args:
        message: Human-readable description.
        operation: The builder operation that was attempted.
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation


class EmptyPredicateError(CriteriaQLError):
    """Raised when a predicate group or WHERE condition has no content.

    Args:
        message: Human-readable description.
        clause: ``'AND'``, ``'OR'`` or ``'WHERE'``.
    """

    def __init__(self, message: str, clause: str) -> None:
        super().__init__(message)
        self.clause = clause


class FieldNotFoundError(CriteriaQLError):
    """Raised when a field is declared neither on an entity nor its direct base.

    Args:
        entity: The entity class that was searched.
        field: The attribute name that could not be found.
    """

    def __init__(self, entity: type, field: str) -> None:
        super().__init__(f"No such field: '{field}' on {entity.__name__}")
        self.entity = entity
        self.field = field


class DistinctConflictError(CriteriaQLError):
    """Raised when both DISTINCT and DISTINCT ON are active at render time."""

    def __init__(self) -> None:
        super().__init__("Either DISTINCT or DISTINCT ON can be used, not both.")


class OffsetWithoutLimitError(CriteriaQLError):
    """Raised when OFFSET is rendered without a positive LIMIT.

    Args:
        offset: The requested offset.
        limit: The limit in effect at render time.
    """

    def __init__(self, offset: int, limit: int) -> None:
        super().__init__(
            f"OFFSET {offset} requires a LIMIT of at least 1 (got {limit})."
        )
        self.offset = offset
        self.limit = limit


class NullValueError(CriteriaQLError):
    """Raised when ``None`` is passed as a literal value.

    SQL has no quoted form of NULL; use ``is_null()`` / ``is_not_null()``.
    """

    def __init__(self) -> None:
        super().__init__(
            "None cannot be inlined as a literal; use is_null() or is_not_null()."
        )


class InvalidConcatArgumentError(CriteriaQLError):
    """Raised when ``concat()`` receives something other than a column or string.

    Args:
        argument: The offending argument.
    """

    def __init__(self, argument: object) -> None:
        super().__init__(
            "Only ColumnExpr or str can be the input to concat(), "
            f"got {type(argument).__name__}."
        )
        self.argument = argument


class CompilationError(CriteriaQLError):
    """Raised when SQL rendering meets a value it has no rendering for.

    Args:
        message: Human-readable description.
        clause: The clause being rendered when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause

"""Shared pytest fixtures for criteriaQL tests."""
from __future__ import annotations

import pytest

from criteriaql.compile.criteria import CriteriaBuilder
from criteriaql.schema.settings import BuilderSettings


@pytest.fixture
def cb() -> CriteriaBuilder:
    """A fresh builder with default settings."""
    return CriteriaBuilder()


@pytest.fixture
def raw_cb() -> CriteriaBuilder:
    """A builder that inlines values without escaping quotes."""
    return CriteriaBuilder(BuilderSettings(escape_literals=False))

"""Shared fixtures for query encoding tests."""

from __future__ import annotations

import pytest

from openapi_query import QueryEncoder


@pytest.fixture
def encoder() -> QueryEncoder:
    """Encoder with default settings (form, explode=true)."""
    return QueryEncoder()


@pytest.fixture
def ids() -> list[int]:
    return [3, 4, 5]

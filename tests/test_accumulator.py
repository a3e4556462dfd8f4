"""Tests for QueryAccumulator append / merge rules."""

from __future__ import annotations

import pytest

from openapi_query import CodingPath, QueryAccumulator, QueryPair, StyleContext

EXPLODE = StyleContext()
DEEP = StyleContext(is_deep_object=True)
JOINED = StyleContext(explode=False)
PIPED = StyleContext(explode=False, delimiter="|")

ROOT = CodingPath("id")
ROLE = CodingPath("id", "role")
NAME = CodingPath("id", "name")


@pytest.fixture
def accumulator() -> QueryAccumulator:
    return QueryAccumulator()


# -- depth 1 -------------------------------------------------------------------


def test_explode_appends(accumulator: QueryAccumulator):
    accumulator.append("3", ROOT, EXPLODE)
    accumulator.append("4", ROOT, EXPLODE)
    assert accumulator.pairs == (QueryPair("id", "3"), QueryPair("id", "4"))


def test_joined_merges_with_delimiter(accumulator: QueryAccumulator):
    accumulator.extend([("3", ROOT), ("4", ROOT), ("5", ROOT)], PIPED)
    assert accumulator.pairs == (QueryPair("id", "3|4|5"),)


def test_joined_only_merges_last_pair(accumulator: QueryAccumulator):
    accumulator.append("1", ROOT, JOINED)
    accumulator.append("x", CodingPath("other"), JOINED)
    accumulator.append("2", ROOT, JOINED)
    assert accumulator.pairs == (
        QueryPair("id", "1"),
        QueryPair("other", "x"),
        QueryPair("id", "2"),
    )


# -- depth 2 -------------------------------------------------------------------


def test_object_explode_uses_field_key(accumulator: QueryAccumulator):
    accumulator.extend([("admin", ROLE), ("kean", NAME)], EXPLODE)
    assert accumulator.pairs == (QueryPair("role", "admin"), QueryPair("name", "kean"))


def test_object_deep(accumulator: QueryAccumulator):
    accumulator.extend([("admin", ROLE), ("kean", NAME)], DEEP)
    assert accumulator.pairs == (
        QueryPair("id[role]", "admin"),
        QueryPair("id[name]", "kean"),
    )


def test_object_joined_ignores_delimiter(accumulator: QueryAccumulator):
    accumulator.extend([("admin", ROLE), ("kean", NAME)], PIPED)
    assert accumulator.pairs == (QueryPair("id", "role,admin,name,kean"),)


def test_object_joined_merges_into_previous_root(accumulator: QueryAccumulator):
    accumulator.append("7", ROOT, PIPED)
    accumulator.append("admin", ROLE, PIPED)
    assert accumulator.pairs == (QueryPair("id", "7,role,admin"),)


# -- container behaviour -------------------------------------------------------


def test_len_iter_and_clear(accumulator: QueryAccumulator):
    accumulator.extend([("1", ROOT), ("2", ROOT)], EXPLODE)
    assert len(accumulator) == 2
    assert list(accumulator) == [QueryPair("id", "1"), QueryPair("id", "2")]
    accumulator.clear()
    assert len(accumulator) == 0
    assert accumulator.pairs == ()


def test_pairs_is_a_snapshot(accumulator: QueryAccumulator):
    accumulator.append("1", ROOT, EXPLODE)
    snapshot = accumulator.pairs
    accumulator.append("2", ROOT, EXPLODE)
    assert snapshot == (QueryPair("id", "1"),)

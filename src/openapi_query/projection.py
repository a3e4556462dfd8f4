"""Projection of accumulated pairs into query strings."""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote

from .accumulator import QueryPair

# RFC 3986 query characters kept literal inside a name or value. Unreserved
# characters are always kept by ``quote``; ``&``, ``=``, ``+`` and ``#``
# are escaped since they would change how the query is split.
QUERY_SAFE_CHARACTERS = "!$'()*,;:@/?"


def percent_encode(component: str) -> str:
    """Percent-encode a query name or value (``[`` → ``%5B``, space → ``%20``)."""
    return quote(component, safe=QUERY_SAFE_CHARACTERS)


def to_items(pairs: Iterable[QueryPair]) -> list[tuple[str, str]]:
    return [(pair.name, pair.value) for pair in pairs]


def format_query(pairs: Iterable[QueryPair]) -> str:
    """Join pairs as ``name=value&...`` without escaping."""
    return "&".join(f"{pair.name}={pair.value}" for pair in pairs)


def format_percent_encoded_query(pairs: Iterable[QueryPair]) -> str:
    """Join pairs as ``name=value&...`` with every name and value percent-encoded."""
    return "&".join(
        f"{percent_encode(pair.name)}={percent_encode(pair.value)}" for pair in pairs
    )

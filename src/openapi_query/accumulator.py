"""
Output accumulator.

Keeps the ordered list of query pairs and places each new leaf value
according to the active style:

=====  =======  ===========  ============================================
depth  explode  deep object  behaviour
=====  =======  ===========  ============================================
1      yes      any          append ``(root, value)``
1      no       any          merge into last pair named ``root`` with the
                             delimiter, else append ``(root, value)``
2      yes      no           append ``(field, value)``
2      yes      yes          append ``("root[field]", value)``
2      no       any          merge ``field,value`` into last pair named
                             ``root`` with a comma, else append
                             ``(root, "field,value")``
=====  =======  ===========  ============================================

Objects under ``explode=false`` always join with a comma; the configured
delimiter only applies to depth-1 values.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from .path import CodingPath
    from .style import StyleContext

_OBJECT_SEPARATOR = ","


class QueryPair(NamedTuple):
    """A single ``name=value`` query parameter, unescaped."""

    name: str
    value: str


class QueryAccumulator:
    """Insertion-ordered pair list with style-aware append / merge."""

    def __init__(self) -> None:
        self._pairs: list[QueryPair] = []

    @property
    def pairs(self) -> tuple[QueryPair, ...]:
        return tuple(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[QueryPair]:
        return iter(tuple(self._pairs))

    def clear(self) -> None:
        self._pairs.clear()

    def append(self, value: str, path: CodingPath, style: StyleContext) -> None:
        """Place one formatted leaf value found at *path*."""
        root_key = path.root_key
        field_key = path.field_key

        if field_key is None:
            if style.explode:
                self._pairs.append(QueryPair(root_key, value))
            else:
                self._merge_or_append(root_key, value, style.delimiter)
            return

        if style.explode:
            name = f"{root_key}[{field_key}]" if style.is_deep_object else field_key
            self._pairs.append(QueryPair(name, value))
        else:
            self._merge_or_append(
                root_key,
                f"{field_key}{_OBJECT_SEPARATOR}{value}",
                _OBJECT_SEPARATOR,
            )

    def extend(
        self, leaves: Iterable[tuple[str, CodingPath]], style: StyleContext
    ) -> None:
        for value, path in leaves:
            self.append(value, path, style)

    def _merge_or_append(self, name: str, value: str, separator: str) -> None:
        if self._pairs and self._pairs[-1].name == name:
            last = self._pairs[-1]
            self._pairs[-1] = QueryPair(name, f"{last.value}{separator}{value}")
        else:
            self._pairs.append(QueryPair(name, value))

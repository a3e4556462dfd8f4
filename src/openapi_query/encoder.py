"""
QueryEncoder — encode values as OpenAPI query parameters.

Example::

    encoder = QueryEncoder()
    encoder.encode([3, 4, 5], "id").encode(user, "filter", is_deep_object=True)
    encoder.query                   # id=3&id=4&id=5&filter[role]=admin
    encoder.percent_encoded_query   # id=3&id=4&id=5&filter%5Brole%5D=admin

    QueryEncoder().encode([3, 4, 5], "id", explode=False, delimiter="|").query
    # id=3|4|5

Supported shapes are scalars, sequences of scalars and records whose
fields are scalars. Anything nested deeper raises ``NestingDepthError``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from typing_extensions import Self

from .accumulator import QueryAccumulator, QueryPair
from .dates import DateEncodingStrategy
from .exceptions import NestingDepthError
from .path import CodingPath
from .projection import format_percent_encoded_query, format_query, to_items
from .scalars import ensure_utf8, format_scalar
from .style import ParameterStyle, StyleContext, resolve
from .values import ValueKind, classify, record_fields

logger = logging.getLogger("openapi_query.encoder")

Leaf = tuple[str, CodingPath]


class QueryEncoder:
    """
    Accumulates query pairs across successive ``encode`` calls.

    ``explode``, ``delimiter``, ``is_deep_object`` and ``date_strategy`` are
    the defaults for every call and may be changed between calls. Keyword
    overrides passed to :meth:`encode` apply to that call only.

    Not thread-safe: calls on one instance must be serialized by the caller.
    """

    #: Root key used by :meth:`encode_body`.
    BODY_KEY = "value"

    def __init__(
        self,
        explode: bool = True,
        delimiter: str = ",",
        is_deep_object: bool = False,
        date_strategy: DateEncodingStrategy | None = None,
    ) -> None:
        self.explode = explode
        self.delimiter = delimiter
        self.is_deep_object = is_deep_object
        self.date_strategy = (
            date_strategy
            if date_strategy is not None
            else DateEncodingStrategy.iso8601()
        )
        self._accumulator = QueryAccumulator()

    @classmethod
    def encode_body(cls, value: Any, **defaults: Any) -> QueryEncoder:
        """Encode a whole value under the ``BODY_KEY`` root key in a new encoder."""
        encoder = cls(**defaults)
        encoder.encode(value, cls.BODY_KEY)
        return encoder

    # -- configuration -------------------------------------------------------

    @property
    def defaults(self) -> StyleContext:
        """Current defaults as a validated ``StyleContext``."""
        return StyleContext.create(
            explode=self.explode,
            delimiter=self.delimiter,
            is_deep_object=self.is_deep_object,
            date_strategy=self.date_strategy,
        )

    def _effective_style(
        self,
        explode: bool | None,
        delimiter: str | None,
        is_deep_object: bool | None,
        style: ParameterStyle | str | None,
    ) -> StyleContext:
        if style is None:
            base = self.defaults
        else:
            base = StyleContext.for_style(
                style, explode=explode, date_strategy=self.date_strategy
            )
            explode = None
        return resolve(
            base, explode=explode, delimiter=delimiter, is_deep_object=is_deep_object
        )

    # -- encoding ------------------------------------------------------------

    def encode(
        self,
        value: Any,
        key: str,
        *,
        explode: bool | None = None,
        delimiter: str | None = None,
        is_deep_object: bool | None = None,
        style: ParameterStyle | str | None = None,
    ) -> Self:
        """
        Encode *value* under *key* and return ``self`` for chaining.

        ``None`` values produce no pair. When *style* is given, the context
        comes from that OpenAPI style instead of the instance defaults; the
        other keyword overrides are then applied on top of it.

        Nothing is added when encoding fails.

        Raises:
            NestingDepthError: *value* nests deeper than one level.
            UnsupportedValueError: *value* contains a value of unknown shape,
                a set, or a string that cannot be UTF-8 encoded.
            DateEncodingError: the custom date strategy failed.
            InvalidStyleError: the resolved style is invalid.
        """
        context = self._effective_style(explode, delimiter, is_deep_object, style)
        ensure_utf8(key)
        leaves = list(self._visit(value, CodingPath(key), context))
        before = len(self._accumulator)
        self._accumulator.extend(leaves, context)
        logger.debug(
            "Encoded %r: %d leaves, %d new pairs "
            "(explode=%s, delimiter=%r, deep_object=%s)",
            key,
            len(leaves),
            len(self._accumulator) - before,
            context.explode,
            context.delimiter,
            context.is_deep_object,
        )
        return self

    def _visit(
        self,
        value: Any,
        path: CodingPath,
        context: StyleContext,
        in_sequence: bool = False,
    ) -> Iterator[Leaf]:
        kind = classify(value, path.segments)
        if kind is ValueKind.ABSENT:
            return
        if kind.is_scalar:
            yield format_scalar(value, context.date_strategy, kind, path.segments), path
            return
        # Containers only at the top level of the encoded value
        if in_sequence:
            raise NestingDepthError(path.segments)
        path.require_room()
        if kind is ValueKind.SEQUENCE:
            for index, element in enumerate(value):
                if element is None:
                    logger.debug("Skipping None element %d of %r", index, str(path))
                    continue
                yield from self._visit(element, path, context, in_sequence=True)
            return
        for field_key, field_value in record_fields(value):
            field_path = path.child(ensure_utf8(field_key, path.segments))
            yield from self._visit(field_value, field_path, context)

    # -- results -------------------------------------------------------------

    @property
    def pairs(self) -> tuple[QueryPair, ...]:
        return self._accumulator.pairs

    @property
    def items(self) -> list[tuple[str, str]]:
        """Accumulated ``(name, value)`` tuples, unescaped."""
        return to_items(self._accumulator)

    @property
    def query(self) -> str:
        """Accumulated pairs as ``name=value&...``, unescaped."""
        return format_query(self._accumulator)

    @property
    def percent_encoded_query(self) -> str:
        """Accumulated pairs as ``name=value&...`` with RFC 3986 percent-encoding."""
        return format_percent_encoded_query(self._accumulator)

    def clear(self) -> None:
        """Drop accumulated pairs; defaults are kept."""
        self._accumulator.clear()

    def __len__(self) -> int:
        return len(self._accumulator)

    def __iter__(self) -> Iterator[QueryPair]:
        return iter(self._accumulator)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(explode={self.explode!r}, "
            f"delimiter={self.delimiter!r}, is_deep_object={self.is_deep_object!r}, "
            f"pairs={len(self)})"
        )

"""
Value classification.

Every value handed to the encoder is projected into one ``ValueKind``
before traversal, so dispatch is a closed table rather than a chain of
ad-hoc type checks spread across the engine.

Records disclose their fields explicitly. Mappings, dataclasses and
pydantic models are supported out of the box; any other type can take
part by implementing :class:`QueryRecord`::

    class Range:
        def __init__(self, low: int, high: int) -> None:
            self.low, self.high = low, high

        def query_fields(self):
            return [("from", self.low), ("to", self.high)]
"""

from __future__ import annotations

import dataclasses
import datetime
import uuid
from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from pydantic import AnyUrl, BaseModel
from pydantic_core import Url

from .exceptions import UnsupportedValueError


class ValueKind(str, Enum):
    """Shapes the traversal engine knows how to encode."""

    ABSENT = "absent"
    STRING = "string"
    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"
    DATE = "date"
    URI = "uri"
    SEQUENCE = "sequence"
    RECORD = "record"

    @property
    def is_scalar(self) -> bool:
        return self not in _CONTAINER_KINDS


_CONTAINER_KINDS = frozenset({ValueKind.ABSENT, ValueKind.SEQUENCE, ValueKind.RECORD})


@runtime_checkable
class QueryRecord(Protocol):
    """A keyed record that lists the fields it wants encoded, in order."""

    def query_fields(self) -> Iterable[tuple[str, Any]]: ...


def unwrap(value: Any) -> Any:
    """Replace enum members by their underlying value."""
    while isinstance(value, Enum):
        value = value.value
    return value


def classify(value: Any, path: Sequence[str] = ()) -> ValueKind:
    """
    Project *value* onto a ``ValueKind``.

    Raises:
        UnsupportedValueError: *value* is none of the known shapes.
    """
    value = unwrap(value)
    if value is None:
        return ValueKind.ABSENT
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, str | uuid.UUID):
        return ValueKind.STRING
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float | Decimal):
        return ValueKind.FLOAT
    if isinstance(value, datetime.date):
        return ValueKind.DATE
    if isinstance(value, AnyUrl | Url):
        return ValueKind.URI
    if _is_record(value):
        return ValueKind.RECORD
    # bytes have no text form; sets have no stable iteration order
    if isinstance(value, bytes | bytearray | memoryview | set | frozenset):
        raise UnsupportedValueError(value, path)
    if isinstance(value, Iterable):
        return ValueKind.SEQUENCE
    raise UnsupportedValueError(value, path)


def _is_record(value: Any) -> bool:
    if isinstance(value, Mapping | BaseModel) or isinstance(value, QueryRecord):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def record_fields(value: Any) -> list[tuple[str, Any]]:
    """
    Return the ``(field_name, field_value)`` pairs of a record in declared order.

    - ``QueryRecord``: whatever ``query_fields()`` yields.
    - pydantic model: declared fields, using the alias when one is set.
    - dataclass: ``dataclasses.fields()`` order.
    - Mapping: insertion order; enum keys use their value.
    """
    value = unwrap(value)
    if isinstance(value, QueryRecord):
        return [(str(name), field_value) for name, field_value in value.query_fields()]
    if isinstance(value, BaseModel):
        return [
            (info.alias or name, getattr(value, name))
            for name, info in type(value).model_fields.items()
        ]
    if isinstance(value, Mapping):
        return [(str(unwrap(key)), item) for key, item in value.items()]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
    raise UnsupportedValueError(value)

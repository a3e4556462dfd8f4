"""OpenAPI query parameter encoding: form, delimited and deepObject styles."""

from __future__ import annotations

from .accumulator import QueryAccumulator, QueryPair
from .dates import DateEncodingKind, DateEncodingStrategy
from .encoder import QueryEncoder
from .exceptions import (
    DateEncodingError,
    InvalidStyleError,
    NestingDepthError,
    QueryEncodingError,
    UnencodableStringError,
    UnsupportedValueError,
)
from .path import CodingPath
from .projection import (
    format_percent_encoded_query,
    format_query,
    percent_encode,
)
from .scalars import format_date, format_scalar
from .style import ParameterStyle, StyleContext, resolve
from .values import QueryRecord, ValueKind, classify, record_fields

__all__ = [
    # Encoder
    "QueryEncoder",
    # Style
    "ParameterStyle",
    "StyleContext",
    "resolve",
    "DateEncodingKind",
    "DateEncodingStrategy",
    # Values
    "QueryRecord",
    "ValueKind",
    "classify",
    "record_fields",
    "format_scalar",
    "format_date",
    # Accumulation / projection
    "CodingPath",
    "QueryAccumulator",
    "QueryPair",
    "format_query",
    "format_percent_encoded_query",
    "percent_encode",
    # Exceptions
    "QueryEncodingError",
    "NestingDepthError",
    "UnsupportedValueError",
    "UnencodableStringError",
    "DateEncodingError",
    "InvalidStyleError",
]

"""
Query encoding exception hierarchy.

All exceptions inherit from ``QueryEncodingError`` and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class QueryEncodingError(Exception):
    """Base exception for all query encoding errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class NestingDepthError(QueryEncodingError):
    """
    Value nests deeper than one level.

    Raised when a record field is itself a record or a sequence, or when a
    sequence element is itself a sequence or a record. Query parameters
    only carry ``root`` or ``root[field]`` addresses.
    """

    def __init__(self, path: Sequence[str], key: str | None = None) -> None:
        self.path = tuple(path)
        self.key = key
        location = ".".join(self.path)
        if key is not None:
            message = (
                f"Cannot encode nested value at '{location}.{key}': "
                "query parameters support one level of nesting"
            )
        else:
            message = (
                f"Cannot encode nested container inside '{location}': "
                "query parameters support one level of nesting"
            )
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "NESTING_DEPTH_EXCEEDED",
            "message": str(self),
            "path": list(self.path),
            "key": self.key,
        }


class UnsupportedValueError(QueryEncodingError):
    """Value is neither a scalar, a sequence nor a keyed record."""

    def __init__(self, value: Any, path: Sequence[str] = ()) -> None:
        self.value = value
        self.path = tuple(path)
        self.type_name = type(value).__name__
        super().__init__(
            f"Cannot encode value of type {self.type_name!r} "
            f"at '{'.'.join(self.path)}'"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_VALUE",
            "message": str(self),
            "type": self.type_name,
            "path": list(self.path),
        }


class UnencodableStringError(UnsupportedValueError):
    """
    String cannot be encoded as UTF-8.

    Raised for lone surrogates, which have no percent-encoded form. The
    check runs before any pair is committed.
    """

    def __init__(self, value: str, reason: str, path: Sequence[str] = ()) -> None:
        self.value = value
        self.path = tuple(path)
        self.type_name = type(value).__name__
        self.reason = reason
        QueryEncodingError.__init__(
            self,
            f"Cannot encode string {value!r} "
            f"at '{'.'.join(self.path)}': {reason}",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "error": "UNENCODABLE_STRING",
            "reason": self.reason,
        }


class DateEncodingError(QueryEncodingError):
    """A custom date encoding callable failed or returned a non-string."""

    def __init__(self, value: Any, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Failed to encode date {value!r}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "DATE_ENCODING_FAILED",
            "message": str(self),
            "value": repr(self.value),
            "reason": self.reason,
        }


class InvalidStyleError(QueryEncodingError):
    """Style configuration cannot be expressed as a query serialization."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_STYLE",
            "message": self.message,
            "field": self.field,
        }

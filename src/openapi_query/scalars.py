"""
Scalar formatting.

Pure functions mapping primitive values to their query-string form.
Rendering fails only for strings that cannot be UTF-8 encoded (lone
surrogates) and for a user supplied date callable that misbehaves.
"""

from __future__ import annotations

import datetime
import math
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from .dates import DateEncodingKind, DateEncodingStrategy
from .exceptions import DateEncodingError, UnencodableStringError
from .values import ValueKind, classify, unwrap

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
_DEFAULT_DATE_STRATEGY = DateEncodingStrategy.iso8601()


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def format_number(value: float | Decimal) -> str:
    """Render a number; whole values drop the fraction (``5`` not ``5.0``)."""
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return str(int(value))
        return str(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def _to_utc(value: datetime.date) -> datetime.datetime:
    # Bare dates are midnight UTC; naive datetimes are taken as UTC.
    if not isinstance(value, datetime.datetime):
        return datetime.datetime.combine(
            value, datetime.time.min, tzinfo=datetime.timezone.utc
        )
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def _epoch_microseconds(value: datetime.date) -> int:
    delta = _to_utc(value) - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds


def format_date(
    value: datetime.date,
    strategy: DateEncodingStrategy = _DEFAULT_DATE_STRATEGY,
) -> str:
    """
    Render a ``date`` / ``datetime`` under *strategy*.

    Raises:
        DateEncodingError: a ``CUSTOM`` callable raised or returned a non-string.
    """
    kind = strategy.kind
    if kind is DateEncodingKind.ISO8601:
        if not isinstance(value, datetime.datetime):
            return value.isoformat()
        # isoformat pads years below 1000 to four digits, strftime does not
        return _to_utc(value).replace(microsecond=0, tzinfo=None).isoformat() + "Z"
    if kind is DateEncodingKind.SECONDS_SINCE_1970:
        return format_number(_epoch_microseconds(value) / 1_000_000)
    if kind is DateEncodingKind.MILLISECONDS_SINCE_1970:
        micros = _epoch_microseconds(value)
        # Truncate toward zero, also for pre-epoch dates
        millis = abs(micros) // 1_000
        return str(millis if micros >= 0 else -millis)
    if kind is DateEncodingKind.FORMATTED:
        assert strategy.format is not None
        return value.strftime(strategy.format)

    assert strategy.function is not None
    try:
        result = strategy.function(value)
    except Exception as exc:
        raise DateEncodingError(value, f"custom date function raised {exc!r}") from exc
    if not isinstance(result, str):
        raise DateEncodingError(
            value, f"custom date function returned {type(result).__name__}, not str"
        )
    return result


def format_scalar(
    value: Any,
    date_strategy: DateEncodingStrategy = _DEFAULT_DATE_STRATEGY,
    kind: ValueKind | None = None,
    path: Sequence[str] = (),
) -> str:
    """
    Render a scalar value as a query string value.

    *kind* may be passed when the caller already classified *value*.
    *path* only locates the value in error messages.

    Raises:
        ValueError: *value* is absent or a container.
        UnencodableStringError: the rendered text is not valid UTF-8.
        DateEncodingError: the custom date strategy failed.
    """
    value = unwrap(value)
    if kind is None:
        kind = classify(value)
    if kind is ValueKind.STRING:
        text = value if isinstance(value, str) else str(value)
    elif kind is ValueKind.BOOL:
        text = format_bool(value)
    elif kind is ValueKind.INTEGER:
        text = str(int(value))
    elif kind is ValueKind.FLOAT:
        text = format_number(value)
    elif kind is ValueKind.DATE:
        text = format_date(value, date_strategy)
    elif kind is ValueKind.URI:
        text = str(value)
    else:
        raise ValueError(f"Not a scalar value: {kind.value}")
    return ensure_utf8(text, path)


def ensure_utf8(text: str, path: Sequence[str] = ()) -> str:
    """
    Return *text* unchanged if it can be percent-encoded.

    Raises:
        UnencodableStringError: *text* holds lone surrogates.
    """
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise UnencodableStringError(text, exc.reason, path) from exc
    return text

"""
Date encoding strategies.

Exactly one strategy is active per encoder. The default renders
ISO-8601 / RFC 3339 timestamps in UTC::

    DateEncodingStrategy.iso8601()                 # 2021-01-01T12:30:00Z
    DateEncodingStrategy.seconds_since_1970()      # 1609504200
    DateEncodingStrategy.milliseconds_since_1970() # 1609504200000
    DateEncodingStrategy.formatted("%d/%m/%Y")     # 01/01/2021
    DateEncodingStrategy.custom(lambda d: d.strftime("%Y"))
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class DateEncodingKind(str, Enum):
    """Supported date encoding strategies."""

    ISO8601 = "iso8601"
    SECONDS_SINCE_1970 = "seconds_since_1970"
    MILLISECONDS_SINCE_1970 = "milliseconds_since_1970"
    FORMATTED = "formatted"
    CUSTOM = "custom"


DateFunction = Callable[..., str]


@dataclass(frozen=True)
class DateEncodingStrategy:
    """
    Immutable description of how ``date`` / ``datetime`` values are rendered.

    Attributes:
        kind: Which strategy is active.
        format: ``strftime`` pattern, only for ``FORMATTED``.
        function: Callable returning a string, only for ``CUSTOM``.
    """

    kind: DateEncodingKind = DateEncodingKind.ISO8601
    format: str | None = None
    function: DateFunction | None = None

    def __post_init__(self) -> None:
        if self.kind is DateEncodingKind.FORMATTED and not self.format:
            raise ValueError("FORMATTED date strategy requires a format string")
        if self.kind is DateEncodingKind.CUSTOM and not callable(self.function):
            raise ValueError("CUSTOM date strategy requires a callable")

    @classmethod
    def iso8601(cls) -> DateEncodingStrategy:
        return cls(DateEncodingKind.ISO8601)

    @classmethod
    def seconds_since_1970(cls) -> DateEncodingStrategy:
        return cls(DateEncodingKind.SECONDS_SINCE_1970)

    @classmethod
    def milliseconds_since_1970(cls) -> DateEncodingStrategy:
        return cls(DateEncodingKind.MILLISECONDS_SINCE_1970)

    @classmethod
    def formatted(cls, fmt: str) -> DateEncodingStrategy:
        """Render dates with ``strftime(fmt)``."""
        return cls(DateEncodingKind.FORMATTED, format=fmt)

    @classmethod
    def custom(cls, function: DateFunction) -> DateEncodingStrategy:
        """Render dates with ``function(value)``; it must return ``str``."""
        return cls(DateEncodingKind.CUSTOM, function=function)

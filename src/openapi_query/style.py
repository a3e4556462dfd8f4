"""
Style context: the serialization settings governing one encode call.

``StyleContext`` is immutable. An encoder keeps default settings and
derives a fresh context per call with :func:`resolve`, so call-scoped
overrides never leak into the defaults or into other calls.

OpenAPI parameter declarations map onto contexts as follows:

=================  =======  =========  ===========
style              explode  delimiter  deep object
=================  =======  =========  ===========
form               either   ``,``      no
spaceDelimited     either   space      no
pipeDelimited      either   ``|``      no
deepObject         true     ``,``      yes
=================  =======  =========  ===========
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, InstanceOf, field_validator
from pydantic import ValidationError as PydanticValidationError

from .dates import DateEncodingStrategy
from .exceptions import InvalidStyleError


class ParameterStyle(str, Enum):
    """OpenAPI serialization styles for ``in: query`` parameters."""

    FORM = "form"
    SPACE_DELIMITED = "spaceDelimited"
    PIPE_DELIMITED = "pipeDelimited"
    DEEP_OBJECT = "deepObject"

    @property
    def delimiter(self) -> str:
        return _STYLE_DELIMITERS[self]


_STYLE_DELIMITERS: dict[ParameterStyle, str] = {
    ParameterStyle.FORM: ",",
    ParameterStyle.SPACE_DELIMITED: " ",
    ParameterStyle.PIPE_DELIMITED: "|",
    ParameterStyle.DEEP_OBJECT: ",",
}


class StyleContext(BaseModel):
    """
    Resolved serialization settings.

    Attributes:
        explode: One pair per element / field when ``True``; joined values otherwise.
        delimiter: Join string for non-exploded arrays and scalars.
        is_deep_object: Name record fields ``root[field]`` when exploding.
        date_strategy: How dates are rendered.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, strict=True)

    explode: bool = True
    delimiter: str = ","
    is_deep_object: bool = False
    date_strategy: InstanceOf[DateEncodingStrategy] = Field(
        default_factory=DateEncodingStrategy.iso8601
    )

    @field_validator("delimiter")
    @classmethod
    def _delimiter_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("delimiter must not be empty")
        return value

    @classmethod
    def create(cls, **settings: object) -> StyleContext:
        """Build a context, reporting bad settings as ``InvalidStyleError``."""
        try:
            return cls.model_validate(settings)
        except PydanticValidationError as exc:
            raise _to_style_error(exc) from exc

    @classmethod
    def for_style(
        cls,
        style: ParameterStyle | str,
        explode: bool | None = None,
        date_strategy: DateEncodingStrategy | None = None,
    ) -> StyleContext:
        """
        Build the context for an OpenAPI parameter ``style``.

        ``explode`` defaults to ``True`` for ``form`` and ``deepObject`` and
        to ``False`` for the delimited styles, as OpenAPI does.
        """
        try:
            style = ParameterStyle(style)
        except ValueError as exc:
            raise InvalidStyleError(
                f"Unknown parameter style: {style!r}", field="style"
            ) from exc
        if explode is None:
            explode = style in (ParameterStyle.FORM, ParameterStyle.DEEP_OBJECT)
        if style is ParameterStyle.DEEP_OBJECT and not explode:
            raise InvalidStyleError(
                "deepObject style requires explode=true", field="explode"
            )
        settings: dict[str, object] = {
            "explode": explode,
            "delimiter": style.delimiter,
            "is_deep_object": style is ParameterStyle.DEEP_OBJECT,
        }
        if date_strategy is not None:
            settings["date_strategy"] = date_strategy
        return cls.create(**settings)


def resolve(
    defaults: StyleContext,
    *,
    explode: bool | None = None,
    delimiter: str | None = None,
    is_deep_object: bool | None = None,
) -> StyleContext:
    """
    Return the effective context for one call.

    Each override replaces the default only when it is not ``None``;
    *defaults* is left untouched.
    """
    overrides: dict[str, object] = {}
    if explode is not None:
        overrides["explode"] = explode
    if delimiter is not None:
        overrides["delimiter"] = delimiter
    if is_deep_object is not None:
        overrides["is_deep_object"] = is_deep_object
    if not overrides:
        return defaults
    # model_copy(update=...) would bypass the validators
    return StyleContext.create(**{**dict(defaults), **overrides})


def _to_style_error(exc: PydanticValidationError) -> InvalidStyleError:
    first = exc.errors()[0]
    field = ".".join(str(p) for p in first.get("loc", ())) or None
    return InvalidStyleError(first.get("msg", "invalid style"), field=field)

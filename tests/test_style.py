"""Tests for StyleContext, ParameterStyle and resolve()."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from openapi_query import (
    DateEncodingStrategy,
    InvalidStyleError,
    ParameterStyle,
    StyleContext,
    resolve,
)

# -- StyleContext ------------------------------------------------------------


def test_default_context():
    context = StyleContext()
    assert context.explode is True
    assert context.delimiter == ","
    assert context.is_deep_object is False
    assert context.date_strategy == DateEncodingStrategy.iso8601()


def test_context_is_frozen():
    context = StyleContext()
    with pytest.raises(PydanticValidationError):
        context.explode = False  # type: ignore[misc]


def test_create_rejects_empty_delimiter():
    with pytest.raises(InvalidStyleError) as exc_info:
        StyleContext.create(delimiter="")
    assert exc_info.value.field == "delimiter"


def test_create_rejects_non_bool_explode():
    with pytest.raises(InvalidStyleError) as exc_info:
        StyleContext.create(explode="true")
    assert exc_info.value.field == "explode"


def test_create_rejects_foreign_date_strategy():
    with pytest.raises(InvalidStyleError):
        StyleContext.create(date_strategy="iso8601")


# -- resolve -------------------------------------------------------------------


class TestResolve:
    def test_no_overrides_returns_defaults(self):
        defaults = StyleContext()
        assert resolve(defaults) is defaults

    def test_override_single_field(self):
        defaults = StyleContext(delimiter="|")
        effective = resolve(defaults, explode=False)
        assert effective.explode is False
        assert effective.delimiter == "|"
        assert effective.is_deep_object is False

    def test_defaults_untouched(self):
        defaults = StyleContext()
        resolve(defaults, explode=False, delimiter=" ", is_deep_object=True)
        assert defaults == StyleContext()

    def test_false_override_is_applied(self):
        defaults = StyleContext(is_deep_object=True)
        assert resolve(defaults, is_deep_object=False).is_deep_object is False

    def test_date_strategy_carried_over(self):
        strategy = DateEncodingStrategy.milliseconds_since_1970()
        defaults = StyleContext(date_strategy=strategy)
        assert resolve(defaults, explode=False).date_strategy is strategy

    def test_invalid_override(self):
        with pytest.raises(InvalidStyleError):
            resolve(StyleContext(), delimiter="")


# -- ParameterStyle / for_style ----------------------------------------------


@pytest.mark.parametrize(
    ("style", "explode", "delimiter", "deep"),
    [
        (ParameterStyle.FORM, True, ",", False),
        (ParameterStyle.SPACE_DELIMITED, False, " ", False),
        (ParameterStyle.PIPE_DELIMITED, False, "|", False),
        (ParameterStyle.DEEP_OBJECT, True, ",", True),
    ],
)
def test_for_style_defaults(style, explode, delimiter, deep):
    context = StyleContext.for_style(style)
    assert context.explode is explode
    assert context.delimiter == delimiter
    assert context.is_deep_object is deep


def test_for_style_by_openapi_name():
    assert StyleContext.for_style("pipeDelimited").delimiter == "|"


def test_for_style_explicit_explode():
    assert StyleContext.for_style("form", explode=False).explode is False
    assert StyleContext.for_style("spaceDelimited", explode=True).explode is True


def test_for_style_keeps_date_strategy():
    strategy = DateEncodingStrategy.seconds_since_1970()
    context = StyleContext.for_style("form", date_strategy=strategy)
    assert context.date_strategy is strategy


def test_deep_object_requires_explode():
    with pytest.raises(InvalidStyleError) as exc_info:
        StyleContext.for_style(ParameterStyle.DEEP_OBJECT, explode=False)
    assert exc_info.value.field == "explode"


def test_unknown_style():
    with pytest.raises(InvalidStyleError) as exc_info:
        StyleContext.for_style("label")
    assert exc_info.value.to_dict()["error"] == "INVALID_STYLE"

"""
Formkit Validation Rules
========================

The rules a control value is checked against, in pipeline order:

    required, upload, type, min/max, length, pattern, match

Each rule reads its constraint from the control (option first, HTML
attribute as fallback) and returns a ControlError when the value breaks
it. A constraint that is absent or ``False`` disables the rule.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Mapping, Optional, Pattern, Union

from formkit.core.element import Element
from formkit.core.upload import upload_error_code
from formkit.utils.logger import get_logger
from formkit.validation.errors import (
    Bound,
    ConfigurationError,
    ControlError,
    InputTypeError,
    LengthError,
    MatchError,
    PatternError,
    RangeError,
    RequiredError,
    UploadError,
)
from formkit.validation.messages import parse
from formkit.validation.types import (
    InputType,
    compare,
    get_type_validator,
    loose_equals,
)

if TYPE_CHECKING:
    from formkit.forms.control import Input

logger = get_logger("formkit.validation")


def get_validation_option(control: Element, name: str) -> Any:
    """
    An option, or the HTML attribute with the same name as fallback.

    Example:
        Input(name="code", attrs={"maxlength": 6})
        get_validation_option(control, "maxlength")  # 6
    """
    value = control.get_option(name)
    return value if value is not None else control.get_attr(name)


def is_enabled(constraint: Any) -> bool:
    """None and False mean "no constraint"; 0 or "" are constraints."""
    return constraint is not None and constraint is not False


def error_message(control: Element, rule: str) -> Optional[str]:
    """The ``error:<rule>`` option with placeholders resolved."""
    return parse(control.get_option(f"error:{rule}"), control)


class Rule(ABC):
    """
    A validation rule.

    Implement ``validate`` to create a custom rule; return None when the
    value is acceptable.

    Example:
        class NoSpaces(Rule):
            name = "nospaces"

            def validate(self, control, value):
                if " " in str(value):
                    return ControlError(self.name, error_message(control, self.name))
                return None
    """

    name: str = "invalid"

    # Empty values skip every rule that does not clear this flag
    skip_empty: bool = True

    @abstractmethod
    def validate(self, control: "Input", value: Any) -> Optional[ControlError]:
        """
        Check the value of a control.

        Args:
            control: Control being validated
            value: Its current (projected) value

        Returns:
            The error, or None if the rule passes
        """
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class RequiredRule(Rule):
    """Require a non-empty value when ``required`` is set."""

    name = "required"
    skip_empty = False

    def validate(self, control: "Input", value: Any) -> Optional[ControlError]:
        if get_validation_option(control, "required") and control.is_empty(value):
            return RequiredError(message=error_message(control, self.name))
        return None


class UploadRule(Rule):
    """Report the transport error of a file upload."""

    name = "upload"

    def validate(self, control: "Input", value: Any) -> Optional[ControlError]:
        if control.type is not InputType.FILE:
            return None

        code = upload_error_code(value)
        if code is None:
            return None

        messages = control.get_option("error:upload")
        message = None
        if isinstance(messages, Mapping):
            message = messages.get(code, messages.get(str(code)))

        return UploadError(code=code, message=parse(message, control))


class TypeRule(Rule):
    """Check the value against the control's input type."""

    name = "type"

    def validate(self, control: "Input", value: Any) -> Optional[ControlError]:
        validator = get_type_validator(control.type)
        if validator is None or validator(value):
            return None

        # A broken upload is reported by the upload rule
        if control.type is InputType.FILE:
            return None

        return InputTypeError(message=error_message(control, self.name))


class RangeRule(Rule):
    """Ordinal bounds; dates compare by their ISO-8601 form."""

    name = "range"

    def validate(self, control: "Input", value: Any) -> Optional[ControlError]:
        minimum = get_validation_option(control, "min")
        if is_enabled(minimum) and compare(value, minimum) < 0:
            return RangeError(
                rule="min", bound=Bound.MIN, message=error_message(control, "min")
            )

        maximum = get_validation_option(control, "max")
        if is_enabled(maximum) and compare(value, maximum) > 0:
            return RangeError(
                rule="max", bound=Bound.MAX, message=error_message(control, "max")
            )

        return None


def _as_length(control: Element, name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        error = ConfigurationError(
            f"Option '{name}' of '{control.name}' must be an integer, got {value!r}"
        )
        logger.error("Invalid length option", exception=error, control=control.name)
        raise error from None


class LengthRule(Rule):
    """Character length between ``minlength`` and ``maxlength``."""

    name = "length"

    def validate(self, control: "Input", value: Any) -> Optional[ControlError]:
        length = len(str(value))

        minlength = get_validation_option(control, "minlength")
        if is_enabled(minlength) and length < _as_length(control, "minlength", minlength):
            return LengthError(
                rule="minlength",
                bound=Bound.MIN,
                message=error_message(control, "minlength"),
            )

        maxlength = get_validation_option(control, "maxlength")
        if is_enabled(maxlength) and length > _as_length(control, "maxlength", maxlength):
            return LengthError(
                rule="maxlength",
                bound=Bound.MAX,
                message=error_message(control, "maxlength"),
            )

        return None


@lru_cache(maxsize=256)
def _compile(pattern: str) -> Pattern:
    return re.compile(pattern)


def compile_pattern(control: Element, pattern: Union[str, Pattern]) -> Pattern:
    """Compile a ``pattern`` option; a broken expression is a setup error."""
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return _compile(str(pattern))
    except re.error as e:
        error = ConfigurationError(
            f"Invalid pattern {pattern!r} for '{control.name}': {e}"
        )
        logger.error("Invalid pattern option", exception=error, control=control.name)
        raise error from e


class PatternRule(Rule):
    """The value must contain a match for ``pattern`` (not anchored)."""

    name = "pattern"

    def validate(self, control: "Input", value: Any) -> Optional[ControlError]:
        pattern = get_validation_option(control, "pattern")
        if not pattern:
            return None

        if compile_pattern(control, pattern).search(str(value)) is None:
            return PatternError(message=error_message(control, self.name))
        return None


def resolve_match_target(control: Element, other: Any) -> Element:
    """
    The element a ``match`` option refers to.

    Raises:
        ConfigurationError: The name is unknown or the control has no form
    """
    if isinstance(other, Element):
        return other

    form = control.get_form()
    if form is None:
        error = ConfigurationError(
            f"Can't match '{control.name}' against '{other}': control is not part of a form"
        )
        logger.error("Unresolvable match target", exception=error, control=control.name)
        raise error

    return form.get_element(str(other))


class MatchRule(Rule):
    """The value must (loosely) equal the value of another control."""

    name = "match"

    def validate(self, control: "Input", value: Any) -> Optional[ControlError]:
        other = get_validation_option(control, "match")
        if other is None or other is False or other == "":
            return None

        target = resolve_match_target(control, other)
        if not loose_equals(value, target.get_value()):
            return MatchError(other=target, message=error_message(control, self.name))
        return None


DEFAULT_RULES = (
    RequiredRule,
    UploadRule,
    TypeRule,
    RangeRule,
    LengthRule,
    PatternRule,
    MatchRule,
)

"""
Formkit Input Types
===================

HTML5 input types and the value check belonging to each of them.

Each check is a pure function of the (non-empty) control value. The
``TYPE_VALIDATORS`` mapping ties a type to its check; a type without an
entry has no type-specific rule.

Also home of the comparison helpers shared by the validation rules:
``loose_equals`` for ``match``/radio comparisons and ``compare`` for
``min``/``max`` bounds.
"""

from __future__ import annotations

import re
import string
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Callable, Dict, Optional


class InputType(str, Enum):
    """HTML5 ``<input>`` types."""

    TEXT = "text"
    PASSWORD = "password"
    SEARCH = "search"
    TEL = "tel"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    FILE = "file"
    NUMBER = "number"
    DATE = "date"
    DATETIME = "datetime"
    DATETIME_LOCAL = "datetime-local"
    TIME = "time"
    MONTH = "month"
    WEEK = "week"
    URL = "url"
    EMAIL = "email"
    COLOR = "color"
    RANGE = "range"
    HIDDEN = "hidden"
    BUTTON = "button"
    SUBMIT = "submit"
    RESET = "reset"
    IMAGE = "image"

    def __str__(self) -> str:
        return self.value


TypeValidator = Callable[[Any], bool]

_DIGITS = re.compile(r"[0-9]+")
_NUMERIC = re.compile(r"\s*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*")
_EMAIL = re.compile(r"^[\w.-]+@[\w.-]+\w+\Z", re.ASCII)
_WEEK = re.compile(r"([0-9]{4})-W([0-9]{2})")


def is_numeric(value: Any) -> bool:
    """True for ints, floats and numeric strings (sign, decimals, exponent)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return _NUMERIC.fullmatch(value) is not None
    return False


def _parses(value: Any, format: str) -> bool:
    if not isinstance(value, str):
        return False
    try:
        datetime.strptime(value, format)
        return True
    except ValueError:
        return False


def validate_color(value: Any) -> bool:
    """``#rrggbb``"""
    value = str(value)
    return (
        len(value) == 7
        and value[0] == "#"
        and all(char in string.hexdigits for char in value[1:])
    )


def validate_number(value: Any) -> bool:
    """An integer or a string of digits."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return _DIGITS.fullmatch(str(value)) is not None


def validate_range(value: Any) -> bool:
    return is_numeric(value)


def validate_date(value: Any) -> bool:
    return _parses(value, "%Y-%m-%d")


def validate_datetime(value: Any) -> bool:
    return _parses(value, "%Y-%m-%dT%H:%M:%S")


def validate_datetime_local(value: Any) -> bool:
    """RFC 3339, e.g. ``2024-05-01T12:30:00+02:00``."""
    return _parses(value, "%Y-%m-%dT%H:%M:%S%z")


def validate_time(value: Any) -> bool:
    return _parses(value, "%H:%M:%S")


def validate_month(value: Any) -> bool:
    return _parses(value, "%Y-%m")


def validate_week(value: Any) -> bool:
    """ISO week, e.g. ``2024-W09``. Week 53 only exists in some years."""
    if not isinstance(value, str):
        return False
    match = _WEEK.fullmatch(value)
    if not match:
        return False
    try:
        date.fromisocalendar(int(match.group(1)), int(match.group(2)), 1)
        return True
    except ValueError:
        return False


def validate_url(value: Any) -> bool:
    """Only sniffs for an alphabetic scheme followed by a colon."""
    value = str(value)
    scheme, colon, _ = value.partition(":")
    return bool(colon) and scheme.isascii() and scheme.isalpha()


def validate_email(value: Any) -> bool:
    return _EMAIL.match(str(value)) is not None


TYPE_VALIDATORS: Dict[InputType, TypeValidator] = {
    InputType.COLOR: validate_color,
    InputType.NUMBER: validate_number,
    InputType.RANGE: validate_range,
    InputType.DATE: validate_date,
    InputType.DATETIME: validate_datetime,
    InputType.DATETIME_LOCAL: validate_datetime_local,
    InputType.TIME: validate_time,
    InputType.MONTH: validate_month,
    InputType.WEEK: validate_week,
    InputType.URL: validate_url,
    InputType.EMAIL: validate_email,
}


def get_type_validator(type: InputType) -> Optional[TypeValidator]:
    return TYPE_VALIDATORS.get(type)


def truthy(value: Any) -> bool:
    """Truthiness of submitted data: "0" and "" are false."""
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


def loose_equals(a: Any, b: Any) -> bool:
    """
    Compare two form values the way submitted data compares.

    Rules, in order:
    - None equals any empty value (None, "", False, 0, empty list)
    - a bool compares against the truthiness of the other side ("0" is false)
    - numbers and numeric strings compare numerically
    - a number and a non-numeric string compare as strings
    - anything else uses ``==``

    Example:
        loose_equals("5", 5)      # True
        loose_equals("abc", 0)    # False
        loose_equals(None, "")    # True
        loose_equals(True, "on")  # True
    """
    if a is None or b is None:
        other = b if a is None else a
        return not other

    if isinstance(a, bool) or isinstance(b, bool):
        return truthy(a) == truthy(b)

    a_str, b_str = isinstance(a, str), isinstance(b, str)

    if a_str and b_str:
        if is_numeric(a) and is_numeric(b):
            return float(a) == float(b)
        return a == b

    if a_str or b_str:
        text, other = (a, b) if a_str else (b, a)
        if isinstance(other, (int, float)):
            if is_numeric(text):
                return float(text) == float(other)
            return text == str(other)

    return a == b


def sortable(value: Any) -> Any:
    """Dates and times as ISO-8601 strings, which sort chronologically."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value


def compare(value: Any, bound: Any) -> int:
    """
    Order ``value`` against ``bound``: -1, 0 or 1.

    Numeric when both sides are numeric, otherwise as strings.
    """
    value, bound = sortable(value), sortable(bound)

    if is_numeric(value) and is_numeric(bound):
        left: Any = float(value)
        right: Any = float(bound)
    else:
        left, right = str(value), str(bound)

    return (left > right) - (left < right)

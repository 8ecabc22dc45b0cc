"""
Formkit Validation Errors
=========================

Two kinds of errors live here.

Control errors describe why a value was rejected. They are plain values
recorded on the control by a validation pass and shown next to the input;
they are never raised.

Exceptions (``FormkitError`` and subclasses) signal a broken setup, such
as a ``match`` option naming an element the form does not have.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from formkit.forms.control import Input


class Bound(str, Enum):
    """Which side of a range or length constraint was violated."""

    MIN = "min"
    MAX = "max"


@dataclass
class ControlError:
    """
    A failed validation rule.

    Attributes:
        rule: Rule name, also the suffix of the ``error:<rule>`` option
        message: Resolved user-facing message (None if not configured)
    """

    rule: str = "invalid"
    message: Optional[str] = None

    def __str__(self) -> str:
        return self.message or ""


@dataclass
class RequiredError(ControlError):
    rule: str = "required"


@dataclass
class UploadError(ControlError):
    """The upload payload reported a transport error code."""

    rule: str = "upload"
    code: int = 0


@dataclass
class InputTypeError(ControlError):
    """Value does not fit the input type (email, date, color, ...)."""

    rule: str = "type"


@dataclass
class RangeError(ControlError):
    rule: str = "min"
    bound: Bound = Bound.MIN


@dataclass
class LengthError(ControlError):
    rule: str = "minlength"
    bound: Bound = Bound.MIN


@dataclass
class PatternError(ControlError):
    rule: str = "pattern"


@dataclass
class MatchError(ControlError):
    """Value differs from the control named by the ``match`` option."""

    rule: str = "match"
    other: Optional["Input"] = None


class FormkitError(Exception):
    """Base class for formkit exceptions."""


class ConfigurationError(FormkitError):
    """
    Controls or forms are set up inconsistently.

    Raised at lookup time, e.g. for an unknown element name or an
    invalid ``pattern`` option.
    """


class ValidationFailed(FormkitError):
    """
    Validation failed exception.

    Only raised on explicit request (``Form.validate_or_fail``).
    Contains the error of every invalid control.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[Dict[str, ControlError]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or {}

    def __str__(self) -> str:
        if self.errors:
            lines = [
                f"  - {name}: {error.message or error.rule}"
                for name, error in self.errors.items()
            ]
            return "Validation failed:\n" + "\n".join(lines)
        return "Validation failed"

    def first(self, name: Optional[str] = None) -> Optional[ControlError]:
        """Get the error of a control, or the first one."""
        if name:
            return self.errors.get(name)
        for error in self.errors.values():
            return error
        return None

"""
Formkit Validation System
=========================

Validation engine for form controls.

Features:
- Ordered rule pipeline (required, upload, type, range, length,
  pattern, match), first failure wins
- Per input-type value checks
- Error messages with ``{{placeholder}}`` resolution
- Client-side validation script generation
"""

from formkit.validation.errors import (
    Bound,
    ConfigurationError,
    ControlError,
    FormkitError,
    InputTypeError,
    LengthError,
    MatchError,
    PatternError,
    RangeError,
    RequiredError,
    UploadError,
    ValidationFailed,
)
from formkit.validation.types import (
    InputType,
    TYPE_VALIDATORS,
    compare,
    loose_equals,
)
from formkit.validation.rules import (
    Rule,
    RequiredRule,
    UploadRule,
    TypeRule,
    RangeRule,
    LengthRule,
    PatternRule,
    MatchRule,
    get_validation_option,
)
from formkit.validation.messages import parse, parse_for_script
from formkit.validation.validator import (
    Validator,
    ValidationResult,
    validate,
    validate_or_fail,
)
from formkit.validation.script import (
    ScriptRules,
    get_validation_script,
)

__all__ = [
    # Errors
    "Bound",
    "ConfigurationError",
    "ControlError",
    "FormkitError",
    "InputTypeError",
    "LengthError",
    "MatchError",
    "PatternError",
    "RangeError",
    "RequiredError",
    "UploadError",
    "ValidationFailed",
    # Types
    "InputType",
    "TYPE_VALIDATORS",
    "compare",
    "loose_equals",
    # Rules
    "Rule",
    "RequiredRule",
    "UploadRule",
    "TypeRule",
    "RangeRule",
    "LengthRule",
    "PatternRule",
    "MatchRule",
    "get_validation_option",
    # Messages
    "parse",
    "parse_for_script",
    # Engine
    "Validator",
    "ValidationResult",
    "validate",
    "validate_or_fail",
    # Script
    "ScriptRules",
    "get_validation_script",
]

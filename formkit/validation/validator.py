"""
Formkit Validator
=================

Core validation engine.

Runs the rule pipeline against a single control. The first failing rule
wins: its error is recorded on the control and the remaining rules are
skipped. An empty value only goes through rules that opt in (``required``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Type

from formkit.utils.logger import get_logger
from formkit.validation.errors import ControlError, ValidationFailed
from formkit.validation.rules import DEFAULT_RULES, Rule

if TYPE_CHECKING:
    from formkit.forms.control import Input

logger = get_logger("formkit.validation")


@dataclass
class ValidationResult:
    """
    Result of validating one or more controls.

    Contains the values of the valid controls and the error of every
    invalid one.
    """

    valid: bool
    data: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, ControlError] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.valid

    def failed(self) -> bool:
        return not self.valid

    def has_error(self, name: str) -> bool:
        return name in self.errors

    def get_error(self, name: str) -> Optional[ControlError]:
        return self.errors.get(name)

    def first_error(self) -> Optional[ControlError]:
        for error in self.errors.values():
            return error
        return None

    def messages(self) -> Dict[str, Optional[str]]:
        """Error messages per control name."""
        return {name: error.message for name, error in self.errors.items()}

    def raise_if_invalid(self) -> None:
        """Raise ValidationFailed if invalid."""
        if not self.valid:
            raise ValidationFailed(errors=self.errors)


class Validator:
    """
    Rule pipeline for controls.

    Example:
        validator = Validator()

        if not validator.validate(control):
            print(control.error.message)

        # Custom pipeline
        validator = Validator([RequiredRule(), NoSpaces()])
    """

    def __init__(self, rules: Optional[Iterable[Rule]] = None) -> None:
        """
        Initialize validator.

        Args:
            rules: Rules in execution order (the standard pipeline by default)
        """
        if rules is None:
            rules = [rule_class() for rule_class in DEFAULT_RULES]
        self.rules: List[Rule] = list(rules)

    def add_rule(self, rule: Rule) -> "Validator":
        """Append a rule; it runs after all existing rules."""
        self.rules.append(rule)
        return self

    def remove_rule(self, rule_class: Type[Rule]) -> "Validator":
        self.rules = [r for r in self.rules if not isinstance(r, rule_class)]
        return self

    def check(self, control: "Input") -> Optional[ControlError]:
        """
        Run the pipeline without touching the control.

        Returns:
            The first error, or None if the value is acceptable
        """
        if not control.get_option("basic-validation"):
            return None

        value = control.get_value()
        empty = control.is_empty(value)

        for rule in self.rules:
            if empty and rule.skip_empty:
                continue

            error = rule.validate(control, value)
            if error is not None:
                logger.debug(
                    "Validation failed",
                    control=control.name,
                    type=str(control.type),
                    rule=error.rule,
                )
                return error

        return None

    def validate(self, control: "Input") -> bool:
        """
        Validate a control and record the outcome on it.

        Returns:
            True if valid; otherwise ``control.error`` holds the reason
        """
        error = self.check(control)
        control.error = error
        return error is None

    def validate_all(self, controls: Iterable["Input"]) -> ValidationResult:
        """Validate controls one after another."""
        data: Dict[str, Any] = {}
        errors: Dict[str, ControlError] = {}

        for control in controls:
            name = control.name or control.id
            if self.validate(control):
                data[name] = control.get_value()
            else:
                errors[name] = control.error

        return ValidationResult(valid=not errors, data=data, errors=errors)


# Shared default pipeline
_validator = Validator()


def get_validator() -> Validator:
    return _validator


def validate(control: "Input") -> bool:
    """
    Validate a control with the standard pipeline.

    Example:
        control = Input(name="email", type="email").set_value("a@b")
        validate(control)        # False
        control.error.rule       # "type"
    """
    return _validator.validate(control)


def validate_or_fail(control: "Input") -> Any:
    """
    Validate a control and raise on failure.

    Returns the control value if valid.
    Raises ValidationFailed otherwise.
    """
    if not validate(control):
        raise ValidationFailed(errors={control.name or control.id: control.error})
    return control.get_value()

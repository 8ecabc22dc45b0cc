"""
Formkit Input Control
=====================

Representation of an ``<input>`` element: its type, attributes, options
and bound value.

Features:
- Type dependent value handling (checkbox, radio, file)
- Option lookup with type defaults
- Server-side validation through the rule pipeline
- Client-side validation script
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Set, Union

from formkit.core.element import Element
from formkit.validation.errors import ConfigurationError, ControlError
from formkit.validation.rules import get_validation_option
from formkit.validation.script import ScriptRuleContributor, get_validation_script
from formkit.validation.types import InputType, loose_equals, truthy
from formkit.validation.validator import get_validator


# Types whose placeholder is not derived from the description
NO_PLACEHOLDER = {
    InputType.HIDDEN,
    InputType.BUTTON,
    InputType.SUBMIT,
    InputType.RESET,
    InputType.CHECKBOX,
    InputType.RADIO,
    InputType.FILE,
}

BUTTON_TYPES = {InputType.BUTTON, InputType.SUBMIT, InputType.RESET}

TYPE_OPTION_DEFAULTS: Dict[InputType, Dict[str, Any]] = {
    InputType.HIDDEN: {"label": False, "container": False},
    InputType.CHECKBOX: {"label": "inside"},
    InputType.RADIO: {"label": "inside"},
    InputType.BUTTON: {"label": False},
    InputType.SUBMIT: {"label": False},
    InputType.RESET: {"label": False},
}


def _option_name(key: str) -> str:
    return key.replace("_", "-")


class Input(Element):
    """
    An ``<input>`` control.

    Keyword options use underscores for hyphens (``validation_script``
    sets ``validation-script``). Error messages go in ``errors``, keyed
    by rule name.

    Example:
        password = Input("password", type="password", required=True, minlength=8)
        confirm = Input(
            "confirm",
            type="password",
            match="password",
            errors={"match": "Passwords don't match"},
        )

        password.set_value("secret")
        password.validate()      # False
        password.error.rule      # "minlength"
    """

    def __init__(
        self,
        name: Optional[str] = None,
        type: Union[InputType, str, None] = None,
        value: Any = None,
        *,
        options: Optional[Dict[str, Any]] = None,
        attrs: Optional[Dict[str, Any]] = None,
        errors: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        options = dict(options or {})
        for key, option in kwargs.items():
            options[_option_name(key)] = option
        for rule, message in (errors or {}).items():
            options[f"error:{rule}"] = message

        attrs = dict(attrs or {})
        if name is not None:
            attrs["name"] = name
        if value is not None:
            attrs["value"] = value

        try:
            attrs["type"] = InputType(type if type is not None else attrs.get("type", "text"))
        except ValueError:
            raise ConfigurationError(f"Unknown input type {type!r}") from None

        super().__init__(options, attrs)

        self.upload: Any = None
        self.error: Optional[ControlError] = None
        self.script_rule_contributors: List[ScriptRuleContributor] = []

        # Attributes computed on read; recreated for each copy
        self._bound: Set[str] = set()
        self._bind_defaults()

    def _bind_defaults(self) -> None:
        input_type = self.type

        if input_type is InputType.CHECKBOX and self.attrs.get("value") is None:
            self.attrs["value"] = 1

        if input_type in BUTTON_TYPES and self.attrs.get("value") is None:
            self._bind("value", lambda: self.description)

        if input_type not in NO_PLACEHOLDER and self.attrs.get("placeholder") is None:
            self._bind(
                "placeholder",
                lambda: None if self.get_option("label") else self.description,
            )

    def _bind(self, name: str, callback: Callable[[], Any]) -> None:
        self.attrs[name] = callback
        self._bound.add(name)

    @property
    def type(self) -> InputType:
        """HTML5 input type."""
        return self.attrs["type"]

    # Value

    def get_value(self) -> Any:
        """
        Current value.

        File inputs return the upload descriptor; an unchecked checkbox or
        radio returns False. A value bound to another element resolves to
        that element's value.
        """
        if self.type is InputType.FILE:
            return self.upload

        value = self.get_attr("value")
        if isinstance(value, Element):
            value = value.get_value()

        if self.type in (InputType.CHECKBOX, InputType.RADIO) and not self.attrs.get("checked"):
            value = False

        return value

    def set_value(self, value: Any) -> "Input":
        """
        Set the value.

        A checkbox is checked by any truthy value and keeps a non-boolean
        value as its ``value`` attribute. A radio is checked when the value
        equals its own ``value``.
        """
        input_type = self.type

        if input_type is InputType.FILE:
            self.upload = value
        elif input_type is InputType.CHECKBOX:
            checked = truthy(value)
            self.attrs["checked"] = checked
            if checked and not isinstance(value, bool):
                self.attrs["value"] = value
                self._bound.discard("value")
        elif input_type is InputType.RADIO:
            self.attrs["checked"] = loose_equals(value, self.get_attr("value"))
        else:
            self.attrs["value"] = value
            self._bound.discard("value")

        if self._form is not None:
            self._form.invalidate()
        return self

    def is_empty(self, value: Any) -> bool:
        """None and "" are empty, as is an unchecked checkbox or radio."""
        # An unchecked box has no submitted value, so a required one fails
        if value is None or (isinstance(value, str) and value == ""):
            return True
        return value is False and self.type in (InputType.CHECKBOX, InputType.RADIO)

    # Options

    def option_defaults(self) -> Dict[str, Any]:
        return TYPE_OPTION_DEFAULTS.get(self.type, {})

    def get_validation_option(self, name: str) -> Any:
        """Option with the HTML attribute as fallback."""
        return get_validation_option(self, name)

    # Validation

    def validate(self) -> bool:
        """
        Validate the current value; the reason of a failure is in ``error``.

        Uses the pipeline of the owning form, the standard one otherwise.
        """
        form = self.get_form()
        validator = form.validator if form is not None else get_validator()
        return validator.validate(self)

    def is_valid(self) -> bool:
        return self.validate()

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None

    def add_script_rule(self, contributor: ScriptRuleContributor) -> "Input":
        """Register a callback that adds or replaces client-side rules."""
        self.script_rule_contributors.append(contributor)
        return self

    def get_validation_script(self) -> Optional[str]:
        """Client-side validation script, or None if not enabled."""
        return get_validation_script(self)

    def clone(self) -> "Input":
        """Copy with fresh state: no error, no upload, own bound attributes."""
        attrs = {k: v for k, v in self.attrs.items() if k not in self._bound}
        copy = type(self)(options=dict(self.options), attrs=attrs)
        copy._decorators = list(self._decorators)
        copy.script_rule_contributors = list(self.script_rule_contributors)
        return copy

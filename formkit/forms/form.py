"""
Formkit Forms
=============

Forms group named controls.

Features:
- Declarative form classes
- Element registry used by ``match`` and placeholders
- Data binding
- Sequential validation of every control
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterator, List, Optional

from formkit.core.element import Element
from formkit.forms.control import Input
from formkit.forms.decorator import Decorator
from formkit.utils.logger import get_logger
from formkit.validation.errors import ConfigurationError, ControlError
from formkit.validation.validator import ValidationResult, get_validator

logger = get_logger("formkit.forms")


class FormMeta(type):
    """Metaclass for Form to collect declared controls."""

    def __new__(
        mcs,
        name: str,
        bases: tuple,
        namespace: dict,
    ) -> FormMeta:
        declared: Dict[str, Input] = {}

        # Controls from base classes
        for base in bases:
            if hasattr(base, "_declared"):
                declared.update(base._declared)

        # Controls from current class
        for key, value in list(namespace.items()):
            if isinstance(value, Input):
                if value.name is None:
                    value.set_attr("name", key)
                declared[key] = value
                del namespace[key]

        namespace["_declared"] = declared

        return super().__new__(mcs, name, bases, namespace)


def _form_id(class_name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "-", class_name).lower()


class Form(metaclass=FormMeta):
    """
    Base form class.

    Declare controls as class attributes; every form instance works on
    its own copies.

    Example:
        class SignupForm(Form):
            email = Input(type="email", required=True)
            password = Input(type="password", required=True, minlength=8)
            confirm = Input(type="password", match="password")

        form = SignupForm({"email": "jane@example.com", "password": "..."})

        if form.validate():
            save(form.data)
        else:
            show(form.messages)
    """

    _declared: Dict[str, Input]

    def __init__(
        self,
        data: Optional[Dict[str, Any]] = None,
        *,
        id: Optional[str] = None,
        decorators: Optional[List[Decorator]] = None,
        validator: Any = None,
    ) -> None:
        """
        Initialize form.

        Args:
            data: Initial values to bind
            id: Form id, prefix of generated element ids
            decorators: Decorators applied to every element
            validator: Validator to use (the standard pipeline by default)
        """
        self.id = id or _form_id(type(self).__name__)
        self.elements: Dict[str, Element] = {}
        self._decorators: List[Decorator] = list(decorators or [])
        self._validator = validator or get_validator()
        self._result: Optional[ValidationResult] = None

        for name, control in self._declared.items():
            self.add(control.clone(), name)

        if data:
            self.bind(data)

    # Registry

    def add(self, element: Element, name: Optional[str] = None) -> Element:
        """Add an element; it is registered under ``name`` or its own name."""
        name = name or element.name
        if not name:
            raise ConfigurationError(f"Can't add {element!r} to {self.id}: element has no name")

        if element.name is None:
            element.set_attr("name", name)

        element.set_form(self)
        self.elements[name] = element
        self._result = None
        return element

    def find_element(self, name: str) -> Optional[Element]:
        return self.elements.get(name)

    def get_element(self, name: str) -> Element:
        """
        Get an element by name.

        Raises:
            ConfigurationError: No element with that name
        """
        element = self.elements.get(name)
        if element is None:
            error = ConfigurationError(f"Form '{self.id}' has no element '{name}'")
            logger.error("Unknown element", exception=error, form=self.id, element=name)
            raise error
        return element

    @property
    def validator(self) -> Any:
        """Pipeline used by the form and its controls."""
        return self._validator

    def get_decorators(self) -> List[Decorator]:
        return self._decorators

    def add_decorator(self, decorator: Decorator) -> Form:
        self._decorators.append(decorator)
        return self

    # Data

    def bind(self, data: Dict[str, Any]) -> Form:
        """
        Bind values to the controls with matching names.

        Returns:
            Self for chaining
        """
        for name, value in data.items():
            element = self.elements.get(name)
            if isinstance(element, Input):
                element.set_value(value)

        self._result = None
        return self

    @property
    def data(self) -> Dict[str, Any]:
        """Current values of all elements."""
        return {name: element.get_value() for name, element in self.elements.items()}

    def controls(self) -> List[Input]:
        return [e for e in self.elements.values() if isinstance(e, Input)]

    # Validation

    def validate(self) -> bool:
        """
        Validate every control, in declaration order.

        Returns:
            True if all controls are valid
        """
        self._result = self._validator.validate_all(self.controls())

        if not self._result.valid:
            logger.debug(
                "Form validation failed",
                form=self.id,
                invalid=",".join(self._result.errors),
            )

        return self._result.valid

    def invalidate(self) -> None:
        """Forget the last result; called when a control value changes."""
        self._result = None

    def validate_or_fail(self) -> Dict[str, Any]:
        """
        Validate and raise on failure.

        Returns the form data if valid.
        Raises ValidationFailed otherwise.
        """
        self.validate()
        self._result.raise_if_invalid()
        return self.data

    @property
    def is_valid(self) -> bool:
        """Check if form is valid (validates if needed)."""
        if self._result is None:
            return self.validate()
        return self._result.valid

    @property
    def errors(self) -> Dict[str, ControlError]:
        return dict(self._result.errors) if self._result else {}

    @property
    def messages(self) -> Dict[str, Optional[str]]:
        return self._result.messages() if self._result else {}

    def get_error(self, name: str) -> Optional[ControlError]:
        return self.errors.get(name)

    def get_validation_scripts(self) -> str:
        """Validation scripts of all controls that have one."""
        scripts = [control.get_validation_script() for control in self.controls()]
        return "\n".join(script for script in scripts if script)

    def __getitem__(self, name: str) -> Element:
        return self.get_element(name)

    def __contains__(self, name: str) -> bool:
        return name in self.elements

    def __iter__(self) -> Iterator[Element]:
        return iter(self.elements.values())

    def __len__(self) -> int:
        return len(self.elements)

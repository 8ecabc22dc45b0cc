"""
Formkit Element
===============

Base class of every form element: options, HTML attributes, the owning
form and decorators. ``Input`` builds the value semantics on top.

Options configure behaviour (``required``, ``error:match``, ...) and fall
back to type defaults and then to the ``options`` configuration section.
Attributes are what ends up in the markup; an attribute value may be a
callable that is evaluated on every read.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from formkit.core.config import get_config

if TYPE_CHECKING:
    from formkit.forms.decorator import Decorator
    from formkit.forms.form import Form


_ID_CHARS = re.compile(r"[^\w-]+")


class Element(ABC):
    """
    Abstract form element.

    Example:
        class Static(Element):
            def get_value(self):
                return "fixed"
    """

    def __init__(
        self,
        options: Optional[Dict[str, Any]] = None,
        attrs: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.options: Dict[str, Any] = dict(options or {})
        self.attrs: Dict[str, Any] = dict(attrs or {})
        self._form: Optional[Form] = None
        self._decorators: List[Decorator] = list(self.options.pop("decorators", []))

    @abstractmethod
    def get_value(self) -> Any:
        """Current value of the element."""
        ...

    # Options

    def option_defaults(self) -> Dict[str, Any]:
        """Defaults that apply to this element before global configuration."""
        return {}

    def get_option(self, name: str) -> Any:
        """
        Get an option.

        Lookup order: explicit option, element defaults, configured
        ``options.<name>``. Returns None when nothing sets it.
        """
        if name in self.options:
            return self.options[name]

        defaults = self.option_defaults()
        if name in defaults:
            return defaults[name]

        return get_config().get(f"options.{name}")

    def get_options(self) -> Dict[str, Any]:
        """All options, explicit ones over element defaults."""
        return {**self.option_defaults(), **self.options}

    def set_option(self, name: str, value: Any) -> "Element":
        self.options[name] = value
        return self

    # Attributes

    def get_attr(self, name: str) -> Any:
        """Get an HTML attribute; bound callables are evaluated."""
        value = self.attrs.get(name)
        if callable(value):
            value = value()
        return value

    def has_attr(self, name: str) -> bool:
        return self.get_attr(name) is not None

    def set_attr(self, name: str, value: Any) -> "Element":
        self.attrs[name] = value
        return self

    # Identity

    @property
    def name(self) -> Optional[str]:
        return self.get_attr("name") or self.options.get("name")

    @property
    def id(self) -> str:
        """
        Element id.

        Uses the ``id`` attribute or option; otherwise derived from the
        form id and the element name.
        """
        explicit = self.attrs.get("id") or self.options.get("id")
        if explicit:
            return str(explicit)

        name = _ID_CHARS.sub("-", str(self.name or "element")).strip("-")
        form_id = self._form.id if self._form is not None else None
        return f"{form_id}-{name}" if form_id else f"input-{name}"

    @property
    def description(self) -> str:
        """Human readable description, used for labels and messages."""
        description = self.options.get("description")
        if description:
            return str(description)
        return str(self.name or "").replace("_", " ").replace("-", " ").capitalize()

    # Form and decorators

    def get_form(self) -> Optional[Form]:
        return self._form

    def set_form(self, form: Optional[Form]) -> "Element":
        self._form = form
        return self

    def get_decorators(self) -> List[Decorator]:
        """Decorators of this element, followed by those of the form."""
        decorators = list(self._decorators)
        if self._form is not None:
            decorators.extend(
                d for d in self._form.get_decorators() if d not in decorators
            )
        return decorators

    def add_decorator(self, decorator: Decorator) -> "Element":
        self._decorators.append(decorator)
        return self

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"


"""
Formkit Decorators
==================

Decorators wrap elements to add behaviour without subclassing. The
validation script consults them: each one may add or replace client-side
rules before the script is assembled.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from formkit.core.element import Element
    from formkit.validation.script import ScriptRules


class Decorator:
    """
    Base decorator; the default hook leaves the rules untouched.

    Example:
        class Digits(Decorator):
            def apply_to_validation_script(self, element, rules):
                rules["pattern"] = "/^[0-9]*$/.test(this.value)"
                return rules
    """

    def apply_to_validation_script(
        self,
        element: "Element",
        rules: "ScriptRules",
    ) -> Optional["ScriptRules"]:
        """
        Update the client-side rules of an element.

        Args:
            element: Element the script is generated for
            rules: Rule name -> JavaScript condition, in execution order

        Returns:
            The updated rules
        """
        return rules


class ScriptRule(Decorator):
    """
    Decorator that sets a single client-side rule.

    The message is the element's ``error:<name>`` option.

    Example:
        Input("zip", decorators=[ScriptRule("pattern", "/^[0-9]{4}$/.test(this.value)")])
    """

    def __init__(self, name: str, condition: str) -> None:
        self.name = name
        self.condition = condition

    def apply_to_validation_script(
        self,
        element: "Element",
        rules: "ScriptRules",
    ) -> "ScriptRules":
        rules[self.name] = self.condition
        return rules

    def __repr__(self) -> str:
        return f"<ScriptRule {self.name}>"

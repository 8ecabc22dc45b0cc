"""
Formkit Validation Script
=========================

Client-side mirror of the validation rules.

A subset of the rules can be expressed in the browser. For each of them a
JavaScript condition is built; rule contributors (decorators and
callbacks registered on the control) may then add or replace conditions.
The result is an ``input`` listener that sets a custom validity message
for the first failing condition.

Example output for ``minlength=5``:

    <script type="text/javascript">
        document.getElementById("input-name").addEventListener("input", function() {
            if (!(this.value.length >= 5)) {
                this.setCustomValidity("Please use 5 characters or more for this text");
                return;
            } else {
                this.setCustomValidity("");
            }
        });
    </script>
"""

from __future__ import annotations

import textwrap
from typing import Any, Callable, Dict, Iterable, List, Optional

from formkit.core.element import Element
from formkit.security.xss import escape_js, js_literal
from formkit.utils.logger import get_logger
from formkit.validation.messages import parse_for_script
from formkit.validation.rules import get_validation_option

logger = get_logger("formkit.validation")

# Rule name -> JavaScript condition, in execution order
ScriptRules = Dict[str, str]

ScriptRuleContributor = Callable[[Element, ScriptRules], Optional[ScriptRules]]
ScriptRuleBuilder = Callable[[Element], Optional[str]]


def minlength_condition(control: Element) -> Optional[str]:
    """``this.value.length >= N``; nothing for a zero or missing bound."""
    minlength = get_validation_option(control, "minlength")
    try:
        minlength = int(minlength)
    except (TypeError, ValueError):
        return None

    if minlength == 0:
        return None
    return f"this.value.length >= {minlength}"


def match_condition(control: Element) -> Optional[str]:
    """Compare with the live value of the other element."""
    other = get_validation_option(control, "match")
    if other is None or other is False or other == "":
        return None

    if not isinstance(other, Element):
        form = control.get_form()
        found = form.find_element(str(other)) if form is not None else None
        if found is None:
            return f"this.value == {js_literal(other)}"
        other = found

    return f'this.value == document.getElementById("{escape_js(other.id)}").value'


SCRIPT_RULES: Dict[str, ScriptRuleBuilder] = {
    "minlength": minlength_condition,
    "match": match_condition,
}


def get_validation_script_rules(control: Element) -> ScriptRules:
    """Conditions for the built-in client-side rules."""
    rules: ScriptRules = {}
    for name, builder in SCRIPT_RULES.items():
        condition = builder(control)
        if condition:
            rules[name] = condition
    return rules


def apply_contributors(
    control: Element,
    rules: ScriptRules,
    contributors: Iterable[ScriptRuleContributor],
) -> ScriptRules:
    """
    Let each contributor update the rules, in registration order.

    A contributor gets its own copy of the rules and returns the updated
    mapping. Returning None keeps the (possibly modified) copy.
    """
    for contributor in contributors:
        updated = dict(rules)
        result = contributor(control, updated)
        rules = dict(result) if result is not None else updated
    return rules


def get_contributors(control: Any) -> List[ScriptRuleContributor]:
    """Decorator hooks first, then callbacks registered on the control."""
    contributors: List[ScriptRuleContributor] = [
        decorator.apply_to_validation_script
        for decorator in control.get_decorators()
        if hasattr(decorator, "apply_to_validation_script")
    ]
    contributors.extend(getattr(control, "script_rule_contributors", []))
    return contributors


def _block(control: Element, name: str, condition: str) -> str:
    message = parse_for_script(control.get_option(f"error:{name}"), control)
    return (
        f"if (!({condition})) {{\n"
        f'    this.setCustomValidity("{message}");\n'
        f"    return;\n"
        f"}} else {{\n"
        f'    this.setCustomValidity("");\n'
        f"}}"
    )


def generate_validation_script(control: Element, rules: ScriptRules) -> str:
    """Wrap the rule blocks in an input listener for the control."""
    blocks = "\n".join(_block(control, name, condition) for name, condition in rules.items())
    body = textwrap.indent(blocks, " " * 8)
    element_id = escape_js(control.id)

    return (
        '<script type="text/javascript">\n'
        f'    document.getElementById("{element_id}").addEventListener("input", function() {{\n'
        + (body + "\n" if body else "")
        + "    });\n"
        "</script>"
    )


def get_validation_script(control: Element) -> Optional[str]:
    """
    Script performing client-side validation for a control.

    Returns None unless the ``validation-script`` option is enabled.
    """
    if not control.get_option("validation-script"):
        return None

    rules = get_validation_script_rules(control)
    rules = apply_contributors(control, rules, get_contributors(control))

    logger.debug(
        "Validation script generated",
        control=control.name,
        rules=",".join(rules),
    )
    return generate_validation_script(control, rules)

"""
Formkit Error Messages
======================

Resolution of ``{{token}}`` placeholders in error messages.

A token is looked up through a chain of resolvers; the first one that
finds it wins:

1. the synthetic tokens ``value`` and ``length`` (the live value, even
   though ``value`` is also an attribute)
2. an HTML attribute present on the control (``{{minlength}}``)
3. another control (``{{match}}`` or the name of a form element)
4. the option with that name

Messages are resolved twice: to static text for server-side errors
(``parse``), and to a JavaScript string body whose dynamic parts are
read at event time (``parse_for_script``).
"""

from __future__ import annotations

import re
from typing import Any, Callable, List, Optional

from formkit.core.element import Element
from formkit.security.xss import escape_js, js_literal

PLACEHOLDER = re.compile(r"\{\{\s*([^{}\s]+)\s*\}\}")

# Returned by a resolver that does not know the token
MISSING = object()

Resolver = Callable[[Element, str], Any]


def find_control(control: Element, token: str) -> Optional[Element]:
    """
    Another element a token refers to.

    The option named by the token may hold an element or an element name
    (``match``); otherwise the token itself may name a form element.
    """
    option = control.get_option(token)
    if isinstance(option, Element):
        return option

    form = control.get_form()
    if form is None:
        return None

    if isinstance(option, str) and option:
        found = form.find_element(option)
        if found is not None:
            return found

    found = form.find_element(token)
    return found if found is not control else None


def _resolve_attribute(control: Element, token: str) -> Any:
    value = control.get_attr(token)
    return MISSING if value is None else value


def _resolve_special(control: Element, token: str) -> Any:
    if token == "value":
        value = control.get_value()
        return "" if value is None or value is False else value
    if token == "length":
        value = control.get_value()
        return len(str(value)) if value not in (None, False) else 0
    return MISSING


def _resolve_control(control: Element, token: str) -> Any:
    other = find_control(control, token)
    return MISSING if other is None else other


def _resolve_option(control: Element, token: str) -> Any:
    value = control.get_option(token)
    return MISSING if value is None else value


RESOLVERS: List[Resolver] = [
    _resolve_special,
    _resolve_attribute,
    _resolve_control,
    _resolve_option,
]


def resolve_placeholder(control: Element, token: str) -> Any:
    """Value of a placeholder token, or None if nothing resolves it."""
    for resolver in RESOLVERS:
        value = resolver(control, token)
        if value is not MISSING:
            return value
    return None


def _as_text(value: Any) -> str:
    if isinstance(value, Element):
        return value.description
    if value is None or value is False:
        return ""
    if value is True:
        return "true"
    return str(value)


def parse(message: Optional[str], control: Element) -> Optional[str]:
    """
    Resolve placeholders to static text.

    Example:
        parse("Please use {{minlength}} characters or more", control)
        # "Please use 8 characters or more"
    """
    if message is None:
        return None

    return PLACEHOLDER.sub(
        lambda m: _as_text(resolve_placeholder(control, m.group(1))),
        str(message),
    )


def _concat(expression: str) -> str:
    return f'" + {expression} + "'


def resolve_placeholder_for_script(control: Element, token: str) -> str:
    """
    JavaScript expression for a placeholder, ready to splice into a
    double-quoted string body.
    """
    if token == "value":
        return _concat("this.value")
    if token == "length":
        return _concat("this.value.length")

    if control.has_attr(token):
        return _concat(f'this.getAttribute("{escape_js(token)}")')

    other = find_control(control, token)
    if other is not None:
        return _concat(f'document.getElementById("{escape_js(other.id)}").value')

    value = _resolve_option(control, token)
    if value is MISSING:
        return ""
    return _concat(js_literal(value))


def parse_for_script(message: Optional[str], control: Element) -> str:
    """
    Turn a message into the body of a JavaScript string literal.

    Literal text is escaped; placeholders become concatenations that are
    evaluated when the script runs.

    Example:
        parse_for_script("Must match {{value}}", control)
        # 'Must match " + this.value + "'
    """
    if not message:
        return ""

    message = str(message)
    parts: List[str] = []
    position = 0

    for match in PLACEHOLDER.finditer(message):
        parts.append(escape_js(message[position:match.start()]))
        parts.append(resolve_placeholder_for_script(control, match.group(1)))
        position = match.end()

    parts.append(escape_js(message[position:]))
    return "".join(parts)

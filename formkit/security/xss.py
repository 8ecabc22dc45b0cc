"""
Formkit Script Escaping
=======================

Context-aware encoding for values that end up inside generated
``<script>`` blocks:
- JavaScript string escaping
- JavaScript literals (JSON)
"""

from __future__ import annotations

from typing import Any

import orjson


_JS_REPLACEMENTS = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "<": "\\x3c",
    ">": "\\x3e",
    "&": "\\x26",
    "\u2028": "\\u2028",  # Line separator
    "\u2029": "\\u2029",  # Paragraph separator
}


def escape_js(text: Any) -> str:
    """
    Escape text for use inside a JavaScript string literal.

    The result never contains a raw quote, backslash or ``</``, so it is
    safe between double quotes inside a ``<script>`` element.

    Example:
        escape_js('say "hi"')  # 'say \\"hi\\"'
    """
    if text is None or text == "":
        return ""

    result = str(text)
    for char, escaped in _JS_REPLACEMENTS.items():
        result = result.replace(char, escaped)

    return result


def js_literal(value: Any) -> str:
    """
    Encode a Python value as a JavaScript literal.

    Strings, numbers, booleans, None, lists and dicts become their JSON
    form. Anything else is encoded as its string form.

    Example:
        js_literal("abc")  # '"abc"'
        js_literal(5)      # '5'
        js_literal(None)   # 'null'
    """
    encoded = orjson.dumps(value, default=str, option=orjson.OPT_NON_STR_KEYS).decode("utf-8")
    # orjson leaves these raw; they would end the script element
    return (
        encoded.replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


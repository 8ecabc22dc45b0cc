"""
Formkit Security Module
=======================

Escaping for values embedded in generated scripts.
"""

from formkit.security.xss import escape_js, js_literal

__all__ = [
    "escape_js",
    "js_literal",
]

"""
Formkit Core Module
===================

Building blocks shared by controls and the validation engine:
- Config: Configuration management
- Element: Base class for form elements (options, attributes, form)
"""

from formkit.core.config import Config, get_config, reset_config
from formkit.core.element import Element

__all__ = [
    "Config",
    "get_config",
    "reset_config",
    "Element",
]

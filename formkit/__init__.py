"""
Formkit - Form Controls with Server and Client Validation
=========================================================

Models HTML input controls, their attributes and bound values, and the
rules that decide whether a value is acceptable.

Features:
---------
- Input controls for every HTML5 input type
- Declarative forms with an element registry
- Ordered validation pipeline with one error per control
- Type checks for email, url, color, number, range and date/time inputs
- Cross-field ``match`` constraint
- Error messages with ``{{placeholder}}`` resolution
- Generated client-side validation script with the same messages

Quick Start:
    from formkit import Form, Input

    class SignupForm(Form):
        email = Input(type="email", required=True)
        password = Input(type="password", required=True, minlength=8)
        confirm = Input(type="password", match="password")

    form = SignupForm(request_data)
    if not form.validate():
        print(form.messages)
"""

from __future__ import annotations

__version__ = "1.0.0"
__license__ = "MIT"

from typing import TYPE_CHECKING

from formkit.core.config import Config, get_config
from formkit.forms.control import Input
from formkit.forms.form import Form

if TYPE_CHECKING:
    from formkit.core.upload import Upload, UploadErrorCode
    from formkit.forms.decorator import Decorator, ScriptRule
    from formkit.validation.errors import ConfigurationError, ControlError, ValidationFailed
    from formkit.validation.types import InputType
    from formkit.validation.validator import Validator, validate


def __getattr__(name: str):
    """Lazy loading of the less common names."""
    _imports = {
        "InputType": "formkit.validation.types",
        "Validator": "formkit.validation.validator",
        "validate": "formkit.validation.validator",
        "ControlError": "formkit.validation.errors",
        "ConfigurationError": "formkit.validation.errors",
        "ValidationFailed": "formkit.validation.errors",
        "Decorator": "formkit.forms.decorator",
        "ScriptRule": "formkit.forms.decorator",
        "Upload": "formkit.core.upload",
        "UploadErrorCode": "formkit.core.upload",
        "Logger": "formkit.utils.logger",
        "get_logger": "formkit.utils.logger",
        "configure_logging": "formkit.utils.logger",
    }

    if name in _imports:
        import importlib
        module = importlib.import_module(_imports[name])
        return getattr(module, name)

    raise AttributeError(f"module 'formkit' has no attribute '{name}'")


__all__ = [
    "__version__",
    "__license__",
    # Always loaded
    "Config",
    "get_config",
    "Input",
    "Form",
    # Lazy
    "InputType",
    "Validator",
    "validate",
    "ControlError",
    "ConfigurationError",
    "ValidationFailed",
    "Decorator",
    "ScriptRule",
    "Upload",
    "UploadErrorCode",
    "Logger",
    "get_logger",
    "configure_logging",
]

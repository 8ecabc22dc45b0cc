"""
Formkit Forms Package
=====================

Controls, forms and decorators.
"""

from formkit.core.upload import Upload, UploadErrorCode
from formkit.forms.control import Input
from formkit.forms.decorator import Decorator, ScriptRule
from formkit.forms.form import Form, FormMeta

__all__ = [
    "Input",
    "Form",
    "FormMeta",
    "Decorator",
    "ScriptRule",
    "Upload",
    "UploadErrorCode",
]

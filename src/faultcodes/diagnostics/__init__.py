"""Diagnostic system for faultcodes library errors.

Provides structured error diagnostics with codes, spans and hints for
malformed templates, unformattable arguments and unusable collections.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import FaultcodesError, FormattingError, TemplateLoadError, TemplateSyntaxError
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "FaultcodesError",
    "FormattingError",
    "OutputFormat",
    "SourceSpan",
    "TemplateLoadError",
    "TemplateSyntaxError",
]

"""faultcodes - Fault codes with localized messages.

Errors are identified by codes drawn from closed sets (usually Enums).
Each code resolves to a human-readable message through a fallback chain:
a localized template from the code's template collections, else the
code's default format, else the code's key followed by the arguments.
Resolution never raises, so reporting a fault cannot cause another one.

Public API:
    LocalizedFaultCode - Enum base class for fault code sets
    SimpleFaultCode - Fault code defined without an Enum
    FaultCode - Protocol every fault code satisfies
    Fault - Protocol for errors exposing a fault code
    FaultError - Exception owning a code and its message arguments
    MessageResolver - Code to message resolution over a template store
    resolve - Resolve with the default resolver
    set_default_locale - Override the process default locale

Exceptions:
    FaultcodesError - Base class of the library's own errors
    TemplateSyntaxError - Malformed message template
    TemplateLoadError - Unusable template collection

Submodules:
    faultcodes.bundles - Template stores and the .properties parser
    faultcodes.formatting - Positional placeholder formatting (Babel)
    faultcodes.diagnostics - Diagnostic codes, records and formatter
"""

from .codes import Fault, FaultCode, LocalizedFaultCode, SimpleFaultCode
from .diagnostics import FaultcodesError, TemplateLoadError, TemplateSyntaxError
from .faults import FaultError
from .locale_utils import get_default_locale, set_default_locale
from .resolver import (
    MessageResolver,
    Resolution,
    get_default_resolver,
    render_args,
    resolve,
    set_default_resolver,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("faultcodes")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Fault",
    "FaultCode",
    "FaultError",
    "FaultcodesError",
    "LocalizedFaultCode",
    "MessageResolver",
    "Resolution",
    "SimpleFaultCode",
    "TemplateLoadError",
    "TemplateSyntaxError",
    "__version__",
    "get_default_locale",
    "get_default_resolver",
    "render_args",
    "resolve",
    "set_default_locale",
    "set_default_resolver",
]

"""faultcodes exception hierarchy with structured diagnostics.

These are the library's own errors: a template that cannot be parsed,
an argument that cannot be rendered, a collection that cannot be loaded.
None of them escapes message resolution; the resolver downgrades them
to a fallback message. They surface only when the formatter, the
.properties parser or a store is called directly.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class FaultcodesError(Exception):
    """Base exception for all faultcodes library errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize FaultcodesError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class TemplateSyntaxError(FaultcodesError, ValueError):
    """Malformed placeholder pattern.

    Examples:
    - Unmatched brace: "Hello {0"
    - Non-numeric index: "Hello {name}"
    - Unknown format type: "{0,money}"
    """


class FormattingError(FaultcodesError):
    """An argument could not be rendered with its placeholder's format type.

    The formatter absorbs this error and writes fallback_value instead,
    so one bad argument never costs the whole message.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message string OR Diagnostic object
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value


class TemplateLoadError(FaultcodesError):
    """A template collection exists but cannot be used.

    Raised by stores and by the .properties parser for unsafe paths,
    oversized files and malformed escapes.

    Attributes:
        source_path: Human-readable location of the collection ("" if unknown)
    """

    def __init__(self, message: str | Diagnostic, *, source_path: str = "") -> None:
        """Initialize TemplateLoadError.

        Args:
            message: Error message string OR Diagnostic object
            source_path: Human-readable location of the collection
        """
        super().__init__(message)
        self.source_path = source_path

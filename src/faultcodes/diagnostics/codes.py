"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages for the
library's own failures: malformed templates, arguments that cannot be
formatted, and template collections that cannot be loaded.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Template syntax errors (placeholder patterns)
        2000-2999: Formatting errors (argument rendering)
        3000-3999: Template store errors (loading collections)
    """

    # Template syntax errors (1000-1999)
    TEMPLATE_UNMATCHED_BRACE = 1001
    TEMPLATE_INVALID_ARGUMENT_INDEX = 1002
    TEMPLATE_UNKNOWN_FORMAT_TYPE = 1003
    TEMPLATE_INVALID_CHOICE = 1004

    # Formatting errors (2000-2999)
    FORMAT_TYPE_MISMATCH = 2001
    FORMAT_FAILED = 2002
    FORMAT_CURRENCY_UNAVAILABLE = 2003

    # Template store errors (3000-3999)
    STORE_LOAD_FAILED = 3001
    STORE_MALFORMED_ESCAPE = 3002
    STORE_UNSAFE_PATH = 3003
    STORE_SIZE_EXCEEDED = 3004


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Location in a template or a template collection for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line
                or column is less than 1.
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Location inside the template or collection (None if unknown)
        hint: Suggestion for fixing the error
        template: The template text the span points into
        source_path: Collection file or resource the error came from
        argument_index: Placeholder index involved in a formatting error
        expected_type: Expected argument type (formatting errors)
        received_type: Actual argument type (formatting errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    template: str | None = None
    source_path: str | None = None
    argument_index: int | None = None
    expected_type: str | None = None
    received_type: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output with
        control-character escaping.

        Example output:
            error[TEMPLATE_UNMATCHED_BRACE]: Unmatched '{' in template
              --> column 7
              = template: Hello {0
              = help: Close the placeholder with '}' or quote the brace as '{'

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)

"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


def _pattern_span(position: int) -> SourceSpan:
    """Span of a single character in a one-line template."""
    return SourceSpan(start=position, end=position + 1, line=1, column=position + 1)


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # Template syntax errors

    @staticmethod
    def unmatched_brace(template: str, position: int) -> Diagnostic:
        """Placeholder opened but never closed.

        Args:
            template: The template being parsed
            position: Offset of the opening brace

        Returns:
            Diagnostic for TEMPLATE_UNMATCHED_BRACE
        """
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_UNMATCHED_BRACE,
            message=f"Unmatched '{{' at offset {position} in template",
            span=_pattern_span(position),
            hint="Close the placeholder with '}' or quote a literal brace as '{'",
            template=template,
        )

    @staticmethod
    def invalid_argument_index(template: str, position: int, text: str) -> Diagnostic:
        """Placeholder index is not a non-negative integer.

        Args:
            template: The template being parsed
            position: Offset of the opening brace
            text: The text found where the index was expected

        Returns:
            Diagnostic for TEMPLATE_INVALID_ARGUMENT_INDEX
        """
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_INVALID_ARGUMENT_INDEX,
            message=f"Invalid argument index '{text}' in template",
            span=_pattern_span(position),
            hint="Placeholders are positional: {0}, {1}, ...",
            template=template,
        )

    @staticmethod
    def unknown_format_type(template: str, position: int, format_type: str) -> Diagnostic:
        """Placeholder names a format type the formatter does not know.

        Args:
            template: The template being parsed
            position: Offset of the opening brace
            format_type: The unknown type name

        Returns:
            Diagnostic for TEMPLATE_UNKNOWN_FORMAT_TYPE
        """
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_UNKNOWN_FORMAT_TYPE,
            message=f"Unknown format type '{format_type}' in template",
            span=_pattern_span(position),
            hint="Use one of: number, date, time, choice",
            template=template,
        )

    @staticmethod
    def invalid_choice(template: str, position: int, detail: str) -> Diagnostic:
        """Choice format style cannot be parsed.

        Args:
            template: The template being parsed
            position: Offset of the opening brace
            detail: What is wrong with the choice style

        Returns:
            Diagnostic for TEMPLATE_INVALID_CHOICE
        """
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_INVALID_CHOICE,
            message=f"Invalid choice format: {detail}",
            span=_pattern_span(position),
            hint="Write choices as limit#text separated by '|', e.g. 0#none|1#one|1<many",
            template=template,
        )

    # Formatting errors

    @staticmethod
    def type_mismatch(index: int, expected: str, value: object) -> Diagnostic:
        """Argument type does not fit the placeholder's format type.

        Args:
            index: Placeholder index
            expected: Expected type description
            value: The argument supplied

        Returns:
            Diagnostic for FORMAT_TYPE_MISMATCH
        """
        received = type(value).__name__
        return Diagnostic(
            code=DiagnosticCode.FORMAT_TYPE_MISMATCH,
            message=f"Argument {{{index}}} cannot be formatted as {expected}",
            hint=f"Pass a {expected} value for placeholder {{{index}}}",
            argument_index=index,
            expected_type=expected,
            received_type=received,
        )

    @staticmethod
    def formatting_failed(index: int, value: object, reason: str) -> Diagnostic:
        """Babel rejected the value or the style.

        Args:
            index: Placeholder index
            value: The argument supplied
            reason: Error text from the formatting call

        Returns:
            Diagnostic for FORMAT_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.FORMAT_FAILED,
            message=f"Formatting argument {{{index}}} failed: {reason}",
            argument_index=index,
            received_type=type(value).__name__,
        )

    @staticmethod
    def currency_unavailable(index: int, locale_code: str) -> Diagnostic:
        """Currency style used with a locale that has no territory currency.

        Args:
            index: Placeholder index
            locale_code: Locale used for formatting

        Returns:
            Diagnostic for FORMAT_CURRENCY_UNAVAILABLE
        """
        return Diagnostic(
            code=DiagnosticCode.FORMAT_CURRENCY_UNAVAILABLE,
            message=f"No currency known for locale '{locale_code}'",
            hint="Use a locale with a territory (e.g. de_DE) for {n,number,currency}",
            argument_index=index,
        )

    # Template store errors

    @staticmethod
    def load_failed(source_path: str, reason: str) -> Diagnostic:
        """Collection exists but could not be read.

        Args:
            source_path: Location of the collection
            reason: Underlying error text

        Returns:
            Diagnostic for STORE_LOAD_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.STORE_LOAD_FAILED,
            message=f"Failed to load template collection: {reason}",
            source_path=source_path,
        )

    @staticmethod
    def malformed_escape(source_path: str, line: int, column: int) -> Diagnostic:
        r"""Invalid \uXXXX escape in a .properties collection.

        Args:
            source_path: Location of the collection
            line: Line number of the escape (1-indexed)
            column: Column of the backslash (1-indexed)

        Returns:
            Diagnostic for STORE_MALFORMED_ESCAPE
        """
        return Diagnostic(
            code=DiagnosticCode.STORE_MALFORMED_ESCAPE,
            message="Malformed \\uxxxx encoding",
            span=SourceSpan(start=column - 1, end=column - 1, line=line, column=column),
            hint="Unicode escapes need exactly four hex digits, e.g. \\u00e9",
            source_path=source_path,
        )

    @staticmethod
    def unsafe_path(what: str, value: str) -> Diagnostic:
        """Base name or locale would escape the store's root directory.

        Args:
            what: "base name" or "locale"
            value: The rejected value

        Returns:
            Diagnostic for STORE_UNSAFE_PATH
        """
        return Diagnostic(
            code=DiagnosticCode.STORE_UNSAFE_PATH,
            message=f"Unsafe {what} for template store: '{value}'",
            hint="Base names are dotted identifiers, locales are language[_territory]",
        )

    @staticmethod
    def size_exceeded(source_path: str, size: int, limit: int) -> Diagnostic:
        """Collection is larger than MAX_BUNDLE_SIZE.

        Args:
            source_path: Location of the collection
            size: Actual size in characters
            limit: Configured limit

        Returns:
            Diagnostic for STORE_SIZE_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.STORE_SIZE_EXCEEDED,
            message=f"Template collection too large: {size} characters (limit {limit})",
            source_path=source_path,
        )

r"""Parser for Java-style .properties template collections.

Template collections are stored in the .properties format so the same
files can be shared with JVM services and existing translation tooling.

Format summary:
    # comment            ! also a comment
    KEY = value          KEY: value          KEY value
    LONG = first part \
           second part   (leading whitespace of continuation lines is dropped)
    ESCAPED = tab\tnewline\nunicode\u00e9 literal\=equals

Python 3.13+. Zero external dependencies.
"""

import re

from faultcodes.constants import MAX_BUNDLE_SIZE
from faultcodes.diagnostics import ErrorTemplate, TemplateLoadError

__all__ = ["parse_properties"]

_NEWLINE = re.compile(r"\r\n|\r|\n")
_SURROGATE = re.compile(r"[\ud800-\udfff]")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_HEX_DIGITS = "0123456789abcdefABCDEF"
_SIMPLE_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def parse_properties(source: str, source_path: str = "") -> dict[str, str]:
    """Parse .properties source into a key to template mapping.

    Later duplicates of a key replace earlier ones.

    Args:
        source: Collection text
        source_path: Location used in diagnostics

    Returns:
        Mapping of message keys to templates, in file order

    Raises:
        TemplateLoadError: If the source is larger than MAX_BUNDLE_SIZE or
            contains a malformed \\uXXXX escape

    Example:
        >>> parse_properties("ERROR_1 = Order {0} not found\\n# comment")
        {'ERROR_1': 'Order {0} not found'}
    """
    if len(source) > MAX_BUNDLE_SIZE:
        diagnostic = ErrorTemplate.size_exceeded(source_path, len(source), MAX_BUNDLE_SIZE)
        raise TemplateLoadError(diagnostic, source_path=source_path)

    entries: dict[str, str] = {}
    for line_number, line in _logical_lines(source):
        key_end = _find_key_end(line)
        rest = line[key_end:].lstrip(_WHITESPACE)
        if rest[:1] in ("=", ":"):
            rest = rest[1:].lstrip(_WHITESPACE)
        value_start = len(line) - len(rest)
        key = _unescape(line[:key_end], line_number, 0, source_path)
        entries[key] = _unescape(rest, line_number, value_start, source_path)
    return entries


def _logical_lines(source: str) -> list[tuple[int, str]]:
    """Join continued lines, dropping blanks and comments.

    Returns:
        (first line number, logical line) pairs
    """
    natural = _NEWLINE.split(source)
    logical: list[tuple[int, str]] = []
    index = 0
    while index < len(natural):
        line_number = index + 1
        line = natural[index].lstrip(_WHITESPACE)
        index += 1
        if not line or line[0] in "#!":
            continue
        parts: list[str] = []
        while _is_continued(line):
            parts.append(line[:-1])
            if index >= len(natural):
                line = ""
                break
            line = natural[index].lstrip(_WHITESPACE)
            index += 1
        parts.append(line)
        logical.append((line_number, "".join(parts)))
    return logical


def _is_continued(line: str) -> bool:
    """A line continues when it ends in an odd number of backslashes."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _find_key_end(line: str) -> int:
    """Offset of the first unescaped separator or whitespace."""
    escaped = False
    for position, char in enumerate(line):
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in _SEPARATORS or char in _WHITESPACE:
            return position
    return len(line)


def _unescape(text: str, line_number: int, offset: int, source_path: str) -> str:
    """Resolve backslash escapes in a key or value."""
    if "\\" not in text:
        return text

    chars: list[str] = []
    position = 0
    length = len(text)
    while position < length:
        char = text[position]
        position += 1
        if char != "\\":
            chars.append(char)
            continue
        if position >= length:
            # Lone trailing backslash at end of input
            break
        escape = text[position]
        position += 1
        if escape == "u":
            digits = text[position : position + 4]
            if len(digits) != 4 or any(digit not in _HEX_DIGITS for digit in digits):
                column = offset + position - 1
                diagnostic = ErrorTemplate.malformed_escape(source_path, line_number, column)
                raise TemplateLoadError(diagnostic, source_path=source_path)
            chars.append(chr(int(digits, 16)))
            position += 4
        else:
            chars.append(_SIMPLE_ESCAPES.get(escape, escape))

    result = "".join(chars)
    if _SURROGATE.search(result):
        # Escaped UTF-16 surrogate pairs (\ud83d\ude00) become one code point
        result = result.encode("utf-16-le", "surrogatepass").decode(
            "utf-16-le", "surrogatepass"
        )
    return result

"""Positional message formatting.

Parses templates with {0}-style placeholders and renders them with
locale-aware number and date formatting.

Submodules:
    ast       - Immutable Pattern, Text, Placeholder, ChoiceOption
    parser    - parse_pattern() with quoting rules and an LRU cache
    formatter - format_message() / format_pattern() using Babel

Python 3.13+.
"""

from faultcodes.formatting.ast import ChoiceOption, Pattern, PatternElement, Placeholder, Text
from faultcodes.formatting.formatter import format_message, format_pattern
from faultcodes.formatting.parser import parse_pattern

__all__ = [
    "ChoiceOption",
    "Pattern",
    "PatternElement",
    "Placeholder",
    "Text",
    "format_message",
    "format_pattern",
    "parse_pattern",
]

"""Template parser for positional message formats.

Grammar (message-format conventions):
    template    := (text | quoted | placeholder)*
    placeholder := '{' index [',' type [',' style]] '}'
    quoted      := "'" any-but-quote* "'"      (an unterminated quote runs to the end)
    "''"        := a literal apostrophe, inside or outside quotes
    choice      := limit ('#' | '<' | '≤') text ('|' limit ('#' | '<' | '≤') text)*

A '}' outside a placeholder is literal text. Whitespace around index,
type and style is ignored.

Python 3.13+. Zero external dependencies.
"""

import functools
import math

from faultcodes.constants import MAX_CHOICE_DEPTH, MAX_PATTERN_CACHE_SIZE
from faultcodes.diagnostics import ErrorTemplate, TemplateSyntaxError
from faultcodes.enums import ArgumentType
from faultcodes.formatting.ast import ChoiceOption, Pattern, PatternElement, Placeholder, Text

__all__ = ["parse_pattern"]

_QUOTE = "'"
_CHOICE_RELATIONS = "#<≤"
_INFINITY = "∞"

# Placeholder sections: index, type, style
_INDEX, _TYPE, _STYLE = 1, 2, 3


@functools.lru_cache(maxsize=MAX_PATTERN_CACHE_SIZE)
def parse_pattern(template: str) -> Pattern:
    """Parse a template into its cached Pattern.

    Args:
        template: Template text, e.g. "Error with two arguments: {0}, {1}"

    Returns:
        Immutable parsed pattern

    Raises:
        TemplateSyntaxError: On unmatched braces, invalid indexes, unknown
            format types or malformed choice styles

    Example:
        >>> parse_pattern("Hi {0}").elements
        (Text(value='Hi '), Placeholder(index=0, format_type=None, style=None, choices=(), position=3))
    """
    return _parse(template, depth=0)


def _parse(template: str, depth: int) -> Pattern:
    elements: list[PatternElement] = []
    text: list[str] = []
    sections: list[list[str]] = [[], [], [], []]
    section = 0
    in_quote = False
    brace_depth = 0
    start = 0
    length = len(template)
    position = 0

    while position < length:
        char = template[position]
        if section == 0:
            if char == _QUOTE:
                if position + 1 < length and template[position + 1] == _QUOTE:
                    text.append(_QUOTE)
                    position += 1
                else:
                    in_quote = not in_quote
            elif char == "{" and not in_quote:
                if text:
                    elements.append(Text("".join(text)))
                    text = []
                section = _INDEX
                start = position
            else:
                text.append(char)
        elif in_quote:
            # Quotes inside a style are kept for the sub-format to interpret
            sections[section].append(char)
            if char == _QUOTE:
                in_quote = False
        elif char == "," and section < _STYLE:
            section += 1
        elif char == "{":
            brace_depth += 1
            sections[section].append(char)
        elif char == "}":
            if brace_depth == 0:
                elements.append(_make_placeholder(template, start, sections, depth))
                sections = [[], [], [], []]
                section = 0
            else:
                brace_depth -= 1
                sections[section].append(char)
        else:
            if char == _QUOTE:
                in_quote = True
            sections[section].append(char)
        position += 1

    if section != 0:
        raise TemplateSyntaxError(ErrorTemplate.unmatched_brace(template, start))
    if text:
        elements.append(Text("".join(text)))
    return Pattern(source=template, elements=tuple(elements))


def _make_placeholder(
    template: str, start: int, sections: list[list[str]], depth: int
) -> Placeholder:
    index_text = "".join(sections[_INDEX]).strip()
    if not (index_text.isascii() and index_text.isdigit()):
        raise TemplateSyntaxError(
            ErrorTemplate.invalid_argument_index(template, start, index_text)
        )
    index = int(index_text)

    type_text = "".join(sections[_TYPE]).strip()
    style_text = "".join(sections[_STYLE]).strip()
    style = style_text or None
    if not type_text:
        return Placeholder(index=index, position=start)

    try:
        format_type = ArgumentType(type_text.lower())
    except ValueError:
        raise TemplateSyntaxError(
            ErrorTemplate.unknown_format_type(template, start, type_text)
        ) from None

    choices: tuple[ChoiceOption, ...] = ()
    if format_type is ArgumentType.CHOICE:
        if style is None:
            raise TemplateSyntaxError(
                ErrorTemplate.invalid_choice(template, start, "missing choice style")
            )
        choices = _parse_choices(template, start, style, depth)

    return Placeholder(
        index=index,
        format_type=format_type,
        style=style,
        choices=choices,
        position=start,
    )


def _parse_choices(
    template: str, start: int, style: str, depth: int
) -> tuple[ChoiceOption, ...]:
    options: list[ChoiceOption] = []
    previous = -math.inf
    for part in _split_choice_style(style):
        relation_at = next(
            (i for i, char in enumerate(part) if char in _CHOICE_RELATIONS), -1
        )
        if relation_at < 0:
            raise TemplateSyntaxError(
                ErrorTemplate.invalid_choice(template, start, f"no limit in '{part}'")
            )
        limit = _parse_limit(template, start, part[:relation_at].strip())
        if part[relation_at] == "<":
            limit = math.nextafter(limit, math.inf)
        if limit < previous:
            raise TemplateSyntaxError(
                ErrorTemplate.invalid_choice(template, start, "limits must be ascending")
            )
        previous = limit

        text = _unquote(part[relation_at + 1 :])
        nested = None
        if "{" in text and depth < MAX_CHOICE_DEPTH:
            nested = _parse(text, depth + 1)
        options.append(ChoiceOption(limit=limit, text=text, pattern=nested))
    return tuple(options)


def _parse_limit(template: str, start: int, text: str) -> float:
    if text == _INFINITY:
        return math.inf
    if text == f"-{_INFINITY}":
        return -math.inf
    try:
        limit = float(text)
    except ValueError:
        raise TemplateSyntaxError(
            ErrorTemplate.invalid_choice(template, start, f"invalid limit '{text}'")
        ) from None
    if math.isnan(limit):
        raise TemplateSyntaxError(
            ErrorTemplate.invalid_choice(template, start, "limit cannot be NaN")
        )
    return limit


def _split_choice_style(style: str) -> list[str]:
    """Split a choice style on '|' outside quotes, keeping the quotes."""
    parts: list[str] = []
    current: list[str] = []
    in_quote = False
    for char in style:
        if char == _QUOTE:
            in_quote = not in_quote
        if char == "|" and not in_quote:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _unquote(text: str) -> str:
    """Remove quoting from choice text: "it''s" -> "it's", "'{'" -> "{"."""
    if _QUOTE not in text:
        return text
    chars: list[str] = []
    position = 0
    while position < len(text):
        char = text[position]
        if char == _QUOTE:
            if position + 1 < len(text) and text[position + 1] == _QUOTE:
                chars.append(_QUOTE)
                position += 1
        else:
            chars.append(char)
        position += 1
    return "".join(chars)

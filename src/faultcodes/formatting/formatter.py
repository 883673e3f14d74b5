"""Locale-aware rendering of parsed templates.

Substitutes positional arguments into a template, formatting numbers,
dates and times with Babel's CLDR data for the requested locale.

Rendering rules:
    {n} with a number        locale decimal format, e.g. 1234.5 -> '1,234.5' (en_US)
    {n} with a datetime      short date and time
    {n} with a date / time   short date / short time
    {n} with anything else   str(value); bool is not a number here
    {n,number[,style]}       integer | percent | currency | CLDR number pattern
    {n,date[,style]}         short | medium (default) | long | full | CLDR pattern
    {n,time[,style]}         same styles as date
    {n,choice,style}         option whose limit is the largest <= the value
    {n} without argument n   left as the literal text '{n}'

An argument that does not fit its placeholder type is rendered with
str() and logged at DEBUG; only a malformed template raises.

Python 3.13+. Uses Babel for i18n.
"""

import functools
import logging
import math
from collections.abc import Sequence
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from faultcodes.constants import DEFAULT_LOCALE, MAX_LOCALE_CACHE_SIZE
from faultcodes.diagnostics import ErrorTemplate, FormattingError
from faultcodes.enums import ArgumentType
from faultcodes.formatting.ast import Pattern, Placeholder, Text
from faultcodes.formatting.parser import parse_pattern
from faultcodes.locale_utils import get_babel_locale, normalize_locale

__all__ = ["format_message", "format_pattern"]

logger = logging.getLogger(__name__)

_DATE_STYLES = frozenset({"short", "medium", "long", "full"})
_INTEGER_PATTERN = "#,##0"
_BABEL_ERRORS = (ValueError, TypeError, InvalidOperation, AttributeError, KeyError, OverflowError)

type Number = int | float | Decimal


def format_message(template: str, args: Sequence[object], locale: str | Locale) -> str:
    """Format a template with positional arguments.

    Args:
        template: Template text with {0}-style placeholders
        args: Arguments in placeholder order; extra arguments are ignored
        locale: Locale for number and date rendering

    Returns:
        Formatted message

    Raises:
        TemplateSyntaxError: If the template is malformed

    Example:
        >>> format_message("Error with one argument: {0}", ["42"], "en_US")
        'Error with one argument: 42'
        >>> format_message("{0} of {1}", [1234.5], "de_DE")
        '1.234,5 of {1}'
    """
    return format_pattern(parse_pattern(template), args, locale)


def format_pattern(pattern: Pattern, args: Sequence[object], locale: str | Locale) -> str:
    """Format an already parsed pattern. See format_message()."""
    return _render(pattern, args, _formatting_locale(normalize_locale(locale)))


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def _formatting_locale(locale_code: str) -> Locale:
    """Babel locale for formatting, falling back to en_US for unknown codes.

    Cached, so an unknown locale is reported once.
    """
    try:
        return get_babel_locale(locale_code)
    except UnknownLocaleError as e:
        logger.warning(
            "Unknown locale '%s': %s. Falling back to %s", locale_code, e, DEFAULT_LOCALE
        )
    except ValueError as e:
        logger.warning(
            "Invalid locale format '%s': %s. Falling back to %s", locale_code, e, DEFAULT_LOCALE
        )
    return get_babel_locale(DEFAULT_LOCALE)


def _render(pattern: Pattern, args: Sequence[object], locale: Locale) -> str:
    parts: list[str] = []
    for element in pattern.elements:
        if isinstance(element, Text):
            parts.append(element.value)
            continue
        if element.index >= len(args):
            parts.append(f"{{{element.index}}}")
            continue
        value = args[element.index]
        try:
            parts.append(_format_argument(element, value, args, locale))
        except FormattingError as e:
            logger.debug("Argument {%d} rendered as text: %s", element.index, e)
            parts.append(e.fallback_value)
    return "".join(parts)


def _format_argument(
    placeholder: Placeholder, value: object, args: Sequence[object], locale: Locale
) -> str:
    match placeholder.format_type:
        case None:
            return _format_untyped(placeholder.index, value, locale)
        case ArgumentType.NUMBER:
            return _format_number(placeholder, _require_number(placeholder, value), locale)
        case ArgumentType.DATE | ArgumentType.TIME:
            return _format_temporal(placeholder, value, locale)
        case ArgumentType.CHOICE:
            return _format_choice(placeholder, _require_number(placeholder, value), args, locale)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _require_number(placeholder: Placeholder, value: object) -> Number:
    if not _is_number(value):
        diagnostic = ErrorTemplate.type_mismatch(placeholder.index, "number", value)
        raise FormattingError(diagnostic, fallback_value=str(value))
    return value  # type: ignore[return-value]


def _format_untyped(index: int, value: object, locale: Locale) -> str:
    try:
        if _is_number(value):
            return str(babel_numbers.format_decimal(value, locale=locale))  # type: ignore[arg-type]
        # datetime before date: datetime is a date subclass
        if isinstance(value, datetime):
            return str(babel_dates.format_datetime(value, format="short", locale=locale))
        if isinstance(value, date):
            return str(babel_dates.format_date(value, format="short", locale=locale))
        if isinstance(value, time):
            return str(babel_dates.format_time(value, format="short", locale=locale))
    except _BABEL_ERRORS as e:
        diagnostic = ErrorTemplate.formatting_failed(index, value, str(e))
        raise FormattingError(diagnostic, fallback_value=str(value)) from e
    return str(value)


def _format_number(placeholder: Placeholder, value: Number, locale: Locale) -> str:
    style = placeholder.style
    keyword = style.lower() if style else None
    try:
        match keyword:
            case None:
                return str(babel_numbers.format_decimal(value, locale=locale))
            case "integer":
                return str(
                    babel_numbers.format_decimal(value, format=_INTEGER_PATTERN, locale=locale)
                )
            case "percent":
                return str(babel_numbers.format_percent(value, locale=locale))
            case "currency":
                currency = _territory_currency(placeholder.index, value, locale)
                return str(babel_numbers.format_currency(value, currency, locale=locale))
            case _:
                return str(babel_numbers.format_decimal(value, format=style, locale=locale))
    except _BABEL_ERRORS as e:
        diagnostic = ErrorTemplate.formatting_failed(placeholder.index, value, str(e))
        raise FormattingError(diagnostic, fallback_value=str(value)) from e


def _territory_currency(index: int, value: Number, locale: Locale) -> str:
    currencies = (
        babel_numbers.get_territory_currencies(locale.territory) if locale.territory else []
    )
    if not currencies:
        diagnostic = ErrorTemplate.currency_unavailable(index, str(locale))
        raise FormattingError(diagnostic, fallback_value=str(value))
    return str(currencies[0])


def _format_temporal(placeholder: Placeholder, value: object, locale: Locale) -> str:
    style = placeholder.style or "medium"
    if style.lower() in _DATE_STYLES:
        style = style.lower()

    is_date = placeholder.format_type is ArgumentType.DATE
    try:
        if is_date and isinstance(value, date):
            return str(babel_dates.format_date(value, format=style, locale=locale))
        if not is_date and isinstance(value, (datetime, time)):
            return str(babel_dates.format_time(value, format=style, locale=locale))
        if not is_date and isinstance(value, date):
            midnight = datetime.combine(value, time())
            return str(babel_dates.format_time(midnight, format=style, locale=locale))
    except _BABEL_ERRORS as e:
        diagnostic = ErrorTemplate.formatting_failed(placeholder.index, value, str(e))
        raise FormattingError(diagnostic, fallback_value=str(value)) from e

    expected = "date" if is_date else "time"
    diagnostic = ErrorTemplate.type_mismatch(placeholder.index, expected, value)
    raise FormattingError(diagnostic, fallback_value=str(value))


def _format_choice(
    placeholder: Placeholder, value: Number, args: Sequence[object], locale: Locale
) -> str:
    try:
        number = float(value)
    except OverflowError:
        number = math.inf if value > 0 else -math.inf
    except (ValueError, InvalidOperation) as e:
        # Signaling NaN has no float value and cannot be compared
        diagnostic = ErrorTemplate.formatting_failed(placeholder.index, value, str(e))
        raise FormattingError(diagnostic, fallback_value=str(value)) from e
    selected = placeholder.choices[0]
    for option in placeholder.choices:
        if not number >= option.limit:
            break
        selected = option
    if selected.pattern is not None:
        return _render(selected.pattern, args, locale)
    return selected.text

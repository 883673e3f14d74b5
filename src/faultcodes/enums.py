"""Enumerations for faultcodes type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class MessageSource(StrEnum):
    """Where a resolved fault message got its text from.

    StrEnum provides automatic string conversion: str(MessageSource.DEFAULT_FORMAT) == "default_format"
    """

    TEMPLATE_STORE = "template_store"
    """Template found in a store collection for the requested locale chain."""

    DEFAULT_FORMAT = "default_format"
    """No store entry; the code's own default format was used."""

    MESSAGE_KEY = "message_key"
    """No template at all; the message is the key plus the rendered arguments."""


class LoadStatus(StrEnum):
    """Outcome of loading one template collection."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"


class ArgumentType(StrEnum):
    """Format type of a typed placeholder: {0,number,integer}."""

    NUMBER = "number"
    """Locale decimal, integer, percent, currency or a CLDR number pattern."""

    DATE = "date"
    """short/medium/long/full date or a CLDR date pattern."""

    TIME = "time"
    """short/medium/long/full time or a CLDR time pattern."""

    CHOICE = "choice"
    """Numeric range selection: 0#none|1#one|1<many."""


__all__ = [
    "ArgumentType",
    "LoadStatus",
    "MessageSource",
]

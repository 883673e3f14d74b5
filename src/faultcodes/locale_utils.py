"""Locale utilities for BCP-47 to POSIX conversion and default locale handling.

Centralizes locale format normalization used throughout the codebase.
Provides canonical locale handling to ensure consistent store lookups
and the candidate list used for template collection fallback.

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

from faultcodes.constants import DEFAULT_LOCALE, MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "candidate_locales",
    "clear_locale_cache",
    "get_babel_locale",
    "get_default_locale",
    "get_system_locale",
    "normalize_locale",
    "set_default_locale",
]

_default_locale: str | None = None


def normalize_locale(locale_code: str | Locale) -> str:
    """Convert a BCP-47 locale code to POSIX format.

    BCP-47 uses hyphens (en-US), while Babel and template collection file
    names use underscores (en_US). Babel ``Locale`` objects are accepted
    and rendered with ``str()``. Case is preserved because collection file
    names are case-sensitive.

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR") or Babel Locale

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return str(locale_code).strip().replace("-", "_")


def candidate_locales(locale_code: str | Locale) -> tuple[str, ...]:
    """List the locales searched for a template collection, most specific first.

    The root locale is not part of the result; callers append it.

    Example:
        >>> candidate_locales("de-DE-1996")
        ('de_DE_1996', 'de_DE', 'de')
        >>> candidate_locales("")
        ()
    """
    parts = [part for part in normalize_locale(locale_code).split("_") if part]
    return tuple("_".join(parts[:end]) for end in range(len(parts), 0, -1))


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result. This avoids repeated
    parsing overhead when the same locale formats many messages.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def clear_locale_cache() -> None:
    """Clear the Babel Locale cache."""
    get_babel_locale.cache_clear()


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Normalizes the result to POSIX format. Filters out "C" and "POSIX"
    pseudo-locales.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en_US" as fallback.

    Returns:
        Detected locale code in POSIX format.

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return normalize_locale(system_locale.split(".")[0])
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", ""):
            # Strip encoding suffix (e.g., ".UTF-8")
            return normalize_locale(value.split(".")[0])

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return DEFAULT_LOCALE


def get_default_locale() -> str:
    """Return the locale used when a caller does not pass one.

    The explicit override from set_default_locale() wins; otherwise the
    system locale is detected.
    """
    if _default_locale is not None:
        return _default_locale
    return get_system_locale()


def set_default_locale(locale_code: str | Locale | None) -> str | None:
    """Override the process default locale.

    Args:
        locale_code: New default locale, or None to go back to the system locale

    Returns:
        The previous override (None if the system locale was in use)

    Raises:
        ValueError: If locale_code is an empty string
    """
    global _default_locale  # noqa: PLW0603  # pylint: disable=global-statement

    previous = _default_locale
    if locale_code is None:
        _default_locale = None
        return previous
    normalized = normalize_locale(locale_code)
    if not normalized:
        msg = "Default locale cannot be empty"
        raise ValueError(msg)
    _default_locale = normalized
    return previous

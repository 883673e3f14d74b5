"""Fault message resolution with locale fallback.

Turns (code, locale, arguments) into a display string. The template comes
from the first of:

    1. the code's template collections, searched along the locale chain
       (de_DE_1996 -> de_DE -> de, then the default locale, then root "")
    2. the code's default format
    3. nothing: the message is the key, followed by the rendered arguments
       when there are any ("ERROR_3 [a, b, c]")

Resolution is total. Store failures and collections holding non-string
templates are logged at DEBUG and treated as a missing collection; a
template that cannot be formatted is logged at WARNING and the message
degrades to step 3. Reporting a fault never raises a second one.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from faultcodes.bundles import LoadResult, PackageTemplateStore, TemplateStore
from faultcodes.constants import ROOT_LOCALE
from faultcodes.diagnostics import TemplateSyntaxError
from faultcodes.enums import LoadStatus, MessageSource
from faultcodes.formatting import format_message
from faultcodes.locale_utils import candidate_locales, get_default_locale, normalize_locale

if TYPE_CHECKING:
    from babel import Locale

    from faultcodes.codes import FaultCode

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Resolver
    "MessageResolver",
    "Resolution",
    # Module-level API
    "resolve",
    "render_args",
    "get_default_resolver",
    "set_default_resolver",
]

logger = logging.getLogger(__name__)

type _Chain = list[tuple[str, str | None]]


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving one fault message.

    Attributes:
        message: The resolved message
        key: Message key that was looked up
        source: Where the template came from
        locale: Locale of the collection that supplied the template; None
            unless source is TEMPLATE_STORE
        attempts: Every collection lookup made, in search order
    """

    message: str
    key: str
    source: MessageSource
    locale: str | None = None
    attempts: tuple[LoadResult, ...] = ()


def render_args(args: Sequence[object]) -> str:
    """Render arguments for a message that has no template.

    Each argument is converted with str(), without locale formatting.

    Example:
        >>> render_args(["V0", "V1"])
        '[V0, V1]'
        >>> render_args([None, True, 1.5])
        '[None, True, 1.5]'
    """
    return "[" + ", ".join(str(arg) for arg in args) + "]"


class MessageResolver:
    """Resolves fault codes to messages using a template store.

    Immutable after construction and safe to share between threads; all
    mutable state (collection caches) lives in the store.

    Example:
        >>> store = MappingTemplateStore({("app.Code", "de"): {"ERROR_1": "Fehler: {0}"}})
        >>> MessageResolver(store).resolve(code, "42", locale="de_AT")
        'Fehler: 42'
    """

    __slots__ = ("_store",)

    def __init__(self, store: TemplateStore | None = None) -> None:
        """Create a resolver.

        Args:
            store: Template source (default: collections stored next to the
                module that defines the codes)
        """
        self._store: TemplateStore = store if store is not None else PackageTemplateStore()

    def __repr__(self) -> str:
        return f"MessageResolver(store={self._store!r})"

    @property
    def store(self) -> TemplateStore:
        """The template store consulted by this resolver."""
        return self._store

    def resolve(self, code: FaultCode, *args: object, locale: str | Locale | None = None) -> str:
        """Resolve the message for a fault code.

        Args:
            code: Fault code to describe
            *args: Positional template arguments
            locale: Requested locale (default: process default locale)

        Returns:
            The message; never raises on missing or broken templates
        """
        return self.explain(code, *args, locale=locale).message

    def explain(
        self, code: FaultCode, *args: object, locale: str | Locale | None = None
    ) -> Resolution:
        """Resolve a message and report where its template came from.

        Same result as resolve(), with the collection lookups that were made.
        """
        key = code.message_key
        locale_code = self._locale_code(locale)
        chain, attempts = self._template_chain(
            code.resource_bundle_base_name, key, locale_code
        )

        template: str | None = None
        source = MessageSource.MESSAGE_KEY
        found_in: str | None = None
        for candidate, entry in chain:
            if entry is not None:
                template = entry
                source = MessageSource.TEMPLATE_STORE
                found_in = candidate
                break
        else:
            if code.default_format:
                template = code.default_format
                source = MessageSource.DEFAULT_FORMAT

        if template is not None:
            try:
                message = format_message(template, args, locale_code)
            except TemplateSyntaxError as e:
                logger.warning("Malformed template for %s (%s): %s", key, source, e)
            except Exception as e:  # pylint: disable=broad-exception-caught
                # Opaque arguments must not make reporting fail
                logger.warning(
                    "Formatting failed for %s (%s): %s: %s", key, source, type(e).__name__, e
                )
            else:
                return Resolution(message, key, source, found_in, attempts)

        message = f"{key} {render_args(args)}" if args else key
        return Resolution(message, key, MessageSource.MESSAGE_KEY, None, attempts)

    @staticmethod
    def _locale_code(locale: str | Locale | None) -> str:
        if locale is None:
            return get_default_locale()
        return normalize_locale(locale) or get_default_locale()

    def _template_chain(
        self, base_name: str, key: str, locale_code: str
    ) -> tuple[_Chain, tuple[LoadResult, ...]]:
        """Templates for key from every existing collection, most specific first.

        Requested candidates first; when none of them exists, the default
        locale's candidates; the root collection always last. Entries are
        None for collections that exist but lack the key.
        """
        chain: _Chain = []
        attempts: list[LoadResult] = []
        requested = candidate_locales(locale_code)

        def add(candidate: str) -> None:
            template, result = self._lookup(base_name, key, candidate)
            attempts.append(result)
            if result.is_success:
                chain.append((candidate, template))

        for candidate in requested:
            add(candidate)
        if not chain:
            for candidate in candidate_locales(get_default_locale()):
                if candidate not in requested:
                    add(candidate)
        add(ROOT_LOCALE)
        return chain, tuple(attempts)

    def _lookup(
        self, base_name: str, key: str, locale_code: str
    ) -> tuple[str | None, LoadResult]:
        try:
            collection = self._store.lookup(base_name, locale_code)
            if collection is None:
                return None, LoadResult(base_name, locale_code, LoadStatus.NOT_FOUND)
            template = collection[key] if key in collection else None
            if template is not None and not isinstance(template, str):
                msg = f"Template for {key!r} is {type(template).__name__}, not str"
                raise TypeError(msg)
        except Exception as e:  # pylint: disable=broad-exception-caught
            # A failing or malformed collection counts as "no collection"
            logger.debug(
                "Template collection %s [%r] unavailable: %s: %s",
                base_name,
                locale_code,
                type(e).__name__,
                e,
            )
            return None, LoadResult(base_name, locale_code, LoadStatus.ERROR, e)
        return template, LoadResult(base_name, locale_code, LoadStatus.SUCCESS)


_default_resolver: MessageResolver | None = None


def get_default_resolver() -> MessageResolver:
    """Return the process-wide resolver, creating it on first use."""
    global _default_resolver  # noqa: PLW0603  # pylint: disable=global-statement

    if _default_resolver is None:
        _default_resolver = MessageResolver()
    return _default_resolver


def set_default_resolver(resolver: MessageResolver | None) -> MessageResolver | None:
    """Replace the process-wide resolver.

    Used by resolve(), LocalizedFaultCode.get_message() and FaultError.

    Args:
        resolver: New default resolver, or None to recreate the standard
            one on next use

    Returns:
        The previous default resolver (None if none had been created)
    """
    global _default_resolver  # noqa: PLW0603  # pylint: disable=global-statement

    previous = _default_resolver
    _default_resolver = resolver
    return previous


def resolve(code: FaultCode, *args: object, locale: str | Locale | None = None) -> str:
    """Resolve a fault message with the default resolver.

    Example:
        >>> resolve(Code.ERROR_1, "42")
        'Error with one argument: 42'
        >>> resolve(Code.ERROR_3, "a", "b", "c")
        'ERROR_3 [a, b, c]'
    """
    return get_default_resolver().resolve(code, *args, locale=locale)

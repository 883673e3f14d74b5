"""Template store infrastructure for fault message resolution.

Provides the protocol for locale-keyed template stores, an in-memory
implementation, two .properties-backed implementations with bounded
caching, and the record type for tracking load attempts.

Components:
    TemplateStore - Protocol for template lookup (structural typing)
    MappingTemplateStore - Immutable in-memory store
    PathTemplateStore - Directory tree store with path-traversal prevention
    PackageTemplateStore - Collections stored next to the module defining the codes
    LoadResult - Immutable record of one collection lookup

Python 3.13+.
"""

from __future__ import annotations

import importlib.resources
import logging
import re
import sys
from collections import OrderedDict
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from threading import RLock
from types import MappingProxyType
from typing import Protocol

from faultcodes.bundles.properties import parse_properties
from faultcodes.bundles.types import BaseName, LocaleCode, TemplateCollection
from faultcodes.constants import BUNDLE_SUFFIX, LOCALE_SEPARATOR, MAX_BUNDLE_CACHE_SIZE
from faultcodes.diagnostics import ErrorTemplate, TemplateLoadError
from faultcodes.enums import LoadStatus
from faultcodes.locale_utils import normalize_locale

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "TemplateStore",
    # Concrete stores
    "MappingTemplateStore",
    "PathTemplateStore",
    "PackageTemplateStore",
    # Load tracking
    "LoadResult",
]

logger = logging.getLogger(__name__)

_LOCALE_PATTERN = re.compile(r"[A-Za-z0-9_]*")


class TemplateStore(Protocol):
    """Protocol for looking up template collections.

    A collection is identified by a base name and a locale. The root
    collection of a base name uses the empty locale "".

    Implementations return None when the collection does not exist. They
    may raise for anything else (unreadable file, malformed content); the
    resolver catches every exception at this boundary, so a broken store
    degrades messages instead of masking the fault being reported.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom stores.

    Example:
        >>> class DictStore:
        ...     def lookup(self, base_name: str, locale: str) -> dict[str, str] | None:
        ...         if locale == "de":
        ...             return {"ERROR_1": "Fehler: {0}"}
        ...         return None
        >>> resolver = MessageResolver(DictStore())
    """

    def lookup(self, base_name: BaseName, locale: LocaleCode) -> TemplateCollection | None:
        """Return the collection for one (base name, locale) pair.

        Args:
            base_name: Dotted collection family name
            locale: POSIX locale code, "" for the root collection

        Returns:
            Key to template mapping, or None if the collection does not exist
        """


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Result of looking up one template collection.

    Attributes:
        base_name: Collection family that was requested
        locale: Locale of the candidate collection ("" for root)
        status: Load status (success, not_found, error)
        error: Exception if status is ERROR, None otherwise
    """

    base_name: BaseName
    locale: LocaleCode
    status: LoadStatus
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        """Check if the collection was found."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        """Check if the lookup failed with an error."""
        return self.status == LoadStatus.ERROR


class MappingTemplateStore:
    """Immutable in-memory template store.

    Example:
        >>> store = MappingTemplateStore({
        ...     ("shop.errors.Code", ""): {"OUT_OF_STOCK": "Item {0} is out of stock"},
        ...     ("shop.errors.Code", "de"): {"OUT_OF_STOCK": "Artikel {0} ist ausverkauft"},
        ... })
        >>> store.lookup("shop.errors.Code", "de")["OUT_OF_STOCK"]
        'Artikel {0} ist ausverkauft'
    """

    __slots__ = ("_collections",)

    def __init__(
        self,
        collections: Mapping[tuple[BaseName, LocaleCode], Mapping[str, str]] | None = None,
    ) -> None:
        """Copy the collections into read-only mappings.

        Args:
            collections: Templates keyed by (base name, locale); locales may
                use BCP-47 or POSIX form

        Raises:
            TypeError: If a template is not a string
        """
        frozen: dict[tuple[BaseName, LocaleCode], TemplateCollection] = {}
        for (base_name, locale), templates in (collections or {}).items():
            for key, template in templates.items():
                if not isinstance(template, str):
                    msg = (
                        f"Template {key!r} of {base_name} [{locale!r}] must be str, "
                        f"got {type(template).__name__}"
                    )
                    raise TypeError(msg)
            frozen[(base_name, normalize_locale(locale))] = MappingProxyType(dict(templates))
        self._collections: Mapping[tuple[BaseName, LocaleCode], TemplateCollection] = (
            MappingProxyType(frozen)
        )

    @classmethod
    def from_properties(
        cls, sources: Mapping[tuple[BaseName, LocaleCode], str]
    ) -> MappingTemplateStore:
        """Build a store from .properties source text.

        Raises:
            TemplateLoadError: If any source is malformed
        """
        return cls(
            {
                (base_name, locale): parse_properties(text, f"<{base_name}:{locale}>")
                for (base_name, locale), text in sources.items()
            }
        )

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"MappingTemplateStore(collections={len(self._collections)})"

    def lookup(self, base_name: BaseName, locale: LocaleCode) -> TemplateCollection | None:
        """Return the stored collection or None."""
        return self._collections.get((base_name, normalize_locale(locale)))


class _CollectionCache:
    """Bounded LRU of parsed collections, including negative results.

    OrderedDict provides LRU semantics with O(1) operations; RLock makes
    concurrent lookups of the same store safe. Failed loads are not
    cached, so a fixed file is picked up on the next lookup.
    """

    __slots__ = ("_entries", "_lock", "_max_size")

    def __init__(self, max_size: int) -> None:
        if max_size < 1:
            msg = f"cache_size must be positive, got {max_size}"
            raise ValueError(msg)
        self._entries: OrderedDict[tuple[str, str], TemplateCollection | None] = OrderedDict()
        self._lock = RLock()
        self._max_size = max_size

    def get_or_load(
        self,
        key: tuple[str, str],
        load: Callable[[], TemplateCollection | None],
    ) -> TemplateCollection | None:
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                return self._entries[key]

        collection = load()

        with self._lock:
            # Double-check: another thread may have loaded it meanwhile
            if key in self._entries:
                return self._entries[key]
            if len(self._entries) >= self._max_size:
                self._entries.popitem(last=False)
            self._entries[key] = collection
            return collection

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _validate_locale(locale: LocaleCode) -> None:
    """Reject locales that could change the collection's directory.

    Raises:
        TemplateLoadError: If locale contains anything but letters, digits and '_'
    """
    if not _LOCALE_PATTERN.fullmatch(locale):
        raise TemplateLoadError(ErrorTemplate.unsafe_path("locale", locale))


def _collection_file_name(name: str, locale: LocaleCode) -> str:
    """File name of a collection: 'Code' + 'de_DE' -> 'Code_de_DE.properties'."""
    if locale:
        return f"{name}{LOCALE_SEPARATOR}{locale}{BUNDLE_SUFFIX}"
    return f"{name}{BUNDLE_SUFFIX}"


def _parse_collection(source: str, source_path: str) -> TemplateCollection:
    collection = MappingProxyType(parse_properties(source, source_path))
    logger.debug("Loaded template collection %s (%d keys)", source_path, len(collection))
    return collection


class PathTemplateStore:
    """File system template store laid out like Java resource bundles.

    A base name maps to directories by its dots, and the locale is
    appended to the file name:

        base name 'shop.errors.Code', locale 'de_DE'
        -> <root_dir>/shop/errors/Code_de_DE.properties

    Security:
        Base name segments must be identifiers and locales may contain only
        letters, digits and underscores. Every resolved path is verified
        against the fixed root directory.

    Example:
        >>> store = PathTemplateStore("locales")
        >>> store.describe_path("shop.errors.Code", "de")
        'locales/shop/errors/Code_de.properties'
    """

    __slots__ = ("_cache", "_resolved_root", "root_dir")

    def __init__(self, root_dir: str | Path, *, cache_size: int = MAX_BUNDLE_CACHE_SIZE) -> None:
        """Initialize the store.

        Args:
            root_dir: Directory holding the collections
            cache_size: Maximum cached (base name, locale) lookups

        Raises:
            ValueError: If cache_size is not positive
        """
        self.root_dir = Path(root_dir)
        self._resolved_root = self.root_dir.resolve()
        self._cache = _CollectionCache(cache_size)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"PathTemplateStore(root_dir={str(self.root_dir)!r})"

    @staticmethod
    def _validate_base_name(base_name: BaseName) -> list[str]:
        """Split a base name into path segments.

        Raises:
            TemplateLoadError: If any segment is not an identifier
        """
        segments = base_name.split(".")
        if not all(segment.isidentifier() for segment in segments):
            raise TemplateLoadError(ErrorTemplate.unsafe_path("base name", base_name))
        return segments

    @staticmethod
    def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
        """Check if full_path is safely within base_dir."""
        try:
            full_path.resolve().relative_to(base_dir.resolve())
            return True
        except ValueError:
            return False

    def _collection_path(self, base_name: BaseName, locale: LocaleCode) -> Path:
        segments = self._validate_base_name(base_name)
        _validate_locale(locale)
        return self.root_dir.joinpath(*segments[:-1], _collection_file_name(segments[-1], locale))

    def describe_path(self, base_name: BaseName, locale: LocaleCode) -> str:
        """Return human-readable path for diagnostics."""
        return self._collection_path(base_name, normalize_locale(locale)).as_posix()

    def lookup(self, base_name: BaseName, locale: LocaleCode) -> TemplateCollection | None:
        """Load and cache the collection file.

        Returns:
            Parsed collection, or None if the file does not exist

        Raises:
            TemplateLoadError: If the path is unsafe or the file cannot be
                read or parsed
        """
        locale = normalize_locale(locale)
        return self._cache.get_or_load(
            (base_name, locale), lambda: self._load(base_name, locale)
        )

    def _load(self, base_name: BaseName, locale: LocaleCode) -> TemplateCollection | None:
        path = self._collection_path(base_name, locale)
        if not self._is_safe_path(self._resolved_root, path):
            raise TemplateLoadError(ErrorTemplate.unsafe_path("base name", base_name))

        source_path = path.as_posix()
        try:
            source = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            diagnostic = ErrorTemplate.load_failed(source_path, str(e))
            raise TemplateLoadError(diagnostic, source_path=source_path) from e
        return _parse_collection(source, source_path)

    def clear_cache(self) -> None:
        """Drop all cached collections so the next lookup rereads the files."""
        self._cache.clear()

    def cache_size(self) -> int:
        """Get current number of cached lookups."""
        return len(self._cache)


class PackageTemplateStore:
    """Template store reading collections that sit next to a Python module.

    The Python counterpart of classpath resource bundles and the default
    store of MessageResolver. The base name is split into the longest
    already-imported module prefix and a remainder naming the collection:

        base name 'shop.errors.OrderError.Code', locale 'de'
        -> module shop.errors, file OrderError.Code_de.properties
           in the directory (or package resources) of shop/errors.py

    Only modules already in sys.modules are considered, so a lookup never
    imports code. Collections are read through importlib.resources and
    therefore also work from zipped packages.
    """

    __slots__ = ("_cache",)

    def __init__(self, *, cache_size: int = MAX_BUNDLE_CACHE_SIZE) -> None:
        """Initialize the store.

        Args:
            cache_size: Maximum cached (base name, locale) lookups

        Raises:
            ValueError: If cache_size is not positive
        """
        self._cache = _CollectionCache(cache_size)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return "PackageTemplateStore()"

    @staticmethod
    def split_base_name(base_name: BaseName) -> tuple[str, str] | None:
        """Split a base name into (module name, collection name).

        Returns:
            The longest imported module prefix and the rest, or None when no
            prefix names an imported module

        Example:
            >>> PackageTemplateStore.split_base_name("faultcodes.codes.Missing")
            ('faultcodes.codes', 'Missing')
        """
        segments = base_name.split(".")
        for end in range(len(segments) - 1, 0, -1):
            module_name = ".".join(segments[:end])
            if module_name in sys.modules:
                return module_name, ".".join(segments[end:])
        return None

    def describe_path(self, base_name: BaseName, locale: LocaleCode) -> str:
        """Return human-readable location for diagnostics."""
        split = self.split_base_name(base_name)
        if split is None:
            return f"<unimported>:{base_name}"
        module_name, name = split
        return f"{module_name}:{_collection_file_name(name, normalize_locale(locale))}"

    def lookup(self, base_name: BaseName, locale: LocaleCode) -> TemplateCollection | None:
        """Load and cache the collection next to the owning module.

        Returns:
            Parsed collection, or None if no module or file matches

        Raises:
            TemplateLoadError: If the name is unsafe or the resource cannot
                be read or parsed
        """
        locale = normalize_locale(locale)
        return self._cache.get_or_load(
            (base_name, locale), lambda: self._load(base_name, locale)
        )

    def _load(self, base_name: BaseName, locale: LocaleCode) -> TemplateCollection | None:
        split = self.split_base_name(base_name)
        if split is None:
            return None
        module_name, name = split
        _validate_locale(locale)
        if not all(segment.isidentifier() for segment in name.split(".")):
            raise TemplateLoadError(ErrorTemplate.unsafe_path("base name", base_name))

        file_name = _collection_file_name(name, locale)
        source_path = f"{module_name}:{file_name}"
        try:
            resource = importlib.resources.files(sys.modules[module_name]).joinpath(file_name)
            if not resource.is_file():
                return None
            source = resource.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError, TypeError, ValueError) as e:
            # TypeError/ValueError: module without a loader or resource reader
            diagnostic = ErrorTemplate.load_failed(source_path, str(e))
            raise TemplateLoadError(diagnostic, source_path=source_path) from e
        return _parse_collection(source, source_path)

    def clear_cache(self) -> None:
        """Drop all cached collections so the next lookup rereads the files."""
        self._cache.clear()

    def cache_size(self) -> int:
        """Get current number of cached lookups."""
        return len(self._cache)

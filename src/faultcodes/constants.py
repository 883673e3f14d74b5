"""Shared constants for faultcodes.

Centralized configuration constants used by the resolver, the template
stores and the message formatter. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Locale defaults: last-resort locale and the root collection marker
- Cache limits: Memory bounds for caching subsystems
- Input limits: Size constraints for template collections
- Store layout: File naming for template collections

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale defaults
    "DEFAULT_LOCALE",
    "ROOT_LOCALE",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    "MAX_BUNDLE_CACHE_SIZE",
    "MAX_PATTERN_CACHE_SIZE",
    # Input limits
    "MAX_BUNDLE_SIZE",
    "MAX_CHOICE_DEPTH",
    # Store layout
    "BUNDLE_SUFFIX",
    "LOCALE_SEPARATOR",
]

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Locale used when neither an explicit default nor the system locale is known.
DEFAULT_LOCALE: str = "en_US"

# Locale code of the root (locale-independent) template collection.
# "errors.properties" is the root of "errors_de.properties".
ROOT_LOCALE: str = ""

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached Babel Locale instances.
MAX_LOCALE_CACHE_SIZE: int = 128

# Maximum cached template collections per file-backed store.
# Each entry is one (base_name, locale) pair, including negative results.
MAX_BUNDLE_CACHE_SIZE: int = 256

# Maximum parsed placeholder patterns kept by the formatter.
MAX_PATTERN_CACHE_SIZE: int = 512

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Template collections larger than this (in characters) are rejected.
MAX_BUNDLE_SIZE: int = 1024 * 1024

# Nested choice formats deeper than this are rendered without recursion.
MAX_CHOICE_DEPTH: int = 16

# ============================================================================
# STORE LAYOUT
# ============================================================================

# File suffix of a template collection.
BUNDLE_SUFFIX: str = ".properties"

# Joins base name and locale in a collection file name: "Code_de_DE.properties"
LOCALE_SEPARATOR: str = "_"

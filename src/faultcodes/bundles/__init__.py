"""Template store package.

Provides the locale-keyed, read-only sources of message templates that
the resolver consults before a code's default format.

Submodules:
    types      - PEP 695 type aliases (BaseName, LocaleCode, MessageKey, Template)
    properties - Parser for Java-style .properties collections
    stores     - TemplateStore protocol, MappingTemplateStore,
                 PathTemplateStore, PackageTemplateStore, LoadResult

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from faultcodes.bundles.properties import parse_properties
from faultcodes.bundles.stores import (
    LoadResult,
    MappingTemplateStore,
    PackageTemplateStore,
    PathTemplateStore,
    TemplateStore,
)
from faultcodes.bundles.types import (
    BaseName,
    LocaleCode,
    MessageKey,
    Template,
    TemplateCollection,
)

__all__ = [
    # Store protocol and implementations
    "TemplateStore",
    "MappingTemplateStore",
    "PathTemplateStore",
    "PackageTemplateStore",
    # Load tracking
    "LoadResult",
    # Parsing
    "parse_properties",
    # Type aliases for user code type annotations
    "BaseName",
    "LocaleCode",
    "MessageKey",
    "Template",
    "TemplateCollection",
]

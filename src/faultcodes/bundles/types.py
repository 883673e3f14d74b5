"""Type aliases for the template store domain.

Provides semantic type aliases used throughout the bundles package
and by user code implementing a TemplateStore.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "BaseName",
    "LocaleCode",
    "MessageKey",
    "Template",
    "TemplateCollection",
]

type BaseName = str
"""Dotted name of a collection family (e.g., 'myapp.errors.OrderError.Code')."""

type LocaleCode = str
"""POSIX locale code (e.g., 'de', 'de_DE'); '' addresses the root collection."""

type MessageKey = str
"""Key of one template inside a collection (by default the code's name)."""

type Template = str
"""Message template with positional placeholders ('Order {0} not found')."""

type TemplateCollection = Mapping[MessageKey, Template]
"""All templates of one base name for one locale."""

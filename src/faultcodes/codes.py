"""Fault code capability and the enumeration base that implements it.

A fault code is a named member of a closed set. To take part in message
resolution it only has to expose four read-only accessors; no base class
is required:

    name                       stable identifier, unique within its set
    message_key                key looked up in template collections (default: name)
    default_format             template used when no collection has the key (or None)
    resource_bundle_base_name  collection family to consult
                               (default: "<module>.<qualname>" of the set)

LocalizedFaultCode provides all four for an Enum. A member declared with a
string uses it as the default format; a member declared with auto() has
none and is resolved from template collections, or degrades to its name:

    class Code(LocalizedFaultCode):
        ERROR_1 = "Error with one argument: {0}"
        ERROR_2 = "Error with two arguments: {0}, {1}"
        ERROR_3 = auto()

    Code.ERROR_1.get_message("42")        # 'Error with one argument: 42'
    Code.ERROR_3.get_message("a", "b")    # 'ERROR_3 [a, b]'

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from faultcodes.resolver import get_default_resolver

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "Fault",
    "FaultCode",
    "LocalizedFaultCode",
    "SimpleFaultCode",
]


@runtime_checkable
class FaultCode(Protocol):
    """Capability required from any value used as a fault code.

    Accessors must be pure: the same code always answers the same values.
    """

    @property
    def name(self) -> str:
        """Stable identifier, unique within the code's defining set."""
        ...

    @property
    def message_key(self) -> str:
        """Key used to look the template up in a collection."""
        ...

    @property
    def default_format(self) -> str | None:
        """Template used when no collection provides one, or None."""
        ...

    @property
    def resource_bundle_base_name(self) -> str:
        """Base name of the template collections for this code."""
        ...


@runtime_checkable
class Fault[C: FaultCode](Protocol):
    """An error carrying a fault code for programmatic branching.

    Example:
        >>> def retry_allowed(error: Exception) -> bool:
        ...     return isinstance(error, Fault) and error.code is Code.TIMEOUT
    """

    @property
    def code(self) -> C:
        """The fault code of this error."""
        ...


@dataclass(frozen=True, slots=True)
class _Unformatted:
    """Value of members declared with auto(): unique per name, no format."""

    name: str

    def __repr__(self) -> str:
        return "auto()"


class LocalizedFaultCode(Enum):
    """Enum base class implementing FaultCode.

    Member values are either a default format string or auto(). Override
    message_key, default_format or resource_bundle_base_name in a subclass
    to change where templates come from.

    Note:
        Two members with the same format string would be aliases of each
        other (standard Enum semantics); give every member its own text.
    """

    @staticmethod
    def _generate_next_value_(
        name: str, start: int, count: int, last_values: list[object]
    ) -> object:
        return _Unformatted(name)

    @property
    def message_key(self) -> str:
        """Collection key of this code: its name."""
        return self.name

    @property
    def default_format(self) -> str | None:
        """Member value when it is a string, otherwise None."""
        value = self.value
        return value if isinstance(value, str) else None

    @property
    def resource_bundle_base_name(self) -> str:
        """Fully qualified name of the enumeration, e.g. 'shop.errors.OrderError.Code'."""
        cls = type(self)
        return f"{cls.__module__}.{cls.__qualname__}"

    def get_message(self, *args: object, locale: str | Locale | None = None) -> str:
        """Resolve this code's message with the default resolver.

        Args:
            *args: Positional template arguments
            locale: Locale to resolve for (default: process default locale)

        Returns:
            The resolved message; never raises for missing or broken templates
        """
        return get_default_resolver().resolve(self, *args, locale=locale)


@dataclass(frozen=True, slots=True)
class SimpleFaultCode:
    """FaultCode for codes that are not enum members.

    Attributes:
        name: Stable identifier
        default_format: Template used when no collection has the key
        resource_bundle_base_name: Collection family, also the identity of
            the defining set
        message_key: Collection key; defaults to name

    Example:
        >>> TIMEOUT = SimpleFaultCode(
        ...     "TIMEOUT", "Timed out after {0} s", resource_bundle_base_name="net.errors"
        ... )
        >>> TIMEOUT.message_key
        'TIMEOUT'
    """

    name: str
    default_format: str | None = None
    resource_bundle_base_name: str = ""
    message_key: str = ""

    def __post_init__(self) -> None:
        """Validate the name and default the message key.

        Raises:
            ValueError: If name is empty
        """
        if not self.name:
            msg = "Fault code name cannot be empty"
            raise ValueError(msg)
        if not self.message_key:
            object.__setattr__(self, "message_key", self.name)
        if not self.resource_bundle_base_name:
            cls = type(self)
            object.__setattr__(
                self, "resource_bundle_base_name", f"{cls.__module__}.{cls.__qualname__}"
            )

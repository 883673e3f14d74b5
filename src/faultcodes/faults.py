"""Exceptions that carry a fault code.

FaultError owns one fault code and its arguments. The message is resolved
once, when the error is created, and becomes the standard exception
message, so str(error), logging and tracebacks all show it:

    class OrderError(FaultError):
        class Code(LocalizedFaultCode):
            MISSING = "Order {0} not found"
            LOCKED = auto()

        code_type = Code

    try:
        raise OrderError(OrderError.Code.MISSING, 1042)
    except OrderError as e:
        if e.code is OrderError.Code.MISSING:
            ...

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from faultcodes.codes import FaultCode
from faultcodes.resolver import MessageResolver, get_default_resolver

if TYPE_CHECKING:
    from babel import Locale

__all__ = ["FaultError"]


class FaultError(Exception):
    """Exception owning a fault code and the arguments of its message.

    Class Attributes:
        resolver: Resolver used for this class's messages (None: the
            process default resolver at the time of use)
        code_type: If set, the only type of code this class accepts

    Attributes:
        code: The fault code, for programmatic branching
        message_args: Arguments the message was resolved with
    """

    resolver: ClassVar[MessageResolver | None] = None
    code_type: ClassVar[type | None] = None

    def __init__(
        self,
        code: FaultCode,
        *args: object,
        cause: BaseException | None = None,
        locale: str | Locale | None = None,
    ) -> None:
        """Create the error and resolve its message.

        Args:
            code: Fault code
            *args: Positional message arguments
            cause: Underlying exception, stored as __cause__
            locale: Locale of the message (default: process default locale)

        Raises:
            TypeError: If code is not a fault code, or not an instance of
                code_type when the class restricts it
        """
        self._check_code(code)
        self._code = code
        self._message_args = args
        super().__init__(self._get_resolver().resolve(code, *args, locale=locale))
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def _check_code(cls, code: object) -> None:
        if cls.code_type is not None and not isinstance(code, cls.code_type):
            msg = (
                f"{cls.__name__} requires a {cls.code_type.__qualname__} code, "
                f"got {type(code).__qualname__}"
            )
            raise TypeError(msg)
        if not isinstance(code, FaultCode):
            msg = f"{cls.__name__} requires a fault code, got {type(code).__qualname__}"
            raise TypeError(msg)

    @classmethod
    def _get_resolver(cls) -> MessageResolver:
        return cls.resolver if cls.resolver is not None else get_default_resolver()

    @property
    def code(self) -> FaultCode:
        """The fault code of this error."""
        return self._code

    @property
    def message_args(self) -> tuple[object, ...]:
        """The message arguments, in placeholder order."""
        return self._message_args

    def get_localized_message(self, locale: str | Locale) -> str:
        """Resolve this error's message again for another locale.

        Example:
            >>> error = OrderError(OrderError.Code.MISSING, 1042, locale="en_US")
            >>> error.get_localized_message("de_DE")
            'Bestellung 1042 nicht gefunden'
        """
        return self._get_resolver().resolve(self._code, *self._message_args, locale=locale)

    def __reduce__(self) -> tuple[Any, ...]:
        # Rebuild without resolving again: the unpickled message is the original one
        message = self.args[0] if self.args else ""
        return (_restore_fault_error, (type(self), message, self.__cause__), self.__dict__)


def _restore_fault_error(
    cls: type[FaultError], message: str, cause: BaseException | None
) -> FaultError:
    error = cls.__new__(cls)
    Exception.__init__(error, message)
    if cause is not None:
        error.__cause__ = cause
    return error

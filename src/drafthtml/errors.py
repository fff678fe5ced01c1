"""Error hierarchy for drafthtml.

Every public error class inherits from :class:`DraftHtmlError`. Each carries
a machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Export errors are fatal to the conversion call.  Import never raises for
missing or malformed attributes; it substitutes empty strings instead.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the library can raise."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    CONVERSION_ERROR = "CONVERSION_ERROR"
    UNRECOGNIZED_STYLE = "UNRECOGNIZED_STYLE"
    UNRECOGNIZED_ENTITY = "UNRECOGNIZED_ENTITY"
    MALFORMED_ENTITY_DATA = "MALFORMED_ENTITY_DATA"
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class DraftHtmlError(Exception):
    """Base exception for all drafthtml errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class ConfigurationError(DraftHtmlError):
    """The toolbar configuration table is incomplete or inconsistent.

    Context keys: ``kind``, ``id``, ``namespace``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.CONFIGURATION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Conversion errors
# ---------------------------------------------------------------------------

class ConversionError(DraftHtmlError):
    """Base class for errors raised while exporting a document to HTML.

    Context varies by subclass.
    """

    def __init__(
        self,
        code: str = ErrorCode.CONVERSION_ERROR,
        message: str = "Conversion error",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class UnrecognizedStyleError(ConversionError):
    """An inline style id is not present in the toolbar configuration.

    Context keys: ``style_id``, ``block_key``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.UNRECOGNIZED_STYLE,
            message=message,
            context=context,
            cause=cause,
        )


class UnrecognizedEntityError(ConversionError):
    """An entity type is not present in the toolbar configuration.

    Context keys: ``entity_type``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.UNRECOGNIZED_ENTITY,
            message=message,
            context=context,
            cause=cause,
        )


class MalformedEntityDataError(ConversionError):
    """An entity is missing a field its renderer requires.

    Context keys: ``entity_type``, ``field``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.MALFORMED_ENTITY_DATA,
            message=message,
            context=context,
            cause=cause,
        )


class EntityNotFoundError(ConversionError):
    """An entity range references a key absent from the entity map.

    Context keys: ``entity_key``, ``block_key``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.ENTITY_NOT_FOUND,
            message=message,
            context=context,
            cause=cause,
        )

"""
Error taxonomy for the Image Converter GUI.

Every failure the application reports to the user is a BaseAppError: a
category (ErrorType), a stable code, the message shown in the window and an
optional technical message that only reaches the log.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Which part of the workflow an error belongs to."""

    FILE = "file"
    VALIDATION = "validation"
    ENCODING = "encoding"
    UPLOAD = "upload"
    CONVERT = "convert"
    REMOTE = "remote"
    SYSTEM = "system"
    CONFIG = "config"


class ErrorCode(Enum):
    """Stable identifiers logged with every error."""

    # Intake
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    READ_FAILED = "READ_FAILED"

    # User input
    INVALID_INPUT = "INVALID_INPUT"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"

    CONFIG_INVALID = "CONFIG_INVALID"

    # Upload / convert
    UPLOAD_FAILED = "UPLOAD_FAILED"
    CONVERSION_FAILED = "CONVERSION_FAILED"
    MISSING_CONVERSION_ID = "MISSING_CONVERSION_ID"
    HTTP_ERROR = "HTTP_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"

    TIMEOUT = "TIMEOUT"
    MEMORY_ERROR = "MEMORY_ERROR"
    OS_ERROR = "OS_ERROR"

    UNKNOWN = "UNKNOWN"


class ErrorSeverity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class BaseAppError(Exception):
    """
    Root of the application's exception hierarchy.

    ``str()`` gives the user-facing message so an error can be shown as-is;
    ``repr()`` carries the metadata for logs.
    """

    type: ErrorType
    code: ErrorCode
    user_message: str
    technical_message: str | None = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.user_message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self.type.value}, code={self.code.value}, message={self.user_message!r})"


class _CategorizedError(BaseAppError):
    """An error whose category and default severity are fixed by its class."""

    category: ClassVar[ErrorType]
    default_severity: ClassVar[ErrorSeverity] = ErrorSeverity.MEDIUM

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        context: dict[str, Any] | None = None,
        severity: ErrorSeverity | None = None,
    ):
        super().__init__(
            type=self.category,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity or self.default_severity,
            context=dict(context or {}),
        )


class FileError(_CategorizedError):
    """The chosen file is missing or cannot be accessed."""

    category = ErrorType.FILE


class ValidationError(_CategorizedError):
    """Missing or invalid user input detected before any network activity."""

    category = ErrorType.VALIDATION
    default_severity = ErrorSeverity.LOW

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        field: str | None = None,
        technical_message: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(code, user_message, technical_message, context)
        if field:
            self.context["field"] = field

    @property
    def field(self) -> str | None:
        """Name of the offending input, if known."""
        return self.context.get("field")


class EncodingError(_CategorizedError):
    """The file could not be read or encoded for transfer."""

    category = ErrorType.ENCODING

    def __init__(
        self,
        user_message: str,
        technical_message: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(ErrorCode.READ_FAILED, user_message, technical_message, context)


class RemoteServiceError(_CategorizedError):
    """Transport failure, non-2xx status or malformed body from the conversion service."""

    category = ErrorType.REMOTE
    default_severity = ErrorSeverity.HIGH

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        status_code: int | None = None,
        technical_message: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(code, user_message, technical_message, context)
        if status_code is not None:
            self.context["status_code"] = status_code

    @property
    def status_code(self) -> int | None:
        """HTTP status of the failed reply, if the server answered at all."""
        return self.context.get("status_code")


class UploadError(_CategorizedError):
    """The upload phase failed; the convert phase was not started."""

    category = ErrorType.UPLOAD
    default_severity = ErrorSeverity.HIGH

    def __init__(self, cause: str, technical_message: str | None = None, context: dict[str, Any] | None = None):
        super().__init__(ErrorCode.UPLOAD_FAILED, f"Failed to upload file: {cause}", technical_message, context)


class ConvertError(_CategorizedError):
    """The convert phase failed, or could not be started for lack of an identifier."""

    category = ErrorType.CONVERT
    default_severity = ErrorSeverity.HIGH

    def __init__(
        self,
        cause: str,
        code: ErrorCode = ErrorCode.CONVERSION_FAILED,
        technical_message: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(code, f"Failed to convert file: {cause}", technical_message, context)


class SystemError(_CategorizedError):
    """Operating system or interpreter level failure."""

    category = ErrorType.SYSTEM
    default_severity = ErrorSeverity.HIGH


class ConfigError(_CategorizedError):
    """A stored or supplied setting is unusable."""

    category = ErrorType.CONFIG


# Built-in exceptions in lookup order; subclasses must precede their bases
_BUILTIN_ERRORS: tuple[tuple[type[Exception], type[_CategorizedError], ErrorCode, str], ...] = (
    (FileNotFoundError, FileError, ErrorCode.FILE_NOT_FOUND, "File not found"),
    (PermissionError, FileError, ErrorCode.PERMISSION_DENIED, "Permission denied"),
    (TimeoutError, SystemError, ErrorCode.TIMEOUT, "Operation timed out"),
    (OSError, SystemError, ErrorCode.OS_ERROR, "System error occurred"),
    (ValueError, ValidationError, ErrorCode.INVALID_INPUT, "Invalid input provided"),
    (MemoryError, SystemError, ErrorCode.MEMORY_ERROR, "Insufficient memory"),
)


def map_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """
    Normalize any exception into a BaseAppError.

    Application errors are returned unchanged. Known built-in exceptions map
    to a matching category and code; anything else becomes an UNKNOWN
    SystemError.
    """
    if isinstance(exc, BaseAppError):
        return exc

    technical = f"{type(exc).__name__}: {exc}"
    for builtin, error_cls, code, default_message in _BUILTIN_ERRORS:
        if isinstance(exc, builtin):
            return error_cls(code, str(exc) or default_message, technical_message=technical, context=context)

    logger.warning(f"Unmapped exception type {technical}")
    return SystemError(ErrorCode.UNKNOWN, "An unexpected error occurred", technical_message=technical, context=context)


def describe_cause(exc: BaseException) -> str:
    """
    Return the short cause text shown after a phase prefix.

    Application errors contribute their user message; anything else its
    string form, or its class name when the string is empty.
    """
    if isinstance(exc, BaseAppError):
        return exc.user_message
    return str(exc) or exc.__class__.__name__

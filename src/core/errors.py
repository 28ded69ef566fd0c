"""
Error Kinds for the Registry Layer

Every failure raised by registration, lookup and wrapping carries one of
a small set of error codes so callers can branch on the kind of failure
instead of on the exception class.
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """Kinds of failure surfaced by the registry layer."""
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNKNOWN = "UNKNOWN"
    INTERNAL = "INTERNAL"


class KeyrailError(Exception):
    """Base class for all registry, config and wrapping errors."""

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return f"{self.code.value}: {self.args[0]}"


class NotFoundError(KeyrailError):
    """A type URL, catalogue or primitive kind has nothing registered."""
    code = ErrorCode.NOT_FOUND


class AlreadyExistsError(KeyrailError):
    """A different object is already bound to the requested name."""
    code = ErrorCode.ALREADY_EXISTS


class InvalidArgumentError(KeyrailError):
    """Malformed entry, key material or unsupported version floor."""
    code = ErrorCode.INVALID_ARGUMENT


class UnknownError(KeyrailError):
    """Failure with no more specific kind."""
    code = ErrorCode.UNKNOWN


class InternalError(KeyrailError):
    """A wrapper or key manager failed for reasons unrelated to key mismatch."""
    code = ErrorCode.INTERNAL

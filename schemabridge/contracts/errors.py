"""
Error Codes and Exceptions

Two kinds of failure exist in this package:

- FATAL: the bytes cannot become a valid record (newer version than the code
  understands, corrupt payload, broken migration chain). These raise.
- TOLERABLE: a type name refers to a module or type that is not loaded.
  These are returned as Error records so callers choose the fallback.

Both kinds share one ErrorCode enumeration so they can be logged and
compared uniformly.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Tuple


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """Explicit error codes. No silent fallbacks."""
    # Payload errors
    VERSION_MISMATCH = auto()
    MALFORMED_PAYLOAD = auto()
    PAYLOAD_NOT_ENCODABLE = auto()

    # Authoring errors
    INVALID_MIGRATION_CHAIN = auto()

    # Binding errors (tolerable)
    UNRESOLVED_MODULE = auto()
    TYPE_NOT_FOUND = auto()


@dataclass(frozen=True)
class Error:
    """
    Immutable error representation with context.
    Errors are data, not exceptions - they can be returned and inspected.
    """
    code: ErrorCode
    message: str
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def with_context(self, key: str, value: str) -> Error:
        """Return new Error with additional context (immutable)."""
        return Error(
            code=self.code,
            message=self.message,
            context=self.context + ((key, value),)
        )


# =============================================================================
# EXCEPTIONS (Fatal conditions only)
# =============================================================================

class SerializationError(Exception):
    """Base class for fatal persistence errors."""

    code: ErrorCode = ErrorCode.MALFORMED_PAYLOAD

    def to_error(self) -> Error:
        return Error(code=self.code, message=str(self))


class VersionMismatchError(SerializationError):
    """
    Data version cannot be read by the target record type.

    Raised when the data is newer than the record's declared version, or when
    an initial record receives a version other than 0 (legacy) or 1.
    """

    code = ErrorCode.VERSION_MISMATCH

    def __init__(
        self,
        data_version: int,
        supported_version: int,
        record_type: Optional[type] = None,
        message: Optional[str] = None,
    ):
        self.data_version = data_version
        self.supported_version = supported_version
        self.record_type = record_type
        if message is None:
            type_name = record_type.__name__ if record_type is not None else "record"
            message = (
                f"Cannot deserialize {type_name}: data version {data_version} "
                f"is not readable by version {supported_version}"
            )
        super().__init__(message)

    def to_error(self) -> Error:
        error = super().to_error()
        error = error.with_context("data_version", str(self.data_version))
        return error.with_context("supported_version", str(self.supported_version))


class MalformedPayloadError(SerializationError):
    """The structured payload could not be decoded (corrupt or truncated)."""

    code = ErrorCode.MALFORMED_PAYLOAD


class PayloadEncodingError(SerializationError):
    """A record document holds a value the payload format cannot represent."""

    code = ErrorCode.PAYLOAD_NOT_ENCODABLE


class MigrationChainError(SerializationError, TypeError):
    """A record type declares an invalid predecessor chain (authoring error)."""

    code = ErrorCode.INVALID_MIGRATION_CHAIN

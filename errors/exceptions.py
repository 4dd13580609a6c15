"""
Exception classes for the session store.

Every failure raised by the store is an AppException subclass carrying an
error code and a details dictionary. Session identifiers are bearer
credentials, so messages only ever show an identifier's prefix; the full
value is available to the caller through the exception attributes and
details, never through str(exc).
"""

from typing import Any, Optional

from errors.codes import ErrorCode, is_recoverable

# Hex characters of a session identifier that are safe to display
SESSION_ID_PREFIX_LENGTH = 8


def redact_session_id(session_id: str) -> str:
    """
    Shorten a session identifier to a prefix suitable for logs and messages.

    Identifiers no longer than the prefix are returned unchanged, since
    they cannot be real credentials.
    """
    if len(session_id) <= SESSION_ID_PREFIX_LENGTH:
        return session_id
    return session_id[:SESSION_ID_PREFIX_LENGTH] + "..."


class AppException(Exception):
    """
    Base class for session store failures.

    Attributes:
        error_code: The ErrorCode naming the failure
        message: Human-readable description, safe to log
        details: Optional structured context for programmatic handling
    """

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: Optional[dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def recoverable(self) -> bool:
        """True when the caller is expected to handle this and carry on."""
        return is_recoverable(self.error_code)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the exception to a dictionary for JSON serialization.

        Returns:
            Dictionary containing error_code, message, and details
        """
        result = {
            "error_code": self.error_code.value,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(error_code={self.error_code.value!r}, "
            f"message={self.message!r})"
        )


class IdentifierGenerationFailedError(AppException):
    """
    Raised when the secure random source cannot supply a session identifier.

    Covers both a source that raises and one that returns the wrong number
    of bytes. The caller decides whether to retry or reject the request.
    """

    def __init__(
        self,
        message: str = "Could not read enough bytes from the secure random source",
        requested: Optional[int] = None,
        received: Optional[int] = None,
    ):
        details: dict[str, Any] = {}
        if requested is not None:
            details["requested_bytes"] = requested
        if received is not None:
            details["received_bytes"] = received
        super().__init__(
            error_code=ErrorCode.IDENTIFIER_GENERATION_FAILED,
            message=message,
            details=details or None,
        )


class SessionNotFoundError(AppException):
    """Raised when no session is registered under an identifier."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(
            error_code=ErrorCode.SESSION_NOT_FOUND,
            message=f"Cannot find session {redact_session_id(session_id)}",
            details={"session_id": session_id},
        )


class KeyNotFoundError(AppException):
    """Raised when a session's data bag has no binding for a key."""

    def __init__(self, key: str, session_id: str):
        self.key = key
        self.session_id = session_id
        super().__init__(
            error_code=ErrorCode.KEY_NOT_FOUND,
            message=f"Key {key!r} not found in session {redact_session_id(session_id)}",
            details={"key": key, "session_id": session_id},
        )

"""
Error handling module for the session store.

This module provides:
- ErrorCode enum naming each failure kind, with its recoverability
- AppException and the three failures the store raises
- redact_session_id for showing identifiers in messages and logs
"""

from errors.codes import ErrorCode, is_recoverable
from errors.exceptions import (
    AppException,
    IdentifierGenerationFailedError,
    KeyNotFoundError,
    SessionNotFoundError,
    redact_session_id,
)

__all__ = [
    "ErrorCode",
    "is_recoverable",
    "AppException",
    "IdentifierGenerationFailedError",
    "KeyNotFoundError",
    "SessionNotFoundError",
    "redact_session_id",
]

"""
Error code catalog for the session store.

Each code names one way a session store operation can fail and records
whether the caller can be expected to recover from it without giving up
on the work in hand.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """
    Enumeration of the session store's failure kinds.

    - Lookup misses are expected during normal traffic: a stale cookie or
      an unset key. The caller starts a new session or uses a default.
    - Entropy failures mean the process could not mint an identifier at
      all. The caller must abort or retry the operation that needed it.
    """

    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    """No session is registered under the identifier"""

    KEY_NOT_FOUND = "KEY_NOT_FOUND"
    """The session's data bag has no binding for the key"""

    IDENTIFIER_GENERATION_FAILED = "IDENTIFIER_GENERATION_FAILED"
    """Secure random source could not supply enough bytes"""


RECOVERABLE_CODES: frozenset[ErrorCode] = frozenset({
    ErrorCode.SESSION_NOT_FOUND,
    ErrorCode.KEY_NOT_FOUND,
})


def is_recoverable(error_code: ErrorCode) -> bool:
    """
    Whether a failure is an expected condition the caller handles locally.

    Args:
        error_code: The error code to classify

    Returns:
        True for lookup misses, False for entropy failures
    """
    return error_code in RECOVERABLE_CODES

"""
Session identifier generation.

Identifiers are drawn from a cryptographically secure random source and
hex encoded. The default length of 64 bytes yields a 128 character
lowercase string carrying 512 bits of entropy. Collisions are not checked.
"""

import logging
import secrets
from typing import Callable

from errors.exceptions import IdentifierGenerationFailedError

logger = logging.getLogger(__name__)

# Number of random bytes per identifier, and the bounds a caller may choose
SESSION_ID_LENGTH = 64
MAX_SESSION_ID_LENGTH = 256

# Given N, returns exactly N bytes or raises
RandomSource = Callable[[int], bytes]


def validate_session_id_length(length: int) -> int:
    """
    Check that an identifier length keeps at least 512 bits of entropy.

    Raises:
        TypeError: If length is not an int.
        ValueError: If length is outside SESSION_ID_LENGTH..MAX_SESSION_ID_LENGTH.
    """
    if isinstance(length, bool) or not isinstance(length, int):
        raise TypeError(f"session_id_length must be an int, got {type(length).__name__}")
    if not SESSION_ID_LENGTH <= length <= MAX_SESSION_ID_LENGTH:
        raise ValueError(
            f"session_id_length must be between {SESSION_ID_LENGTH} and "
            f"{MAX_SESSION_ID_LENGTH} bytes, got {length}"
        )
    return length


def generate_session_id(
    length: int = SESSION_ID_LENGTH,
    random_source: RandomSource = secrets.token_bytes,
) -> str:
    """
    Generate a hex-encoded session identifier.

    Args:
        length: Number of random bytes to draw.
        random_source: Callable returning the requested number of secure
            random bytes.

    Returns:
        Lowercase hexadecimal string of 2 * length characters.

    Raises:
        ValueError: If length would give fewer than 512 bits of entropy.
        IdentifierGenerationFailedError: If the source raises or does not
            return exactly the requested number of bytes.
    """
    validate_session_id_length(length)

    try:
        raw = random_source(length)
    except Exception as e:
        logger.error(
            "Secure random source raised while generating session id",
            extra={"extra_data": {"requested_bytes": length, "error": str(e)}}
        )
        raise IdentifierGenerationFailedError(requested=length) from e

    if raw is None or len(raw) != length:
        received = 0 if raw is None else len(raw)
        logger.error(
            "Secure random source returned a short read",
            extra={"extra_data": {"requested_bytes": length, "received_bytes": received}}
        )
        raise IdentifierGenerationFailedError(requested=length, received=received)

    return bytes(raw).hex()

"""
In-memory session store implementation.

Sessions live in a dictionary owned by the manager for the life of the
process. The registry and every session's data bag are each guarded by
their own lock, so one manager can be shared across request threads.
"""

import logging
import secrets
import threading
from typing import Any, Dict, List, Optional

from errors.exceptions import (
    SESSION_ID_PREFIX_LENGTH,
    KeyNotFoundError,
    SessionNotFoundError,
    redact_session_id,
)
from session.identifiers import (
    SESSION_ID_LENGTH,
    RandomSource,
    generate_session_id,
    validate_session_id_length,
)
from session.store import Session, SessionManager
from telemetry.service import get_telemetry_service


logger = logging.getLogger(__name__)


def _short_id(session_id: str) -> str:
    """Identifier prefix that is safe to write to logs."""
    return session_id[:SESSION_ID_PREFIX_LENGTH]


class MemorySession(Session):
    """
    Memory-backed session.

    Instances are created by MemorySessionManager.new_session(); callers
    should not construct them directly.

    Attributes:
        _sid: The immutable session identifier
        _data: The key-value bag
        _lock: Guards _data
    """

    def __init__(self, session_id: str):
        self._sid = session_id
        self._data: Dict[str, Any] = {}
        self._lock = threading.Lock()

    @property
    def session_id(self) -> str:
        return self._sid

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def get(self, key: str) -> Any:
        with self._lock:
            try:
                return self._data[key]
            except KeyError:
                pass
        raise KeyNotFoundError(key, self._sid)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> List[str]:
        """Snapshot of the keys currently bound in the session."""
        with self._lock:
            return list(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __repr__(self) -> str:
        return f"MemorySession(session_id={redact_session_id(self._sid)!r}, keys={len(self)})"


class MemorySessionManager(SessionManager):
    """
    Registry of MemorySession instances keyed by session identifier.

    Sessions are never removed; the registry grows for the life of the
    manager.

    Attributes:
        session_id_length: Random bytes drawn per identifier
        random_source: Secure random byte source used for identifiers
    """

    def __init__(
        self,
        session_id_length: int = SESSION_ID_LENGTH,
        random_source: RandomSource = secrets.token_bytes,
    ):
        """
        Initialize an empty session registry.

        Args:
            session_id_length: Random bytes per identifier, 64 to 256.
                Defaults to 64, giving 128 character identifiers.
            random_source: Callable returning N secure random bytes.
                Defaults to secrets.token_bytes.

        Raises:
            ValueError: If session_id_length is out of range.
        """
        self.session_id_length = validate_session_id_length(session_id_length)
        self.random_source = random_source
        self._sessions: Dict[str, MemorySession] = {}
        self._lock = threading.Lock()

    def new_session(self) -> MemorySession:
        """
        Create, register and return an empty session.

        Raises:
            IdentifierGenerationFailedError: If the random source fails.
                Nothing is registered in that case.
        """
        sid = generate_session_id(self.session_id_length, self.random_source)
        session = MemorySession(sid)

        with self._lock:
            self._sessions[sid] = session
            total = len(self._sessions)

        logger.info(
            "Session created",
            extra={"extra_data": {
                "session_id_prefix": _short_id(sid),
                "total_sessions": total,
            }}
        )

        telemetry = get_telemetry_service()
        if telemetry is not None:
            telemetry.record_metric("sessions.active", total)

        return session

    def get_session(self, session_id: str) -> MemorySession:
        """
        Look up a session by identifier.

        Raises:
            SessionNotFoundError: If the identifier is not registered.
        """
        with self._lock:
            session: Optional[MemorySession] = self._sessions.get(session_id)

        if session is None:
            logger.debug(
                "Session lookup missed",
                extra={"extra_data": {"session_id_prefix": _short_id(session_id)}}
            )
            raise SessionNotFoundError(session_id)

        return session

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


def create_session_manager(settings: Optional[Any] = None) -> MemorySessionManager:
    """
    Build a session manager from application settings.

    Args:
        settings: Settings providing session_id_length. Loaded via
            get_settings() when omitted.
    """
    if settings is None:
        from config.settings import get_settings
        settings = get_settings()

    return MemorySessionManager(session_id_length=settings.session_id_length)

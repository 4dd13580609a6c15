"""
Session management module.

This module provides an in-process session store: opaque identifiers
drawn from a secure random source, each bound to a mutable key-value
bag, resolvable by identifier for the life of the process.
"""

from session.store import Session, SessionManager
from session.memory_store import MemorySession, MemorySessionManager, create_session_manager
from session.identifiers import SESSION_ID_LENGTH, generate_session_id

__all__ = [
    "Session",
    "SessionManager",
    "MemorySession",
    "MemorySessionManager",
    "create_session_manager",
    "SESSION_ID_LENGTH",
    "generate_session_id",
]

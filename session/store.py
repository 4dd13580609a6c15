"""
Session store abstractions.

This module defines the interfaces a request-handling layer depends on:
a Session holding one client's key-value state, and a SessionManager
that mints sessions and resolves identifiers to them. All methods are
synchronous in-memory operations.
"""

from abc import ABC, abstractmethod
from typing import Any


class Session(ABC):
    """
    A single client's ephemeral state, addressed by an opaque identifier.

    Values are returned exactly as they were stored; the session never
    copies, serializes or otherwise transforms them.
    """

    @property
    @abstractmethod
    def session_id(self) -> str:
        """The identifier assigned at creation. Never changes."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """
        Bind a value to a key, replacing any existing binding.

        Args:
            key: Name of the entry in the session's data bag.
            value: Any application value.
        """

    @abstractmethod
    def get(self, key: str) -> Any:
        """
        Retrieve the value bound to a key.

        Args:
            key: Name of the entry in the session's data bag.

        Returns:
            The value most recently passed to set() for this key.

        Raises:
            KeyNotFoundError: If the key has no binding.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """
        Remove the binding for a key.

        This operation is idempotent - deleting a key that was never set
        does not raise an error.
        """


class SessionManager(ABC):
    """
    Registry of sessions owned by one process.

    Every session reachable through get_session() was created by the
    same manager's new_session().
    """

    @abstractmethod
    def new_session(self) -> Session:
        """
        Create and register a session with a fresh identifier.

        Returns:
            The new, empty session.

        Raises:
            IdentifierGenerationFailedError: If the secure random source
                could not supply an identifier.
        """

    @abstractmethod
    def get_session(self, session_id: str) -> Session:
        """
        Resolve an identifier to its session.

        Raises:
            SessionNotFoundError: If no session has that identifier.
        """

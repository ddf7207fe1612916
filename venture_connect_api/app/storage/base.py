"""
Store base class - defines the storage interface.

Both backends (``MemoryStore`` and ``SQLiteStore``) implement every
method below with identical semantics, so the API can run on either.
Lookups return ``None`` when nothing matches.  Writes raise
``ConflictError`` on a uniqueness violation and ``ValueError`` for a
value the record models reject; in both cases nothing is stored.
User ids on requests, messages and connections are stored as given;
checking that the users exist is the caller's job.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..schemas.collaboration import CollaborationRequestRecord
from ..schemas.connection import ConnectionRecord
from ..schemas.message import MessageRecord
from ..schemas.user import UserRecord

# Optional user columns filled with ``None`` when an insert omits them.
USER_OPTIONAL_FIELDS = (
    "avatar",
    "bio",
    "company",
    "title",
    "location",
    "website",
    "linkedin",
    "industries",
    "investment_range",
    "funding_need",
    "portfolio_size",
)

USER_FIELDS = ("email", "password", "first_name", "last_name", "role") + USER_OPTIONAL_FIELDS


class ConflictError(ValueError):
    """An insert or update would break a uniqueness rule."""


def check_user_columns(fields: Dict[str, Any]) -> None:
    """Reject keys that are not user columns before they reach a query."""
    unknown = set(fields) - set(USER_FIELDS)
    if unknown:
        raise ValueError(f"Unknown user fields: {', '.join(sorted(unknown))}")


class Store(ABC):
    """Abstract storage for users, collaboration requests, messages and connections."""

    # === Users ===

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserRecord]:
        """Get user by ID."""

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        """Get user by exact email."""

    @abstractmethod
    def create_user(self, fields: Dict[str, Any]) -> UserRecord:
        """Insert a user.  Raises ConflictError if the email is taken."""

    @abstractmethod
    def update_user(self, user_id: int, updates: Dict[str, Any]) -> Optional[UserRecord]:
        """Merge ``updates`` into the user.  Returns None if the user does not exist."""

    @abstractmethod
    def list_users(self) -> List[UserRecord]:
        """List all users."""

    @abstractmethod
    def list_users_by_role(self, role: str) -> List[UserRecord]:
        """List users with the given role."""

    @abstractmethod
    def count_users(self) -> int:
        """Number of stored users."""

    # === Collaboration requests ===

    @abstractmethod
    def get_collaboration_request(self, request_id: int) -> Optional[CollaborationRequestRecord]:
        """Get request by ID."""

    @abstractmethod
    def list_collaboration_requests_for_user(self, user_id: int) -> List[CollaborationRequestRecord]:
        """Requests the user sent or received."""

    @abstractmethod
    def list_collaboration_requests_between(self, user_id_a: int, user_id_b: int) -> List[CollaborationRequestRecord]:
        """Requests between two users, in either direction."""

    @abstractmethod
    def create_collaboration_request(self, fields: Dict[str, Any]) -> CollaborationRequestRecord:
        """Insert a request.  ``status`` defaults to ``pending``."""

    @abstractmethod
    def update_collaboration_request_status(self, request_id: int, status: str) -> Optional[CollaborationRequestRecord]:
        """Set the request status.  Returns None if the request does not exist."""

    # === Messages ===

    @abstractmethod
    def get_message(self, message_id: int) -> Optional[MessageRecord]:
        """Get message by ID."""

    @abstractmethod
    def list_messages_between(self, user_id_a: int, user_id_b: int) -> List[MessageRecord]:
        """Conversation between two users, oldest first."""

    @abstractmethod
    def create_message(self, fields: Dict[str, Any]) -> MessageRecord:
        """Insert a message."""

    # === Connections ===

    @abstractmethod
    def get_connection(self, connection_id: int) -> Optional[ConnectionRecord]:
        """Get connection by ID."""

    @abstractmethod
    def list_connections_for_user(self, user_id: int) -> List[ConnectionRecord]:
        """Connections where the user is on either side."""

    @abstractmethod
    def create_connection(self, user_id_1: int, user_id_2: int) -> ConnectionRecord:
        """Insert a connection.  Raises ConflictError if the pair already exists."""

    @abstractmethod
    def are_connected(self, user_id_a: int, user_id_b: int) -> bool:
        """Check whether two users are connected, in either order."""

    def close(self) -> None:
        """Release backend resources."""

"""
Business logic for connections.

Connections are undirected.  The store rejects a second connection
between the same two users regardless of who initiated either one.
"""

import logging
from typing import List

from ..schemas.connection import ConnectionRead, ConnectionRecord
from ..storage import Store
from .user_service import UserService

logger = logging.getLogger(__name__)


class ConnectionService:
    """Service for creating and listing connections."""

    @classmethod
    async def list_for_user(cls, store: Store, user_id: int) -> List[ConnectionRead]:
        """List the user's connections, each with the other user's profile."""
        connections = store.list_connections_for_user(user_id)
        profiles = UserService.public_profiles(store, [c.other_user_id(user_id) for c in connections])
        return [
            ConnectionRead(**c.model_dump(), other_user=profiles.get(c.other_user_id(user_id)))
            for c in connections
        ]

    @classmethod
    async def connect(cls, store: Store, user_id: int, other_user_id: int) -> ConnectionRecord:
        """Connect two users.

        Raises ``ValueError`` when connecting to oneself,
        ``LookupError`` when the other user does not exist and
        ``ConflictError`` when the two users are already connected.
        """
        if user_id == other_user_id:
            raise ValueError("Cannot connect to yourself")
        if store.get_user(other_user_id) is None:
            raise LookupError(f"User {other_user_id} not found")
        connection = store.create_connection(user_id, other_user_id)
        logger.info("Users %s and %s connected (connection %s)", user_id, other_user_id, connection.id)
        return connection

    @classmethod
    async def is_connected(cls, store: Store, user_id: int, other_user_id: int) -> bool:
        return store.are_connected(user_id, other_user_id)

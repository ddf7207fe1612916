"""
Business logic for collaboration requests.

A request goes from the current user to another user and starts out
``pending``.  Who may answer it is decided at the endpoint (see
``core.access``); this service only reads and writes.
"""

import logging
from typing import List, Optional

from ..schemas.collaboration import (
    CollaborationRequestCreate,
    CollaborationRequestRead,
    CollaborationRequestRecord,
)
from ..storage import Store
from .user_service import UserService

logger = logging.getLogger(__name__)

DIRECTIONS = ("all", "incoming", "outgoing")


class CollaborationService:
    """Service for sending, listing and answering collaboration requests."""

    @classmethod
    async def list_for_user(cls, store: Store, user_id: int, direction: str = "all") -> List[CollaborationRequestRead]:
        """List requests involving ``user_id``.

        ``direction`` narrows the list to requests the user received
        (``incoming``) or sent (``outgoing``).  Each item carries the
        public profiles of both participants.
        """
        if direction not in DIRECTIONS:
            raise ValueError(f"direction must be one of {', '.join(DIRECTIONS)}")
        requests = store.list_collaboration_requests_for_user(user_id)
        if direction == "incoming":
            requests = [r for r in requests if r.to_user_id == user_id]
        elif direction == "outgoing":
            requests = [r for r in requests if r.from_user_id == user_id]
        profiles = UserService.public_profiles(
            store, [r.from_user_id for r in requests] + [r.to_user_id for r in requests]
        )
        return [
            CollaborationRequestRead(
                **r.model_dump(),
                from_user=profiles.get(r.from_user_id),
                to_user=profiles.get(r.to_user_id),
            )
            for r in requests
        ]

    @classmethod
    async def list_between(cls, store: Store, user_id: int, other_user_id: int) -> List[CollaborationRequestRecord]:
        return store.list_collaboration_requests_between(user_id, other_user_id)

    @classmethod
    async def send(cls, store: Store, from_user_id: int, data: CollaborationRequestCreate) -> CollaborationRequestRecord:
        """Create a pending request.  Raises ``LookupError`` if the recipient does not exist."""
        if store.get_user(data.to_user_id) is None:
            raise LookupError(f"User {data.to_user_id} not found")
        request = store.create_collaboration_request(
            {"from_user_id": from_user_id, "to_user_id": data.to_user_id, "message": data.message}
        )
        logger.info("User %s sent collaboration request %s to user %s", from_user_id, request.id, data.to_user_id)
        return request

    @classmethod
    async def get_request(cls, store: Store, request_id: int) -> Optional[CollaborationRequestRecord]:
        return store.get_collaboration_request(request_id)

    @classmethod
    async def set_status(cls, store: Store, request_id: int, status: str) -> Optional[CollaborationRequestRecord]:
        """Set the status.  Setting the current status again is a no-op."""
        request = store.update_collaboration_request_status(request_id, status)
        if request is not None:
            logger.info("Collaboration request %s is now %s", request_id, status)
        return request

"""
Service layer for direct messages.

Any authenticated user may message any other user.  A conversation is
every message between two users in either direction, oldest first.
"""

import logging
from typing import List

from ..schemas.message import MessageCreate, MessageRead, MessageRecord
from ..storage import Store
from .user_service import UserService

logger = logging.getLogger(__name__)


class MessageService:
    """Service for sending messages and replaying conversations."""

    @classmethod
    async def conversation(cls, store: Store, user_id: int, other_user_id: int) -> List[MessageRead]:
        messages = store.list_messages_between(user_id, other_user_id)
        profiles = UserService.public_profiles(store, [m.from_user_id for m in messages])
        return [MessageRead(**m.model_dump(), from_user=profiles.get(m.from_user_id)) for m in messages]

    @classmethod
    async def send(cls, store: Store, from_user_id: int, data: MessageCreate) -> MessageRecord:
        """Store a message.  Raises ``LookupError`` if the recipient does not exist."""
        if store.get_user(data.to_user_id) is None:
            raise LookupError(f"User {data.to_user_id} not found")
        message = store.create_message(
            {"from_user_id": from_user_id, "to_user_id": data.to_user_id, "content": data.content}
        )
        logger.debug("Message %s from user %s to user %s", message.id, from_user_id, data.to_user_id)
        return message

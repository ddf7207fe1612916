"""
In-memory store.

Keeps every record in per-entity dicts owned by the store object, so
two stores never share state.  Intended for tests and local
development; data disappears with the process.  A single lock guards
mutations so that uniqueness checks and inserts happen as one step.
Callers receive copies, never the stored objects.
"""

import itertools
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..schemas.collaboration import CollaborationRequestRecord
from ..schemas.connection import ConnectionRecord
from ..schemas.message import MessageRecord
from ..schemas.user import UserRecord
from .base import USER_OPTIONAL_FIELDS, ConflictError, Store, check_user_columns

logger = logging.getLogger(__name__)


def _pair(user_id_a: int, user_id_b: int) -> frozenset:
    return frozenset((user_id_a, user_id_b))


class MemoryStore(Store):
    """Store backed by Python dicts."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: Dict[int, UserRecord] = {}
        self._requests: Dict[int, CollaborationRequestRecord] = {}
        self._messages: Dict[int, MessageRecord] = {}
        self._connections: Dict[int, ConnectionRecord] = {}
        # Uniqueness indices
        self._user_ids_by_email: Dict[str, int] = {}
        self._connection_pairs: Dict[frozenset, int] = {}
        self._user_seq = itertools.count(1)
        self._request_seq = itertools.count(1)
        self._message_seq = itertools.count(1)
        self._connection_seq = itertools.count(1)

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    # === Users ===

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        user_id = self._user_ids_by_email.get(email)
        return self.get_user(user_id) if user_id is not None else None

    def create_user(self, fields: Dict[str, Any]) -> UserRecord:
        check_user_columns(fields)
        with self._lock:
            if fields.get("email") in self._user_ids_by_email:
                raise ConflictError(f"User with email {fields['email']} already exists")
            data = {name: None for name in USER_OPTIONAL_FIELDS}
            data.update(fields)
            user = UserRecord(id=next(self._user_seq), created_at=self._now(), **data)
            self._users[user.id] = user
            self._user_ids_by_email[user.email] = user.id
        logger.debug("Stored user %s", user.id)
        return user.model_copy(deep=True)

    def update_user(self, user_id: int, updates: Dict[str, Any]) -> Optional[UserRecord]:
        check_user_columns(updates)
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            new_email = updates.get("email", user.email)
            owner = self._user_ids_by_email.get(new_email)
            if owner is not None and owner != user_id:
                raise ConflictError(f"User with email {new_email} already exists")
            updated = UserRecord.model_validate({**user.model_dump(), **updates})
            self._users[user_id] = updated
            if updated.email != user.email:
                del self._user_ids_by_email[user.email]
                self._user_ids_by_email[updated.email] = user_id
        return updated.model_copy(deep=True)

    def list_users(self) -> List[UserRecord]:
        return [u.model_copy(deep=True) for u in self._users.values()]

    def list_users_by_role(self, role: str) -> List[UserRecord]:
        return [u.model_copy(deep=True) for u in self._users.values() if u.role == role]

    def count_users(self) -> int:
        return len(self._users)

    # === Collaboration requests ===

    def get_collaboration_request(self, request_id: int) -> Optional[CollaborationRequestRecord]:
        request = self._requests.get(request_id)
        return request.model_copy() if request else None

    def list_collaboration_requests_for_user(self, user_id: int) -> List[CollaborationRequestRecord]:
        return [
            r.model_copy()
            for r in self._requests.values()
            if r.from_user_id == user_id or r.to_user_id == user_id
        ]

    def list_collaboration_requests_between(self, user_id_a: int, user_id_b: int) -> List[CollaborationRequestRecord]:
        pair = _pair(user_id_a, user_id_b)
        return [r.model_copy() for r in self._requests.values() if _pair(r.from_user_id, r.to_user_id) == pair]

    def create_collaboration_request(self, fields: Dict[str, Any]) -> CollaborationRequestRecord:
        with self._lock:
            request = CollaborationRequestRecord(
                id=next(self._request_seq),
                from_user_id=fields["from_user_id"],
                to_user_id=fields["to_user_id"],
                status=fields.get("status") or "pending",
                message=fields.get("message"),
                created_at=self._now(),
            )
            self._requests[request.id] = request
        return request.model_copy()

    def update_collaboration_request_status(self, request_id: int, status: str) -> Optional[CollaborationRequestRecord]:
        with self._lock:
            request = self._requests.get(request_id)
            if request is None:
                return None
            updated = CollaborationRequestRecord.model_validate({**request.model_dump(), "status": status})
            self._requests[request_id] = updated
        return updated.model_copy()

    # === Messages ===

    def get_message(self, message_id: int) -> Optional[MessageRecord]:
        message = self._messages.get(message_id)
        return message.model_copy() if message else None

    def list_messages_between(self, user_id_a: int, user_id_b: int) -> List[MessageRecord]:
        pair = _pair(user_id_a, user_id_b)
        thread = [m for m in self._messages.values() if _pair(m.from_user_id, m.to_user_id) == pair]
        thread.sort(key=lambda m: (m.created_at, m.id))
        return [m.model_copy() for m in thread]

    def create_message(self, fields: Dict[str, Any]) -> MessageRecord:
        with self._lock:
            message = MessageRecord(
                id=next(self._message_seq),
                from_user_id=fields["from_user_id"],
                to_user_id=fields["to_user_id"],
                content=fields["content"],
                created_at=self._now(),
            )
            self._messages[message.id] = message
        return message.model_copy()

    # === Connections ===

    def get_connection(self, connection_id: int) -> Optional[ConnectionRecord]:
        connection = self._connections.get(connection_id)
        return connection.model_copy() if connection else None

    def list_connections_for_user(self, user_id: int) -> List[ConnectionRecord]:
        return [
            c.model_copy()
            for c in self._connections.values()
            if c.user_id_1 == user_id or c.user_id_2 == user_id
        ]

    def create_connection(self, user_id_1: int, user_id_2: int) -> ConnectionRecord:
        pair = _pair(user_id_1, user_id_2)
        with self._lock:
            if pair in self._connection_pairs:
                raise ConflictError(f"Users {user_id_1} and {user_id_2} are already connected")
            connection = ConnectionRecord(
                id=next(self._connection_seq),
                user_id_1=user_id_1,
                user_id_2=user_id_2,
                created_at=self._now(),
            )
            self._connections[connection.id] = connection
            self._connection_pairs[pair] = connection.id
        return connection.model_copy()

    def are_connected(self, user_id_a: int, user_id_b: int) -> bool:
        return _pair(user_id_a, user_id_b) in self._connection_pairs

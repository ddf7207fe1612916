"""
Pydantic schemas for connections.

A connection is an undirected link between two users; ``user_id_1``
is whoever initiated it, but lookups treat the pair as unordered.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .user import UserRead


class ConnectionCreate(BaseModel):
    other_user_id: int


class ConnectionRecord(BaseModel):
    id: int
    user_id_1: int
    user_id_2: int
    created_at: datetime

    def other_user_id(self, user_id: int) -> int:
        return self.user_id_2 if self.user_id_1 == user_id else self.user_id_1


class ConnectionRead(ConnectionRecord):
    other_user: Optional[UserRead] = None


class ConnectionStatus(BaseModel):
    connected: bool

"""
Pydantic schemas for direct messages between users.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .user import UserRead


class MessageCreate(BaseModel):
    to_user_id: int
    content: str = Field(..., min_length=1, max_length=5000)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message content must not be blank")
        return v


class MessageRecord(BaseModel):
    id: int
    from_user_id: int
    to_user_id: int
    content: str
    created_at: datetime


class MessageRead(MessageRecord):
    from_user: Optional[UserRead] = None

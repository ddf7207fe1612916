"""
Pydantic schemas for collaboration requests.

A collaboration request is a directed proposal from one user to
another.  Its ``status`` starts as ``pending`` and the recipient may
move it to ``accepted`` or ``rejected``.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .user import UserRead

RequestStatus = Literal["pending", "accepted", "rejected"]


class CollaborationRequestCreate(BaseModel):
    """Schema for sending a request.  The sender is the current user."""

    to_user_id: int = Field(..., description="Recipient of the request")
    message: Optional[str] = Field(None, description="Optional note to the recipient")

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: Optional[str]) -> Optional[str]:
        """Trim whitespace and treat a blank note as no note."""
        if v is None:
            return None
        v = v.strip()
        if len(v) > 2000:
            raise ValueError("Message must be 2000 characters or fewer")
        return v or None


class CollaborationRequestStatusUpdate(BaseModel):
    status: RequestStatus


class CollaborationRequestRecord(BaseModel):
    id: int
    from_user_id: int
    to_user_id: int
    status: RequestStatus = "pending"
    message: Optional[str] = None
    created_at: datetime


class CollaborationRequestRead(CollaborationRequestRecord):
    """A request together with both participants' public profiles."""

    from_user: Optional[UserRead] = None
    to_user: Optional[UserRead] = None

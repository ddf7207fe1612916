"""
Ownership rules checked at the API boundary.

There are exactly two: a user may edit only their own profile, and
only the recipient of a collaboration request may change its status.
Reading profiles, messaging and connecting are open to every
authenticated user.
"""

from typing import Any, Dict

from fastapi import HTTPException, status

from ..schemas.collaboration import CollaborationRequestRecord


def ensure_profile_owner(user_id: int, current_user: Dict[str, Any]) -> None:
    if current_user.get("user_id") != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only edit your own profile")


def ensure_request_recipient(request: CollaborationRequestRecord, current_user: Dict[str, Any]) -> None:
    if request.to_user_id != current_user.get("user_id"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the recipient can respond to this request",
        )

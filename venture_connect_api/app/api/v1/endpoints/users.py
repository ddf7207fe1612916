"""
User endpoints for API v1.

The directory is open to every signed-in user: list everyone, filter
by role, or fetch a single profile.  Profiles can only be edited by
their owner.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from venture_connect_api.app.api.deps import get_store
from venture_connect_api.app.core.access import ensure_profile_owner
from venture_connect_api.app.core.security import get_current_user
from venture_connect_api.app.schemas.user import Role, UserRead, UserUpdate
from venture_connect_api.app.services.user_service import UserService
from venture_connect_api.app.storage import ConflictError, Store


router = APIRouter()


@router.get("/", response_model=List[UserRead])
async def list_users(
    role: Optional[Role] = Query(None, description="Only users with this role"),
    current_user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> List[UserRead]:
    """List users, optionally filtered by ``investor`` or ``entrepreneur``."""
    return await UserService.list_users(store, role)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: int,
    current_user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> UserRead:
    user = await UserService.get_user(store, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    data: UserUpdate,
    current_user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> UserRead:
    """Update the caller's own profile.

    Only the fields present in the body change.  Editing someone
    else's profile gives 403; taking an email that belongs to another
    account gives 409.
    """
    ensure_profile_owner(user_id, current_user)
    try:
        user = await UserService.update_profile(store, user_id, data)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

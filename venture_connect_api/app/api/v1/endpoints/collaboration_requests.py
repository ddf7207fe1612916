"""
Collaboration request endpoints for API v1.

Any signed-in user may send a request to any other user.  Only the
recipient may accept or reject it.
"""

from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from venture_connect_api.app.api.deps import get_store
from venture_connect_api.app.core.access import ensure_request_recipient
from venture_connect_api.app.core.security import get_current_user
from venture_connect_api.app.schemas.collaboration import (
    CollaborationRequestCreate,
    CollaborationRequestRead,
    CollaborationRequestRecord,
    CollaborationRequestStatusUpdate,
)
from venture_connect_api.app.services.collaboration_service import CollaborationService
from venture_connect_api.app.storage import Store


router = APIRouter()


@router.get("/", response_model=List[CollaborationRequestRead])
async def list_requests(
    direction: Literal["all", "incoming", "outgoing"] = Query(
        "all", description="'incoming' for received, 'outgoing' for sent, 'all' for both"
    ),
    current_user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> List[CollaborationRequestRead]:
    """List the caller's requests with both participants' profiles."""
    return await CollaborationService.list_for_user(store, current_user["user_id"], direction)


@router.get("/with/{other_user_id}", response_model=List[CollaborationRequestRecord])
async def list_requests_with_user(
    other_user_id: int,
    current_user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> List[CollaborationRequestRecord]:
    """Requests between the caller and ``other_user_id``, in either direction."""
    return await CollaborationService.list_between(store, current_user["user_id"], other_user_id)


@router.post("/", response_model=CollaborationRequestRecord, status_code=status.HTTP_201_CREATED)
async def send_request(
    data: CollaborationRequestCreate,
    current_user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> CollaborationRequestRecord:
    """Send a request from the caller to ``to_user_id``."""
    if data.to_user_id == current_user["user_id"]:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot send a request to yourself")
    try:
        return await CollaborationService.send(store, current_user["user_id"], data)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{request_id}", response_model=CollaborationRequestRecord)
async def respond_to_request(
    request_id: int,
    data: CollaborationRequestStatusUpdate,
    current_user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> CollaborationRequestRecord:
    """Set the status of a request addressed to the caller."""
    request = await CollaborationService.get_request(store, request_id)
    if not request:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Request not found")
    ensure_request_recipient(request, current_user)
    updated = await CollaborationService.set_status(store, request_id, data.status)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Request not found")
    return updated

"""
Message endpoints for API v1.

Send a direct message to another user, or fetch the whole
conversation with them in chronological order.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from venture_connect_api.app.api.deps import get_store
from venture_connect_api.app.core.security import get_current_user
from venture_connect_api.app.schemas.message import MessageCreate, MessageRead, MessageRecord
from venture_connect_api.app.services.message_service import MessageService
from venture_connect_api.app.storage import Store


router = APIRouter()


@router.get("/{other_user_id}", response_model=List[MessageRead])
async def get_conversation(
    other_user_id: int,
    current_user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> List[MessageRead]:
    """Messages between the caller and ``other_user_id``, oldest first."""
    return await MessageService.conversation(store, current_user["user_id"], other_user_id)


@router.post("/", response_model=MessageRecord, status_code=status.HTTP_201_CREATED)
async def send_message(
    data: MessageCreate,
    current_user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> MessageRecord:
    try:
        return await MessageService.send(store, current_user["user_id"], data)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

"""
Connection endpoints for API v1.

Connecting is one-step: the caller connects to another user straight
away, no acceptance needed.  A pair can only be connected once.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from venture_connect_api.app.api.deps import get_store
from venture_connect_api.app.core.security import get_current_user
from venture_connect_api.app.schemas.connection import (
    ConnectionCreate,
    ConnectionRead,
    ConnectionRecord,
    ConnectionStatus,
)
from venture_connect_api.app.services.connection_service import ConnectionService
from venture_connect_api.app.storage import ConflictError, Store


router = APIRouter()


@router.get("/", response_model=List[ConnectionRead])
async def list_connections(
    current_user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> List[ConnectionRead]:
    """List the caller's connections with the other user's profile."""
    return await ConnectionService.list_for_user(store, current_user["user_id"])


@router.post("/", response_model=ConnectionRecord, status_code=status.HTTP_201_CREATED)
async def create_connection(
    data: ConnectionCreate,
    current_user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> ConnectionRecord:
    """Connect the caller with ``other_user_id``.

    Returns 404 for an unknown user, 400 for connecting to yourself and
    409 when the two users are already connected.
    """
    try:
        return await ConnectionService.connect(store, current_user["user_id"], data.other_user_id)
    except ConflictError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Connection already exists")
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/check/{other_user_id}", response_model=ConnectionStatus)
async def check_connection(
    other_user_id: int,
    current_user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> ConnectionStatus:
    connected = await ConnectionService.is_connected(store, current_user["user_id"], other_user_id)
    return ConnectionStatus(connected=connected)

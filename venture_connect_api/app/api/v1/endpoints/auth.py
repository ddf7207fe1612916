"""
Authentication endpoints for API v1.

Registration and login both return the public user together with a
bearer token.  Tokens are stateless, so logging out only tells the
client to drop its token.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from venture_connect_api.app.api.deps import get_settings, get_store
from venture_connect_api.app.core.config import Settings
from venture_connect_api.app.core.security import create_access_token, get_current_user
from venture_connect_api.app.schemas.user import AuthResponse, UserCreate, UserLogin, UserRead
from venture_connect_api.app.services.user_service import UserService
from venture_connect_api.app.storage import ConflictError, Store


router = APIRouter()


def _auth_response(user: UserRead, config: Settings) -> AuthResponse:
    token = create_access_token({"sub": str(user.id)}, config=config)
    return AuthResponse(user=user, access_token=token)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserCreate,
    store: Store = Depends(get_store),
    config: Settings = Depends(get_settings),
) -> AuthResponse:
    """Create an account and sign the new user in.

    ``password`` and ``confirm_password`` must match.  An email that is
    already registered gives 409.
    """
    try:
        user = await UserService.register(store, data)
    except ConflictError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")
    return _auth_response(user, config)


@router.post("/login", response_model=AuthResponse)
async def login(
    data: UserLogin,
    store: Store = Depends(get_store),
    config: Settings = Depends(get_settings),
) -> AuthResponse:
    """Check email and password and return a token."""
    user = await UserService.authenticate(store, data.email, data.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return _auth_response(user, config)


@router.post("/logout")
async def logout(current_user: dict = Depends(get_current_user)) -> Dict[str, Any]:
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserRead)
async def me(
    current_user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> UserRead:
    """Return the signed-in user's profile."""
    user = await UserService.get_user(store, current_user["user_id"])
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

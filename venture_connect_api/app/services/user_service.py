"""
Business logic for users.

Registration, credential checks, directory listing and profile edits.
Passwords are hashed before they reach the store, and every user
returned from here is a ``UserRead`` with the hash removed.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..core.security import hash_password, verify_password
from ..schemas.user import UserCreate, UserRead, UserUpdate
from ..storage import Store

logger = logging.getLogger(__name__)


class UserService:
    """Operations on user accounts and profiles."""

    @classmethod
    async def register(cls, store: Store, data: UserCreate) -> UserRead:
        """Create a new account.

        Raises ``ConflictError`` if the email is already registered.
        The store enforces this with a unique constraint, so two
        concurrent registrations cannot both succeed.
        """
        logger.info("Registering user %s", data.email)
        fields = data.model_dump(exclude={"confirm_password"})
        fields["password"] = hash_password(data.password)
        user = store.create_user(fields)
        logger.info("Registered user %s as %s", user.id, user.role)
        return UserRead.from_record(user)

    @classmethod
    async def authenticate(cls, store: Store, email: str, password: str) -> Optional[UserRead]:
        """Return the user if the credentials match, otherwise ``None``."""
        user = store.get_user_by_email(email)
        if user is None or not verify_password(password, user.password):
            logger.info("Failed login attempt for %s", email)
            return None
        return UserRead.from_record(user)

    @classmethod
    async def get_user(cls, store: Store, user_id: int) -> Optional[UserRead]:
        user = store.get_user(user_id)
        return UserRead.from_record(user) if user else None

    @classmethod
    async def list_users(cls, store: Store, role: Optional[str] = None) -> List[UserRead]:
        """Return all users, or only those with ``role``."""
        users = store.list_users_by_role(role) if role else store.list_users()
        return [UserRead.from_record(u) for u in users]

    @classmethod
    async def update_profile(cls, store: Store, user_id: int, data: UserUpdate) -> Optional[UserRead]:
        """Apply the fields present in ``data``.

        Returns ``None`` if the user does not exist.  A new password is
        hashed; a new email that belongs to someone else raises
        ``ConflictError``.
        """
        updates = data.model_dump(exclude_unset=True)
        if updates.get("password") is not None:
            updates["password"] = hash_password(updates["password"])
        # Required columns cannot be cleared
        for field in ("email", "first_name", "last_name", "role", "password"):
            if field in updates and updates[field] is None:
                del updates[field]
        user = store.update_user(user_id, updates)
        if user is None:
            return None
        logger.info("User %s updated fields %s", user_id, sorted(updates))
        return UserRead.from_record(user)

    @classmethod
    def public_profiles(cls, store: Store, user_ids: Iterable[int]) -> Dict[int, UserRead]:
        """Look up several users at once, skipping ids that no longer exist."""
        profiles: Dict[int, UserRead] = {}
        for user_id in set(user_ids):
            user = store.get_user(user_id)
            if user is not None:
                profiles[user_id] = UserRead.from_record(user)
        return profiles

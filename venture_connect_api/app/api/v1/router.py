"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under their prefixes.  When
a new domain is added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import auth, collaboration_requests, connections, messages, users

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(
    collaboration_requests.router,
    prefix="/collaboration-requests",
    tags=["collaboration-requests"],
)
router.include_router(messages.router, prefix="/messages", tags=["messages"])
router.include_router(connections.router, prefix="/connections", tags=["connections"])

"""
Shared FastAPI dependencies.
"""

from fastapi import Request

from ..core.config import Settings
from ..storage import Store


def get_store(request: Request) -> Store:
    """Return the store built for this application instance."""
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings

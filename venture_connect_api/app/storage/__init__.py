"""
Storage layer.

``Store`` defines the interface; ``MemoryStore`` and ``SQLiteStore``
implement it.  ``build_store`` picks a backend from settings.  The
application builds exactly one store at startup and hands it to
request handlers through ``app.state``.
"""

import logging

from ..core.config import Settings
from ..core.db import get_database_path
from .base import ConflictError, Store
from .memory import MemoryStore
from .sqlite import SQLiteStore

__all__ = [
    "ConflictError",
    "MemoryStore",
    "SQLiteStore",
    "Store",
    "build_store",
]

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> Store:
    """Create the store selected by ``settings.storage_backend``."""
    backend = settings.storage_backend.lower()
    if backend == "memory":
        logger.info("Using in-memory store")
        return MemoryStore()
    if backend == "sqlite":
        return SQLiteStore(get_database_path(settings.database_url))
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")

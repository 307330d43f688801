"""Entity store: the storage interface, its backends, and the FastAPI hook."""

import logging

from fastapi import Request

from ..core.config import Settings, StorageBackend
from .base import Storage
from .memory import MemStorage
from .sql import SqlStorage

logger = logging.getLogger(__name__)

__all__ = ["Storage", "MemStorage", "SqlStorage", "create_storage", "get_storage"]


def create_storage(config: Settings) -> Storage:
    """Build the backend named by ``config.storage_backend``."""
    if config.storage_backend == StorageBackend.SQL:
        logger.info("Using SQL storage", extra={"backend": "sql"})
        return SqlStorage(config.database_url)
    logger.info("Using in-memory storage", extra={"backend": "memory"})
    return MemStorage()


def get_storage(request: Request) -> Storage:
    """Dependency for FastAPI routes to reach the store created at startup."""
    return request.app.state.storage

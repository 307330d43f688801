"""Seed the default user on startup.

Idempotent: if the user already exists (persistent SQL backend, or a
second call) it is returned unchanged.
"""

import logging

from .config import Settings
from ..schemas import UserCreate, UserResponse
from ..storage import Storage

logger = logging.getLogger(__name__)


def seed_default_user(storage: Storage, config: Settings) -> UserResponse:
    """Ensure the mock user every request acts as exists.

    Args:
        storage: The active entity store.
        config: Settings carrying the default username, password and role.

    Returns:
        The stored default user.
    """
    existing = storage.get_user_by_username(config.default_username)
    if existing is not None:
        logger.debug("Default user %s already present", config.default_username)
        return existing

    user = storage.create_user(
        UserCreate(
            username=config.default_username,
            password=config.default_password,
            role=config.default_role,
        )
    )
    logger.info("Seeded default user", extra={"user_id": user.id, "username": user.username})
    return user

"""Request identity.

There is no login. Every request acts as the user seeded at startup
(``settings.default_username``); ``get_current_user`` is the single place
that decides who that is, so real authentication can replace it later
without touching the routes.
"""

from dataclasses import dataclass

from fastapi import Depends

from .config import settings
from ..exceptions import StorageError
from ..storage import Storage, get_storage


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller, available to every endpoint."""

    user_id: int
    username: str
    role: str


def get_current_user(storage: Storage = Depends(get_storage)) -> AuthContext:
    """Resolve the mock user from the store."""
    user = storage.get_user_by_username(settings.default_username)
    if user is None:
        raise StorageError(f"Default user '{settings.default_username}' has not been seeded")
    return AuthContext(user_id=user.id, username=user.username, role=user.role.value)

"""Repository for users."""

from typing import Optional

from ..models.user import User
from ..schemas.user import UserResponse
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    model_class = User
    response_class = UserResponse

    def get_by_username(self, username: str) -> Optional[User]:
        return self._base_query().filter(User.username == username).first()

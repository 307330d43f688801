"""User schemas."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from .base import CamelModel


class UserRole(str, Enum):
    """Roles a user can hold. Nothing enforces permissions by role yet."""
    ROAD_CAPTAIN = "road_captain"
    WRENCH = "wrench"
    PROSPECT = "prospect"


class UserCreate(CamelModel):
    """Schema for creating a user."""
    username: str = Field(..., min_length=1)
    password: str
    role: UserRole = UserRole.PROSPECT


class UserResponse(CamelModel):
    """A stored user. The password stays in the store and is never serialized."""
    id: int
    username: str
    password: str = Field(default="", exclude=True, repr=False)
    role: UserRole
    created_at: datetime

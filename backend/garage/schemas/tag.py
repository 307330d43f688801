"""Tag catalog schemas.

The catalog is advisory: asset tags are free text and are not checked
against these rows.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel, PartialUpdate

DEFAULT_TAG_COLOR = "#6b7280"


class TagCreate(CamelModel):
    """Schema for creating a tag. The owner is the requesting user."""
    name: str = Field(..., min_length=1)
    color: Optional[str] = None


class TagUpdate(PartialUpdate):
    """Schema for partially updating a tag."""
    non_nullable = frozenset({"name", "color", "user_id"})

    name: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = None
    user_id: Optional[int] = None


class TagResponse(CamelModel):
    """A stored tag."""
    id: int
    name: str
    color: str = DEFAULT_TAG_COLOR
    user_id: int
    created_at: datetime

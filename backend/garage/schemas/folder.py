"""Folder schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel, PartialUpdate


class FolderCreate(CamelModel):
    """Schema for creating a folder.

    ``toolkit_id`` may be left out when the toolkit comes from the URL
    (``POST /api/toolkits/{toolkitId}/folders``).
    """
    name: str = Field(..., min_length=1)
    toolkit_id: Optional[int] = None
    parent_id: Optional[int] = None


class FolderUpdate(PartialUpdate):
    """Schema for partially updating a folder."""
    non_nullable = frozenset({"name", "toolkit_id"})

    name: Optional[str] = Field(None, min_length=1)
    toolkit_id: Optional[int] = None
    parent_id: Optional[int] = None


class FolderResponse(CamelModel):
    """A stored folder."""
    id: int
    name: str
    toolkit_id: int
    parent_id: Optional[int] = None
    created_at: datetime

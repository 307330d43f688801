"""Toolkit schemas, including the sidebar view with folders and asset count."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import CamelModel, PartialUpdate
from .folder import FolderResponse


class ToolkitCreate(CamelModel):
    """Schema for creating a toolkit. The owner is the requesting user."""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None


class ToolkitUpdate(PartialUpdate):
    """Schema for partially updating a toolkit."""
    non_nullable = frozenset({"name", "user_id"})

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    user_id: Optional[int] = None


class ToolkitResponse(CamelModel):
    """A stored toolkit."""
    id: int
    name: str
    description: Optional[str] = None
    user_id: int
    created_at: datetime


class ToolkitWithFolders(ToolkitResponse):
    """Toolkit joined with its folders and the number of assets it holds."""
    folders: List[FolderResponse] = []
    asset_count: int = 0

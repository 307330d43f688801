"""Asset schemas: stored rows, the joined detail view, and bulk operations."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, model_validator

from .base import CamelModel, PartialUpdate
from .folder import FolderResponse
from .toolkit import ToolkitResponse
from .user import UserResponse


class FileType(str, Enum):
    """Coarse media class derived from the MIME type at upload."""
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    PDF = "pdf"
    VECTOR = "vector"
    OTHER = "other"


class AssetCreate(CamelModel):
    """Schema for inserting an asset row.

    Built by the upload handler; ``width``/``height``/``duration`` and the
    thumbnail stay empty because files are never probed.
    """
    name: str = Field(..., min_length=1)
    original_name: str
    file_type: FileType
    mime_type: str
    size: int = Field(..., ge=0)
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[float] = None
    file_path: str
    thumbnail_path: Optional[str] = None
    folder_id: Optional[int] = None
    toolkit_id: int
    user_id: int
    tags: Optional[List[str]] = None
    status: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class AssetUpdate(PartialUpdate):
    """Schema for partially updating an asset."""
    non_nullable = frozenset({
        "name", "original_name", "file_type", "mime_type", "size",
        "file_path", "toolkit_id", "user_id", "tags", "status",
    })

    name: Optional[str] = Field(None, min_length=1)
    original_name: Optional[str] = None
    file_type: Optional[FileType] = None
    mime_type: Optional[str] = None
    size: Optional[int] = Field(None, ge=0)
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[float] = None
    file_path: Optional[str] = None
    thumbnail_path: Optional[str] = None
    folder_id: Optional[int] = None
    toolkit_id: Optional[int] = None
    user_id: Optional[int] = None
    tags: Optional[List[str]] = None
    status: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class AssetResponse(CamelModel):
    """A stored asset row."""
    id: int
    name: str
    original_name: str
    file_type: FileType
    mime_type: str
    size: int
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[float] = None
    file_path: str
    thumbnail_path: Optional[str] = None
    folder_id: Optional[int] = None
    toolkit_id: int
    user_id: int
    tags: List[str] = []
    status: str = ""
    metadata: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime


class AssetWithDetails(AssetResponse):
    """Asset joined with its toolkit, optional folder, and owner."""
    toolkit: ToolkitResponse
    folder: Optional[FolderResponse] = None
    user: UserResponse


class BulkAction(str, Enum):
    DELETE = "delete"
    UPDATE = "update"


class BulkOperation(CamelModel):
    """Apply one action to many assets, one id at a time."""
    action: BulkAction
    asset_ids: List[int]
    data: Optional[AssetUpdate] = None

    @model_validator(mode="after")
    def _update_needs_data(self):
        if self.action == BulkAction.UPDATE and self.data is None:
            raise ValueError("data is required for the update action")
        return self


class BulkResult(CamelModel):
    """Outcome of a bulk operation.

    For ``update`` there is one entry per requested id, in order, with
    ``None`` where the id did not exist. ``delete`` reports no entries.
    """
    success: bool = True
    results: List[Optional[AssetResponse]] = []

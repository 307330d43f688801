"""Pydantic schemas for API validation."""

from .user import UserRole, UserCreate, UserResponse
from .folder import FolderCreate, FolderUpdate, FolderResponse
from .toolkit import ToolkitCreate, ToolkitUpdate, ToolkitResponse, ToolkitWithFolders
from .tag import DEFAULT_TAG_COLOR, TagCreate, TagUpdate, TagResponse
from .asset import (
    FileType,
    AssetCreate,
    AssetUpdate,
    AssetResponse,
    AssetWithDetails,
    BulkAction,
    BulkOperation,
    BulkResult,
)

__all__ = [
    "UserRole",
    "UserCreate",
    "UserResponse",
    "FolderCreate",
    "FolderUpdate",
    "FolderResponse",
    "ToolkitCreate",
    "ToolkitUpdate",
    "ToolkitResponse",
    "ToolkitWithFolders",
    "DEFAULT_TAG_COLOR",
    "TagCreate",
    "TagUpdate",
    "TagResponse",
    "FileType",
    "AssetCreate",
    "AssetUpdate",
    "AssetResponse",
    "AssetWithDetails",
    "BulkAction",
    "BulkOperation",
    "BulkResult",
]

"""Data access repositories for the SQL storage backend."""

from .base import BaseRepository
from .user_repository import UserRepository
from .toolkit_repository import ToolkitRepository
from .folder_repository import FolderRepository
from .asset_repository import AssetRepository
from .tag_repository import TagRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ToolkitRepository",
    "FolderRepository",
    "AssetRepository",
    "TagRepository",
]

"""Business logic services."""

from .query_service import QueryService
from .toolkit_service import ToolkitService
from .folder_service import FolderService
from .asset_service import AssetService
from .upload_service import UploadService
from .tag_service import TagService

__all__ = [
    "QueryService",
    "ToolkitService",
    "FolderService",
    "AssetService",
    "UploadService",
    "TagService",
]

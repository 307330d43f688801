"""Database models for the SQL storage backend."""

from .user import User
from .toolkit import Toolkit
from .folder import Folder
from .asset import Asset
from .tag import Tag

__all__ = ["User", "Toolkit", "Folder", "Asset", "Tag"]

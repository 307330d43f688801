"""The storage interface every entity-store backend implements.

Contract shared by all five entity kinds:

- ``create_*`` assigns the next id of that kind (ids only grow and are never
  reused), fills optional fields with their defaults, stamps timestamps and
  returns the stored record.
- ``get_*`` returns the record or ``None``.
- ``list_*`` filters by equality on the given keys, in insertion order.
- ``update_*`` returns ``None`` when the id is unknown, otherwise merges the
  supplied fields over the record and returns the result. Assets also get a
  fresh ``updated_at``.
- ``delete_*`` removes one row and reports whether it existed. Nothing
  cascades, and no operation checks that referenced rows exist.

Only ``username`` and tag ``name`` are unique; a clash raises ConflictError.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..schemas import (
    DEFAULT_TAG_COLOR,
    AssetCreate,
    AssetResponse,
    AssetUpdate,
    FolderCreate,
    FolderResponse,
    FolderUpdate,
    TagCreate,
    TagResponse,
    TagUpdate,
    ToolkitCreate,
    ToolkitResponse,
    ToolkitUpdate,
    UserCreate,
    UserResponse,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_user_values(data: UserCreate) -> dict:
    return {
        "username": data.username,
        "password": data.password,
        "role": data.role,
        "created_at": utcnow(),
    }


def new_toolkit_values(data: ToolkitCreate, user_id: int) -> dict:
    return {
        "name": data.name,
        "description": data.description,
        "user_id": user_id,
        "created_at": utcnow(),
    }


def new_folder_values(data: FolderCreate) -> dict:
    return {
        "name": data.name,
        "toolkit_id": data.toolkit_id,
        "parent_id": data.parent_id or None,
        "created_at": utcnow(),
    }


def new_asset_values(data: AssetCreate) -> dict:
    values = data.model_dump()
    values["tags"] = list(data.tags or [])
    values["status"] = data.status or ""
    values["folder_id"] = data.folder_id or None
    now = utcnow()
    values["created_at"] = now
    values["updated_at"] = now
    return values


def new_tag_values(data: TagCreate, user_id: int) -> dict:
    return {
        "name": data.name,
        "color": data.color or DEFAULT_TAG_COLOR,
        "user_id": user_id,
        "created_at": utcnow(),
    }


class Storage(ABC):
    """Abstract entity store. See the module docstring for the contract."""

    # -- Users -------------------------------------------------------------

    @abstractmethod
    def create_user(self, data: UserCreate) -> UserResponse: ...

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserResponse]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserResponse]: ...

    # -- Toolkits ----------------------------------------------------------

    @abstractmethod
    def create_toolkit(self, data: ToolkitCreate, user_id: int) -> ToolkitResponse: ...

    @abstractmethod
    def get_toolkit(self, toolkit_id: int) -> Optional[ToolkitResponse]: ...

    @abstractmethod
    def list_toolkits(self, user_id: int) -> List[ToolkitResponse]: ...

    @abstractmethod
    def update_toolkit(self, toolkit_id: int, data: ToolkitUpdate) -> Optional[ToolkitResponse]: ...

    @abstractmethod
    def delete_toolkit(self, toolkit_id: int) -> bool: ...

    # -- Folders -----------------------------------------------------------

    @abstractmethod
    def create_folder(self, data: FolderCreate) -> FolderResponse: ...

    @abstractmethod
    def get_folder(self, folder_id: int) -> Optional[FolderResponse]: ...

    @abstractmethod
    def list_folders(self, toolkit_id: int) -> List[FolderResponse]: ...

    @abstractmethod
    def update_folder(self, folder_id: int, data: FolderUpdate) -> Optional[FolderResponse]: ...

    @abstractmethod
    def delete_folder(self, folder_id: int) -> bool: ...

    # -- Assets ------------------------------------------------------------

    @abstractmethod
    def create_asset(self, data: AssetCreate) -> AssetResponse: ...

    @abstractmethod
    def get_asset(self, asset_id: int) -> Optional[AssetResponse]: ...

    @abstractmethod
    def list_assets(
        self,
        toolkit_id: Optional[int] = None,
        folder_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> List[AssetResponse]:
        """Assets matching every given key. ``None`` means "any"."""

    @abstractmethod
    def update_asset(self, asset_id: int, data: AssetUpdate) -> Optional[AssetResponse]: ...

    @abstractmethod
    def delete_asset(self, asset_id: int) -> bool: ...

    # -- Tags --------------------------------------------------------------

    @abstractmethod
    def create_tag(self, data: TagCreate, user_id: int) -> TagResponse: ...

    @abstractmethod
    def get_tag(self, tag_id: int) -> Optional[TagResponse]: ...

    @abstractmethod
    def list_tags(self, user_id: int) -> List[TagResponse]: ...

    @abstractmethod
    def update_tag(self, tag_id: int, data: TagUpdate) -> Optional[TagResponse]: ...

    @abstractmethod
    def delete_tag(self, tag_id: int) -> bool: ...

    # -- Introspection -----------------------------------------------------

    @abstractmethod
    def counts(self) -> Dict[str, int]:
        """Number of stored rows per entity kind, for health reporting."""

    def close(self) -> None:
        """Release backend resources (connections, pools)."""

"""In-memory entity store.

The default backend. State lives for the lifetime of the process and is
lost on restart. FastAPI serves sync endpoints from a thread pool, so every
public method runs under one re-entrant lock; each call is atomic and ids
are handed out without gaps or repeats.
"""

import threading
from typing import Callable, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from ..exceptions import ConflictError
from ..schemas import (
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
from .base import (
    Storage,
    new_asset_values,
    new_folder_values,
    new_tag_values,
    new_toolkit_values,
    new_user_values,
    utcnow,
)

RecordT = TypeVar("RecordT", bound=BaseModel)


class _Table(Generic[RecordT]):
    """One entity kind: rows keyed by id plus the id counter.

    Records handed out are deep copies, so callers can't mutate stored rows.
    """

    def __init__(self, record_class: Type[RecordT]):
        self.record_class = record_class
        self.rows: Dict[int, RecordT] = {}
        self._next_id = 1

    def insert(self, values: dict) -> RecordT:
        record = self.record_class(id=self._next_id, **values)
        self._next_id += 1
        self.rows[record.id] = record
        return record.model_copy(deep=True)

    def get(self, entity_id: int) -> Optional[RecordT]:
        record = self.rows.get(entity_id)
        return record.model_copy(deep=True) if record is not None else None

    def find(self, predicate: Callable[[RecordT], bool]) -> Optional[RecordT]:
        for record in self.rows.values():
            if predicate(record):
                return record.model_copy(deep=True)
        return None

    def filter(self, **criteria) -> List[RecordT]:
        return [
            record.model_copy(deep=True)
            for record in self.rows.values()
            if all(getattr(record, key) == value for key, value in criteria.items())
        ]

    def update(self, entity_id: int, changes: dict) -> Optional[RecordT]:
        existing = self.rows.get(entity_id)
        if existing is None:
            return None
        updated = existing.model_copy(update=changes, deep=True)
        self.rows[entity_id] = updated
        return updated.model_copy(deep=True)

    def delete(self, entity_id: int) -> bool:
        return self.rows.pop(entity_id, None) is not None


class MemStorage(Storage):
    """Dict-backed store holding every entity kind in process memory."""

    def __init__(self):
        self._lock = threading.RLock()
        self._users: _Table[UserResponse] = _Table(UserResponse)
        self._toolkits: _Table[ToolkitResponse] = _Table(ToolkitResponse)
        self._folders: _Table[FolderResponse] = _Table(FolderResponse)
        self._assets: _Table[AssetResponse] = _Table(AssetResponse)
        self._tags: _Table[TagResponse] = _Table(TagResponse)

    # -- Users -------------------------------------------------------------

    def create_user(self, data: UserCreate) -> UserResponse:
        with self._lock:
            if self._find_user(data.username) is not None:
                raise ConflictError("username", data.username)
            return self._users.insert(new_user_values(data))

    def get_user(self, user_id: int) -> Optional[UserResponse]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserResponse]:
        with self._lock:
            return self._find_user(username)

    def _find_user(self, username: str) -> Optional[UserResponse]:
        return self._users.find(lambda user: user.username == username)

    # -- Toolkits ----------------------------------------------------------

    def create_toolkit(self, data: ToolkitCreate, user_id: int) -> ToolkitResponse:
        with self._lock:
            return self._toolkits.insert(new_toolkit_values(data, user_id))

    def get_toolkit(self, toolkit_id: int) -> Optional[ToolkitResponse]:
        with self._lock:
            return self._toolkits.get(toolkit_id)

    def list_toolkits(self, user_id: int) -> List[ToolkitResponse]:
        with self._lock:
            return self._toolkits.filter(user_id=user_id)

    def update_toolkit(self, toolkit_id: int, data: ToolkitUpdate) -> Optional[ToolkitResponse]:
        with self._lock:
            return self._toolkits.update(toolkit_id, data.patch())

    def delete_toolkit(self, toolkit_id: int) -> bool:
        with self._lock:
            return self._toolkits.delete(toolkit_id)

    # -- Folders -----------------------------------------------------------

    def create_folder(self, data: FolderCreate) -> FolderResponse:
        with self._lock:
            return self._folders.insert(new_folder_values(data))

    def get_folder(self, folder_id: int) -> Optional[FolderResponse]:
        with self._lock:
            return self._folders.get(folder_id)

    def list_folders(self, toolkit_id: int) -> List[FolderResponse]:
        with self._lock:
            return self._folders.filter(toolkit_id=toolkit_id)

    def update_folder(self, folder_id: int, data: FolderUpdate) -> Optional[FolderResponse]:
        with self._lock:
            return self._folders.update(folder_id, data.patch())

    def delete_folder(self, folder_id: int) -> bool:
        with self._lock:
            return self._folders.delete(folder_id)

    # -- Assets ------------------------------------------------------------

    def create_asset(self, data: AssetCreate) -> AssetResponse:
        with self._lock:
            return self._assets.insert(new_asset_values(data))

    def get_asset(self, asset_id: int) -> Optional[AssetResponse]:
        with self._lock:
            return self._assets.get(asset_id)

    def list_assets(
        self,
        toolkit_id: Optional[int] = None,
        folder_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> List[AssetResponse]:
        criteria = _given(toolkit_id=toolkit_id, folder_id=folder_id, user_id=user_id)
        with self._lock:
            return self._assets.filter(**criteria)

    def update_asset(self, asset_id: int, data: AssetUpdate) -> Optional[AssetResponse]:
        changes = data.patch()
        changes["updated_at"] = utcnow()
        with self._lock:
            return self._assets.update(asset_id, changes)

    def delete_asset(self, asset_id: int) -> bool:
        with self._lock:
            return self._assets.delete(asset_id)

    # -- Tags --------------------------------------------------------------

    def create_tag(self, data: TagCreate, user_id: int) -> TagResponse:
        with self._lock:
            self._check_tag_name(data.name)
            return self._tags.insert(new_tag_values(data, user_id))

    def get_tag(self, tag_id: int) -> Optional[TagResponse]:
        with self._lock:
            return self._tags.get(tag_id)

    def list_tags(self, user_id: int) -> List[TagResponse]:
        with self._lock:
            return self._tags.filter(user_id=user_id)

    def update_tag(self, tag_id: int, data: TagUpdate) -> Optional[TagResponse]:
        with self._lock:
            if tag_id not in self._tags.rows:
                return None
            if data.name is not None:
                self._check_tag_name(data.name, exclude_id=tag_id)
            return self._tags.update(tag_id, data.patch())

    def delete_tag(self, tag_id: int) -> bool:
        with self._lock:
            return self._tags.delete(tag_id)

    def _check_tag_name(self, name: str, exclude_id: Optional[int] = None) -> None:
        clash = self._tags.find(lambda tag: tag.name == name and tag.id != exclude_id)
        if clash is not None:
            raise ConflictError("tag name", name)

    # -- Introspection -----------------------------------------------------

    def counts(self) -> Dict[str, int]:
        with self._lock:
            return {
                "users": len(self._users.rows),
                "toolkits": len(self._toolkits.rows),
                "folders": len(self._folders.rows),
                "assets": len(self._assets.rows),
                "tags": len(self._tags.rows),
            }


def _given(**criteria) -> dict:
    """Drop filter keys whose value is None."""
    return {key: value for key, value in criteria.items() if value is not None}

"""SQLAlchemy-backed entity store.

Same contract as MemStorage, with each call running in its own session
that commits on success and rolls back on error. By default the database
is in-memory SQLite, which keeps the process-lifetime semantics; point
``DATABASE_URL`` elsewhere to keep data across restarts.

In-memory SQLite lives on a single shared connection, so sessions against
it are serialized: a rollback in one call must not discard another call's
flushed rows.
"""

import logging
import threading
from contextlib import contextmanager, nullcontext
from typing import Dict, Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..database import Base, is_in_memory, make_engine
from ..exceptions import ConflictError, GarageException, StorageError
from ..repositories import (
    AssetRepository,
    FolderRepository,
    TagRepository,
    ToolkitRepository,
    UserRepository,
)
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

logger = logging.getLogger(__name__)


class SqlStorage(Storage):
    """Store backed by a relational database through SQLAlchemy."""

    def __init__(self, database_url: str):
        self.engine = make_engine(database_url)
        Base.metadata.create_all(self.engine)
        self._sessions = sessionmaker(bind=self.engine, autoflush=False)
        self._lock = threading.RLock() if is_in_memory(database_url) else nullcontext()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """One unit of work: commit on success, roll back on any error.

        Driver errors surface as StorageError; domain errors pass through.
        """
        with self._lock:
            db = self._sessions()
            try:
                yield db
                db.commit()
            except GarageException:
                db.rollback()
                raise
            except SQLAlchemyError as e:
                db.rollback()
                logger.error("Storage operation failed: %s", e, exc_info=True)
                raise StorageError("Storage operation failed", original_error=e) from e
            finally:
                db.close()

    def close(self) -> None:
        self.engine.dispose()

    # -- Users -------------------------------------------------------------

    def create_user(self, data: UserCreate) -> UserResponse:
        with self._session() as db:
            repo = UserRepository(db)
            if repo.get_by_username(data.username) is not None:
                raise ConflictError("username", data.username)
            return repo.to_response(repo.add(new_user_values(data)))

    def get_user(self, user_id: int) -> Optional[UserResponse]:
        with self._session() as db:
            repo = UserRepository(db)
            row = repo.get_by_id_optional(user_id)
            return repo.to_response(row) if row is not None else None

    def get_user_by_username(self, username: str) -> Optional[UserResponse]:
        with self._session() as db:
            repo = UserRepository(db)
            row = repo.get_by_username(username)
            return repo.to_response(row) if row is not None else None

    # -- Toolkits ----------------------------------------------------------

    def create_toolkit(self, data: ToolkitCreate, user_id: int) -> ToolkitResponse:
        with self._session() as db:
            repo = ToolkitRepository(db)
            return repo.to_response(repo.add(new_toolkit_values(data, user_id)))

    def get_toolkit(self, toolkit_id: int) -> Optional[ToolkitResponse]:
        with self._session() as db:
            return _get(ToolkitRepository(db), toolkit_id)

    def list_toolkits(self, user_id: int) -> List[ToolkitResponse]:
        with self._session() as db:
            return _filter(ToolkitRepository(db), user_id=user_id)

    def update_toolkit(self, toolkit_id: int, data: ToolkitUpdate) -> Optional[ToolkitResponse]:
        with self._session() as db:
            return _update(ToolkitRepository(db), toolkit_id, data.patch())

    def delete_toolkit(self, toolkit_id: int) -> bool:
        with self._session() as db:
            return ToolkitRepository(db).delete(toolkit_id)

    # -- Folders -----------------------------------------------------------

    def create_folder(self, data: FolderCreate) -> FolderResponse:
        with self._session() as db:
            repo = FolderRepository(db)
            return repo.to_response(repo.add(new_folder_values(data)))

    def get_folder(self, folder_id: int) -> Optional[FolderResponse]:
        with self._session() as db:
            return _get(FolderRepository(db), folder_id)

    def list_folders(self, toolkit_id: int) -> List[FolderResponse]:
        with self._session() as db:
            return _filter(FolderRepository(db), toolkit_id=toolkit_id)

    def update_folder(self, folder_id: int, data: FolderUpdate) -> Optional[FolderResponse]:
        with self._session() as db:
            return _update(FolderRepository(db), folder_id, data.patch())

    def delete_folder(self, folder_id: int) -> bool:
        with self._session() as db:
            return FolderRepository(db).delete(folder_id)

    # -- Assets ------------------------------------------------------------

    def create_asset(self, data: AssetCreate) -> AssetResponse:
        with self._session() as db:
            repo = AssetRepository(db)
            return repo.to_response(repo.add(new_asset_values(data)))

    def get_asset(self, asset_id: int) -> Optional[AssetResponse]:
        with self._session() as db:
            return _get(AssetRepository(db), asset_id)

    def list_assets(
        self,
        toolkit_id: Optional[int] = None,
        folder_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> List[AssetResponse]:
        criteria = {
            key: value
            for key, value in (("toolkit_id", toolkit_id), ("folder_id", folder_id), ("user_id", user_id))
            if value is not None
        }
        with self._session() as db:
            return _filter(AssetRepository(db), **criteria)

    def update_asset(self, asset_id: int, data: AssetUpdate) -> Optional[AssetResponse]:
        changes = data.patch()
        changes["updated_at"] = utcnow()
        with self._session() as db:
            return _update(AssetRepository(db), asset_id, changes)

    def delete_asset(self, asset_id: int) -> bool:
        with self._session() as db:
            return AssetRepository(db).delete(asset_id)

    # -- Tags --------------------------------------------------------------

    def create_tag(self, data: TagCreate, user_id: int) -> TagResponse:
        with self._session() as db:
            repo = TagRepository(db)
            if repo.get_by_name(data.name) is not None:
                raise ConflictError("tag name", data.name)
            return repo.to_response(repo.add(new_tag_values(data, user_id)))

    def get_tag(self, tag_id: int) -> Optional[TagResponse]:
        with self._session() as db:
            return _get(TagRepository(db), tag_id)

    def list_tags(self, user_id: int) -> List[TagResponse]:
        with self._session() as db:
            return _filter(TagRepository(db), user_id=user_id)

    def update_tag(self, tag_id: int, data: TagUpdate) -> Optional[TagResponse]:
        with self._session() as db:
            repo = TagRepository(db)
            if repo.get_by_id_optional(tag_id) is None:
                return None
            if data.name is not None:
                clash = repo.get_by_name(data.name)
                if clash is not None and clash.id != tag_id:
                    raise ConflictError("tag name", data.name)
            return _update(repo, tag_id, data.patch())

    def delete_tag(self, tag_id: int) -> bool:
        with self._session() as db:
            return TagRepository(db).delete(tag_id)

    # -- Introspection -----------------------------------------------------

    def counts(self) -> Dict[str, int]:
        with self._session() as db:
            return {
                "users": UserRepository(db).count(),
                "toolkits": ToolkitRepository(db).count(),
                "folders": FolderRepository(db).count(),
                "assets": AssetRepository(db).count(),
                "tags": TagRepository(db).count(),
            }


def _get(repo, entity_id: int):
    row = repo.get_by_id_optional(entity_id)
    return repo.to_response(row) if row is not None else None


def _filter(repo, **criteria) -> list:
    return [repo.to_response(row) for row in repo.filter_by(**criteria)]


def _update(repo, entity_id: int, changes: dict):
    row = repo.update(entity_id, changes)
    return repo.to_response(row) if row is not None else None

"""Folder operations.

Creating a folder checks its placement: the toolkit must exist, and a
parent folder, when given, must live in the same toolkit. Updates and
deletes go straight to the store and never cascade.
"""

import logging
from typing import List, Optional

from ..exceptions import ToolkitNotFoundError, ValidationError
from ..schemas import FolderCreate, FolderResponse, FolderUpdate
from ..storage import Storage

logger = logging.getLogger(__name__)


class FolderService:

    def __init__(self, storage: Storage):
        self.storage = storage

    def create_folder(self, data: FolderCreate) -> FolderResponse:
        """Create a folder inside ``data.toolkit_id``.

        Raises:
            ValidationError: toolkit id missing, or the parent is not a
                folder of the same toolkit.
            ToolkitNotFoundError: the toolkit does not exist.
        """
        if data.toolkit_id is None:
            raise ValidationError("toolkitId is required", field="toolkitId")
        if self.storage.get_toolkit(data.toolkit_id) is None:
            raise ToolkitNotFoundError(data.toolkit_id)

        if data.parent_id is not None:
            parent = self.storage.get_folder(data.parent_id)
            if parent is None or parent.toolkit_id != data.toolkit_id:
                raise ValidationError(
                    f"Parent folder {data.parent_id} is not in toolkit {data.toolkit_id}",
                    field="parentId",
                )

        folder = self.storage.create_folder(data)
        logger.info("Folder created", extra={"folder_id": folder.id, "toolkit_id": folder.toolkit_id})
        return folder

    def get_folder(self, folder_id: int) -> Optional[FolderResponse]:
        return self.storage.get_folder(folder_id)

    def list_folders(self, toolkit_id: int) -> List[FolderResponse]:
        return self.storage.list_folders(toolkit_id)

    def update_folder(self, folder_id: int, data: FolderUpdate) -> Optional[FolderResponse]:
        return self.storage.update_folder(folder_id, data)

    def delete_folder(self, folder_id: int) -> bool:
        deleted = self.storage.delete_folder(folder_id)
        if deleted:
            logger.info("Folder deleted", extra={"folder_id": folder_id})
        return deleted

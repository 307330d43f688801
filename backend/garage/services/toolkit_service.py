"""Toolkit mutations."""

import logging
from typing import Optional

from ..schemas import ToolkitCreate, ToolkitResponse, ToolkitUpdate
from ..storage import Storage

logger = logging.getLogger(__name__)


class ToolkitService:
    """Create, update and delete toolkits. Reads go through QueryService."""

    def __init__(self, storage: Storage):
        self.storage = storage

    def create_toolkit(self, data: ToolkitCreate, user_id: int) -> ToolkitResponse:
        toolkit = self.storage.create_toolkit(data, user_id)
        logger.info("Toolkit created", extra={"toolkit_id": toolkit.id, "user_id": user_id})
        return toolkit

    def update_toolkit(self, toolkit_id: int, data: ToolkitUpdate) -> Optional[ToolkitResponse]:
        return self.storage.update_toolkit(toolkit_id, data)

    def delete_toolkit(self, toolkit_id: int) -> bool:
        """Delete the toolkit row only.

        Its folders and assets stay in the store and keep pointing at the
        deleted id; reading those assets afterwards fails with an orphaned
        reference error.
        """
        folders = len(self.storage.list_folders(toolkit_id))
        assets = len(self.storage.list_assets(toolkit_id=toolkit_id))
        deleted = self.storage.delete_toolkit(toolkit_id)
        if deleted:
            if folders or assets:
                logger.warning(
                    "Toolkit deleted with dependents left behind",
                    extra={"toolkit_id": toolkit_id, "folders": folders, "assets": assets},
                )
            else:
                logger.info("Toolkit deleted", extra={"toolkit_id": toolkit_id})
        return deleted
